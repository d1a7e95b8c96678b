#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pytest fixtures for integration tests.

Provides:
- make_pipeline: AnalysisPipeline around a fake evaluator, in-memory cache
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from mqm.cache import AnalysisCache
from mqm.pipeline import AnalysisPipeline


@pytest.fixture
def make_pipeline(make_evaluator):
    """
    Factory for pipelines that never call a real model.

    Returns (pipeline, evaluator). Keyword arguments override the pipeline
    defaults; 'evaluator' replaces the FakeEvaluator.
    """
    def _make(evaluator=None, **kwargs):
        evaluator = evaluator or make_evaluator()
        options = dict(
            cache=AnalysisCache(),
            batch_size=5,
            request_timeout=5.0,
            max_words=0,
            show_progress=False,
        )
        options.update(kwargs)
        return AnalysisPipeline(evaluator, **options), evaluator
    return _make
