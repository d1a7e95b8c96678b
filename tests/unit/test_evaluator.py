#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit Tests for the model-backed MQM segment evaluator

The provider is replaced by a scripted one; no network access.
"""

import json

import pytest

from ai_providers import AIConfig, AIProviderType, AIResponse, BaseAIProvider
from mqm.evaluator import (
    MQMIssueReply,
    MQMReply,
    MQMSegmentEvaluator,
    extract_json,
    normalize_category,
    score_from_points,
)
from mqm.exceptions import EvaluationError
from mqm.models import AnalysisMode, CategoryTotal, SegmentPair, Severity


class ScriptedProvider(BaseAIProvider):
    """Returns canned replies and records the prompts it received"""

    def __init__(self, replies, model="test-model"):
        super().__init__(AIConfig(api_key="test", model=model))
        self.replies = list(replies)
        self.requests = []

    @property
    def provider_type(self):
        return AIProviderType.CLAUDE

    @property
    def supported_models(self):
        return [self.config.model]

    async def initialize(self):
        pass

    async def complete(self, messages, system_prompt=None, **kwargs):
        self.requests.append({"messages": messages, "system": system_prompt, **kwargs})
        return AIResponse(
            content=self.replies.pop(0),
            model=kwargs.get("model", self.config.model),
            provider=self.provider_type,
            usage={"input_tokens": 10, "output_tokens": 20},
        )


BILINGUAL_PAIR = SegmentPair(1, "The cat sleeps.", "Le chat dormir.", "en", "fr")


def reply(**overrides) -> str:
    body = {
        "mqmIssues": [{
            "category": "fluency",
            "subcategory": "Grammar",
            "severity": "Major",
            "explanation": "Verb not conjugated",
            "location": "dormir",
            "suggestion": "dort",
        }],
        "categories": {
            "Accuracy": {"count": 0, "points": 0},
            "Fluency": {"count": 1, "points": 5},
            "Terminology": {"count": 0, "points": 0},
            "Style": {"count": 0, "points": 0},
            "Design": {"count": 0, "points": 0},
        },
        "wordCount": 3,
        "overallScore": 80,
        "summary": "One grammar error.",
    }
    body.update(overrides)
    return json.dumps(body)


class TestExtractJson:
    def test_json_inside_prose(self):
        content = 'Here is the analysis:\n```json\n{"mqmIssues": []}\n```\nDone.'
        assert extract_json(content) == {"mqmIssues": []}

    def test_no_json(self):
        with pytest.raises(EvaluationError):
            extract_json("I cannot evaluate this.")

    def test_broken_json(self):
        with pytest.raises(EvaluationError) as exc_info:
            extract_json('{"mqmIssues": [}', segment_id=4)
        assert exc_info.value.segment_id == 4


class TestReplyModels:
    def test_aliases_and_field_names(self):
        by_alias = MQMReply.model_validate({"mqmIssues": [], "overallScore": 90, "extra": 1})
        by_name = MQMReply.model_validate({"issues": [], "overall_score": 90})
        assert by_alias.overall_score == by_name.overall_score == 90.0

    def test_config_dict(self):
        assert MQMReply.model_config["populate_by_name"] is True
        assert MQMIssueReply.model_config["extra"] == "ignore"


class TestHelpers:
    def test_normalize_category(self):
        assert normalize_category(" fluency ") == "Fluency"
        assert normalize_category("TERMINOLOGY") == "Terminology"
        assert normalize_category("Locale") == "Locale"

    def test_score_from_points(self):
        assert score_from_points(5, 10) == 50.0
        assert score_from_points(50, 10) == 0.0
        assert score_from_points(3, 0) == 100.0


class TestMQMSegmentEvaluator:
    @pytest.mark.asyncio
    async def test_parses_reply(self):
        provider = ScriptedProvider([reply()])
        evaluation = await MQMSegmentEvaluator(provider).evaluate(BILINGUAL_PAIR, AnalysisMode.BILINGUAL)

        assert evaluation.score == 80.0
        assert evaluation.summary == "One grammar error."
        issue = evaluation.issues[0]
        assert issue.category == "Fluency"
        assert issue.severity is Severity.MAJOR
        assert issue.segment_id == 1
        # Offsets located inside the segment's own text
        assert (issue.start_index, issue.end_index) == (8, 14)
        assert evaluation.categories["Fluency"] == CategoryTotal(1, 5)

    @pytest.mark.asyncio
    async def test_bilingual_prompt_contains_both_texts(self):
        provider = ScriptedProvider([reply()])
        await MQMSegmentEvaluator(provider).evaluate(BILINGUAL_PAIR, AnalysisMode.BILINGUAL)

        prompt = provider.requests[0]["messages"][0].content
        assert "The cat sleeps." in prompt
        assert "Le chat dormir." in prompt
        assert "Source language: English" in prompt
        assert "Target language: French" in prompt
        assert "Mistranslation" in prompt

    @pytest.mark.asyncio
    async def test_monolingual_prompt_has_no_accuracy(self):
        provider = ScriptedProvider([reply()])
        pair = SegmentPair(1, "", "Le chat dormir.", "", "fr")
        await MQMSegmentEvaluator(provider).evaluate(pair, AnalysisMode.MONOLINGUAL)

        prompt = provider.requests[0]["messages"][0].content
        assert "MONOLINGUAL" in prompt
        assert "Mistranslation" not in prompt
        assert "Language: French" in prompt

    @pytest.mark.asyncio
    async def test_model_override(self):
        provider = ScriptedProvider([reply()])
        evaluator = MQMSegmentEvaluator(provider).with_model("other-model")
        await evaluator.evaluate(BILINGUAL_PAIR, AnalysisMode.BILINGUAL)

        assert evaluator.model_id == "other-model"
        assert provider.requests[0]["model"] == "other-model"

    @pytest.mark.asyncio
    async def test_missing_totals_and_score_derived_from_issues(self):
        provider = ScriptedProvider([reply(categories=None, overallScore=None)])
        evaluation = await MQMSegmentEvaluator(provider).evaluate(BILINGUAL_PAIR, AnalysisMode.BILINGUAL)

        assert evaluation.categories["Fluency"] == CategoryTotal(1, 5)
        # 3 target words, 5 points
        assert evaluation.score == 0.0

    @pytest.mark.asyncio
    async def test_numeric_severity(self):
        issues = [{"category": "Style", "subcategory": "Awkward", "severity": 1}]
        provider = ScriptedProvider([reply(mqmIssues=issues, categories=None, overallScore=None)])
        pair = SegmentPair(1, "src", " ".join(["mot"] * 10), "en", "fr")
        evaluation = await MQMSegmentEvaluator(provider).evaluate(pair, AnalysisMode.BILINGUAL)

        assert evaluation.issues[0].severity is Severity.MINOR
        assert evaluation.score == pytest.approx(90.0)

    @pytest.mark.asyncio
    async def test_unknown_severity_raises(self):
        issues = [{"category": "Style", "severity": "Blocker"}]
        provider = ScriptedProvider([reply(mqmIssues=issues)])
        with pytest.raises(EvaluationError):
            await MQMSegmentEvaluator(provider).evaluate(BILINGUAL_PAIR, AnalysisMode.BILINGUAL)

    @pytest.mark.asyncio
    async def test_invalid_structure_raises(self):
        provider = ScriptedProvider(['{"mqmIssues": "none"}'])
        with pytest.raises(EvaluationError):
            await MQMSegmentEvaluator(provider).evaluate(BILINGUAL_PAIR, AnalysisMode.BILINGUAL)

    @pytest.mark.asyncio
    async def test_provider_errors_propagate_unchanged(self):
        class FailingProvider(ScriptedProvider):
            async def complete(self, messages, system_prompt=None, **kwargs):
                raise ConnectionError("network down")

        with pytest.raises(ConnectionError):
            await MQMSegmentEvaluator(FailingProvider([])).evaluate(BILINGUAL_PAIR, AnalysisMode.BILINGUAL)

    @pytest.mark.asyncio
    async def test_score_clamped(self):
        provider = ScriptedProvider([reply(overallScore=-40)])
        evaluation = await MQMSegmentEvaluator(provider).evaluate(BILINGUAL_PAIR, AnalysisMode.BILINGUAL)
        assert evaluation.score == 0.0
