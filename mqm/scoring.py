#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
MQM Score Aggregation

Folds per-segment evaluations into one document result:

    overallScore = Σ score_i · (wordCount_i / wordCount)

A long segment weighs more than a short one; a document with no words
scores 100 (nothing to penalize).
"""

import re
from dataclasses import replace
from typing import Dict, Iterable, List, Optional, Union

from config.constants import (
    EMPTY_DOCUMENT_SCORE,
    MAX_SCORE,
    MIN_SCORE,
    MONOLINGUAL_EXCLUDED_CATEGORIES,
    MQM_CATEGORIES,
)
from config.logging_config import get_logger

from .language import uses_word_spacing
from .models import (
    AggregateResult,
    AnalysisMode,
    CategoryTotal,
    Issue,
    SegmentEvaluation,
    SegmentPair,
    SegmentScore,
    empty_categories,
)

logger = get_logger(__name__)

# CJK ideographs, kana and full-width forms: one character = one word
CJK_CHAR = re.compile(
    "[\u3040-\u309f\u30a0-\u30ff\u3400-\u4dbf\u4e00-\u9fff\uf900-\ufaff\uff66-\uff9f]"
)


def count_words(text: Optional[str], lang: Optional[str] = None) -> int:
    """
    Word count of a text.

    Whitespace-separated tokens; for languages written without spaces
    (zh, ja, th) every ideograph/kana counts as a word, plus any Latin or
    numeric tokens embedded in the text.
    """
    if not text or not text.strip():
        return 0

    if uses_word_spacing(lang):
        return len(text.split())

    characters = len(CJK_CHAR.findall(text))
    rest = CJK_CHAR.sub(" ", text)
    tokens = [token for token in rest.split() if any(c.isalnum() for c in token)]
    return characters + len(tokens)


def pair_word_count(
    pair: SegmentPair, mode: Union[AnalysisMode, str, None] = AnalysisMode.BILINGUAL
) -> int:
    """
    Words a pair contributes to the document count.

    Bilingual: the target side only, so a padded pair without target text
    counts 0. Monolingual: whichever side is populated.
    """
    if AnalysisMode.parse(mode) == AnalysisMode.BILINGUAL:
        return count_words(pair.target, pair.target_lang)
    return count_words(pair.assessed_text, pair.assessed_lang)


def totals_from_issues(issues: Iterable[Issue]) -> Dict[str, CategoryTotal]:
    """Per-category count/points over the fixed categories; others are ignored"""
    totals = empty_categories()
    for issue in issues:
        if issue.category in totals:
            totals[issue.category] += CategoryTotal(1, issue.points)
    return totals


class ScoreAggregator:
    """Combines SegmentEvaluations into an AggregateResult"""

    def aggregate(
        self,
        evaluations: Iterable[SegmentEvaluation],
        mode: Union[AnalysisMode, str, None] = AnalysisMode.BILINGUAL,
        model_id: str = "",
    ) -> AggregateResult:
        """
        Aggregate segment evaluations.

        Args:
            evaluations: One evaluation per segment pair
            mode: Analysis mode; monolingual results carry zero Accuracy totals
            model_id: Model that produced the evaluations

        Returns:
            Document-level result, segments ordered by pair id
        """
        mode = AnalysisMode.parse(mode)
        ordered = sorted(evaluations, key=lambda evaluation: evaluation.pair.id)

        categories = empty_categories()
        issues: List[Issue] = []
        segments: List[SegmentScore] = []
        total_words = 0
        weighted_sum = 0.0

        for evaluation in ordered:
            pair = evaluation.pair
            word_count = pair_word_count(pair, mode)
            total_words += word_count
            weighted_sum += evaluation.score * word_count

            for name in MQM_CATEGORIES:
                total = evaluation.categories.get(name)
                if total is not None:
                    categories[name] += total

            for issue in evaluation.issues:
                if issue.segment_id is None:
                    issue = replace(issue, segment_id=pair.id)
                issues.append(issue)

            segments.append(SegmentScore(
                id=pair.id,
                source=pair.source,
                target=pair.target,
                score=evaluation.score,
                word_count=word_count,
                issue_count=len(evaluation.issues),
            ))

        if mode == AnalysisMode.MONOLINGUAL:
            for name in MONOLINGUAL_EXCLUDED_CATEGORIES:
                categories[name] = CategoryTotal()

        if total_words == 0:
            overall = EMPTY_DOCUMENT_SCORE
        else:
            overall = min(MAX_SCORE, max(MIN_SCORE, weighted_sum / total_words))

        logger.debug(
            f"Aggregated {len(segments)} segments: {total_words} words, "
            f"{len(issues)} issues, score {overall:.2f}"
        )

        return AggregateResult(
            overall_score=overall,
            word_count=total_words,
            categories=categories,
            issues=tuple(issues),
            mode=mode,
            model_id=model_id,
            segments=tuple(segments),
        )
