#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Unit Tests for word counting and score aggregation
"""

import pytest

from mqm.models import (
    AnalysisMode,
    CategoryTotal,
    Issue,
    SegmentEvaluation,
    SegmentPair,
    Severity,
)
from mqm.alignment import SegmentAligner
from mqm.scoring import ScoreAggregator, count_words, pair_word_count, totals_from_issues


def words(n: int) -> str:
    return " ".join(["word"] * n)


def evaluation(pair_id, target, score, issues=(), source="src", source_lang="en", target_lang="fr"):
    issues = tuple(issues)
    return SegmentEvaluation(
        pair=SegmentPair(pair_id, source, target, source_lang, target_lang),
        score=score,
        issues=issues,
        categories=totals_from_issues(issues),
    )


class TestCountWords:
    def test_whitespace_tokens(self):
        assert count_words("The quick  brown\nfox", "en") == 4

    def test_empty(self):
        assert count_words("", "en") == 0
        assert count_words("   ", "en") == 0
        assert count_words(None) == 0

    def test_chinese_counts_characters(self):
        assert count_words("今天天气很好。", "zh") == 6

    def test_japanese_with_embedded_latin(self):
        """Each kana/kanji counts, plus the Latin token"""
        assert count_words("これはPythonです", "ja") == 6

    def test_unknown_language_uses_whitespace(self):
        assert count_words("a b c", "xx") == 3


class TestScoreAggregator:
    def test_weighted_by_word_count(self):
        """10 words at 100 and 90 words at 0 give 10, not the mean 50"""
        result = ScoreAggregator().aggregate([
            evaluation(1, words(10), 100.0),
            evaluation(2, words(90), 0.0),
        ])
        assert result.word_count == 100
        assert result.overall_score == pytest.approx(10.0)

    def test_no_words_scores_100(self):
        assert ScoreAggregator().aggregate([]).overall_score == 100.0

    def test_category_totals(self, make_issue):
        result = ScoreAggregator().aggregate([
            evaluation(1, words(5), 80.0, [make_issue("Fluency", Severity.MAJOR)]),
            evaluation(2, words(5), 70.0, [
                make_issue("Fluency", Severity.MINOR),
                make_issue("Accuracy", Severity.CRITICAL, subcategory="Omission"),
            ]),
        ])

        assert result.categories["Fluency"] == CategoryTotal(2, 6)
        assert result.categories["Accuracy"] == CategoryTotal(1, 10)
        assert result.categories["Design"] == CategoryTotal(0, 0)
        assert set(result.categories) == {"Accuracy", "Fluency", "Terminology", "Style", "Design"}
        assert result.total_points == 16

    def test_unknown_categories_not_totalled(self, make_issue):
        result = ScoreAggregator().aggregate([
            evaluation(1, words(5), 90.0, [make_issue("Locale convention")]),
        ])
        assert result.total_points == 0
        assert result.issue_count == 1

    def test_issues_in_segment_order_with_ids(self, make_issue):
        first = make_issue("Style", start_index=0, end_index=3)
        second = make_issue("Fluency", start_index=2, end_index=5)
        result = ScoreAggregator().aggregate([
            evaluation(2, words(3), 90.0, [second]),
            evaluation(1, words(3), 90.0, [first]),
        ])

        assert [issue.category for issue in result.issues] == ["Style", "Fluency"]
        assert [issue.segment_id for issue in result.issues] == [1, 2]
        # Offsets stay local to their segment
        assert result.issues[1].start_index == 2

    def test_monolingual_zeroes_accuracy(self, make_issue):
        pair = SegmentPair(1, "", words(4), "", "en")
        issues = (make_issue("Accuracy", Severity.MAJOR), make_issue("Fluency"))
        result = ScoreAggregator().aggregate(
            [SegmentEvaluation(pair, 90.0, issues, totals_from_issues(issues))],
            AnalysisMode.MONOLINGUAL,
        )

        assert result.categories["Accuracy"] == CategoryTotal(0, 0)
        assert result.categories["Fluency"] == CategoryTotal(1, 1)
        assert result.mode is AnalysisMode.MONOLINGUAL

    def test_word_count_uses_target_side(self):
        result = ScoreAggregator().aggregate([
            evaluation(1, words(2), 100.0, source=words(7)),
        ])
        assert result.word_count == 2

    def test_segment_lines(self, make_issue):
        result = ScoreAggregator().aggregate(
            [evaluation(1, words(4), 75.0, [make_issue()])],
            model_id="claude-test",
        )
        segment = result.segments[0]
        assert (segment.id, segment.score, segment.word_count, segment.issue_count) == (1, 75.0, 4, 1)
        assert result.model_id == "claude-test"

    def test_issue_points(self):
        assert Issue("Fluency", "Spelling", Severity.CRITICAL).points == 10

    def test_padded_pair_without_target_weighs_nothing(self):
        """Bilingual word counts come from the target; a source-only pair counts 0"""
        result = ScoreAggregator().aggregate([
            SegmentEvaluation(SegmentPair(1, "a b c", "x y", "en", "fr"), 100.0),
            SegmentEvaluation(SegmentPair(2, "d e f g h", "", "en", "fr"), 0.0),
        ], AnalysisMode.BILINGUAL)

        assert result.word_count == 2
        assert result.overall_score == 100.0
        assert result.segments[1].word_count == 0

    def test_aligned_and_aggregated(self):
        """Positional padding followed by weighted aggregation"""
        pairs = SegmentAligner().align(["a b c", "d"], ["x"], "en", "fr")
        scores = {1: 80.0, 2: 0.0}
        result = ScoreAggregator().aggregate(
            [SegmentEvaluation(pair, scores[pair.id]) for pair in pairs],
            AnalysisMode.BILINGUAL,
        )

        assert [pair.target for pair in pairs] == ["x", ""]
        assert result.word_count == 1
        assert result.overall_score == pytest.approx(80.0)


class TestPairWordCount:
    def test_bilingual_counts_target(self):
        assert pair_word_count(SegmentPair(1, "a b c", "x", "en", "fr"), AnalysisMode.BILINGUAL) == 1
        assert pair_word_count(SegmentPair(1, "a b c", "", "en", "fr"), AnalysisMode.BILINGUAL) == 0

    def test_monolingual_counts_populated_side(self):
        assert pair_word_count(SegmentPair(1, "a b c", "", "en", ""), AnalysisMode.MONOLINGUAL) == 3
        assert pair_word_count(SegmentPair(1, "", "x y", "", "fr"), "monolingual") == 2
