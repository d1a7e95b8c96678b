#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
MQM Data Model

Value objects shared by segmentation, file parsing, alignment, caching and
scoring. Everything here is frozen: a result handed to the cache or to a
report collaborator is never mutated afterwards.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Tuple

from config.constants import MQM_CATEGORIES, SEVERITY_POINTS


class AnalysisMode(str, Enum):
    """Whether a source text takes part in the assessment"""
    MONOLINGUAL = "monolingual"
    BILINGUAL = "bilingual"

    @classmethod
    def parse(cls, value: Optional[str]) -> 'AnalysisMode':
        if isinstance(value, cls):
            return value
        if not value:
            return cls.BILINGUAL
        return cls(str(value).strip().lower())


class Severity(str, Enum):
    """MQM severity levels; point values are fixed"""
    MINOR = "MINOR"
    MAJOR = "MAJOR"
    CRITICAL = "CRITICAL"

    @property
    def points(self) -> int:
        return SEVERITY_POINTS[self.value]

    @classmethod
    def parse(cls, value: Any) -> 'Severity':
        """Accept 'Major', 'major', 5 ... as the model is not always consistent"""
        if isinstance(value, cls):
            return value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            for severity in cls:
                if severity.points == int(value):
                    return severity
            raise ValueError(f"Unknown severity points: {value}")
        name = str(value).strip().upper()
        if name.isdigit():
            return cls.parse(int(name))
        return cls(name)


@dataclass(frozen=True)
class Segment:
    """One sentence-like unit of text"""
    text: str


@dataclass(frozen=True)
class SegmentPair:
    """
    A source/target pairing, the unit of per-segment evaluation.

    Attributes:
        id: 1-based position in the document, gapless.
        source: Source text ('' in monolingual analysis of a target).
        target: Target text ('' when only a source is present).
        source_lang: Normalized language code of the source ('' if absent).
        target_lang: Normalized language code of the target ('' if absent).
    """
    id: int
    source: str
    target: str
    source_lang: str = ""
    target_lang: str = ""

    def __post_init__(self):
        if self.id < 1:
            raise ValueError(f"Segment id must be >= 1, got {self.id}")
        if not self.source and not self.target:
            raise ValueError(f"Segment #{self.id} has neither source nor target text")

    @property
    def is_monolingual(self) -> bool:
        return not (self.source.strip() and self.target.strip())

    @property
    def assessed_text(self) -> str:
        """Target text, or the source when the target is blank"""
        return self.target if self.target.strip() else self.source

    @property
    def assessed_lang(self) -> str:
        return self.target_lang if self.target.strip() else self.source_lang

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "sourceLang": self.source_lang,
            "targetLang": self.target_lang,
        }


@dataclass(frozen=True)
class Issue:
    """
    One MQM issue reported for a segment.

    start_index/end_index are offsets into the segment's own text, not into
    the full document.
    """
    category: str
    subcategory: str
    severity: Severity
    explanation: str = ""
    segment_text: str = ""
    suggestion: str = ""
    start_index: Optional[int] = None
    end_index: Optional[int] = None
    segment_id: Optional[int] = None

    @property
    def points(self) -> int:
        return self.severity.points

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "subcategory": self.subcategory,
            "severity": self.severity.value,
            "explanation": self.explanation,
            "segment": self.segment_text,
            "suggestion": self.suggestion,
            "startIndex": self.start_index,
            "endIndex": self.end_index,
            "segmentId": self.segment_id,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'Issue':
        return cls(
            category=data["category"],
            subcategory=data.get("subcategory", ""),
            severity=Severity.parse(data["severity"]),
            explanation=data.get("explanation", ""),
            segment_text=data.get("segment", ""),
            suggestion=data.get("suggestion", ""),
            start_index=data.get("startIndex"),
            end_index=data.get("endIndex"),
            segment_id=data.get("segmentId"),
        )


@dataclass(frozen=True)
class CategoryTotal:
    """Issue count and penalty points for one MQM category"""
    count: int = 0
    points: int = 0

    def __add__(self, other: 'CategoryTotal') -> 'CategoryTotal':
        return CategoryTotal(self.count + other.count, self.points + other.points)

    def to_dict(self) -> Dict[str, int]:
        return {"count": self.count, "points": self.points}


def empty_categories() -> Dict[str, CategoryTotal]:
    """All fixed MQM categories with zero totals"""
    return {name: CategoryTotal() for name in MQM_CATEGORIES}


@dataclass(frozen=True)
class SegmentEvaluation:
    """The model collaborator's answer for one segment pair"""
    pair: SegmentPair
    score: float
    issues: Tuple[Issue, ...] = ()
    categories: Mapping[str, CategoryTotal] = field(default_factory=empty_categories)
    summary: str = ""


@dataclass(frozen=True)
class SegmentScore:
    """Per-segment line of an aggregate result, for report collaborators"""
    id: int
    source: str
    target: str
    score: float
    word_count: int
    issue_count: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "score": self.score,
            "wordCount": self.word_count,
            "issueCount": self.issue_count,
        }


@dataclass(frozen=True)
class AggregateResult:
    """
    Document-level MQM result.

    Issues keep segment-local offsets; consumers highlighting issues in the
    full document must locate the owning segment via Issue.segment_id first.
    """
    overall_score: float
    word_count: int
    categories: Mapping[str, CategoryTotal]
    issues: Tuple[Issue, ...] = ()
    mode: AnalysisMode = AnalysisMode.BILINGUAL
    model_id: str = ""
    segments: Tuple[SegmentScore, ...] = ()

    @property
    def issue_count(self) -> int:
        return len(self.issues)

    @property
    def total_points(self) -> int:
        return sum(total.points for total in self.categories.values())

    def to_dict(self) -> Dict[str, Any]:
        return {
            "overallScore": self.overall_score,
            "wordCount": self.word_count,
            "categories": {
                name: total.to_dict() for name, total in self.categories.items()
            },
            "issues": [issue.to_dict() for issue in self.issues],
            "mode": self.mode.value,
            "modelId": self.model_id,
            "segments": [segment.to_dict() for segment in self.segments],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'AggregateResult':
        categories = empty_categories()
        for name, total in data.get("categories", {}).items():
            categories[name] = CategoryTotal(total.get("count", 0), total.get("points", 0))

        return cls(
            overall_score=data["overallScore"],
            word_count=data["wordCount"],
            categories=categories,
            issues=tuple(Issue.from_dict(item) for item in data.get("issues", [])),
            mode=AnalysisMode.parse(data.get("mode")),
            model_id=data.get("modelId", ""),
            segments=tuple(
                SegmentScore(
                    id=item["id"],
                    source=item.get("source", ""),
                    target=item.get("target", ""),
                    score=item["score"],
                    word_count=item.get("wordCount", 0),
                    issue_count=item.get("issueCount", 0),
                )
                for item in data.get("segments", [])
            ),
        )


@dataclass(frozen=True)
class AnalysisRequest:
    """
    One analysis request, either free text or an uploaded file.

    Free text: target_text (and source_text in bilingual mode).
    File: file_buffer (bytes or base64 str) and file_type ('tmx', 'xliff', 'xlf'
    or a filename carrying one of those extensions).
    """
    target_text: Optional[str] = None
    source_text: Optional[str] = None
    source_lang: Optional[str] = None
    target_lang: Optional[str] = None
    mode: AnalysisMode = AnalysisMode.BILINGUAL
    model_id: Optional[str] = None
    file_buffer: Optional[Any] = None
    file_type: Optional[str] = None

    @property
    def is_file(self) -> bool:
        return self.file_buffer is not None
