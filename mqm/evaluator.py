#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Segment Evaluator - MQM annotation of one segment pair by a language model

The pipeline only depends on SegmentEvaluator.evaluate(); MQMSegmentEvaluator
is the model-backed implementation:

1. Build the MQM prompt (monolingual or bilingual)
2. Ask the provider (Claude by default)
3. Pull the first JSON object out of the reply and validate it
4. Normalize severities and categories, fill in totals and score the model
   left out

Provider errors (network, auth, rate limits) propagate unchanged; a reply
that can't be understood raises EvaluationError.
"""

import copy
import json
import re
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ai_providers import AIMessage, BaseAIProvider
from config.constants import MAX_SCORE, MIN_SCORE, MONOLINGUAL_EXCLUDED_CATEGORIES, MQM_CATEGORIES
from config.logging_config import get_logger

from .exceptions import EvaluationError
from .language import get_language_name
from .models import AnalysisMode, CategoryTotal, Issue, SegmentEvaluation, SegmentPair, Severity
from .scoring import count_words, totals_from_issues

logger = get_logger(__name__)

JSON_OBJECT = re.compile(r"\{[\s\S]*\}")

_CATEGORY_NAMES = {name.lower(): name for name in MQM_CATEGORIES}


# ==================== REPLY MODELS ====================

class MQMIssueReply(BaseModel):
    """One issue as the model reports it"""
    category: str
    subcategory: str = ""
    severity: Union[str, int]
    explanation: str = ""
    location: Optional[str] = None
    suggestion: Optional[str] = ""
    start_index: Optional[int] = Field(default=None, alias="startIndex")
    end_index: Optional[int] = Field(default=None, alias="endIndex")

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class CategoryTotalReply(BaseModel):
    count: int = 0
    points: int = 0

    model_config = ConfigDict(extra="ignore")


class MQMReply(BaseModel):
    """Top-level JSON object requested by the MQM prompt"""
    issues: List[MQMIssueReply] = Field(default_factory=list, alias="mqmIssues")
    categories: Optional[Dict[str, CategoryTotalReply]] = None
    word_count: Optional[int] = Field(default=None, alias="wordCount")
    overall_score: Optional[float] = Field(default=None, alias="overallScore")
    summary: Optional[str] = ""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


# ==================== PROMPTS ====================

SYSTEM_PROMPT = (
    "You are a localization QA expert using the MQM (Multidimensional Quality "
    "Metrics) framework. Return ONLY valid JSON without any other text."
)

ERROR_TYPOLOGY = """1. Accuracy
   - Mistranslation: Content in target language that misrepresents source content
   - Omission: Content missing from translation that is present in source
   - Addition: Content added to translation that is not present in source
   - Untranslated: Source content not translated that should be

2. Fluency
   - Grammar: Issues related to grammar, syntax, or morphology
   - Spelling: Spelling errors or typos
   - Punctuation: Incorrect or inconsistent punctuation
   - Typography: Issues with formatting, capitalization, or other typographical elements

3. Terminology
   - Inconsistent: Terminology used inconsistently within the text
   - Inappropriate: Wrong terms used for the context or domain

4. Style
   - Awkward: Translation sounds unnatural or awkward
   - Cultural: Cultural references incorrectly adapted

5. Design
   - Length: Target text is too long or too short relative to space constraints
   - Markup/Code: Issues with tags, placeholders, or code elements"""

MONOLINGUAL_TYPOLOGY = ERROR_TYPOLOGY.split("\n\n", 1)[1]

ANSWER_FORMAT = """For each issue found, provide:
- Category and subcategory
- Severity (MINOR=1, MAJOR=5, CRITICAL=10)
- Explanation
- Location: the exact erroneous words, copied from the text
- Suggested fix

Also provide an MQM score calculated as:
MQM Score = 100 - (sum of error points / word count * 100)

Use this exact JSON structure:
{
  "mqmIssues": [
    {
      "category": "Fluency",
      "subcategory": "Grammar",
      "severity": "MAJOR",
      "explanation": "...",
      "location": "...",
      "suggestion": "..."
    }
  ],
  "categories": {
    "Accuracy": { "count": 0, "points": 0 },
    "Fluency": { "count": 0, "points": 0 },
    "Terminology": { "count": 0, "points": 0 },
    "Style": { "count": 0, "points": 0 },
    "Design": { "count": 0, "points": 0 }
  },
  "wordCount": 0,
  "overallScore": 100,
  "summary": "..."
}"""


def build_bilingual_prompt(pair: SegmentPair) -> str:
    return f"""Evaluate the translation of the following source and target text pair.

Source language: {get_language_name(pair.source_lang)}
Target language: {get_language_name(pair.target_lang)}

Source text:
\"\"\"
{pair.source}
\"\"\"

Target text:
\"\"\"
{pair.target}
\"\"\"

Perform a detailed MQM analysis using the following error categories:
{ERROR_TYPOLOGY}

{ANSWER_FORMAT}"""


def build_monolingual_prompt(pair: SegmentPair) -> str:
    return f"""This is a MONOLINGUAL assessment: there is no source text, evaluate the content quality of the text alone.

Language: {get_language_name(pair.assessed_lang)}

Text to analyze:
\"\"\"
{pair.assessed_text}
\"\"\"

Perform a detailed MQM analysis using the following error categories:
{MONOLINGUAL_TYPOLOGY}

{ANSWER_FORMAT}"""


# ==================== PARSING HELPERS ====================

def extract_json(content: str, segment_id: Optional[int] = None) -> Dict[str, Any]:
    """
    First '{' to last '}' of a reply, decoded.

    Models sometimes wrap the JSON in prose or code fences.
    """
    match = JSON_OBJECT.search(content or "")
    if not match:
        raise EvaluationError("Could not find a JSON object in the model reply", segment_id)

    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise EvaluationError(f"Could not parse analysis results: {e}", segment_id) from e

    if not isinstance(data, dict):
        raise EvaluationError("Model reply is not a JSON object", segment_id)
    return data


def normalize_category(name: str) -> str:
    """'fluency ' -> 'Fluency'; unknown names are kept (trimmed)"""
    cleaned = (name or "").strip()
    return _CATEGORY_NAMES.get(cleaned.lower(), cleaned)


def locate(fragment: Optional[str], text: str):
    """(start, end) of fragment inside text, or (None, None)"""
    if not fragment:
        return None, None
    start = text.find(fragment)
    if start < 0:
        return None, None
    return start, start + len(fragment)


def score_from_points(points: int, word_count: int) -> float:
    """100 - points/words*100, floored at 0; no words means nothing to penalize"""
    if word_count <= 0:
        return MAX_SCORE
    return max(MIN_SCORE, MAX_SCORE - points / word_count * 100)


# ==================== EVALUATORS ====================

class SegmentEvaluator(ABC):
    """Anything able to MQM-annotate one segment pair"""

    model_id: str = ""

    @abstractmethod
    async def evaluate(self, pair: SegmentPair, mode: AnalysisMode) -> SegmentEvaluation:
        pass

    def with_model(self, model_id: str) -> 'SegmentEvaluator':
        """Same evaluator asking a different model"""
        if not model_id or model_id == self.model_id:
            return self
        clone = copy.copy(self)
        clone.model_id = model_id
        return clone

    async def close(self) -> None:
        """Release whatever the evaluator holds open"""
        pass


class MQMSegmentEvaluator(SegmentEvaluator):
    """
    Model-backed MQM evaluator.

    Args:
        provider: AI provider answering the prompts
        model_id: Model override; defaults to the provider's configured model
    """

    def __init__(self, provider: BaseAIProvider, model_id: Optional[str] = None):
        self.provider = provider
        self.model_id = model_id or provider.config.model

    async def close(self) -> None:
        await self.provider.close()

    def build_prompt(self, pair: SegmentPair, mode: AnalysisMode) -> str:
        if mode == AnalysisMode.MONOLINGUAL or pair.is_monolingual:
            return build_monolingual_prompt(pair)
        return build_bilingual_prompt(pair)

    async def evaluate(self, pair: SegmentPair, mode: AnalysisMode) -> SegmentEvaluation:
        """
        Evaluate one segment pair.

        Raises:
            EvaluationError: The reply has no usable MQM JSON
        """
        prompt = self.build_prompt(pair, AnalysisMode.parse(mode))

        response = await self.provider.complete(
            [AIMessage(role="user", content=prompt)],
            system_prompt=SYSTEM_PROMPT,
            model=self.model_id,
        )

        logger.debug(f"Segment #{pair.id}: {response.total_tokens} tokens ({response.model})")
        if response.truncated:
            logger.warning(f"Segment #{pair.id}: reply hit max_tokens, JSON may be incomplete")

        return self.parse_reply(pair, mode, response.content)

    def parse_reply(self, pair: SegmentPair, mode: AnalysisMode, content: str) -> SegmentEvaluation:
        """Turn the raw model reply into a SegmentEvaluation"""
        mode = AnalysisMode.parse(mode)
        data = extract_json(content, pair.id)

        try:
            reply = MQMReply.model_validate(data)
        except ValidationError as e:
            raise EvaluationError(f"Unexpected analysis structure: {e}", pair.id) from e

        text = pair.assessed_text
        issues = []
        for item in reply.issues:
            try:
                severity = Severity.parse(item.severity)
            except ValueError as e:
                raise EvaluationError(f"Unknown severity {item.severity!r}", pair.id) from e

            start, end = item.start_index, item.end_index
            if start is None or end is None:
                start, end = locate(item.location, text)

            issues.append(Issue(
                category=normalize_category(item.category),
                subcategory=item.subcategory.strip(),
                severity=severity,
                explanation=item.explanation,
                segment_text=item.location or "",
                suggestion=item.suggestion or "",
                start_index=start,
                end_index=end,
                segment_id=pair.id,
            ))

        if reply.categories:
            categories = {name: CategoryTotal() for name in MQM_CATEGORIES}
            for name, total in reply.categories.items():
                category = normalize_category(name)
                if category in categories:
                    categories[category] += CategoryTotal(total.count, total.points)
        else:
            categories = totals_from_issues(issues)

        if reply.overall_score is not None:
            score = min(MAX_SCORE, max(MIN_SCORE, float(reply.overall_score)))
        else:
            counted = [
                issue for issue in issues
                if not (mode == AnalysisMode.MONOLINGUAL
                        and issue.category in MONOLINGUAL_EXCLUDED_CATEGORIES)
            ]
            points = sum(issue.points for issue in counted)
            score = score_from_points(points, count_words(text, pair.assessed_lang))

        return SegmentEvaluation(
            pair=pair,
            score=score,
            issues=tuple(issues),
            categories=categories,
            summary=reply.summary or "",
        )
