#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Sentence Segmenter

Splits a block of text into ordered sentence-like segments:

1. Protect inline content (tags, placeholders, code) behind placeholder tokens
2. Split with an ordered chain of strategies; the first that returns
   segments wins:
     RuleBasedStrategy   - language rules (end markers + abbreviations)
     PunctuationStrategy - language-agnostic sentence punctuation
     WholeTextStrategy   - the whole text as one segment
3. Restore protected content inside the segment that holds it

Segmentation is a pure function of (text, language): no state is kept
between calls and non-empty input never raises.

Usage:
    from mqm.segmentation import segment_text

    segments = segment_text("Dr. Smith arrived. He left.", "en")
    # [Segment(text='Dr. Smith arrived.'), Segment(text='He left.')]
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from config.logging_config import get_logger

from ..models import Segment
from .rules import DEFAULT_TABLE, LanguageRuleTable, LanguageRules

logger = get_logger(__name__)

# Private-use code points: never sentence punctuation or whitespace
PLACEHOLDER_OPEN = "\ue000"
PLACEHOLDER_CLOSE = "\ue001"

# Used when language rules can't be applied
GENERIC_SENTENCE_END = re.compile(r"[.!?。！？]+[\"'”’»」』）)\]]*(?=\s|$)|[。！？]+")


@dataclass(frozen=True)
class ProtectedText:
    """Text with protected spans swapped for placeholder tokens"""
    text: str
    originals: Tuple[Tuple[str, str], ...] = ()  # (placeholder, original) in order

    def restore(self, fragment: str) -> str:
        """Put the original content back into a fragment of self.text"""
        if PLACEHOLDER_OPEN not in fragment:
            return fragment
        for placeholder, original in self.originals:
            fragment = fragment.replace(placeholder, original)
        return fragment


def protect(text: str, rules: LanguageRules) -> ProtectedText:
    """
    Replace every preserve-pattern match with a unique placeholder.

    The text is scanned left to right; where patterns overlap the leftmost
    match wins, then the pattern listed first.
    """
    pattern = rules.preserve_re
    if pattern is None:
        return ProtectedText(text)

    originals: List[Tuple[str, str]] = []

    def _swap(match: re.Match) -> str:
        placeholder = f"{PLACEHOLDER_OPEN}{len(originals)}{PLACEHOLDER_CLOSE}"
        originals.append((placeholder, match.group(0)))
        return placeholder

    protected = pattern.sub(_swap, text)
    return ProtectedText(protected, tuple(originals))


def _split_at(text: str, ends: Sequence[int]) -> List[str]:
    """Cut text after each end offset, trim, drop empty pieces"""
    pieces = []
    start = 0
    for end in ends:
        pieces.append(text[start:end])
        start = end
    pieces.append(text[start:])
    return [piece.strip() for piece in pieces if piece.strip()]


class SegmentationStrategy(ABC):
    """One step of the fallback chain"""

    name = "strategy"

    @abstractmethod
    def split(self, text: str, rules: LanguageRules) -> Optional[List[str]]:
        """Return segments, or None to defer to the next strategy"""
        pass


class RuleBasedStrategy(SegmentationStrategy):
    """Boundaries from the language's end marker, minus abbreviation exceptions"""

    name = "rules"

    def split(self, text: str, rules: LanguageRules) -> Optional[List[str]]:
        try:
            ends = []
            for match in rules.end_marker_re.finditer(text):
                # Abbreviation check sees the text through the first punctuation mark
                if rules.is_exception(text[:match.start() + 1]):
                    continue
                ends.append(match.end())
        except (re.error, TypeError) as e:
            logger.debug(f"Language rules unusable ({e}), falling back")
            return None

        return _split_at(text, ends) or None


class PunctuationStrategy(SegmentationStrategy):
    """Language-agnostic split on sentence punctuation"""

    name = "punctuation"

    def split(self, text: str, rules: LanguageRules) -> Optional[List[str]]:
        ends = [match.end() for match in GENERIC_SENTENCE_END.finditer(text)]
        return _split_at(text, ends) or None


class WholeTextStrategy(SegmentationStrategy):
    """Last resort: the whole text is one segment"""

    name = "whole_text"

    def split(self, text: str, rules: LanguageRules) -> Optional[List[str]]:
        stripped = text.strip()
        return [stripped] if stripped else None


DEFAULT_STRATEGIES: Tuple[SegmentationStrategy, ...] = (
    RuleBasedStrategy(),
    PunctuationStrategy(),
    WholeTextStrategy(),
)


class Segmenter:
    """
    Splits text into sentence segments using per-language rules.

    Attributes:
        rule_table: Where rules are looked up by language code.
        strategies: Ordered fallback chain; the first non-empty result wins.
    """

    def __init__(
        self,
        rule_table: Optional[LanguageRuleTable] = None,
        strategies: Optional[Sequence[SegmentationStrategy]] = None,
    ):
        self.rule_table = rule_table or DEFAULT_TABLE
        self.strategies = tuple(strategies) if strategies else DEFAULT_STRATEGIES

    def segment(self, text: Optional[str], lang: Optional[str] = None) -> List[Segment]:
        """
        Segment text.

        Args:
            text: Text block to split.
            lang: Language code (any variant); unknown codes use default rules.

        Returns:
            Segments in document order. Empty or whitespace-only text gives [].
        """
        if not text or not text.strip():
            return []

        rules = self.rule_table.rules_for(lang)

        try:
            protected = protect(text, rules)
        except (re.error, TypeError) as e:
            logger.debug(f"Preserve patterns unusable for '{lang}' ({e}), nothing protected")
            protected = ProtectedText(text)

        pieces = None
        for strategy in self.strategies:
            pieces = strategy.split(protected.text, rules)
            if pieces:
                if strategy is not self.strategies[0]:
                    logger.debug(f"Segmented '{lang}' text with fallback strategy '{strategy.name}'")
                break

        if not pieces:
            # Only reachable with a custom chain lacking WholeTextStrategy
            pieces = [protected.text.strip()]

        return [Segment(protected.restore(piece)) for piece in pieces]


_default_segmenter = Segmenter()


def segment_text(text: Optional[str], lang: Optional[str] = None) -> List[Segment]:
    """Segment text with the built-in rule table"""
    return _default_segmenter.segment(text, lang)


def split_sentences(text: Optional[str], lang: Optional[str] = None) -> List[str]:
    """Like segment_text, but plain strings"""
    return [segment.text for segment in segment_text(text, lang)]
