#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Segment Aligner - pair source and target segments for evaluation

Free text is aligned by position only: the i-th source segment is paired
with the i-th target segment, and the shorter side is padded with "". No
semantic alignment is attempted, so a merged or split sentence on one side
shifts every later pair. Files (TMX/XLIFF) already carry their pairing and
pass through unchanged.
"""

from typing import List, Optional, Sequence, Union

from config.logging_config import get_logger

from .language import normalize_language_code
from .models import Segment, SegmentPair

logger = get_logger(__name__)

SegmentLike = Union[Segment, str]


def _texts(segments: Optional[Sequence[SegmentLike]]) -> List[str]:
    if not segments:
        return []
    return [item.text if isinstance(item, Segment) else str(item) for item in segments]


class SegmentAligner:
    """Builds SegmentPairs from segmented text or parsed files"""

    def align(
        self,
        source_segments: Optional[Sequence[SegmentLike]],
        target_segments: Optional[Sequence[SegmentLike]],
        source_lang: Optional[str] = None,
        target_lang: Optional[str] = None,
    ) -> List[SegmentPair]:
        """
        Align two segment lists positionally.

        Args:
            source_segments: Source segments (Segment or str)
            target_segments: Target segments (Segment or str)
            source_lang: Source language code
            target_lang: Target language code

        Returns:
            max(len(source), len(target)) pairs numbered from 1. With only one
            side populated, monolingual pairs tagged with that side's
            language. Both sides empty gives [].
        """
        sources = _texts(source_segments)
        targets = _texts(target_segments)
        source_lang = normalize_language_code(source_lang)
        target_lang = normalize_language_code(target_lang)

        if not sources and not targets:
            return []

        if not targets:
            return [
                SegmentPair(id=index, source=text, target="", source_lang=source_lang)
                for index, text in enumerate(sources, 1)
            ]

        if not sources:
            return [
                SegmentPair(id=index, source="", target=text, target_lang=target_lang)
                for index, text in enumerate(targets, 1)
            ]

        if len(sources) != len(targets):
            logger.debug(
                f"Segment count mismatch: {len(sources)} source vs {len(targets)} target, "
                f"padding the shorter side"
            )

        pairs = []
        for index in range(max(len(sources), len(targets))):
            source = sources[index] if index < len(sources) else ""
            target = targets[index] if index < len(targets) else ""
            pairs.append(SegmentPair(
                id=index + 1,
                source=source,
                target=target,
                source_lang=source_lang,
                target_lang=target_lang,
            ))
        return pairs

    def from_file(self, pairs: Sequence[SegmentPair]) -> List[SegmentPair]:
        """File pairs are already aligned"""
        return list(pairs)
