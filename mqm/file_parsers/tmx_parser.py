#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
TMX Parser - Read TMX files (Translation Memory eXchange format)

<tmx> -> <header srclang="..."> -> <body> -> <tu> -> <tuv xml:lang="..."> -> <seg>
"""

from typing import List, Optional, Tuple

from config.logging_config import get_logger

from ..exceptions import MalformedFileError
from ..language import normalize_language_code
from ..models import SegmentPair
from .base import BilingualFileParser, element_text, first_child, iter_local, xml_lang

logger = get_logger(__name__)


class TMXParser(BilingualFileParser):
    """Parse TMX translation units into segment pairs"""

    file_type = 'tmx'

    def parse(self, buffer: bytes) -> List[SegmentPair]:
        """
        Parse a TMX buffer

        Each <tu> is already one segment; its <seg> text is taken as is. The
        variant in the header's source language (or the first variant) is
        the source, the first variant in another language is the target.
        Units without target text are skipped.

        Args:
            buffer: Raw TMX file content

        Returns:
            Segment pairs numbered from 1

        Raises:
            MalformedFileError: Not XML, or no <tu> element at all
        """
        root = self._load_root(buffer)

        header = next(iter_local(root, 'header'), None)
        header_lang = normalize_language_code(header.get('srclang')) if header is not None else ''

        units = list(iter_local(root, 'tu'))
        if not units:
            raise MalformedFileError("no translation units (<tu>) found", self.file_type)

        logger.debug(f"Processing {len(units)} translation units from TMX file")

        pairs: List[SegmentPair] = []
        skipped = 0

        for index, unit in enumerate(units, 1):
            source, target = self._pick_variants(unit, header_lang)

            if target is None or not target[1].strip():
                logger.debug(f"Skipping TU #{index}: no target text")
                skipped += 1
                continue

            source_lang, source_text = source
            target_lang, target_text = target

            pairs.append(SegmentPair(
                id=len(pairs) + 1,
                source=source_text,
                target=target_text,
                source_lang=source_lang,
                target_lang=target_lang,
            ))

        logger.info(f"Extracted {len(pairs)} segments from TMX file ({skipped} skipped)")
        return pairs

    @staticmethod
    def _pick_variants(
        unit, header_lang: str
    ) -> Tuple[Optional[Tuple[str, str]], Optional[Tuple[str, str]]]:
        """(lang, text) of the source and target variants of one <tu>"""
        variants = []
        for tuv in iter_local(unit, 'tuv'):
            lang = normalize_language_code(xml_lang(tuv))
            variants.append((lang, element_text(first_child(tuv, 'seg'))))

        if not variants:
            return None, None

        source = next((variant for variant in variants if variant[0] == header_lang), variants[0])
        target = next((variant for variant in variants if variant[0] != source[0]), None)
        return source, target
