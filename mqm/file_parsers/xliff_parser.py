#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
XLIFF Parser - Read XLIFF 1.2 and 2.x bilingual files

XLIFF 1.2:
    <xliff> -> <file source-language target-language> -> <body>
            -> <trans-unit> -> <source>, <target>
XLIFF 2.x:
    <xliff srcLang trgLang> -> <file> -> <unit> -> <segment> -> <source>, <target>

Elements are matched by local name, so the default OASIS namespace (or none)
makes no difference.
"""

from typing import Iterator, List, Tuple

from config.logging_config import get_logger

from ..exceptions import MalformedFileError
from ..language import normalize_language_code
from ..models import SegmentPair
from .base import (
    BilingualFileParser,
    children_local,
    element_text,
    first_child,
    iter_local,
    local_name,
)

logger = get_logger(__name__)


class XLIFFParser(BilingualFileParser):
    """Parse XLIFF translation units into segment pairs"""

    file_type = 'xliff'

    def parse(self, buffer: bytes) -> List[SegmentPair]:
        """
        Parse an XLIFF buffer

        Args:
            buffer: Raw XLIFF file content

        Returns:
            One pair per unit with source text, ids sequential across <file>s

        Raises:
            MalformedFileError: Not XML, or no <file> element
        """
        root = self._load_root(buffer)

        files = list(iter_local(root, 'file'))
        if not files:
            raise MalformedFileError("no <file> element found", self.file_type)

        root_source_lang = root.get('srcLang') or ''
        root_target_lang = root.get('trgLang') or ''

        pairs: List[SegmentPair] = []
        skipped = 0

        for file_elem in files:
            source_lang = normalize_language_code(
                file_elem.get('source-language') or file_elem.get('srcLang') or root_source_lang
            )
            target_lang = normalize_language_code(
                file_elem.get('target-language') or file_elem.get('trgLang') or root_target_lang
            )

            for source_text, target_text in self._iter_units(file_elem):
                if not source_text.strip():
                    skipped += 1
                    continue

                pairs.append(SegmentPair(
                    id=len(pairs) + 1,
                    source=source_text,
                    target=target_text,
                    source_lang=source_lang,
                    target_lang=target_lang,
                ))

        if skipped:
            logger.debug(f"Skipped {skipped} XLIFF units without source text")
        logger.info(f"Extracted {len(pairs)} segments from {len(files)} XLIFF file element(s)")
        return pairs

    @staticmethod
    def _iter_units(file_elem) -> Iterator[Tuple[str, str]]:
        """(source, target) texts of every unit in a <file>, in document order"""
        for elem in file_elem.iter():
            name = local_name(elem.tag)

            if name == 'trans-unit':
                yield (
                    element_text(first_child(elem, 'source')),
                    element_text(first_child(elem, 'target')),
                )
            elif name == 'unit':
                for segment in children_local(elem, 'segment'):
                    yield (
                        element_text(first_child(segment, 'source')),
                        element_text(first_child(segment, 'target')),
                    )
