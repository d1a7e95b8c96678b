#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Bilingual File Parser - shared XML plumbing for TMX and XLIFF
"""

import xml.etree.ElementTree as ET
from abc import ABC, abstractmethod
from typing import Iterator, List, Optional

from config.constants import XML_LANG_ATTR

from ..exceptions import MalformedFileError
from ..models import SegmentPair


def local_name(tag) -> str:
    """'{urn:oasis:names:tc:xliff:document:1.2}file' -> 'file'"""
    if not isinstance(tag, str):  # comments, processing instructions
        return ''
    return tag.rsplit('}', 1)[-1]


def iter_local(element: ET.Element, name: str) -> Iterator[ET.Element]:
    """All descendants (and self) with the given local name, in document order"""
    for child in element.iter():
        if local_name(child.tag) == name:
            yield child


def children_local(element: ET.Element, name: str) -> List[ET.Element]:
    """Direct children with the given local name"""
    return [child for child in element if local_name(child.tag) == name]


def first_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    matches = children_local(element, name)
    return matches[0] if matches else None


def element_text(element: Optional[ET.Element]) -> str:
    """All text content of an element, inline children included, unmodified"""
    if element is None:
        return ''
    return ''.join(element.itertext())


def xml_lang(element: ET.Element) -> str:
    """xml:lang (or TMX 1.1 'lang') attribute value"""
    return element.get(XML_LANG_ATTR) or element.get('lang') or ''


class BilingualFileParser(ABC):
    """
    Parses a translation-exchange file into ordered segment pairs.

    Pairs come out numbered 1..n with no gaps, language codes normalized.
    """

    file_type = ''

    @abstractmethod
    def parse(self, buffer: bytes) -> List[SegmentPair]:
        """Parse a file buffer"""
        pass

    def _load_root(self, buffer: bytes) -> ET.Element:
        """Parse the buffer as XML; anything unreadable is a MalformedFileError"""
        if not buffer or not buffer.strip():
            raise MalformedFileError("empty file", self.file_type)

        try:
            return ET.fromstring(buffer)
        except ET.ParseError as e:
            raise MalformedFileError(f"not well-formed XML ({e})", self.file_type) from e
