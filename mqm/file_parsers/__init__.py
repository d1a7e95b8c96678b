"""
Bilingual File Parsers

TMX and XLIFF readers producing ordered SegmentPairs.

Usage:
    from mqm.file_parsers import parse_file

    pairs = parse_file(open("memory.tmx", "rb").read(), "tmx")
"""

import base64
import binascii
from pathlib import PurePath
from typing import Dict, List, Optional, Type, Union

from config.constants import FILE_TYPE_ALIASES

from ..exceptions import MalformedFileError, UnsupportedFormatError
from ..models import SegmentPair
from .base import BilingualFileParser
from .tmx_parser import TMXParser
from .xliff_parser import XLIFFParser

PARSERS: Dict[str, Type[BilingualFileParser]] = {
    'tmx': TMXParser,
    'xliff': XLIFFParser,
}


def normalize_file_type(file_type: Optional[str]) -> Optional[str]:
    """
    'TMX', '.xlf', 'project.xliff' -> 'tmx' / 'xliff'; None if unknown
    """
    if not file_type:
        return None

    value = file_type.strip().lower()
    if value.startswith('.'):
        value = value[1:]
    if value in FILE_TYPE_ALIASES:
        return FILE_TYPE_ALIASES[value]

    suffix = PurePath(value).suffix.lstrip('.') if '.' in value else ''
    return FILE_TYPE_ALIASES.get(suffix)


def get_parser(file_type: Optional[str]) -> BilingualFileParser:
    """
    Parser for a file type.

    Raises:
        UnsupportedFormatError: Neither TMX nor XLIFF
    """
    kind = normalize_file_type(file_type)
    if kind is None:
        raise UnsupportedFormatError(file_type)
    return PARSERS[kind]()


def decode_buffer(buffer: Union[bytes, bytearray, str], file_type: Optional[str] = None) -> bytes:
    """Raw bytes from a bytes buffer or a base64 string"""
    if isinstance(buffer, (bytes, bytearray)):
        return bytes(buffer)

    if isinstance(buffer, str):
        try:
            return base64.b64decode(buffer.strip(), validate=True)
        except (binascii.Error, ValueError) as e:
            raise MalformedFileError("file content is not valid base64", file_type) from e

    raise TypeError(f"Unsupported buffer type: {type(buffer).__name__}")


def parse_file(buffer: Union[bytes, bytearray, str], file_type: Optional[str]) -> List[SegmentPair]:
    """
    Parse a bilingual file.

    The file type is checked before the buffer is looked at.

    Args:
        buffer: File content, raw bytes or base64 text
        file_type: 'tmx', 'xliff', 'xlf' or a filename with one of those extensions

    Returns:
        Segment pairs numbered from 1
    """
    parser = get_parser(file_type)
    return parser.parse(decode_buffer(buffer, parser.file_type))


__all__ = [
    'BilingualFileParser',
    'TMXParser',
    'XLIFFParser',
    'PARSERS',
    'normalize_file_type',
    'get_parser',
    'decode_buffer',
    'parse_file',
]
