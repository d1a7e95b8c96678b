#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
MQM Errors

Exception hierarchy for the analysis core. Callers can catch MQMError for
anything raised by this package; collaborator failures (model calls)
are propagated unchanged and are not wrapped.
"""

from typing import Optional


class MQMError(Exception):
    """Base error for the analysis core"""
    pass


class MalformedFileError(MQMError):
    """File lacks the minimal structure of its declared format"""

    def __init__(self, message: str, file_type: Optional[str] = None):
        self.file_type = file_type
        if file_type:
            message = f"Invalid {file_type.upper()} file: {message}"
        super().__init__(message)


class UnsupportedFormatError(MQMError):
    """File type is neither TMX nor XLIFF"""

    def __init__(self, file_type: Optional[str]):
        self.file_type = file_type
        super().__init__(
            f"Unsupported file type: {file_type!r}. Only TMX and XLIFF files are supported."
        )


class InputValidationError(MQMError):
    """Request rejected before any segmentation or model call"""
    pass


class EmptyInputError(InputValidationError):
    """Nothing to analyze"""
    pass


class WordLimitExceededError(InputValidationError):
    """Analyzed text exceeds the configured word limit"""

    def __init__(self, word_count: int, limit: int, side: str = "target"):
        self.word_count = word_count
        self.limit = limit
        self.side = side
        super().__init__(
            f"{side.capitalize()} text exceeds the {limit} word limit ({word_count} words)"
        )


class EvaluationError(MQMError):
    """The model answer could not be turned into a segment evaluation"""

    def __init__(self, message: str, segment_id: Optional[int] = None):
        self.segment_id = segment_id
        if segment_id is not None:
            message = f"Segment #{segment_id}: {message}"
        super().__init__(message)
