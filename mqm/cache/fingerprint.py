#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Analysis Fingerprint

Deterministic identity of an analysis request. Two requests that differ
only in whitespace layout (CRLF vs LF, trailing newline, runs of spaces)
share a fingerprint; any difference in text, language, mode or model
gives a different one.
"""

import hashlib
import json
import re
from dataclasses import dataclass
from typing import Optional, Sequence, Union

from ..language import normalize_language_code
from ..models import AnalysisMode, SegmentPair

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: Optional[str]) -> Optional[str]:
    """Trim and collapse whitespace runs to a single space; None stays None"""
    if text is None:
        return None
    return _WHITESPACE_RUN.sub(" ", text).strip()


@dataclass(frozen=True)
class AnalysisFingerprint:
    """
    Normalized request identity.

    Build it with AnalysisFingerprint.create() (or from_pairs() for files)
    so every field goes through normalization.
    """
    source_text: Optional[str]
    target_text: str
    source_lang: str
    target_lang: str
    mode: str
    model_id: str

    @classmethod
    def create(
        cls,
        target_text: str,
        source_text: Optional[str] = None,
        source_lang: Optional[str] = None,
        target_lang: Optional[str] = None,
        mode: Union[AnalysisMode, str, None] = None,
        model_id: str = "",
    ) -> 'AnalysisFingerprint':
        return cls(
            source_text=normalize_text(source_text),
            target_text=normalize_text(target_text) or "",
            source_lang=normalize_language_code(source_lang),
            target_lang=normalize_language_code(target_lang),
            mode=AnalysisMode.parse(mode).value,
            model_id=(model_id or "").strip(),
        )

    @classmethod
    def from_pairs(
        cls,
        pairs: Sequence[SegmentPair],
        mode: Union[AnalysisMode, str, None] = None,
        model_id: str = "",
    ) -> 'AnalysisFingerprint':
        """Fingerprint of a parsed file: texts joined segment by segment"""
        mode = AnalysisMode.parse(mode)
        source_text = "\n".join(pair.source for pair in pairs)
        if mode == AnalysisMode.MONOLINGUAL:
            source_text = None

        return cls.create(
            target_text="\n".join(pair.target for pair in pairs),
            source_text=source_text,
            source_lang=next((pair.source_lang for pair in pairs if pair.source_lang), None),
            target_lang=next((pair.target_lang for pair in pairs if pair.target_lang), None),
            mode=mode,
            model_id=model_id,
        )

    @property
    def key(self) -> str:
        """SHA256 hex digest of the canonical JSON form"""
        key_components = {
            'source_text': self.source_text,
            'target_text': self.target_text,
            'source_lang': self.source_lang,
            'target_lang': self.target_lang,
            'mode': self.mode,
            'model_id': self.model_id,
        }
        key_string = json.dumps(key_components, sort_keys=True, ensure_ascii=False)
        return hashlib.sha256(key_string.encode('utf-8')).hexdigest()
