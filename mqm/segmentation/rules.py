#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Sentence Boundary Rules

SRX-style, per-language rule sets used by the segmenter:
- end marker: sentence-final punctuation that may end a segment
- exceptions: abbreviations whose period must not end a segment
- preserve: inline content (markup, placeholders, code) never split or altered

Rule sets are plain data. Supporting a new language means adding an entry
to BUILTIN_RULES (or passing one to LanguageRuleTable), not new code.
"""

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from functools import cached_property
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Pattern, Tuple

from ..language import normalize_language_code


class RuleShape(str, Enum):
    """Kinds of rule sets"""
    DEFAULT = "default"                    # Latin-script punctuation + English abbreviations
    CHARACTER_SCRIPT = "character_script"  # CJK full-width punctuation, no abbreviations
    OVERRIDE = "override"                  # default punctuation, language-specific abbreviations


# Sentence-final punctuation followed by whitespace or end of text; closing
# quotes and brackets stay with the sentence they close.
LATIN_END_MARKER = r"[.!?]+[\"'”’»)\]]*(?=\s|$)"

# Full-width punctuation ends a sentence regardless of what follows.
FULLWIDTH_END_MARKER = r"[。！？]+[」』”’）)\]]*"

# Order matters: a fenced block must win over the inline-code pattern.
DEFAULT_PRESERVE_PATTERNS: Tuple[str, ...] = (
    r"```[\s\S]*?```",   # fenced code
    r"`[^`\n]+`",        # inline code
    r"<[^<>]+>",         # HTML/XML tags
    r"\{\d+\}",          # {0}-style placeholders
    r"%[sd]",            # printf placeholders
)


@dataclass(frozen=True)
class LanguageRules:
    """
    Immutable sentence boundary rules for one language.

    Attributes:
        shape: Which kind of rule set this is.
        end_marker: Regex matching a candidate sentence end.
        exceptions: Regexes for abbreviations, checked in order against the
            text ending at a candidate boundary; the first match suppresses it.
        preserve: Regexes for content that is protected before splitting.
    """
    shape: RuleShape
    end_marker: str = LATIN_END_MARKER
    exceptions: Tuple[str, ...] = ()
    preserve: Tuple[str, ...] = field(default=DEFAULT_PRESERVE_PATTERNS)

    @cached_property
    def end_marker_re(self) -> Pattern:
        return re.compile(self.end_marker)

    @cached_property
    def exception_res(self) -> Tuple[Pattern, ...]:
        # Anchored at the end of the preceding text, not inside a longer word
        return tuple(re.compile(r"(?<!\w)(?:" + pattern + r")$") for pattern in self.exceptions)

    @cached_property
    def preserve_re(self) -> Optional[Pattern]:
        if not self.preserve:
            return None
        return re.compile("|".join(f"(?:{pattern})" for pattern in self.preserve))

    def is_exception(self, preceding_text: str) -> bool:
        """True if the text ending at a candidate boundary ends with an abbreviation"""
        for exception in self.exception_res:
            if exception.search(preceding_text):
                return True
        return False


DEFAULT_RULES = LanguageRules(
    shape=RuleShape.DEFAULT,
    exceptions=(
        r"Mr\.", r"Mrs\.", r"Ms\.", r"Dr\.", r"Prof\.", r"Inc\.", r"Ltd\.",
        r"Jr\.", r"Sr\.", r"St\.", r"Ave\.", r"Blvd\.", r"Rd\.",
        r"e\.g\.", r"i\.e\.", r"etc\.", r"vs\.", r"Fig\.", r"fig\.",
        r"No\.", r"no\.", r"Vol\.", r"vol\.",
    ),
)

CHARACTER_SCRIPT_RULES = LanguageRules(
    shape=RuleShape.CHARACTER_SCRIPT,
    end_marker=FULLWIDTH_END_MARKER,
    exceptions=(),
)

BUILTIN_RULES: Mapping[str, LanguageRules] = MappingProxyType({
    'default': DEFAULT_RULES,
    'en': DEFAULT_RULES,
    'zh': CHARACTER_SCRIPT_RULES,
    'ja': CHARACTER_SCRIPT_RULES,
    'ko': CHARACTER_SCRIPT_RULES,
    'de': LanguageRules(
        shape=RuleShape.OVERRIDE,
        exceptions=(
            r"Hr\.", r"Fr\.", r"Dr\.", r"Prof\.", r"Nr\.", r"z\.B\.", r"d\.h\.",
            r"etc\.", r"usw\.", r"Abb\.", r"Abk\.", r"Abs\.", r"Abt\.", r"Bd\.",
        ),
    ),
    'es': LanguageRules(
        shape=RuleShape.OVERRIDE,
        exceptions=(
            r"Sr\.", r"Sra\.", r"Srta\.", r"Dr\.", r"Dra\.", r"Av\.", r"Avda\.",
            r"p\.ej\.", r"etc\.",
        ),
    ),
    'fr': LanguageRules(
        shape=RuleShape.OVERRIDE,
        exceptions=(
            r"M\.", r"Mme\.", r"Mlle\.", r"Dr\.", r"Prof\.", r"av\.", r"éd\.",
            r"p\.ex\.", r"etc\.",
        ),
    ),
})


class LanguageRuleTable:
    """
    Lookup of LanguageRules by language code.

    rules_for() never fails: unknown or empty codes get the 'default' entry.
    """

    def __init__(
        self,
        entries: Optional[Mapping[str, LanguageRules]] = None,
        default: Optional[LanguageRules] = None,
    ):
        table: Dict[str, LanguageRules] = dict(BUILTIN_RULES if entries is None else entries)
        self._default = default or table.get('default') or DEFAULT_RULES
        table['default'] = self._default
        self._entries = MappingProxyType(table)

    @property
    def languages(self) -> Tuple[str, ...]:
        return tuple(code for code in self._entries if code != 'default')

    @property
    def default(self) -> LanguageRules:
        return self._default

    def rules_for(self, code: Optional[str]) -> LanguageRules:
        """Rules for a language code (any BCP-47 variant), default if unknown"""
        return self._entries.get(normalize_language_code(code), self._default)

    def with_entries(self, **entries: LanguageRules) -> 'LanguageRuleTable':
        """New table with extra or replaced entries; this one is unchanged"""
        merged = dict(self._entries)
        merged.update(entries)
        return LanguageRuleTable(merged)

    def with_exceptions(self, code: str, *patterns: str) -> 'LanguageRuleTable':
        """New table where `code` also knows the given abbreviation patterns"""
        base = self.rules_for(code)
        shape = base.shape if base.shape != RuleShape.DEFAULT else RuleShape.OVERRIDE
        extended = replace(base, shape=shape, exceptions=base.exceptions + tuple(patterns))
        return self.with_entries(**{normalize_language_code(code): extended})


DEFAULT_TABLE = LanguageRuleTable()


def rules_for(code: Optional[str]) -> LanguageRules:
    """Rules from the built-in table"""
    return DEFAULT_TABLE.rules_for(code)
