"""
Text Segmentation Module

Rule-driven sentence segmentation that keeps inline markup, placeholders
and code intact.
"""

from .rules import (
    RuleShape,
    LanguageRules,
    LanguageRuleTable,
    DEFAULT_RULES,
    CHARACTER_SCRIPT_RULES,
    DEFAULT_TABLE,
    rules_for,
)
from .segmenter import (
    Segmenter,
    SegmentationStrategy,
    RuleBasedStrategy,
    PunctuationStrategy,
    WholeTextStrategy,
    ProtectedText,
    protect,
    segment_text,
    split_sentences,
)

__all__ = [
    'RuleShape',
    'LanguageRules',
    'LanguageRuleTable',
    'DEFAULT_RULES',
    'CHARACTER_SCRIPT_RULES',
    'DEFAULT_TABLE',
    'rules_for',
    'Segmenter',
    'SegmentationStrategy',
    'RuleBasedStrategy',
    'PunctuationStrategy',
    'WholeTextStrategy',
    'ProtectedText',
    'protect',
    'segment_text',
    'split_sentences',
]
