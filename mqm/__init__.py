"""
Auto-MQM Core

Segmentation, bilingual file parsing, alignment, caching and score
aggregation for MQM (Multidimensional Quality Metrics) translation
quality analysis.

Usage:
    from mqm import AnalysisPipeline, AnalysisRequest, AnalysisMode

    pipeline = AnalysisPipeline.from_settings()
    result = await pipeline.analyze(AnalysisRequest(
        source_text="Hello world.",
        target_text="Bonjour le monde.",
        source_lang="en",
        target_lang="fr",
    ))
    print(result.overall_score)
"""

from .exceptions import (
    MQMError,
    MalformedFileError,
    UnsupportedFormatError,
    InputValidationError,
    EmptyInputError,
    WordLimitExceededError,
    EvaluationError,
)
from .language import (
    normalize_language_code,
    is_valid_language_code,
    get_language_name,
    LanguageDetector,
)
from .models import (
    AnalysisMode,
    Severity,
    Segment,
    SegmentPair,
    Issue,
    CategoryTotal,
    SegmentEvaluation,
    SegmentScore,
    AggregateResult,
    AnalysisRequest,
)
from .segmentation import LanguageRuleTable, LanguageRules, Segmenter, segment_text
from .file_parsers import TMXParser, XLIFFParser, get_parser, parse_file
from .alignment import SegmentAligner
from .cache import AnalysisCache, AnalysisFingerprint, LRUCache, FileCache
from .scoring import ScoreAggregator, count_words
from .evaluator import SegmentEvaluator, MQMSegmentEvaluator
from .pipeline import AnalysisPipeline

__all__ = [
    # Errors
    'MQMError',
    'MalformedFileError',
    'UnsupportedFormatError',
    'InputValidationError',
    'EmptyInputError',
    'WordLimitExceededError',
    'EvaluationError',
    # Languages
    'normalize_language_code',
    'is_valid_language_code',
    'get_language_name',
    'LanguageDetector',
    # Data model
    'AnalysisMode',
    'Severity',
    'Segment',
    'SegmentPair',
    'Issue',
    'CategoryTotal',
    'SegmentEvaluation',
    'SegmentScore',
    'AggregateResult',
    'AnalysisRequest',
    # Components
    'LanguageRuleTable',
    'LanguageRules',
    'Segmenter',
    'segment_text',
    'TMXParser',
    'XLIFFParser',
    'get_parser',
    'parse_file',
    'SegmentAligner',
    'AnalysisCache',
    'AnalysisFingerprint',
    'LRUCache',
    'FileCache',
    'ScoreAggregator',
    'count_words',
    'SegmentEvaluator',
    'MQMSegmentEvaluator',
    'AnalysisPipeline',
]

__version__ = "1.0.0"
