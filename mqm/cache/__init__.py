"""
Cache Module - analysis result caching

Exports:
- AnalysisCache (lookup/store of AggregateResults by fingerprint)
- AnalysisFingerprint, normalize_text (request identity)
- CacheInterface, CacheStats (backend interface)
- LRUCache (in-memory LRU backend, default)
- FileCache (persistent JSON backend)
"""

from .base import CacheInterface, CacheStats
from .memory_cache import LRUCache
from .file_cache import FileCache
from .fingerprint import AnalysisFingerprint, normalize_text
from .analysis_cache import AnalysisCache

__all__ = [
    'AnalysisCache',
    'AnalysisFingerprint',
    'normalize_text',
    'CacheInterface',
    'CacheStats',
    'LRUCache',
    'FileCache',
]
