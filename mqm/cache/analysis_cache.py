#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Analysis Cache - skip the model entirely for repeated requests

Keyed by AnalysisFingerprint. Entries never expire here; whoever owns the
backend decides on retention.

Usage:
    cache = AnalysisCache()                     # in-process LRU
    cache = AnalysisCache(FileCache("cache/"))  # persistent JSON

    result = cache.lookup(fingerprint)
    if result is None:
        result = ...
        cache.store(fingerprint, result)
"""

from typing import Optional

from config.logging_config import get_logger

from ..models import AggregateResult
from .base import CacheInterface, CacheStats
from .file_cache import FileCache
from .fingerprint import AnalysisFingerprint
from .memory_cache import LRUCache

logger = get_logger(__name__)


class AnalysisCache:
    """
    Result cache in front of a storage backend.

    The in-process LRU keeps result objects as they are, so a hit is the
    identical AggregateResult that was stored. Serializing backends
    (FileCache) round-trip through AggregateResult.to_dict(), giving an
    equal result.
    """

    def __init__(self, backend: Optional[CacheInterface] = None):
        self.backend = backend if backend is not None else LRUCache()
        self._serialize = isinstance(self.backend, FileCache)

    @classmethod
    def from_settings(cls, settings) -> 'AnalysisCache':
        """Build the cache configured in Settings (cache_backend: memory | file)"""
        backend_name = (settings.cache_backend or "memory").strip().lower()
        if backend_name == "file":
            backend = FileCache(settings.cache_dir, max_entries=settings.cache_max_entries)
        elif backend_name == "memory":
            backend = LRUCache(max_size=settings.cache_max_entries)
        else:
            raise ValueError(f"Unknown cache backend: {settings.cache_backend!r}")

        logger.debug(f"Analysis cache backend: {backend_name}")
        return cls(backend)

    def lookup(self, fingerprint: AnalysisFingerprint) -> Optional[AggregateResult]:
        """Stored result for a fingerprint, or None"""
        value = self.backend.get(fingerprint.key)
        if value is None:
            return None
        if self._serialize:
            return AggregateResult.from_dict(value)
        return value

    def store(self, fingerprint: AnalysisFingerprint, result: AggregateResult) -> None:
        """Store a result; a later store for the same fingerprint replaces it"""
        value = result.to_dict() if self._serialize else result
        self.backend.set(fingerprint.key, value)

    def invalidate(self, fingerprint: AnalysisFingerprint) -> bool:
        return self.backend.delete(fingerprint.key)

    def clear(self) -> int:
        return self.backend.clear()

    def stats(self) -> CacheStats:
        return self.backend.stats()
