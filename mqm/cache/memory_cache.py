"""
Memory Cache

In-process LRU store for analysis results.
"""

import threading
from collections import OrderedDict
from typing import Any, Optional

from config.logging_config import get_logger

from .base import CacheInterface, CacheStats

logger = get_logger(__name__)


class LRUCache(CacheInterface):
    """
    Thread-safe LRU (Least Recently Used) cache.

    Values are kept as given (no copy, no serialization), so a hit returns
    the very object that was stored. Once max_size is reached the least
    recently read or written entry is dropped.
    """

    def __init__(self, max_size: int = 1000):
        if max_size < 1:
            raise ValueError(f"max_size must be >= 1, got {max_size}")
        self.max_size = max_size
        self._entries: "OrderedDict[str, Any]" = OrderedDict()
        self._lock = threading.RLock()
        self._stats = CacheStats(max_size=max_size)

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            if key not in self._entries:
                self._stats.misses += 1
                return None

            self._entries.move_to_end(key)
            self._stats.hits += 1
            return self._entries[key]

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            if key in self._entries:
                self._entries.move_to_end(key)
            self._entries[key] = value
            self._stats.stores += 1

            while len(self._entries) > self.max_size:
                evicted, _ = self._entries.popitem(last=False)
                self._stats.evictions += 1
                logger.debug(f"Evicted cache entry: {evicted[:12]}")

            self._stats.size = len(self._entries)

    def delete(self, key: str) -> bool:
        with self._lock:
            if key not in self._entries:
                return False
            del self._entries[key]
            self._stats.size = len(self._entries)
            return True

    def clear(self) -> int:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._stats.size = 0
            return count

    def stats(self) -> CacheStats:
        with self._lock:
            self._stats.size = len(self._entries)
            return self._stats

    def __contains__(self, key: str) -> bool:
        with self._lock:
            return key in self._entries

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
