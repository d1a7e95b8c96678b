"""
File Cache

Persistent JSON store: one file per key, survives restarts. Values must be
JSON-serializable (AnalysisCache stores AggregateResult.to_dict()).
"""

import json
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Optional, Union

from config.logging_config import get_logger

from .base import CacheInterface, CacheStats

logger = get_logger(__name__)


class FileCache(CacheInterface):
    """
    Directory-backed cache.

    Files are laid out as <cache_dir>/<key[:2]>/<key>.json. With max_entries
    set, the oldest files (by modification time) are removed past the limit.
    """

    def __init__(self, cache_dir: Union[str, Path] = "data/cache/analysis", max_entries: int = 0):
        self.cache_dir = Path(cache_dir)
        self.cache_dir.mkdir(parents=True, exist_ok=True)
        self.max_entries = max_entries
        self._lock = threading.RLock()
        self._stats = CacheStats(max_size=max_entries, size=self._count())

    def _path(self, key: str) -> Path:
        safe_key = "".join(c if c.isalnum() else "_" for c in key)
        return self.cache_dir / safe_key[:2] / f"{safe_key}.json"

    def _files(self):
        return self.cache_dir.glob("*/*.json")

    def _count(self) -> int:
        return sum(1 for _ in self._files())

    def get(self, key: str) -> Optional[Any]:
        with self._lock:
            path = self._path(key)
            if not path.exists():
                self._stats.misses += 1
                return None

            try:
                with open(path, 'r', encoding='utf-8') as f:
                    value = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Unreadable cache file {path.name}, treating as miss: {e}")
                self._stats.misses += 1
                return None

            self._stats.hits += 1
            return value

    def set(self, key: str, value: Any) -> None:
        with self._lock:
            path = self._path(key)
            path.parent.mkdir(parents=True, exist_ok=True)

            # Write to a temp file first so readers never see half a document
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
            try:
                with os.fdopen(fd, 'w', encoding='utf-8') as f:
                    json.dump(value, f, ensure_ascii=False)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise

            self._stats.stores += 1
            self._enforce_limit()
            self._stats.size = self._count()

    def delete(self, key: str) -> bool:
        with self._lock:
            path = self._path(key)
            if not path.exists():
                return False
            path.unlink()
            self._stats.size = self._count()
            return True

    def clear(self) -> int:
        with self._lock:
            count = 0
            for path in list(self._files()):
                path.unlink()
                count += 1
            self._stats.size = 0
            return count

    def stats(self) -> CacheStats:
        with self._lock:
            self._stats.size = self._count()
            return self._stats

    def _enforce_limit(self):
        """Remove oldest files while over max_entries"""
        if not self.max_entries:
            return

        files = sorted(self._files(), key=lambda p: p.stat().st_mtime)
        while len(files) > self.max_entries:
            oldest = files.pop(0)
            oldest.unlink()
            self._stats.evictions += 1
            logger.debug(f"Evicted cache file: {oldest.name}")
