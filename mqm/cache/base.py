"""
Cache Backend Interface

Storage contract used by AnalysisCache. Backends store plain values under
string keys; entries never expire on their own.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class CacheStats:
    """Hit/miss counters of one backend"""
    hits: int = 0
    misses: int = 0
    stores: int = 0
    evictions: int = 0
    size: int = 0
    max_size: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> Dict:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "stores": self.stores,
            "evictions": self.evictions,
            "hit_rate": f"{self.hit_rate:.1%}",
            "size": self.size,
            "max_size": self.max_size,
        }


class CacheInterface(ABC):
    """Key/value storage backend"""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """Stored value, or None on a miss"""
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one"""
        pass

    @abstractmethod
    def delete(self, key: str) -> bool:
        """Remove a key, True if it was present"""
        pass

    @abstractmethod
    def clear(self) -> int:
        """Remove everything, return the number of entries removed"""
        pass

    @abstractmethod
    def stats(self) -> CacheStats:
        pass

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None
