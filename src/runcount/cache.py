"""
Count cache - Per-call memo storage for the solver.

One CountCache belongs to exactly one top-level counting call and is
discarded with it. Records are immutable and the mapping is pure, so
entries never need invalidating.

Statistics (hits, misses, size) are kept for receipts.
"""

from typing import Dict, Optional
from .types import Record


class CountCache:
    """Record -> number of valid completions."""

    def __init__(self) -> None:
        self._entries: Dict[Record, int] = {}
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, record: Record) -> bool:
        return record in self._entries

    def lookup(self, record: Record) -> Optional[int]:
        """
        Return the cached count, or None on a miss.

        Args:
            record: Residual record

        Returns:
            Cached count or None
        """
        value = self._entries.get(record)
        if value is None:
            self.misses += 1
        else:
            self.hits += 1
        return value

    def store(self, record: Record, value: int) -> int:
        """Store and return `value`."""
        self._entries[record] = value
        return value

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> Dict[str, int]:
        """
        Get cache usage statistics.

        Returns:
            Dict with entries, hits, misses
        """
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
        }


def merge_stats(total: Dict[str, int], stats: Dict[str, int]) -> Dict[str, int]:
    """Accumulate one cache's stats into a running total (in place)."""
    for key, val in stats.items():
        total[key] = total.get(key, 0) + int(val)
    return total
