"""solver.py - Memoized arrangement counter.

count_arrangements resolves the leftmost UNKNOWN both ways, prunes each
branch with valid_prefix, strips the resolved prefix and recurses on the
residual record. Residuals are cached per top-level call, so the work is
bounded by the number of distinct reachable residuals rather than
2^unknowns.

Each recursion level has strictly fewer UNKNOWN cells than its parent
(the substituted cell is gone and stripping never adds unknowns), so the
depth is at most the unknown count of the top-level record.
"""
from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Tuple
from .cache import CountCache
from .errors import InvariantViolation
from .prefix import strip_prefix, valid_prefix
from .types import Cell, Record, unfold


def count_arrangements(
    record: Record,
    cache: Optional[CountCache] = None,
    active_first: bool = True,
) -> int:
    """Count resolutions of the unknowns whose runs equal the groups.

    Args:
        record: Record to count
        cache: Memo cache owned by this call (a fresh one if None)
        active_first: Try ACTIVE before INACTIVE (result does not depend on it)

    Returns:
        Number of valid completions (Python int, unbounded)
    """
    if cache is None:
        cache = CountCache()
    order = (Cell.ACTIVE, Cell.INACTIVE) if active_first else (Cell.INACTIVE, Cell.ACTIVE)
    return _count(record, cache, order)


def _count(record: Record, cache: CountCache, order: Tuple[Cell, Cell]) -> int:
    cached = cache.lookup(record)
    if cached is not None:
        return cached

    if record.is_resolved:
        return cache.store(record, 1 if record.runs() == record.groups else 0)

    unknowns = record.unknown_count
    total = 0
    for value in order:
        candidate = record.with_first_unknown(value)
        if not valid_prefix(candidate):
            continue
        residual = strip_prefix(candidate)
        if residual.unknown_count >= unknowns:
            raise InvariantViolation(f"residual {residual} did not shrink from {record}")
        total += _count(residual, cache, order)

    return cache.store(record, total)


def count_with_stats(record: Record, active_first: bool = True) -> Tuple[int, Dict[str, int]]:
    """Count one record with a fresh cache and report the cache stats."""
    cache = CountCache()
    value = count_arrangements(record, cache, active_first=active_first)
    return value, cache.stats()


def count_records(records: Iterable[Record], factor: int = 1) -> List[int]:
    """Count each record (optionally unfolded), one fresh cache per record."""
    return [count_arrangements(unfold(r, factor)) for r in records]


def total_arrangements(records: Iterable[Record], factor: int = 1) -> int:
    """Sum of counts over all records."""
    return sum(count_records(records, factor))
