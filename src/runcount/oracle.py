"""oracle.py - Brute-force reference counter for small records.

Enumerates bit masks over the UNKNOWN positions (most significant bit =
leftmost unknown), keeps the masks whose popcount equals the number of
ACTIVE cells still missing, and checks each resolved candidate directly.

Exponential: refuses records with more than ORACLE_MAX_UNKNOWNS unknowns.
Only used to cross-check the other strategies.
"""
from __future__ import annotations
from typing import Iterator, Optional
import numpy as np
from .config import MASK_DTYPE, ORACLE_CHUNK, ORACLE_MAX_UNKNOWNS
from .errors import OracleBoundError
from .types import Cell, Record


def _popcount(masks: np.ndarray, width: int) -> np.ndarray:
    shifts = np.arange(width, dtype=MASK_DTYPE)
    bits = (masks[:, None] >> shifts[None, :]) & 1
    return bits.sum(axis=1)


def iter_candidate_masks(unknowns: int, missing: int, chunk: int = ORACLE_CHUNK) -> Iterator[np.ndarray]:
    """Yield chunks of masks in [0, 2^unknowns) with exactly `missing` bits set."""
    total = 1 << unknowns
    for start in range(0, total, chunk):
        masks = np.arange(start, min(start + chunk, total), dtype=MASK_DTYPE)
        keep = masks[_popcount(masks, unknowns) == missing]
        if keep.size:
            yield keep


def _assignment(mask: int, unknowns: int) -> list:
    return [
        Cell.ACTIVE if mask & (1 << i) else Cell.INACTIVE
        for i in range(unknowns - 1, -1, -1)
    ]


def iter_oracle_solutions(record: Record, max_unknowns: Optional[int] = None) -> Iterator[Record]:
    """Yield every fully resolved record that matches the groups.

    Raises:
        OracleBoundError: If the record has more than `max_unknowns` unknowns
    """
    if max_unknowns is None:
        max_unknowns = ORACLE_MAX_UNKNOWNS
    unknowns = record.unknown_count
    if unknowns > max_unknowns:
        raise OracleBoundError(
            f"oracle limited to {max_unknowns} unknown cells, record has {unknowns}: {record}"
        )

    missing = record.missing_active
    if missing < 0 or missing > unknowns:
        return

    for masks in iter_candidate_masks(unknowns, missing):
        for mask in masks.tolist():
            candidate = record.with_unknowns(_assignment(mask, unknowns))
            if candidate.matches():
                yield candidate


def oracle_count(record: Record, max_unknowns: Optional[int] = None) -> int:
    """Count valid completions by exhaustive enumeration."""
    return sum(1 for _ in iter_oracle_solutions(record, max_unknowns))
