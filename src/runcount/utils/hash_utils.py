"""hash_utils.py - Byte-stable hashing for receipts.

Provides deterministic, cross-platform hashing for:
- Raw input text (exact bytes as read)
- Per-record count vectors (int64, byte-exact)
- JSON-serializable objects (canonical key order)

All hashes use SHA256 and are stable across runs and platforms.
"""
from __future__ import annotations
import hashlib
import json
from typing import Any, Sequence
import numpy as np


def sha256_bytes(b: bytes) -> str:
    """Compute SHA256 hex digest of bytes.

    Args:
        b: Input bytes

    Returns:
        Hex string (64 chars)
    """
    return hashlib.sha256(b).hexdigest()


def hash_text(text: str) -> str:
    """Hash input text as UTF-8 bytes."""
    return sha256_bytes(text.encode("utf-8"))


def hash_counts(counts: Sequence[int]) -> str:
    """Hash a per-record count vector.

    Counts that do not fit int64 are hashed through their canonical JSON
    form instead, so large totals never wrap.

    Args:
        counts: Non-negative integer counts, in record order

    Returns:
        SHA256 hex digest
    """
    if counts and max(counts) >= np.iinfo(np.int64).max:
        return hash_json_canonical([int(c) for c in counts])
    arr = np.asarray(counts, dtype=np.int64)
    # Little-endian C-order for a stable byte layout
    return sha256_bytes(arr.astype("<i8").tobytes(order="C"))


def hash_json_canonical(obj: Any) -> str:
    """Hash JSON-serializable object with canonical serialization.

    Args:
        obj: JSON-serializable object (dict, list, primitives)

    Returns:
        SHA256 hex digest of canonical JSON representation

    Notes:
        - Keys are sorted
        - No whitespace
        - UTF-8 encoding
    """
    json_str = json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False
    )
    return sha256_bytes(json_str.encode("utf-8"))
