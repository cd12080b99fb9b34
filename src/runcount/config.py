"""config.py - Version asserts and constants.

Enforces:
- Minimum library versions (Python 3.9+, numpy 1.22+, scipy 1.8+)
- Input alphabet, unfold factor and oracle bounds
"""
from __future__ import annotations
import re
import sys
import numpy as np


# ============================================================================
# Version requirements
# ============================================================================
REQUIRED_VERSIONS = {
    "python_major_minor": (3, 9),
    "numpy": (1, 22),  # minimum
    "scipy": (1, 8),  # minimum
}


def _version_tuple(version: str) -> tuple:
    parts = []
    for piece in version.split(".")[:2]:
        match = re.match(r"\d+", piece)
        parts.append(int(match.group()) if match else 0)
    return tuple(parts)


def _assert_versions() -> None:
    """Assert library versions meet the minimum requirements."""
    import scipy

    py_ver = sys.version_info
    req_py = REQUIRED_VERSIONS["python_major_minor"]
    if (py_ver.major, py_ver.minor) < req_py:
        raise RuntimeError(
            f"Python must be >= {req_py[0]}.{req_py[1]}, "
            f"got {py_ver.major}.{py_ver.minor}.{py_ver.micro}"
        )

    req_np = REQUIRED_VERSIONS["numpy"]
    if _version_tuple(np.__version__) < req_np:
        raise RuntimeError(
            f"numpy must be >= {req_np[0]}.{req_np[1]}, got {np.__version__}"
        )

    req_sp = REQUIRED_VERSIONS["scipy"]
    if _version_tuple(scipy.__version__) < req_sp:
        raise RuntimeError(
            f"scipy must be >= {req_sp[0]}.{req_sp[1]}, got {scipy.__version__}"
        )


_assert_versions()


# ============================================================================
# Input format
# ============================================================================

# Pattern alphabet
ACTIVE_CHAR = "#"
INACTIVE_CHAR = "."
UNKNOWN_CHAR = "?"

FIELD_SEPARATOR = " "  # between <pattern> and <groups>
GROUP_SEPARATOR = ","  # between group lengths

# Replication factor for the second phase
UNFOLD_FACTOR = 5


# ============================================================================
# Oracle bounds
# ============================================================================

# Enumeration is 2^unknowns; refuse above this
ORACLE_MAX_UNKNOWNS = 25

# Masks generated per numpy chunk
ORACLE_CHUNK = 1 << 16

# Bit masks fit int64 up to 62 unknowns
MASK_DTYPE = np.int64


# ============================================================================
# Harness
# ============================================================================
DEFAULT_WORKERS = 1
STRATEGIES = ("memo", "partition", "oracle")

# Strategy used to cross-check each primary strategy
CROSS_CHECK_PARTNER = {
    "memo": "partition",
    "partition": "memo",
    "oracle": "memo",
}
