"""runcount - Run-length-constrained sequence reconstruction counter.

Counts the ways the unknown cells of a tri-state record can be resolved
so that its maximal active runs match a required list of lengths.

Architecture:
- Pure: Records are immutable; every transformation returns a new one
- Memoized: one cache per top-level count, never shared across records
- Cross-checked: partition engine and brute-force oracle agree with the solver
- Deterministic: single-threaded per record, results collected in input order

Modules:
- config: Version asserts, constants
- types: Cell, Record, unfold
- parse: `<pattern> <groups>` lines to Records
- prefix: resolved-prefix validation and stripping
- solver: memoized counter
- partition: subgroup split and group arrangements
- oracle: bitmask reference enumerator
- receipts: JSON run receipts
- harness: CLI runner
"""
from __future__ import annotations

# Version
__version__ = "0.1.0"

# Expose key types and functions at package level
from .types import Cell, Record, unfold
from .errors import ParseError, InvariantViolation, OracleBoundError
from .parse import parse_record, parse_records
from .prefix import valid_prefix, strip_prefix
from .solver import count_arrangements, total_arrangements
from .partition import potentials, count_by_partition
from .oracle import oracle_count
from . import config

__all__ = [
    "Cell",
    "Record",
    "unfold",
    "ParseError",
    "InvariantViolation",
    "OracleBoundError",
    "parse_record",
    "parse_records",
    "valid_prefix",
    "strip_prefix",
    "count_arrangements",
    "total_arrangements",
    "potentials",
    "count_by_partition",
    "oracle_count",
    "config",
]
