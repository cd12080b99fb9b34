"""errors.py - Exception taxonomy.

- ParseError: malformed input line (aborts the whole batch)
- InvariantViolation: engine contract broken by a caller (programming error)
- OracleBoundError: reference enumeration requested above its unknown bound
"""
from __future__ import annotations
from typing import Optional


class ParseError(ValueError):
    """Malformed `<pattern> <groups>` line.

    Attributes:
        line_no: 1-based line number within the batch (None for single lines)
        line: Offending raw line
    """

    def __init__(self, message: str, line: str = "", line_no: Optional[int] = None):
        self.line = line
        self.line_no = line_no
        if line_no is not None:
            message = f"line {line_no}: {message}"
        super().__init__(message)


class InvariantViolation(RuntimeError):
    """Engine contract violated (e.g. stripping a prefix that failed validation)."""


class OracleBoundError(ValueError):
    """Reference enumeration refused: too many unknown cells."""
