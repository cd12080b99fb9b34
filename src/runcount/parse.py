"""parse.py - Input lines to Records.

Line format: `<pattern> <groups>`, e.g. `???.### 1,1,3`.
Any malformed line aborts the whole batch (no partial results).
"""
from __future__ import annotations
from pathlib import Path
from typing import List, Optional, Union
from .config import FIELD_SEPARATOR, GROUP_SEPARATOR
from .errors import ParseError
from .types import Cell, Record


def parse_record(line: str, line_no: Optional[int] = None) -> Record:
    """Parse one `<pattern> <groups>` line.

    Args:
        line: Raw line (a trailing newline is ignored; no other whitespace is)
        line_no: Optional 1-based line number for error messages

    Returns:
        Parsed Record

    Raises:
        ParseError: Missing separator, unknown pattern character,
            non-numeric or non-positive group
    """
    text = line.rstrip("\r\n")
    pattern, sep, groups_text = text.partition(FIELD_SEPARATOR)
    if not sep:
        raise ParseError("expected '<pattern> <groups>' separated by a space", line, line_no)

    cells = []
    for pos, ch in enumerate(pattern):
        try:
            cells.append(Cell(ch))
        except ValueError:
            raise ParseError(f"unknown pattern character {ch!r} at column {pos + 1}", line, line_no) from None

    groups = []
    for token in groups_text.split(GROUP_SEPARATOR):
        if not (token.isascii() and token.isdigit()):
            raise ParseError(f"group {token!r} is not a non-negative integer", line, line_no)
        value = int(token)
        if value <= 0:
            raise ParseError(f"group length must be positive, got {value}", line, line_no)
        groups.append(value)

    return Record(tuple(cells), tuple(groups))


def parse_records(text: str) -> List[Record]:
    """Parse a batch, one record per non-blank line.

    Raises:
        ParseError: On the first malformed line
    """
    records = []
    for line_no, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        records.append(parse_record(line, line_no=line_no))
    return records


def load_records(path: Union[str, Path]) -> List[Record]:
    """Read and parse an input file."""
    with Path(path).open("r", encoding="utf-8") as f:
        return parse_records(f.read())
