"""prefix.py - Resolved-prefix validation and stripping.

A record's resolved prefix is every cell before its first UNKNOWN.

- valid_prefix: can the resolved prefix still extend to a full match?
- strip_prefix: drop the resolved prefix and the groups it satisfied,
  leaving the residual record still to decide.

strip_prefix must only be called on records that pass valid_prefix.
"""
from __future__ import annotations
from .errors import InvariantViolation
from .types import Cell, Record


def valid_prefix(record: Record) -> bool:
    """Check the resolved prefix against the groups without resolving unknowns.

    Args:
        record: Record, possibly with UNKNOWN cells

    Returns:
        True if some completion of the unknowns may still match the groups
    """
    groups = record.groups
    next_group = 0
    current = 0

    for cell in record.cells:
        if cell is Cell.UNKNOWN:
            break
        if cell is Cell.ACTIVE:
            current += 1
            continue
        if current == 0:
            continue
        # Closed run must match the next group exactly
        if next_group >= len(groups) or groups[next_group] != current:
            return False
        next_group += 1
        current = 0

    if current == 0:
        return True
    # Open run may still grow
    return next_group < len(groups) and current <= groups[next_group]


def strip_prefix(record: Record) -> Record:
    """Produce the residual record after the resolved prefix.

    The residual cells start at the first UNKNOWN. If the prefix ends on
    an ACTIVE cell, one ACTIVE marker is kept in front and the leading
    group becomes the open run's remaining length plus one, so the
    residual still says "the run continues here".

    Args:
        record: Record whose prefix passed valid_prefix

    Returns:
        Residual Record (new object; input untouched)

    Raises:
        InvariantViolation: If the prefix is inconsistent with the groups
    """
    groups = record.groups
    cells = record.cells
    next_group = 0
    remaining = 0  # cells still owed to the open group
    prev = None
    cut = len(cells)

    for idx, cell in enumerate(cells):
        if cell is Cell.UNKNOWN:
            cut = idx
            break
        if cell is Cell.INACTIVE:
            if remaining > 0:
                raise InvariantViolation(f"run closed short of its group in {record}")
        else:
            if remaining == 0:
                if prev is Cell.ACTIVE:
                    raise InvariantViolation(f"run overflows its group in {record}")
                if next_group >= len(groups):
                    raise InvariantViolation(f"active run with no group left in {record}")
                remaining = groups[next_group]
                next_group += 1
            remaining -= 1
        prev = cell

    rest = cells[cut:]
    if prev is not Cell.ACTIVE:
        return Record(rest, groups[next_group:])
    return Record((Cell.ACTIVE,) + rest, (remaining + 1,) + groups[next_group:])
