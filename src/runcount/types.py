"""types.py - Canonical cell and record types.

Defines the immutable values used throughout the counter:
- Cell: tri-state cell (active, inactive, unknown)
- Record: cell sequence plus required run lengths
- unfold: replication of a record with unknown separators
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Tuple
from .config import ACTIVE_CHAR, INACTIVE_CHAR, UNKNOWN_CHAR, GROUP_SEPARATOR


class Cell(Enum):
    """Tri-state cell; the value is its input character."""

    ACTIVE = ACTIVE_CHAR
    INACTIVE = INACTIVE_CHAR
    UNKNOWN = UNKNOWN_CHAR

    def __repr__(self) -> str:
        return f"Cell.{self.name}"


def cells_from_pattern(pattern: str) -> Tuple[Cell, ...]:
    """Convert a pattern string to cells.

    Raises:
        ValueError: On a character outside the alphabet
    """
    return tuple(Cell(ch) for ch in pattern)


def compute_runs(cells: Iterable[Cell]) -> Tuple[int, ...]:
    """Lengths of maximal ACTIVE runs, left to right.

    UNKNOWN cells break runs the same way INACTIVE cells do.
    """
    runs = []
    current = 0
    for cell in cells:
        if cell is Cell.ACTIVE:
            current += 1
        elif current > 0:
            runs.append(current)
            current = 0
    if current > 0:
        runs.append(current)
    return tuple(runs)


@dataclass(frozen=True)
class Record:
    """One row: cells to resolve and the run lengths they must produce.

    Attributes:
        cells: Ordered cells
        groups: Required maximal ACTIVE run lengths, in order (all positive)
    """

    cells: Tuple[Cell, ...]
    groups: Tuple[int, ...]

    def __post_init__(self):
        # Accept lists from callers, store tuples so records hash
        if not isinstance(self.cells, tuple):
            object.__setattr__(self, "cells", tuple(self.cells))
        if not isinstance(self.groups, tuple):
            object.__setattr__(self, "groups", tuple(self.groups))
        for g in self.groups:
            if g <= 0:
                raise ValueError(f"Group lengths must be positive, got {self.groups}")

    @classmethod
    def from_pattern(cls, pattern: str, groups: Iterable[int]) -> "Record":
        return cls(cells_from_pattern(pattern), tuple(groups))

    @property
    def pattern(self) -> str:
        """Cells as an input-alphabet string."""
        return "".join(cell.value for cell in self.cells)

    def __str__(self) -> str:
        return f"{self.pattern} {GROUP_SEPARATOR.join(map(str, self.groups))}"

    @property
    def unknown_count(self) -> int:
        return sum(1 for cell in self.cells if cell is Cell.UNKNOWN)

    @property
    def active_count(self) -> int:
        return sum(1 for cell in self.cells if cell is Cell.ACTIVE)

    @property
    def missing_active(self) -> int:
        """ACTIVE cells still needed among the unknowns (may be negative)."""
        return sum(self.groups) - self.active_count

    @property
    def is_resolved(self) -> bool:
        return Cell.UNKNOWN not in self.cells

    def runs(self) -> Tuple[int, ...]:
        """Actual maximal run lengths of the cells as they stand."""
        return compute_runs(self.cells)

    def matches(self) -> bool:
        """True if fully resolved and the runs equal the groups exactly."""
        return self.is_resolved and self.runs() == self.groups

    def with_unknowns(self, replacements: Iterable[Cell]) -> "Record":
        """Fill UNKNOWN cells left to right; surplus unknowns stay UNKNOWN."""
        it = iter(replacements)
        new_cells = []
        for cell in self.cells:
            if cell is Cell.UNKNOWN:
                new_cells.append(next(it, Cell.UNKNOWN))
            else:
                new_cells.append(cell)
        return Record(tuple(new_cells), self.groups)

    def with_first_unknown(self, value: Cell) -> "Record":
        """Replace the leftmost UNKNOWN cell with `value`.

        Raises:
            ValueError: If no UNKNOWN cell remains
        """
        idx = self.cells.index(Cell.UNKNOWN)
        return Record(self.cells[:idx] + (value,) + self.cells[idx + 1:], self.groups)


def unfold(record: Record, factor: int) -> Record:
    """Replicate a record `factor` times.

    Cells are joined by a single UNKNOWN separator; groups are repeated.

    Raises:
        ValueError: If factor < 1
    """
    if factor < 1:
        raise ValueError(f"Unfold factor must be >= 1, got {factor}")
    cells = list(record.cells)
    for _ in range(1, factor):
        cells.append(Cell.UNKNOWN)
        cells.extend(record.cells)
    return Record(tuple(cells), record.groups * factor)
