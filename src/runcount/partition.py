"""partition.py - Subgroup split and group-to-subgroup arrangements.

INACTIVE cells split a record into independent subgroups. Every valid
completion assigns a contiguous, order-preserving slice of the groups to
each subgroup, so a record's count is the sum, over all such
assignments, of the product of the per-subgroup counts.

Used as an independent cross-check of the memoized solver and to factor
large unfolded records into small independent pieces.
"""
from __future__ import annotations
from typing import Iterator, List, Sequence, Tuple
from scipy.special import comb
from .solver import count_arrangements
from .types import Cell, Record

Partition = Tuple[Record, ...]


def subgroups(record: Record) -> List[Tuple[Cell, ...]]:
    """Maximal non-empty runs of non-INACTIVE cells, left to right."""
    result = []
    current: List[Cell] = []
    for cell in record.cells:
        if cell is Cell.INACTIVE:
            if current:
                result.append(tuple(current))
                current = []
        else:
            current.append(cell)
    if current:
        result.append(tuple(current))
    return result


def iter_potentials(record: Record) -> Iterator[Partition]:
    """Yield every valid assignment of group slices to subgroups.

    Each partition is a tuple of sub-Records, one per subgroup that was
    visited before the groups ran out. Trailing subgroups that receive no
    groups are omitted; they hold no ACTIVE cell and resolve one way only.
    """
    yield from _arrangements((), subgroups(record), record.groups)


def potentials(record: Record) -> List[Partition]:
    """All partitions of `record`, in enumeration order."""
    return list(iter_potentials(record))


def _arrangements(
    prefix: Partition,
    submaps: Sequence[Tuple[Cell, ...]],
    groups: Tuple[int, ...],
) -> Iterator[Partition]:
    if not submaps or not groups:
        if groups:
            return
        if any(Cell.ACTIVE in sm for sm in submaps):
            return
        yield prefix
        return

    head = submaps[0]
    known_active = sum(1 for cell in head if cell is Cell.ACTIVE)
    capacity = len(head)

    taken_total = 0
    for taken in range(len(groups) + 1):
        if taken > 0:
            taken_total += groups[taken - 1]
        space_required = taken_total + taken - 1 if taken else 0
        # Adding groups only grows the requirement
        if space_required > capacity:
            break
        if known_active > taken_total:
            continue
        yield from _arrangements(
            prefix + (Record(head, groups[:taken]),),
            submaps[1:],
            groups[taken:],
        )


def free_placements(length: int, groups: Sequence[int]) -> int:
    """Ways to place `groups` in `length` all-UNKNOWN cells.

    Choosing positions for k runs with total S among L cells is
    C(L - S + 1, k).
    """
    if not groups:
        return 1
    slack = length - sum(groups) + 1
    if slack < len(groups):
        return 0
    return int(comb(slack, len(groups), exact=True))


def subrecord_count(record: Record) -> int:
    """Count one subgroup, using the closed form when it is all UNKNOWN."""
    if all(cell is Cell.UNKNOWN for cell in record.cells):
        return free_placements(len(record.cells), record.groups)
    return count_arrangements(record)


def partition_product(partition: Partition) -> int:
    product = 1
    for sub in partition:
        product *= subrecord_count(sub)
        if product == 0:
            break
    return product


def count_by_partition(record: Record) -> int:
    """Sum over partitions of the product of subgroup counts.

    Equals count_arrangements(record).
    """
    return sum(partition_product(p) for p in iter_potentials(record))
