from __future__ import annotations

import pytest

from runcount.types import Cell, Record, cells_from_pattern, compute_runs, unfold


def test_cells_from_pattern_and_back() -> None:
    cells = cells_from_pattern("#.?")
    assert cells == (Cell.ACTIVE, Cell.INACTIVE, Cell.UNKNOWN)
    record = Record(cells, (1,))
    assert record.pattern == "#.?"
    assert str(record) == "#.? 1"


def test_cells_from_pattern_rejects_unknown_char() -> None:
    with pytest.raises(ValueError):
        cells_from_pattern("#x")


def test_record_stores_tuples_and_hashes() -> None:
    a = Record([Cell.ACTIVE, Cell.UNKNOWN], [1])
    b = Record.from_pattern("#?", [1])
    assert a.cells == (Cell.ACTIVE, Cell.UNKNOWN)
    assert a.groups == (1,)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_record_rejects_non_positive_groups() -> None:
    with pytest.raises(ValueError):
        Record.from_pattern("#", (0,))


def test_runs_treat_unknown_as_break() -> None:
    assert compute_runs(cells_from_pattern("#.##.?###")) == (1, 2, 3)
    assert Record.from_pattern("##?#", (2, 1)).runs() == (2, 1)
    assert Record.from_pattern("...", ()).runs() == ()


def test_counts_and_missing_active() -> None:
    record = Record.from_pattern("?#?#.??", (3, 2))
    assert record.unknown_count == 4
    assert record.active_count == 2
    assert record.missing_active == 3
    assert not record.is_resolved
    assert Record.from_pattern("###", (1,)).missing_active == -2


def test_matches_requires_resolved_cells() -> None:
    assert Record.from_pattern("#.###", (1, 3)).matches()
    assert not Record.from_pattern("#.###", (1, 2)).matches()
    assert not Record.from_pattern("#.##?", (1, 2)).matches()


def test_with_first_unknown() -> None:
    record = Record.from_pattern("?#?", (3,))
    assert record.with_first_unknown(Cell.ACTIVE) == Record.from_pattern("##?", (3,))
    assert record.with_first_unknown(Cell.INACTIVE) == Record.from_pattern(".#?", (3,))
    # input untouched
    assert record.pattern == "?#?"
    with pytest.raises(ValueError):
        Record.from_pattern("#.", (1,)).with_first_unknown(Cell.ACTIVE)


def test_with_unknowns_leaves_surplus_unknown() -> None:
    record = Record.from_pattern("?.??", (1, 1))
    filled = record.with_unknowns([Cell.ACTIVE, Cell.INACTIVE])
    assert filled.pattern == "#..?"


def test_unfold_factor_one_is_identity() -> None:
    record = Record.from_pattern("???.###", (1, 1, 3))
    assert unfold(record, 1) == record


def test_unfold_joins_with_unknown_separator() -> None:
    assert str(unfold(Record.from_pattern(".#", (1,)), 5)) == ".#?.#?.#?.#?.# 1,1,1,1,1"
    record = unfold(Record.from_pattern("???.###", (1, 1, 3)), 5)
    assert record.pattern == "???.###????.###????.###????.###????.###"
    assert record.groups == (1, 1, 3) * 5


def test_unfold_rejects_zero_factor() -> None:
    with pytest.raises(ValueError):
        unfold(Record.from_pattern("#", (1,)), 0)
