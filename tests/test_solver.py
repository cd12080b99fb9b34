from __future__ import annotations

from math import comb

import pytest

from conftest import SCENARIOS
from runcount.cache import CountCache
from runcount.config import UNFOLD_FACTOR
from runcount.parse import parse_record
from runcount.solver import count_arrangements, count_records, count_with_stats, total_arrangements
from runcount.types import Record, unfold


@pytest.mark.parametrize("line, expected, _unfolded", SCENARIOS)
def test_scenarios(line: str, expected: int, _unfolded: int) -> None:
    assert count_arrangements(parse_record(line)) == expected


@pytest.mark.parametrize("line, _expected, unfolded", SCENARIOS)
def test_scenarios_unfolded(line: str, _expected: int, unfolded: int) -> None:
    assert count_arrangements(unfold(parse_record(line), UNFOLD_FACTOR)) == unfolded


def test_single_known_record() -> None:
    record = parse_record(".# 1")
    assert count_arrangements(record) == 1
    assert count_arrangements(unfold(record, 5)) == 1


def test_totals(scenario_records) -> None:
    assert total_arrangements(scenario_records) == 21
    assert total_arrangements(scenario_records, factor=5) == 525152
    assert count_records(scenario_records) == [1, 4, 1, 1, 4, 10]


@pytest.mark.parametrize(
    "line, expected",
    [
        ("#.#.### 1,1,3", 1),
        ("#.#.### 1,1,2", 0),
        ("#.#.### 1,1", 0),
        ("... 1", 0),
        ("... 1,1", 0),
        ("##.## 2,2", 1),
    ],
)
def test_fully_resolved_records(line: str, expected: int) -> None:
    assert count_arrangements(parse_record(line)) == expected


def test_empty_record() -> None:
    assert count_arrangements(Record((), ())) == 1
    assert count_arrangements(Record((), (1,))) == 0
    assert count_arrangements(Record.from_pattern("???", ())) == 1


@pytest.mark.parametrize(
    "line, expected",
    [
        ("???? 1", 4),
        ("????? 2,1", 3),
        ("??? 1,1", 1),
        ("?? 1,1", 0),
        ("?#? 2", 2),
        ("#?#?# 5", 1),
    ],
)
def test_small_records(line: str, expected: int) -> None:
    assert count_arrangements(parse_record(line)) == expected


@pytest.mark.parametrize("line, _expected, _unfolded", SCENARIOS)
def test_branch_order_does_not_matter(line: str, _expected: int, _unfolded: int) -> None:
    record = unfold(parse_record(line), 3)
    assert count_arrangements(record, active_first=True) == count_arrangements(record, active_first=False)


def test_repeated_calls_agree_and_reuse_cache() -> None:
    record = unfold(parse_record("?###???????? 3,2,1"), 2)
    cache = CountCache()
    first = count_arrangements(record, cache)
    entries = len(cache)
    assert record in cache
    hits_before = cache.hits
    second = count_arrangements(record, cache)
    assert first == second
    assert len(cache) == entries
    assert cache.hits == hits_before + 1
    assert count_arrangements(record) == first


def test_count_with_stats() -> None:
    value, stats = count_with_stats(unfold(parse_record("?###???????? 3,2,1"), 5))
    assert value == 506250
    assert stats["entries"] > 0
    assert stats["misses"] >= stats["entries"]


def test_unfold_one_is_identity_for_counts(scenario_records) -> None:
    for record in scenario_records:
        assert count_arrangements(unfold(record, 1)) == count_arrangements(record)


def test_large_counts_do_not_wrap() -> None:
    record = Record.from_pattern("?" * 200, (1,) * 20)
    # C(200 - 20 + 1, 20)
    assert count_arrangements(record) == comb(181, 20)
    assert count_arrangements(record) > 2 ** 63
