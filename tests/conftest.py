"""Shared fixtures: the literal scenarios and a src/ import path."""
from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from runcount.parse import parse_record  # noqa: E402

# (line, count, count unfolded x5)
SCENARIOS = [
    ("???.### 1,1,3", 1, 1),
    (".??..??...?##. 1,1,3", 4, 16384),
    ("?#?#?#?#?#?#?#? 1,3,1,6", 1, 1),
    ("????.#...#... 4,1,1", 1, 16),
    ("????.######..#####. 1,6,5", 4, 2500),
    ("?###???????? 3,2,1", 10, 506250),
]

SCENARIO_LINES = [line for line, _, _ in SCENARIOS]


@pytest.fixture
def scenario_records():
    return [parse_record(line) for line in SCENARIO_LINES]


@pytest.fixture
def scenario_file(tmp_path: Path) -> Path:
    path = tmp_path / "input.txt"
    path.write_text("\n".join(SCENARIO_LINES) + "\n", encoding="utf-8")
    return path
