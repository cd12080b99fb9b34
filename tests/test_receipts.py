from __future__ import annotations

import json
from pathlib import Path

from runcount import receipts
from runcount.utils import hash_utils


def test_run_payload_hash_is_stable() -> None:
    a = receipts.make_run_payload("?# 1\n", 1, "memo", [1], cache_stats={"entries": 2})
    b = receipts.make_run_payload("?# 1\n", 1, "memo", [1], cache_stats={"entries": 2})
    assert a["hash"] == b["hash"]
    assert a["input_hash"] == hash_utils.hash_text("?# 1\n")
    assert a["total"] == "1"
    assert "numpy" in a["env"]["runtime"]

    c = receipts.make_run_payload("?# 1\n", 5, "memo", [1], cache_stats={"entries": 2})
    assert c["hash"] != a["hash"]


def test_hash_counts_handles_huge_values() -> None:
    small = hash_utils.hash_counts([1, 2, 3])
    assert small == hash_utils.hash_counts([1, 2, 3])
    assert small != hash_utils.hash_counts([3, 2, 1])
    huge = hash_utils.hash_counts([1, 2 ** 80])
    assert len(huge) == 64


def test_write_run_receipt(tmp_path: Path) -> None:
    payload = receipts.make_run_payload("", 1, "oracle", [])
    path = receipts.write_run_receipt("empty", payload, out_dir=str(tmp_path))
    text = path.read_text(encoding="utf-8")
    assert text.endswith("\n")
    assert json.loads(text)["records"] == 0
