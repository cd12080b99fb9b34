"""receipts.py - Run receipts and progress files.

Receipts are JSON files written to <out_dir>/<run_id>.json. Each run
emits one receipt recording its inputs, per-record counts and totals,
so a re-run can be compared byte-for-byte.
"""
from __future__ import annotations
import json
import sys
from pathlib import Path
from typing import Any, Dict, Optional, Sequence
from . import config
from .utils import hash_utils


def _write_json(path: Path, payload: Dict[str, Any]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        json.dump(
            payload,
            f,
            sort_keys=True,
            ensure_ascii=False,
            indent=2,
        )
        f.write("\n")  # Trailing newline for Unix convention
    return path


def write_run_receipt(run_id: str, payload: Dict[str, Any], out_dir: str = "receipts") -> Path:
    """Write the receipt for one run.

    Args:
        run_id: Run identifier (file stem)
        payload: JSON-serializable receipt data
        out_dir: Output directory (default: 'receipts')

    Returns:
        Path to written receipt file

    Notes:
        - Creates output directory if needed
        - Writes with sorted keys, Unix newlines
        - Overwrites an existing receipt with the same run_id
    """
    return _write_json(Path(out_dir) / f"{run_id}.json", payload)


def make_env_payload() -> Dict[str, Any]:
    """Runtime versions and constants in effect for a run."""
    import numpy
    import scipy

    return {
        "runtime": {
            "python": f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}",
            "numpy": numpy.__version__,
            "scipy": scipy.__version__,
        },
        "constants": {
            "UNFOLD_FACTOR": config.UNFOLD_FACTOR,
            "ORACLE_MAX_UNKNOWNS": config.ORACLE_MAX_UNKNOWNS,
        },
    }


def make_run_payload(
    input_text: str,
    factor: int,
    strategy: str,
    counts: Sequence[int],
    cache_stats: Optional[Dict[str, int]] = None,
    cross_check: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Build the receipt payload for one run.

    Args:
        input_text: Raw input as read
        factor: Unfold factor applied to every record
        strategy: Counting strategy name
        counts: Per-record counts, in input order
        cache_stats: Summed memo cache stats (memo strategy only)
        cross_check: Cross-check summary, if one was run

    Returns:
        JSON-serializable dict; `hash` covers everything except the env block
    """
    body = {
        "input_hash": hash_utils.hash_text(input_text),
        "factor": factor,
        "strategy": strategy,
        "records": len(counts),
        # Strings keep arbitrarily large counts exact in JSON consumers
        "counts": [str(c) for c in counts],
        "counts_hash": hash_utils.hash_counts(counts),
        "total": str(sum(counts)),
    }
    if cache_stats is not None:
        body["cache"] = dict(cache_stats)
    if cross_check is not None:
        body["cross_check"] = cross_check
    payload = dict(body)
    payload["hash"] = hash_utils.hash_json_canonical(body)
    payload["env"] = make_env_payload()
    return payload


def write_run_progress(progress: Dict[str, Any], out_dir: str = "progress") -> Path:
    """Write run-level progress JSON.

    Args:
        progress: Progress dict with strategy, records_total, records_ok, metrics
        out_dir: Output directory (default: 'progress')

    Returns:
        Path to written progress file (progress_<strategy>.json)
    """
    return _write_json(Path(out_dir) / f"progress_{progress['strategy']}.json", progress)
