"""harness.py - CLI runner for the arrangement counter.

Reads `<pattern> <groups>` lines, optionally unfolds each record, counts
valid completions with the selected strategy and prints the total on
stdout. Progress and diagnostics go to stderr.

Usage:
    python -m runcount.harness input.txt
    python -m runcount.harness input.txt --phase 2 --workers 4
    python -m runcount.harness input.txt --unfold 3 --cross-check --strict

Flags:
    --unfold / --phase: Replication factor (phase 2 = UNFOLD_FACTOR)
    --strategy: memo (default), partition or oracle
    --workers: Process pool size (1 = in-process)
    --cross-check: Recount with a second strategy and compare
    --strict: Fail on first cross-check mismatch (default: report and continue)
"""
from __future__ import annotations
import argparse
import sys
from concurrent.futures import ProcessPoolExecutor
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple
from . import config
from . import receipts
from .cache import merge_stats
from .errors import OracleBoundError, ParseError
from .oracle import oracle_count
from .parse import parse_records
from .partition import count_by_partition
from .solver import count_with_stats
from .types import Record, unfold


# ============================================================================
# Metric keys per strategy (extend-only registry)
# ============================================================================
RUN_METRICS = {
    "memo": ["cross_check_ok", "count_nonzero", "cache_entries", "cache_hits"],
    "partition": ["cross_check_ok", "count_nonzero"],
    "oracle": ["cross_check_ok", "count_nonzero"],
}


def init_progress(strategy: str, factor: int) -> Dict[str, Any]:
    """Initialize progress tracking dict for a run.

    Args:
        strategy: Counting strategy name
        factor: Unfold factor

    Returns:
        Progress dict with strategy, records_total, records_ok, pre-initialized metrics
    """
    keys = RUN_METRICS.get(strategy, [])
    return {
        "strategy": strategy,
        "factor": factor,
        "records_total": 0,
        "records_ok": 0,
        "metrics": {k: {"ok": 0, "total": 0, "sum": 0} for k in keys},
    }


def acc_bool(progress: Dict[str, Any], key: str, ok: bool) -> None:
    """Accumulate boolean metric in progress dict.

    Notes:
        - Silently ignores unknown keys (forward compatibility)
        - Increments total, increments ok if True
    """
    if key not in progress["metrics"]:
        return
    m = progress["metrics"][key]
    m["total"] += 1
    m["ok"] += int(bool(ok))


def acc_sum(progress: Dict[str, Any], key: str, val: int) -> None:
    """Accumulate integer sum in progress dict (unknown keys ignored)."""
    if key not in progress["metrics"]:
        return
    progress["metrics"][key]["sum"] += int(val)


def read_input(source: str) -> str:
    """Read the whole input; '-' means stdin."""
    if source == "-":
        return sys.stdin.read()
    path = Path(source)
    if not path.exists():
        raise FileNotFoundError(f"Input not found: {path}")
    return path.read_text(encoding="utf-8")


def count_record(record: Record, factor: int, strategy: str) -> Tuple[int, Dict[str, int]]:
    """Count one (unfolded) record with the named strategy.

    Module-level so it can be shipped to pool workers.

    Returns:
        (count, cache stats); stats are empty for non-memo strategies
    """
    target = unfold(record, factor)
    if strategy == "memo":
        return count_with_stats(target)
    if strategy == "partition":
        return count_by_partition(target), {}
    if strategy == "oracle":
        return oracle_count(target), {}
    raise ValueError(f"Unknown strategy: {strategy}")


def run_counts(
    records: Sequence[Record],
    factor: int,
    strategy: str,
    workers: int = config.DEFAULT_WORKERS,
) -> List[Tuple[int, Dict[str, int]]]:
    """Count every record, in input order.

    Each record gets its own cache, so records are dispatched to the pool
    independently and collected by index.
    """
    if workers <= 1 or len(records) <= 1:
        return [count_record(r, factor, strategy) for r in records]

    with ProcessPoolExecutor(max_workers=workers) as pool:
        futures = [pool.submit(count_record, r, factor, strategy) for r in records]
        return [fut.result() for fut in futures]


def cross_check(
    records: Sequence[Record],
    counts: Sequence[int],
    factor: int,
    partner: str,
    workers: int,
    progress: Dict[str, Any],
    strict: bool = False,
) -> Dict[str, Any]:
    """Recount with `partner` and compare per record.

    Raises:
        RuntimeError: On the first mismatch when strict
    """
    print(f"[cross-check] Recounting {len(records)} records with '{partner}'", file=sys.stderr)
    other = [c for c, _ in run_counts(records, factor, partner, workers)]

    mismatches = []
    for idx, (record, mine, theirs) in enumerate(zip(records, counts, other)):
        ok = mine == theirs
        acc_bool(progress, "cross_check_ok", ok)
        if ok:
            continue
        msg = f"[cross-check] Record {idx + 1} ({record}): {mine} != {theirs}"
        if strict:
            raise RuntimeError(msg)
        print(msg, file=sys.stderr)
        mismatches.append(idx + 1)

    print(
        f"[cross-check] Complete: {len(records) - len(mismatches)}/{len(records)} agree",
        file=sys.stderr,
    )
    return {"partner": partner, "mismatches": mismatches}


def resolve_factor(unfold_factor: Optional[int], phase: Optional[int]) -> int:
    if unfold_factor is not None:
        return unfold_factor
    if phase == 2:
        return config.UNFOLD_FACTOR
    return 1


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="runcount",
        description="Count run-length-constrained completions of tri-state records",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Sum of counts, records as given
  python -m runcount.harness input.txt

  # Records unfolded x5 on 4 worker processes
  python -m runcount.harness input.txt --phase 2 --workers 4
        """,
    )
    parser.add_argument("input", help="Input file ('-' for stdin)")
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--unfold",
        type=int,
        default=None,
        help="Replication factor applied to every record (default: 1)",
    )
    group.add_argument(
        "--phase",
        type=int,
        choices=(1, 2),
        default=None,
        help=f"Phase 1 = factor 1, phase 2 = factor {config.UNFOLD_FACTOR}",
    )
    parser.add_argument(
        "--strategy",
        choices=config.STRATEGIES,
        default="memo",
        help="Counting strategy (default: memo)",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=config.DEFAULT_WORKERS,
        help="Worker processes, one record per task (default: 1)",
    )
    parser.add_argument(
        "--cross-check",
        action="store_true",
        help="Recount with a second strategy and compare per record",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="With --cross-check: fail on first mismatch (default: continue and report)",
    )
    parser.add_argument(
        "--receipt-dir",
        type=str,
        default=None,
        help="Write a JSON receipt for the run into this directory",
    )
    parser.add_argument(
        "--progress",
        action="store_true",
        default=False,
        help="Write progress JSON (default: disabled)",
    )
    parser.add_argument(
        "--no-progress",
        dest="progress",
        action="store_false",
        help="Disable progress JSON writing",
    )
    parser.add_argument(
        "--progress-dir",
        type=str,
        default="progress",
        help="Directory for progress JSON (default: progress/)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Print per-record counts to stderr",
    )
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point for harness."""
    parser = build_parser()
    args = parser.parse_args(argv)

    factor = resolve_factor(args.unfold, args.phase)
    if factor < 1:
        parser.error(f"--unfold must be >= 1, got {factor}")
    if args.workers < 1:
        parser.error(f"--workers must be >= 1, got {args.workers}")
    if args.strict and not args.cross_check:
        parser.error("--strict requires --cross-check")

    text = read_input(args.input)
    try:
        records = parse_records(text)
    except ParseError as e:
        print(f"[runcount] Parse error: {e}", file=sys.stderr)
        return 1

    print(
        f"[runcount] {len(records)} records, factor {factor}, strategy '{args.strategy}', "
        f"{args.workers} worker(s)",
        file=sys.stderr,
    )

    progress = init_progress(args.strategy, factor)
    try:
        results = run_counts(records, factor, args.strategy, args.workers)
    except OracleBoundError as e:
        print(f"[runcount] Oracle bound: {e}", file=sys.stderr)
        return 1
    counts = [c for c, _ in results]

    cache_stats: Optional[Dict[str, int]] = None
    if args.strategy == "memo":
        cache_stats = {}
        for _, stats in results:
            merge_stats(cache_stats, stats)
            acc_sum(progress, "cache_entries", stats.get("entries", 0))
            acc_sum(progress, "cache_hits", stats.get("hits", 0))

    for idx, (record, value) in enumerate(zip(records, counts)):
        progress["records_total"] += 1
        progress["records_ok"] += 1
        acc_bool(progress, "count_nonzero", value > 0)
        if args.verbose:
            print(f"[runcount] {idx + 1}: {record} -> {value}", file=sys.stderr)

    check_summary = None
    if args.cross_check:
        partner = config.CROSS_CHECK_PARTNER[args.strategy]
        try:
            check_summary = cross_check(
                records, counts, factor, partner, args.workers, progress, strict=args.strict
            )
        except OracleBoundError as e:
            print(f"[runcount] Oracle bound: {e}", file=sys.stderr)
            return 1
        except RuntimeError as e:
            print(str(e), file=sys.stderr)
            return 1

    total = sum(counts)
    if counts:
        print(
            f"[runcount] Complete: total {total}, max {max(counts)}, "
            f"zero-count records {counts.count(0)}",
            file=sys.stderr,
        )

    if args.receipt_dir:
        payload = receipts.make_run_payload(
            text, factor, args.strategy, counts, cache_stats=cache_stats, cross_check=check_summary
        )
        run_id = f"run_{args.strategy}_x{factor}_{payload['input_hash'][:12]}"
        path = receipts.write_run_receipt(run_id, payload, out_dir=args.receipt_dir)
        print(f"[runcount] Receipt written to {path}", file=sys.stderr)

    if args.progress:
        path = receipts.write_run_progress(progress, out_dir=args.progress_dir)
        print(f"[runcount] Progress written to {path}", file=sys.stderr)

    print(total)
    return 0


if __name__ == "__main__":
    sys.exit(main())
