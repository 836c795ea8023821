"""
Codec benchmark: encode/decode throughput per layout, profiled and persisted.

Usage (example from CLI):
    from binrecord.benchmark import run_benchmarks

    results = run_benchmarks(layout_names=["portable", "native"], records=50_000)
    print(results)

Outputs are saved to `results/` by default:
- `results/latest.json` (last run)
- `results/run-<timestamp>.json` (timestamped archive)
"""

from __future__ import annotations

import json
import random
import statistics
import string
import time
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from binrecord.codec import RecordCodec, available_layouts, get_layout
from binrecord.codec.errors import CodecError
from binrecord.config import get_settings
from binrecord.domain.models import Record
from binrecord.utils.logging import get_logger
from binrecord.utils.profiler import profile_block

log = get_logger(__name__)

_NAME_ALPHABET = string.ascii_letters + " .-'"


def sample_records(count: int, seed: int = 42, max_name_length: int = 32) -> List[Record]:
    """Deterministic pseudo-random records for benchmarking and fixtures."""
    rng = random.Random(seed)
    records: List[Record] = []
    for i in range(count):
        name_length = rng.randint(0, max_name_length)
        records.append(
            Record(
                id=i + 1,
                name="".join(rng.choice(_NAME_ALPHABET) for _ in range(name_length)),
                gpa=round(rng.uniform(0.0, 4.0), 2),
            )
        )
    return records


def _round_float(value: float, decimals: int = 2) -> float:
    """Round a float to specified decimal places for human-readable output."""
    return round(value, decimals)


def _summary(values: List[float], decimals: int = 2) -> dict:
    return {
        "median": _round_float(statistics.median(values), decimals),
        "mean": _round_float(statistics.mean(values), decimals),
        "stddev": _round_float(statistics.stdev(values), decimals) if len(values) > 1 else 0.0,
        "min": _round_float(min(values), decimals),
        "max": _round_float(max(values), decimals),
    }


def _aggregate_runs(run_results: List[dict]) -> dict:
    """
    Aggregate multiple runs into a statistical summary.

    Returns median, mean, stddev, min and max for timing and throughput.
    """
    aggregated = {
        "encode_seconds": _summary([r["encode_seconds"] for r in run_results], decimals=4),
        "decode_seconds": _summary([r["decode_seconds"] for r in run_results], decimals=4),
        "throughput_records_per_sec": _summary(
            [r["throughput_records_per_sec"] for r in run_results]
        ),
        "records": run_results[0]["records"],
        "bytes": run_results[0]["bytes"],
        "mismatches": sum(r.get("mismatches", 0) for r in run_results),
    }

    peak_rss_values = [r["peak_rss_bytes"] for r in run_results if r.get("peak_rss_bytes")]
    if peak_rss_values:
        aggregated["peak_rss_bytes"] = {
            "median": int(statistics.median(peak_rss_values)),
            "min": min(peak_rss_values),
            "max": max(peak_rss_values),
        }

    traced_values = [r["peak_traced_bytes"] for r in run_results if r.get("peak_traced_bytes")]
    if traced_values:
        aggregated["peak_traced_bytes"] = {
            "median": int(statistics.median(traced_values)),
            "min": min(traced_values),
            "max": max(traced_values),
        }

    cpu_values = [r["cpu_percent"] for r in run_results if r.get("cpu_percent") is not None]
    if cpu_values:
        aggregated["cpu_percent"] = _summary(cpu_values, decimals=1)

    return aggregated


def _profiled_run(codec: RecordCodec, records: List[Record], trace_allocations: bool = True) -> dict:
    """Encode then decode `records` once, verifying every round trip."""
    name = codec.layout.name
    with profile_block(name, enable_tracemalloc=trace_allocations) as stats:
        try:
            start = time.perf_counter()
            blobs = [codec.encode(r) for r in records]
            encode_seconds = time.perf_counter() - start

            start = time.perf_counter()
            decoded = [codec.decode(b) for b in blobs]
            decode_seconds = time.perf_counter() - start
        except CodecError as exc:
            log.exception(f"[LAYOUT FAILED] {name}", extra={"layout": name})
            return {"records": 0, "bytes": 0, "error": str(exc)}

    mismatches = sum(1 for original, copy in zip(records, decoded) if original != copy)
    total_seconds = encode_seconds + decode_seconds
    return {
        "records": len(records),
        "bytes": sum(len(b) for b in blobs),
        "encode_seconds": _round_float(encode_seconds, 4),
        "decode_seconds": _round_float(decode_seconds, 4),
        "throughput_records_per_sec": (
            _round_float(len(records) / total_seconds) if total_seconds > 0 else 0.0
        ),
        "mismatches": mismatches,
        "peak_rss_bytes": stats.peak_rss_bytes,
        "peak_traced_bytes": stats.peak_traced_bytes,
        "cpu_percent": _round_float(stats.cpu_percent, 1) if stats.cpu_percent else None,
        "profile": {
            "label": stats.label,
            "duration_seconds": _round_float(stats.duration_seconds, 4),
        },
    }


def _persist_results(payload: dict, results_dir: Path) -> None:
    results_dir.mkdir(parents=True, exist_ok=True)
    latest_path = results_dir / "latest.json"
    timestamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    archive_path = results_dir / f"run-{timestamp}.json"

    for path in (latest_path, archive_path):
        with path.open("w", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, sort_keys=True)

    log.info("Results persisted", extra={"latest": str(latest_path), "archive": str(archive_path)})


def run_benchmarks(
    layout_names: Optional[Iterable[str]] = None,
    records: Optional[int] = None,
    runs: Optional[int] = None,
    results_dir: Path | str | None = None,
    persist: bool = True,
    seed: Optional[int] = None,
    trace_allocations: bool = True,
) -> List[dict]:
    """
    Benchmark one or more layouts and optionally persist the results.

    Parameters
    ----------
    layout_names : iterable[str] | None
        Layout presets to run. If None or ["all"], runs every preset.
    records : int | None
        Records per run. Defaults to settings.bench_records.
    runs : int | None
        Measurement runs per layout. Defaults to settings.bench_runs.
    results_dir : Path | str | None
        Directory for JSON artifacts. Defaults to settings.results_dir.
    persist : bool
        Whether to write results to disk.
    seed : int | None
        Seed for sample generation. Defaults to settings.bench_seed.
    trace_allocations : bool
        Record peak Python allocations (tracemalloc) per run.

    Returns
    -------
    List[dict]
        One result per layout; aggregated statistics when runs > 1.

    Raises
    ------
    ValueError
        If `records` or `runs` is below 1.
    """
    settings = get_settings()
    count = settings.bench_records if records is None else records
    run_count = settings.bench_runs if runs is None else runs
    if count < 1:
        raise ValueError(f"records must be at least 1, got {count}")
    if run_count < 1:
        raise ValueError(f"runs must be at least 1, got {run_count}")
    out_dir = Path(results_dir) if results_dir is not None else settings.results_dir
    samples = sample_records(count, seed=settings.bench_seed if seed is None else seed)

    names = list(layout_names) if layout_names is not None else ["all"]
    if len(names) == 1 and names[0] == "all":
        names = available_layouts()
    # Resolve up front so an unknown name fails before any work is done.
    codecs = [RecordCodec(get_layout(name)) for name in names]

    results: List[dict] = []
    for codec in codecs:
        name = codec.layout.name
        run_results: List[dict] = []
        for run_num in range(1, run_count + 1):
            log.info(
                f"[RUN {run_num}/{run_count}] {name}",
                extra={"layout": name, "run": run_num, "records": count},
            )
            result = _profiled_run(codec, samples, trace_allocations=trace_allocations)
            result["layout"] = name
            result["run"] = run_num
            run_results.append(result)

        failed = [r for r in run_results if "error" in r]
        if run_count > 1 and not failed:
            aggregated = _aggregate_runs(run_results)
            aggregated["layout"] = name
            aggregated["runs"] = run_count
            aggregated["individual_runs"] = run_results
            results.append(aggregated)
        else:
            results.extend(run_results)

    payload = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "records": count,
        "layouts": names,
        "results": results,
    }
    if persist:
        _persist_results(payload, out_dir)

    log.info(
        f"[BENCHMARK COMPLETE] {len(names)} layout(s)",
        extra={"layouts": names, "records": count, "runs": run_count},
    )
    return results


__all__ = ["run_benchmarks", "sample_records"]
