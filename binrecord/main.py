from __future__ import annotations

import math
import sys
from pathlib import Path
from typing import NoReturn, Optional

import typer

from binrecord.benchmark import run_benchmarks
from binrecord.codec import CodecError, RecordCodec, available_layouts, get_layout
from binrecord.config import get_settings
from binrecord.domain.models import Record
from binrecord.infrastructure.storage import default_codec, load_record, save_record
from binrecord.reporter import print_layout, print_record, print_results, print_walkthrough
from binrecord.utils.logging import configure_logging, get_logger
from binrecord.walkthrough import run_filesystem_walkthrough

app = typer.Typer(help="Binary record codec toolkit.")
log = get_logger(__name__)


def _codec(layout: Optional[str]) -> RecordCodec:
    if layout:
        return RecordCodec(get_layout(layout))
    return default_codec()


def _fail(exc: Exception) -> NoReturn:
    log.debug("Command failed", exc_info=exc)
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


def _same_record(a: Record, b: Record) -> bool:
    if a.id != b.id or a.name != b.name:
        return False
    if math.isnan(a.gpa) and math.isnan(b.gpa):
        return True
    return a.gpa == b.gpa


@app.callback()
def _setup(
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Override LOG_LEVEL for this invocation."
    ),
) -> None:
    settings = get_settings()
    configure_logging(level=log_level or settings.log_level, json_logs=settings.log_json)


@app.command()
def info(
    layout: Optional[str] = typer.Option(None, "--layout", "-l", help="Layout preset to describe."),
) -> None:
    """
    Show effective configuration and codec layout.
    """
    settings = get_settings()
    try:
        codec = _codec(layout)
    except CodecError as exc:
        _fail(exc)
    typer.echo(
        f"layout={codec.layout.name} record_path={settings.record_path} "
        f"results_dir={settings.results_dir} available={', '.join(available_layouts())}"
    )
    print_layout(codec.layout.describe())


@app.command()
def write(
    record_id: int = typer.Option(..., "--id", help="Record id."),
    name: str = typer.Option("", "--name", "-n", help="Record name."),
    gpa: float = typer.Option(0.0, "--gpa", "-g", help="Grade point average."),
    out: Optional[Path] = typer.Option(None, "--out", "-o", help="Output file (default from settings)."),
    layout: Optional[str] = typer.Option(None, "--layout", "-l", help="Layout preset."),
) -> None:
    """
    Encode one record to a binary file.
    """
    target = out or get_settings().record_path
    record = Record(id=record_id, name=name, gpa=gpa)
    try:
        codec = _codec(layout)
        target.parent.mkdir(parents=True, exist_ok=True)
        written = save_record(target, record, codec)
    except (CodecError, OSError) as exc:
        _fail(exc)
    typer.echo(f"Wrote {written} bytes to {target} (layout={codec.layout.name}).")


@app.command()
def read(
    path: Optional[Path] = typer.Argument(None, help="Record file (default from settings)."),
    layout: Optional[str] = typer.Option(None, "--layout", "-l", help="Layout preset."),
) -> None:
    """
    Decode one record from a binary file and print it.
    """
    source = path or get_settings().record_path
    try:
        record = load_record(source, _codec(layout))
    except (CodecError, OSError) as exc:
        _fail(exc)
    print_record(record, title=str(source))


@app.command()
def demo(
    path: Optional[Path] = typer.Option(None, "--path", "-p", help="Scratch file (default from settings)."),
    layout: Optional[str] = typer.Option(None, "--layout", "-l", help="Layout preset."),
) -> None:
    """
    Save, reload and verify the sample record (101, "Alice Smith", 3.85).
    """
    target = path or get_settings().record_path
    original = Record(id=101, name="Alice Smith", gpa=3.85)
    print_record(original, title="Original")
    try:
        codec = _codec(layout)
        target.parent.mkdir(parents=True, exist_ok=True)
        save_record(target, original, codec)
        typer.echo(f"Record serialized to {target}")
        restored = load_record(target, codec)
    except (CodecError, OSError) as exc:
        _fail(exc)
    typer.echo(f"Record deserialized from {target}")
    print_record(restored, title="Deserialized")

    if not _same_record(original, restored):
        typer.echo("Verification failed! Data mismatch.", err=True)
        raise typer.Exit(code=1)
    typer.echo("Verification successful! Original and deserialized data match.")


@app.command("fs-demo")
def fs_demo(
    root: Optional[Path] = typer.Option(None, "--root", "-r", help="Scratch directory (default from settings)."),
) -> None:
    """
    Walk through exists/create/write/read/list/rename/remove on a scratch directory.
    """
    outcomes = run_filesystem_walkthrough(root or get_settings().demo_dir)
    print_walkthrough(outcomes)
    if any(o["status"] == "failed" for o in outcomes):
        raise typer.Exit(code=1)


@app.command()
def bench(
    layout: str = typer.Option(
        "all",
        "--layout",
        "--layouts",
        "-l",
        help="Layout to benchmark (e.g., portable, native, wide, network, all).",
    ),
    records: Optional[int] = typer.Option(None, "--records", "-n", min=1, help="Records per run."),
    runs: Optional[int] = typer.Option(None, "--runs", min=1, help="Measurement runs per layout."),
    persist: bool = typer.Option(True, "--persist/--no-persist", help="Write JSON results."),
    trace_allocations: bool = typer.Option(
        True,
        "--trace-allocations/--no-trace-allocations",
        help="Record peak Python allocations with tracemalloc (slows timings).",
    ),
) -> None:
    """
    Benchmark encode/decode throughput for one or all layouts.
    """
    if layout == "list":
        typer.echo("Available layouts: " + ", ".join(available_layouts()))
        return

    names = ["all"] if layout == "all" else [layout]
    try:
        results = run_benchmarks(
            layout_names=names,
            records=records,
            runs=runs,
            persist=persist,
            trace_allocations=trace_allocations,
        )
    except (CodecError, OSError) as exc:
        _fail(exc)
    print_results(results)
    if any(r.get("error") or r.get("mismatches") for r in results):
        raise typer.Exit(code=1)


def main() -> None:
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)


if __name__ == "__main__":
    main()
