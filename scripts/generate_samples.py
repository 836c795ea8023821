"""
Sample data generator for binrecord.

Writes deterministic pseudo-random records, one record per `.bin` file, into
an output directory. Useful for fixtures and for checking that files written
with one layout are (or are not) readable with another.
"""

from __future__ import annotations

import sys
import time
from pathlib import Path
from typing import List

import typer

from binrecord.benchmark import sample_records
from binrecord.codec import RecordCodec, get_layout
from binrecord.infrastructure.storage import save_record

app = typer.Typer(help="Generate sample record files (one record per file).")


def _write_samples(output_dir: Path, count: int, layout: str, seed: int) -> List[Path]:
    codec = RecordCodec(get_layout(layout))
    output_dir.mkdir(parents=True, exist_ok=True)
    width = max(len(str(count)), 4)
    paths: List[Path] = []
    for record in sample_records(count, seed=seed):
        path = output_dir / f"record-{record.id:0{width}d}.{layout}.bin"
        save_record(path, record, codec)
        paths.append(path)
    return paths


@app.command()
def main(
    count: int = typer.Option(
        100,
        "--count",
        "-c",
        help="Number of record files to generate.",
    ),
    output: Path = typer.Option(
        Path("data/samples"),
        "--output",
        "-o",
        help="Output directory.",
    ),
    layout: str = typer.Option(
        "portable",
        "--layout",
        "-l",
        help="Layout preset used to encode the files.",
    ),
    seed: int = typer.Option(
        42,
        "--seed",
        help="Deterministic RNG seed.",
    ),
) -> None:
    """
    Generate sample record files.
    """
    start = time.perf_counter()
    typer.echo(f"Generating {count:,} records -> {output} (layout={layout}, seed={seed})")
    paths = _write_samples(output, count=count, layout=layout, seed=seed)
    duration = time.perf_counter() - start
    typer.echo(f"Wrote {len(paths):,} files in {duration:.2f}s")


if __name__ == "__main__":
    try:
        app()
    except KeyboardInterrupt:
        typer.echo("Cancelled by user.", err=True)
        sys.exit(130)
