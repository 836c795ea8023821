from __future__ import annotations

from typing import Any, Dict, List, Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from binrecord.domain.models import Record
from binrecord.walkthrough import StepOutcome

_STATUS_STYLE = {"ok": "green", "skipped": "yellow", "failed": "bold red"}


def _display_name(name: str) -> str:
    """
    Make a decoded name printable.

    Raw bytes smuggled in through surrogateescape are shown as `\\xNN`
    escapes; names containing NUL are shown as their repr.
    """
    if "\x00" in name:
        return repr(name)
    return name.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


def print_record(record: Record, title: str = "Record", console: Optional[Console] = None) -> None:
    """Render a single record as a two-column table."""
    console = console or Console()
    table = Table(title=escape(title), box=box.ROUNDED, show_header=False)
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="magenta")
    table.add_row("ID", str(record.id))
    table.add_row("Name", escape(_display_name(record.name)))
    table.add_row("GPA", f"{record.gpa}")
    console.print(table)


def print_layout(info: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Render a layout description (see `Layout.describe`)."""
    console = console or Console()
    table = Table(title=f"Layout: {info['layout']}", box=box.ROUNDED, show_header=False)
    table.add_column("Property", style="cyan", no_wrap=True)
    table.add_column("Value", justify="right", style="green")
    for key, value in info.items():
        if key != "layout":
            table.add_row(key, str(value))
    console.print(table)


def print_walkthrough(outcomes: List[StepOutcome], console: Optional[Console] = None) -> None:
    """Render filesystem walkthrough outcomes, one row per step."""
    console = console or Console()
    table = Table(title="Filesystem Walkthrough", box=box.ROUNDED)
    table.add_column("#", justify="right", style="dim")
    table.add_column("Step", style="cyan", no_wrap=True)
    table.add_column("Status")
    table.add_column("Detail")

    for number, outcome in enumerate(outcomes, start=1):
        status = outcome.get("status", "failed")
        style = _STATUS_STYLE.get(status, "white")
        table.add_row(
            str(number),
            outcome.get("step", "?"),
            f"[{style}]{status}[/{style}]",
            escape(outcome.get("detail", "")),
        )
    console.print(table)

    for outcome in outcomes:
        lines = outcome.get("data", {}).get("lines")
        if lines:
            console.print("[bold]File contents:[/bold]")
            for line in lines:
                console.print(f"  {line}", markup=False)
        entries = outcome.get("data", {}).get("entries")
        if entries:
            console.print("[bold]Directory entries:[/bold]")
            for entry in entries:
                console.print(f"  {entry['kind'].capitalize()}: {entry['name']}", markup=False)


def print_results(results: List[Dict[str, Any]], console: Optional[Console] = None) -> None:
    """
    Render benchmark results as a rich table.

    Handles both single-run results and aggregated multi-run results.
    """
    console = console or Console()

    if not results:
        console.print("[yellow]No results to display.[/yellow]")
        return

    is_aggregated = any(isinstance(r.get("runs"), int) and r["runs"] > 1 for r in results)

    table = Table(
        title="Record Codec Benchmark",
        box=box.ROUNDED,
        caption="Sorted by Throughput (descending)",
    )
    table.add_column("Layout", style="cyan", no_wrap=True)
    table.add_column("Records", justify="right", style="magenta")
    table.add_column("Bytes", justify="right", style="magenta")
    if is_aggregated:
        table.add_column("Runs", justify="right", style="blue")
    table.add_column("Encode (s)", justify="right", style="green")
    table.add_column("Decode (s)", justify="right", style="green")
    table.add_column("Throughput (rec/s)", justify="right", style="bold green")
    table.add_column("Peak Memory (MB)", justify="right", style="yellow")
    table.add_column("Peak Alloc (MB)", justify="right", style="yellow")
    table.add_column("Mismatches", justify="right", style="red")

    def _median(value: Any) -> float:
        if isinstance(value, dict):
            return value.get("median", 0.0)
        return value or 0.0

    def get_sort_key(r: Dict[str, Any]) -> float:
        return _median(r.get("throughput_records_per_sec"))

    for res in sorted(results, key=get_sort_key, reverse=True):
        if "error" in res:
            row = [res.get("layout", "Unknown"), "-", "-"]
            if is_aggregated:
                row.append("-")
            row += ["-", "-", f"[red]{escape(res['error'])}[/red]", "-", "-", "-"]
            table.add_row(*row)
            continue

        mem_bytes = _median(res.get("peak_rss_bytes"))
        traced = res.get("peak_traced_bytes")
        row = [
            res.get("layout", "Unknown"),
            f"{res.get('records', 0):,}",
            f"{res.get('bytes', 0):,}",
        ]
        if is_aggregated:
            row.append(str(res.get("runs", 1)))
        row += [
            f"{_median(res.get('encode_seconds')):.4f}",
            f"{_median(res.get('decode_seconds')):.4f}",
            f"{get_sort_key(res):,.2f}",
            f"{mem_bytes / (1024 * 1024):.2f}",
            f"{_median(traced) / (1024 * 1024):.2f}" if traced else "-",
            str(res.get("mismatches", 0)),
        ]
        table.add_row(*row)

    console.print(table)


__all__ = ["print_layout", "print_record", "print_results", "print_walkthrough"]
