from __future__ import annotations

from rich.console import Console

from binrecord.codec import get_layout
from binrecord.domain.models import Record
from binrecord.reporter import print_layout, print_record, print_walkthrough
from binrecord.walkthrough import StepOutcome


def _console() -> Console:
    return Console(record=True, width=160)


def test_print_record_shows_fields():
    console = _console()

    print_record(Record(id=101, name="Alice Smith", gpa=3.85), title="Original", console=console)

    text = console.export_text()
    assert "Original" in text
    assert "101" in text
    assert "Alice Smith" in text
    assert "3.85" in text


def test_print_record_escapes_nul_bytes():
    console = _console()

    print_record(Record(id=1, name="a\x00b", gpa=0.0), console=console)

    assert "'a\\x00b'" in console.export_text()


def test_print_record_escapes_undecodable_bytes():
    console = _console()
    name = b"\xff\xfeok".decode("utf-8", "surrogateescape")

    print_record(Record(id=1, name=name, gpa=0.0), console=console)

    assert "\\xff\\xfeok" in console.export_text()


def test_print_layout_lists_properties():
    console = _console()

    print_layout(get_layout("network").describe(), console=console)

    text = console.export_text()
    assert "Layout: network" in text
    assert "byte_order" in text
    assert "big" in text


def test_print_walkthrough_rows_and_contents():
    console = _console()
    outcomes = [
        StepOutcome(step="read_file", status="ok", detail="2 lines", data={"lines": ["one", "[two]"]}),
        StepOutcome(step="rename", status="skipped", detail="nothing to rename", data={}),
        StepOutcome(step="remove_file", status="failed", detail="permission denied", data={}),
    ]

    print_walkthrough(outcomes, console=console)

    text = console.export_text()
    assert "read_file" in text
    assert "skipped" in text
    assert "permission denied" in text
    assert "[two]" in text
