"""
Filesystem walkthrough: a scripted tour of the `LocalFileSystem` operations.

Steps, in order:
1. check whether the demo file and directory exist
2. create the demo directory
3. append three lines to a text file inside it
4. read the lines back
5. list the directory
6. rename the file
7. remove the file, then remove the directory recursively

Each step reports its own failure and the walkthrough moves on, so a single
problem (e.g. a read-only directory) still produces a full report.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, TypedDict

from binrecord.infrastructure.filesystem import LocalFileSystem
from binrecord.utils.logging import get_logger

log = get_logger(__name__)

DEMO_FILENAME = "my_example_file.txt"
RENAMED_FILENAME = "renamed_example_file.txt"
DEMO_LINES = [
    "This is the first line.",
    "This is the second line.",
    "And a third line for good measure!",
]


class StepOutcome(TypedDict, total=False):
    """Result of one walkthrough step."""

    step: str
    status: str  # "ok", "skipped" or "failed"
    detail: str
    data: Dict[str, Any]


def _ok(step: str, detail: str, **data: Any) -> StepOutcome:
    return StepOutcome(step=step, status="ok", detail=detail, data=data)


def _skipped(step: str, detail: str) -> StepOutcome:
    return StepOutcome(step=step, status="skipped", detail=detail, data={})


def _failed(step: str, exc: Exception) -> StepOutcome:
    log.warning(f"[STEP FAILED] {step}", extra={"step": step, "error": str(exc)})
    return StepOutcome(step=step, status="failed", detail=str(exc), data={})


def run_filesystem_walkthrough(
    root: Path | str, fs: Optional[LocalFileSystem] = None
) -> List[StepOutcome]:
    """
    Run the seven-step walkthrough under `root` and return one outcome per step.

    `root` is created and removed again by the walkthrough; anything already
    inside it is removed too.
    """
    fs = fs or LocalFileSystem()
    dir_path = Path(root)
    file_path = dir_path / DEMO_FILENAME
    renamed_path = dir_path / RENAMED_FILENAME
    outcomes: List[StepOutcome] = []

    log.info("[WALKTHROUGH START]", extra={"root": str(dir_path)})

    # 1. existence
    file_exists = fs.exists(file_path)
    dir_exists = fs.exists(dir_path)
    outcomes.append(
        _ok(
            "check_existence",
            f"{file_path} {'already exists' if file_exists else 'does not exist yet'}; "
            f"{dir_path} {'already exists' if dir_exists else 'does not exist yet'}",
            file_exists=file_exists,
            dir_exists=dir_exists,
        )
    )

    # 2. create directory
    try:
        created = fs.create_directory(dir_path)
        detail = "created" if created else "already exists"
        outcomes.append(_ok("create_directory", f"{dir_path} {detail}", created=created))
    except OSError as exc:
        outcomes.append(_failed("create_directory", exc))

    # 3. append lines
    try:
        with fs.open_for_append(file_path) as fh:
            for line in DEMO_LINES:
                fh.write(line + "\n")
        outcomes.append(_ok("write_file", f"{len(DEMO_LINES)} lines appended to {file_path}"))
    except OSError as exc:
        outcomes.append(_failed("write_file", exc))

    # 4. read lines back
    try:
        with fs.open_for_read(file_path) as fh:
            lines = [line.rstrip("\n") for line in fh]
        outcomes.append(_ok("read_file", f"{len(lines)} lines read from {file_path}", lines=lines))
    except (OSError, UnicodeDecodeError) as exc:
        outcomes.append(_failed("read_file", exc))

    # 5. list directory
    try:
        entries = fs.list_directory(dir_path)
        outcomes.append(
            _ok(
                "list_directory",
                f"{len(entries)} entries in {dir_path}",
                entries=[{"name": e.name, "kind": e.kind} for e in entries],
            )
        )
    except OSError as exc:
        outcomes.append(_failed("list_directory", exc))

    # 6. rename
    if fs.exists(file_path):
        try:
            fs.rename(file_path, renamed_path)
            outcomes.append(_ok("rename", f"{file_path} -> {renamed_path}"))
        except OSError as exc:
            outcomes.append(_failed("rename", exc))
    else:
        outcomes.append(_skipped("rename", f"{file_path} does not exist, cannot rename"))

    # 7. remove file, then the directory tree
    if fs.exists(renamed_path):
        try:
            removed = fs.remove(renamed_path)
            outcomes.append(
                _ok(
                    "remove_file",
                    f"{renamed_path} {'removed' if removed else 'could not be removed'}",
                    removed=removed,
                )
            )
        except OSError as exc:
            outcomes.append(_failed("remove_file", exc))
    else:
        outcomes.append(_skipped("remove_file", f"{renamed_path} does not exist, cannot remove"))

    if fs.exists(dir_path):
        try:
            count = fs.remove_recursive(dir_path)
            outcomes.append(
                _ok("remove_directory", f"{dir_path} and its {count} entries removed", removed=count)
            )
        except OSError as exc:
            outcomes.append(_failed("remove_directory", exc))
    else:
        outcomes.append(_skipped("remove_directory", f"{dir_path} does not exist, cannot remove"))

    failed = [o["step"] for o in outcomes if o["status"] == "failed"]
    log.info(
        "[WALKTHROUGH COMPLETE]",
        extra={"root": str(dir_path), "steps": len(outcomes), "failed": failed},
    )
    return outcomes


__all__ = ["DEMO_LINES", "StepOutcome", "run_filesystem_walkthrough"]
