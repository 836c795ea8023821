"""
Thin filesystem wrapper used by the walkthrough command.

The record codec never touches this module; it only needs a binary stream.
Everything here is a direct pass-through to pathlib/os with two additions:
`create_directory` reports whether it created anything, and
`remove_recursive` reports how many entries it removed.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import IO, List, Union

from binrecord.utils.logging import get_logger

log = get_logger(__name__)

PathLike = Union[str, Path]


@dataclass(frozen=True)
class DirEntry:
    """One item of a directory listing."""

    name: str
    path: Path
    kind: str  # "file", "directory" or "other"


def _kind_of(path: Path) -> str:
    if path.is_symlink():
        return "other"
    if path.is_file():
        return "file"
    if path.is_dir():
        return "directory"
    return "other"


class LocalFileSystem:
    """Filesystem operations on the local disk."""

    encoding = "utf-8"

    def exists(self, path: PathLike) -> bool:
        return Path(path).exists()

    def create_directory(self, path: PathLike) -> bool:
        """
        Create a single directory.

        Returns True when the directory was created and False when it already
        existed. A missing parent, a file occupying the path or a permission
        problem raises `OSError`.
        """
        target = Path(path)
        try:
            target.mkdir()
        except FileExistsError:
            if target.is_dir():
                return False
            raise
        log.debug("Directory created", extra={"path": str(target)})
        return True

    def open_for_read(self, path: PathLike, binary: bool = False) -> IO:
        if binary:
            return Path(path).open("rb")
        return Path(path).open("r", encoding=self.encoding)

    def open_for_write(self, path: PathLike, binary: bool = False) -> IO:
        if binary:
            return Path(path).open("wb")
        return Path(path).open("w", encoding=self.encoding)

    def open_for_append(self, path: PathLike, binary: bool = False) -> IO:
        if binary:
            return Path(path).open("ab")
        return Path(path).open("a", encoding=self.encoding)

    def list_directory(self, path: PathLike) -> List[DirEntry]:
        """Entries directly inside `path`, sorted by name."""
        entries = [DirEntry(p.name, p, _kind_of(p)) for p in Path(path).iterdir()]
        return sorted(entries, key=lambda e: e.name)

    def rename(self, source: PathLike, destination: PathLike) -> Path:
        """Move `source` to `destination`, replacing a destination file if the OS allows it."""
        moved = Path(source).replace(destination)
        log.debug("Renamed", extra={"source": str(source), "destination": str(destination)})
        return Path(moved)

    def remove(self, path: PathLike) -> bool:
        """
        Remove a file, symlink or empty directory.

        Returns False when nothing existed at `path`.
        """
        target = Path(path)
        if not target.exists() and not target.is_symlink():
            return False
        if target.is_dir() and not target.is_symlink():
            target.rmdir()
        else:
            target.unlink()
        return True

    def remove_recursive(self, path: PathLike) -> int:
        """
        Remove `path` and everything below it.

        Returns the number of files and directories removed, 0 when nothing
        existed. Symlinks are removed, never followed.
        """
        target = Path(path)
        if target.is_symlink() or target.is_file():
            target.unlink()
            return 1
        if not target.exists():
            return 0

        removed = 0
        for root, dirs, files in os.walk(target, topdown=False):
            for name in files:
                os.unlink(os.path.join(root, name))
                removed += 1
            for name in dirs:
                child = os.path.join(root, name)
                if os.path.islink(child):
                    os.unlink(child)
                else:
                    os.rmdir(child)
                removed += 1
        target.rmdir()
        removed += 1
        log.debug("Removed tree", extra={"path": str(target), "removed": removed})
        return removed


__all__ = ["DirEntry", "LocalFileSystem"]
