"""
File-backed record storage.

Binds a `RecordCodec` to a path: one file holds exactly one record. File
handles are scoped to each call and closed on every exit path; I/O errors
and codec errors propagate to the caller untouched.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

from binrecord.codec import RecordCodec, get_layout
from binrecord.config import Settings, get_settings
from binrecord.domain.models import Record
from binrecord.utils.logging import get_logger

log = get_logger(__name__)

PathLike = Union[str, Path]


def default_codec(settings: Optional[Settings] = None) -> RecordCodec:
    """Build a codec for the configured layout (`CODEC_LAYOUT`)."""
    cfg = settings or get_settings()
    return RecordCodec(get_layout(cfg.codec_layout))


def save_record(path: PathLike, record: Record, codec: Optional[RecordCodec] = None) -> int:
    """
    Write `record` to `path`, replacing any previous content.

    The record is encoded before the file is opened, so a value that does not
    fit the layout never truncates an existing file.

    Returns
    -------
    int
        Number of bytes written.
    """
    codec = codec or default_codec()
    target = Path(path)
    payload = codec.encode(record)
    with target.open("wb") as fh:
        fh.write(payload)
    log.debug(
        "Record saved",
        extra={"path": str(target), "bytes": len(payload), "layout": codec.layout.name},
    )
    return len(payload)


def load_record(path: PathLike, codec: Optional[RecordCodec] = None) -> Record:
    """
    Read one record from the start of `path`.

    Raises
    ------
    FileNotFoundError / OSError
        If the file cannot be opened or read.
    TruncatedInputError
        If the file is shorter than the record it declares.
    """
    codec = codec or default_codec()
    source = Path(path)
    with source.open("rb") as fh:
        record = codec.read(fh)
    log.debug("Record loaded", extra={"path": str(source), "layout": codec.layout.name})
    return record


__all__ = ["default_codec", "load_record", "save_record"]
