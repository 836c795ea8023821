"""
binrecord - single-record binary serialization with explicit layouts.

This package provides:

- `Record`, the in-memory student record (id, name, gpa)
- `RecordCodec`, which encodes a record to bytes and decodes it back
- Layout presets fixing field widths and byte order (`native`, `portable`,
  `wide`, `network`)
- File helpers (`save_record`, `load_record`) and a thin local filesystem
  wrapper
- A Typer CLI (`binrecord`) with a demo, a filesystem walkthrough and a codec
  benchmark
"""

from __future__ import annotations

__version__ = "0.1.0"
__license__ = "MIT"

# Public API exports
from binrecord.codec import (
    CodecError,
    FieldOverflowError,
    Layout,
    RecordCodec,
    TruncatedInputError,
    UnknownLayoutError,
    available_layouts,
    get_layout,
)
from binrecord.config import Settings, get_settings
from binrecord.domain.models import Record
from binrecord.infrastructure.storage import load_record, save_record
from binrecord.utils.logging import configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__license__",
    # Configuration
    "Settings",
    "get_settings",
    # Domain
    "Record",
    # Codec
    "RecordCodec",
    "Layout",
    "available_layouts",
    "get_layout",
    # Errors
    "CodecError",
    "FieldOverflowError",
    "TruncatedInputError",
    "UnknownLayoutError",
    # Storage
    "load_record",
    "save_record",
    # Logging
    "configure_logging",
    "get_logger",
]
