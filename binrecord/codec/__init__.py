"""
Codec package for binrecord.

Re-exports the record codec, its layouts and its error types so callers can
import from `binrecord.codec` directly.
"""

from binrecord.codec.errors import (
    CodecError,
    FieldOverflowError,
    TruncatedInputError,
    UnknownLayoutError,
)
from binrecord.codec.layout import GPA_WIDTH, Layout, available_layouts, get_layout, native_layout
from binrecord.codec.record_codec import RecordCodec

__all__ = [
    # Codec
    "RecordCodec",
    # Layouts
    "GPA_WIDTH",
    "Layout",
    "available_layouts",
    "get_layout",
    "native_layout",
    # Errors
    "CodecError",
    "FieldOverflowError",
    "TruncatedInputError",
    "UnknownLayoutError",
]
