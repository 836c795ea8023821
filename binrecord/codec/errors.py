"""
Exception hierarchy for the record codec.

I/O failures from the underlying stream are not wrapped: they surface as the
built-in `OSError` raised by the stream itself.
"""

from __future__ import annotations

from typing import Optional


class CodecError(Exception):
    """Base class for every codec failure."""


class TruncatedInputError(CodecError, EOFError):
    """
    The byte source ended before the record was complete.

    Attributes
    ----------
    field : str
        Name of the field being read when the source ran dry.
    expected : int
        Bytes the field required.
    received : int
        Bytes actually available for the field.
    offset : int
        Offset of the field from the start of the record.
    """

    def __init__(self, field: str, expected: int, received: int, offset: int = 0) -> None:
        self.field = field
        self.expected = expected
        self.received = received
        self.offset = offset
        super().__init__(
            f"truncated input reading '{field}' at offset {offset}: "
            f"expected {expected} bytes, got {received}"
        )


class FieldOverflowError(CodecError, ValueError):
    """A field value cannot be represented in the layout's fixed width."""

    def __init__(self, field: str, value: object, width: int, detail: Optional[str] = None) -> None:
        self.field = field
        self.value = value
        self.width = width
        message = f"value for '{field}' does not fit in {width} bytes"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)


class UnknownLayoutError(CodecError, ValueError):
    """Raised when a layout preset name is not registered."""


__all__ = [
    "CodecError",
    "TruncatedInputError",
    "FieldOverflowError",
    "UnknownLayoutError",
]
