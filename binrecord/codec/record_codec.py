"""
Record codec: encode a `Record` to bytes and decode it back.

Wire format (no header, magic or version tag):

    id           signed integer, layout.int_width bytes
    gpa          IEEE-754 double, 8 bytes
    name length  unsigned integer, layout.size_width bytes
    name         `name length` raw bytes, no terminator

All multi-byte fields use the layout's byte order. The reader has to know
the layout the writer used; a stream produced with a different layout
decodes to garbage or truncates, it is never detected as a mismatch.

Usage:
    from binrecord.codec import RecordCodec, get_layout

    codec = RecordCodec(get_layout("portable"))
    blob = codec.encode(record)
    assert codec.decode(blob) == record
"""

from __future__ import annotations

import io
from typing import BinaryIO, Optional, Union

from binrecord.codec.errors import FieldOverflowError, TruncatedInputError
from binrecord.codec.layout import GPA_WIDTH, Layout, get_layout
from binrecord.domain.models import Record
from binrecord.utils.logging import get_logger

log = get_logger(__name__)

NAME_ENCODING = "utf-8"
# Keeps arbitrary name bytes intact across a decode/encode cycle.
NAME_ERRORS = "surrogateescape"

_READ_CHUNK = 64 * 1024

BytesLike = Union[bytes, bytearray, memoryview]


def _read_exact(stream: BinaryIO, size: int) -> bytes:
    """
    Read `size` bytes, retrying short reads until the stream reports EOF.

    Returns fewer than `size` bytes only when the stream is exhausted.
    """
    chunks = []
    remaining = size
    while remaining > 0:
        chunk = stream.read(min(remaining, _READ_CHUNK))
        if not chunk:
            break
        chunks.append(chunk)
        remaining -= len(chunk)
    return b"".join(chunks)


class RecordCodec:
    """
    Encoder/decoder for single records in a given layout.

    The codec holds no per-call state; one instance can be reused for any
    number of records.
    """

    def __init__(self, layout: Optional[Layout] = None) -> None:
        self.layout = layout or get_layout("portable")

    def __repr__(self) -> str:
        return f"RecordCodec(layout={self.layout.name!r})"

    def size_of(self, record: Record) -> int:
        """Encoded length of `record` in bytes."""
        return self.layout.fixed_size + len(record.name.encode(NAME_ENCODING, NAME_ERRORS))

    def encode(self, record: Record) -> bytes:
        """
        Encode `record` into a byte string.

        Raises
        ------
        FieldOverflowError
            If the id or the name length does not fit the layout widths.
        """
        layout = self.layout
        if record.id not in layout.id_range:
            raise FieldOverflowError(
                "id",
                record.id,
                layout.int_width,
                f"allowed range {layout.id_range.start}..{layout.id_range.stop - 1}",
            )
        name_bytes = record.name.encode(NAME_ENCODING, NAME_ERRORS)
        if len(name_bytes) > layout.max_name_bytes:
            raise FieldOverflowError(
                "name", len(name_bytes), layout.size_width, "name length prefix overflow"
            )
        return layout.fixed.pack(record.id, record.gpa, len(name_bytes)) + name_bytes

    def write(self, record: Record, stream: BinaryIO) -> int:
        """
        Encode `record` onto a binary stream and return the bytes written.

        The record is fully encoded before anything reaches the stream, so an
        overflow never leaves a partial record behind. Stream errors propagate.
        """
        payload = self.encode(record)
        stream.write(payload)
        return len(payload)

    def read(self, stream: BinaryIO) -> Record:
        """
        Decode exactly one record from a binary stream.

        The stream is left positioned just past the record.

        Raises
        ------
        TruncatedInputError
            If the stream ends before the record is complete.
        """
        layout = self.layout
        fixed = _read_exact(stream, layout.fixed_size)
        if len(fixed) < layout.fixed_size:
            raise self._truncated_prefix(len(fixed))

        record_id, gpa, name_length = layout.fixed.unpack(fixed)
        name_bytes = _read_exact(stream, name_length)
        if len(name_bytes) < name_length:
            raise TruncatedInputError("name", name_length, len(name_bytes), layout.fixed_size)

        return Record(id=record_id, name=name_bytes.decode(NAME_ENCODING, NAME_ERRORS), gpa=gpa)

    def decode(self, data: BytesLike) -> Record:
        """Decode one record from the start of `data`; trailing bytes are ignored."""
        stream = io.BytesIO(data)
        record = self.read(stream)
        consumed = stream.tell()
        trailing = stream.seek(0, io.SEEK_END) - consumed
        if trailing:
            log.debug(
                "Ignoring bytes after record",
                extra={"layout": self.layout.name, "trailing_bytes": trailing},
            )
        return record

    def _truncated_prefix(self, received: int) -> TruncatedInputError:
        """Attribute a short fixed-width read to the field it cut into."""
        layout = self.layout
        fields = (
            ("id", layout.int_width),
            ("gpa", GPA_WIDTH),
            ("name_length", layout.size_width),
        )
        offset = 0
        for field_name, width in fields:
            if received < offset + width:
                return TruncatedInputError(field_name, width, received - offset, offset)
            offset += width
        # Unreachable while received < fixed_size.
        return TruncatedInputError("record", layout.fixed_size, received, 0)


__all__ = ["NAME_ENCODING", "NAME_ERRORS", "RecordCodec"]
