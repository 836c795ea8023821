from __future__ import annotations

import io
import struct
import sys

import pytest

from binrecord.codec import (
    CodecError,
    FieldOverflowError,
    RecordCodec,
    TruncatedInputError,
    get_layout,
)
from binrecord.domain.models import Record

ALICE_NAME_BYTES = b"Alice Smith"
PORTABLE_ALICE_SIZE = 4 + 8 + 8 + len(ALICE_NAME_BYTES)
NETWORK_ALICE_SIZE = 4 + 8 + 4 + len(ALICE_NAME_BYTES)


class _TrickleStream(io.RawIOBase):
    """Readable stream that hands out one byte per read call."""

    def __init__(self, data: bytes) -> None:
        self._data = data
        self._pos = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if self._pos >= len(self._data):
            return b""
        chunk = self._data[self._pos : self._pos + 1]
        self._pos += 1
        return chunk


class _BrokenStream(io.RawIOBase):
    def readable(self) -> bool:
        return True

    def writable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        raise OSError("device not ready")

    def write(self, data) -> int:
        raise OSError("disk full")


def test_portable_layout_bytes(alice: Record):
    blob = RecordCodec(get_layout("portable")).encode(alice)

    assert len(blob) == PORTABLE_ALICE_SIZE
    assert blob[:4] == b"\x65\x00\x00\x00"
    assert blob[4:12] == struct.pack("<d", 3.85)
    assert blob[12:20] == b"\x0b" + b"\x00" * 7
    assert blob[20:] == ALICE_NAME_BYTES


def test_network_layout_bytes(alice: Record):
    blob = RecordCodec(get_layout("network")).encode(alice)

    assert len(blob) == NETWORK_ALICE_SIZE
    assert blob[:4] == b"\x00\x00\x00\x65"
    assert blob[4:12] == struct.pack(">d", 3.85)
    assert blob[12:16] == b"\x00\x00\x00\x0b"
    assert blob[16:] == ALICE_NAME_BYTES


def test_wide_layout_uses_eight_byte_id():
    blob = RecordCodec(get_layout("wide")).encode(Record(id=-2, name="", gpa=0.0))

    assert blob[:8] == (-2).to_bytes(8, "little", signed=True)
    assert len(blob) == 8 + 8 + 8


def test_native_layout_matches_host(alice: Record):
    layout = get_layout("native")
    blob = RecordCodec(layout).encode(alice)

    expected = (
        (101).to_bytes(struct.calcsize("@i"), sys.byteorder, signed=True)
        + struct.pack("=d", 3.85)
        + len(ALICE_NAME_BYTES).to_bytes(struct.calcsize("@N"), sys.byteorder)
        + ALICE_NAME_BYTES
    )
    assert blob == expected


def test_no_terminator_after_name(codec: RecordCodec):
    blob = codec.encode(Record(id=1, name="abc", gpa=0.0))
    assert blob.endswith(b"abc")
    assert len(blob) == codec.layout.fixed_size + 3


def test_fixed_part_is_constant_across_records(codec: RecordCodec):
    short = Record(id=1, name="Al", gpa=1.0)
    long = Record(id=2, name="Bartholomew Longname", gpa=2.0)

    short_blob = codec.encode(short)
    long_blob = codec.encode(long)

    assert len(long_blob) - len(short_blob) == len(long.name) - len(short.name)
    assert codec.size_of(short) == len(short_blob)
    assert codec.size_of(long) == len(long_blob)


def test_length_prefix_counts_bytes_not_characters(portable_codec: RecordCodec):
    record = Record(id=1, name="é", gpa=0.0)
    blob = portable_codec.encode(record)

    (length,) = struct.unpack("<Q", blob[12:20])
    assert length == 2


def test_truncation_at_every_offset_is_reported(codec: RecordCodec, alice: Record):
    blob = codec.encode(alice)

    for cut in range(len(blob)):
        with pytest.raises(TruncatedInputError):
            codec.decode(blob[:cut])


def test_truncation_identifies_field(portable_codec: RecordCodec, alice: Record):
    blob = portable_codec.encode(alice)

    with pytest.raises(TruncatedInputError) as empty:
        portable_codec.decode(b"")
    assert empty.value.field == "id"
    assert empty.value.received == 0

    with pytest.raises(TruncatedInputError) as in_gpa:
        portable_codec.decode(blob[:5])
    assert in_gpa.value.field == "gpa"
    assert in_gpa.value.offset == 4
    assert in_gpa.value.received == 1

    with pytest.raises(TruncatedInputError) as in_length:
        portable_codec.decode(blob[:14])
    assert in_length.value.field == "name_length"
    assert in_length.value.offset == 12

    with pytest.raises(TruncatedInputError) as in_name:
        portable_codec.decode(blob[:-1])
    assert in_name.value.field == "name"
    assert in_name.value.expected == len(ALICE_NAME_BYTES)
    assert in_name.value.received == len(ALICE_NAME_BYTES) - 1


def test_truncated_error_is_codec_and_eof_error():
    err = TruncatedInputError("id", 4, 0)
    assert isinstance(err, CodecError)
    assert isinstance(err, EOFError)


def test_read_leaves_stream_after_record(portable_codec: RecordCodec, alice: Record):
    stream = io.BytesIO(portable_codec.encode(alice) + b"TAIL")

    assert portable_codec.read(stream) == alice
    assert stream.read() == b"TAIL"


def test_decode_ignores_trailing_bytes(portable_codec: RecordCodec, alice: Record):
    assert portable_codec.decode(portable_codec.encode(alice) + b"\x00" * 16) == alice


def test_decode_accepts_bytearray_and_memoryview(portable_codec: RecordCodec, alice: Record):
    blob = portable_codec.encode(alice)
    assert portable_codec.decode(bytearray(blob)) == alice
    assert portable_codec.decode(memoryview(blob)) == alice


def test_short_reads_are_retried(codec: RecordCodec, alice: Record):
    assert codec.read(_TrickleStream(codec.encode(alice))) == alice


def test_write_returns_bytes_written(portable_codec: RecordCodec, alice: Record):
    sink = io.BytesIO()

    written = portable_codec.write(alice, sink)

    assert written == PORTABLE_ALICE_SIZE
    assert sink.getvalue() == portable_codec.encode(alice)


def test_stream_errors_propagate(portable_codec: RecordCodec, alice: Record):
    with pytest.raises(OSError, match="device not ready"):
        portable_codec.read(_BrokenStream())
    with pytest.raises(OSError, match="disk full"):
        portable_codec.write(alice, _BrokenStream())


def test_id_overflow_is_rejected_and_nothing_written(portable_codec: RecordCodec):
    sink = io.BytesIO()

    with pytest.raises(FieldOverflowError) as exc_info:
        portable_codec.write(Record(id=2**31, name="big", gpa=0.0), sink)

    assert exc_info.value.field == "id"
    assert isinstance(exc_info.value, ValueError)
    assert sink.getvalue() == b""


def test_id_below_range_is_rejected(portable_codec: RecordCodec):
    with pytest.raises(FieldOverflowError):
        portable_codec.encode(Record(id=-(2**31) - 1, name="", gpa=0.0))


def test_wide_layout_accepts_ids_beyond_32_bits():
    codec = RecordCodec(get_layout("wide"))
    record = Record(id=2**40, name="wide", gpa=0.5)
    assert codec.decode(codec.encode(record)) == record


def test_layout_mismatch_is_not_detected_as_such(alice: Record):
    blob = RecordCodec(get_layout("portable")).encode(alice)

    # The big-endian reader sees a huge name length and runs out of bytes.
    with pytest.raises(TruncatedInputError) as exc_info:
        RecordCodec(get_layout("network")).decode(blob)
    assert exc_info.value.field == "name"


def test_mismatched_layout_can_decode_to_garbage():
    writer = RecordCodec(get_layout("portable"))
    reader = RecordCodec(get_layout("wide"))
    blob = writer.encode(Record(id=1, name="", gpa=1.0)) + b"\x00" * 4

    garbled = reader.decode(blob)

    assert garbled.id == 1
    assert garbled.gpa != 1.0
    assert garbled.name == ""


def test_default_codec_layout_is_portable():
    assert RecordCodec().layout.name == "portable"
