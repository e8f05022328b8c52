"""Unit tests for the RIFF envelope and chunk walker."""

import io

import pytest

from bwfmeta.format.errors import (
    InvalidChunkSizeError,
    InvalidContainerError,
    InvalidFormatError,
    RiffError,
    SourceReadError,
)
from bwfmeta.format.riff import ChunkHeader, iter_chunks, read_envelope
from bwfmeta.format.source import ByteSource
from wav_builder import make_chunk, make_wav


class TrickleStream(io.RawIOBase):
    """Non-seekable stream that returns at most a few bytes per read."""

    def __init__(self, data: bytes, max_read: int = 3) -> None:
        self._buf = io.BytesIO(data)
        self._max_read = max_read

    def readable(self) -> bool:
        return True

    def readinto(self, b) -> int:
        data = self._buf.read(min(len(b), self._max_read))
        b[: len(data)] = data
        return len(data)


class TestByteSource:
    """Tests for the ByteSource reader."""

    def test_read_and_position(self) -> None:
        source = ByteSource.from_bytes(b"abcdef")
        assert source.read(4) == b"abcd"
        assert source.position == 4
        assert source.read(10) == b"ef"
        assert source.position == 6

    def test_read_exact_short(self) -> None:
        source = ByteSource.from_bytes(b"abc")
        assert source.read_exact(4) is None

    def test_at_end_lookahead_is_not_lost(self) -> None:
        source = ByteSource.from_bytes(b"xy")
        assert not source.at_end()
        assert source.position == 0
        assert source.read(2) == b"xy"
        assert source.at_end()

    def test_skip_after_lookahead(self) -> None:
        source = ByteSource.from_bytes(b"0123456789")
        assert not source.at_end()
        source.skip(3)
        assert source.position == 3
        assert source.read(2) == b"34"

    def test_skip_past_end_is_not_an_error(self) -> None:
        source = ByteSource.from_bytes(b"abc")
        source.skip(100)
        assert source.read(1) == b""
        assert source.at_end()

    def test_skip_on_non_seekable_stream(self) -> None:
        source = ByteSource(TrickleStream(b"0123456789"))
        source.skip(7)
        assert source.position == 7
        assert source.read(3) == b"789"

    def test_closed_stream_raises(self) -> None:
        stream = io.BytesIO(b"RIFF")
        stream.close()
        with pytest.raises(SourceReadError):
            ByteSource(stream)

    def test_stream_closed_mid_read_raises(self) -> None:
        stream = io.BytesIO(b"RIFF" * 10)
        source = ByteSource(stream)
        source.read(4)
        stream.close()
        with pytest.raises(SourceReadError):
            source.read(4)


class TestReadEnvelope:
    """Tests for read_envelope."""

    def test_valid_envelope(self) -> None:
        source = ByteSource.from_bytes(make_wav(make_chunk(b"junk", b"ab")))
        envelope = read_envelope(source)
        assert envelope.riff_size == 4 + 8 + 2
        assert envelope.form_type == b"WAVE"
        assert source.position == 12

    def test_riff_size_is_not_enforced(self) -> None:
        data = b"RIFF" + b"\xff\xff\xff\xff" + b"WAVE"
        envelope = read_envelope(ByteSource.from_bytes(data))
        assert envelope.riff_size == 0xFFFFFFFF

    def test_rifx_rejected(self) -> None:
        data = make_wav(riff_id=b"RIFX")
        with pytest.raises(InvalidContainerError):
            read_envelope(ByteSource.from_bytes(data))

    def test_not_wave_rejected(self) -> None:
        data = make_wav(form_type=b"AVI ")
        with pytest.raises(InvalidFormatError):
            read_envelope(ByteSource.from_bytes(data))

    def test_empty_input_rejected(self) -> None:
        with pytest.raises(InvalidContainerError):
            read_envelope(ByteSource.from_bytes(b""))

    def test_truncated_form_type_rejected(self) -> None:
        with pytest.raises(InvalidFormatError):
            read_envelope(ByteSource.from_bytes(b"RIFF\x04\x00\x00\x00WA"))

    def test_errors_share_base_class(self) -> None:
        assert issubclass(InvalidContainerError, RiffError)
        assert issubclass(InvalidFormatError, RiffError)


def walk(data: bytes) -> list[ChunkHeader]:
    """Walk all chunks of a WAV byte string without reading payloads."""
    source = ByteSource.from_bytes(data)
    read_envelope(source)
    return list(iter_chunks(source))


class TestIterChunks:
    """Tests for iter_chunks."""

    def test_headers_and_offsets(self) -> None:
        data = make_wav(make_chunk(b"fmt ", b"\x00" * 16), make_chunk(b"data", b"\x01" * 8))
        chunks = walk(data)

        assert [c.id for c in chunks] == [b"fmt ", b"data"]
        assert [c.size for c in chunks] == [16, 8]
        assert chunks[0].offset == 20
        assert chunks[1].offset == 20 + 16 + 8

    def test_odd_chunk_is_padded(self) -> None:
        data = make_wav(make_chunk(b"junk", b"12345"), make_chunk(b"bext", b"ab"))
        chunks = walk(data)

        assert [c.label for c in chunks] == ["junk", "bext"]
        assert chunks[0].padded_size == 6
        assert chunks[1].offset == 20 + 6 + 8

    def test_negative_size_is_fatal(self) -> None:
        data = make_wav(make_chunk(b"fmt ", b"\x00" * 16)) + b"junk\xff\xff\xff\xff"
        with pytest.raises(InvalidChunkSizeError) as exc_info:
            walk(data)

        assert exc_info.value.chunk_id == b"junk"
        assert exc_info.value.declared_size == 0xFFFFFFFF
        assert exc_info.value.offset == 12 + 24

    def test_size_of_two_gigabytes_is_fatal(self) -> None:
        data = make_wav() + b"big \x00\x00\x00\x80"
        with pytest.raises(InvalidChunkSizeError):
            walk(data)

    def test_trailing_garbage_ends_walk(self) -> None:
        data = make_wav(make_chunk(b"data", b"\x00\x00")) + b"\x01\x02\x03"
        assert [c.label for c in walk(data)] == ["data"]

    def test_truncated_header_ends_walk(self) -> None:
        data = make_wav(make_chunk(b"data", b"\x00\x00")) + b"LIST\x10\x00"
        assert [c.label for c in walk(data)] == ["data"]

    def test_truncated_payload_ends_walk(self) -> None:
        data = make_wav(make_chunk(b"data", b"\x00" * 4, declared_size=4000))
        chunks = walk(data)
        assert len(chunks) == 1
        assert chunks[0].size == 4000

    def test_empty_body(self) -> None:
        assert walk(make_wav()) == []

    def test_partial_read_then_skip(self) -> None:
        data = make_wav(make_chunk(b"fmt ", b"\x07" * 40), make_chunk(b"data", b""))
        source = ByteSource.from_bytes(data)
        read_envelope(source)

        ids = []
        for chunk in iter_chunks(source):
            ids.append(chunk.id)
            if chunk.id == b"fmt ":
                assert source.read(16) == b"\x07" * 16

        assert ids == [b"fmt ", b"data"]

    def test_non_seekable_stream(self) -> None:
        data = make_wav(
            make_chunk(b"junk", b"12345"),
            make_chunk(b"fmt ", b"\x00" * 16),
            make_chunk(b"data", b"\x00" * 101),
        )
        source = ByteSource(TrickleStream(data))
        read_envelope(source)
        assert [c.label for c in iter_chunks(source)] == ["junk", "fmt ", "data"]
