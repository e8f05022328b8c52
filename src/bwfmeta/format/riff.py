"""RIFF/WAV container walking.

This module validates the RIFF/WAVE envelope and walks the sequence of chunk
headers that follows it. Chunk payloads are left to the caller: the walker
yields each header, lets the caller read as much of the payload as it needs,
then skips the remainder and the word-alignment padding byte.
"""

import logging
import struct
from collections.abc import Iterator
from dataclasses import dataclass

from bwfmeta.format.errors import (
    InvalidChunkSizeError,
    InvalidContainerError,
    InvalidFormatError,
    RiffError,
)
from bwfmeta.format.source import ByteSource

logger = logging.getLogger(__name__)

# FourCC identifiers
RIFF_ID = b"RIFF"
WAVE_ID = b"WAVE"
FMT_ID = b"fmt "
DATA_ID = b"data"
BEXT_ID = b"bext"
IXML_ID = b"iXML"

CHUNK_HEADER_SIZE = 8


@dataclass(frozen=True)
class RiffEnvelope:
    """The 12-byte RIFF/WAVE file header."""

    riff_size: int
    """Declared size of everything after the first 8 bytes (not enforced)."""

    form_type: bytes = WAVE_ID


@dataclass(frozen=True)
class ChunkHeader:
    """A chunk header as found in the stream."""

    id: bytes
    """4-byte chunk identifier, compared byte for byte."""

    size: int
    """Declared payload size in bytes, excluding header and padding."""

    offset: int
    """Stream offset of the first payload byte."""

    @property
    def label(self) -> str:
        """Chunk id as text, for display."""
        return self.id.decode("latin-1")

    @property
    def padded_size(self) -> int:
        """Payload size including the word-alignment pad byte."""
        return self.size + (self.size % 2)


def read_envelope(source: ByteSource) -> RiffEnvelope:
    """Read and validate the RIFF/WAVE header.

    Args:
        source: Byte source positioned at offset 0.

    Returns:
        The parsed envelope. The source is left at the first chunk header.

    Raises:
        InvalidContainerError: If the stream does not start with "RIFF".
        InvalidFormatError: If the form type is not "WAVE".
        SourceReadError: If the source cannot be read.
    """
    riff_id = source.read(4)
    if riff_id != RIFF_ID:
        raise InvalidContainerError(f"Not a RIFF file (header {riff_id!r})")

    size_bytes = source.read(4)
    riff_size = struct.unpack("<I", size_bytes)[0] if len(size_bytes) == 4 else 0

    form_type = source.read(4)
    if form_type != WAVE_ID:
        raise InvalidFormatError(f"Not a WAVE file (form type {form_type!r})")

    return RiffEnvelope(riff_size=riff_size, form_type=form_type)


def iter_chunks(source: ByteSource) -> Iterator[ChunkHeader]:
    """Walk the chunk headers following the RIFF envelope.

    Each yielded header is positioned at its payload. The consumer may read
    any prefix of the payload before advancing the iterator; whatever is left
    is skipped, followed by one padding byte when the size is odd.

    A truncated trailing header (fewer than 8 bytes left) ends the walk
    normally.

    Args:
        source: Byte source positioned at the first chunk header.

    Yields:
        ChunkHeader for every complete chunk header in the stream.

    Raises:
        InvalidChunkSizeError: If a header declares a size of 2**31 or more.
        SourceReadError: If the source cannot be read.
    """
    while True:
        header_offset = source.position
        header = source.read(CHUNK_HEADER_SIZE)
        if len(header) < CHUNK_HEADER_SIZE:
            if header:
                logger.debug(
                    "Ignoring %d trailing bytes at offset %d", len(header), header_offset
                )
            return

        chunk_id = header[:4]
        chunk_size = struct.unpack("<i", header[4:8])[0]
        if chunk_size < 0:
            raise InvalidChunkSizeError(
                chunk_id, struct.unpack("<I", header[4:8])[0], header_offset
            )

        chunk = ChunkHeader(id=chunk_id, size=chunk_size, offset=source.position)
        logger.debug("Chunk %r: %d bytes at offset %d", chunk_id, chunk_size, chunk.offset)
        yield chunk

        consumed = source.position - chunk.offset
        if consumed > chunk_size:
            raise RiffError(
                f"Read {consumed} bytes from chunk {chunk_id!r} declared as {chunk_size}"
            )

        # Skip to next chunk (with word alignment padding)
        source.skip(chunk.padded_size - consumed)
