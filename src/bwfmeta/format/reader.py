"""Broadcast WAV metadata reader.

This module walks a RIFF/WAVE stream once, hands the ``fmt ``, ``bext`` and
``iXML`` payloads to their decoders and assembles a ParseResult.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, BinaryIO

from bwfmeta.format.decoders import (
    BEXT_SIZE,
    FMT_SIZE,
    decode_bext,
    decode_fmt,
    decode_ixml,
)
from bwfmeta.format.errors import ChunkDecodeError, SourceReadError
from bwfmeta.format.options import DEFAULT_OPTIONS, ParseOptions
from bwfmeta.format.riff import (
    BEXT_ID,
    FMT_ID,
    IXML_ID,
    ChunkHeader,
    iter_chunks,
    read_envelope,
)
from bwfmeta.format.source import ByteSource
from bwfmeta.format.types import ChunkResult, ParseResult

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _ChunkDecoder:
    field: str
    """ParseResult field the decoded chunk is stored in."""

    read_limit: int | None
    """Bytes to copy out of the payload, or None for the whole payload."""

    decode: Callable[[bytes, ParseOptions], Any]


_DECODERS: dict[bytes, _ChunkDecoder] = {
    FMT_ID: _ChunkDecoder("fmt", FMT_SIZE, lambda payload, _: decode_fmt(payload)),
    BEXT_ID: _ChunkDecoder("bext", BEXT_SIZE, lambda payload, _: decode_bext(payload)),
    IXML_ID: _ChunkDecoder("ixml", None, decode_ixml),
}


def parse(
    source: ByteSource | BinaryIO | bytes,
    options: ParseOptions | None = None,
) -> ParseResult:
    """Extract format, broadcast and iXML metadata from a WAV stream.

    The stream is read forward exactly once. It is borrowed, not closed.

    Args:
        source: Raw bytes, a binary stream positioned at the RIFF header, or
            a ByteSource.
        options: Presentation options for decoded payloads.

    Returns:
        ParseResult recording, for each recognized chunk, whether it was
        found, absent or malformed.

    Raises:
        InvalidContainerError: If the stream does not start with "RIFF".
        InvalidFormatError: If the RIFF form type is not "WAVE".
        InvalidChunkSizeError: If a chunk declares a size of 2**31 or more.
        SourceReadError: If the stream cannot be read.
    """
    options = options or DEFAULT_OPTIONS
    if isinstance(source, (bytes, bytearray, memoryview)):
        source = ByteSource.from_bytes(bytes(source))
    elif not isinstance(source, ByteSource):
        source = ByteSource(source)

    envelope = read_envelope(source)
    results: dict[str, ChunkResult[Any]] = {}
    chunks: list[ChunkHeader] = []

    for chunk in iter_chunks(source):
        chunks.append(chunk)
        decoder = _DECODERS.get(chunk.id)
        if decoder is None:
            continue

        if decoder.field in results:
            logger.warning(
                "Ignoring duplicate %r chunk at offset %d", chunk.label, chunk.offset
            )
            continue

        results[decoder.field] = _decode_chunk(source, chunk, decoder, options)

    return ParseResult(envelope=envelope, chunks=tuple(chunks), **results)


def parse_file(path: Path | str, options: ParseOptions | None = None) -> ParseResult:
    """Open a WAV file and extract its metadata.

    Args:
        path: Path to the WAV file.
        options: Presentation options for decoded payloads.

    Returns:
        ParseResult for the file.

    Raises:
        SourceReadError: If the file does not exist or cannot be read.
        RiffError: If the file is not a valid RIFF/WAVE file.
    """
    path = Path(path)

    try:
        f = open(path, "rb")
    except FileNotFoundError as e:
        raise SourceReadError(f"File not found: {path}") from e
    except OSError as e:
        raise SourceReadError(f"Cannot open file: {path}") from e

    with f:
        logger.debug("Parsing %s", path)
        return parse(f, options)


def _decode_chunk(
    source: ByteSource,
    chunk: ChunkHeader,
    decoder: _ChunkDecoder,
    options: ParseOptions,
) -> ChunkResult[Any]:
    """Copy a recognized chunk's payload out of the stream and decode it."""
    read_size = chunk.size if decoder.read_limit is None else min(chunk.size, decoder.read_limit)
    payload = source.read(read_size)

    try:
        if len(payload) < read_size:
            raise ChunkDecodeError(
                chunk.id,
                f"truncated payload ({len(payload)} of {read_size} bytes available)",
            )
        return ChunkResult.found(decoder.decode(payload, options))
    except ChunkDecodeError as e:
        logger.warning("%s", e)
        return ChunkResult.malformed(e)
