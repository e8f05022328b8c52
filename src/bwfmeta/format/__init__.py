"""Broadcast WAV metadata module.

This module reads the format, broadcast extension and iXML metadata from
RIFF/WAVE files without touching the audio data.

Format Overview
---------------
A WAV file is a RIFF container holding a sequence of word-aligned chunks:

    +----------------------------------------+
    | RIFF Header ("WAVE")                   |
    +----------------------------------------+
    | fmt  chunk (audio format)              |
    +----------------------------------------+
    | bext chunk (EBU broadcast extension)   |
    |   - Description, originator            |
    |   - Origination date/time              |
    |   - Time reference (samples)           |
    +----------------------------------------+
    | iXML chunk (production XML)            |
    +----------------------------------------+
    | data chunk (samples, skipped)          |
    +----------------------------------------+

Chunks may appear in any order, and unknown chunks are skipped.

Example Usage
-------------
>>> from bwfmeta.format import parse_file
>>> result = parse_file("take_01.wav")
>>> if result.bext.is_found:
...     print(result.broadcast_extension.originator)
"""

from bwfmeta.format.errors import (
    ChunkDecodeError,
    InvalidChunkSizeError,
    InvalidContainerError,
    InvalidFormatError,
    RiffError,
    SourceReadError,
)
from bwfmeta.format.options import ParseOptions
from bwfmeta.format.reader import parse, parse_file
from bwfmeta.format.report import format_report, result_to_dict
from bwfmeta.format.types import (
    AudioFormat,
    BroadcastExtension,
    ChunkResult,
    ChunkStatus,
    FormatInfo,
    IxmlMetadata,
    ParseResult,
)

__all__ = [
    # Types
    "AudioFormat",
    "BroadcastExtension",
    "ChunkResult",
    "ChunkStatus",
    "FormatInfo",
    "IxmlMetadata",
    "ParseResult",
    "ParseOptions",
    # Reader
    "parse",
    "parse_file",
    # Report
    "format_report",
    "result_to_dict",
    # Errors
    "RiffError",
    "SourceReadError",
    "InvalidContainerError",
    "InvalidFormatError",
    "InvalidChunkSizeError",
    "ChunkDecodeError",
]
