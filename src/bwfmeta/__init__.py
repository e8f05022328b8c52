"""bwfmeta - Broadcast WAV metadata reader.

This package extracts the fmt, bext and iXML metadata from WAV files by
walking their RIFF chunk structure.

Example Usage
-------------
>>> from bwfmeta import parse_file, format_report
>>>
>>> result = parse_file("take_01.wav")
>>> print(result.format_info.sample_rate_hz)
48000
>>> print(format_report(result))
"""

# Re-export format module for convenience
from bwfmeta.format import (
    AudioFormat,
    BroadcastExtension,
    ChunkDecodeError,
    ChunkResult,
    ChunkStatus,
    FormatInfo,
    InvalidChunkSizeError,
    InvalidContainerError,
    InvalidFormatError,
    IxmlMetadata,
    ParseOptions,
    ParseResult,
    RiffError,
    SourceReadError,
    format_report,
    parse,
    parse_file,
    result_to_dict,
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
