"""Decoders for the recognized chunk payloads.

Each decoder is a pure function over the payload bytes the reader copied out
of the stream. A payload that cannot satisfy the chunk's layout raises
ChunkDecodeError; the reader records it and moves on to the next chunk.
"""

import struct
import xml.etree.ElementTree as ET

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError, fromstring

from bwfmeta.format.errors import ChunkDecodeError
from bwfmeta.format.options import DEFAULT_OPTIONS, ParseOptions
from bwfmeta.format.riff import BEXT_ID, FMT_ID, IXML_ID
from bwfmeta.format.types import BroadcastExtension, FormatInfo, IxmlMetadata

# audio format, channels, sample rate, byte rate, block align, bits per sample
FMT_STRUCT = struct.Struct("<HHIIHH")
FMT_SIZE = FMT_STRUCT.size  # 16

# Field widths per EBU Tech 3285
BEXT_TEXT_FIELDS = (
    ("description", 256),
    ("originator", 32),
    ("originator_reference", 32),
    ("origination_date", 10),
    ("origination_time", 8),
)
BEXT_TIME_REFERENCE = struct.Struct("<q")
BEXT_SIZE = sum(width for _, width in BEXT_TEXT_FIELDS) + BEXT_TIME_REFERENCE.size  # 346


def decode_fmt(payload: bytes) -> FormatInfo:
    """Decode the fixed 16-byte part of a ``fmt `` chunk.

    Args:
        payload: At least the first 16 bytes of the chunk. Extension bytes
            (cbSize, WAVE_FORMAT_EXTENSIBLE fields) are ignored.

    Returns:
        FormatInfo with the format code, channels, sample rate and bit depth.

    Raises:
        ChunkDecodeError: If fewer than 16 bytes are available.
    """
    if len(payload) < FMT_SIZE:
        raise ChunkDecodeError(
            FMT_ID, f"expected at least {FMT_SIZE} bytes, got {len(payload)}"
        )

    audio_format, num_channels, sample_rate, _, _, bits_per_sample = FMT_STRUCT.unpack_from(
        payload
    )
    return FormatInfo(
        audio_format_code=audio_format,
        channel_count=num_channels,
        sample_rate_hz=sample_rate,
        bits_per_sample=bits_per_sample,
    )


def decode_bext(payload: bytes) -> BroadcastExtension:
    """Decode the version-independent part of a ``bext`` chunk.

    Reads the five fixed-width text fields and the 64-bit time reference.
    Later fields (version, UMID, loudness, coding history) are not decoded.

    Args:
        payload: At least the first 346 bytes of the chunk.

    Returns:
        BroadcastExtension with trimmed text fields.

    Raises:
        ChunkDecodeError: If fewer than 346 bytes are available or a text
            field is not valid UTF-8.
    """
    if len(payload) < BEXT_SIZE:
        raise ChunkDecodeError(
            BEXT_ID, f"expected at least {BEXT_SIZE} bytes, got {len(payload)}"
        )

    fields: dict[str, str] = {}
    offset = 0
    for name, width in BEXT_TEXT_FIELDS:
        fields[name] = _decode_text_field(payload[offset : offset + width], name)
        offset += width

    (time_reference,) = BEXT_TIME_REFERENCE.unpack_from(payload, offset)
    return BroadcastExtension(time_reference_samples=time_reference, **fields)


def decode_ixml(payload: bytes, options: ParseOptions = DEFAULT_OPTIONS) -> IxmlMetadata:
    """Decode an ``iXML`` chunk.

    The payload must be UTF-8. If it parses as XML the document is
    re-indented; otherwise the decoded text is kept as-is. Malformed XML is
    not an error.

    Args:
        payload: The complete chunk payload.
        options: Controls re-indentation of well-formed documents.

    Returns:
        IxmlMetadata with the raw bytes, decoded text and display content.

    Raises:
        ChunkDecodeError: If the payload is empty or not valid UTF-8.
    """
    if not payload:
        raise ChunkDecodeError(IXML_ID, "empty payload")

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ChunkDecodeError(IXML_ID, f"invalid UTF-8 at byte {e.start}") from e

    content = _format_xml(text.lstrip("\ufeff").rstrip("\x00"), options)
    return IxmlMetadata(
        raw=payload,
        text=text,
        content=text if content is None else content,
        well_formed=content is not None,
    )


def _decode_text_field(raw: bytes, name: str) -> str:
    """Decode a NUL-padded text field and trim it."""
    try:
        return raw.split(b"\x00", 1)[0].decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise ChunkDecodeError(BEXT_ID, f"{name} is not valid UTF-8") from e


def _format_xml(document: str, options: ParseOptions) -> str | None:
    """Parse and re-serialize an XML document, or return None if it does not parse.

    The document is passed as text so expat reads it as UTF-8 regardless of any
    encoding declared in its prolog.
    """
    try:
        root = fromstring(document)
    except (ParseError, DefusedXmlException):
        return None

    if options.pretty_xml:
        ET.indent(root, space=options.xml_indent)
    return ET.tostring(root, encoding="unicode")
