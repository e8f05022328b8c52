"""Helpers for building RIFF/WAVE byte strings in tests."""

import struct


def make_chunk(chunk_id: bytes, payload: bytes, declared_size: int | None = None) -> bytes:
    """Build one chunk with header and word-alignment padding.

    Args:
        chunk_id: 4-byte identifier.
        payload: Chunk payload.
        declared_size: Size written in the header, if different from the
            payload length.
    """
    size = len(payload) if declared_size is None else declared_size
    chunk = chunk_id + struct.pack("<I", size) + payload
    if len(payload) % 2:
        chunk += b"\x00"
    return chunk


def make_wav(*chunks: bytes, riff_id: bytes = b"RIFF", form_type: bytes = b"WAVE") -> bytes:
    """Wrap pre-built chunks in a RIFF/WAVE header."""
    body = form_type + b"".join(chunks)
    return riff_id + struct.pack("<I", len(body)) + body


def fmt_payload(
    audio_format: int = 1,
    num_channels: int = 2,
    sample_rate: int = 48000,
    bits_per_sample: int = 16,
    extra: bytes = b"",
) -> bytes:
    """Build a fmt chunk payload, with optional extension bytes."""
    block_align = num_channels * bits_per_sample // 8
    byte_rate = sample_rate * block_align
    return (
        struct.pack(
            "<HHIIHH",
            audio_format,
            num_channels,
            sample_rate,
            byte_rate,
            block_align,
            bits_per_sample,
        )
        + extra
    )


def bext_payload(
    description: str = "Scene 12 take 3",
    originator: str = "SoundDevices",
    originator_reference: str = "USND1234567890",
    origination_date: str = "2024-05-17",
    origination_time: str = "14:30:05",
    time_reference: int = 2_782_080_000,
    extra: bytes = b"",
) -> bytes:
    """Build a bext chunk payload with NUL-padded text fields."""

    def field(text: str, width: int) -> bytes:
        return text.encode("utf-8")[:width].ljust(width, b"\x00")

    return (
        field(description, 256)
        + field(originator, 32)
        + field(originator_reference, 32)
        + field(origination_date, 10)
        + field(origination_time, 8)
        + struct.pack("<q", time_reference)
        + extra
    )


IXML_DOCUMENT = (
    b'<?xml version="1.0" encoding="UTF-8"?>'
    b"<BWFXML><IXML_VERSION>1.61</IXML_VERSION>"
    b"<PROJECT>Feature</PROJECT><SCENE>12</SCENE><TAKE>3</TAKE></BWFXML>"
)
