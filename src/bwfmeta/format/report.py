"""Plain-text and JSON-ready renderings of a ParseResult."""

from typing import Any

from bwfmeta.format.types import ChunkResult, ChunkStatus, ParseResult


def format_report(result: ParseResult, *, raw_xml: bool = False) -> str:
    """Render a ParseResult as a human-readable report.

    Args:
        result: The parse result to render.
        raw_xml: Show the iXML payload as stored instead of re-indented.

    Returns:
        Multi-line report with format, bext and iXML sections.
    """
    sections = [
        _format_section(result),
        _bext_section(result),
        _ixml_section(result, raw_xml=raw_xml),
    ]
    return "\n\n".join(sections)


def _heading(title: str) -> list[str]:
    return [title, "-" * len(title)]


def _malformed(label: str, chunk: ChunkResult[Any]) -> str:
    return f"{label} chunk present but could not be decoded: {chunk.reason}"


def _format_section(result: ParseResult) -> str:
    if result.fmt.status is ChunkStatus.MALFORMED:
        return _malformed("WAV Format (fmt)", result.fmt)
    fmt = result.format_info
    if fmt is None:
        return "WAV Format data (fmt chunk) not found."

    lines = _heading("WAV File Properties:")
    lines.append(f"Audio Format: {fmt.format_label}")
    lines.append(f"Channels: {fmt.channel_count}")
    lines.append(f"Sample Rate: {fmt.sample_rate_hz} Hz")
    lines.append(f"Bit Depth: {fmt.bits_per_sample} bits")
    return "\n".join(lines)


def _bext_section(result: ParseResult) -> str:
    if result.bext.status is ChunkStatus.MALFORMED:
        return _malformed("Broadcast Extension (bext)", result.bext)
    bext = result.broadcast_extension
    if bext is None:
        return "No Broadcast Extension (bext) chunk found in this file."

    lines = _heading("Broadcast Extension (bext) Data:")
    lines.append(f"Description: {bext.description}")
    lines.append(f"Originator: {bext.originator}")
    lines.append(f"Originator Ref: {bext.originator_reference}")
    lines.append(f"Origination Date: {bext.origination_date}")
    lines.append(f"Origination Time: {bext.origination_time}")
    lines.append(f"Time Reference: {bext.time_reference_samples} (samples since midnight)")
    fmt = result.format_info
    if fmt is not None and fmt.sample_rate_hz > 0:
        seconds = bext.time_reference_seconds(fmt.sample_rate_hz)
        lines.append(f"Time Reference (seconds): {seconds:.3f}")
    return "\n".join(lines)


def _ixml_section(result: ParseResult, *, raw_xml: bool) -> str:
    if result.ixml.status is ChunkStatus.MALFORMED:
        return _malformed("iXML", result.ixml)
    ixml = result.ixml_metadata
    if ixml is None:
        return "No iXML chunk was found in this file."

    lines = _heading("iXML Metadata:")
    if not ixml.well_formed:
        lines.append("(not well-formed XML, shown as stored)")
    lines.append(ixml.text if raw_xml else ixml.content)
    return "\n".join(lines)


def result_to_dict(result: ParseResult) -> dict[str, Any]:
    """Convert a ParseResult into JSON-serializable data."""
    data: dict[str, Any] = {
        "riff_size": result.envelope.riff_size,
        "chunks": [
            {"id": chunk.label, "size": chunk.size, "offset": chunk.offset}
            for chunk in result.chunks
        ],
    }

    fmt = result.format_info
    data["fmt"] = _chunk_to_dict(result.fmt)
    if fmt is not None:
        data["fmt"].update(
            {
                "audio_format_code": fmt.audio_format_code,
                "audio_format": fmt.format_label,
                "channel_count": fmt.channel_count,
                "sample_rate_hz": fmt.sample_rate_hz,
                "bits_per_sample": fmt.bits_per_sample,
            }
        )

    bext = result.broadcast_extension
    data["bext"] = _chunk_to_dict(result.bext)
    if bext is not None:
        data["bext"].update(
            {
                "description": bext.description,
                "originator": bext.originator,
                "originator_reference": bext.originator_reference,
                "origination_date": bext.origination_date,
                "origination_time": bext.origination_time,
                "time_reference_samples": bext.time_reference_samples,
            }
        )

    ixml = result.ixml_metadata
    data["ixml"] = _chunk_to_dict(result.ixml)
    if ixml is not None:
        data["ixml"].update({"well_formed": ixml.well_formed, "content": ixml.content})

    return data


def _chunk_to_dict(chunk: ChunkResult[Any]) -> dict[str, Any]:
    data: dict[str, Any] = {"status": chunk.status.value}
    if chunk.reason is not None:
        data["error"] = chunk.reason
    return data
