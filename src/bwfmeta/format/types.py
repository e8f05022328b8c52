"""Python types for WAV broadcast metadata.

These types describe the decoded contents of the ``fmt ``, ``bext`` and
``iXML`` chunks and the aggregate result of a parse.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Generic, TypeVar

from bwfmeta.format.errors import ChunkDecodeError
from bwfmeta.format.riff import ChunkHeader, RiffEnvelope

T = TypeVar("T")


class AudioFormat(IntEnum):
    """Well-known WAVE format codes.

    Readers should keep the raw code for anything not listed here.
    """

    PCM = 0x0001
    """Uncompressed integer PCM."""

    ADPCM = 0x0002
    """Microsoft ADPCM."""

    IEEE_FLOAT = 0x0003
    """32/64-bit IEEE floating point."""

    ALAW = 0x0006
    """ITU G.711 a-law."""

    MULAW = 0x0007
    """ITU G.711 mu-law."""

    EXTENSIBLE = 0xFFFE
    """WAVE_FORMAT_EXTENSIBLE; the real format lives in the extension GUID."""

    @classmethod
    def from_code(cls, code: int) -> "AudioFormat | None":
        """Look up a format code, returning None for unknown codes."""
        try:
            return cls(code)
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        """Human-readable name for this format."""
        names = {
            AudioFormat.PCM: "PCM",
            AudioFormat.ADPCM: "ADPCM",
            AudioFormat.IEEE_FLOAT: "IEEE Float",
            AudioFormat.ALAW: "A-law",
            AudioFormat.MULAW: "mu-law",
            AudioFormat.EXTENSIBLE: "Extensible",
        }
        return names.get(self, "Unknown")


@dataclass(frozen=True)
class FormatInfo:
    """Audio encoding parameters from the ``fmt `` chunk.

    Byte rate and block align are present in the chunk but not kept.
    """

    audio_format_code: int
    channel_count: int
    sample_rate_hz: int
    bits_per_sample: int

    @property
    def audio_format(self) -> AudioFormat | None:
        """The format code as an enum, or None if it is not a known code."""
        return AudioFormat.from_code(self.audio_format_code)

    @property
    def is_pcm(self) -> bool:
        return self.audio_format_code == AudioFormat.PCM

    @property
    def format_label(self) -> str:
        """Display label: "PCM" or the compressed format code."""
        if self.is_pcm:
            return "PCM"
        return f"Compressed (Format ID: {self.audio_format_code})"


@dataclass(frozen=True)
class BroadcastExtension:
    """Production metadata from the Broadcast Wave ``bext`` chunk (EBU Tech 3285)."""

    description: str
    originator: str
    originator_reference: str
    origination_date: str
    """Date as written by the recorder, normally ``yyyy-mm-dd``."""

    origination_time: str
    """Time as written by the recorder, normally ``hh:mm:ss``."""

    time_reference_samples: int
    """First sample count since midnight."""

    def time_reference_seconds(self, sample_rate_hz: int) -> float:
        """Convert the time reference to seconds since midnight.

        Args:
            sample_rate_hz: Sample rate from the ``fmt `` chunk.

        Raises:
            ValueError: If the sample rate is not positive.
        """
        if sample_rate_hz <= 0:
            raise ValueError(f"Sample rate must be positive, got {sample_rate_hz}")
        return self.time_reference_samples / sample_rate_hz


@dataclass(frozen=True)
class IxmlMetadata:
    """The ``iXML`` chunk payload."""

    raw: bytes
    """Payload bytes as stored in the file."""

    text: str
    """Payload decoded as UTF-8, unchanged."""

    content: str
    """Re-indented XML when the payload parsed, otherwise ``text``."""

    well_formed: bool
    """Whether the payload parsed as an XML document."""


class ChunkStatus(Enum):
    """Outcome for one recognized chunk type."""

    FOUND = "found"
    """Chunk present and decoded."""

    ABSENT = "absent"
    """No chunk with this id in the file."""

    MALFORMED = "malformed"
    """Chunk present but could not be decoded."""


@dataclass(frozen=True)
class ChunkResult(Generic[T]):
    """Tagged result for one chunk type: found, absent or malformed."""

    status: ChunkStatus
    value: T | None = None
    error: ChunkDecodeError | None = field(default=None, compare=False)

    @classmethod
    def found(cls, value: T) -> "ChunkResult[T]":
        return cls(status=ChunkStatus.FOUND, value=value)

    @classmethod
    def absent(cls) -> "ChunkResult[T]":
        return cls(status=ChunkStatus.ABSENT)

    @classmethod
    def malformed(cls, error: ChunkDecodeError) -> "ChunkResult[T]":
        return cls(status=ChunkStatus.MALFORMED, error=error)

    @property
    def is_found(self) -> bool:
        return self.status is ChunkStatus.FOUND

    @property
    def is_present(self) -> bool:
        """True when the chunk id was seen, whether or not it decoded."""
        return self.status is not ChunkStatus.ABSENT

    @property
    def reason(self) -> str | None:
        """Why decoding failed, for malformed chunks."""
        return self.error.reason if self.error is not None else None


@dataclass(frozen=True)
class ParseResult:
    """Everything extracted from one WAV file."""

    envelope: RiffEnvelope
    fmt: ChunkResult[FormatInfo] = field(default_factory=ChunkResult.absent)
    bext: ChunkResult[BroadcastExtension] = field(default_factory=ChunkResult.absent)
    ixml: ChunkResult[IxmlMetadata] = field(default_factory=ChunkResult.absent)
    chunks: tuple[ChunkHeader, ...] = ()
    """Every chunk header seen, in file order."""

    @property
    def format_info(self) -> FormatInfo | None:
        return self.fmt.value

    @property
    def broadcast_extension(self) -> BroadcastExtension | None:
        return self.bext.value

    @property
    def ixml_metadata(self) -> IxmlMetadata | None:
        return self.ixml.value

    @property
    def chunk_ids(self) -> list[str]:
        """Chunk ids in file order."""
        return [chunk.label for chunk in self.chunks]

    @property
    def errors(self) -> list[ChunkDecodeError]:
        """Decode failures for the recognized chunks."""
        return [
            result.error
            for result in (self.fmt, self.bext, self.ixml)
            if result.error is not None
        ]
