"""Exceptions raised while walking and decoding RIFF/WAVE files."""


class RiffError(Exception):
    """Error reading a RIFF file."""


class SourceReadError(RiffError):
    """The byte source could not be read (missing, closed or failing)."""


class InvalidContainerError(RiffError):
    """The stream does not start with a RIFF tag."""


class InvalidFormatError(RiffError):
    """The RIFF form type is not WAVE."""


class InvalidChunkSizeError(RiffError):
    """A chunk header declares a size that cannot be represented.

    Once this happens every following offset is unknown, so the walk stops.
    """

    def __init__(self, chunk_id: bytes, declared_size: int, offset: int) -> None:
        self.chunk_id = chunk_id
        self.declared_size = declared_size
        self.offset = offset
        super().__init__(
            f"Invalid size {declared_size} for chunk {chunk_id!r} at offset {offset}"
        )


class ChunkDecodeError(RiffError):
    """A recognized chunk could not be decoded.

    Raised by the per-chunk decoders. The reader records it against the chunk
    and keeps walking.
    """

    def __init__(self, chunk_id: bytes, reason: str) -> None:
        self.chunk_id = chunk_id
        self.reason = reason
        super().__init__(f"Cannot decode {chunk_id.decode('latin-1')!r} chunk: {reason}")
