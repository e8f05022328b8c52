"""Forward-only byte source used by the chunk walker.

Wraps any binary stream (file, ``BytesIO``, pipe) and exposes the small
read/skip/at-end surface the RIFF walker needs. Stream failures, including
reads on a closed file, surface as :class:`SourceReadError`.
"""

import io
from typing import BinaryIO

from bwfmeta.format.errors import SourceReadError

# Block size used when skipping on streams that cannot seek
SKIP_BLOCK_SIZE = 64 * 1024


class ByteSource:
    """Sequential reader over a borrowed binary stream.

    The source never seeks backward. ``at_end`` is answered with a one-byte
    lookahead that is handed back on the next read.
    """

    def __init__(self, stream: BinaryIO) -> None:
        self._stream = stream
        self._pending = b""
        self._position = 0
        try:
            self._seekable = stream.seekable()
        except (OSError, ValueError) as e:
            raise SourceReadError(f"Cannot access source: {e}") from e

    @classmethod
    def from_bytes(cls, data: bytes) -> "ByteSource":
        """Create a source over an in-memory buffer."""
        return cls(io.BytesIO(data))

    @property
    def position(self) -> int:
        """Number of bytes consumed (read or skipped) so far."""
        return self._position

    def read(self, n: int) -> bytes:
        """Read up to ``n`` bytes. Returns fewer only at end of stream."""
        if n <= 0:
            return b""

        chunks = []
        if self._pending:
            chunks.append(self._pending)
            n -= len(self._pending)
            self._pending = b""

        while n > 0:
            block = self._raw_read(n)
            if not block:
                break
            chunks.append(block)
            n -= len(block)

        data = b"".join(chunks)
        self._position += len(data)
        return data

    def read_exact(self, n: int) -> bytes | None:
        """Read exactly ``n`` bytes, or return None on a short read."""
        data = self.read(n)
        return data if len(data) == n else None

    def skip(self, n: int) -> None:
        """Advance the read position by ``n`` bytes.

        Skipping past the end of the stream is not an error; the next read
        simply comes back short.
        """
        if n <= 0:
            return

        if self._pending:
            self._pending = b""
            self._position += 1
            n -= 1
            if n == 0:
                return

        if self._seekable:
            try:
                self._stream.seek(n, io.SEEK_CUR)
            except (OSError, ValueError) as e:
                raise SourceReadError(f"Cannot seek in source: {e}") from e
            self._position += n
            return

        while n > 0:
            block = self._raw_read(min(n, SKIP_BLOCK_SIZE))
            if not block:
                # Keep the cursor arithmetic consistent with the seekable path
                self._position += n
                return
            self._position += len(block)
            n -= len(block)

    def at_end(self) -> bool:
        """Return True when no further bytes can be read."""
        if self._pending:
            return False
        self._pending = self._raw_read(1)
        return not self._pending

    def _raw_read(self, n: int) -> bytes:
        try:
            data = self._stream.read(n)
        except (OSError, ValueError) as e:
            raise SourceReadError(f"Cannot read from source: {e}") from e
        if data is None:
            # Non-blocking stream with nothing available
            return b""
        return data
