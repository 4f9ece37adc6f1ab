"""Byte source and sink collaborators.

A source is a bytes-like object or anything with a `read(n)` method; an
empty read means end of stream. A sink is anything with `write(data)`.
"""

import io
from typing import Protocol


class ByteSource(Protocol):
    def read(self, n: int = -1) -> bytes: ...


class ByteSink(Protocol):
    def write(self, data: bytes) -> int | None: ...


class ByteReader:
    """Sequential reader over a source that counts consumed bytes."""

    def __init__(self, source: ByteSource | bytes | bytearray | memoryview):
        if isinstance(source, (bytes, bytearray, memoryview)):
            source = io.BytesIO(source)
        elif not callable(getattr(source, "read", None)):
            raise TypeError(f"{type(source).__name__} is not a readable byte source")

        self.source = source
        self.offset = 0

    def read_byte(self) -> bytes | None:
        """Return the next byte, or None at end of stream."""
        c = self.source.read(1)
        if not c:
            return None

        self.offset += 1
        return bytes(c)

    def read_exact(self, n: int) -> bytes:
        """Read n bytes, returning fewer only if the stream ends first."""
        chunks = []
        remaining = n
        while remaining > 0:
            # Sockets and pipes may hand back short reads
            chunk = self.source.read(min(remaining, io.DEFAULT_BUFFER_SIZE))
            if not chunk:
                break

            chunks.append(bytes(chunk))
            remaining -= len(chunk)
            self.offset += len(chunk)

        return b"".join(chunks)
