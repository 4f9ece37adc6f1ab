import io


class ChunkedSource:
    """Readable source that hands back at most `chunk` bytes per read"""

    def __init__(self, data: bytes, chunk: int = 1):
        self.buf = io.BytesIO(data)
        self.chunk = chunk
        self.reads = 0

    def read(self, n: int = -1) -> bytes:
        self.reads += 1
        if n < 0:
            n = self.chunk
        return self.buf.read(min(n, self.chunk))


class BrokenSink:
    """Sink that fails once more than `limit` bytes have been written"""

    def __init__(self, limit: int = 0):
        self.limit = limit
        self.data = bytearray()

    def write(self, data: bytes) -> int:
        if len(self.data) + len(data) > self.limit:
            raise OSError(28, "No space left on device")
        self.data += data
        return len(data)


def nested_lists(depth: int) -> bytes:
    """Encoding of `depth` empty lists nested inside each other"""
    return b"l" * depth + b"e" * depth


class ShortWriteSink:
    """Sink that accepts at most `chunk` bytes per write and reports the count"""

    def __init__(self, chunk: int = 2):
        self.chunk = chunk
        self.data = bytearray()
        self.writes = 0

    def write(self, data) -> int:
        self.writes += 1
        taken = bytes(data[: self.chunk])
        self.data += taken
        return len(taken)
