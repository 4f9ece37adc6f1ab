import io
import logging

from . import grammar
from .errors import SinkFailure
from .stream import ByteSink
from .value import ByteString, Dictionary, Integer, List, Value

logger = logging.getLogger(__name__)


class Encoder:
    """Writes values to a sink in canonical form.

    Dictionaries are written in their stored order; call
    `Dictionary.sorted()` first when the output must have sorted keys.
    """

    def __init__(self, sink: ByteSink):
        self.sink = sink
        self.written = 0

    def encode(self, value: Value) -> None:
        start = self.written
        self.encode_one(value)
        logger.debug(f"Encoded {type(value).__name__} ({self.written - start} bytes)")

    def encode_one(self, value: Value) -> None:
        match value:
            case Dictionary():
                self.encode_dict(value)

            case List():
                self.encode_list(value)

            case Integer():
                self.encode_int(value)

            case ByteString():
                self.encode_string(value)

            case _:
                raise TypeError(f"Cannot encode {type(value).__name__}, expected a Value")

    def encode_string(self, s: ByteString) -> None:
        self.write(grammar.format_int(len(s.value)) + grammar.STRING_SEPARATOR)
        self.write(s.value)

    def encode_int(self, i: Integer) -> None:
        self.write(grammar.INTEGER_START + grammar.format_int(i.value) + grammar.END)

    def encode_list(self, lst: List) -> None:
        self.write(grammar.LIST_START)
        for item in lst.items:
            self.encode_one(item)
        self.write(grammar.END)

    def encode_dict(self, d: Dictionary) -> None:
        self.write(grammar.DICT_START)
        for k, v in d.entries:
            self.encode_string(k)
            self.encode_one(v)
        self.write(grammar.END)

    def write(self, data: bytes) -> None:
        view = memoryview(data)
        while view:
            try:
                n = self.sink.write(view)
            except (OSError, ValueError) as e:
                raise SinkFailure(
                    f"Write to sink failed after {self.written} bytes: {e}"
                ) from e

            # None means the sink took everything
            if n is None:
                n = len(view)
            if n == 0:
                raise SinkFailure(f"Sink accepted no bytes after {self.written} bytes")

            view = view[n:]
            self.written += n


def encode(value: Value, sink: ByteSink) -> None:
    """Write the canonical encoding of value to sink."""
    Encoder(sink).encode(value)


def encode_to_bytes(value: Value) -> bytes:
    buf = io.BytesIO()
    Encoder(buf).encode(value)
    return buf.getvalue()
