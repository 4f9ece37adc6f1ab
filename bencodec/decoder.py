import logging
from contextlib import contextmanager

from . import grammar
from .errors import (
    DecodeError,
    DepthLimitExceeded,
    MalformedGrammar,
    NumericOverflow,
    TruncatedInput,
)
from .stream import ByteReader
from .value import ByteString, Dictionary, Integer, List, Value

logger = logging.getLogger(__name__)


class Decoder:
    """Recursive descent decoder over a byte source.

    Reads exactly one value per `decode()` call, one byte at a time, and
    never looks further ahead than the byte it is dispatching on.

    max_depth bounds how many containers may be open at once.
    sorted_keys makes dictionaries with keys out of ascending order an
    error instead of preserving the order they were read in.
    """

    def __init__(
        self,
        source,
        *,
        max_depth: int = grammar.DEFAULT_MAX_DEPTH,
        sorted_keys: bool = False,
    ):
        self.reader = ByteReader(source)
        self.max_depth = max_depth
        self.sorted_keys = sorted_keys
        self.depth = 0

    def decode(self) -> Value:
        start = self.reader.offset
        try:
            value = self.decode_one()
            if value is None:
                raise self.error(MalformedGrammar, "Unexpected end marker")
        except DecodeError as e:
            logger.debug(f"Decode failed: {e}")
            raise

        logger.debug(
            f"Decoded {type(value).__name__} ({self.reader.offset - start} bytes)"
        )
        return value

    def decode_one(self) -> Value | None:
        """Decode the next value, or return None if an end marker was read."""
        c = self.advance()
        match c:
            case _ if grammar.is_digit(c):
                return self.read_string(c)

            case grammar.INTEGER_START:
                return self.read_integer()

            case grammar.LIST_START:
                return self.read_list()

            case grammar.DICT_START:
                return self.read_dict()

            case grammar.END:
                return None

            case _:
                raise self.error(MalformedGrammar, f"Wrong start literal {c!r}")

    def read_string(self, first: bytes) -> ByteString:
        digits = bytearray(first)
        while (c := self.advance()) != grammar.STRING_SEPARATOR:
            if not grammar.is_digit(c):
                raise self.error(MalformedGrammar, f"Wrong literal {c!r} in string length")
            digits += c
            if digits[:1] == b"0" and len(digits) > 1:
                raise self.error(MalformedGrammar, "Leading zero in number")
            if len(digits) > grammar.MAX_DIGITS:
                raise self.error(NumericOverflow, "String length does not fit in 64 bits")

        length = self.read_number(bytes(digits))
        data = self.reader.read_exact(length)
        if len(data) < length:
            raise self.error(
                TruncatedInput,
                f"Byte string declares {length} bytes, only {len(data)} available",
            )

        return ByteString(data)

    def read_integer(self) -> Integer:
        negative = False
        digits = bytearray()

        c = self.advance()
        if c == grammar.MINUS:
            negative = True
            c = self.advance()

        while c != grammar.END:
            if not grammar.is_digit(c):
                raise self.error(MalformedGrammar, f"Wrong literal {c!r} in integer")
            digits += c
            if digits[:1] == b"0" and len(digits) > 1:
                raise self.error(MalformedGrammar, "Leading zero in number")
            if len(digits) > grammar.MAX_DIGITS:
                raise self.error(NumericOverflow, "Integer does not fit in 64 bits")
            c = self.advance()

        return Integer(self.read_number(bytes(digits), negative))

    def read_list(self) -> List:
        items = []
        with self.nested():
            while (item := self.decode_one()) is not None:
                items.append(item)

        return List(items)

    def read_dict(self) -> Dictionary:
        entries = []
        seen = set()

        with self.nested():
            while (key := self.decode_one()) is not None:
                if not isinstance(key, ByteString):
                    raise self.error(
                        MalformedGrammar,
                        f"Dictionary key must be a byte string, got {type(key).__name__}",
                    )

                if key.value in seen:
                    raise self.error(MalformedGrammar, f"Duplicate dictionary key {key.value!r}")

                if self.sorted_keys and entries and key.value < entries[-1][0].value:
                    raise self.error(
                        MalformedGrammar,
                        f"Dictionary keys are not sorted. {key.value!r} after {entries[-1][0].value!r}",
                    )

                value = self.decode_one()
                if value is None:
                    raise self.error(MalformedGrammar, f"Dictionary key {key.value!r} has no value")

                seen.add(key.value)
                entries.append((key, value))

        return Dictionary(entries)

    def read_number(self, digits: bytes, negative: bool = False) -> int:
        try:
            return grammar.parse_digits(digits, negative)
        except OverflowError as e:
            raise self.error(NumericOverflow, str(e)) from None
        except ValueError as e:
            raise self.error(MalformedGrammar, f"Invalid number: {e}") from None

    def advance(self) -> bytes:
        c = self.reader.read_byte()
        if c is None:
            raise self.error(TruncatedInput, "Unexpected end of stream")

        return c

    @contextmanager
    def nested(self):
        if self.depth >= self.max_depth:
            raise self.error(
                DepthLimitExceeded, f"Nesting deeper than {self.max_depth} containers"
            )

        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def error(self, kind: type[DecodeError], msg: str) -> DecodeError:
        return kind(msg, offset=self.reader.offset, depth=self.depth)


def decode(source, **options) -> Value:
    """Decode one value from a bytes-like object or readable stream."""
    return Decoder(source, **options).decode()


def decode_bytes(data: bytes, **options) -> Value:
    """Decode a buffer holding exactly one value; trailing bytes are an error."""
    decoder = Decoder(data, **options)
    value = decoder.decode()

    offset = decoder.reader.offset
    if decoder.reader.read_byte() is not None:
        e = MalformedGrammar("Trailing data after value", offset=offset)
        logger.debug(f"Decode failed: {e}")
        raise e

    return value
