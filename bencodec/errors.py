"""Exception hierarchy for bencodec.

Malformed input always surfaces as a DecodeError subclass. Programmer
errors, such as building a value out of range or encoding an object that
is not a Value, raise the built-in TypeError / ValueError instead.
"""


class BencodeError(Exception):
    """Base exception for all bencodec errors."""

    pass


class DecodeError(BencodeError, ValueError):
    """Raised when the input stream is not valid bencode.

    Attributes:
        offset: number of bytes consumed when the failure was detected
        depth: container nesting level at that point
    """

    def __init__(self, msg: str, offset: int | None = None, depth: int = 0) -> None:
        if offset is not None:
            msg = f"{msg} (at offset {offset})"
        super().__init__(msg)
        self.offset = offset
        self.depth = depth


class MalformedGrammar(DecodeError):
    """Wrong lead byte, bad digit run, bad sign or zero, bad dictionary key."""

    pass


class DepthLimitExceeded(MalformedGrammar):
    """Containers are nested deeper than the decoder allows."""

    pass


class TruncatedInput(DecodeError):
    """End of stream reached in the middle of a value."""

    pass


class NumericOverflow(DecodeError):
    """An integer or length field does not fit in 64 bits."""

    pass


class EncodeError(BencodeError):
    """Raised when a value cannot be written out."""

    pass


class SinkFailure(EncodeError):
    """The underlying sink failed; the original error is the __cause__."""

    pass
