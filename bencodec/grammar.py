"""Lexical rules shared by the integer and byte string parsers."""

INTEGER_START = b"i"
LIST_START = b"l"
DICT_START = b"d"
END = b"e"
STRING_SEPARATOR = b":"
MINUS = b"-"

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Longest digit run that can still fit in 64 bits: len(str(INT64_MAX)).
MAX_DIGITS = 19

DEFAULT_MAX_DEPTH = 256


def is_digit(c: bytes) -> bool:
    return len(c) == 1 and b"0" <= c <= b"9"


def parse_digits(digits: bytes, negative: bool = False) -> int:
    """Convert a digit run to an int, enforcing the canonical rules.

    Raises ValueError when the run is empty, holds a non-digit, has a
    leading zero, or is the negative zero. Raises OverflowError when the
    value falls outside the signed 64-bit range.
    """
    if not digits:
        raise ValueError("empty digit run")

    if not all(is_digit(digits[i : i + 1]) for i in range(len(digits))):
        raise ValueError(f"non-digit in {digits!r}")

    if digits[:1] == b"0" and len(digits) > 1:
        raise ValueError(f"leading zero in {digits!r}")

    if negative and digits == b"0":
        raise ValueError("negative zero")

    if len(digits) > MAX_DIGITS:
        raise OverflowError(f"{len(digits)} digits exceed the 64-bit range")

    n = int(digits)
    if negative:
        n = -n

    if not INT64_MIN <= n <= INT64_MAX:
        raise OverflowError(f"{n} is outside the 64-bit range")

    return n


def format_int(n: int) -> bytes:
    return str(n).encode("ascii")
