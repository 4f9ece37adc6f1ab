"""The bencode value model.

A decoded stream is a tree of four immutable node types::

    Integer     i42e
    ByteString  4:spam
    List        l4:spami42ee
    Dictionary  d3:bar4:spam3:fooi42ee

Equality is structural and order-sensitive: two dictionaries holding the
same entries in a different order are different values, because they
encode to different bytes.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field

from .grammar import INT64_MAX, INT64_MIN


class Value(ABC):
    """Common base of the four bencode node types."""

    __slots__ = ()

    @abstractmethod
    def to_python(self):
        """Return the value as plain int, bytes, list and dict objects."""


@dataclass(frozen=True)
class Integer(Value):
    value: int

    def __post_init__(self):
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Integer needs an int, got {type(self.value).__name__}")
        if not INT64_MIN <= self.value <= INT64_MAX:
            raise ValueError(f"{self.value} is outside the 64-bit range")

    def __int__(self) -> int:
        return self.value

    def __str__(self) -> str:
        return str(self.value)

    def to_python(self) -> int:
        return self.value


@dataclass(frozen=True)
class ByteString(Value):
    value: bytes

    def __post_init__(self):
        if isinstance(self.value, (bytearray, memoryview)):
            object.__setattr__(self, "value", bytes(self.value))
        elif not isinstance(self.value, bytes):
            raise TypeError(
                f"ByteString needs a bytes-like object, got {type(self.value).__name__}"
            )

    def __len__(self) -> int:
        return len(self.value)

    def __bytes__(self) -> bytes:
        return self.value

    def __str__(self) -> str:
        return self.value.decode("utf-8", errors="backslashreplace")

    def to_python(self) -> bytes:
        return self.value


@dataclass(frozen=True)
class List(Value):
    items: tuple = ()

    def __post_init__(self):
        items = tuple(self.items)
        for item in items:
            if not isinstance(item, Value):
                raise TypeError(f"List item is not a Value: {item!r}")
        object.__setattr__(self, "items", items)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index):
        return self.items[index]

    def __str__(self) -> str:
        return "[" + ", ".join(str(x) for x in self.items) + "]"

    def to_python(self) -> list:
        return [x.to_python() for x in self.items]


@dataclass(frozen=True)
class Dictionary(Value):
    """Key/value pairs in the order they were given or decoded.

    Keys are always ByteString and unique. `entries` accepts a mapping or
    an iterable of pairs; raw bytes keys are wrapped in ByteString.
    """

    entries: tuple = ()
    _index: dict = field(init=False, repr=False, compare=False, hash=False)

    def __post_init__(self):
        pairs = self.entries.items() if isinstance(self.entries, Mapping) else self.entries

        entries = []
        index = {}
        for k, v in pairs:
            if isinstance(k, (bytes, bytearray, memoryview)):
                k = ByteString(k)
            if not isinstance(k, ByteString):
                raise TypeError(f"Dictionary key must be a byte string, got {k!r}")
            if not isinstance(v, Value):
                raise TypeError(f"Dictionary value is not a Value: {v!r}")
            if k.value in index:
                raise ValueError(f"Duplicate dictionary key {k.value!r}")

            index[k.value] = v
            entries.append((k, v))

        object.__setattr__(self, "entries", tuple(entries))
        object.__setattr__(self, "_index", index)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return (k for k, _ in self.entries)

    def __contains__(self, key) -> bool:
        return _raw_key(key) in self._index

    def __getitem__(self, key) -> Value:
        return self._index[_raw_key(key)]

    def get(self, key, default=None):
        return self._index.get(_raw_key(key), default)

    def keys(self) -> list:
        return [k for k, _ in self.entries]

    def values(self) -> list:
        return [v for _, v in self.entries]

    def items(self) -> list:
        return list(self.entries)

    def is_sorted(self) -> bool:
        """True when keys are in strictly ascending raw byte order."""
        keys = [k.value for k, _ in self.entries]
        return all(a < b for a, b in zip(keys, keys[1:]))

    def sorted(self) -> "Dictionary":
        """Return a copy with keys in canonical order."""
        return Dictionary(sorted(self.entries, key=lambda kv: kv[0].value))

    def __str__(self) -> str:
        return "{" + ", ".join(f"{k}: {v}" for k, v in self.entries) + "}"

    def to_python(self) -> dict:
        return {k.value: v.to_python() for k, v in self.entries}


def _raw_key(key) -> bytes:
    if isinstance(key, ByteString):
        return key.value
    if isinstance(key, str):
        return key.encode()
    if isinstance(key, (bytes, bytearray, memoryview)):
        return bytes(key)
    raise TypeError(f"Dictionary keys are byte strings, got {key!r}")


def from_python(obj) -> Value:
    """Build a value tree from plain Python objects.

    str is encoded as UTF-8. Dictionary order follows the input mapping.
    """
    match obj:
        case Value():
            return obj

        case bool():
            raise TypeError("bool has no bencode representation")

        case int():
            return Integer(obj)

        case bytes() | bytearray() | memoryview():
            return ByteString(obj)

        case str():
            return ByteString(obj.encode())

        case list() | tuple():
            return List(from_python(x) for x in obj)

        case dict():
            return Dictionary(
                (k.encode() if isinstance(k, str) else k, from_python(v))
                for k, v in obj.items()
            )

        case _:
            raise TypeError(f"{type(obj).__name__} has no bencode representation")
