import io

import pytest

from bencodec import (
    ByteString,
    Dictionary,
    EncodeError,
    Encoder,
    Integer,
    List,
    SinkFailure,
    decode,
    encode,
    encode_to_bytes,
    from_python,
)
from .utils import BrokenSink, ShortWriteSink


class TestEncoder:
    """Test suite for the bencode Encoder."""

    def test_encode_string(self):
        """Test encoding of byte strings."""
        assert encode_to_bytes(ByteString(b"spam")) == b"4:spam"

    def test_encode_empty_string(self):
        """Test encoding of empty string."""
        assert encode_to_bytes(ByteString(b"")) == b"0:"

    def test_encode_integer(self):
        """Test encoding of positive integers."""
        assert encode_to_bytes(Integer(42)) == b"i42e"

    def test_encode_negative_integer(self):
        """Test encoding of negative integers."""
        assert encode_to_bytes(Integer(-1)) == b"i-1e"

    def test_encode_zero(self):
        """Test encoding of zero."""
        assert encode_to_bytes(Integer(0)) == b"i0e"

    def test_encode_list(self):
        """Test encoding of lists."""
        value = List([ByteString(b"spam"), Integer(42)])
        assert encode_to_bytes(value) == b"l4:spami42ee"

    def test_encode_empty_list(self):
        """Test encoding of empty list."""
        assert encode_to_bytes(List()) == b"le"

    def test_encode_nested_list(self):
        """Test encoding of nested lists."""
        assert encode_to_bytes(List([List([ByteString(b"spam")])])) == b"ll4:spamee"

    def test_encode_dict(self):
        """Test encoding of dictionaries."""
        value = Dictionary([(b"bar", ByteString(b"spam")), (b"foo", Integer(42))])
        assert encode_to_bytes(value) == b"d3:bar4:spam3:fooi42ee"

    def test_encode_empty_dict(self):
        """Test encoding of empty dictionary."""
        assert encode_to_bytes(Dictionary()) == b"de"

    def test_encode_dict_keeps_order(self):
        """Test that dictionary keys are written in stored order."""
        value = from_python({b"z": b"last", b"a": b"first", b"m": b"middle"})
        assert encode_to_bytes(value) == b"d1:z4:last1:a5:first1:m6:middlee"

    def test_encode_sorted_dict(self):
        """Test that Dictionary.sorted() gives the canonical key order."""
        value = from_python({b"z": b"last", b"a": b"first", b"m": b"middle"})
        assert encode_to_bytes(value.sorted()) == b"d1:a5:first1:m6:middle1:z4:laste"

    def test_encode_complex_structure(self):
        """Test encoding of complex nested structure."""
        data = from_python({b"int": 42, b"list": [b"spam", b"eggs"]})
        assert encode_to_bytes(data) == b"d3:inti42e4:listl4:spam4:eggsee"

    def test_encode_invalid_type(self):
        """Test that encoding a plain Python object raises TypeError."""
        with pytest.raises(TypeError):
            encode_to_bytes(b"spam")

    def test_encode_invalid_nested_type(self):
        """Test that plain objects cannot hide inside containers."""
        with pytest.raises(TypeError):
            List([b"spam"])


class TestSink:
    """Test suite for writing to caller supplied sinks."""

    def test_encode_to_stream(self):
        """Test that encode writes to a file-like sink."""
        buf = io.BytesIO()
        encode(from_python([1, b"a"]), buf)
        assert buf.getvalue() == b"li1e1:ae"

    def test_encoder_counts_bytes(self):
        """Test the written counter."""
        encoder = Encoder(io.BytesIO())
        encoder.encode(ByteString(b"spam"))
        encoder.encode(Integer(7))
        assert encoder.written == 9

    def test_sink_failure(self):
        """Test that sink errors surface as SinkFailure."""
        sink = BrokenSink(limit=5)
        with pytest.raises(SinkFailure) as exc_info:
            encode(from_python([b"spam", b"eggs"]), sink)

        assert isinstance(exc_info.value.__cause__, OSError)
        assert isinstance(exc_info.value, EncodeError)
        assert bytes(sink.data) == b"l4:"

    def test_sink_failure_on_first_write(self):
        """Test a sink that fails immediately."""
        with pytest.raises(SinkFailure):
            encode(Integer(1), BrokenSink(limit=0))

    def test_short_writes(self):
        """Test that partial writes are retried until all bytes are out."""
        sink = ShortWriteSink(chunk=2)
        value = from_python({b"key": b"spamspam"})
        encoder = Encoder(sink)
        encoder.encode(value)

        assert bytes(sink.data) == b"d3:key8:spamspame"
        assert encoder.written == len(sink.data)
        assert decode(bytes(sink.data)) == value

    def test_sink_accepting_nothing(self):
        """Test that a sink writing zero bytes is a failure, not a hang."""
        with pytest.raises(SinkFailure, match="no bytes"):
            encode(Integer(1), ShortWriteSink(chunk=0))

    def test_closed_sink(self):
        """Test that writing to a closed stream surfaces as SinkFailure."""
        buf = io.BytesIO()
        buf.close()
        with pytest.raises(SinkFailure) as exc_info:
            encode(from_python([b"spam"]), buf)

        assert isinstance(exc_info.value.__cause__, ValueError)


@pytest.mark.parametrize(
    "data,expected",
    [
        (b"test", b"4:test"),
        ("test", b"4:test"),
        (0, b"i0e"),
        (-42, b"i-42e"),
        ([], b"le"),
        ({}, b"de"),
        ({"a": [1, {}]}, b"d1:ali1edeee"),
    ],
)
def test_parametrized_encode(data, expected):
    """Parametrized test for various encode scenarios."""
    assert encode_to_bytes(from_python(data)) == expected
