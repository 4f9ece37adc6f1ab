from .decoder import Decoder, decode, decode_bytes
from .encoder import Encoder, encode, encode_to_bytes
from .errors import (
    BencodeError,
    DecodeError,
    DepthLimitExceeded,
    EncodeError,
    MalformedGrammar,
    NumericOverflow,
    SinkFailure,
    TruncatedInput,
)
from .value import ByteString, Dictionary, Integer, List, Value, from_python

__all__ = [
    "BencodeError",
    "ByteString",
    "DecodeError",
    "Decoder",
    "DepthLimitExceeded",
    "Dictionary",
    "EncodeError",
    "Encoder",
    "Integer",
    "List",
    "MalformedGrammar",
    "NumericOverflow",
    "SinkFailure",
    "TruncatedInput",
    "Value",
    "decode",
    "decode_bytes",
    "encode",
    "encode_to_bytes",
    "from_python",
]
