from .codec import decode, decode_mappings, dumps, encode, encode_mappings, loads
from .exceptions import IndexOutOfRange, InvalidPosition, MalformedMapping, MalformedVlq, SourceMapError
from .merge import merge, merge_lines
from .model import GeneratedPosition, OriginalPosition, PositionIndex

__version__ = "0.1.0"

__all__ = [
    "decode",
    "decode_mappings",
    "dumps",
    "encode",
    "encode_mappings",
    "loads",
    "merge",
    "merge_lines",
    "GeneratedPosition",
    "OriginalPosition",
    "PositionIndex",
    "SourceMapError",
    "MalformedMapping",
    "MalformedVlq",
    "IndexOutOfRange",
    "InvalidPosition",
]
