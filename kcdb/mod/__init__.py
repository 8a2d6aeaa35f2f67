from .parser import decode, decode_file, decode_stream, decode_text
from .sexp import Node, parse, parse_text
from .models import (
    Module, Point2D, FpLine, FpCircle, FpArc, FpPoly, FpText, Pad, Drill
)
from .errors import (
    FootprintError, ParseError, NodeError, DecodeError,
    MalformedStructureError, MissingPrefixError, InvalidFieldError,
    UnrecognizedClauseError, UnsupportedPointKindError
)

__all__ = [
    "decode", "decode_file", "decode_stream", "decode_text",
    "Node", "parse", "parse_text",
    "Module", "Point2D", "FpLine", "FpCircle", "FpArc", "FpPoly", "FpText", "Pad", "Drill",
    "FootprintError", "ParseError", "NodeError", "DecodeError",
    "MalformedStructureError", "MissingPrefixError", "InvalidFieldError",
    "UnrecognizedClauseError", "UnsupportedPointKindError",
]
