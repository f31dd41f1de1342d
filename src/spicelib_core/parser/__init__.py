# src/spicelib_core/parser/__init__.py
from .records import (
    ComponentKind,
    ComponentRecord,
    ModelRecord,
    SubcircuitRecord,
    ParsedNetlist,
    ParsedLibrary,
)
from .values import parse_value, parse_model_parameter_value
from .components import ComponentLineRecognizer
from .models import ModelBlockParser, map_model_type
from .subcircuits import SubcircuitBlockParser, parse_comment_metadata, TS_PARAMETER_NAMES
from .netlist import NetlistParser
from .library import LibraryParser
from .exceptions import BaseParsingError, ParsingError, UnparsableLineError, ValueParseError

__all__ = [
    # Records
    "ComponentKind",
    "ComponentRecord",
    "ModelRecord",
    "SubcircuitRecord",
    "ParsedNetlist",
    "ParsedLibrary",
    # Value decoding
    "parse_value",
    "parse_model_parameter_value",
    # Parsers
    "ComponentLineRecognizer",
    "ModelBlockParser",
    "map_model_type",
    "SubcircuitBlockParser",
    "parse_comment_metadata",
    "TS_PARAMETER_NAMES",
    "NetlistParser",
    "LibraryParser",
    # Exceptions
    "BaseParsingError",
    "ParsingError",
    "UnparsableLineError",
    "ValueParseError",
]
