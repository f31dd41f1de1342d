# src/spicelib_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("SpiceLib Core package initialized.")

from .parser import (
    ComponentKind, ComponentRecord, ModelRecord, SubcircuitRecord, ParsedNetlist, ParsedLibrary,
    NetlistParser, LibraryParser, parse_value,
    ParsingError, UnparsableLineError, ValueParseError,
)
from .library import LibraryIndex
from .config import LibraryConfig, load_library_config, ConfigError, ConfigValidationError
from .units import ureg, pint, Quantity, component_value_quantity, ts_parameter_quantities
from .errors import SpiceLibError, DiagnosableError


def parse_netlist(netlist: str) -> ParsedNetlist:
    """Parses netlist text with a fresh `NetlistParser`."""
    return NetlistParser().parse(netlist)


def parse_library(library_text: str) -> ParsedLibrary:
    """Parses library text with a fresh `LibraryParser`."""
    return LibraryParser().parse(library_text)


__all__ = [
    # Records
    "ComponentKind", "ComponentRecord", "ModelRecord", "SubcircuitRecord",
    "ParsedNetlist", "ParsedLibrary",
    # Parsers
    "NetlistParser", "LibraryParser", "parse_value", "parse_netlist", "parse_library",
    # Library index and configuration
    "LibraryIndex", "LibraryConfig", "load_library_config",
    # Units
    "ureg", "pint", "Quantity", "component_value_quantity", "ts_parameter_quantities",
    # Errors (Actionable Diagnostics)
    "SpiceLibError", "DiagnosableError", "ParsingError", "UnparsableLineError", "ValueParseError",
    "ConfigError", "ConfigValidationError",
]
