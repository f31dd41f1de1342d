# src/spicelib_core/parser/exceptions.py
"""
Defines the diagnosable exceptions raised while decoding netlist and library text.

Every exception here derives from `BaseParsingError`, which hooks the family into the
package-wide `DiagnosableError` hierarchy. Each concrete class carries the offending
original text and implements `get_diagnostic_report`, so a caller can either catch
one concrete type or render an actionable report for any of them.

A malformed `.MODEL` statement has no exception here: it yields no record.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all text-decoding and file-reading errors.
    """
    def get_diagnostic_report(self) -> str:
        """
        Fallback report for subclasses that do not implement their own.
        """
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the SPICE text.",
            context={}
        )


@dataclass(eq=False)
class ValueParseError(BaseParsingError):
    """
    Raised when a field that was otherwise matched cannot be decoded as a number,
    e.g. the value token of `R1 in out 4.7x`.
    """
    token: str

    def __str__(self):
        return f"Unable to parse value: '{self.token}'"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Invalid Numeric Value",
            details=(
                f"The token '{self.token}' is not a number with an optional engineering suffix.\n"
                "Accepted suffixes: T G MEG K M U N P F A, optionally followed by one unit letter (H F V W O S)."
            ),
            suggestion="Write the value as a plain number (e.g. 4700, 4.7e3) or with a suffix (e.g. 4.7k, 10uF, 1MEG).",
            context={'user_input': self.token}
        )


@dataclass(eq=False)
class UnparsableLineError(BaseParsingError):
    """
    Raised when a content-bearing netlist line matches no known component shape and
    is not eligible to be the netlist title.
    """
    line: str
    line_number: Optional[int] = None

    def __str__(self):
        where = f" (line {self.line_number})" if self.line_number is not None else ""
        return f"Unable to parse component line{where}: {self.line}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Unparsable Netlist Line",
            details=(
                "The line does not match any supported component shape.\n"
                "Supported prefixes: R, C, L, V, I (two nodes and a value), D (two nodes and a model), "
                "Q and J (three nodes and a model), M (four nodes and a model), "
                "X (one or more nodes and a subcircuit name)."
            ),
            suggestion=(
                "Check the node count and trailing fields of the line. Only the first "
                "content line of a netlist may be a free-text title, and it must not start "
                "with a component prefix letter."
            ),
            context={'user_input': self.line, 'line_number': self.line_number}
        )


@dataclass(eq=False)
class ParsingError(BaseParsingError):
    """
    Raised for file-system problems while loading netlist or library text from disk:
    a missing file, a directory instead of a file, a permission error or bytes that
    are not valid UTF-8.
    """
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="SPICE File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and is UTF-8 encoded text.",
            context={'source_file': self.file_path}
        )
