# src/spicelib_core/errors.py
import logging
from typing import Any, Dict, List, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

REPORT_TITLE = "SpiceLib Core: Actionable Diagnostic Report"
REPORT_WIDTH = 74

# Context keys rendered in the report header, in display order.
_CONTEXT_LABELS = (
    ("source_file", "Source File"),
    ("line_number", "Line Number"),
    ("user_input", "User Input"),
)


class SpiceLibError(Exception):
    """Base class for every error this package raises on purpose."""
    pass


@runtime_checkable
class Diagnosable(Protocol):
    """Anything that can render a multi-line, user-facing report of itself."""
    def get_diagnostic_report(self) -> str:
        ...


class DiagnosableError(SpiceLibError, Diagnosable):
    """
    Base class of the parser, configuration and index errors.

    Subclasses are dataclasses (eq=False) holding the offending input and must
    implement `get_diagnostic_report`; catching `SpiceLibError` covers all of them.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


def _indented(title: str, text: str) -> List[str]:
    return [f"\n{title}:"] + [f"  {line}" for line in text.splitlines()]


def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Renders the shared report layout used by every `DiagnosableError`.

    Args:
        error_type: Short category shown in the header, e.g. "Invalid Numeric Value".
        details: What went wrong; may span several lines.
        suggestion: How to fix it. Omitted from the report when empty.
        context: Optional `source_file`, `line_number` and `user_input` entries.
            Falsy entries are left out of the header.
    """
    lines = ["\n", f" {REPORT_TITLE} ".center(REPORT_WIDTH, "="), f"Error Type:     {error_type}"]
    for key, label in _CONTEXT_LABELS:
        value = context.get(key)
        if not value:
            continue
        shown = f"'{value}'" if key == "user_input" else value
        lines.append(f"{label + ':':<16}{shown}")

    lines.extend(_indented("Details", details))
    if suggestion:
        lines.extend(_indented("Suggestion", suggestion))

    lines.append("=" * REPORT_WIDTH)
    return "\n".join(lines)
