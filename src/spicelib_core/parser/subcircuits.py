# src/spicelib_core/parser/subcircuits.py
"""
Extraction of `.SUBCKT ... .ENDS` blocks from SPICE library text.

Besides the pins and the body of each block, the parser mines the comment block that
precedes a `.SUBCKT` header for `KEY: VALUE` metadata. Loudspeaker libraries use this
to publish Thiele/Small parameters next to the driver model:

    * MANUFACTURER: Acme Corp
    * FS: 42.5 Hz
    * QTS: 0.38
    .SUBCKT WOOFER_8 plus minus
    ...
    .ENDS

Numeric T/S keys land in `ts_parameters` (unit text after the number is ignored);
every other key is kept verbatim in `metadata`.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

from .models import clean_continuation_line, strip_inline_comment
from .records import SubcircuitRecord
from .values import parse_float_literal

logger = logging.getLogger(__name__)

SUBCKT_HEADER_REGEX = re.compile(r"^\.SUBCKT\s+(\w+)(?:\s+(.*))?$", re.IGNORECASE)

TS_PARAMETER_NAMES: FrozenSet[str] = frozenset({
    "FS", "QTS", "QES", "QMS", "VAS", "RE", "LE", "BL", "XMAX", "MMS", "CMS", "SD",
    "SENSITIVITY",
})


def parse_comment_metadata(comment_lines: List[str]) -> Tuple[Dict[str, str], Dict[str, float]]:
    """
    Splits `KEY: VALUE` comment lines into (metadata, ts_parameters).

    Lines without a colon, or with an empty key or value, are ignored. Keys are
    upper-cased. A T/S value whose first token is not a number is dropped.
    """
    metadata: Dict[str, str] = {}
    ts_parameters: Dict[str, float] = {}

    for comment_line in comment_lines:
        line = comment_line.lstrip("*").strip()
        key, sep, value = line.partition(":")
        key, value = key.strip(), value.strip()
        if not sep or not key or not value:
            continue

        key = key.upper()
        if key in TS_PARAMETER_NAMES:
            number = parse_float_literal(value.split()[0])
            if number is None:
                logger.debug(f"Dropping non-numeric T/S parameter {key}: '{value}'")
                continue
            ts_parameters[key] = number
        else:
            metadata[key] = value

    return metadata, ts_parameters


@dataclass
class _OpenBlock:
    """Per-block buffers while a `.SUBCKT` is open."""
    name: str
    pins: List[str]
    metadata: Dict[str, str]
    ts_parameters: Dict[str, float]
    body_lines: List[str] = field(default_factory=list)

    def finalize(self) -> Optional[SubcircuitRecord]:
        if not self.name or not self.pins:
            logger.debug(f"Dropping subcircuit block with empty name or pin list: name='{self.name}'")
            return None
        cleaned = [c for c in (clean_continuation_line(line) for line in self.body_lines) if c]
        return SubcircuitRecord(
            name=self.name,
            pins=tuple(self.pins),
            body="\n".join(cleaned),
            metadata=self.metadata,
            ts_parameters=self.ts_parameters,
        )


class SubcircuitBlockParser:
    """
    Collects every `.SUBCKT` block of a library text.

    A block still open when the next `.SUBCKT` or the end of input arrives is
    finalized with whatever it collected, so a missing `.ENDS` loses nothing.
    Comment lines inside an open block are discarded.
    """

    def parse(self, text: str) -> List[SubcircuitRecord]:
        subcircuits: List[SubcircuitRecord] = []
        if not text or not text.strip():
            return subcircuits

        comment_lines: List[str] = []
        block: Optional[_OpenBlock] = None

        def close_block():
            nonlocal block
            if block is not None:
                record = block.finalize()
                if record is not None:
                    subcircuits.append(record)
                block = None

        for line in text.split("\n"):
            trimmed = line.strip()

            if trimmed.startswith("*"):
                if block is None:
                    comment_lines.append(trimmed)
                continue
            if not trimmed:
                continue

            upper = trimmed.upper()
            if upper.startswith(".SUBCKT"):
                close_block()
                block = self._open_block(trimmed, comment_lines)
                comment_lines = []
            elif upper.startswith(".ENDS"):
                close_block()
                comment_lines = []
            elif block is None:
                continue
            elif trimmed.startswith("+") and not block.body_lines:
                block.pins.extend(clean_continuation_line(trimmed).split())
            else:
                block.body_lines.append(trimmed)

        close_block()
        logger.debug(f"Library scan produced {len(subcircuits)} subcircuit record(s).")
        return subcircuits

    @staticmethod
    def _open_block(header: str, comment_lines: List[str]) -> _OpenBlock:
        match = SUBCKT_HEADER_REGEX.match(header)
        name, pins_text = (match.group(1), match.group(2) or "") if match else ("", "")
        metadata, ts_parameters = parse_comment_metadata(comment_lines)
        return _OpenBlock(
            name=name,
            pins=strip_inline_comment(pins_text).split(),
            metadata=metadata,
            ts_parameters=ts_parameters,
        )
