# src/spicelib_core/parser/records.py
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple

# Output records of the parsers. Each record is built once by a single parse call.


class ComponentKind(Enum):
    """
    Closed set of component kinds the netlist grammar recognizes.
    Each member's value is a tuple: (kind_str, prefix_letter, node_arity).
    A node arity of None means "variable, at least one node".
    """
    RESISTOR = ("resistor", "R", 2)
    CAPACITOR = ("capacitor", "C", 2)
    INDUCTOR = ("inductor", "L", 2)
    VOLTAGE_SOURCE = ("voltage_source", "V", 2)
    CURRENT_SOURCE = ("current_source", "I", 2)
    DIODE = ("diode", "D", 2)
    BJT_NPN = ("bjt_npn", "Q", 3)
    MOSFET_N = ("mosfet_n", "M", 4)
    JFET_N = ("jfet_n", "J", 3)
    SUBCIRCUIT = ("subcircuit", "X", None)

    @property
    def kind(self) -> str:
        return self.value[0]

    @property
    def prefix(self) -> str:
        return self.value[1]

    @property
    def node_arity(self) -> Optional[int]:
        return self.value[2]

    @property
    def takes_model(self) -> bool:
        """True for kinds whose trailing field is a model or definition name."""
        return self in _MODEL_KINDS

    @classmethod
    def from_prefix(cls, letter: str) -> Optional[ComponentKind]:
        return _KIND_BY_PREFIX.get(letter.upper())

    def __str__(self):
        return self.kind


_KIND_BY_PREFIX = {k.prefix: k for k in ComponentKind}
_MODEL_KINDS = frozenset({
    ComponentKind.DIODE, ComponentKind.BJT_NPN, ComponentKind.MOSFET_N,
    ComponentKind.JFET_N, ComponentKind.SUBCIRCUIT,
})


@dataclass(frozen=True)
class ComponentRecord:
    """One component line of a netlist."""
    name: str
    kind: ComponentKind
    nodes: Tuple[str, ...]
    value: Optional[float] = None
    model_ref: Optional[str] = None
    parameters: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ModelRecord:
    """A decoded `.MODEL` statement."""
    model_name: str
    model_type: str
    parameters: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class SubcircuitRecord:
    """
    A `.SUBCKT ... .ENDS` block of a library file.

    `body` is the cleaned internal netlist, one stored line per text line.
    `metadata` and `ts_parameters` come from the comment block that preceded the
    `.SUBCKT` header; their keys are upper-case.
    """
    name: str
    pins: Tuple[str, ...]
    body: str = ""
    metadata: Dict[str, str] = field(default_factory=dict)
    ts_parameters: Dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class ParsedNetlist:
    """Top-level result of parsing one netlist text."""
    title: Optional[str] = None
    components: Tuple[ComponentRecord, ...] = ()
    models: Tuple[ModelRecord, ...] = ()


@dataclass(frozen=True)
class ParsedLibrary:
    """Top-level result of parsing one library-file text."""
    models: Tuple[ModelRecord, ...] = ()
    subcircuits: Tuple[SubcircuitRecord, ...] = ()
