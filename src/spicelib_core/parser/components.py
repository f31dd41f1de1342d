# src/spicelib_core/parser/components.py
import logging
import re
from typing import Callable, Dict, List, Optional

from .exceptions import UnparsableLineError
from .records import ComponentKind, ComponentRecord
from .values import parse_value

logger = logging.getLogger(__name__)

# Names, node names and model references are single identifier tokens.
IDENTIFIER_REGEX = re.compile(r"^\w+$")

_ParseFn = Callable[[ComponentKind, str, List[str], str], ComponentRecord]


class ComponentLineRecognizer:
    """
    Classifies a single netlist line into a `ComponentRecord`.

    The leading letter of the line selects exactly one parse function, so the
    number of shapes tried per line stays constant as kinds are added:

        R, C, L   name n+ n- value
        V         name n+ n- [DC] value [AC mag]   |   name n+ n- AC mag
        I         name n+ n- [DC] value
        D         name n+ n- model
        Q, J      name n1 n2 n3 model
        M         name d g s b model
        X         name node... subckt_name

    Transistor kinds are recorded with their n-type default; the real polarity is
    only known once the referenced model is looked up.
    """

    def __init__(self):
        self._parsers: Dict[ComponentKind, _ParseFn] = {
            ComponentKind.RESISTOR: self._parse_valued,
            ComponentKind.CAPACITOR: self._parse_valued,
            ComponentKind.INDUCTOR: self._parse_valued,
            ComponentKind.VOLTAGE_SOURCE: self._parse_voltage_source,
            ComponentKind.CURRENT_SOURCE: self._parse_valued,
            ComponentKind.DIODE: self._parse_model_device,
            ComponentKind.BJT_NPN: self._parse_model_device,
            ComponentKind.MOSFET_N: self._parse_model_device,
            ComponentKind.JFET_N: self._parse_model_device,
            ComponentKind.SUBCIRCUIT: self._parse_subcircuit_instance,
        }
        missing = set(ComponentKind) - set(self._parsers)
        if missing:
            raise RuntimeError(f"No parse function registered for component kinds: {sorted(k.kind for k in missing)}")

    def recognize(self, line: str) -> Optional[ComponentRecord]:
        """
        Parses one trimmed content line.

        Returns:
            The record, or None when the line does not start with a component
            prefix letter (the caller decides whether it is a title).

        Raises:
            UnparsableLineError: the prefix is known but the line has the wrong shape.
            ValueParseError: the shape matched but a value token is not a number.
        """
        tokens = line.split()
        if not tokens:
            return None

        kind = ComponentKind.from_prefix(tokens[0][0])
        if kind is None:
            return None

        suffix = tokens[0][1:]
        if not suffix or not IDENTIFIER_REGEX.match(suffix):
            raise UnparsableLineError(line=line)

        name = kind.prefix + suffix
        return self._parsers[kind](kind, name, tokens[1:], line)

    # --- Per-kind parse functions ---

    def _parse_valued(self, kind: ComponentKind, name: str, fields: List[str], line: str) -> ComponentRecord:
        nodes = self._take_nodes(fields, 2, line)
        rest = fields[2:]
        if kind is ComponentKind.CURRENT_SOURCE and len(rest) == 2 and rest[0].upper() == "DC":
            rest = rest[1:]
        if len(rest) != 1:
            raise UnparsableLineError(line=line)
        return ComponentRecord(name=name, kind=kind, nodes=nodes, value=parse_value(rest[0]))

    def _parse_voltage_source(self, kind: ComponentKind, name: str, fields: List[str], line: str) -> ComponentRecord:
        nodes = self._take_nodes(fields, 2, line)
        rest = fields[2:]

        # Pure AC form: the AC magnitude doubles as the source value.
        if len(rest) == 2 and rest[0].upper() == "AC":
            magnitude = parse_value(rest[1])
            return ComponentRecord(name=name, kind=kind, nodes=nodes, value=magnitude, parameters={"ac": magnitude})

        if rest and rest[0].upper() == "DC":
            rest = rest[1:]

        parameters: Dict[str, float] = {}
        if len(rest) == 3 and rest[1].upper() == "AC":
            parameters["ac"] = parse_value(rest[2])
            rest = rest[:1]
        if len(rest) != 1:
            raise UnparsableLineError(line=line)

        return ComponentRecord(name=name, kind=kind, nodes=nodes, value=parse_value(rest[0]), parameters=parameters)

    def _parse_model_device(self, kind: ComponentKind, name: str, fields: List[str], line: str) -> ComponentRecord:
        arity = kind.node_arity
        if len(fields) != arity + 1:
            raise UnparsableLineError(line=line)
        nodes = self._take_nodes(fields, arity, line)
        model_ref = fields[arity]
        if not IDENTIFIER_REGEX.match(model_ref):
            raise UnparsableLineError(line=line)
        return ComponentRecord(name=name, kind=kind, nodes=nodes, model_ref=model_ref)

    def _parse_subcircuit_instance(self, kind: ComponentKind, name: str, fields: List[str], line: str) -> ComponentRecord:
        if len(fields) < 2 or not IDENTIFIER_REGEX.match(fields[-1]):
            raise UnparsableLineError(line=line)
        return ComponentRecord(name=name, kind=kind, nodes=tuple(fields[:-1]), model_ref=fields[-1])

    @staticmethod
    def _take_nodes(fields: List[str], count: int, line: str):
        if len(fields) < count:
            raise UnparsableLineError(line=line)
        nodes = fields[:count]
        if not all(IDENTIFIER_REGEX.match(node) for node in nodes):
            raise UnparsableLineError(line=line)
        return tuple(nodes)
