# --- src/spicelib_core/units.py ---
"""
Unit annotation for decoded values.

The parsers return plain floats in SI base units. The helpers here attach the unit
that belongs to a value so callers can format or compare it with pint; they never
rescale a value.
"""
import logging
from typing import Dict, Optional

import pint

from .parser.records import ComponentKind, ComponentRecord, SubcircuitRecord

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.debug("Pint Unit Registry initialized.")

#: SI unit of the `value` field per component kind.
COMPONENT_VALUE_UNITS: Dict[ComponentKind, str] = {
    ComponentKind.RESISTOR: "ohm",
    ComponentKind.CAPACITOR: "farad",
    ComponentKind.INDUCTOR: "henry",
    ComponentKind.VOLTAGE_SOURCE: "volt",
    ComponentKind.CURRENT_SOURCE: "ampere",
}

#: Datasheet units of the numeric Thiele/Small keys, as written in speaker libraries.
#: SENSITIVITY (dB SPL) has no entry.
TS_PARAMETER_UNITS: Dict[str, str] = {
    "FS": "hertz",
    "QTS": "dimensionless",
    "QES": "dimensionless",
    "QMS": "dimensionless",
    "VAS": "liter",
    "RE": "ohm",
    "LE": "millihenry",
    "BL": "tesla * meter",
    "XMAX": "millimeter",
    "MMS": "gram",
    "CMS": "millimeter / newton",
    "SD": "centimeter ** 2",
}


def component_value_quantity(component: ComponentRecord) -> Optional[Quantity]:
    """Returns `component.value` with its SI unit, or None for model-referencing kinds."""
    if component.kind.takes_model or component.value is None:
        return None
    return Quantity(component.value, COMPONENT_VALUE_UNITS[component.kind])


def ts_parameter_quantities(subcircuit: SubcircuitRecord) -> Dict[str, Quantity]:
    """Returns the T/S parameters of a subcircuit that have a known datasheet unit."""
    return {
        key: Quantity(value, TS_PARAMETER_UNITS[key])
        for key, value in subcircuit.ts_parameters.items()
        if key in TS_PARAMETER_UNITS
    }
