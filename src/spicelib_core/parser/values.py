# src/spicelib_core/parser/values.py
"""
Decoding of single numeric tokens found in SPICE text.

Two grammars live here:

- `parse_value` decodes component values on netlist lines. It tolerates a trailing
  unit letter (`10uF`, `0.05mH`), the `MEG` suffix and the ambiguous lone `M`, which
  is read as milli below 1000 and as mega from 1000 upwards (`1M` is 1e-3, `1000M` is
  1e9).
- `parse_model_parameter_value` decodes `KEY=VALUE` values inside a `.MODEL`
  parameter list. It accepts one optional magnitude letter and nothing else: no
  `MEG`, no unit letters, and `m`/`M` is always milli.

Both only accept culture-invariant float literals (`[+-]digits[.digits][e[+-]digits]`);
Python-specific spellings such as `inf`, `nan` or `1_000` are rejected.
"""
import logging
import re
from typing import Optional, Tuple

from .exceptions import ValueParseError

logger = logging.getLogger(__name__)

FLOAT_LITERAL_FRAGMENT = r"[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?"
FLOAT_LITERAL_REGEX = re.compile(f"^{FLOAT_LITERAL_FRAGMENT}$")

# Trailing unit letters (Henry, Farad, Volt, Watt, Ohm, Siemens). 'A' is not among
# them: a trailing 'A' always means atto.
UNIT_LETTERS = frozenset("HFVWOS")

MAGNITUDE_SUFFIXES = {
    "T": 1e12,
    "G": 1e9,
    "K": 1e3,
    "U": 1e-6,
    "N": 1e-9,
    "P": 1e-12,
    "F": 1e-15,
    "A": 1e-18,
}
MEGA = 1e6
MILLI = 1e-3
#: A lone 'M' resolves to milli below this magnitude and to mega at or above it.
MILLI_MEGA_THRESHOLD = 1000.0

MODEL_PARAMETER_SUFFIXES = {
    "A": 1e-18,
    "F": 1e-15,
    "P": 1e-12,
    "N": 1e-9,
    "U": 1e-6,
    "M": 1e-3,
    "K": 1e3,
    "G": 1e9,
    "T": 1e12,
}
MODEL_PARAMETER_VALUE_FRAGMENT = f"{FLOAT_LITERAL_FRAGMENT}[afpnumkgtAFPNUMKGT]?"
_MODEL_PARAMETER_VALUE_REGEX = re.compile(f"^({FLOAT_LITERAL_FRAGMENT})([afpnumkgtAFPNUMKGT]?)$")


def parse_float_literal(text: str) -> Optional[float]:
    """Returns the float for a plain invariant literal, or None if `text` is not one."""
    if FLOAT_LITERAL_REGEX.match(text):
        return float(text)
    return None


def parse_value(token: str) -> float:
    """
    Decodes a component value token into a float in SI base units.

    Examples:
        '4.7k'   -> 4700.0
        '0.05mH' -> 5e-05
        '1MEG'   -> 1000000.0
        '10pF'   -> 1e-11
        '1e-6'   -> 1e-06
        ''       -> 0.0

    Raises:
        ValueParseError: if what remains after suffix removal is not a float literal.
    """
    if token is None or not token.strip():
        return 0.0

    text = token.strip()
    if len(text) > 1 and text[-1].upper() in UNIT_LETTERS:
        text = text[:-1]

    multiplier, mantissa = _split_magnitude(text)
    number = parse_float_literal(mantissa)
    if number is None:
        raise ValueParseError(token=token)
    return number * multiplier


def _split_magnitude(text: str) -> Tuple[float, str]:
    """Splits a trailing magnitude suffix off `text`, returning (multiplier, mantissa)."""
    upper = text.upper()
    if upper.endswith("MEG"):
        return MEGA, text[:-3]
    if not upper:
        return 1.0, text

    last = upper[-1]
    if last == "M":
        mantissa = text[:-1]
        prefix = parse_float_literal(mantissa)
        if prefix is not None and abs(prefix) < MILLI_MEGA_THRESHOLD:
            return MILLI, mantissa
        return MEGA, mantissa
    if last in MAGNITUDE_SUFFIXES:
        return MAGNITUDE_SUFFIXES[last], text[:-1]
    return 1.0, text


def parse_model_parameter_value(token: str) -> Optional[float]:
    """
    Decodes a `.MODEL` parameter value such as '2.52n', '1E-14' or '-.5'.

    Returns None when the token does not fit the narrow grammar; callers skip the
    parameter in that case.
    """
    match = _MODEL_PARAMETER_VALUE_REGEX.match(token.strip())
    if not match:
        logger.debug(f"Ignoring model parameter value '{token}': not a number with an optional suffix.")
        return None
    number, suffix = match.groups()
    return float(number) * MODEL_PARAMETER_SUFFIXES.get(suffix.upper(), 1.0)
