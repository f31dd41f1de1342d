# src/spicelib_core/parser/models.py
import logging
import re
from typing import Dict, Iterable, List, Optional

from .records import ModelRecord
from .values import MODEL_PARAMETER_VALUE_FRAGMENT, parse_model_parameter_value

logger = logging.getLogger(__name__)

# `.MODEL <name> <type> ( <params> )`. The closing parenthesis is optional so that a
# statement cut off at end of input still produces a record.
MODEL_LINE_REGEX = re.compile(r"^\s*\.MODEL\s+(\w+)\s+(\w+)\s*\(([^)]*)\)?", re.IGNORECASE)
PARAMETER_REGEX = re.compile(rf"(\w+)\s*=\s*({MODEL_PARAMETER_VALUE_FRAGMENT})(?![\w.])", re.IGNORECASE)

MODEL_TYPE_MAP: Dict[str, str] = {
    "D": "diode",
    "NPN": "bjt_npn",
    "PNP": "bjt_pnp",
    "NMOS": "mosfet_n",
    "PMOS": "mosfet_p",
    "NJF": "jfet_n",
    "JFETN": "jfet_n",
    "PJF": "jfet_p",
    "JFETP": "jfet_p",
}


def map_model_type(spice_type: str) -> str:
    """Maps a raw SPICE model type token to its record type; unknown tokens are lower-cased."""
    return MODEL_TYPE_MAP.get(spice_type.upper(), spice_type.lower())


def strip_inline_comment(text: str) -> str:
    """Drops everything from the first '*' onward."""
    index = text.find("*")
    if index >= 0:
        text = text[:index]
    return text.strip()


def clean_continuation_line(line: str) -> str:
    """Removes a leading '+' continuation marker, surrounding blanks and any inline comment."""
    return strip_inline_comment(line.strip().lstrip("+ \t"))


class ModelBlockParser:
    """
    Decodes `.MODEL` statements.

    `parse_block` works on the physical lines of one statement, already collected by
    the caller. `parse_library_models` scans a whole library text, collecting those
    lines itself. A statement whose merged text does not have the `.MODEL` shape is
    skipped without an error.
    """

    def parse_block(self, lines: Iterable[str]) -> Optional[ModelRecord]:
        cleaned = [c for c in (clean_continuation_line(line) for line in lines) if c]
        if not cleaned:
            return None

        combined = " ".join(cleaned)
        match = MODEL_LINE_REGEX.match(combined)
        if not match:
            logger.debug(f"Skipping statement without a valid .MODEL shape: '{combined[:80]}'")
            return None

        model_name, raw_type, parameters_text = match.groups()
        return ModelRecord(
            model_name=model_name,
            model_type=map_model_type(raw_type),
            parameters=self._parse_parameters(parameters_text),
        )

    def parse_library_models(self, text: str) -> List[ModelRecord]:
        """Returns every `.MODEL` record of a library text, in order of appearance."""
        models: List[ModelRecord] = []
        pending: List[str] = []

        def flush():
            if pending:
                model = self.parse_block(pending)
                if model is not None:
                    models.append(model)
                pending.clear()

        for line in text.split("\n"):
            trimmed = line.strip()
            if not trimmed or trimmed.startswith("*"):
                continue
            if trimmed.upper().startswith(".MODEL"):
                flush()
                pending.append(trimmed)
            elif trimmed.startswith("+"):
                if pending:
                    pending.append(trimmed)
            else:
                flush()
        flush()

        logger.debug(f"Library scan produced {len(models)} model record(s).")
        return models

    @staticmethod
    def _parse_parameters(parameters_text: str) -> Dict[str, float]:
        parameters: Dict[str, float] = {}
        for key, raw_value in PARAMETER_REGEX.findall(strip_inline_comment(parameters_text)):
            value = parse_model_parameter_value(raw_value)
            if value is not None:
                parameters[key] = value
        return parameters
