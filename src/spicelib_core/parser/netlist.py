# src/spicelib_core/parser/netlist.py
import dataclasses
import logging
from enum import Enum, auto
from pathlib import Path
from typing import List, Optional, Union

from .components import ComponentLineRecognizer
from .exceptions import ParsingError, UnparsableLineError
from .models import ModelBlockParser
from .records import ComponentRecord, ModelRecord, ParsedNetlist

logger = logging.getLogger(__name__)


class _DriverState(Enum):
    NORMAL = auto()
    IN_MODEL = auto()


class _NetlistRun:
    """Mutable state of one `parse` call. Never shared between calls."""

    def __init__(self, model_parser: ModelBlockParser):
        self.model_parser = model_parser
        self.state = _DriverState.NORMAL
        self.model_lines: List[str] = []
        self.title: Optional[str] = None
        self.components: List[ComponentRecord] = []
        self.models: List[ModelRecord] = []
        self.is_first_line = True

    def flush_model(self):
        if self.model_lines:
            model = self.model_parser.parse_block(self.model_lines)
            if model is not None:
                self.models.append(model)
            self.model_lines = []
        self.state = _DriverState.NORMAL


class NetlistParser:
    """
    Parses SPICE netlist text into a `ParsedNetlist`.

    The driver walks the text line by line with two states. In NORMAL, component
    lines go to the `ComponentLineRecognizer` and a `.MODEL` line switches to
    IN_MODEL. In IN_MODEL, `+` lines extend the pending statement, a line ending in
    ')' closes it, and any other line closes it and is then handled as in NORMAL.

    The first content line that is neither a component nor starts with a component
    prefix letter becomes the title. An unparsable line anywhere else aborts the
    parse with `UnparsableLineError`.
    """

    def __init__(self):
        self._recognizer = ComponentLineRecognizer()
        self._model_parser = ModelBlockParser()

    def parse(self, netlist: str) -> ParsedNetlist:
        if not netlist or not netlist.strip():
            return ParsedNetlist()

        run = _NetlistRun(self._model_parser)
        for line_number, line in enumerate(netlist.split("\n"), start=1):
            self._process_line(run, line.strip(), line_number)
        run.flush_model()

        logger.debug(
            f"Parsed netlist: title={run.title!r}, {len(run.components)} component(s), "
            f"{len(run.models)} model(s)."
        )
        return ParsedNetlist(title=run.title, components=tuple(run.components), models=tuple(run.models))

    def parse_file(self, netlist_path: Union[str, Path]) -> ParsedNetlist:
        """Reads a UTF-8 netlist file and parses it."""
        path = Path(netlist_path).resolve()
        logger.info(f"Parsing netlist file: {path}")
        return self.parse(read_source_text(path))

    def _process_line(self, run: _NetlistRun, trimmed: str, line_number: int):
        if not trimmed:
            if run.state is _DriverState.IN_MODEL:
                run.flush_model()
            return

        if trimmed.startswith("*"):
            return

        if trimmed.upper().startswith(".MODEL"):
            run.flush_model()
            run.model_lines.append(trimmed)
            run.state = _DriverState.IN_MODEL
            run.is_first_line = False
            return

        if run.state is _DriverState.IN_MODEL:
            if trimmed.startswith("+"):
                run.model_lines.append(trimmed)
                return
            if trimmed.endswith(")"):
                if not run.model_lines[-1].rstrip().endswith(")"):
                    run.model_lines.append("+ )" if trimmed == ")" else trimmed)
                run.flush_model()
                return
            # Unterminated statement: close it, then treat this line normally.
            run.flush_model()

        # Stray closer of a statement already flushed; leaves the title gate open.
        if trimmed == ")":
            return

        if trimmed.startswith("."):
            run.is_first_line = False
            return

        try:
            component = self._recognizer.recognize(trimmed)
        except UnparsableLineError as e:
            raise dataclasses.replace(e, line_number=line_number) from None

        if component is not None:
            run.components.append(component)
        elif run.is_first_line:
            run.title = trimmed
        else:
            raise UnparsableLineError(line=trimmed, line_number=line_number)
        run.is_first_line = False


def read_source_text(source: Path) -> str:
    """Reads a netlist or library file, translating I/O failures into `ParsingError`."""
    if not source.is_file():
        raise ParsingError(details=f"SPICE file not found at path: {source}", file_path=source)
    try:
        return source.read_text(encoding="utf-8")
    except PermissionError as e:
        raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
    except UnicodeDecodeError as e:
        raise ParsingError(details=f"File is not valid UTF-8 text: {e}", file_path=source) from e
