# src/spicelib_core/parser/library.py
import logging
from pathlib import Path
from typing import List, Union

from .models import ModelBlockParser
from .netlist import read_source_text
from .records import ModelRecord, ParsedLibrary, SubcircuitRecord
from .subcircuits import SubcircuitBlockParser

logger = logging.getLogger(__name__)


class LibraryParser:
    """
    Parses SPICE library text (`.lib` files) into reusable model and subcircuit
    definitions. Both scans run over the same text independently, so a `.MODEL`
    statement inside a subcircuit body is reported as a model too.
    """

    def __init__(self):
        self._model_parser = ModelBlockParser()
        self._subcircuit_parser = SubcircuitBlockParser()

    def parse(self, library_text: str) -> ParsedLibrary:
        if not library_text or not library_text.strip():
            return ParsedLibrary()
        return ParsedLibrary(
            models=tuple(self.parse_models(library_text)),
            subcircuits=tuple(self.parse_subcircuits(library_text)),
        )

    def parse_models(self, library_text: str) -> List[ModelRecord]:
        if not library_text or not library_text.strip():
            return []
        return self._model_parser.parse_library_models(library_text)

    def parse_subcircuits(self, library_text: str) -> List[SubcircuitRecord]:
        return self._subcircuit_parser.parse(library_text)

    def parse_file(self, library_path: Union[str, Path]) -> ParsedLibrary:
        """Reads a UTF-8 library file and parses it."""
        path = Path(library_path).resolve()
        logger.debug(f"Parsing library file: {path}")
        return self.parse(read_source_text(path))
