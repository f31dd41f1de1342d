# src/spicelib_core/library/index.py
"""
In-memory index of model and subcircuit definitions found in SPICE library files.

Each library file is parsed independently on a worker thread; the results are then
merged on the calling thread in sorted path order, so the first definition of a name
wins regardless of which worker finished first.
"""
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple, Union

from ..config import LibraryConfig
from ..errors import SpiceLibError
from ..parser.library import LibraryParser
from ..parser.records import ModelRecord, ParsedLibrary, SubcircuitRecord

logger = logging.getLogger(__name__)

#: Metadata fields searched, in order, after the subcircuit name.
SEARCHABLE_METADATA_FIELDS: Tuple[str, ...] = ("PRODUCT_NAME", "PART_NUMBER", "MANUFACTURER")


class LibraryIndex:
    """
    Indexes `.MODEL` and `.SUBCKT` definitions by name and answers search queries.

    Usage:
        index = LibraryIndex(load_library_config("libraries.yaml"))
        index.index_libraries()
        woofers = index.search_subcircuits("", type_filter="woofer")
    """

    def __init__(self, config: Optional[LibraryConfig] = None):
        self._config = config or LibraryConfig()
        self._parser = LibraryParser()
        self._models: Dict[str, ModelRecord] = {}
        self._subcircuits: Dict[str, SubcircuitRecord] = {}
        self._lock = threading.Lock()

    @property
    def model_count(self) -> int:
        return len(self._models)

    @property
    def subcircuit_count(self) -> int:
        return len(self._subcircuits)

    # --- Indexing ---

    def index_libraries(self, library_paths: Optional[Iterable[Union[str, Path]]] = None) -> int:
        """
        Recursively indexes every library file under the given directories (the
        configured ones by default). Returns the number of files indexed.
        """
        roots = [Path(p) for p in (library_paths if library_paths is not None else self._config.library_paths)]
        files = sorted({f for root in roots for f in self._discover_files(root)})
        if not files:
            logger.info("No library files found to index.")
            return 0

        with ThreadPoolExecutor(max_workers=self._config.max_workers) as executor:
            results = list(executor.map(self._parse_file_safely, files))

        indexed = 0
        for path, parsed in zip(files, results):
            if parsed is not None:
                self._merge(parsed, source=path)
                indexed += 1

        logger.info(
            f"Indexed {indexed} of {len(files)} library file(s): "
            f"{self.model_count} model(s), {self.subcircuit_count} subcircuit(s) in index."
        )
        return indexed

    def index_text(self, library_text: str, source: Optional[str] = None) -> ParsedLibrary:
        """Parses one library text and adds its definitions to the index."""
        parsed = self._parser.parse(library_text)
        self._merge(parsed, source=source)
        return parsed

    def _discover_files(self, root: Path) -> List[Path]:
        if not root.is_dir():
            logger.warning(f"Library directory not found, skipping: {root}")
            return []
        extensions = set(self._config.extensions)
        try:
            return [p.resolve() for p in root.rglob("*") if p.is_file() and p.suffix.lower() in extensions]
        except OSError as e:
            logger.warning(f"Cannot scan library directory {root}: {e}")
            return []

    def _parse_file_safely(self, path: Path) -> Optional[ParsedLibrary]:
        try:
            return self._parser.parse_file(path)
        except SpiceLibError as e:
            logger.warning(f"Skipping library file {path}: {e}")
            return None

    def _merge(self, parsed: ParsedLibrary, source=None):
        with self._lock:
            for model in parsed.models:
                if model.model_name in self._models:
                    logger.debug(f"Duplicate model '{model.model_name}' in {source} ignored; first definition wins.")
                    continue
                self._models[model.model_name] = model
            for subcircuit in parsed.subcircuits:
                if subcircuit.name in self._subcircuits:
                    logger.debug(f"Duplicate subcircuit '{subcircuit.name}' in {source} ignored; first definition wins.")
                    continue
                self._subcircuits[subcircuit.name] = subcircuit

    # --- Queries ---

    def search_models(self, query: str = "", type_filter: Optional[str] = None, limit: Optional[int] = None) -> List[ModelRecord]:
        """Models whose name contains `query` and whose type equals `type_filter` (case-insensitive)."""
        query_lower = (query or "").lower()
        type_lower = type_filter.lower() if type_filter else None

        matches = [
            model for model in self._models.values()
            if (not query_lower or query_lower in model.model_name.lower())
            and (not type_lower or model.model_type.lower() == type_lower)
        ]
        matches.sort(key=lambda m: m.model_name)
        return matches[:self._resolve_limit(limit)]

    def search_subcircuits(self, query: str = "", type_filter: Optional[str] = None, limit: Optional[int] = None) -> List[SubcircuitRecord]:
        """
        Subcircuits whose name or PRODUCT_NAME / PART_NUMBER / MANUFACTURER metadata
        contains `query`, optionally restricted to an exact metadata TYPE.
        """
        query_lower = (query or "").lower()
        type_lower = type_filter.lower() if type_filter else None

        matches = [
            sub for sub in self._subcircuits.values()
            if (not query_lower or self._subcircuit_matches(sub, query_lower))
            and (not type_lower or sub.metadata.get("TYPE", "").lower() == type_lower)
        ]
        matches.sort(key=lambda s: s.name)
        return matches[:self._resolve_limit(limit)]

    @staticmethod
    def _subcircuit_matches(subcircuit: SubcircuitRecord, query_lower: str) -> bool:
        if query_lower in subcircuit.name.lower():
            return True
        return any(
            query_lower in subcircuit.metadata.get(key, "").lower()
            for key in SEARCHABLE_METADATA_FIELDS
        )

    def _resolve_limit(self, limit: Optional[int]) -> int:
        return self._config.default_search_limit if limit is None else max(limit, 0)

    def get_model(self, name: str) -> Optional[ModelRecord]:
        if not name or not name.strip():
            return None
        return self._models.get(name)

    def get_subcircuit(self, name: str) -> Optional[SubcircuitRecord]:
        if not name or not name.strip():
            return None
        return self._subcircuits.get(name)
