# src/spicelib_core/library/__init__.py
from .index import LibraryIndex, SEARCHABLE_METADATA_FIELDS

__all__ = ["LibraryIndex", "SEARCHABLE_METADATA_FIELDS"]
