# src/spicelib_core/config.py
"""
YAML configuration for the library index.

    library_paths:
      - ./models
      - /opt/spice/speakers
    extensions: [".lib", ".mod"]
    max_workers: 8
    default_search_limit: 50

Relative library paths resolve against the directory holding the configuration
file. The document is validated with Cerberus before any value is used.
"""
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Tuple, Union

import cerberus
import yaml

from .errors import DiagnosableError, format_diagnostic_report

logger = logging.getLogger(__name__)

SUFFIX_REGEX = r"^\.[A-Za-z0-9_]+$"

DEFAULT_EXTENSIONS: Tuple[str, ...] = (".lib",)
DEFAULT_MAX_WORKERS = 4
DEFAULT_SEARCH_LIMIT = 20


class ConfigValidator(cerberus.Validator):
    """Cerberus validator with a rule for file-suffix strings such as '.lib'."""

    def _validate_suffix_format(self, constraint: bool, field: str, value: Any):
        """
        Checks that a string is a dotted file suffix.
        The rule's arguments are validated against this schema:
        {'type': 'boolean'}
        """
        if constraint and isinstance(value, str) and not re.match(SUFFIX_REGEX, value):
            self._error(
                field,
                f"Extension '{value}' is invalid. Extensions must start with a dot followed by "
                "letters, digits or underscores (e.g. '.lib').",
            )


_SCHEMA = {
    "library_paths": {
        "type": "list", "required": True,
        "schema": {"type": "string", "empty": False},
    },
    "extensions": {
        "type": "list", "required": False, "minlength": 1,
        "schema": {"type": "string", "suffix_format": True},
    },
    "max_workers": {"type": "integer", "required": False, "min": 1},
    "default_search_limit": {"type": "integer", "required": False, "min": 1},
}


@dataclass(eq=False)
class ConfigError(DiagnosableError):
    """The configuration file is missing, unreadable or not a YAML mapping."""
    details: str
    file_path: Path

    def __str__(self):
        return f"Configuration error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Library Configuration File Error",
            details=self.details,
            suggestion="Ensure the file exists, is readable and contains a YAML mapping.",
            context={'source_file': self.file_path}
        )


@dataclass(eq=False)
class ConfigValidationError(DiagnosableError):
    """The configuration document does not match the schema."""
    errors: Dict[str, Any]
    file_path: Optional[Path] = None

    def __str__(self):
        error_lines = [f"  - In field '{k}': {v[0]}" for k, v in sorted(self.errors.items())]
        return (
            f"Library configuration validation failed for '{self.file_path or '<mapping>'}':\n"
            + "\n".join(error_lines)
        )

    def get_diagnostic_report(self) -> str:
        error_list_str = "\n".join(f"  - Field '{k}': {v[0]}" for k, v in sorted(self.errors.items()))
        return format_diagnostic_report(
            error_type="Library Configuration Validation Error",
            details=(
                "The configuration does not conform to the required schema.\n"
                f"See details for {len(self.errors)} issue(s) below:\n\n{error_list_str}"
            ),
            suggestion=(
                "Provide 'library_paths' as a list of directories. Optional keys: 'extensions' "
                "(list such as ['.lib']), 'max_workers' and 'default_search_limit' (positive integers)."
            ),
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class LibraryConfig:
    """Validated settings for `LibraryIndex`."""
    library_paths: Tuple[Path, ...] = ()
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    max_workers: int = DEFAULT_MAX_WORKERS
    default_search_limit: int = DEFAULT_SEARCH_LIMIT

    @classmethod
    def from_mapping(
        cls,
        data: Mapping[str, Any],
        base_dir: Optional[Path] = None,
        source: Optional[Path] = None,
    ) -> "LibraryConfig":
        validator = ConfigValidator(_SCHEMA)
        validator.allow_unknown = False
        if not validator.validate(dict(data)):
            raise ConfigValidationError(errors=validator.errors, file_path=source)

        document = validator.document
        base = base_dir or Path.cwd()
        paths = tuple(
            p if p.is_absolute() else (base / p)
            for p in (Path(raw) for raw in document["library_paths"])
        )
        return cls(
            library_paths=paths,
            extensions=tuple(ext.lower() for ext in document.get("extensions", DEFAULT_EXTENSIONS)),
            max_workers=document.get("max_workers", DEFAULT_MAX_WORKERS),
            default_search_limit=document.get("default_search_limit", DEFAULT_SEARCH_LIMIT),
        )


def load_library_config(config_path: Union[str, Path]) -> LibraryConfig:
    """Loads and validates a YAML library configuration file."""
    source = Path(config_path).resolve()
    if not source.is_file():
        raise ConfigError(details=f"Configuration file not found at path: {source}", file_path=source)
    try:
        with source.open("r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except PermissionError as e:
        raise ConfigError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
    except yaml.YAMLError as e:
        raise ConfigError(details=f"Invalid YAML syntax: {e}", file_path=source) from e

    if not isinstance(content, dict):
        raise ConfigError(details="The root of the YAML file must be a dictionary (mapping).", file_path=source)

    config = LibraryConfig.from_mapping(content, base_dir=source.parent, source=source)
    logger.info(f"Loaded library configuration from {source}: {len(config.library_paths)} path(s).")
    return config
