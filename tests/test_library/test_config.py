# tests/test_library/test_config.py
from pathlib import Path

import pytest

from spicelib_core import ConfigError, ConfigValidationError, LibraryConfig, load_library_config


def write_config(tmp_path: Path, text: str) -> Path:
    config_path = tmp_path / "libraries.yaml"
    config_path.write_text(text, encoding="utf-8")
    return config_path


class TestLoadLibraryConfig:

    def test_full_document(self, tmp_path):
        absolute_dir = tmp_path / "abs_models"
        config_path = write_config(tmp_path, f"""
library_paths:
  - ./models
  - {absolute_dir}
extensions: [".LIB", ".mod"]
max_workers: 8
default_search_limit: 50
""")
        config = load_library_config(config_path)

        assert config.library_paths == (config_path.parent.resolve() / "models", absolute_dir)
        assert config.extensions == (".lib", ".mod")
        assert config.max_workers == 8
        assert config.default_search_limit == 50

    def test_defaults_for_optional_keys(self, tmp_path):
        config = load_library_config(write_config(tmp_path, "library_paths: []\n"))

        assert config.library_paths == ()
        assert config.extensions == (".lib",)
        assert config.max_workers == 4
        assert config.default_search_limit == 20

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigError) as excinfo:
            load_library_config(tmp_path / "absent.yaml")

        report = excinfo.value.get_diagnostic_report()
        assert "Library Configuration File Error" in report
        assert "Configuration file not found" in report

    def test_invalid_yaml(self, tmp_path):
        with pytest.raises(ConfigError) as excinfo:
            load_library_config(write_config(tmp_path, "library_paths: [unclosed\n"))
        assert "Invalid YAML syntax" in excinfo.value.details

    @pytest.mark.parametrize("text", ["- just\n- a list\n", "", "42\n"])
    def test_root_must_be_a_mapping(self, tmp_path, text):
        with pytest.raises(ConfigError) as excinfo:
            load_library_config(write_config(tmp_path, text))
        assert "must be a dictionary" in excinfo.value.details

    @pytest.mark.parametrize("text, field", [
        ("extensions: ['.lib']\n", "library_paths"),
        ("library_paths: ./models\n", "library_paths"),
        ("library_paths: ['']\n", "library_paths"),
        ("library_paths: []\nextensions: ['lib']\n", "extensions"),
        ("library_paths: []\nextensions: []\n", "extensions"),
        ("library_paths: []\nmax_workers: 0\n", "max_workers"),
        ("library_paths: []\ndefault_search_limit: ten\n", "default_search_limit"),
        ("library_paths: []\ncache_dir: /tmp\n", "cache_dir"),
    ])
    def test_schema_violations(self, tmp_path, text, field):
        config_path = write_config(tmp_path, text)
        with pytest.raises(ConfigValidationError) as excinfo:
            load_library_config(config_path)

        assert field in excinfo.value.errors
        assert excinfo.value.file_path == config_path.resolve()
        report = excinfo.value.get_diagnostic_report()
        assert "Library Configuration Validation Error" in report
        assert f"Field '{field}'" in report


class TestLibraryConfigFromMapping:

    def test_relative_paths_resolve_against_base_dir(self, tmp_path):
        config = LibraryConfig.from_mapping({"library_paths": ["libs", "more/libs"]}, base_dir=tmp_path)
        assert config.library_paths == (tmp_path / "libs", tmp_path / "more" / "libs")

    def test_relative_paths_default_to_working_directory(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config = LibraryConfig.from_mapping({"library_paths": ["libs"]})
        assert config.library_paths == (Path.cwd() / "libs",)

    def test_invalid_mapping_has_no_file_path(self):
        with pytest.raises(ConfigValidationError) as excinfo:
            LibraryConfig.from_mapping({"library_paths": [], "max_workers": -1})
        assert excinfo.value.file_path is None
        assert "<mapping>" in str(excinfo.value)
