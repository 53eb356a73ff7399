"""Tests for configuration file loading."""

from __future__ import annotations

from pathlib import Path

import pytest

from repofleet.config import load_config_file
from repofleet.exceptions import ConfigFileError


class TestLoadConfigFile:
    def test_maps_option_names(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "platform: gitlab\n"
            "base-url: https://gitlab.example.com/api/v4/\n"
            "group:\n  - acme\n  - globex\n"
            "include_subgroups: true\n"
            "merge-type: squash\n"
        )

        assert load_config_file(path) == {
            "platform": "gitlab",
            "base_url": "https://gitlab.example.com/api/v4/",
            "groups": ["acme", "globex"],
            "include_subgroups": True,
            "merge_types": ["squash"],
        }

    def test_empty_file(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config_file(path) == {}

    def test_unknown_key(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("colour: blue\n")
        with pytest.raises(ConfigFileError, match="unknown option 'colour'"):
            load_config_file(path)

    @pytest.mark.parametrize("key", ["log-level", "log-format", "log-file"])
    def test_logging_keys_are_unknown(self, tmp_path: Path, key: str):
        path = tmp_path / "config.yaml"
        path.write_text(f"{key}: debug\n")
        with pytest.raises(ConfigFileError, match=f"unknown option '{key}'"):
            load_config_file(path)

    def test_not_a_mapping(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("- github\n- gitlab\n")
        with pytest.raises(ConfigFileError, match="expected a mapping"):
            load_config_file(path)

    def test_invalid_yaml(self, tmp_path: Path):
        path = tmp_path / "config.yaml"
        path.write_text("platform: [github\n")
        with pytest.raises(ConfigFileError, match="invalid YAML"):
            load_config_file(path)

    def test_missing_file(self, tmp_path: Path):
        with pytest.raises(ConfigFileError) as exc_info:
            load_config_file(tmp_path / "missing.yaml")
        assert exc_info.value.code == "CONFIG_FILE_ERROR"
