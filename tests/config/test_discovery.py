"""Tests for config discovery and loading."""

from pathlib import Path

import pytest

from folio.config.discovery import CONFIG_FILENAME, ConfigError, find_config, read_toml


class TestFindConfig:
    def test_finds_in_current_dir(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[content]\nroot = "site"\n')
        assert find_config(tmp_path) == config_file

    def test_walks_up(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        child = tmp_path / "a" / "b" / "c"
        child.mkdir(parents=True)
        assert find_config(child) == config_file

    def test_returns_none_when_not_found(self, tmp_path: Path) -> None:
        child = tmp_path / "empty"
        child.mkdir()
        assert find_config(child) is None

    def test_env_var_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config_file = tmp_path / "custom.toml"
        config_file.write_text("")
        monkeypatch.setenv("FOLIO_CONFIG", str(config_file))
        assert find_config(tmp_path / "elsewhere") == config_file

    def test_env_var_pointing_nowhere(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        (tmp_path / CONFIG_FILENAME).write_text("")
        monkeypatch.setenv("FOLIO_CONFIG", str(tmp_path / "missing.toml"))
        assert find_config(tmp_path) is None


class TestReadToml:
    def test_sections(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text('[content]\nroot = "site"\n[reading]\ncjk_chars_per_minute = 400\n')
        assert read_toml(config_file) == {
            "content": {"root": "site"},
            "reading": {"cjk_chars_per_minute": 400},
        }

    def test_empty_file(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("")
        assert read_toml(config_file) == {}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        config_file = tmp_path / CONFIG_FILENAME
        config_file.write_text("[content\nroot = ")
        with pytest.raises(ConfigError, match="Invalid TOML"):
            read_toml(config_file)

    def test_unreadable_path(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Cannot read"):
            read_toml(tmp_path)
