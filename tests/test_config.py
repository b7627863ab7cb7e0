"""
Unit tests for configuration loading.

Run with:
    pytest tests/test_config.py -v
"""

import json
import tomllib
from pathlib import Path

from relnotes.config import Config, ConfigManager


class TestConfig:

    def test_defaults(self):
        config = Config()
        assert config.output == "CHANGELOG.md"
        assert config.link_references is True
        assert config.max_typos == 5
        assert config.max_suggestions == 5

    def test_to_dict_excludes_none(self):
        d = Config().to_dict()
        assert "repo_url" not in d
        assert "output" in d

    def test_from_dict_ignores_unknown_keys(self):
        config = Config.from_dict({"output": "NOTES.md", "unknown_key": "value"})
        assert config.output == "NOTES.md"
        assert not hasattr(config, "unknown_key")

    def test_validate_invalid_max_typos(self):
        config = Config(max_typos=0)
        warnings = config.validate()
        assert any("max_typos" in w for w in warnings)
        assert config.max_typos == 5

    def test_validate_invalid_output(self):
        config = Config(output="  ")
        warnings = config.validate()
        assert len(warnings) == 1
        assert config.output == "CHANGELOG.md"

    def test_validate_invalid_link_references(self):
        config = Config(link_references="yes")
        config.validate()
        assert config.link_references is True

    def test_validate_valid_config_no_warnings(self):
        assert Config().validate() == []

    def test_from_dict_triggers_validation(self, capsys):
        Config.from_dict({"max_suggestions": -2})
        err = capsys.readouterr().err
        assert "Config warning" in err


class TestConfigManager:

    def test_load_returns_defaults_when_no_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: tmp_path / "fakehome")
        manager = ConfigManager()
        config = manager.load()
        assert config.output == "CHANGELOG.md"
        assert manager.get_config_path() is None

    def test_load_reads_local_file(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / ".relnotesrc"
        config_file.write_text(json.dumps({"output": "docs/CHANGES.md", "max_typos": 3}))

        manager = ConfigManager()
        config = manager.load()
        assert config.output == "docs/CHANGES.md"
        assert config.max_typos == 3
        assert manager.get_config_path() == config_file

    def test_load_falls_back_to_home(self, tmp_path, monkeypatch):
        home = tmp_path / "home"
        home.mkdir()
        (home / ".relnotesrc").write_text(json.dumps({"repo_url": "https://git.example.com/widget"}))
        monkeypatch.chdir(tmp_path)
        monkeypatch.setattr("pathlib.Path.home", lambda: home)

        config = ConfigManager().load()
        assert config.repo_url == "https://git.example.com/widget"

    def test_malformed_json_returns_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".relnotesrc").write_text("not valid json {{{")

        config = ConfigManager().load()
        assert config.output == "CHANGELOG.md"

    def test_non_object_json_returns_defaults(self, tmp_path, monkeypatch, capsys):
        monkeypatch.chdir(tmp_path)
        (tmp_path / ".relnotesrc").write_text("[1, 2]")

        config = ConfigManager().load()
        assert config.max_typos == 5
        assert "Could not load" in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Packaging metadata
# ---------------------------------------------------------------------------

class TestPackaging:

    def test_readme_is_not_design_notes(self):
        pyproject = Path(__file__).parent.parent / "pyproject.toml"
        project = tomllib.loads(pyproject.read_text())["project"]
        assert project.get("readme") != "DESIGN.md"
        assert project["name"] == "relnotes"
