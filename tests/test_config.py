"""Tests for sdl_summarizer.config"""

import pytest

from sdl_summarizer import config


class TestLoad:
    def test_defaults_when_missing(self, tmp_path):
        cfg = config.load(str(tmp_path / "missing.yaml"))
        assert cfg.default_url is None
        assert cfg.output == "console"
        assert cfg.title == "GraphQL Schema Documentation"
        assert not cfg.schema_cache_dir.startswith("~")

    def test_reads_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "default_url: https://api.example.com\n"
            "output: markdown\n"
            "schema_cache_dir: " + str(tmp_path / "cache") + "\n"
            "api:\n"
            "  name: Widget API\n"
            "  version: v2\n"
            "endpoints:\n"
            "  sandbox: https://sandbox.example.com\n"
        )
        cfg = config.load(str(path))
        assert cfg.default_url == "https://api.example.com"
        assert cfg.output == "markdown"
        assert cfg.schema_cache_dir == str(tmp_path / "cache")
        assert cfg.api_metadata() == {
            "name": "Widget API",
            "version": "v2",
            "sandboxURL": "https://sandbox.example.com",
        }

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert config.load(str(path)).output == "console"

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api: [unclosed\n")
        with pytest.raises(config.ConfigError):
            config.load(str(path))

    def test_non_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(config.ConfigError, match="expected a mapping"):
            config.load(str(path))

    @pytest.mark.parametrize("section", ["api", "endpoints"])
    def test_scalar_section(self, tmp_path, section):
        path = tmp_path / "config.yaml"
        path.write_text(f"{section}: just a string\n")
        with pytest.raises(config.ConfigError, match=f"'{section}' must be a mapping"):
            config.load(str(path))

    def test_null_section(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("api:\nendpoints:\n")
        assert config.load(str(path)).api_metadata() == {"name": "GraphQL Schema Documentation"}

    def test_default_path_under_home(self, home):
        assert config.get_default_config_path() == str(home / ".sdl-summarizer" / "config.yaml")


class TestExampleConfig:
    def test_round_trip(self, tmp_path):
        path = str(tmp_path / "nested" / "config.yaml")
        assert config.create_example_config(path) == path
        cfg = config.load(path)
        assert cfg.api_name == "Example API"
        assert cfg.production_url == "https://api.example.com/graphql"
        assert cfg.api_metadata()["provider"] == "Example Inc."
