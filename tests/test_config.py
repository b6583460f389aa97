"""
Tests for tool configuration and logging setup.
"""

import logging

import pytest
from rich.logging import RichHandler

from meshwork.config.loader import Config, _merge_dict, is_config_file, load_config
from meshwork.exceptions import ConfigError, ParseError
from meshwork.utils.logging import FileFormatter, get_logger, setup_logging, setup_logging_from_config


class TestConfig:
    def test_dot_notation(self):
        cfg = Config({"logging": {"level": "DEBUG"}})
        assert cfg.get("logging.level") == "DEBUG"

    def test_dot_notation_missing_returns_default(self):
        assert Config({"a": 1}).get("a.b.c", "fallback") == "fallback"


class TestLoadConfig:
    def test_missing_file_is_empty(self, tmp_path):
        assert load_config(tmp_path).data == {}

    def test_load_basic_config(self, tmp_path):
        (tmp_path / "meshwork.yaml").write_text("logging:\n  level: WARNING\n")
        assert load_config(tmp_path).get("logging.level") == "WARNING"

    def test_env_overlay(self, tmp_path):
        (tmp_path / "meshwork.yaml").write_text("logging:\n  level: INFO\n  file: logs/a.log\n")
        (tmp_path / "meshwork.ci.yaml").write_text("logging:\n  level: DEBUG\n")
        cfg = load_config(tmp_path, env="ci")
        assert cfg.get("logging.level") == "DEBUG"
        assert cfg.get("logging.file") == "logs/a.log"

    def test_env_var_substitution(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MESHWORK_LOG_DIR", "/var/log/meshwork")
        (tmp_path / "meshwork.yaml").write_text("logging:\n  file: ${MESHWORK_LOG_DIR}/meshwork.log\n")
        assert load_config(tmp_path).get("logging.file") == "/var/log/meshwork/meshwork.log"

    def test_env_var_default(self, tmp_path, monkeypatch):
        monkeypatch.delenv("MESHWORK_LOG_LEVEL", raising=False)
        (tmp_path / "meshwork.yaml").write_text("logging:\n  level: ${MESHWORK_LOG_LEVEL:-WARNING}\n")
        assert load_config(tmp_path).get("logging.level") == "WARNING"

    def test_env_var_overrides_default(self, tmp_path, monkeypatch):
        monkeypatch.setenv("MESHWORK_LOG_LEVEL", "DEBUG")
        (tmp_path / "meshwork.yaml").write_text("logging:\n  level: ${MESHWORK_LOG_LEVEL:-WARNING}\n")
        assert load_config(tmp_path).get("logging.level") == "DEBUG"

    def test_unset_env_var_raises(self, tmp_path, monkeypatch):
        monkeypatch.delenv("MESHWORK_MISSING", raising=False)
        (tmp_path / "meshwork.yaml").write_text("logging:\n  file: ${MESHWORK_MISSING}/a.log\n")
        with pytest.raises(ConfigError, match="logging.file"):
            load_config(tmp_path)

    def test_env_name_is_not_a_placeholder(self, tmp_path):
        (tmp_path / "meshwork.yaml").write_text("logging:\n  file: logs/{env}.log\n")
        assert load_config(tmp_path, env="ci").get("logging.file") == "logs/{env}.log"

    def test_invalid_utf8_raises(self, tmp_path):
        (tmp_path / "meshwork.yaml").write_bytes(b"logging:\n  level: \xff\n")
        with pytest.raises(ParseError, match="UTF-8"):
            load_config(tmp_path)

    def test_invalid_yaml_raises(self, tmp_path):
        (tmp_path / "meshwork.yaml").write_text(":\n  :\n  invalid: [")
        with pytest.raises(ParseError, match="Error parsing"):
            load_config(tmp_path)

    def test_non_mapping_raises(self, tmp_path):
        (tmp_path / "meshwork.yaml").write_text("- a\n- b\n")
        with pytest.raises(ParseError, match="mapping"):
            load_config(tmp_path)


class TestMergeDict:
    def test_nested_merge(self):
        base = {"a": {"x": 1, "y": 2}}
        _merge_dict(base, {"a": {"y": 3, "z": 4}})
        assert base == {"a": {"x": 1, "y": 3, "z": 4}}

    def test_replace_non_dict_with_dict(self):
        base = {"a": "string"}
        _merge_dict(base, {"a": {"nested": True}})
        assert base == {"a": {"nested": True}}


class TestLogging:
    def test_rich_console_handler(self):
        logger = setup_logging(level="DEBUG")
        assert logger.name == "meshwork"
        assert logger.level == logging.DEBUG
        assert any(isinstance(h, RichHandler) for h in logger.handlers)

    def test_plain_console_handler(self):
        logger = setup_logging(level="WARNING", use_rich=False)
        assert not any(isinstance(h, RichHandler) for h in logger.handlers)
        assert logger.level == logging.WARNING

    def test_repeated_setup_replaces_handlers(self):
        setup_logging()
        logger = setup_logging()
        assert len(logger.handlers) == 1

    def test_invalid_level_defaults_to_info(self):
        assert setup_logging(level="LOUD").level == logging.INFO

    def test_file_handler_from_config(self, tmp_path):
        logger = setup_logging_from_config(
            {"logging": {"level": "DEBUG", "file": "logs/meshwork.log", "console_enabled": False}},
            project_dir=tmp_path,
        )
        get_logger("meshwork.test").debug("resolved 3 services")
        for handler in logger.handlers:
            handler.flush()

        [handler] = logger.handlers
        assert isinstance(handler.formatter, FileFormatter)
        content = (tmp_path / "logs" / "meshwork.log").read_text()
        assert "meshwork.test: resolved 3 services" in content
        setup_logging(console_enabled=False)

    def test_child_loggers_propagate(self):
        assert get_logger("meshwork.loaders").propagate is True


class TestIsConfigFile:
    @pytest.mark.parametrize(
        "name, expected",
        [
            ("meshwork.yaml", True),
            ("meshwork.ci.yaml", True),
            ("app.yaml", False),
            ("meshwork.yml", False),
        ],
    )
    def test_names(self, tmp_path, name, expected):
        assert is_config_file(tmp_path / name) is expected
