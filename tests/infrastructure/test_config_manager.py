#!/usr/bin/env python3
"""Tests for the ConfigManager module."""

import os
from unittest.mock import patch

import pytest

from resourcefilter.core.constants import ErrorCode
from resourcefilter.infrastructure.config_manager import (
    ConfigError,
    ConfigManager,
    ConfigSource,
    get_config_manager,
    set_global_config,
)


@pytest.fixture(autouse=True)
def clean_environment():
    """Keep RESOURCEFILTER_* variables of the test runner out of the tests."""
    env = {k: v for k, v in os.environ.items() if not k.startswith("RESOURCEFILTER_")}
    with patch.dict(os.environ, env, clear=True):
        yield


class TestConfigSource:
    def test_precedence_order(self):
        values = [s.value for s in ConfigSource]
        assert values == sorted(values)
        assert ConfigSource.COMPILED_DEFAULTS.value < ConfigSource.RUNTIME.value


class TestConfigManager:
    """Tests for ConfigManager."""

    def test_defaults(self):
        config = ConfigManager()
        assert config.get("resourcefilter.root_path") == "/"
        assert config.get("resourcefilter.query.default_limit") == 50
        assert config.get("resourcefilter.logging.level") == "INFO"

    def test_default_for_missing_key(self):
        assert ConfigManager().get("resourcefilter.missing", "fallback") == "fallback"

    def test_defaults_not_shared(self):
        first = ConfigManager()
        first.get("resourcefilter.origins").append({"kind": "classpath"})
        assert ConfigManager().get("resourcefilter.origins") == []

    def test_load_file(self, config_file):
        config = ConfigManager(str(config_file))
        assert config.get("resourcefilter.modules") == ["core"]
        assert config.get("resourcefilter.query.default_limit") == 5
        assert config.get("resourcefilter.root_path") == "/"

    def test_load_file_without_root_key(self, temp_dir):
        path = temp_dir / "bare.yaml"
        path.write_text("modules: [site]\n")
        config = ConfigManager(str(path))
        assert config.get("resourcefilter.modules") == ["site"]

    def test_missing_file(self, temp_dir):
        with pytest.raises(ConfigError) as exc_info:
            ConfigManager(str(temp_dir / "nope.yaml"))
        assert exc_info.value.error_code == ErrorCode.NOT_FOUND

    def test_invalid_yaml(self, temp_dir):
        path = temp_dir / "bad.yaml"
        path.write_text("resourcefilter: [unclosed\n")
        with pytest.raises(ConfigError, match="YAML parse error"):
            ConfigManager(str(path))

    def test_non_mapping_file(self, temp_dir):
        path = temp_dir / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ConfigError, match="Invalid config format"):
            ConfigManager(str(path))

    def test_load_dict_precedence(self):
        config = ConfigManager()
        config.load_dict({"query": {"default_limit": 10}}, source=ConfigSource.CLI_ARGS)
        assert config.get("resourcefilter.query.default_limit") == 10

        config.set("resourcefilter.query.default_limit", 3)
        assert config.get("resourcefilter.query.default_limit") == 3

    def test_load_dict_copies_input(self):
        data = {"modules": ["core"]}
        config = ConfigManager()
        config.load_dict(data)
        data["modules"].append("other")
        assert config.get("resourcefilter.modules") == ["core"]

    def test_environment_override(self):
        with patch.dict(
            os.environ,
            {
                "RESOURCEFILTER_QUERY_DEFAULT__LIMIT": "20",
                "RESOURCEFILTER_LOGGING_LEVEL": "DEBUG",
            },
        ):
            config = ConfigManager()

        assert config.get("resourcefilter.query.default_limit") == 20
        assert config.get("resourcefilter.logging.level") == "DEBUG"

    @pytest.mark.parametrize(
        "raw,expected", [("true", True), ("No", False), ("12", 12), ("1.5", 1.5), ("text", "text")]
    )
    def test_parse_env_value(self, raw, expected):
        assert ConfigManager()._parse_env_value(raw) == expected

    def test_get_all_deep_merges(self):
        config = ConfigManager()
        config.load_dict({"logging": {"level": "DEBUG"}})
        merged = config.get_all()["resourcefilter"]
        assert merged["logging"] == {"level": "DEBUG", "file": None}

    def test_validate(self, config_file):
        assert ConfigManager(str(config_file)).validate() is True

    def test_validate_wraps_validation_error(self):
        config = ConfigManager()
        config.load_dict({"origins": [{"kind": "bogus", "paths": []}]})
        with pytest.raises(ConfigError) as exc_info:
            config.validate()
        assert exc_info.value.error_code == ErrorCode.INVALID_INPUT

    def test_clear_keeps_defaults(self):
        config = ConfigManager()
        config.load_dict({"modules": ["core"]})
        config.clear()
        assert config.get("resourcefilter.modules") == []

    def test_clear_single_source(self):
        config = ConfigManager()
        config.load_dict({"modules": ["cli"]}, source=ConfigSource.CLI_ARGS)
        config.load_dict({"modules": ["runtime"]})
        config.clear(ConfigSource.RUNTIME)
        assert config.get("resourcefilter.modules") == ["cli"]


class TestGlobalConfig:
    def test_get_config_manager_singleton(self):
        assert get_config_manager() is get_config_manager()

    def test_set_global_config(self):
        config = ConfigManager()
        set_global_config(config)
        assert get_config_manager() is config
