"""
Tests for Keyhound detector configuration.

Tests cover:
- DetectorConfig defaults and validation
- Dictionary, JSON and YAML round trips
- Environment variable loading
"""

from __future__ import annotations

import json
import os
from unittest.mock import patch

import pytest
import yaml

from keyhound.config import DetectorConfig, create_default_config, load_config_from_env
from keyhound.errors import ConfigurationError
from keyhound.models import SecretType


class TestDetectorConfig:
    """Tests for DetectorConfig dataclass."""

    def test_defaults(self):
        """Test default settings."""
        config = DetectorConfig()

        assert config.context_window == 50
        assert config.high_confidence_threshold == 80
        assert config.max_content_length == 0
        assert config.disabled_types == []
        assert config.enable_classifiers is True

    def test_create_default_config(self):
        """Test the default factory."""
        assert create_default_config() == DetectorConfig()

    def test_disabled_types_parsed(self):
        """Test disabled types accept strings and members."""
        config = DetectorConfig(disabled_types=["heroku_key", SecretType.PASSWORD])
        assert config.disabled_types == [SecretType.HEROKU_KEY, SecretType.PASSWORD]

    def test_unknown_disabled_type(self):
        """Test unknown type names are rejected."""
        with pytest.raises(ConfigurationError, match="Invalid secret type"):
            DetectorConfig(disabled_types=["bogus"])

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"context_window": -1},
            {"high_confidence_threshold": 101},
            {"high_confidence_threshold": -5},
            {"max_content_length": -1},
            {"context_window": "abc"},
            {"context_window": 10.5},
            {"context_window": True},
            {"high_confidence_threshold": "80"},
            {"high_confidence_threshold": None},
            {"max_content_length": "1024"},
            {"enable_classifiers": "yes"},
            {"disabled_types": [1]},
            {"disabled_types": [None]},
            {"disabled_types": {"heroku_key": True}},
        ],
    )
    def test_invalid_values(self, kwargs):
        """Test out-of-range and badly typed values are rejected."""
        with pytest.raises(ConfigurationError):
            DetectorConfig.from_dict(kwargs)
        with pytest.raises(ConfigurationError):
            DetectorConfig(**kwargs)

    def test_scalar_disabled_type(self):
        """Test a single type name is accepted in place of a list."""
        config = DetectorConfig.from_dict({"disabled_types": "aws_access_key"})
        assert config.disabled_types == [SecretType.AWS_ACCESS_KEY]

    def test_null_disabled_types(self):
        """Test an empty YAML value means no disabled types."""
        assert DetectorConfig.from_dict({"disabled_types": None}).disabled_types == []

    def test_bad_types_in_yaml_file(self, tmp_path):
        """Test badly typed file values raise ConfigurationError."""
        path = tmp_path / "keyhound.yaml"
        path.write_text("context_window: wide\n")

        with pytest.raises(ConfigurationError, match="context_window must be an integer"):
            DetectorConfig.from_file(str(path))

    def test_to_dict(self):
        """Test dictionary form uses type values."""
        config = DetectorConfig(context_window=20, disabled_types=["heroku_key"])
        data = config.to_dict()

        assert data["context_window"] == 20
        assert data["disabled_types"] == ["heroku_key"]

    def test_from_dict_minimal(self):
        """Test missing keys fall back to defaults."""
        assert DetectorConfig.from_dict({}) == DetectorConfig()

    def test_json_round_trip(self):
        """Test JSON serialization preserves settings."""
        config = DetectorConfig(
            context_window=10,
            high_confidence_threshold=90,
            disabled_types=[SecretType.HEROKU_KEY],
            enable_classifiers=False,
        )
        assert DetectorConfig.from_json(config.to_json()) == config


class TestConfigFiles:
    """Tests for loading and saving configuration files."""

    def test_from_yaml_file(self, tmp_path):
        """Test loading YAML."""
        path = tmp_path / "keyhound.yaml"
        path.write_text(
            yaml.safe_dump(
                {
                    "context_window": 30,
                    "max_content_length": 1000000,
                    "disabled_types": ["heroku_key", "password"],
                }
            )
        )

        config = DetectorConfig.from_file(str(path))

        assert config.context_window == 30
        assert config.max_content_length == 1000000
        assert config.disabled_types == [SecretType.HEROKU_KEY, SecretType.PASSWORD]

    def test_from_json_file(self, tmp_path):
        """Test loading JSON."""
        path = tmp_path / "keyhound.json"
        path.write_text(json.dumps({"enable_classifiers": False}))

        assert DetectorConfig.from_file(str(path)).enable_classifiers is False

    def test_empty_yaml_file(self, tmp_path):
        """Test an empty file gives defaults."""
        path = tmp_path / "empty.yaml"
        path.write_text("")

        assert DetectorConfig.from_file(str(path)) == DetectorConfig()

    def test_missing_file(self, tmp_path):
        """Test a missing file raises ConfigurationError."""
        with pytest.raises(ConfigurationError, match="Failed to load"):
            DetectorConfig.from_file(str(tmp_path / "missing.yaml"))

    def test_malformed_json(self, tmp_path):
        """Test unparseable JSON raises ConfigurationError."""
        path = tmp_path / "bad.json"
        path.write_text("{not json")

        with pytest.raises(ConfigurationError):
            DetectorConfig.from_file(str(path))

    def test_non_mapping(self, tmp_path):
        """Test a top-level list is rejected."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")

        with pytest.raises(ConfigurationError, match="must be a mapping"):
            DetectorConfig.from_file(str(path))

    @pytest.mark.parametrize("filename", ["saved.yaml", "nested/saved.json"])
    def test_save_and_load(self, tmp_path, filename):
        """Test saved files load back to the same config."""
        config = DetectorConfig(context_window=12, disabled_types=["jwt_token"])
        path = str(tmp_path / filename)

        config.save(path)

        assert DetectorConfig.from_file(path) == config


class TestLoadConfigFromEnv:
    """Tests for load_config_from_env."""

    def test_no_env(self):
        """Test defaults when nothing is set."""
        with patch.dict(os.environ, {}, clear=True):
            assert load_config_from_env() == DetectorConfig()

    def test_env_values(self):
        """Test each variable is applied."""
        env = {
            "KEYHOUND_CONTEXT_WINDOW": "25",
            "KEYHOUND_HIGH_CONFIDENCE_THRESHOLD": "90.5",
            "KEYHOUND_MAX_CONTENT_LENGTH": "2048",
            "KEYHOUND_DISABLED_TYPES": "heroku_key, password",
            "KEYHOUND_ENABLE_CLASSIFIERS": "false",
        }
        with patch.dict(os.environ, env, clear=True):
            config = load_config_from_env()

        assert config.context_window == 25
        assert config.high_confidence_threshold == 90.5
        assert config.max_content_length == 2048
        assert config.disabled_types == [SecretType.HEROKU_KEY, SecretType.PASSWORD]
        assert config.enable_classifiers is False

    def test_env_config_file(self, tmp_path):
        """Test the config file takes precedence."""
        path = tmp_path / "keyhound.yaml"
        path.write_text("context_window: 7\n")
        env = {
            "KEYHOUND_CONFIG_FILE": str(path),
            "KEYHOUND_CONTEXT_WINDOW": "99",
        }
        with patch.dict(os.environ, env, clear=True):
            assert load_config_from_env().context_window == 7

    def test_env_not_a_number(self):
        """Test non-numeric values raise ConfigurationError."""
        with patch.dict(os.environ, {"KEYHOUND_CONTEXT_WINDOW": "wide"}, clear=True):
            with pytest.raises(ConfigurationError, match="must be a number"):
                load_config_from_env()
