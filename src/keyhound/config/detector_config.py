"""
Detector configuration for Keyhound.

Provides configuration for the secret detector: context window size,
the high-confidence threshold, an optional content size cap, disabled
secret types, and whether the classifier path runs.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from keyhound.errors import ConfigurationError
from keyhound.models.secret import SecretType


@dataclass
class DetectorConfig:
    """
    Configuration for a SecretDetector.

    Attributes:
        context_window: Characters captured on each side of a match, also
            the window searched by the context classifier
        high_confidence_threshold: Confidence counted as high (0-100)
        max_content_length: Reject content longer than this many characters
            (0 disables the cap)
        disabled_types: Secret types whose catalog patterns are skipped
        enable_classifiers: Whether to run the extractor and classifiers
    """

    context_window: int = 50
    high_confidence_threshold: float = 80
    max_content_length: int = 0
    disabled_types: list[SecretType] = field(default_factory=list)
    enable_classifiers: bool = True

    def __post_init__(self) -> None:
        """Validate settings."""
        _check_number("context_window", self.context_window, integer=True)
        _check_number("high_confidence_threshold", self.high_confidence_threshold)
        _check_number("max_content_length", self.max_content_length, integer=True)
        if not isinstance(self.enable_classifiers, bool):
            raise ConfigurationError(
                "enable_classifiers must be a boolean, "
                f"got {type(self.enable_classifiers).__name__}"
            )
        if not isinstance(self.disabled_types, (list, tuple, set)):
            raise ConfigurationError(
                "disabled_types must be a list of secret types, "
                f"got {type(self.disabled_types).__name__}"
            )
        self.disabled_types = [
            _parse_secret_type(t) for t in self.disabled_types
        ]
        if self.context_window < 0:
            raise ConfigurationError(
                f"context_window must be non-negative, got {self.context_window}"
            )
        if not 0 <= self.high_confidence_threshold <= 100:
            raise ConfigurationError(
                "high_confidence_threshold must be between 0 and 100, "
                f"got {self.high_confidence_threshold}"
            )
        if self.max_content_length < 0:
            raise ConfigurationError(
                f"max_content_length must be non-negative, got {self.max_content_length}"
            )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "context_window": self.context_window,
            "high_confidence_threshold": self.high_confidence_threshold,
            "max_content_length": self.max_content_length,
            "disabled_types": [t.value for t in self.disabled_types],
            "enable_classifiers": self.enable_classifiers,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> DetectorConfig:
        """Create from dictionary."""
        disabled_types = data.get("disabled_types") or []
        if isinstance(disabled_types, str):
            disabled_types = [disabled_types]
        return cls(
            context_window=data.get("context_window", 50),
            high_confidence_threshold=data.get("high_confidence_threshold", 80),
            max_content_length=data.get("max_content_length", 0),
            disabled_types=disabled_types,
            enable_classifiers=data.get("enable_classifiers", True),
        )

    @classmethod
    def from_json(cls, json_str: str) -> DetectorConfig:
        """Create from JSON string."""
        return cls.from_dict(json.loads(json_str))

    @classmethod
    def from_file(cls, path: str) -> DetectorConfig:
        """
        Load configuration from a JSON or YAML file.

        Args:
            path: Path to the file

        Returns:
            DetectorConfig instance

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = os.path.expanduser(path)
        try:
            with open(path, "r", encoding="utf-8") as f:
                if path.endswith(".json"):
                    data = json.load(f)
                else:
                    data = yaml.safe_load(f)
        except (OSError, json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to load configuration from {path}: {e}")

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Configuration in {path} must be a mapping, got {type(data).__name__}"
            )
        return cls.from_dict(data)

    def save(self, path: str) -> None:
        """Save configuration to a JSON or YAML file."""
        path = os.path.expanduser(path)
        Path(path).parent.mkdir(parents=True, exist_ok=True)

        with open(path, "w", encoding="utf-8") as f:
            if path.endswith(".json"):
                json.dump(self.to_dict(), f, indent=2)
            else:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False)


def _parse_secret_type(value: SecretType | str) -> SecretType:
    if isinstance(value, SecretType):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(
            f"disabled_types entries must be strings, got {type(value).__name__}"
        )
    try:
        return SecretType.from_string(value)
    except ValueError as e:
        raise ConfigurationError(str(e))


def _check_number(name: str, value: Any, integer: bool = False) -> None:
    # bool is an int subclass but never a valid count or threshold
    expected = (int,) if integer else (int, float)
    if isinstance(value, bool) or not isinstance(value, expected):
        kind = "an integer" if integer else "a number"
        raise ConfigurationError(f"{name} must be {kind}, got {type(value).__name__}")


def _env_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _env_number(name: str, value: str, cast: type) -> Any:
    try:
        return cast(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {value!r}")


def load_config_from_env() -> DetectorConfig:
    """
    Load configuration from environment variables.

    Environment variables:
        KEYHOUND_CONFIG_FILE: Path to configuration file (takes precedence)
        KEYHOUND_CONTEXT_WINDOW: Context window size
        KEYHOUND_HIGH_CONFIDENCE_THRESHOLD: Confidence counted as high
        KEYHOUND_MAX_CONTENT_LENGTH: Content size cap (0 disables)
        KEYHOUND_DISABLED_TYPES: Comma-separated secret types to skip
        KEYHOUND_ENABLE_CLASSIFIERS: true/false

    Returns:
        DetectorConfig instance
    """
    config_file = os.getenv("KEYHOUND_CONFIG_FILE")
    if config_file and os.path.exists(config_file):
        return DetectorConfig.from_file(config_file)

    data: dict[str, Any] = {}

    context_window = os.getenv("KEYHOUND_CONTEXT_WINDOW")
    if context_window:
        data["context_window"] = _env_number(
            "KEYHOUND_CONTEXT_WINDOW", context_window, int
        )

    threshold = os.getenv("KEYHOUND_HIGH_CONFIDENCE_THRESHOLD")
    if threshold:
        data["high_confidence_threshold"] = _env_number(
            "KEYHOUND_HIGH_CONFIDENCE_THRESHOLD", threshold, float
        )

    max_length = os.getenv("KEYHOUND_MAX_CONTENT_LENGTH")
    if max_length:
        data["max_content_length"] = _env_number(
            "KEYHOUND_MAX_CONTENT_LENGTH", max_length, int
        )

    disabled = os.getenv("KEYHOUND_DISABLED_TYPES")
    if disabled:
        data["disabled_types"] = [t.strip() for t in disabled.split(",") if t.strip()]

    enable_classifiers = os.getenv("KEYHOUND_ENABLE_CLASSIFIERS")
    if enable_classifiers:
        data["enable_classifiers"] = _env_bool(enable_classifiers)

    return DetectorConfig.from_dict(data)


def create_default_config() -> DetectorConfig:
    """
    Create a default detector configuration.

    Returns:
        DetectorConfig with sensible defaults
    """
    return DetectorConfig()
