"""
Configuration management for Keyhound.

Provides the detector configuration class and helpers for loading it
from files and environment variables.
"""

from keyhound.config.detector_config import (
    DetectorConfig,
    create_default_config,
    load_config_from_env,
)

__all__ = [
    "DetectorConfig",
    "create_default_config",
    "load_config_from_env",
]
