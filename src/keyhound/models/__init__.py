"""
Data models for Keyhound.

This package provides the core data models used throughout Keyhound:

- SecretType: Closed enumeration of reportable secret kinds
- Candidate / Detection: Transient records produced during a scan
- SecretMatch / SecretDetectionResult: Output returned to callers
"""

from keyhound.models.secret import (
    Candidate,
    Detection,
    SecretDetectionResult,
    SecretMatch,
    SecretType,
    get_secret_type_description,
)

__all__ = [
    "Candidate",
    "Detection",
    "SecretDetectionResult",
    "SecretMatch",
    "SecretType",
    "get_secret_type_description",
]
