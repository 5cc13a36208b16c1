"""
Exceptions raised by Keyhound.
"""

from __future__ import annotations


class SecretDetectionError(Exception):
    """Base exception for secret detection errors."""

    pass


class InvalidInputError(SecretDetectionError):
    """Exception raised when the scanned input is not text."""

    def __init__(self, message: str, input_type: str | None = None):
        self.input_type = input_type
        super().__init__(message)


class ContentTooLargeError(SecretDetectionError):
    """Exception raised when content exceeds the configured size cap."""

    def __init__(self, length: int, limit: int):
        self.length = length
        self.limit = limit
        super().__init__(
            f"Content length {length} exceeds configured limit of {limit} characters"
        )


class ConfigurationError(SecretDetectionError):
    """Exception raised for invalid detector configuration."""

    pass
