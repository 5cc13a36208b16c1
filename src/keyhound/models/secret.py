"""
Secret data models for Keyhound.

This module defines the SecretType enumeration, the transient Candidate
and Detection records used during a scan, and the SecretMatch and
SecretDetectionResult output types returned to callers.

SecretMatch.value and SecretMatch.context hold suspected live credentials.
Callers must not log or persist them unredacted.
"""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SecretType(Enum):
    """Kinds of secrets the engine can report."""

    API_KEY = "api_key"
    JWT_TOKEN = "jwt_token"
    DATABASE_CREDENTIAL = "database_credential"
    AWS_ACCESS_KEY = "aws_access_key"
    AWS_SECRET_KEY = "aws_secret_key"
    GITHUB_TOKEN = "github_token"
    GITLAB_TOKEN = "gitlab_token"
    SLACK_TOKEN = "slack_token"
    SLACK_WEBHOOK = "slack_webhook"
    STRIPE_KEY = "stripe_key"
    GOOGLE_API_KEY = "google_api_key"
    GOOGLE_OAUTH = "google_oauth"
    PRIVATE_KEY = "private_key"
    SSH_KEY = "ssh_key"
    PASSWORD = "password"
    CONNECTION_STRING = "connection_string"
    OAUTH_TOKEN = "oauth_token"
    WEBHOOK_URL = "webhook_url"
    AZURE_KEY = "azure_key"
    NPM_TOKEN = "npm_token"
    PYPI_TOKEN = "pypi_token"
    DOCKER_AUTH = "docker_auth"
    OPENAI_KEY = "openai_key"
    ANTHROPIC_KEY = "anthropic_key"
    FIREBASE_KEY = "firebase_key"
    TWILIO_KEY = "twilio_key"
    SENDGRID_KEY = "sendgrid_key"
    MAILCHIMP_KEY = "mailchimp_key"
    DISCORD_TOKEN = "discord_token"
    TELEGRAM_TOKEN = "telegram_token"
    VERCEL_TOKEN = "vercel_token"
    NETLIFY_TOKEN = "netlify_token"
    HEROKU_KEY = "heroku_key"
    DIGITALOCEAN_TOKEN = "digitalocean_token"
    GENERIC_SECRET = "generic_secret"

    @property
    def description(self) -> str:
        """Get a human-readable explanation of this secret type."""
        return _DESCRIPTIONS[self]

    @classmethod
    def from_string(cls, value: str) -> SecretType:
        """
        Create SecretType from string value.

        Args:
            value: String representation (case-insensitive)

        Returns:
            Matching SecretType enum value

        Raises:
            ValueError: If value is not a known secret type
        """
        value_lower = value.strip().lower()
        for secret_type in cls:
            if secret_type.value == value_lower:
                return secret_type
        raise ValueError(f"Invalid secret type: {value}")


_DESCRIPTIONS: dict[SecretType, str] = {
    SecretType.API_KEY: "Generic API Key - Could provide access to external services",
    SecretType.JWT_TOKEN: "JSON Web Token - May contain sensitive user information",
    SecretType.DATABASE_CREDENTIAL: (
        "Database Credential - Provides access to database systems"
    ),
    SecretType.AWS_ACCESS_KEY: "AWS Access Key - Provides access to Amazon Web Services",
    SecretType.AWS_SECRET_KEY: "AWS Secret Key - Provides access to Amazon Web Services",
    SecretType.GITHUB_TOKEN: "GitHub Token - Provides access to GitHub repositories",
    SecretType.GITLAB_TOKEN: "GitLab Token - Provides access to GitLab repositories",
    SecretType.SLACK_TOKEN: "Slack Token - Provides access to Slack workspace",
    SecretType.SLACK_WEBHOOK: "Slack Webhook - Provides posting access to Slack channels",
    SecretType.STRIPE_KEY: "Stripe API Key - Provides access to payment processing",
    SecretType.GOOGLE_API_KEY: "Google API Key - Provides access to Google services",
    SecretType.GOOGLE_OAUTH: "Google OAuth - Provides OAuth access to Google services",
    SecretType.PRIVATE_KEY: "Private Key - Used for cryptographic operations",
    SecretType.SSH_KEY: "SSH Key - Used for secure shell authentication",
    SecretType.PASSWORD: "Hardcoded Password - Authentication credential",
    SecretType.CONNECTION_STRING: (
        "Database Connection String - Contains database access information"
    ),
    SecretType.OAUTH_TOKEN: "OAuth Token - Provides delegated access to resources",
    SecretType.WEBHOOK_URL: "Webhook URL - May contain sensitive callback information",
    SecretType.AZURE_KEY: "Azure Key - Provides access to Microsoft Azure services",
    SecretType.NPM_TOKEN: "NPM Token - Provides access to NPM registry",
    SecretType.PYPI_TOKEN: "PyPI Token - Provides access to Python Package Index",
    SecretType.DOCKER_AUTH: "Docker Auth - Provides access to Docker registry",
    SecretType.OPENAI_KEY: "OpenAI API Key - Provides access to OpenAI services",
    SecretType.ANTHROPIC_KEY: (
        "Anthropic API Key - Provides access to Anthropic/Claude services"
    ),
    SecretType.FIREBASE_KEY: "Firebase Key - Provides access to Firebase services",
    SecretType.TWILIO_KEY: "Twilio Key - Provides access to Twilio communications",
    SecretType.SENDGRID_KEY: "SendGrid Key - Provides access to SendGrid email services",
    SecretType.MAILCHIMP_KEY: (
        "Mailchimp Key - Provides access to Mailchimp marketing services"
    ),
    SecretType.DISCORD_TOKEN: "Discord Token - Provides bot access to Discord servers",
    SecretType.TELEGRAM_TOKEN: "Telegram Token - Provides bot access to Telegram",
    SecretType.VERCEL_TOKEN: "Vercel Token - Provides access to Vercel deployment services",
    SecretType.NETLIFY_TOKEN: "Netlify Token - Provides access to Netlify services",
    SecretType.HEROKU_KEY: "Heroku Key - Provides access to Heroku platform",
    SecretType.DIGITALOCEAN_TOKEN: (
        "DigitalOcean Token - Provides access to DigitalOcean cloud services"
    ),
    SecretType.GENERIC_SECRET: (
        "Generic Secret - High-entropy string that may be sensitive"
    ),
}


def get_secret_type_description(secret_type: SecretType | str) -> str:
    """
    Describe a secret type.

    Args:
        secret_type: SecretType member or its string value

    Returns:
        Description, or "Unknown secret type" for unrecognized values
    """
    if isinstance(secret_type, str):
        try:
            secret_type = SecretType.from_string(secret_type)
        except ValueError:
            return "Unknown secret type"
    return secret_type.description


@dataclass(frozen=True)
class Candidate:
    """A substring proposed for classification."""

    value: str
    start_offset: int
    end_offset: int


@dataclass(frozen=True)
class Detection:
    """
    An accepted candidate before location annotation.

    Attributes:
        secret_type: Type assigned by the pattern or classifier path
        candidate: The matched substring and its offsets
        confidence: Confidence score (0-100)
        entropy: Shannon entropy of the candidate value
    """

    secret_type: SecretType
    candidate: Candidate
    confidence: float
    entropy: float

    @property
    def dedup_key(self) -> tuple[SecretType, str]:
        """Key used to collapse duplicate findings."""
        return (self.secret_type, self.candidate.value)


@dataclass(frozen=True)
class SecretMatch:
    """
    A detected secret.

    Attributes:
        type: Secret type
        value: Raw matched text (sensitive)
        start_index: Offset of the first matched character
        end_index: Offset one past the last matched character
        confidence: Confidence score (0-100)
        entropy: Shannon entropy of value
        context: Surrounding text window (sensitive)
        line: 1-based line of start_index
        column: 1-based column of start_index
    """

    type: SecretType
    value: str
    start_index: int
    end_index: int
    confidence: float
    entropy: float
    context: str
    line: int
    column: int

    def is_high_confidence(self, threshold: float = 80) -> bool:
        """Check if confidence reaches the given threshold."""
        return self.confidence >= threshold

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "type": self.type.value,
            "value": self.value,
            "start_index": self.start_index,
            "end_index": self.end_index,
            "confidence": self.confidence,
            "entropy": self.entropy,
            "context": self.context,
            "line": self.line,
            "column": self.column,
        }


@dataclass(frozen=True)
class SecretDetectionResult:
    """
    Result of scanning one text buffer.

    Attributes:
        secrets: Deduplicated matches, pattern-sourced first
        total_secrets: Number of matches
        high_confidence_secrets: Matches at or above the high-confidence threshold
        secret_types: Count of matches per type
        risk_score: Aggregate risk (0-100)
    """

    secrets: list[SecretMatch] = field(default_factory=list)
    total_secrets: int = 0
    high_confidence_secrets: int = 0
    secret_types: dict[SecretType, int] = field(default_factory=dict)
    risk_score: int = 0

    @classmethod
    def build(
        cls,
        secrets: list[SecretMatch],
        risk_score: int,
        high_confidence_threshold: float = 80,
    ) -> SecretDetectionResult:
        """
        Create a result with summary statistics derived from the matches.

        Args:
            secrets: Final list of matches
            risk_score: Aggregate risk score
            high_confidence_threshold: Confidence counted as high

        Returns:
            New SecretDetectionResult
        """
        return cls(
            secrets=list(secrets),
            total_secrets=len(secrets),
            high_confidence_secrets=sum(
                1 for s in secrets if s.is_high_confidence(high_confidence_threshold)
            ),
            secret_types=dict(Counter(s.type for s in secrets)),
            risk_score=risk_score,
        )

    def has_secrets(self) -> bool:
        """Check if any secret was found."""
        return self.total_secrets > 0

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "secrets": [s.to_dict() for s in self.secrets],
            "total_secrets": self.total_secrets,
            "high_confidence_secrets": self.high_confidence_secrets,
            "secret_types": {t.value: n for t, n in self.secret_types.items()},
            "risk_score": self.risk_score,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)
