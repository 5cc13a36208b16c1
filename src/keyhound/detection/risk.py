"""
Risk scoring for Keyhound.

Aggregates the matches of one scan into a single 0-100 score. Each match
contributes its type's severity weight, scaled by confidence and by
entropy (capped at 1.5x), so the score never drops when a match is added.
"""

from __future__ import annotations

import math
from typing import Iterable

from keyhound.models.secret import SecretMatch, SecretType

DEFAULT_WEIGHT = 3.0
MAX_ENTROPY_MULTIPLIER = 1.5
MAX_RISK_SCORE = 100

SEVERITY_WEIGHTS: dict[SecretType, float] = {
    # Key material
    SecretType.PRIVATE_KEY: 10,
    SecretType.SSH_KEY: 10,
    # Cloud root credentials
    SecretType.AWS_ACCESS_KEY: 9,
    SecretType.AWS_SECRET_KEY: 9,
    SecretType.AZURE_KEY: 9,
    # Billing-capable APIs
    SecretType.STRIPE_KEY: 8,
    SecretType.OPENAI_KEY: 8,
    SecretType.ANTHROPIC_KEY: 8,
    SecretType.DOCKER_AUTH: 8,
    SecretType.DATABASE_CREDENTIAL: 8,
    # Platform tokens
    SecretType.GITHUB_TOKEN: 7,
    SecretType.GITLAB_TOKEN: 7,
    SecretType.GOOGLE_API_KEY: 7,
    SecretType.GOOGLE_OAUTH: 7,
    SecretType.FIREBASE_KEY: 7,
    SecretType.CONNECTION_STRING: 7,
    SecretType.NPM_TOKEN: 7,
    SecretType.PYPI_TOKEN: 7,
    SecretType.VERCEL_TOKEN: 7,
    SecretType.NETLIFY_TOKEN: 7,
    SecretType.HEROKU_KEY: 7,
    SecretType.DIGITALOCEAN_TOKEN: 7,
    # Messaging
    SecretType.SLACK_TOKEN: 6,
    SecretType.DISCORD_TOKEN: 6,
    SecretType.TELEGRAM_TOKEN: 6,
    SecretType.JWT_TOKEN: 6,
    SecretType.TWILIO_KEY: 6,
    SecretType.SENDGRID_KEY: 6,
    SecretType.SLACK_WEBHOOK: 5,
    SecretType.MAILCHIMP_KEY: 5,
    # Generic
    SecretType.API_KEY: 5,
    SecretType.OAUTH_TOKEN: 5,
    SecretType.PASSWORD: 4,
    SecretType.WEBHOOK_URL: 3,
    SecretType.GENERIC_SECRET: 3,
}


class RiskScorer:
    """
    Calculates the aggregate risk score of a set of matches.

    contribution = weight x (confidence / 100) x min(1.5, entropy / 5)
    score = round(clamp(sum of contributions, 0, 100))
    """

    def __init__(
        self,
        weights: dict[SecretType, float] | None = None,
        default_weight: float = DEFAULT_WEIGHT,
    ):
        """
        Initialize the risk scorer.

        Args:
            weights: Severity weight per secret type (defaults to SEVERITY_WEIGHTS)
            default_weight: Weight for types missing from the table
        """
        self.weights = weights if weights is not None else SEVERITY_WEIGHTS
        self.default_weight = default_weight

    def weight_for(self, secret_type: SecretType) -> float:
        """Get the severity weight of a secret type."""
        return self.weights.get(secret_type, self.default_weight)

    def contribution(self, match: SecretMatch) -> float:
        """
        Calculate one match's contribution to the score.

        Args:
            match: Secret match

        Returns:
            Non-negative contribution
        """
        confidence_multiplier = match.confidence / 100
        entropy_multiplier = min(MAX_ENTROPY_MULTIPLIER, match.entropy / 5)
        return self.weight_for(match.type) * confidence_multiplier * entropy_multiplier

    def score(self, matches: Iterable[SecretMatch]) -> int:
        """
        Calculate the risk score for a set of matches.

        Args:
            matches: Matches from one scan

        Returns:
            Risk score between 0 and 100
        """
        total = sum(self.contribution(m) for m in matches)
        clamped = max(0.0, min(float(MAX_RISK_SCORE), total))
        # Halves round up
        return int(math.floor(clamped + 0.5))
