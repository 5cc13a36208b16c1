"""
Statistical classifiers for Keyhound.

Each classifier maps a candidate string plus its surrounding text to a
score in [0, 1] and carries its own acceptance threshold. The consensus
rule accepts a candidate only when at least two classifiers reach their
thresholds, so a single weak signal (a long hex string with no supporting
context, say) never produces a finding on its own.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Sequence

from keyhound.detection.entropy import calculate_entropy

BASE64_PATTERN = re.compile(r"[A-Za-z0-9+/]*={0,2}")
HEX_PATTERN = re.compile(r"[a-fA-F0-9]+")

LOWER_PATTERN = re.compile(r"[a-z]")
UPPER_PATTERN = re.compile(r"[A-Z]")
DIGIT_PATTERN = re.compile(r"[0-9]")

SECRET_KEYWORDS = (
    "api",
    "key",
    "token",
    "secret",
    "password",
    "auth",
    "credential",
    "access",
    "private",
    "config",
    "env",
    "bearer",
    "oauth",
    "jwt",
)

IDENTIFIER_PATTERNS = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        r"api[_-]?key",
        r"access[_-]?token",
        r"secret[_-]?key",
        r"private[_-]?key",
        r"auth[_-]?token",
        r"bearer[_-]?token",
    )
)

ASSIGNMENT_PATTERN = re.compile(r"[:=]\s*['\"`]")

CANONICAL_HEX_LENGTHS = frozenset({40, 64, 128})


class Classifier(ABC):
    """
    Abstract base class for secret classifiers.

    Subclasses set ``name`` and ``threshold`` and implement ``classify``.
    """

    name: str = "classifier"
    threshold: float = 0.5

    @abstractmethod
    def classify(self, value: str, context: str) -> float:
        """
        Score how likely a value is to be a secret.

        Args:
            value: Candidate string
            context: Text surrounding the candidate (includes the candidate)

        Returns:
            Score between 0.0 and 1.0
        """
        pass

    def passes(self, score: float) -> bool:
        """Check if a score reaches this classifier's threshold."""
        return score >= self.threshold

    def __repr__(self) -> str:
        return f"{type(self).__name__}(threshold={self.threshold})"


class EntropyClassifier(Classifier):
    """Scores long, high-entropy, mixed-class strings."""

    name = "entropy_classifier"
    threshold = 0.7

    def classify(self, value: str, context: str) -> float:
        entropy = calculate_entropy(value)
        length = len(value)
        score = 0.0

        if entropy > 4.5 and length >= 20:
            score += 0.4
        if entropy > 5.0 and length >= 32:
            score += 0.3
        if entropy > 5.5 and length >= 40:
            score += 0.2

        if (
            LOWER_PATTERN.search(value)
            and UPPER_PATTERN.search(value)
            and DIGIT_PATTERN.search(value)
        ):
            score += 0.1

        return min(1.0, score)


class Base64Classifier(Classifier):
    """Scores strings drawn from the base64 alphabet."""

    name = "base64_classifier"
    threshold = 0.6

    def classify(self, value: str, context: str) -> float:
        if not BASE64_PATTERN.fullmatch(value):
            return 0.0

        length = len(value)
        score = 0.0

        if length >= 20 and length % 4 == 0:
            score += 0.3
        if length >= 32:
            score += 0.2
        if length >= 64:
            score += 0.2

        if calculate_entropy(value) > 4.0:
            score += 0.3

        return min(1.0, score)


class HexClassifier(Classifier):
    """Scores pure hexadecimal strings, favoring hash and key lengths."""

    name = "hex_classifier"
    threshold = 0.65

    def classify(self, value: str, context: str) -> float:
        if not HEX_PATTERN.fullmatch(value):
            return 0.0

        length = len(value)
        score = 0.0

        if length >= 32:
            score += 0.3
        if length >= 64:
            score += 0.2
        if length in CANONICAL_HEX_LENGTHS:
            score += 0.2

        if calculate_entropy(value) > 3.5:
            score += 0.3

        return min(1.0, score)


class ContextClassifier(Classifier):
    """Scores the text around a candidate for credential vocabulary."""

    name = "context_classifier"
    threshold = 0.5

    def classify(self, value: str, context: str) -> float:
        lower_context = context.lower()
        score = 0.0

        for keyword in SECRET_KEYWORDS:
            if keyword in lower_context:
                score += 0.1

        for pattern in IDENTIFIER_PATTERNS:
            if pattern.search(context):
                score += 0.15

        if ASSIGNMENT_PATTERN.search(context):
            score += 0.1

        return min(1.0, score)


@dataclass(frozen=True)
class ClassifierVote:
    """Score one classifier gave a candidate."""

    classifier: str
    score: float
    passed: bool


class ConsensusClassifier:
    """
    Combines classifiers by agreement.

    A candidate is accepted when at least ``min_agreement`` classifiers
    reach their own thresholds. Confidence is the sum of the passing
    scores averaged over all classifiers, scaled to 0-100 and capped.
    """

    def __init__(
        self,
        classifiers: Sequence[Classifier] | None = None,
        min_agreement: int = 2,
        max_confidence: float = 95.0,
    ):
        """
        Initialize the consensus classifier.

        Args:
            classifiers: Classifiers to consult (defaults to the standard four)
            min_agreement: Passing classifiers required to accept
            max_confidence: Upper bound on reported confidence
        """
        self.classifiers: tuple[Classifier, ...] = tuple(
            classifiers if classifiers is not None else default_classifiers()
        )
        self.min_agreement = min_agreement
        self.max_confidence = max_confidence

    def votes(self, value: str, context: str) -> list[ClassifierVote]:
        """
        Run every classifier on a candidate.

        Args:
            value: Candidate string
            context: Surrounding text

        Returns:
            One vote per classifier, in classifier order
        """
        votes = []
        for classifier in self.classifiers:
            score = classifier.classify(value, context)
            votes.append(
                ClassifierVote(
                    classifier=classifier.name,
                    score=score,
                    passed=classifier.passes(score),
                )
            )
        return votes

    def evaluate(self, value: str, context: str) -> float | None:
        """
        Decide whether a candidate is a secret.

        Args:
            value: Candidate string
            context: Surrounding text

        Returns:
            Confidence (0-100) if accepted, None otherwise
        """
        if not self.classifiers:
            return None

        passing = [v for v in self.votes(value, context) if v.passed]
        if len(passing) < self.min_agreement:
            return None

        total = sum(v.score for v in passing)
        return min(self.max_confidence, total / len(self.classifiers) * 100)


def default_classifiers() -> list[Classifier]:
    """
    Create the standard classifier set.

    Returns:
        Entropy, base64, hex and context classifiers
    """
    return [
        EntropyClassifier(),
        Base64Classifier(),
        HexClassifier(),
        ContextClassifier(),
    ]
