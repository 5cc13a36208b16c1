"""
Unit tests for Keyhound statistical classifiers and consensus voting.
"""

from __future__ import annotations

import pytest

from keyhound.detection.classifiers import (
    Base64Classifier,
    Classifier,
    ConsensusClassifier,
    ContextClassifier,
    EntropyClassifier,
    HexClassifier,
    default_classifiers,
)

# 64 distinct base64 symbols: entropy 6.0
FULL_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789+/"
SHA1_HEX = "da39a3ee5e6b4b0d3255bfef95601890afd80709"


class FixedClassifier(Classifier):
    """Classifier returning a preset score."""

    def __init__(self, score: float, threshold: float = 0.5, name: str = "fixed"):
        self.score = score
        self.threshold = threshold
        self.name = name

    def classify(self, value: str, context: str) -> float:
        return self.score


# ============================================================================
# Individual Classifier Tests
# ============================================================================


class TestEntropyClassifier:
    """Tests for EntropyClassifier."""

    def test_low_entropy_scores_zero(self) -> None:
        """Test a repeated character scores nothing."""
        assert EntropyClassifier().classify("a" * 40, "") == 0.0

    def test_maximal_string_scores_one(self) -> None:
        """Test a long, mixed, high-entropy string reaches the cap."""
        assert EntropyClassifier().classify(FULL_ALPHABET, "") == pytest.approx(1.0)

    def test_mixed_classes_bonus_only(self) -> None:
        """Test a short mixed-class string earns only the class bonus."""
        assert EntropyClassifier().classify("aB3", "") == pytest.approx(0.1)

    def test_threshold(self) -> None:
        """Test the acceptance threshold."""
        classifier = EntropyClassifier()
        assert classifier.threshold == 0.7
        assert classifier.passes(0.7)
        assert not classifier.passes(0.69)


class TestBase64Classifier:
    """Tests for Base64Classifier."""

    def test_non_base64_scores_zero(self) -> None:
        """Test characters outside the alphabet score nothing."""
        assert Base64Classifier().classify("not base64!", "") == 0.0

    def test_trailing_newline_rejected(self) -> None:
        """Test the whole value must be base64."""
        assert Base64Classifier().classify(FULL_ALPHABET + "\n", "") == 0.0

    def test_long_entropic_value_scores_one(self) -> None:
        """Test a 64-character entropic value reaches the cap."""
        assert Base64Classifier().classify(FULL_ALPHABET, "") == pytest.approx(1.0)

    def test_padded_value(self) -> None:
        """Test trailing padding is accepted."""
        assert Base64Classifier().classify("QUJDREVGR0hJSktMTU5PUA==", "") > 0.0

    def test_threshold(self) -> None:
        """Test the acceptance threshold."""
        assert Base64Classifier().threshold == 0.6


class TestHexClassifier:
    """Tests for HexClassifier."""

    def test_non_hex_scores_zero(self) -> None:
        """Test characters outside hex score nothing."""
        assert HexClassifier().classify("xyz123", "") == 0.0

    def test_sha1_length_passes(self) -> None:
        """Test a 40-character digest passes on its own."""
        classifier = HexClassifier()
        score = classifier.classify(SHA1_HEX, "")

        assert score == pytest.approx(0.8)
        assert classifier.passes(score)

    def test_32_character_hex_fails(self) -> None:
        """Test a non-canonical length stays under the threshold."""
        classifier = HexClassifier()
        score = classifier.classify("0123456789abcdef0123456789abcdef", "")

        assert score == pytest.approx(0.6)
        assert not classifier.passes(score)

    def test_trailing_newline_rejected(self) -> None:
        """Test the whole value must be hex."""
        assert HexClassifier().classify(SHA1_HEX + "\n", "") == 0.0


class TestContextClassifier:
    """Tests for ContextClassifier."""

    def test_neutral_context(self) -> None:
        """Test an assignment alone scores 0.1."""
        context = 'const display_label = "value";'
        assert ContextClassifier().classify("value", context) == pytest.approx(0.1)

    def test_credential_context_passes(self) -> None:
        """Test keywords, identifier and assignment add up past the threshold."""
        classifier = ContextClassifier()
        score = classifier.classify("v", 'const bearer_token_api = "v";')

        assert score == pytest.approx(0.55)
        assert classifier.passes(score)

    def test_keywords_case_insensitive(self) -> None:
        """Test keyword search ignores case."""
        assert ContextClassifier().classify("v", "API TOKEN") == pytest.approx(0.2)

    def test_score_capped(self) -> None:
        """Test the score never exceeds 1.0."""
        context = (
            "api_key access_token secret_key private_key auth_token bearer_token "
            "password credential config env oauth jwt = 'x'"
        )
        assert ContextClassifier().classify("x", context) == 1.0


# ============================================================================
# Consensus Tests
# ============================================================================


class TestConsensusClassifier:
    """Tests for ConsensusClassifier."""

    def test_default_classifiers(self) -> None:
        """Test the standard set has the four classifiers."""
        names = [c.name for c in default_classifiers()]
        assert names == [
            "entropy_classifier",
            "base64_classifier",
            "hex_classifier",
            "context_classifier",
        ]
        assert len(ConsensusClassifier().classifiers) == 4

    def test_single_pass_rejected(self) -> None:
        """Test one passing classifier is not enough."""
        consensus = ConsensusClassifier(
            [FixedClassifier(0.9), FixedClassifier(0.1), FixedClassifier(0.1), FixedClassifier(0.1)]
        )
        assert consensus.evaluate("value", "") is None

    def test_two_passes_accepted(self) -> None:
        """Test confidence averages passing scores over all classifiers."""
        consensus = ConsensusClassifier(
            [FixedClassifier(0.8), FixedClassifier(0.6), FixedClassifier(0.1), FixedClassifier(0.0)]
        )
        assert consensus.evaluate("value", "") == pytest.approx(35.0)

    def test_failing_scores_not_counted(self) -> None:
        """Test scores below threshold do not add to confidence."""
        consensus = ConsensusClassifier(
            [FixedClassifier(1.0), FixedClassifier(1.0), FixedClassifier(0.49)]
        )
        assert consensus.evaluate("value", "") == pytest.approx(200 / 3)

    def test_confidence_capped_at_95(self) -> None:
        """Test unanimous full scores are capped."""
        consensus = ConsensusClassifier([FixedClassifier(1.0) for _ in range(4)])
        assert consensus.evaluate("value", "") == 95.0

    def test_threshold_is_inclusive(self) -> None:
        """Test a score equal to the threshold counts as passing."""
        consensus = ConsensusClassifier(
            [FixedClassifier(0.5, threshold=0.5), FixedClassifier(0.5, threshold=0.5)]
        )
        assert consensus.evaluate("value", "") == pytest.approx(50.0)

    def test_custom_agreement(self) -> None:
        """Test min_agreement can be raised."""
        consensus = ConsensusClassifier(
            [FixedClassifier(0.9), FixedClassifier(0.9), FixedClassifier(0.1)],
            min_agreement=3,
        )
        assert consensus.evaluate("value", "") is None

    def test_no_classifiers(self) -> None:
        """Test an empty classifier set accepts nothing."""
        assert ConsensusClassifier([]).evaluate("value", "") is None

    def test_votes(self) -> None:
        """Test votes report every classifier in order."""
        consensus = ConsensusClassifier(
            [FixedClassifier(0.9, name="a"), FixedClassifier(0.1, name="b")]
        )
        votes = consensus.votes("value", "")

        assert [v.classifier for v in votes] == ["a", "b"]
        assert [v.passed for v in votes] == [True, False]

    def test_context_decides_boundary_value(
        self, boundary_value: str, credential_context_content: str, neutral_context_content: str
    ) -> None:
        """Test credential vocabulary turns one vote into consensus."""
        consensus = ConsensusClassifier()

        with_context = consensus.evaluate(boundary_value, credential_context_content)
        without_context = consensus.evaluate(boundary_value, neutral_context_content)

        assert with_context == pytest.approx(33.75)
        assert without_context is None
