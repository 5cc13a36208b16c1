"""
Secret detection orchestrator for Keyhound.

Runs the pattern catalog and the candidate extractor plus classifier
consensus over one text buffer, merges both result sets, deduplicates
them, annotates each finding with its location and surrounding context,
and scores the aggregate risk.

The detector holds no per-scan state; one instance may serve concurrent
scans over different content.
"""

from __future__ import annotations

import time
from typing import Iterable

from keyhound.config.detector_config import DetectorConfig
from keyhound.detection.classifiers import ConsensusClassifier
from keyhound.detection.entropy import calculate_entropy
from keyhound.detection.extractor import CandidateExtractor
from keyhound.detection.patterns import DEFAULT_CATALOG, PatternCatalog
from keyhound.detection.risk import RiskScorer
from keyhound.errors import ContentTooLargeError, InvalidInputError
from keyhound.models.secret import (
    Detection,
    SecretDetectionResult,
    SecretMatch,
    SecretType,
)
from keyhound.observability.logging import get_logger
from keyhound.observability.metrics import KeyhoundMetrics, get_metrics

logger = get_logger(__name__)


class SecretDetector:
    """
    Detects secrets in text.

    Uses a combination of:
    - Pattern matching against the signature catalog
    - Classifier consensus over extracted candidates
    - Deduplication on (type, value), pattern findings first

    Matches hold raw secret values. Only counts, types and timings are
    logged or recorded as metrics.
    """

    def __init__(
        self,
        config: DetectorConfig | None = None,
        catalog: PatternCatalog | None = None,
        consensus: ConsensusClassifier | None = None,
        extractor: CandidateExtractor | None = None,
        risk_scorer: RiskScorer | None = None,
        metrics: KeyhoundMetrics | None = None,
    ):
        """
        Initialize the secret detector.

        Args:
            config: Detector configuration (defaults to DetectorConfig())
            catalog: Pattern catalog (defaults to the built-in catalog)
            consensus: Classifier consensus (defaults to the standard four)
            extractor: Candidate extractor
            risk_scorer: Risk scorer
            metrics: Metrics collector (defaults to the global instance)
        """
        self.config = config or DetectorConfig()
        base_catalog = catalog if catalog is not None else DEFAULT_CATALOG
        if self.config.disabled_types:
            base_catalog = base_catalog.without(self.config.disabled_types)
        self.catalog = base_catalog
        self.consensus = consensus or ConsensusClassifier()
        self.extractor = extractor or CandidateExtractor()
        self.risk_scorer = risk_scorer or RiskScorer()
        self._metrics = metrics

    @property
    def metrics(self) -> KeyhoundMetrics:
        """Metrics collector used for scan events."""
        return self._metrics if self._metrics is not None else get_metrics()

    def detect_secrets(self, content: str | bytes) -> SecretDetectionResult:
        """
        Detect secrets in a text buffer.

        Args:
            content: Text to scan; bytes are decoded as UTF-8

        Returns:
            SecretDetectionResult for this content

        Raises:
            InvalidInputError: If content is not text or not valid UTF-8
            ContentTooLargeError: If content exceeds max_content_length
        """
        text = self._validate(content)
        start_time = time.perf_counter()

        logger.scan_started(content_length=len(text), pattern_count=len(self.catalog))

        detections = self.catalog.scan(text)
        if self.config.enable_classifiers:
            detections.extend(self._classify_candidates(text))

        matches = [self._to_match(text, d) for d in _deduplicate(detections)]
        result = SecretDetectionResult.build(
            matches,
            risk_score=self.risk_scorer.score(matches),
            high_confidence_threshold=self.config.high_confidence_threshold,
        )

        duration = time.perf_counter() - start_time
        type_counts = {t.value: n for t, n in result.secret_types.items()}
        logger.scan_completed(
            total_secrets=result.total_secrets,
            high_confidence_secrets=result.high_confidence_secrets,
            secret_types=type_counts,
            risk_score=result.risk_score,
            duration_seconds=duration,
        )
        self.metrics.scan_completed(
            duration_seconds=duration,
            secret_count=result.total_secrets,
            risk_score=result.risk_score,
        )
        if type_counts:
            self.metrics.secrets_by_type(type_counts)

        return result

    def _validate(self, content: str | bytes) -> str:
        try:
            if isinstance(content, bytes):
                try:
                    content = content.decode("utf-8")
                except UnicodeDecodeError as e:
                    raise InvalidInputError(
                        f"Content is not valid UTF-8: {e.reason} at byte {e.start}",
                        input_type="bytes",
                    )
            elif not isinstance(content, str):
                raise InvalidInputError(
                    f"Content must be str or bytes, got {type(content).__name__}",
                    input_type=type(content).__name__,
                )

            limit = self.config.max_content_length
            if limit and len(content) > limit:
                raise ContentTooLargeError(len(content), limit)
        except (InvalidInputError, ContentTooLargeError) as e:
            logger.scan_rejected(reason=type(e).__name__, error=str(e))
            self.metrics.scan_rejected(error_type=type(e).__name__)
            raise

        return content

    def _classify_candidates(self, content: str) -> list[Detection]:
        window = self.config.context_window
        detections = []
        for candidate in self.extractor.extract(content):
            context = _window(content, candidate.start_offset, candidate.end_offset, window)
            confidence = self.consensus.evaluate(candidate.value, context)
            if confidence is None:
                continue
            detections.append(
                Detection(
                    secret_type=SecretType.GENERIC_SECRET,
                    candidate=candidate,
                    confidence=confidence,
                    entropy=calculate_entropy(candidate.value),
                )
            )
        return detections

    def _to_match(self, content: str, detection: Detection) -> SecretMatch:
        start = detection.candidate.start_offset
        end = detection.candidate.end_offset
        line, column = _line_and_column(content, start)
        return SecretMatch(
            type=detection.secret_type,
            value=detection.candidate.value,
            start_index=start,
            end_index=end,
            confidence=detection.confidence,
            entropy=detection.entropy,
            context=_window(content, start, end, self.config.context_window),
            line=line,
            column=column,
        )


def _deduplicate(detections: Iterable[Detection]) -> list[Detection]:
    """Keep the first detection for each (type, value) pair."""
    seen: set[tuple[SecretType, str]] = set()
    unique = []
    for detection in detections:
        key = detection.dedup_key
        if key in seen:
            continue
        seen.add(key)
        unique.append(detection)
    return unique


def _window(content: str, start: int, end: int, size: int) -> str:
    return content[max(0, start - size) : min(len(content), end + size)]


def _line_and_column(content: str, offset: int) -> tuple[int, int]:
    """Get the 1-based line and column of an offset."""
    line = content.count("\n", 0, offset) + 1
    line_start = content.rfind("\n", 0, offset) + 1
    return line, offset - line_start + 1


def create_secret_detector(config: DetectorConfig | None = None) -> SecretDetector:
    """
    Create a SecretDetector with specified configuration.

    Args:
        config: Detector configuration (defaults to DetectorConfig())

    Returns:
        Configured SecretDetector instance
    """
    return SecretDetector(config=config)


# Shared detector for module-level scans
_default_detector: SecretDetector | None = None


def get_default_detector() -> SecretDetector:
    """
    Get the shared default detector.

    Returns:
        SecretDetector built with the default configuration
    """
    global _default_detector
    if _default_detector is None:
        _default_detector = SecretDetector()
    return _default_detector


def detect_secrets(content: str | bytes) -> SecretDetectionResult:
    """
    Detect secrets in a text buffer with the shared default detector.

    Args:
        content: Text to scan

    Returns:
        SecretDetectionResult for this content
    """
    return get_default_detector().detect_secrets(content)
