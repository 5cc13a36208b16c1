"""
Secret detection for Keyhound.

This package provides the detection pipeline:

- PatternCatalog: Known secret signatures with entropy acceptance bounds
- Classifiers: Entropy, base64, hex and context scoring with consensus voting
- CandidateExtractor: Quoted literals and assigned values for classification
- RiskScorer: Aggregate 0-100 risk of a scan
- SecretDetector: Orchestrates the above over one text buffer
"""

from __future__ import annotations

from keyhound.detection.classifiers import (
    Base64Classifier,
    Classifier,
    ClassifierVote,
    ConsensusClassifier,
    ContextClassifier,
    EntropyClassifier,
    HexClassifier,
    default_classifiers,
)
from keyhound.detection.detector import (
    SecretDetector,
    create_secret_detector,
    detect_secrets,
    get_default_detector,
)
from keyhound.detection.entropy import calculate_entropy
from keyhound.detection.extractor import CandidateExtractor
from keyhound.detection.patterns import (
    CATALOG_VERSION,
    DEFAULT_CATALOG,
    SECRET_PATTERNS,
    EntropyRange,
    PatternCatalog,
    SecretPattern,
)
from keyhound.detection.risk import SEVERITY_WEIGHTS, RiskScorer

__all__ = [
    # Classifiers
    "Base64Classifier",
    "Classifier",
    "ClassifierVote",
    "ConsensusClassifier",
    "ContextClassifier",
    "EntropyClassifier",
    "HexClassifier",
    "default_classifiers",
    # Detector
    "SecretDetector",
    "create_secret_detector",
    "detect_secrets",
    "get_default_detector",
    # Entropy
    "calculate_entropy",
    # Extraction
    "CandidateExtractor",
    # Patterns
    "CATALOG_VERSION",
    "DEFAULT_CATALOG",
    "SECRET_PATTERNS",
    "EntropyRange",
    "PatternCatalog",
    "SecretPattern",
    # Risk
    "SEVERITY_WEIGHTS",
    "RiskScorer",
]
