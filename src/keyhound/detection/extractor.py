"""
Candidate extraction for Keyhound.

Finds substrings that are plausible secret locations without relying on
the pattern catalog: quoted literals and values assigned to identifiers.
Candidates may overlap each other and catalog hits; the detector's
deduplication resolves that.
"""

from __future__ import annotations

import re

from keyhound.detection.entropy import calculate_entropy
from keyhound.models.secret import Candidate

QUOTED_LITERAL_PATTERN = re.compile(r"['\"`]([A-Za-z0-9+/=_-]{16,})['\"`]")
ASSIGNMENT_PATTERN = re.compile(r"(\w+)\s*[:=]\s*['\"`]([A-Za-z0-9+/=_-]{20,})['\"`]")


class CandidateExtractor:
    """
    Extracts classifier input from raw text.

    Two rules are applied independently:
    - Quoted literal of at least ``min_literal_length`` characters with
      entropy above ``literal_entropy``
    - ``identifier = "value"`` or ``identifier: "value"`` where the value
      has at least ``min_assignment_length`` characters and entropy above
      ``assignment_entropy``

    Offsets always exclude the enclosing quotes.
    """

    def __init__(
        self,
        min_literal_length: int = 16,
        literal_entropy: float = 3.5,
        min_assignment_length: int = 20,
        assignment_entropy: float = 4.0,
    ):
        self.min_literal_length = min_literal_length
        self.literal_entropy = literal_entropy
        self.min_assignment_length = min_assignment_length
        self.assignment_entropy = assignment_entropy

    def extract(self, content: str) -> list[Candidate]:
        """
        Extract candidates from content.

        Args:
            content: Text to scan

        Returns:
            Quoted-literal candidates followed by assignment candidates
        """
        return self._quoted_literals(content) + self._assignments(content)

    def _quoted_literals(self, content: str) -> list[Candidate]:
        candidates = []
        for match in QUOTED_LITERAL_PATTERN.finditer(content):
            value = match.group(1)
            if len(value) < self.min_literal_length:
                continue
            if calculate_entropy(value) <= self.literal_entropy:
                continue
            candidates.append(
                Candidate(
                    value=value,
                    start_offset=match.start(1),
                    end_offset=match.end(1),
                )
            )
        return candidates

    def _assignments(self, content: str) -> list[Candidate]:
        candidates = []
        for match in ASSIGNMENT_PATTERN.finditer(content):
            value = match.group(2)
            if len(value) < self.min_assignment_length:
                continue
            if calculate_entropy(value) <= self.assignment_entropy:
                continue
            candidates.append(
                Candidate(
                    value=value,
                    start_offset=match.start(2),
                    end_offset=match.end(2),
                )
            )
        return candidates
