"""
Shannon entropy for Keyhound.
"""

from __future__ import annotations

import math
from collections import Counter


def calculate_entropy(text: str) -> float:
    """
    Calculate Shannon entropy of a string.

    Args:
        text: String to analyze

    Returns:
        Entropy in bits per character (higher = more random)
    """
    if not text:
        return 0.0

    length = len(text)
    entropy = 0.0
    for count in Counter(text).values():
        probability = count / length
        entropy -= probability * math.log2(probability)

    return entropy
