import math
import re


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives (2.5 -> 3)."""
    return int(math.floor(value + 0.5))


def clamp(value: float, low: float = 0, high: float = 100) -> float:
    return max(low, min(high, value))


def normalize_text(text: str) -> str:
    """
    Normalize text for matching.
    - Lowercase
    - Collapse whitespace
    Accents and punctuation are kept: French keywords and codes like "peg-" rely on them.
    """
    if not text:
        return ""

    # Lowercase
    text = text.lower()

    # Collapse whitespace
    text = re.sub(r'\s+', ' ', text).strip()

    return text


def longest_match(text: str, keywords) -> str:
    """Return the longest keyword contained in text, or an empty string."""
    for keyword in sorted(keywords, key=len, reverse=True):
        if keyword in text:
            return keyword
    return ""
