"""
Text comparison primitives

Implements the text normalization and the edit-distance similarity used as the
fuzzy fallback by every field scorer.
"""

from __future__ import annotations

import re

_SINGLE_QUOTES_RE = re.compile(r"[‘’]")
_DOUBLE_QUOTES_RE = re.compile(r"[“”]")
_DASHES_RE = re.compile(r"[-–—]")
_PUNCTUATION_RE = re.compile(r"[.,;:!?()]")
_WHITESPACE_RE = re.compile(r"\s+")


def normalize_for_match(text: str) -> str:
    """
    Normalize text for comparison

    - Convert to lowercase
    - Fold curly quotes to straight quotes
    - Fold hyphens, en dashes and em dashes to spaces
    - Expand "&" to "and"
    - Strip punctuation (. , ; : ! ? ( ))
    - Collapse consecutive whitespace to a single space and trim

    Args:
        text: Text to normalize

    Returns:
        Normalized text ("" for empty input)
    """
    text = text.lower()
    text = _SINGLE_QUOTES_RE.sub("'", text)
    text = _DOUBLE_QUOTES_RE.sub('"', text)
    text = _DASHES_RE.sub(" ", text)
    text = text.replace("&", "and")
    text = _PUNCTUATION_RE.sub("", text)
    text = _WHITESPACE_RE.sub(" ", text)
    return text.strip()


def levenshtein_distance(a: str, b: str) -> int:
    """
    Edit distance with unit cost for insertion, deletion and substitution

    Args:
        a: First string
        b: Second string

    Returns:
        Minimum number of edits turning a into b
    """
    if not a:
        return len(b)
    if not b:
        return len(a)

    previous = list(range(len(a) + 1))
    for i in range(1, len(b) + 1):
        current = [i] + [0] * len(a)
        for j in range(1, len(a) + 1):
            if b[i - 1] == a[j - 1]:
                current[j] = previous[j - 1]
            else:
                current[j] = min(
                    previous[j - 1] + 1,  # substitution
                    current[j - 1] + 1,   # insertion
                    previous[j] + 1,      # deletion
                )
        previous = current
    return previous[len(a)]


def string_similarity(a: str, b: str) -> float:
    """
    Similarity ratio based on Levenshtein distance

    Args:
        a: First string
        b: Second string

    Returns:
        1.0 for identical strings (including two empty strings), 0.0 when exactly
        one is empty, otherwise (max_len - distance) / max_len
    """
    if a == b:
        return 1.0
    if not a or not b:
        return 0.0

    max_len = max(len(a), len(b))
    return (max_len - levenshtein_distance(a, b)) / max_len


def contains_either_way(a: str, b: str) -> bool:
    """True when either string contains the other (both must be non-empty)"""
    if not a or not b:
        return False
    return a in b or b in a
