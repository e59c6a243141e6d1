"""
Rule-table helpers for tiered scoring

Scorers are written as ordered lists of (predicate, score) rules: the first
rule whose predicate holds decides the score.
"""

from __future__ import annotations

import math
from typing import Callable, Iterable

Rule = tuple[Callable[[], bool], int]


def first_matching_score(rules: Iterable[Rule], default: int = 0) -> int:
    """
    Evaluate rules in order and return the score of the first one that matches

    Predicates are zero-argument callables so that expensive checks (edit
    distance) only run when the cheaper rules above them have failed.

    Args:
        rules: Ordered (predicate, score) pairs
        default: Score when no rule matches

    Returns:
        The matching rule's score, or default
    """
    for predicate, score in rules:
        if predicate():
            return score
    return default


def score_at_most(value: float, bands: list[tuple[float, int]], default: int = 0) -> int:
    """
    Banded score where the value must not exceed a limit

    Args:
        value: Measured value (e.g. a distance in years)
        bands: (limit, score) pairs ordered from tightest limit up

    Returns:
        Score of the first band whose limit is not exceeded, or default
    """
    for limit, score in bands:
        if value <= limit:
            return score
    return default


def round_score(value: float) -> int:
    """Round half up (2.5 -> 3), unlike round() which rounds half to even"""
    return int(math.floor(value + 0.5))
