"""
Scoring dispatch and aggregation

Runs every field scorer over one prediction and combines the per-dimension
scores into a single weighted overall score.
"""

from __future__ import annotations

import logging

from vintage_eval_core.domain.constants import SCORE_DIMENSIONS, SCORING_WEIGHTS, WEIGHT_PROFILES
from vintage_eval_core.domain.entities import ExpectedIdentification
from vintage_eval_core.domain.value_objects import FieldScoreSet, PredictionOutput
from vintage_eval_core.scoring.field_scorers import FIELD_SCORERS
from vintage_eval_core.scoring.rules import round_score

logger = logging.getLogger(__name__)


def score_prediction(expected: ExpectedIdentification, prediction: PredictionOutput) -> FieldScoreSet:
    """
    Score a prediction on every dimension

    Args:
        expected: Ground-truth identification
        prediction: Oracle output

    Returns:
        FieldScoreSet with one 0-100 score per dimension
    """
    scores = {dim: FIELD_SCORERS[dim](expected, prediction) for dim in SCORE_DIMENSIONS}
    return FieldScoreSet(**scores)


def weighted_overall_score(scores: FieldScoreSet, weights: dict[str, float] = SCORING_WEIGHTS) -> int:
    """
    Combine per-dimension scores into a weighted overall score

    Dimensions missing from the weight table count as weight 0.

    Args:
        scores: Per-dimension scores
        weights: Weight per dimension (any subset may be zero)

    Returns:
        round(sum(score * weight) / sum(weight)), or 0 when every weight is zero
    """
    total_weight = sum(weights.get(dim, 0) for dim in SCORE_DIMENSIONS)
    if total_weight <= 0:
        logger.warning("All scoring weights are zero; overall score defaults to 0")
        return 0

    weighted_sum = sum(score * weights.get(dim, 0) for dim, score in scores.items())
    return round_score(weighted_sum / total_weight)


def get_weight_profile(name: str) -> dict[str, float]:
    """
    Look up a named weight profile

    Raises:
        ValueError: When the profile name is unknown
    """
    if name not in WEIGHT_PROFILES:
        raise ValueError(f"Unknown weight profile: {name} (available: {list(WEIGHT_PROFILES.keys())})")
    return WEIGHT_PROFILES[name]
