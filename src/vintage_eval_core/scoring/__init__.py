"""
Scoring sub-package

Provides text normalization, edit-distance similarity, the per-dimension field
scorers, and weighted aggregation.
"""

from vintage_eval_core.scoring.field_scorers import (
    FIELD_SCORERS,
    extract_years,
    score_authentication,
    score_category,
    score_domain,
    score_era,
    score_features,
    score_maker,
    score_name,
    score_origin,
    score_style,
    score_value,
)
from vintage_eval_core.scoring.rules import (
    first_matching_score,
    round_score,
    score_at_most,
)
from vintage_eval_core.scoring.scorer import (
    get_weight_profile,
    score_prediction,
    weighted_overall_score,
)
from vintage_eval_core.scoring.text_scorers import (
    contains_either_way,
    levenshtein_distance,
    normalize_for_match,
    string_similarity,
)

__all__ = [
    # dispatcher / aggregation
    "score_prediction",
    "weighted_overall_score",
    "get_weight_profile",
    # field scorers
    "FIELD_SCORERS",
    "extract_years",
    "score_name",
    "score_maker",
    "score_era",
    "score_style",
    "score_category",
    "score_domain",
    "score_origin",
    "score_value",
    "score_features",
    "score_authentication",
    # rules
    "first_matching_score",
    "round_score",
    "score_at_most",
    # text
    "contains_either_way",
    "levenshtein_distance",
    "normalize_for_match",
    "string_similarity",
]
