"""
Domain Layer

Defines constants, entities, value objects, and exceptions that form the core of the
evaluation logic. Has no dependencies on external libraries.
"""

from vintage_eval_core.domain.constants import (
    DEFAULT_WEIGHT_PROFILE,
    PASS_THRESHOLD,
    SCORE_DIMENSIONS,
    SCORING_WEIGHTS,
    WEIGHT_PROFILES,
)
from vintage_eval_core.domain.entities import (
    EvaluationReport,
    ExpectedIdentification,
    GroundTruthItem,
    TestResult,
)
from vintage_eval_core.domain.exceptions import (
    CorpusLookupError,
    EvaluationError,
    ImageUnavailableError,
    OracleError,
)
from vintage_eval_core.domain.value_objects import (
    CategoryScore,
    EraRange,
    FailurePattern,
    FieldScoreSet,
    ImagePayload,
    PredictionOutput,
    ScoreDistribution,
)

__all__ = [
    # constants
    "DEFAULT_WEIGHT_PROFILE",
    "PASS_THRESHOLD",
    "SCORE_DIMENSIONS",
    "SCORING_WEIGHTS",
    "WEIGHT_PROFILES",
    # entities
    "EvaluationReport",
    "ExpectedIdentification",
    "GroundTruthItem",
    "TestResult",
    # exceptions
    "CorpusLookupError",
    "EvaluationError",
    "ImageUnavailableError",
    "OracleError",
    # value objects
    "CategoryScore",
    "EraRange",
    "FailurePattern",
    "FieldScoreSet",
    "ImagePayload",
    "PredictionOutput",
    "ScoreDistribution",
]
