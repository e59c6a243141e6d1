"""
Domain Entities

Defines the ground-truth records and the results produced by an evaluation run.
"""

from dataclasses import dataclass, field

from vintage_eval_core.domain.constants import VALID_DIFFICULTIES, VALID_ITEM_CATEGORIES
from vintage_eval_core.domain.value_objects import (
    CategoryScore,
    EraRange,
    FailurePattern,
    FieldScoreSet,
    PredictionOutput,
    ScoreDistribution,
)


@dataclass(frozen=True)
class ExpectedIdentification:
    """What the oracle should identify for a ground-truth item"""
    name: str
    name_keywords: list[str]
    era: str
    era_range: EraRange
    style: str
    category: str
    domain_expert: str
    origin_region: str
    value_min: float
    value_max: float
    must_identify_features: list[str]
    difficulty: str
    maker: str | None = None
    maker_alternatives: list[str] | None = None
    style_alternatives: list[str] | None = None
    authentication_markers: list[str] | None = None
    red_flags: list[str] | None = None
    value_source: str = ""
    test_reason: str = ""

    def __post_init__(self):
        if not self.name_keywords:
            raise ValueError(f"name_keywords must not be empty: {self.name}")
        if self.value_min > self.value_max:
            raise ValueError(
                f"value_min ({self.value_min}) must not exceed value_max ({self.value_max}): {self.name}"
            )
        if self.category not in VALID_ITEM_CATEGORIES:
            raise ValueError(f"Invalid category: {self.category}. Valid values: {VALID_ITEM_CATEGORIES}")
        if self.difficulty not in VALID_DIFFICULTIES:
            raise ValueError(f"Invalid difficulty: {self.difficulty}. Valid values: {VALID_DIFFICULTIES}")


@dataclass(frozen=True)
class GroundTruthItem:
    """Reference record for one test object"""
    id: str
    expected: ExpectedIdentification
    image_url: str = ""
    image_description: str = ""


@dataclass
class TestResult:
    """Outcome of evaluating one ground-truth item"""
    __test__ = False  # not a pytest test class

    item_id: str
    ground_truth: GroundTruthItem
    prediction: PredictionOutput | None = None
    error: str | None = None
    scores: FieldScoreSet = field(default_factory=FieldScoreSet)
    overall_score: int = 0
    successes: list[str] = field(default_factory=list)
    partial_matches: list[str] = field(default_factory=list)
    failures: list[str] = field(default_factory=list)
    improvement_suggestions: list[str] = field(default_factory=list)
    latency_ms: int = 0


@dataclass
class EvaluationReport:
    """Aggregate over one evaluation run"""
    timestamp: str
    total_items: int
    items_tested: int
    items_skipped: int
    items_errored: int
    overall_accuracy: float
    average_score: float
    median_score: float
    category_scores: dict[str, CategoryScore]
    score_distribution: ScoreDistribution
    common_failures: list[FailurePattern]
    improvement_priorities: list[str]
    results: list[TestResult]
