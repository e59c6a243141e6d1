"""
Domain Value Objects

Defines immutable data structures representing values such as predictions,
per-dimension scores, images, and report statistics.
"""

import base64
from dataclasses import dataclass, field

from vintage_eval_core.domain.constants import SCORE_DIMENSIONS


@dataclass(frozen=True)
class EraRange:
    """Inclusive year range"""
    start: int
    end: int

    def __post_init__(self):
        if self.start > self.end:
            raise ValueError(f"era range start ({self.start}) must not exceed end ({self.end})")


@dataclass(frozen=True)
class PredictionOutput:
    """Structured identification returned by the oracle for one image"""
    name: str
    maker: str | None = None
    era: str | None = None
    style: str | None = None
    product_category: str | None = None
    domain_expert: str | None = None
    origin_region: str | None = None
    estimated_value_min: float | None = None
    estimated_value_max: float | None = None
    confidence: float = 0.0
    description: str = ""
    historical_context: str = ""
    evidence_for: list[str] | None = None
    evidence_against: list[str] | None = None


@dataclass
class FieldScoreSet:
    """One 0-100 score per comparison dimension"""
    name: int = 0
    maker: int = 0
    era: int = 0
    style: int = 0
    category: int = 0
    domain: int = 0
    origin: int = 0
    value: int = 0
    features: int = 0
    authentication: int = 0

    def items(self) -> list[tuple[str, int]]:
        """(dimension, score) pairs in reporting order"""
        return [(dim, getattr(self, dim)) for dim in SCORE_DIMENSIONS]

    def as_dict(self) -> dict[str, int]:
        return dict(self.items())


@dataclass(frozen=True)
class ImagePayload:
    """Image bytes handed to the oracle"""
    item_id: str
    data: bytes
    mime_type: str = "image/jpeg"
    source: str = ""

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        return f"data:{self.mime_type};base64,{self.to_base64()}"


@dataclass
class CategoryScore:
    """Per-category item count and mean overall score"""
    count: int
    avg_score: float


@dataclass
class ScoreDistribution:
    """Five-band histogram of overall scores"""
    excellent: int = 0    # 90-100
    good: int = 0         # 75-89
    acceptable: int = 0   # 60-74
    poor: int = 0         # 40-59
    failed: int = 0       # 0-39

    @property
    def passing(self) -> int:
        return self.excellent + self.good + self.acceptable


@dataclass
class FailurePattern:
    """Recurring low-score condition mined across results"""
    pattern: str
    count: int = 0
    examples: list[str] = field(default_factory=list)
