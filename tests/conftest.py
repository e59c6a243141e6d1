"""Shared builders for ground-truth items and predictions"""

from pathlib import Path

import pytest

from vintage_eval_core.domain.entities import ExpectedIdentification, GroundTruthItem
from vintage_eval_core.domain.value_objects import EraRange, PredictionOutput

CORPUS_PATH = Path(__file__).resolve().parent.parent / "corpus" / "ground_truth_core.json"


def build_expected(**overrides) -> ExpectedIdentification:
    fields = dict(
        name="Eames Lounge Chair",
        name_keywords=["eames", "lounge", "chair"],
        era="1956-1970",
        era_range=EraRange(1956, 1970),
        style="Mid-Century Modern",
        category="vintage",
        domain_expert="furniture",
        origin_region="USA",
        value_min=1000,
        value_max=2000,
        must_identify_features=["Molded plywood shell", "Leather upholstery"],
        difficulty="easy",
        maker="Herman Miller",
        maker_alternatives=["Charles and Ray Eames"],
        style_alternatives=["MCM"],
        authentication_markers=["Herman Miller label"],
    )
    fields.update(overrides)
    return ExpectedIdentification(**fields)


def build_item(item_id: str = "furn-001", **overrides) -> GroundTruthItem:
    return GroundTruthItem(id=item_id, expected=build_expected(**overrides))


def build_prediction(**overrides) -> PredictionOutput:
    fields = dict(
        name="Eames Lounge Chair",
        maker="Herman Miller",
        era="circa 1960",
        style="Mid-Century Modern",
        product_category="vintage",
        domain_expert="furniture",
        origin_region="USA",
        estimated_value_min=1000,
        estimated_value_max=2000,
        description="Molded plywood shell with leather upholstery.",
        evidence_for=["Herman Miller label under the seat"],
    )
    fields.update(overrides)
    return PredictionOutput(**fields)


@pytest.fixture
def corpus_path() -> Path:
    return CORPUS_PATH


@pytest.fixture
def make_expected():
    return build_expected


@pytest.fixture
def make_item():
    return build_item


@pytest.fixture
def make_prediction():
    return build_prediction
