"""
Field scorers

One scorer per comparison dimension. Each takes the expected identification and
the oracle's prediction and returns an integer from 0 to 100. Matching is tiered:
strict checks first, fuzzier checks after, 0 when nothing matches. A prediction
field that is missing scores 0; scorers never raise on incomplete predictions.
"""

from __future__ import annotations

import re

from vintage_eval_core.domain.constants import (
    ITEM_TYPE_TERMS,
    MATERIAL_TERMS,
    PERIOD_PHRASES,
    STYLE_SYNONYMS,
    UNATTRIBUTED_MAKER_TERMS,
)
from vintage_eval_core.domain.entities import ExpectedIdentification
from vintage_eval_core.domain.value_objects import PredictionOutput
from vintage_eval_core.scoring.rules import (
    first_matching_score,
    round_score,
    score_at_most,
)
from vintage_eval_core.scoring.text_scorers import (
    contains_either_way,
    normalize_for_match,
    string_similarity,
)

# Years between the predicted average year and the nearest bound of the expected range
ERA_DISTANCE_BANDS = [(10, 80), (25, 50), (50, 25)]

# Relative midpoint difference for non-overlapping value ranges
VALUE_PERCENT_BANDS = [(0.25, 60), (0.50, 40), (1.00, 20)]

_YEAR_RE = re.compile(r"\d{4}")

_ITEM_TYPES = [normalize_for_match(t) for t in ITEM_TYPE_TERMS]
_MATERIALS = [normalize_for_match(m) for m in MATERIAL_TERMS]
_PERIODS = [normalize_for_match(p) for p in PERIOD_PHRASES]
_STYLE_FAMILIES = [
    [normalize_for_match(base)] + [normalize_for_match(s) for s in synonyms]
    for base, synonyms in STYLE_SYNONYMS.items()
]


def _shares_term(actual: str, expected: str, terms: list[str]) -> bool:
    """True when some vocabulary term appears in both strings"""
    return any(term in actual and term in expected for term in terms)


def extract_years(text: str) -> list[int]:
    """All 4-digit numbers in the text, in order"""
    return [int(y) for y in _YEAR_RE.findall(text)]


def score_name(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """
    Score name identification

    Tiers: containment either way (100), edit similarity (95/85), keyword
    coverage (95..35), shared object type (35), shared material (20).
    """
    actual = normalize_for_match(prediction.name or "")
    target = normalize_for_match(expected.name)
    if not actual:
        return 0

    if contains_either_way(actual, target):
        return 100

    similarity = string_similarity(actual, target)

    keywords = [normalize_for_match(kw) for kw in expected.name_keywords]
    matched = [
        kw for kw in keywords
        if kw and (kw in actual or string_similarity(actual, kw) > 0.7)
    ]
    ratio = len(matched) / len(keywords) if keywords else 0.0

    return first_matching_score([
        (lambda: similarity > 0.85, 95),
        (lambda: similarity > 0.70, 85),
        (lambda: ratio == 1, 95),
        (lambda: ratio >= 0.75, 85),
        (lambda: ratio >= 0.5, 70),
        (lambda: ratio >= 0.25, 50),
        (lambda: len(matched) >= 2, 60),
        (lambda: len(matched) == 1, 35),
        (lambda: _shares_term(actual, target, _ITEM_TYPES), 35),
        (lambda: _shares_term(actual, target, _MATERIALS), 20),
    ])


def score_maker(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """
    Score maker attribution

    When no maker is expected, declining to attribute is correct (100) and
    naming a maker is overclaiming (50). Otherwise the predicted maker field is
    compared first, then the predicted name (makers are often folded into it),
    then the accepted alternatives, then individual significant words.
    """
    predicted_maker = prediction.maker or ""

    if not expected.maker:
        lowered = predicted_maker.lower()
        if not lowered.strip() or any(term in lowered for term in UNATTRIBUTED_MAKER_TERMS):
            return 100
        return 50

    actual = normalize_for_match(predicted_maker)
    actual_name = normalize_for_match(prediction.name or "")
    target = normalize_for_match(expected.maker)
    similarity = string_similarity(actual, target) if actual else 0.0

    alternatives = [
        alt for alt in (normalize_for_match(a) for a in expected.maker_alternatives or [])
        if alt
    ]

    significant_words = [w for w in target.split(" ") if len(w) > 3]
    matched_words = [w for w in significant_words if w in actual or w in actual_name]

    return first_matching_score([
        (lambda: contains_either_way(actual, target) or similarity > 0.8, 100),
        (lambda: bool(target) and target in actual_name, 95),
        (lambda: similarity > 0.6, 70),
        (lambda: any(contains_either_way(actual, alt) or alt in actual_name for alt in alternatives), 90),
        (lambda: any(actual and string_similarity(actual, alt) > 0.7 for alt in alternatives), 80),
        (lambda: bool(matched_words) and len(matched_words) == len(significant_words), 85),
        (lambda: bool(matched_words), 50),
    ])


def score_era(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """
    Score era identification

    Years found in the predicted era are averaged and compared with the expected
    range; without years the era label is matched as text.
    """
    if not prediction.era:
        return 0

    years = extract_years(prediction.era)
    if years:
        average_year = sum(years) / len(years)
        era_range = expected.era_range
        if era_range.start <= average_year <= era_range.end:
            return 100
        distance = min(abs(average_year - era_range.start), abs(average_year - era_range.end))
        return score_at_most(distance, ERA_DISTANCE_BANDS)

    label = normalize_for_match(expected.era)
    if label and label in normalize_for_match(prediction.era):
        return 90

    # Era given but not verifiable
    return 20


def _same_style_family(actual: str, expected: str) -> bool:
    for family in _STYLE_FAMILIES:
        if any(t in expected for t in family) and any(t in actual for t in family):
            return True
    return False


def score_style(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """Score style identification with alternatives and synonym families"""
    actual = normalize_for_match(prediction.style or "")
    if not actual:
        return 0

    target = normalize_for_match(expected.style)
    alternatives = [normalize_for_match(a) for a in expected.style_alternatives or []]
    similarity = string_similarity(actual, target)

    return first_matching_score([
        (lambda: contains_either_way(actual, target), 100),
        (lambda: any(alt and alt in actual for alt in alternatives), 95),
        (lambda: _same_style_family(actual, target), 85),
        (lambda: similarity > 0.7, 75),
        (lambda: similarity > 0.5, 50),
        (lambda: _shares_term(actual, target, _PERIODS), 40),
    ])


def score_category(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """Exact match on the item category (antique / vintage / modern_*)"""
    if prediction.product_category is None:
        return 0
    return 100 if prediction.product_category == expected.category else 0


def score_domain(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """Exact match on the domain expert assignment"""
    if prediction.domain_expert is None:
        return 0
    return 100 if prediction.domain_expert == expected.domain_expert else 0


def score_origin(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """Expected region contained in the predicted region, case-insensitive"""
    if not prediction.origin_region:
        return 0
    return 100 if expected.origin_region.lower() in prediction.origin_region.lower() else 0


def score_value(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """
    Score the value estimate

    Overlapping ranges score 60 plus up to 40 for the share of the expected
    range covered. Disjoint ranges are scored on the relative distance between
    midpoints and never exceed 60, so touching ranges (60) always score at least
    as well as separated ones.
    """
    low = prediction.estimated_value_min
    high = prediction.estimated_value_max
    if not low and not high:
        return 0

    predicted_min = low or 0
    predicted_max = high or predicted_min
    predicted_min, predicted_max = sorted((predicted_min, predicted_max))

    if predicted_max >= expected.value_min and predicted_min <= expected.value_max:
        overlap = min(predicted_max, expected.value_max) - max(predicted_min, expected.value_min)
        expected_size = expected.value_max - expected.value_min
        overlap_ratio = overlap / expected_size if expected_size > 0 else 1.0
        return min(100, round_score(60 + overlap_ratio * 40))

    predicted_mid = (predicted_min + predicted_max) / 2
    expected_mid = (expected.value_min + expected.value_max) / 2
    if expected_mid <= 0:
        return 0

    percent_off = abs(predicted_mid - expected_mid) / expected_mid
    return score_at_most(percent_off, VALUE_PERCENT_BANDS)


def _phrase_found(phrase: str, text: str) -> bool:
    """Verbatim match, or every word of the phrase present somewhere in the text"""
    phrase = phrase.lower()
    return phrase in text or all(word in text for word in phrase.split())


def _coverage_score(required: list[str] | None, text: str) -> int:
    if not required:
        return 100
    found = sum(1 for phrase in required if _phrase_found(phrase, text))
    return round_score(100 * found / len(required))


def score_features(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """Share of must-identify features mentioned anywhere in the prediction's prose"""
    text = " ".join([
        prediction.description or "",
        prediction.historical_context or "",
        *(prediction.evidence_for or []),
        prediction.name or "",
    ]).lower()
    return _coverage_score(expected.must_identify_features, text)


def score_authentication(expected: ExpectedIdentification, prediction: PredictionOutput) -> int:
    """Share of authentication markers mentioned in the prose or the evidence"""
    text = " ".join([
        prediction.description or "",
        prediction.historical_context or "",
        *(prediction.evidence_for or []),
        *(prediction.evidence_against or []),
    ]).lower()
    return _coverage_score(expected.authentication_markers, text)


FIELD_SCORERS = {
    "name": score_name,
    "maker": score_maker,
    "era": score_era,
    "style": score_style,
    "category": score_category,
    "domain": score_domain,
    "origin": score_origin,
    "value": score_value,
    "features": score_features,
    "authentication": score_authentication,
}
