"""
Failure pattern mining and improvement priorities

Looks across all results of a corpus run for recurring low-score conditions
and turns corpus-wide weaknesses into a short priority list.
"""

from __future__ import annotations

from vintage_eval_core.domain.constants import PASS_THRESHOLD, TOP_FAILURE_PATTERNS
from vintage_eval_core.domain.entities import TestResult
from vintage_eval_core.domain.value_objects import FailurePattern

# Per-dimension thresholds below which a result contributes to a pattern
NAME_FAILURE_BELOW = 70
MAKER_FAILURE_BELOW = 70
VALUE_FAILURE_BELOW = 60
STYLE_FAILURE_BELOW = 70
OVERALL_FAILURE_BELOW = 60


def _pattern_keys(result: TestResult) -> list[str]:
    """Pattern keys a single result contributes to"""
    expected = result.ground_truth.expected
    category = expected.domain_expert
    scores = result.scores

    keys = []
    if scores.name < NAME_FAILURE_BELOW:
        keys.append(f"Name identification failure in {category}")
    if scores.maker < MAKER_FAILURE_BELOW and expected.maker:
        keys.append(f"Maker attribution failure in {category}")
    if scores.value < VALUE_FAILURE_BELOW:
        keys.append(f"Value estimation off in {category}")
    if scores.style < STYLE_FAILURE_BELOW:
        keys.append(f"Style identification failure for {expected.style}")
    if result.overall_score < OVERALL_FAILURE_BELOW:
        keys.append(f'Difficulty level "{expected.difficulty}" items failing')
    return keys


def analyze_failure_patterns(
    results: list[TestResult],
    top_n: int = TOP_FAILURE_PATTERNS,
) -> list[FailurePattern]:
    """
    Mine recurring failure patterns across results

    Args:
        results: Results of a corpus run
        top_n: Number of patterns to keep

    Returns:
        The top_n patterns by count, descending. Ties keep the order in which
        the pattern was first seen.
    """
    patterns: dict[str, FailurePattern] = {}
    for result in results:
        for key in _pattern_keys(result):
            pattern = patterns.setdefault(key, FailurePattern(pattern=key))
            pattern.count += 1
            pattern.examples.append(result.item_id)

    # sorted() is stable, so equal counts stay in first-seen order
    ranked = sorted(patterns.values(), key=lambda p: p.count, reverse=True)
    return ranked[:top_n]


def _mean(values: list[float]) -> float:
    return sum(values) / len(values)


def generate_improvement_priorities(results: list[TestResult]) -> list[str]:
    """
    Derive improvement priorities from corpus-wide averages

    The weakest domain is named first when its mean is below the pass
    threshold; value, maker and feature averages are then checked
    independently. The maker check only considers items with an expected
    maker and is skipped when there are none.

    Args:
        results: Results of a corpus run

    Returns:
        Priority lines, each quoting the live average
    """
    if not results:
        return []

    priorities = []

    by_category: dict[str, list[int]] = {}
    for result in results:
        by_category.setdefault(result.ground_truth.expected.domain_expert, []).append(result.overall_score)

    weakest_category, weakest_scores = min(by_category.items(), key=lambda kv: _mean(kv[1]))
    weakest_avg = _mean(weakest_scores)
    if weakest_avg < PASS_THRESHOLD:
        priorities.append(
            f"PRIORITY 1: Improve {weakest_category} knowledge (avg score: {weakest_avg:.1f}%)"
        )

    avg_value = _mean([r.scores.value for r in results])
    if avg_value < PASS_THRESHOLD:
        priorities.append(
            f"PRIORITY: Improve value estimation accuracy (current avg: {avg_value:.1f}%). "
            "Consider integrating real-time auction data."
        )

    maker_results = [r for r in results if r.ground_truth.expected.maker]
    if maker_results:
        avg_maker = _mean([r.scores.maker for r in maker_results])
        if avg_maker < PASS_THRESHOLD:
            priorities.append(
                f"PRIORITY: Improve maker attribution (current avg: {avg_maker:.1f}%). "
                "Build a maker marks database."
            )

    avg_features = _mean([r.scores.features for r in results])
    if avg_features < PASS_THRESHOLD:
        priorities.append(
            f"PRIORITY: Improve feature identification (current avg: {avg_features:.1f}%). "
            "Enhance visual analysis prompts."
        )

    return priorities
