"""
Evaluation Execution

Handles single-item evaluations through full corpus runs, including result aggregation.
"""

from __future__ import annotations

import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime, timezone
from typing import Callable

import pandas as pd

from vintage_eval_core.domain.constants import (
    DISTRIBUTION_BANDS,
    PARTIAL_MATCH_THRESHOLD,
    PASS_THRESHOLD,
    SCORING_WEIGHTS,
)
from vintage_eval_core.domain.entities import EvaluationReport, GroundTruthItem, TestResult
from vintage_eval_core.domain.exceptions import OracleError
from vintage_eval_core.domain.value_objects import (
    CategoryScore,
    FieldScoreSet,
    ImagePayload,
    PredictionOutput,
    ScoreDistribution,
)
from vintage_eval_core.ground_truth_loader import GroundTruthCorpus
from vintage_eval_core.infrastructure.oracles.base import Oracle
from vintage_eval_core.scoring.scorer import score_prediction, weighted_overall_score
from vintage_eval_core.use_cases.failure_analysis import (
    analyze_failure_patterns,
    generate_improvement_priorities,
)

logger = logging.getLogger(__name__)

ImageLoader = Callable[[GroundTruthItem], ImagePayload]


def _classify(scores: FieldScoreSet) -> tuple[list[str], list[str], list[str]]:
    """Split dimensions into successes, partial matches and failures"""
    successes, partial, failures = [], [], []
    for dim, score in scores.items():
        if score == 100:
            successes.append(f"{dim}: Perfect match")
        elif score >= PARTIAL_MATCH_THRESHOLD:
            partial.append(f"{dim}: {score}% match")
        elif score > 0:
            failures.append(f"{dim}: Only {score}% - needs improvement")
        else:
            failures.append(f"{dim}: Complete miss")
    return successes, partial, failures


def _money(value: float | None) -> str:
    return "n/a" if value is None else f"${value:,.0f}"


def _suggestions(item: GroundTruthItem, prediction: PredictionOutput, scores: FieldScoreSet) -> list[str]:
    """Templated improvement suggestions for the weakest dimensions"""
    expected = item.expected
    suggestions = []
    if scores.name < 70:
        suggestions.append(
            f'Name identification failed. AI said "{prediction.name}" but expected "{expected.name}". '
            f"Consider adding more training examples for {expected.domain_expert} category."
        )
    if scores.maker < 70 and expected.maker:
        suggestions.append(
            f"Maker attribution failed. Consider adding {expected.maker} to the knowledge base "
            "with their distinctive marks and characteristics."
        )
    if scores.value < 60:
        suggestions.append(
            f"Value estimation off. AI: {_money(prediction.estimated_value_min)}-{_money(prediction.estimated_value_max)}, "
            f"Expected: {_money(expected.value_min)}-{_money(expected.value_max)}. Update market data sources."
        )
    if scores.features < 60:
        suggestions.append(
            f"Missing key features. The AI should identify: {', '.join(expected.must_identify_features)}"
        )
    return suggestions


def run_single_evaluation(
    item: GroundTruthItem,
    oracle: Oracle,
    image_source: ImageLoader,
    weights: dict[str, float] = SCORING_WEIGHTS,
) -> TestResult:
    """
    Evaluate one ground-truth item.

    Image, oracle and scoring failures are recorded on the result, never
    raised: the result then carries the error and all-zero scores. An oracle
    that returns no prediction counts as an oracle failure.

    Args:
        item: Ground-truth item
        oracle: Prediction oracle
        image_source: Callable returning the item's image
        weights: Weight table for the overall score

    Returns:
        TestResult: Evaluation result
    """
    result = TestResult(item_id=item.id, ground_truth=item)

    started = time.perf_counter()
    try:
        image = image_source(item)
        prediction = oracle.predict(image)
        latency_ms = int((time.perf_counter() - started) * 1000)
        if prediction is None:
            raise OracleError("Oracle returned no prediction")

        scores = score_prediction(item.expected, prediction)
        overall = weighted_overall_score(scores, weights)
        successes, partial_matches, failures = _classify(scores)
        suggestions = _suggestions(item, prediction, scores)
    except Exception as e:
        result.error = str(e) or type(e).__name__
        result.latency_ms = int((time.perf_counter() - started) * 1000)
        logger.error("Test failed for %s: %s", item.id, result.error)
        return result

    result.prediction = prediction
    result.latency_ms = latency_ms
    result.scores = scores
    result.overall_score = overall
    result.successes, result.partial_matches, result.failures = successes, partial_matches, failures
    result.improvement_suggestions = suggestions

    logger.debug("%s scored %d%% in %dms", item.id, result.overall_score, result.latency_ms)
    return result


def evaluate_single_by_id(
    corpus: GroundTruthCorpus,
    item_id: str,
    oracle: Oracle,
    image_source: ImageLoader,
    weights: dict[str, float] = SCORING_WEIGHTS,
) -> TestResult:
    """
    Evaluate one item looked up by id.

    Raises:
        CorpusLookupError: If the id is not in the corpus
    """
    item = corpus.find(item_id)
    return run_single_evaluation(item, oracle, image_source, weights)


def select_items(
    items: list[GroundTruthItem],
    max_items: int | None = None,
    skip_ids: list[str] | None = None,
) -> list[GroundTruthItem]:
    """Drop skipped ids, then keep the first max_items (0 or None keeps all)"""
    skip = set(skip_ids or [])
    selected = [item for item in items if item.id not in skip]
    if max_items:
        selected = selected[:max_items]
    return selected


def score_distribution(scores: list[int]) -> ScoreDistribution:
    """Bucket overall scores into the five distribution bands"""
    counts = {label: 0 for label, _ in DISTRIBUTION_BANDS}
    for score in scores:
        for label, lower in DISTRIBUTION_BANDS:
            if score >= lower:
                counts[label] += 1
                break
    return ScoreDistribution(**counts)


def category_breakdown(results: list[TestResult]) -> dict[str, CategoryScore]:
    """Item count and mean overall score per domain, in first-seen order"""
    df = pd.DataFrame(
        {
            "category": [r.ground_truth.expected.domain_expert for r in results],
            "overall_score": [r.overall_score for r in results],
        }
    )
    grouped = df.groupby("category", sort=False)["overall_score"].agg(["count", "mean"])
    return {
        category: CategoryScore(count=int(row["count"]), avg_score=float(row["mean"]))
        for category, row in grouped.iterrows()
    }


def run_corpus_evaluation(
    items: list[GroundTruthItem],
    oracle: Oracle,
    image_source: ImageLoader,
    *,
    max_items: int | None = None,
    skip_ids: list[str] | None = None,
    max_workers: int = 1,
    weights: dict[str, float] = SCORING_WEIGHTS,
) -> EvaluationReport:
    """
    Evaluate a corpus and aggregate the results into a report.

    Oracle calls run on a bounded thread pool; results are reordered to the
    input order before aggregation, so the report does not depend on
    max_workers.

    Args:
        items: Ground-truth items in corpus order
        oracle: Prediction oracle
        image_source: Callable returning an item's image
        max_items: Evaluate at most this many items (0 or None for all)
        skip_ids: Item ids to leave out
        max_workers: Number of concurrent oracle calls
        weights: Weight table for the overall score

    Returns:
        EvaluationReport

    Raises:
        ValueError: If no items remain after filtering, or max_workers < 1
    """
    if max_workers < 1:
        raise ValueError("max_workers must be at least 1.")

    to_test = select_items(items, max_items=max_items, skip_ids=skip_ids)
    if not to_test:
        raise ValueError("No items to evaluate after applying skip_ids and max_items.")

    started = time.perf_counter()
    total = len(to_test)
    completed = 0
    results: list[TestResult | None] = [None] * total

    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = {
            executor.submit(run_single_evaluation, item, oracle, image_source, weights): index
            for index, item in enumerate(to_test)
        }
        for future in as_completed(futures):
            index = futures[future]
            result = future.result()
            results[index] = result
            completed += 1
            logger.info("[%d/%d] %s: Score %d%%", completed, total, result.item_id, result.overall_score)

    ordered: list[TestResult] = [r for r in results if r is not None]
    scores = sorted(r.overall_score for r in ordered)
    average = sum(scores) / len(scores)
    median = float(scores[len(scores) // 2])

    report = EvaluationReport(
        timestamp=datetime.now(timezone.utc).isoformat(),
        total_items=len(items),
        items_tested=len(ordered),
        items_skipped=len(items) - len(ordered),
        items_errored=sum(1 for r in ordered if r.error is not None),
        overall_accuracy=average if average >= PASS_THRESHOLD else 0.0,
        average_score=average,
        median_score=median,
        category_scores=category_breakdown(ordered),
        score_distribution=score_distribution(scores),
        common_failures=analyze_failure_patterns(ordered),
        improvement_priorities=generate_improvement_priorities(ordered),
        results=ordered,
    )

    elapsed = time.perf_counter() - started
    logger.info("Evaluation complete in %.1fs", elapsed)
    logger.info("Average score: %.1f%% (overall accuracy %.1f%%)", report.average_score, report.overall_accuracy)
    return report


def results_to_dataframe(results: list[TestResult]) -> pd.DataFrame:
    """
    Flatten results into one row per item for CSV export.

    Args:
        results: Test results

    Returns:
        pd.DataFrame: One row per item with expected/predicted fields and per-dimension scores
    """
    rows = []
    for r in results:
        expected = r.ground_truth.expected
        prediction = r.prediction
        row = {
            "item_id": r.item_id,
            "domain_expert": expected.domain_expert,
            "difficulty": expected.difficulty,
            "expected_name": expected.name,
            "predicted_name": prediction.name if prediction else None,
            "expected_maker": expected.maker,
            "predicted_maker": prediction.maker if prediction else None,
            "expected_value_min": expected.value_min,
            "expected_value_max": expected.value_max,
            "predicted_value_min": prediction.estimated_value_min if prediction else None,
            "predicted_value_max": prediction.estimated_value_max if prediction else None,
            "overall_score": r.overall_score,
        }
        for dim, score in r.scores.items():
            row[f"score_{dim}"] = score
        row["latency_ms"] = r.latency_ms
        row["error"] = r.error
        rows.append(row)
    return pd.DataFrame(rows)
