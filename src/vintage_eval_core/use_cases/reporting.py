"""
Report formatting

Pure text rendering of evaluation results. Nothing here recomputes or alters
the values held by the report.
"""

from vintage_eval_core.domain.entities import EvaluationReport, TestResult

RULE = "=" * 80
TOP_PATTERNS_IN_REPORT = 5
FAILURE_DETAIL_BELOW = 50
FAILURE_DETAIL_LIMIT = 10


def _pass_rate(report: EvaluationReport) -> float:
    if report.items_tested == 0:
        return 0.0
    return report.score_distribution.passing / report.items_tested * 100


def format_report(report: EvaluationReport) -> str:
    """
    Render a corpus report as a fixed-layout text block

    Args:
        report: EvaluationReport

    Returns:
        Multi-line report text
    """
    dist = report.score_distribution
    lines = [
        RULE,
        "                    VINTAGE EVALUATION REPORT",
        RULE,
        f"Timestamp: {report.timestamp}",
        f"Items Tested: {report.items_tested} of {report.total_items}",
        f"Items Errored: {report.items_errored}",
        "",
        "OVERALL RESULTS",
        "---------------",
        f"Average Score: {report.average_score:.1f}%",
        f"Median Score:  {report.median_score:.1f}%",
        f"Pass Rate:     {_pass_rate(report):.1f}%",
        f"Accuracy:      {report.overall_accuracy:.1f}%",
        "",
        "SCORE DISTRIBUTION",
        "------------------",
        f"Excellent (90-100): {dist.excellent} items",
        f"Good (75-89):       {dist.good} items",
        f"Acceptable (60-74): {dist.acceptable} items",
        f"Poor (40-59):       {dist.poor} items",
        f"Failed (<40):       {dist.failed} items",
        "",
        "CATEGORY PERFORMANCE",
        "--------------------",
    ]
    for category, data in report.category_scores.items():
        lines.append(f"{category:<15} {data.avg_score:>5.1f}% ({data.count} items)")

    lines += ["", "COMMON FAILURE PATTERNS", "-----------------------"]
    for failure in report.common_failures[:TOP_PATTERNS_IN_REPORT]:
        lines.append(f"• {failure.pattern} ({failure.count} occurrences)")

    lines += ["", "IMPROVEMENT PRIORITIES", "----------------------"]
    for priority in report.improvement_priorities:
        lines.append(f"• {priority}")

    lines += ["", RULE]
    return "\n".join(lines) + "\n"


def format_single_result(result: TestResult) -> str:
    """
    Render one item's result with per-dimension marks

    Args:
        result: TestResult

    Returns:
        Multi-line text
    """
    expected = result.ground_truth.expected
    lines = [
        f"[{result.item_id}] {expected.name}",
        f"Difficulty: {expected.difficulty} | Domain: {expected.domain_expert}",
    ]
    if result.error:
        lines.append(f"ERROR: {result.error}")
        return "\n".join(lines) + "\n"

    prediction = result.prediction
    lines += [
        f"Predicted: {prediction.name}" + (f" by {prediction.maker}" if prediction.maker else ""),
        f"Overall Score: {result.overall_score}% ({result.latency_ms}ms)",
        "",
        "Scores:",
    ]
    for dim, score in result.scores.items():
        mark = "✓" if score >= 70 else ("~" if score > 0 else "✗")
        lines.append(f"  {mark} {dim:<15} {score:>3}%")

    if result.failures:
        lines += ["", "Failures:"]
        lines += [f"  - {failure}" for failure in result.failures]
    if result.improvement_suggestions:
        lines += ["", "Suggestions:"]
        lines += [f"  - {suggestion}" for suggestion in result.improvement_suggestions]
    return "\n".join(lines) + "\n"


def format_failure_details(report: EvaluationReport) -> str:
    """
    Render the lowest-scoring items (overall below 50, first 10)

    Returns:
        Multi-line text, or an empty string when no item is below the cutoff
    """
    failed = [r for r in report.results if r.overall_score < FAILURE_DETAIL_BELOW]
    if not failed:
        return ""

    lines = [RULE, "DETAILED FAILURE ANALYSIS", RULE, ""]
    for result in failed[:FAILURE_DETAIL_LIMIT]:
        predicted = result.prediction.name if result.prediction else "N/A"
        lines.append(f"[{result.item_id}] Expected: {result.ground_truth.expected.name}")
        lines.append(f"           Got: {predicted}")
        lines.append(f"           Score: {result.overall_score}%")
        if result.error:
            lines.append(f"           Error: {result.error}")
        lines.append("")
    return "\n".join(lines)
