"""
Use Cases Layer

Aggregates business logic and provides use cases called from the runner.
"""

from vintage_eval_core.use_cases.evaluation import (
    category_breakdown,
    evaluate_single_by_id,
    results_to_dataframe,
    run_corpus_evaluation,
    run_single_evaluation,
    score_distribution,
    select_items,
)
from vintage_eval_core.use_cases.failure_analysis import (
    analyze_failure_patterns,
    generate_improvement_priorities,
)
from vintage_eval_core.use_cases.reporting import (
    format_failure_details,
    format_report,
    format_single_result,
)

__all__ = [
    # evaluation
    "run_single_evaluation",
    "evaluate_single_by_id",
    "run_corpus_evaluation",
    "select_items",
    "score_distribution",
    "category_breakdown",
    "results_to_dataframe",
    # failure analysis
    "analyze_failure_patterns",
    "generate_improvement_priorities",
    # reporting
    "format_report",
    "format_single_result",
    "format_failure_details",
]
