"""
vintage-eval-core CLI Runner

Minimal CLI for scoring a vision model against the ground-truth corpus.

Usage:
    python -m vintage_eval_core.runner smoke
    python -m vintage_eval_core.runner full --oracle gpt-4o --workers 4
    python -m vintage_eval_core.runner single furn-001 --oracle claude-sonnet-4-5-20250929
    python -m vintage_eval_core.runner list

Offline run without an API key:
    python -m vintage_eval_core.runner full --oracle simulated --accuracy 0.7 --seed 7
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

from vintage_eval_core.domain.exceptions import CorpusLookupError
from vintage_eval_core.ground_truth_loader import GroundTruthCorpus, load_corpus
from vintage_eval_core.harness_config import HarnessConfig, RunConfig, SimulationConfig, load_config
from vintage_eval_core.infrastructure.images import ImageSource, placeholder_image
from vintage_eval_core.infrastructure.oracles import create_oracle
from vintage_eval_core.scoring.scorer import get_weight_profile
from vintage_eval_core.use_cases.evaluation import (
    evaluate_single_by_id,
    results_to_dataframe,
    run_corpus_evaluation,
)
from vintage_eval_core.use_cases.reporting import (
    format_failure_details,
    format_report,
    format_single_result,
)

MODES = ["smoke", "full", "single", "list"]


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="vintage-eval-core: Score vision-model identifications against curated ground truth",
    )
    parser.add_argument(
        "mode",
        help=f"Run mode: {', '.join(MODES)}",
    )
    parser.add_argument(
        "item_id",
        nargs="?",
        default=None,
        help="Item id (single mode only)",
    )
    parser.add_argument(
        "--oracle",
        default=None,
        help="Oracle model name, or 'simulated' (default: EVAL_ORACLE_MODEL from .env)",
    )
    parser.add_argument(
        "--corpus",
        default=None,
        help="Path to the ground-truth corpus JSON file (default: EVAL_CORPUS_PATH from .env)",
    )
    parser.add_argument(
        "--max-items",
        type=int,
        default=None,
        help="Evaluate at most this many items (default: all)",
    )
    parser.add_argument(
        "--skip",
        default=None,
        help="Comma-separated item ids to skip",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Number of concurrent oracle calls (default: EVAL_MAX_WORKERS from .env)",
    )
    parser.add_argument(
        "--weight-profile",
        default=None,
        help="Scoring weight profile (default: EVAL_WEIGHT_PROFILE from .env)",
    )
    parser.add_argument(
        "--accuracy",
        type=float,
        default=None,
        help="Simulated oracle accuracy, 0.0-1.0 (default: EVAL_SIM_ACCURACY from .env)",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Simulated oracle seed (default: EVAL_SIM_SEED from .env)",
    )
    parser.add_argument(
        "--output-dir",
        default="results",
        help="Directory for output CSV and report files (default: results)",
    )
    return parser.parse_args(argv)


def _apply_overrides(config: HarnessConfig, args: argparse.Namespace) -> HarnessConfig:
    """Apply CLI options on top of the environment configuration"""
    if args.oracle:
        config.oracle.model = args.oracle
    if args.corpus:
        config.corpus.corpus_path = args.corpus
    if args.workers is not None or args.weight_profile:
        config.run = RunConfig(
            max_workers=args.workers if args.workers is not None else config.run.max_workers,
            weight_profile=args.weight_profile or config.run.weight_profile,
            smoke_item_ids=config.run.smoke_item_ids,
        )
    if args.accuracy is not None or args.seed is not None:
        config.simulation = SimulationConfig(
            accuracy=args.accuracy if args.accuracy is not None else config.simulation.accuracy,
            seed=args.seed if args.seed is not None else config.simulation.seed,
        )
    return config


def _print_corpus(corpus: GroundTruthCorpus) -> None:
    print(f"\n=== Corpus: {corpus.name} ({corpus.corpus_id} v{corpus.version}) ===\n")
    print(f"  {'ID':<12} {'Domain':<12} {'Difficulty':<10} Name")
    print(f"  {'-'*12} {'-'*12} {'-'*10} {'-'*40}")
    for item in corpus.items:
        e = item.expected
        print(f"  {item.id:<12} {e.domain_expert:<12} {e.difficulty:<10} {e.name}")
    print(f"\n  Total: {len(corpus)} items\n")


def main(argv: list[str] | None = None) -> None:
    load_dotenv()
    args = parse_args(argv)
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    if args.mode not in MODES:
        print(f"ERROR: Unknown mode '{args.mode}'. Valid modes: {', '.join(MODES)}")
        sys.exit(1)
    if args.mode == "single" and not args.item_id:
        print("ERROR: single mode requires an item id.")
        sys.exit(1)

    try:
        config = _apply_overrides(load_config(), args)
        corpus = load_corpus(config.corpus.corpus_path)
    except (ValueError, KeyError, OSError) as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if args.mode == "list":
        _print_corpus(corpus)
        return

    weights = get_weight_profile(config.run.weight_profile)
    model_name = config.oracle.model

    try:
        oracle = create_oracle(model_name, config=config, corpus_items=corpus.items)
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    if model_name == "simulated":
        image_source = placeholder_image
    else:
        image_source = ImageSource(
            config.corpus.image_dir,
            timeout_seconds=config.corpus.fetch_timeout_seconds,
            user_agent=config.corpus.user_agent,
        )

    print(f"\n=== vintage-eval-core: {args.mode} ===\n")
    print(f"  Corpus: {corpus.name} ({len(corpus)} items)")
    print(f"  Oracle: {model_name}")
    print(f"  Weight profile: {config.run.weight_profile}")
    print()

    if args.mode == "single":
        try:
            result = evaluate_single_by_id(corpus, args.item_id, oracle, image_source, weights)
        except CorpusLookupError as e:
            print(f"ERROR: {e}")
            sys.exit(1)
        print(format_single_result(result))
        return

    if args.mode == "smoke":
        try:
            items = corpus.select(config.run.smoke_item_ids)
        except CorpusLookupError as e:
            print(f"ERROR: Smoke test {e}")
            sys.exit(1)
    else:
        items = corpus.items

    skip_ids = [s.strip() for s in args.skip.split(",") if s.strip()] if args.skip else None
    try:
        report = run_corpus_evaluation(
            items,
            oracle,
            image_source,
            max_items=args.max_items,
            skip_ids=skip_ids,
            max_workers=config.run.max_workers,
            weights=weights,
        )
    except ValueError as e:
        print(f"ERROR: {e}")
        sys.exit(1)

    report_text = format_report(report)
    failure_text = format_failure_details(report)
    print(report_text)
    if failure_text:
        print(failure_text)

    # Save outputs
    run_id = datetime.now().strftime("%Y%m%d_%H%M%S")
    output_dir = Path(args.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    raw_path = output_dir / f"raw_results_{run_id}.csv"
    report_path = output_dir / f"report_{run_id}.txt"

    results_to_dataframe(report.results).to_csv(raw_path, index=False)
    report_path.write_text(report_text + ("\n" + failure_text if failure_text else ""), encoding="utf-8")

    print("=== Output ===\n")
    print(f"  Raw results: {raw_path}")
    print(f"  Report:      {report_path}")
    print()


if __name__ == "__main__":
    main()
