"""
Oracle factory

Creates the appropriate oracle instance based on the model name.
"""

from __future__ import annotations

from vintage_eval_core.domain.entities import GroundTruthItem
from vintage_eval_core.harness_config import HarnessConfig, load_config
from vintage_eval_core.infrastructure.oracles.base import Oracle
from vintage_eval_core.infrastructure.oracles.claude import ClaudeVisionOracle
from vintage_eval_core.infrastructure.oracles.openai_vision import OpenAIVisionOracle
from vintage_eval_core.infrastructure.oracles.simulated import SimulatedOracle
from vintage_eval_core.infrastructure.oracles.vertex_ai import VertexAIVisionOracle


def create_oracle(
    model_name: str,
    config: HarnessConfig | None = None,
    corpus_items: list[GroundTruthItem] | None = None,
) -> Oracle:
    """
    Create the appropriate oracle based on the model name

    Args:
        model_name: "simulated", "lmstudio/<model>", "claude-*", "gemini-*",
            or any other name (treated as an OpenAI model)
        config: HarnessConfig (loads from env if not provided)
        corpus_items: Ground-truth items, required by the simulated oracle

    Returns:
        Oracle: The appropriate oracle instance

    Raises:
        ValueError: If the simulated oracle is requested without corpus items
    """
    if config is None:
        config = load_config()

    oracle_cfg = config.oracle
    common = dict(
        timeout_seconds=oracle_cfg.timeout_seconds,
        max_tokens=oracle_cfg.max_tokens,
        temperature=oracle_cfg.temperature,
    )

    if model_name == "simulated":
        if not corpus_items:
            raise ValueError("The simulated oracle requires corpus items.")
        return SimulatedOracle(
            corpus_items,
            accuracy=config.simulation.accuracy,
            seed=config.simulation.seed,
        )
    elif model_name.startswith("lmstudio/"):
        return OpenAIVisionOracle(
            model_name,
            api_key=config.lmstudio.api_key,
            base_url=config.lmstudio.base_url,
            json_mode=False,
            **common,
        )
    elif model_name.startswith("claude"):
        return ClaudeVisionOracle(model_name, **common)
    elif model_name.startswith("gemini"):
        return VertexAIVisionOracle(model_name, **common)
    else:
        return OpenAIVisionOracle(model_name, **common)
