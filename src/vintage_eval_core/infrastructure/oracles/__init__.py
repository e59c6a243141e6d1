"""
Prediction oracle package

Provides a unified interface to each vision-model provider, plus a simulated
oracle for offline runs.
"""

from vintage_eval_core.infrastructure.oracles.base import Oracle
from vintage_eval_core.infrastructure.oracles.factory import create_oracle
from vintage_eval_core.infrastructure.oracles.parsing import ANALYSIS_PROMPT, parse_prediction
from vintage_eval_core.infrastructure.oracles.simulated import SimulatedOracle, simulate_prediction

__all__ = [
    "ANALYSIS_PROMPT",
    "Oracle",
    "SimulatedOracle",
    "create_oracle",
    "parse_prediction",
    "simulate_prediction",
]
