"""
Evaluation Harness Configuration

Manages loading from environment variables and default values.
"""

import os
from dataclasses import dataclass, field, asdict

from vintage_eval_core.domain.constants import (
    DEFAULT_WEIGHT_PROFILE,
    SMOKE_TEST_ITEM_IDS,
    WEIGHT_PROFILES,
)


def _env_int(key: str, default: int) -> int:
    """Convert an environment variable to int"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to an integer.")


def _env_float(key: str, default: float) -> float:
    """Convert an environment variable to float"""
    val = os.environ.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"The value '{val}' of environment variable '{key}' cannot be converted to a number.")


def _env_str(key: str, default: str) -> str:
    """Get an environment variable as a string"""
    return os.environ.get(key, default)


def _env_str_list(key: str, default: list[str]) -> list[str]:
    """Convert an environment variable to a comma-separated list of strings"""
    val = os.environ.get(key)
    if val is None:
        return list(default)
    return [x.strip() for x in val.split(",") if x.strip()]


@dataclass
class OracleConfig:
    """Prediction oracle configuration"""
    model: str = "gpt-4o"
    timeout_seconds: int = 120
    max_tokens: int = 2048
    temperature: float = 0.0


@dataclass
class CorpusConfig:
    """Ground-truth corpus and image location configuration"""
    corpus_path: str = "corpus/ground_truth_core.json"
    image_dir: str = "test-data/images"
    fetch_timeout_seconds: int = 30
    user_agent: str = "vintage-eval-core/0.1 (ground truth evaluation harness)"


@dataclass
class RunConfig:
    """Corpus run configuration"""
    max_workers: int = 1
    weight_profile: str = DEFAULT_WEIGHT_PROFILE
    smoke_item_ids: list[str] = field(default_factory=lambda: list(SMOKE_TEST_ITEM_IDS))

    def __post_init__(self):
        if self.max_workers < 1:
            raise ValueError("max_workers must be at least 1.")
        if self.weight_profile not in WEIGHT_PROFILES:
            raise ValueError(
                f"Unknown weight profile: {self.weight_profile}. Valid values: {list(WEIGHT_PROFILES.keys())}"
            )


@dataclass
class SimulationConfig:
    """Simulated oracle configuration"""
    accuracy: float = 0.85
    seed: int = 42

    def __post_init__(self):
        if not 0.0 <= self.accuracy <= 1.0:
            raise ValueError("accuracy must be between 0.0 and 1.0.")


@dataclass
class LMStudioConfig:
    """LMStudio (OpenAI-compatible local vision model) configuration"""
    base_url: str = "http://localhost:1234/v1"
    api_key: str = "lm-studio"


@dataclass
class HarnessConfig:
    """Overall evaluation harness configuration"""
    oracle: OracleConfig = field(default_factory=OracleConfig)
    corpus: CorpusConfig = field(default_factory=CorpusConfig)
    run: RunConfig = field(default_factory=RunConfig)
    simulation: SimulationConfig = field(default_factory=SimulationConfig)
    lmstudio: LMStudioConfig = field(default_factory=LMStudioConfig)

    def to_dict(self) -> dict:
        """Convert to dictionary format"""
        return {"harness_config": asdict(self)}

    @classmethod
    def from_dict(cls, data: dict) -> "HarnessConfig":
        """Create from dictionary (handles presence/absence of harness_config key)"""
        config_data = data.get("harness_config", data)
        return cls(
            oracle=OracleConfig(**config_data.get("oracle", {})),
            corpus=CorpusConfig(**config_data.get("corpus", {})),
            run=RunConfig(**config_data.get("run", {})),
            simulation=SimulationConfig(**config_data.get("simulation", {})),
            lmstudio=LMStudioConfig(**config_data.get("lmstudio", {})),
        )


def load_config() -> HarnessConfig:
    """
    Load configuration from environment variables

    Uses default values when environment variables are not set.

    Returns:
        HarnessConfig
    """
    defaults = CorpusConfig()
    oracle = OracleConfig(
        model=_env_str("EVAL_ORACLE_MODEL", "gpt-4o"),
        timeout_seconds=_env_int("EVAL_ORACLE_TIMEOUT_SECONDS", 120),
        max_tokens=_env_int("EVAL_ORACLE_MAX_TOKENS", 2048),
        temperature=_env_float("EVAL_ORACLE_TEMPERATURE", 0.0),
    )
    corpus = CorpusConfig(
        corpus_path=_env_str("EVAL_CORPUS_PATH", defaults.corpus_path),
        image_dir=_env_str("EVAL_IMAGE_DIR", defaults.image_dir),
        fetch_timeout_seconds=_env_int("EVAL_FETCH_TIMEOUT_SECONDS", 30),
        user_agent=_env_str("EVAL_USER_AGENT", defaults.user_agent),
    )
    run = RunConfig(
        max_workers=_env_int("EVAL_MAX_WORKERS", 1),
        weight_profile=_env_str("EVAL_WEIGHT_PROFILE", DEFAULT_WEIGHT_PROFILE),
        smoke_item_ids=_env_str_list("EVAL_SMOKE_ITEM_IDS", SMOKE_TEST_ITEM_IDS),
    )
    simulation = SimulationConfig(
        accuracy=_env_float("EVAL_SIM_ACCURACY", 0.85),
        seed=_env_int("EVAL_SIM_SEED", 42),
    )
    lmstudio = LMStudioConfig(
        base_url=_env_str("LMSTUDIO_BASE_URL", "http://localhost:1234/v1"),
        api_key=_env_str("LMSTUDIO_API_KEY", "lm-studio"),
    )
    return HarnessConfig(
        oracle=oracle,
        corpus=corpus,
        run=run,
        simulation=simulation,
        lmstudio=lmstudio,
    )
