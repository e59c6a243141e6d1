"""
OpenAI (and OpenAI-compatible LMStudio) vision oracle
"""

import logging
import os

import openai
from openai import OpenAI

from vintage_eval_core.domain.exceptions import OracleError
from vintage_eval_core.domain.value_objects import ImagePayload, PredictionOutput
from vintage_eval_core.infrastructure.oracles.base import Oracle
from vintage_eval_core.infrastructure.oracles.parsing import ANALYSIS_PROMPT, parse_prediction

logger = logging.getLogger(__name__)


class OpenAIVisionOracle(Oracle):
    """Oracle using the OpenAI chat completions API with an inline image"""

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        base_url: str | None = None,
        timeout_seconds: int = 120,
        max_tokens: int = 2048,
        temperature: float = 0.0,
        json_mode: bool = True,
    ):
        """
        Args:
            model_name: Model name (e.g. gpt-4o, or lmstudio/qwen2.5-vl-7b for a local endpoint)
            api_key: API key (falls back to OPENAI_API_KEY if not specified)
            base_url: Endpoint for OpenAI-compatible servers such as LMStudio
            timeout_seconds: Request timeout in seconds
            max_tokens: Maximum number of tokens in the reply
            temperature: Sampling temperature (0.0 for reproducibility)
            json_mode: Request a JSON object response (not every compatible server supports it)
        """
        self.model_name = model_name
        # Strip the lmstudio/ prefix to get the model name for the API
        self.api_model_name = model_name.removeprefix("lmstudio/")
        self.max_tokens = max_tokens
        self.temperature = temperature
        self.json_mode = json_mode

        api_key = api_key or os.environ.get("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY is not set")

        # Failures are recorded, not retried, so evaluation numbers stay reproducible
        self.client = OpenAI(
            api_key=api_key,
            base_url=base_url,
            timeout=timeout_seconds,
            max_retries=0,
        )

    def predict(self, image: ImagePayload) -> PredictionOutput:
        """
        Send the image and parse the identification

        Raises:
            OracleError: If the API call fails or the reply cannot be parsed
        """
        extra = {"response_format": {"type": "json_object"}} if self.json_mode else {}
        try:
            response = self.client.chat.completions.create(
                model=self.api_model_name,
                messages=[{
                    "role": "user",
                    "content": [
                        {"type": "text", "text": ANALYSIS_PROMPT},
                        {"type": "image_url", "image_url": {"url": image.to_data_url(), "detail": "high"}},
                    ],
                }],
                temperature=self.temperature,
                max_tokens=self.max_tokens,
                **extra,
            )
        except openai.APIError as e:
            raise OracleError(f"{self.model_name} request failed: {e}") from e

        if response.usage:
            logger.debug(
                "%s usage: %s prompt / %s completion tokens",
                self.model_name, response.usage.prompt_tokens, response.usage.completion_tokens,
            )
        return parse_prediction(response.choices[0].message.content or "")
