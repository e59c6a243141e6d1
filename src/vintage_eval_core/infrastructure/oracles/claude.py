"""
Anthropic Claude vision oracle
"""

import os

import anthropic
from anthropic import Anthropic

from vintage_eval_core.domain.exceptions import OracleError
from vintage_eval_core.domain.value_objects import ImagePayload, PredictionOutput
from vintage_eval_core.infrastructure.oracles.base import Oracle
from vintage_eval_core.infrastructure.oracles.parsing import ANALYSIS_PROMPT, parse_prediction


class ClaudeVisionOracle(Oracle):
    """Oracle using the Anthropic messages API with a base64 image block"""

    def __init__(
        self,
        model_name: str,
        api_key: str | None = None,
        timeout_seconds: int = 120,
        max_tokens: int = 2048,
        temperature: float = 0.0,
    ):
        """
        Args:
            model_name: Model name (e.g. claude-sonnet-4-5-20250929)
            api_key: Anthropic API key (falls back to environment variable if not specified)
            timeout_seconds: Request timeout in seconds
            max_tokens: Maximum number of tokens in the reply
            temperature: Sampling temperature
        """
        self.model_name = model_name
        self.api_key = api_key or os.environ.get("ANTHROPIC_API_KEY")
        self.max_tokens = max_tokens
        self.temperature = temperature

        if not self.api_key:
            raise ValueError("ANTHROPIC_API_KEY is not set")

        self.client = Anthropic(api_key=self.api_key, timeout=timeout_seconds, max_retries=0)

    def predict(self, image: ImagePayload) -> PredictionOutput:
        """
        Send the image and parse the identification

        Raises:
            OracleError: If the API call fails or the reply cannot be parsed
        """
        try:
            response = self.client.messages.create(
                model=self.model_name,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                messages=[{
                    "role": "user",
                    "content": [
                        {
                            "type": "image",
                            "source": {
                                "type": "base64",
                                "media_type": image.mime_type,
                                "data": image.to_base64(),
                            },
                        },
                        {"type": "text", "text": ANALYSIS_PROMPT},
                    ],
                }],
            )
        except anthropic.APIError as e:
            raise OracleError(f"{self.model_name} request failed: {e}") from e

        text = "".join(block.text for block in response.content if block.type == "text")
        return parse_prediction(text)
