"""
Vertex AI (Google GenAI SDK) vision oracle
"""

import os

from google import genai
from google.genai import errors as genai_errors
from google.genai.types import GenerateContentConfig, HttpOptions, Part

from vintage_eval_core.domain.exceptions import OracleError
from vintage_eval_core.domain.value_objects import ImagePayload, PredictionOutput
from vintage_eval_core.infrastructure.oracles.base import Oracle
from vintage_eval_core.infrastructure.oracles.parsing import ANALYSIS_PROMPT, parse_prediction


class VertexAIVisionOracle(Oracle):
    """Oracle using Google GenAI SDK (via Vertex AI)"""

    def __init__(
        self,
        model_name: str,
        project_id: str | None = None,
        location: str | None = None,
        timeout_seconds: int = 120,
        max_tokens: int = 2048,
        temperature: float = 0.0,
    ):
        """
        Args:
            model_name: Model name (e.g. gemini-2.5-pro, gemini-2.5-flash)
            project_id: GCP project ID (falls back to environment variable if not specified)
            location: Region (defaults to "global")
            timeout_seconds: Timeout in seconds
            max_tokens: Maximum number of output tokens
            temperature: Sampling temperature
        """
        self.model_name = model_name
        self.project_id = project_id or os.environ.get("GCP_PROJECT_ID")
        self.location = location or "global"

        if not self.project_id:
            raise ValueError("GCP_PROJECT_ID is not set")

        # Timeout is configured via HttpOptions (milliseconds)
        self.client = genai.Client(
            vertexai=True,
            project=self.project_id,
            location=self.location,
            http_options=HttpOptions(timeout=timeout_seconds * 1000),
        )
        self.generation_config = GenerateContentConfig(
            temperature=temperature,
            max_output_tokens=max_tokens,
            response_mime_type="application/json",
        )

    def predict(self, image: ImagePayload) -> PredictionOutput:
        """
        Send the image and parse the identification

        Raises:
            OracleError: If the API call fails or the reply cannot be parsed
        """
        try:
            response = self.client.models.generate_content(
                model=self.model_name,
                contents=[
                    Part.from_bytes(data=image.data, mime_type=image.mime_type),
                    ANALYSIS_PROMPT,
                ],
                config=self.generation_config,
            )
        except genai_errors.APIError as e:
            raise OracleError(f"{self.model_name} request failed: {e}") from e

        return parse_prediction(response.text or "")
