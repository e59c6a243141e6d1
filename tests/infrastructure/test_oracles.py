"""
Tests for prediction oracles

Covers reply parsing, the simulated oracle, the create_oracle() factory
branches, and the SDK-backed oracles with mocked clients.
"""

import json
import random

import httpx
import pytest
from unittest.mock import MagicMock, patch

import anthropic
import openai
from google.genai import errors as genai_errors

from vintage_eval_core.domain.exceptions import OracleError
from vintage_eval_core.domain.value_objects import ImagePayload
from vintage_eval_core.harness_config import HarnessConfig, SimulationConfig
from vintage_eval_core.infrastructure.oracles.claude import ClaudeVisionOracle
from vintage_eval_core.infrastructure.oracles.factory import create_oracle
from vintage_eval_core.infrastructure.oracles.openai_vision import OpenAIVisionOracle
from vintage_eval_core.infrastructure.oracles.parsing import ANALYSIS_PROMPT, parse_prediction
from vintage_eval_core.infrastructure.oracles.simulated import SimulatedOracle, simulate_prediction
from vintage_eval_core.infrastructure.oracles.vertex_ai import VertexAIVisionOracle
from vintage_eval_core.scoring.scorer import score_prediction

REPLY = {
    "name": "Eames Lounge Chair",
    "maker": "Herman Miller",
    "era": "circa 1960",
    "style": "Mid-Century Modern",
    "productCategory": "vintage",
    "domainExpert": "furniture",
    "originRegion": "USA",
    "estimatedValueMin": 4500,
    "estimatedValueMax": "$8,500",
    "confidence": 0.9,
    "description": "Molded plywood shell",
    "historicalContext": "Designed in 1956",
    "evidenceFor": ["Five-star base"],
    "evidenceAgainst": [],
}

IMAGE = ImagePayload(item_id="furn-001", data=b"\xff\xd8jpeg", mime_type="image/jpeg")


class TestParsePrediction:
    """parse_prediction"""

    def test_camel_case_reply(self):
        prediction = parse_prediction(json.dumps(REPLY))
        assert prediction.name == "Eames Lounge Chair"
        assert prediction.product_category == "vintage"
        assert prediction.domain_expert == "furniture"
        assert prediction.origin_region == "USA"
        assert prediction.estimated_value_min == 4500.0
        assert prediction.estimated_value_max == 8500.0
        assert prediction.confidence == 0.9
        assert prediction.historical_context == "Designed in 1956"
        assert prediction.evidence_for == ["Five-star base"]
        assert prediction.evidence_against == []

    def test_snake_case_reply(self):
        reply = {"name": "Vase", "product_category": "antique", "estimated_value_min": 100, "evidence_for": "marked base"}
        prediction = parse_prediction(json.dumps(reply))
        assert prediction.product_category == "antique"
        assert prediction.estimated_value_min == 100.0
        assert prediction.evidence_for == ["marked base"]

    def test_code_fence(self):
        text = "Here you go:\n```json\n" + json.dumps(REPLY) + "\n```\nThanks"
        assert parse_prediction(text).maker == "Herman Miller"

    def test_prose_around_object(self):
        text = "The object is: " + json.dumps(REPLY) + " (confidence high)"
        assert parse_prediction(text).era == "circa 1960"

    def test_null_like_values(self):
        reply = {"name": "Vase", "maker": "null", "era": None, "estimatedValueMin": "unknown", "confidence": None}
        prediction = parse_prediction(json.dumps(reply))
        assert prediction.maker is None
        assert prediction.era is None
        assert prediction.estimated_value_min is None
        assert prediction.confidence == 0.0

    def test_missing_name_becomes_empty(self):
        assert parse_prediction("{}").name == ""

    def test_no_json(self):
        with pytest.raises(OracleError, match="No JSON object"):
            parse_prediction("I cannot identify this object.")

    def test_invalid_json(self):
        with pytest.raises(OracleError, match="not valid JSON"):
            parse_prediction("{name: Eames}")

    def test_prompt_lists_keys(self):
        for key in ["productCategory", "estimatedValueMin", "evidenceAgainst", "modern_branded"]:
            assert key in ANALYSIS_PROMPT


class TestSimulatedOracle:
    """SimulatedOracle / simulate_prediction"""

    def test_perfect_accuracy_scores_full(self, make_item):
        item = make_item()
        prediction = simulate_prediction(item, 1.0, random.Random(1))
        scores = score_prediction(item.expected, prediction)
        assert all(score == 100 for _, score in scores.items())

    def test_zero_accuracy_is_generic(self, make_item):
        prediction = simulate_prediction(make_item(), 0.0, random.Random(1))
        assert prediction.name == "Generic furniture item"
        assert prediction.maker is None
        assert prediction.style == "Unknown Style"
        assert prediction.origin_region == "Unknown"
        assert prediction.evidence_for == []
        assert prediction.evidence_against == ["Some uncertainty in attribution"]

    def test_deterministic_per_item(self, make_item):
        items = [make_item("a"), make_item("b")]
        first = SimulatedOracle(items, accuracy=0.5, seed=7)
        second = SimulatedOracle(list(reversed(items)), accuracy=0.5, seed=7)
        image = ImagePayload(item_id="a", data=b"")
        assert first.predict(image) == first.predict(image)
        assert first.predict(image) == second.predict(image)

    def test_unknown_item(self, make_item):
        oracle = SimulatedOracle([make_item("a")])
        with pytest.raises(OracleError, match="no ground truth for item: zzz"):
            oracle.predict(ImagePayload(item_id="zzz", data=b""))

    @pytest.mark.parametrize("accuracy", [-0.1, 1.5])
    def test_invalid_accuracy(self, make_item, accuracy):
        with pytest.raises(ValueError, match="accuracy"):
            SimulatedOracle([make_item()], accuracy=accuracy)

    def test_model_name(self, make_item):
        assert SimulatedOracle([make_item()]).model_name == "simulated"


class TestCreateOracle:
    """create_oracle() factory branches"""

    def _config(self):
        return HarnessConfig(simulation=SimulationConfig(accuracy=0.6, seed=3))

    def test_simulated(self, make_item):
        oracle = create_oracle("simulated", config=self._config(), corpus_items=[make_item()])
        assert isinstance(oracle, SimulatedOracle)
        assert oracle.accuracy == 0.6
        assert oracle.seed == 3

    def test_simulated_requires_items(self):
        with pytest.raises(ValueError, match="requires corpus items"):
            create_oracle("simulated", config=self._config())

    @patch("vintage_eval_core.infrastructure.oracles.factory.OpenAIVisionOracle")
    def test_lmstudio(self, mock_cls):
        config = self._config()
        create_oracle("lmstudio/qwen2.5-vl-7b", config=config)
        args, kwargs = mock_cls.call_args
        assert args == ("lmstudio/qwen2.5-vl-7b",)
        assert kwargs["base_url"] == config.lmstudio.base_url
        assert kwargs["api_key"] == config.lmstudio.api_key
        assert kwargs["json_mode"] is False

    @patch("vintage_eval_core.infrastructure.oracles.factory.ClaudeVisionOracle")
    def test_claude(self, mock_cls):
        create_oracle("claude-sonnet-4-5-20250929", config=self._config())
        mock_cls.assert_called_once_with(
            "claude-sonnet-4-5-20250929", timeout_seconds=120, max_tokens=2048, temperature=0.0
        )

    @patch("vintage_eval_core.infrastructure.oracles.factory.VertexAIVisionOracle")
    def test_gemini(self, mock_cls):
        create_oracle("gemini-2.5-flash", config=self._config())
        mock_cls.assert_called_once_with(
            "gemini-2.5-flash", timeout_seconds=120, max_tokens=2048, temperature=0.0
        )

    @patch("vintage_eval_core.infrastructure.oracles.factory.OpenAIVisionOracle")
    def test_default_is_openai(self, mock_cls):
        create_oracle("gpt-4o", config=self._config())
        mock_cls.assert_called_once_with("gpt-4o", timeout_seconds=120, max_tokens=2048, temperature=0.0)


def _request():
    return httpx.Request("POST", "https://example.invalid/v1")


class TestOpenAIVisionOracle:
    """OpenAIVisionOracle with a mocked SDK client"""

    def _response(self, content):
        response = MagicMock()
        response.choices = [MagicMock(message=MagicMock(content=content))]
        response.usage = None
        return response

    @patch("vintage_eval_core.infrastructure.oracles.openai_vision.OpenAI")
    def test_predict(self, mock_openai):
        client = mock_openai.return_value
        client.chat.completions.create.return_value = self._response(json.dumps(REPLY))

        oracle = OpenAIVisionOracle("gpt-4o", api_key="sk-test", timeout_seconds=30)
        prediction = oracle.predict(IMAGE)

        assert prediction.name == "Eames Lounge Chair"
        mock_openai.assert_called_once_with(api_key="sk-test", base_url=None, timeout=30, max_retries=0)
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o"
        assert kwargs["response_format"] == {"type": "json_object"}
        image_part = kwargs["messages"][0]["content"][1]
        assert image_part["image_url"]["url"] == IMAGE.to_data_url()

    @patch("vintage_eval_core.infrastructure.oracles.openai_vision.OpenAI")
    def test_lmstudio_prefix_and_plain_mode(self, mock_openai):
        client = mock_openai.return_value
        client.chat.completions.create.return_value = self._response(json.dumps(REPLY))

        oracle = OpenAIVisionOracle("lmstudio/qwen2.5-vl-7b", api_key="lm-studio", json_mode=False)
        oracle.predict(IMAGE)

        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "qwen2.5-vl-7b"
        assert "response_format" not in kwargs
        assert oracle.model_name == "lmstudio/qwen2.5-vl-7b"

    @patch("vintage_eval_core.infrastructure.oracles.openai_vision.OpenAI")
    def test_api_error_becomes_oracle_error(self, mock_openai):
        client = mock_openai.return_value
        client.chat.completions.create.side_effect = openai.APIConnectionError(request=_request())

        oracle = OpenAIVisionOracle("gpt-4o", api_key="sk-test")
        with pytest.raises(OracleError, match="gpt-4o request failed"):
            oracle.predict(IMAGE)

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("OPENAI_API_KEY", raising=False)
        with pytest.raises(ValueError, match="OPENAI_API_KEY"):
            OpenAIVisionOracle("gpt-4o")


class TestClaudeVisionOracle:
    """ClaudeVisionOracle with a mocked SDK client"""

    @patch("vintage_eval_core.infrastructure.oracles.claude.Anthropic")
    def test_predict(self, mock_anthropic):
        client = mock_anthropic.return_value
        client.messages.create.return_value = MagicMock(
            content=[MagicMock(type="text", text=json.dumps(REPLY))]
        )

        oracle = ClaudeVisionOracle("claude-sonnet-4-5-20250929", api_key="sk-ant-test")
        prediction = oracle.predict(IMAGE)

        assert prediction.maker == "Herman Miller"
        mock_anthropic.assert_called_once_with(api_key="sk-ant-test", timeout=120, max_retries=0)
        image_block = client.messages.create.call_args.kwargs["messages"][0]["content"][0]
        assert image_block["source"]["media_type"] == "image/jpeg"
        assert image_block["source"]["data"] == IMAGE.to_base64()

    @patch("vintage_eval_core.infrastructure.oracles.claude.Anthropic")
    def test_api_error_becomes_oracle_error(self, mock_anthropic):
        client = mock_anthropic.return_value
        client.messages.create.side_effect = anthropic.APIConnectionError(request=_request())

        oracle = ClaudeVisionOracle("claude-sonnet-4-5-20250929", api_key="sk-ant-test")
        with pytest.raises(OracleError, match="request failed"):
            oracle.predict(IMAGE)

    def test_missing_api_key(self, monkeypatch):
        monkeypatch.delenv("ANTHROPIC_API_KEY", raising=False)
        with pytest.raises(ValueError, match="ANTHROPIC_API_KEY"):
            ClaudeVisionOracle("claude-sonnet-4-5-20250929")


class TestVertexAIVisionOracle:
    """VertexAIVisionOracle with a mocked GenAI client"""

    @patch("vintage_eval_core.infrastructure.oracles.vertex_ai.genai")
    def test_predict(self, mock_genai):
        client = mock_genai.Client.return_value
        client.models.generate_content.return_value = MagicMock(text=json.dumps(REPLY))

        oracle = VertexAIVisionOracle("gemini-2.5-flash", project_id="my-project", timeout_seconds=60)
        prediction = oracle.predict(IMAGE)

        assert prediction.style == "Mid-Century Modern"
        client_kwargs = mock_genai.Client.call_args.kwargs
        assert client_kwargs["vertexai"] is True
        assert client_kwargs["project"] == "my-project"
        assert client_kwargs["location"] == "global"
        call_kwargs = client.models.generate_content.call_args.kwargs
        assert call_kwargs["model"] == "gemini-2.5-flash"
        assert call_kwargs["config"].response_mime_type == "application/json"

    @patch("vintage_eval_core.infrastructure.oracles.vertex_ai.genai")
    def test_api_error_becomes_oracle_error(self, mock_genai):
        client = mock_genai.Client.return_value
        client.models.generate_content.side_effect = genai_errors.APIError(
            503, {"error": {"code": 503, "message": "unavailable", "status": "UNAVAILABLE"}}
        )

        oracle = VertexAIVisionOracle("gemini-2.5-flash", project_id="my-project")
        with pytest.raises(OracleError, match="gemini-2.5-flash request failed"):
            oracle.predict(IMAGE)

    def test_missing_project(self, monkeypatch):
        monkeypatch.delenv("GCP_PROJECT_ID", raising=False)
        with pytest.raises(ValueError, match="GCP_PROJECT_ID"):
            VertexAIVisionOracle("gemini-2.5-flash")
