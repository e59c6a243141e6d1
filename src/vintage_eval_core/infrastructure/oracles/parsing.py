"""
Identification prompt and reply parsing

Shared by every vision-model oracle: the prompt that asks for a JSON
identification, and the parser that turns the reply into a PredictionOutput.
"""

from __future__ import annotations

import json
import re

from vintage_eval_core.domain.constants import VALID_ITEM_CATEGORIES
from vintage_eval_core.domain.exceptions import OracleError
from vintage_eval_core.domain.value_objects import PredictionOutput

ANALYSIS_PROMPT = f"""You are an expert appraiser of antiques, vintage objects and collectibles.
Identify the object in the photograph and reply with a single JSON object with these keys:

- "name": the specific name of the object (model or pattern name when known)
- "maker": manufacturer, designer or artist, or null if it cannot be attributed
- "era": production period, with years where possible (e.g. "circa 1950-1960")
- "style": design style or movement
- "productCategory": one of {", ".join(VALID_ITEM_CATEGORIES)}
- "domainExpert": the specialist domain (furniture, ceramics, art, watches, jewelry, silver, glass, textiles, toys, lighting, books, general)
- "originRegion": country or region of origin
- "estimatedValueMin": lower bound of the market value in USD (number)
- "estimatedValueMax": upper bound of the market value in USD (number)
- "confidence": your confidence in the identification, from 0 to 1
- "description": a description of the object and its notable features
- "historicalContext": historical background of the object
- "evidenceFor": list of visual evidence supporting the identification
- "evidenceAgainst": list of observations that cast doubt on it

Reply with JSON only."""

_CODE_FENCE_RE = re.compile(r"```(?:json)?\s*(.*?)```", re.DOTALL | re.IGNORECASE)
_NUMBER_CLEAN_RE = re.compile(r"[$,\s]")
_NULL_STRINGS = {"", "null", "none", "n/a"}


def _extract_json_object(text: str) -> dict:
    """Pull the JSON object out of a reply that may be wrapped in a code fence or prose"""
    fenced = _CODE_FENCE_RE.search(text)
    if fenced:
        text = fenced.group(1)
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise OracleError(f"No JSON object found in oracle reply: {text[:200]!r}")
    try:
        data = json.loads(text[start:end + 1])
    except json.JSONDecodeError as e:
        raise OracleError(f"Oracle reply is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise OracleError("Oracle reply is not a JSON object")
    return data


def _get(data: dict, camel: str, snake: str):
    return data[camel] if camel in data else data.get(snake)


def _to_optional_str(value) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return None if text.lower() in _NULL_STRINGS else text


def _to_float(value) -> float | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    try:
        return float(_NUMBER_CLEAN_RE.sub("", str(value)))
    except ValueError:
        return None


def _to_str_list(value) -> list[str] | None:
    if value is None:
        return None
    if isinstance(value, str):
        return [value] if value.strip() else []
    if isinstance(value, list):
        return [str(v) for v in value if v is not None and str(v).strip()]
    return None


def parse_prediction(text: str) -> PredictionOutput:
    """
    Parse an oracle reply into a PredictionOutput

    Accepts camelCase or snake_case keys. Fields that are missing or have the
    wrong type become None so that the scorers treat them as "no match".

    Args:
        text: Raw model reply

    Returns:
        PredictionOutput

    Raises:
        OracleError: When the reply contains no JSON object
    """
    data = _extract_json_object(text)

    confidence = _to_float(data.get("confidence"))
    return PredictionOutput(
        name=_to_optional_str(data.get("name")) or "",
        maker=_to_optional_str(data.get("maker")),
        era=_to_optional_str(data.get("era")),
        style=_to_optional_str(data.get("style")),
        product_category=_to_optional_str(_get(data, "productCategory", "product_category")),
        domain_expert=_to_optional_str(_get(data, "domainExpert", "domain_expert")),
        origin_region=_to_optional_str(_get(data, "originRegion", "origin_region")),
        estimated_value_min=_to_float(_get(data, "estimatedValueMin", "estimated_value_min")),
        estimated_value_max=_to_float(_get(data, "estimatedValueMax", "estimated_value_max")),
        confidence=confidence if confidence is not None else 0.0,
        description=_to_optional_str(data.get("description")) or "",
        historical_context=_to_optional_str(_get(data, "historicalContext", "historical_context")) or "",
        evidence_for=_to_str_list(_get(data, "evidenceFor", "evidence_for")),
        evidence_against=_to_str_list(_get(data, "evidenceAgainst", "evidence_against")),
    )
