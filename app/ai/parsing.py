"""Tolerant parsing of raw model responses."""

import json
import re
from typing import Any

from app.ai.exceptions import ResponseParseError
from app.ai.models import UNKNOWN_CATEGORY, ClassificationResult, SummaryResult
from app.logging.logger import Log

MAX_KEY_POINTS = 5
MIN_KEY_POINT_LENGTH = 20
SUMMARY_LANGUAGE = "en"

_SENTENCE_BOUNDARY = re.compile(r"[.!?]")


def clean_json_response(raw: str) -> str:
    """Strip code fences and surrounding prose, keeping the outermost {...}."""
    if not raw:
        return "{}"
    cleaned = raw.replace("```json", "").replace("```", "").strip()
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start < 0 or end <= start:
        Log.warning("Could not find JSON object markers in model response")
        return "{}"
    return cleaned[start : end + 1]


def parse_classification(raw: str) -> ClassificationResult:
    """Build a ClassificationResult from a model response. Never raises."""
    try:
        return _build_classification(json.loads(clean_json_response(raw)))
    except (ValueError, ResponseParseError) as exc:
        Log.error(f"Failed to parse classification response: {exc}; response: {raw!r}")
        return ClassificationResult(
            primary_category=UNKNOWN_CATEGORY,
            processing_notes=f"Parse error: {exc}",
        )


def _build_classification(data: Any) -> ClassificationResult:
    if not isinstance(data, dict):
        raise ResponseParseError("classification response must be a JSON object")

    category = data.get("category")
    if category is None:
        category = UNKNOWN_CATEGORY
    elif not isinstance(category, str):
        raise ResponseParseError("'category' must be a string")
    result = ClassificationResult(primary_category=category)

    if "confidence" in data:
        confidence = data["confidence"]
        if isinstance(confidence, bool) or not isinstance(confidence, (int, float)):
            raise ResponseParseError("'confidence' must be a number")
        result.category_confidences[category] = float(confidence)

    if "tags" in data:
        tags = data["tags"]
        if not isinstance(tags, list):
            raise ResponseParseError("'tags' must be an array")
        if not all(tag is None or isinstance(tag, str) for tag in tags):
            raise ResponseParseError("'tags' must contain only strings")
        result.tags = [tag or "" for tag in tags]

    return result


def parse_summary(raw: str) -> SummaryResult:
    return SummaryResult(
        summary=raw.strip(),
        language=SUMMARY_LANGUAGE,
        key_points=extract_key_points(raw),
    )


def extract_key_points(text: str) -> list[str]:
    points: list[str] = []
    for fragment in _SENTENCE_BOUNDARY.split(text):
        trimmed = fragment.strip()
        if len(trimmed) > MIN_KEY_POINT_LENGTH:
            points.append(trimmed)
            if len(points) == MAX_KEY_POINTS:
                break
    return points
