"""Validates parsed model output against the analysis and similarity contracts."""

import json
import re
from typing import Any

from documind.ai.exceptions import EmptyResponseError, SchemaViolationError
from documind.analysis.models import (
    AnalysisResult,
    DocumentType,
    Entity,
    FraudAssessment,
    SimilarityResult,
)

_ANALYSIS_FIELDS = (
    "ocrText",
    "summaryShort",
    "summaryMedium",
    "summaryLong",
    "documentType",
    "confidenceScore",
    "fraudDetection",
    "entities",
)
_SIMILARITY_FIELDS = ("similarityScore", "explanation", "similarities", "differences")
_DOCUMENT_TYPES = {member.value: member for member in DocumentType}
# Opening fence with optional language tag, or a closing fence at the end.
_CODE_FENCE_RE = re.compile(r"\A```[\w-]*|```\Z")


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse a model response into a JSON object.

    Markdown code fences around the payload are tolerated.

    Raises:
        EmptyResponseError: if the response is blank.
        SchemaViolationError: if it is not a JSON object.
    """
    cleaned = _CODE_FENCE_RE.sub("", raw.strip()).strip()
    if not cleaned:
        raise EmptyResponseError("AI returned empty response")

    try:
        parsed = json.loads(cleaned)
    except json.JSONDecodeError as exc:
        raise SchemaViolationError(f"Invalid JSON response: {exc}") from exc

    if not isinstance(parsed, dict):
        raise SchemaViolationError("JSON response must be an object")
    return parsed


def build_analysis_result(data: dict[str, Any]) -> AnalysisResult:
    """Validate a parsed analysis payload and build an AnalysisResult.

    Raises:
        SchemaViolationError: on any missing field, wrong type or range miss.
    """
    _require_fields(data, _ANALYSIS_FIELDS, "")
    return AnalysisResult(
        ocr_text=_string(data["ocrText"], "ocrText"),
        summary_short=_string(data["summaryShort"], "summaryShort"),
        summary_medium=_string(data["summaryMedium"], "summaryMedium"),
        summary_long=_string(data["summaryLong"], "summaryLong"),
        document_type=_build_document_type(data["documentType"]),
        confidence_score=_build_confidence(data["confidenceScore"]),
        fraud_detection=_build_fraud_assessment(data["fraudDetection"]),
        entities=_build_entities(data["entities"]),
    )


def build_similarity_result(data: dict[str, Any]) -> SimilarityResult:
    """Validate a parsed comparison payload and build a SimilarityResult.

    Raises:
        SchemaViolationError: on any missing field, wrong type or range miss.
    """
    _require_fields(data, _SIMILARITY_FIELDS, "")
    return SimilarityResult(
        similarity_score=_percentage(data["similarityScore"], "similarityScore"),
        explanation=_string(data["explanation"], "explanation"),
        similarities=_string_list(data["similarities"], "similarities"),
        differences=_string_list(data["differences"], "differences"),
    )


def _require_fields(data: dict[str, Any], fields: tuple[str, ...], prefix: str) -> None:
    for name in fields:
        if name not in data:
            raise SchemaViolationError(f"Missing required field: {prefix}{name}")


def _string(raw: Any, name: str) -> str:
    if not isinstance(raw, str):
        raise SchemaViolationError(f"'{name}' must be a string")
    return raw


def _is_number(raw: Any) -> bool:
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def _build_document_type(raw: Any) -> DocumentType:
    document_type = _DOCUMENT_TYPES.get(raw) if isinstance(raw, str) else None
    if document_type is None:
        raise SchemaViolationError(
            f"'documentType' must be one of {sorted(_DOCUMENT_TYPES)}, got {raw!r}"
        )
    return document_type


def _build_confidence(raw: Any) -> float:
    if not _is_number(raw):
        raise SchemaViolationError("'confidenceScore' must be a number")
    if not 0.0 <= raw <= 1.0:
        raise SchemaViolationError(f"'confidenceScore' must be within [0, 1], got {raw}")
    return float(raw)


def _percentage(raw: Any, name: str) -> int:
    # 87.0 is accepted as 87; 87.5 is not an integer score
    if not _is_number(raw) or (isinstance(raw, float) and not raw.is_integer()):
        raise SchemaViolationError(f"'{name}' must be an integer")
    if not 0 <= raw <= 100:
        raise SchemaViolationError(f"'{name}' must be within [0, 100], got {raw}")
    return int(raw)


def _build_fraud_assessment(raw: Any) -> FraudAssessment:
    if not isinstance(raw, dict):
        raise SchemaViolationError("'fraudDetection' must be an object")
    _require_fields(raw, ("isSuspicious", "score", "reasoning"), "fraudDetection.")
    is_suspicious = raw["isSuspicious"]
    if not isinstance(is_suspicious, bool):
        raise SchemaViolationError("'fraudDetection.isSuspicious' must be a boolean")
    return FraudAssessment(
        is_suspicious=is_suspicious,
        score=_percentage(raw["score"], "fraudDetection.score"),
        reasoning=_string(raw["reasoning"], "fraudDetection.reasoning"),
    )


def _build_entities(raw: Any) -> tuple[Entity, ...]:
    if not isinstance(raw, list):
        raise SchemaViolationError("'entities' must be a list")
    return tuple(_build_entity(item, i) for i, item in enumerate(raw))


def _build_entity(raw: Any, index: int) -> Entity:
    if not isinstance(raw, dict):
        raise SchemaViolationError(f"Entity at index {index} must be an object")
    text = raw.get("text")
    if not isinstance(text, str):
        raise SchemaViolationError(f"Entity at index {index}: 'text' must be a string")
    category = raw.get("category")
    if not isinstance(category, str):
        raise SchemaViolationError(f"Entity at index {index}: 'category' must be a string")
    return Entity(text=text, category=category)


def _string_list(raw: Any, name: str) -> tuple[str, ...]:
    if not isinstance(raw, list):
        raise SchemaViolationError(f"'{name}' must be a list")
    for i, item in enumerate(raw):
        if not isinstance(item, str):
            raise SchemaViolationError(f"'{name}' item at index {i} must be a string")
    return tuple(raw)
