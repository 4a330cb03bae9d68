"""Parse and normalize the model's JSON reply into an AnalysisResult."""

import json
import logging
import math
import re

from .errors import MalformedResponseError
from .models import AnalysisResult, RevisedSection, RiskItem

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"^```[ \t]*(?:json)?[ \t]*\n?(.*?)\n?```$", re.DOTALL | re.IGNORECASE)

# model key -> RiskItem attribute
_RISK_FIELDS = {
    "type": "type",
    "category": "category",
    "description": "description",
    "explanation": "explanation",
    "suggestion": "suggestion",
}
_OPTIONAL_RISK_FIELDS = {
    "location": "location",
    "originalClause": "original_clause",
    "suggestedClause": "suggested_clause",
}


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ``` or ```json fence and trim whitespace."""
    text = (text or "").strip()
    m = _FENCE_RE.match(text)
    if m:
        return m.group(1).strip()
    # opening fence without a closing one (reply cut short)
    if text.startswith("```"):
        first, _, rest = text.partition("\n")
        return rest.strip() if first.strip("`").strip().lower() in ("", "json") else text
    return text


def _as_text(value) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_number(payload: dict, key: str) -> float:
    value = payload.get(key)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedResponseError(
            f"AI response field '{key}' must be a number, got {type(value).__name__}"
        )
    try:
        finite = math.isfinite(value)
    except OverflowError as e:
        raise MalformedResponseError(f"AI response field '{key}' is out of range") from e
    if not finite:
        raise MalformedResponseError(f"AI response field '{key}' must be finite")
    return value


def _build_risk(index: int, item) -> RiskItem:
    if not isinstance(item, dict):
        raise MalformedResponseError(
            f"AI response risk #{index} must be an object, got {type(item).__name__}"
        )
    fields = {attr: _as_text(item.get(key)) for key, attr in _RISK_FIELDS.items()}
    for key, attr in _OPTIONAL_RISK_FIELDS.items():
        value = item.get(key)
        fields[attr] = None if value is None else _as_text(value)
    known = set(_RISK_FIELDS) | set(_OPTIONAL_RISK_FIELDS) | {"id"}
    extra = {k: v for k, v in item.items() if k not in known}
    # ids are assigned locally; anything the model sent is overwritten
    return RiskItem(id=f"risk-{index}", extra=extra, **fields)


def _build_section(index: int, item) -> RevisedSection:
    if not isinstance(item, dict):
        raise MalformedResponseError(
            f"AI response revised section #{index} must be an object, got {type(item).__name__}"
        )
    return RevisedSection(
        section=_as_text(item.get("section")),
        original=_as_text(item.get("original")),
        revised=_as_text(item.get("revised")),
    )


def normalize_payload(payload, original_text: str) -> AnalysisResult:
    """Validate the decoded JSON shape and build the result object."""
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"Expected a JSON object from the AI, got {type(payload).__name__}"
        )

    risks = payload.get("risks")
    if not isinstance(risks, list):
        raise MalformedResponseError("AI response is missing the 'risks' list")

    score = int(round(_as_number(payload, "overallScore")))
    if not 0 <= score <= 100:
        raise MalformedResponseError(
            f"AI response field 'overallScore' must be between 0 and 100, got {score}"
        )
    total_clauses = int(round(_as_number(payload, "totalClauses")))

    sections = payload.get("revisedSections")
    if sections is None:
        sections = []
    elif not isinstance(sections, list):
        raise MalformedResponseError("AI response field 'revisedSections' must be a list")

    return AnalysisResult(
        risks=[_build_risk(n, r) for n, r in enumerate(risks, start=1)],
        overall_score=score,
        total_clauses=total_clauses,
        original_text=original_text,
        revised_sections=[_build_section(n, s) for n, s in enumerate(sections, start=1)],
    )


def parse_analysis_response(raw: str, original_text: str) -> AnalysisResult:
    """Strip fences from the raw reply, decode it, and normalize it."""
    text = strip_code_fences(raw)
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        logger.error("AI response is not valid JSON: %s", e)
        raise MalformedResponseError(f"Failed to parse AI analysis response: {e}") from e
    return normalize_payload(payload, original_text)
