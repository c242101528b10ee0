"""
Normalization of raw provider replies into typed results.

Providers are asked for pure JSON but often wrap it in prose or markdown
fences, drop fields, or return the wrong types. The parsers here never raise:
they take the text between the first `{` and the last `}`, decode it, fill in
a default for every missing or mis-typed field and fall back to a fixed
result when nothing can be decoded.

Known limitation: the brace scan is a heuristic. A reply with several JSON
fragments, or with prose containing braces around the payload, fails to
decode and yields the fallback.
"""
import json
import logging
import math
from typing import Any, Dict, List, Optional

from .renderer import render_document
from .schemas import AdaptationResult, ATSAssessment

logger = logging.getLogger(__name__)

PARSE_FAILURE_MARKER = "Failed to parse API response"
PARSE_FAILURE_SUGGESTION = "Please check the API response format"

# Canonical key first, then names used by older prompts.
ATS_KEYS = {
    "is_compliant": ("isCompliant", "isATSFormat"),
    "score": ("score",),
    "issues": ("issues",),
    "suggestions": ("suggestions",),
}
ADAPTATION_KEYS = {
    "adapted_text": ("adaptedText", "adaptedCV"),
    "rendered_document": ("latexCode", "renderedDocument"),
    "change_log": ("changeLog", "changes"),
    "highlighted_skills": ("highlightedSkills",),
}


class MalformedReply(ValueError):
    """Raised internally when a reply holds no decodable JSON object."""


def extract_json_block(raw: str) -> Optional[str]:
    """Return the substring from the first '{' to the last '}', or None."""
    if not isinstance(raw, str):
        return None
    start = raw.find("{")
    end = raw.rfind("}")
    if start == -1 or end == -1 or end < start:
        return None
    return raw[start:end + 1]


def _decode(raw: str) -> Dict[str, Any]:
    block = extract_json_block(raw)
    if block is None:
        raise MalformedReply("No JSON found in response")
    parsed = json.loads(block)
    if not isinstance(parsed, dict):
        raise MalformedReply("JSON payload is not an object")
    return parsed


def _pick(payload: Dict[str, Any], keys) -> Any:
    for key in keys:
        if key in payload and payload[key] is not None:
            return payload[key]
    return None


def _as_bool(value: Any) -> bool:
    return value if isinstance(value, bool) else False


def _as_score(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, str):
        try:
            value = float(value.strip().rstrip("%"))
        except ValueError:
            return 0
    if not isinstance(value, (int, float)) or not math.isfinite(value):
        return 0
    return max(0, min(100, int(round(value))))


def _clean(value: str) -> str:
    # Lone surrogates from JSON escapes like "\ud800" cannot be UTF-8 encoded on the way out.
    return value.encode("utf-8", "replace").decode("utf-8")


def _as_str(value: Any) -> str:
    return _clean(value) if isinstance(value, str) else ""


def _as_str_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if isinstance(item, str):
            items.append(_clean(item))
        elif isinstance(item, (int, float)) and not isinstance(item, bool):
            items.append(str(item))
    return items


def fallback_assessment() -> ATSAssessment:
    return ATSAssessment(
        is_compliant=False,
        score=0,
        issues=[PARSE_FAILURE_MARKER],
        suggestions=[PARSE_FAILURE_SUGGESTION],
    )


def fallback_adaptation() -> AdaptationResult:
    return AdaptationResult(
        adapted_text="",
        rendered_document=render_document(""),
        change_log=[PARSE_FAILURE_MARKER],
        highlighted_skills=[],
    )


def parse_ats_response(raw: str) -> ATSAssessment:
    try:
        payload = _decode(raw)
    except (ValueError, RecursionError) as e:
        logger.error("Error parsing ATS response: %s", e)
        return fallback_assessment()

    return ATSAssessment(
        is_compliant=_as_bool(_pick(payload, ATS_KEYS["is_compliant"])),
        score=_as_score(_pick(payload, ATS_KEYS["score"])),
        issues=_as_str_list(_pick(payload, ATS_KEYS["issues"])),
        suggestions=_as_str_list(_pick(payload, ATS_KEYS["suggestions"])),
    )


def parse_adaptation_response(raw: str) -> AdaptationResult:
    try:
        payload = _decode(raw)
    except (ValueError, RecursionError) as e:
        logger.error("Error parsing adaptation response: %s", e)
        return fallback_adaptation()

    adapted_text = _as_str(_pick(payload, ADAPTATION_KEYS["adapted_text"]))
    # A document supplied by the provider is trusted as-is.
    document = _as_str(_pick(payload, ADAPTATION_KEYS["rendered_document"]))
    if not document.strip():
        document = render_document(adapted_text)

    return AdaptationResult(
        adapted_text=adapted_text,
        rendered_document=document,
        change_log=_as_str_list(_pick(payload, ADAPTATION_KEYS["change_log"])),
        highlighted_skills=_as_str_list(_pick(payload, ADAPTATION_KEYS["highlighted_skills"])),
    )
