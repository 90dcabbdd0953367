"""Backend reply parsing: extract structured findings from free-form text."""

import json
import logging
import math
from typing import Any

from pydantic import ValidationError

from localspy.reviewer.models import (
    BackendReply,
    Finding,
    FindingCategory,
    Severity,
    SourceFile,
)

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE = 0.5
FALLBACK_CONFIDENCE = 0.1
FALLBACK_TITLE = "LLM Response Parse Error"
FALLBACK_DESCRIPTION = "Failed to parse AI response. Manual review recommended."
FALLBACK_SUGGESTION = "Review this file manually"

# Finding fields that are reset to None instead of failing the reply
OPTIONAL_FIELDS = frozenset({"line", "column", "suggestion", "code"})


class ReplyFormatError(ValueError):
    """The reply text does not contain a usable JSON payload."""


def extract_json_span(text: str) -> str:
    """Get the text from the leftmost ``{`` to the rightmost ``}``.

    Raises:
        ReplyFormatError: If the text has no such span
    """
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end < start:
        raise ReplyFormatError("no JSON object found in response")
    return text[start : end + 1]


def _confidence_from(data: dict[str, Any]) -> float:
    value = data.get("confidence")
    # bool is an int subclass but never a meaningful score
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return DEFAULT_CONFIDENCE
    try:
        value = float(value)
    except OverflowError:
        return DEFAULT_CONFIDENCE
    if math.isnan(value):
        return DEFAULT_CONFIDENCE
    return min(max(value, 0.0), 1.0)


def _validate_finding(fields: dict[str, Any]) -> Finding:
    """Validate one issue, dropping optional fields of the wrong type.

    Raises:
        ValidationError: If a required field is missing or invalid
    """
    try:
        return Finding.model_validate(fields)
    except ValidationError as e:
        bad = {error["loc"][0] for error in e.errors() if error["loc"]}
        if not bad or not bad <= OPTIONAL_FIELDS:
            raise
        logger.debug(f"Dropping invalid optional fields {sorted(bad)}")
        return Finding.model_validate({**fields, **dict.fromkeys(bad)})


def _findings_from(data: Any, file: SourceFile) -> list[Finding]:
    """Validate the ``issues`` list, attaching the reviewed file's path.

    Raises:
        ReplyFormatError: If ``issues`` is missing or any element lacks a
            valid required field
    """
    if not isinstance(data, dict):
        raise ReplyFormatError("response JSON is not an object")
    raw_issues = data.get("issues")
    if not isinstance(raw_issues, list):
        raise ReplyFormatError("response JSON has no 'issues' list")

    findings: list[Finding] = []
    for index, raw in enumerate(raw_issues):
        if not isinstance(raw, dict):
            raise ReplyFormatError(f"issue {index} is not an object")
        # The backend cannot be trusted to echo the path correctly
        fields = {**raw, "file": file.path}
        try:
            findings.append(_validate_finding(fields))
        except ValidationError as e:
            raise ReplyFormatError(f"issue {index} is invalid: {e}") from e
    return findings


def fallback_reply(file: SourceFile) -> BackendReply:
    """Reply used when the backend text cannot be parsed."""
    return BackendReply(
        issues=[
            Finding(
                category=FindingCategory.BUGS,
                severity=Severity.LOW,
                title=FALLBACK_TITLE,
                description=FALLBACK_DESCRIPTION,
                file=file.path,
                suggestion=FALLBACK_SUGGESTION,
            )
        ],
        confidence=FALLBACK_CONFIDENCE,
    )


def normalize_response(text: str, file: SourceFile) -> BackendReply:
    """Turn raw backend text into a BackendReply.

    Tolerates prose and markdown fences around the JSON object. Never raises:
    any reply that cannot be parsed becomes a single low-severity finding
    asking for manual review.

    Args:
        text: Raw text generated by the backend
        file: The file that was reviewed

    Returns:
        BackendReply with every finding attributed to ``file``
    """
    try:
        data = json.loads(extract_json_span(text))
        findings = _findings_from(data, file)
        confidence = _confidence_from(data)
    # json.loads raises plain ValueError past the int digit limit and
    # RecursionError on very deep nesting
    except (ValueError, RecursionError) as e:
        logger.debug(f"Unparseable response for {file.path}: {e}")
        return fallback_reply(file)

    return BackendReply(issues=findings, confidence=confidence)
