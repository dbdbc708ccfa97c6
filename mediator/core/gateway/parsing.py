"""
Helpers for cleaning raw model output.

Models often wrap JSON in markdown code fences or quote short answers;
these helpers strip that wrapping before parsing.
"""

import json
import logging
import re

from pydantic import ValidationError as PydanticValidationError

from mediator.core.gateway.schema import MediationReport

logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json|JSON)?")


def strip_code_fences(text: str) -> str:
    """Remove ``` and ```json markers and surrounding whitespace."""
    return _FENCE_RE.sub("", text).strip()


def clean_summary(text: str) -> str:
    """Normalize a one-line topic summary."""
    cleaned = strip_code_fences(text)
    cleaned = " ".join(cleaned.split())
    return cleaned.strip("\"'“”").strip()


def content_to_text(content) -> str:
    """
    Flatten a chat model message content into plain text.

    LangChain returns either a string or a list of content parts.
    """
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return ""


def parse_report(raw: str) -> MediationReport | None:
    """
    Parse a joint report from raw model text.

    Returns:
        MediationReport, or None when the text is not a valid report
    """
    cleaned = strip_code_fences(raw)
    # Tolerate prose around the JSON object
    start, end = cleaned.find("{"), cleaned.rfind("}")
    if start == -1 or end <= start:
        logger.warning("Report output contains no JSON object", extra={"raw_length": len(raw)})
        return None

    try:
        payload = json.loads(cleaned[start : end + 1])
        return MediationReport.model_validate(payload)
    except (json.JSONDecodeError, PydanticValidationError) as e:
        logger.warning(
            "Report output could not be parsed",
            extra={"error_type": type(e).__name__, "raw_length": len(raw)},
        )
        return None
