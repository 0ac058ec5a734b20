"""Pull the JSON document out of free-form LLM text."""

from __future__ import annotations

import json
import re
from typing import Any

_FENCED_JSON_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")
_BRACES_RE = re.compile(r"\{[\s\S]*\}")

NO_JSON_MESSAGE = "No valid JSON found in response"


class JSONExtractionError(ValueError):
    """The response text does not carry a usable JSON object."""


def extract_json(text: str) -> dict[str, Any]:
    """Return the first fenced ```json block, else the outermost ``{...}`` span, parsed.

    Raises ``JSONExtractionError`` when neither is present or the candidate
    is not a JSON object.
    """
    match = _FENCED_JSON_RE.search(text or "")
    if match:
        candidate = match.group(1)
    else:
        match = _BRACES_RE.search(text or "")
        if not match:
            raise JSONExtractionError(NO_JSON_MESSAGE)
        candidate = match.group(0)

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise JSONExtractionError(f"Invalid JSON in response: {e}") from e
    if not isinstance(data, dict):
        raise JSONExtractionError(NO_JSON_MESSAGE)
    return data
