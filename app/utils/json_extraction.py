"""Best-effort extraction of JSON values embedded in free-text model replies.

Model replies are plain strings that are expected to contain JSON but may wrap
it in prose or markdown fences. Extraction never raises: callers get either
``Extracted`` or ``NotFound`` back and decide what a miss means for them.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Union

# Greedy and DOTALL: spans from the first opening bracket to the last closing one
JSON_ARRAY_PATTERN = re.compile(r"\[\s*\{.*\}\s*\]", re.DOTALL)
JSON_OBJECT_PATTERN = re.compile(r"\{.*\}", re.DOTALL)


@dataclass(frozen=True)
class Extracted:
    value: Any


@dataclass(frozen=True)
class NotFound:
    reason: str


ExtractionResult = Union[Extracted, NotFound]


def _extract(text: str, pattern: re.Pattern, expected_type: type, label: str) -> ExtractionResult:
    if not text or not text.strip():
        return NotFound("empty response")

    match = pattern.search(text)
    if not match:
        return NotFound(f"no JSON {label} found in response")

    try:
        value = json.loads(match.group(0))
    except json.JSONDecodeError as e:
        return NotFound(f"invalid JSON {label}: {e}")

    if not isinstance(value, expected_type):
        return NotFound(f"expected a JSON {label}, got {type(value).__name__}")
    return Extracted(value)


def extract_json_array(text: str) -> ExtractionResult:
    return _extract(text, JSON_ARRAY_PATTERN, list, "array")


def extract_json_object(text: str) -> ExtractionResult:
    return _extract(text, JSON_OBJECT_PATTERN, dict, "object")
