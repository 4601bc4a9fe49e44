"""
Parsing boundary for structured chat-model output.

Chat models do not reliably answer with JSON only, so the first JSON array
or object is cut out of the reply and validated against a schema. Callers
get a ParseResult and decide on their own fallback.
"""

import json
import re
from dataclasses import dataclass
from typing import Any, Generic, Optional, Type, TypeVar

from pydantic import TypeAdapter, ValidationError

T = TypeVar("T")

_ARRAY_PATTERN = re.compile(r"\[[\s\S]*\]")
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


class AIResponseFormatError(ValueError):
    """The reply did not contain JSON of the expected shape."""


@dataclass
class ParseResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap_or(self, fallback: T) -> T:
        return self.value if self.ok else fallback


def extract_json(text: str, expect: str = "array") -> Any:
    """
    Decode the outermost JSON array ("array") or object ("object") in text.

    Raises:
        AIResponseFormatError: If no span matches or the span is not valid JSON
    """
    pattern = _ARRAY_PATTERN if expect == "array" else _OBJECT_PATTERN
    match = pattern.search(text or "")
    if not match:
        raise AIResponseFormatError(f"Invalid response format from AI: no JSON {expect} found")
    try:
        return json.loads(match.group(0))
    except json.JSONDecodeError as e:
        raise AIResponseFormatError(f"Invalid response format from AI: {e}") from e


def parse_structured(text: str, schema: Type[T], expect: str = "array") -> ParseResult[T]:
    """
    Extract JSON from a model reply and validate it against ``schema``.

    Args:
        text: Raw model reply
        schema: Target type, e.g. ``List[AIHealthInsight]`` or ``AIWorkoutPlan``
        expect: "array" or "object"
    """
    try:
        data = extract_json(text, expect)
        return ParseResult(value=TypeAdapter(schema).validate_python(data))
    except AIResponseFormatError as e:
        return ParseResult(error=str(e))
    except ValidationError as e:
        return ParseResult(error=f"AI response failed validation: {e.error_count()} error(s)")
