# src/generation/schema.py — v1
"""Expected shape of a JSON-mode comparison and the explicit check step.

``validate_json_payload`` / ``validate_markdown_payload`` never raise; they
return a tagged ParseSuccess / ParseFailure so the caller decides what a
failure means (UpstreamError in buffered mode).
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError


class _Lenient(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Verdict(_Lenient):
    tool: str
    score: float = Field(ge=1, le=5)
    evidence: str = ""


class Dimension(_Lenient):
    name: str
    verdicts: list[Verdict] = Field(default_factory=list)


class ProsCons(_Lenient):
    tool: str
    pros: list[str] = Field(default_factory=list)
    cons: list[str] = Field(default_factory=list)


class PersonaPick(_Lenient):
    persona: str
    pick: str
    why: str = ""


class DecisionRow(_Lenient):
    criterion: str
    best: str
    reason: str = ""


class ComparisonPayload(_Lenient):
    """Structured comparison returned by the model in JSON mode."""

    tldr: list[str] = Field(min_length=1)
    dimensions: list[Dimension]
    pros_cons: list[ProsCons]
    who_should_choose: list[PersonaPick] = Field(default_factory=list)
    decision_matrix: list[DecisionRow] = Field(default_factory=list)
    caveats: list[str] = Field(default_factory=list)


@dataclass(frozen=True)
class ParseSuccess:
    content: Any


@dataclass(frozen=True)
class ParseFailure:
    reason: str


ParseResult = Union[ParseSuccess, ParseFailure]

_FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def try_parse_json(text: str) -> Any | None:
    """Parse JSON, tolerating markdown code fences and surrounding prose."""
    if not text:
        return None
    candidates = [text, _FENCE.sub("", text.strip())]
    start, end = text.find("{"), text.rfind("}")
    if 0 <= start < end:
        candidates.append(text[start : end + 1])
    for candidate in candidates:
        try:
            return json.loads(candidate)
        except json.JSONDecodeError:
            continue
    return None


def validate_json_payload(text: str) -> ParseResult:
    """Check model output against ComparisonPayload."""
    parsed = try_parse_json(text)
    if parsed is None:
        return ParseFailure("Model output is not valid JSON")
    if not isinstance(parsed, dict):
        return ParseFailure(f"Expected a JSON object, got {type(parsed).__name__}")
    try:
        payload = ComparisonPayload.model_validate(parsed)
    except PydanticValidationError as e:
        first = e.errors()[0]
        loc = ".".join(str(p) for p in first["loc"])
        return ParseFailure(f"Schema validation failed at {loc}: {first['msg']}")
    return ParseSuccess(payload.model_dump(mode="json"))


def validate_markdown_payload(text: str) -> ParseResult:
    stripped = (text or "").strip()
    if not stripped:
        return ParseFailure("Model returned empty markdown")
    return ParseSuccess(stripped)
