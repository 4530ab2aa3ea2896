# src/generation/prompts.py — v1
"""Prompt builders for AI comparisons."""

from __future__ import annotations

import json
from collections.abc import Sequence

from toolcompare.core.models import CompareWeights, LiteProjection, OutputFormat
from toolcompare.llm.models import Message

_JSON_SCHEMA_HINT = """{
  "tldr": ["bullet", "..."],
  "dimensions": [
    {"name": "Accuracy", "verdicts": [{"tool": "slug", "score": 1-5, "evidence": "concise, specific"}]}
  ],
  "pros_cons": [{"tool": "slug", "pros": ["..."], "cons": ["..."]}],
  "who_should_choose": [{"persona": "role/title", "pick": "slug", "why": "specific"}],
  "decision_matrix": [{"criterion": "text", "best": "slug", "reason": "why this pick"}],
  "caveats": ["clear limitations and unknowns"]
}"""

_MARKDOWN_SECTIONS = (
    "- TL;DR bullets (3-5)\n"
    "- Table across key dimensions (Accuracy, Cost, Speed, Integrations)\n"
    "- Pros & Cons per tool\n"
    "- Who should choose what (personas, use cases)\n"
    "- Decision matrix (if X then choose Y, with reasons)\n"
    "- Caveats/unknowns"
)


def build_system_prompt(weights: CompareWeights | None = None) -> str:
    w = weights or CompareWeights()
    return (
        "You are an unbiased analyst. Write in a concise, helpful, credible tone. Avoid hype.\n"
        f"Prioritize dimensions with these weights (sum=1): Accuracy {w.accuracy}, "
        f"Cost {w.cost}, Speed {w.speed}, Integrations {w.integrations}.\n"
        "Only use the provided tool data; do not invent features or pricing. "
        "If uncertain, state limitations."
    )


def catalog_json(projections: Sequence[LiteProjection]) -> str:
    return json.dumps(
        [p.model_dump(mode="json", exclude_none=True) for p in projections],
        ensure_ascii=False,
    )


def build_user_prompt(projections: Sequence[LiteProjection], fmt: OutputFormat) -> str:
    catalog = catalog_json(projections)
    if fmt == "json":
        return (
            "Compare these tools in depth and return STRICT JSON (no markdown).\n"
            f"Schema:\n{_JSON_SCHEMA_HINT}\n"
            "Use tool slugs exactly as given.\n"
            f"Catalog JSON:\n{catalog}"
        )
    return (
        f"Create a detailed, structured markdown comparison with:\n{_MARKDOWN_SECTIONS}\n"
        f"Catalog JSON:\n{catalog}"
    )


def build_messages(projections: Sequence[LiteProjection], fmt: OutputFormat) -> list[Message]:
    return [Message(role="user", content=build_user_prompt(projections, fmt))]
