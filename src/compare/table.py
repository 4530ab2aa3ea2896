# src/compare/table.py — v1
"""Non-AI comparison table built directly from catalog data.

Each field becomes a column of display values aligned positionally with the
selected slugs. Values are flattened to strings (lists joined with ", ");
missing, empty or object-valued fields become None.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from toolcompare.core.models import CatalogEntry, CompareTable


@dataclass(frozen=True)
class TableField:
    key: str
    label: str
    compute: Callable[[dict[str, Any]], Any] | None = None


def get_path(obj: Any, path: str) -> Any:
    """Follow a dotted path through nested dicts; None if any hop is missing."""
    cur = obj
    for part in path.split("."):
        if isinstance(cur, dict) and part in cur:
            cur = cur[part]
        else:
            return None
    return cur


def format_value(value: Any) -> str | None:
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        items = [x.strip() if isinstance(x, str) else str(x) for x in value]
        items = [x for x in items if x]
        return ", ".join(items) if items else None
    if isinstance(value, dict):
        return None
    text = str(value).strip()
    return text or None


def _pricing_model(t: dict[str, Any]) -> Any:
    return get_path(t, "pricing.model") or t.get("pricing_model")


def _plan_names(t: dict[str, Any]) -> Any:
    plans = get_path(t, "pricing.plans")
    if not isinstance(plans, list):
        return None
    return [p.get("name") for p in plans if isinstance(p, dict) and p.get("name")]


def _categories(t: dict[str, Any]) -> Any:
    return t.get("categories") or [
        c for c in (t.get("main_category"), t.get("subcategory")) if c
    ]


# Order matters: this is the row order of the rendered table.
COMPARE_FIELDS: tuple[TableField, ...] = (
    TableField("tagline", "Tagline"),
    TableField("summary", "Summary"),
    TableField("categories", "Other categories", _categories),
    TableField("pricing_model", "Pricing model", _pricing_model),
    TableField("pricing_plans", "Plans", _plan_names),
    TableField("features", "Features"),
    TableField("pros", "Pros", lambda t: get_path(t, "pros_cons.pros")),
    TableField("cons", "Cons", lambda t: get_path(t, "pros_cons.cons")),
    TableField("best_for", "Best for"),
    TableField("use_cases", "Use cases"),
    TableField("roles", "Roles", lambda t: t.get("job_roles") or t.get("roles")),
    TableField("tasks", "Tasks"),
    TableField("models", "Models"),
    TableField("platforms", "Platforms"),
    TableField("languages", "Languages"),
    TableField("integrations", "Integrations"),
    TableField("compliance", "Compliance"),
    TableField("technical.context_tokens", "Context tokens"),
    TableField("technical.sdk_languages", "SDK languages"),
    TableField("privacy.training_policy", "Training policy"),
    TableField("privacy.data_retention", "Data retention"),
    TableField("security.certifications", "Security certs"),
    TableField("security.sso", "SSO"),
    TableField("limits.free_tier", "Free tier"),
    TableField("vendor.name", "Vendor", lambda t: get_path(t, "vendor.name") or (
        t.get("vendor") if isinstance(t.get("vendor"), str) else None
    )),
    TableField("vendor.hq_country", "HQ"),
    TableField("release_date", "Release date"),
    TableField("updated_at", "Updated"),
    TableField("website_url", "Website"),
)


def build_compare_table(
    entries: Sequence[CatalogEntry],
    fields: Sequence[TableField] = COMPARE_FIELDS,
) -> CompareTable:
    """Build the column-aligned comparison for ``entries`` (in order)."""
    dumped = [e.model_dump(mode="json") for e in entries]
    columns: dict[str, list[Any]] = {}
    labels: dict[str, str] = {}
    for field in fields:
        columns[field.key] = [
            format_value(field.compute(t) if field.compute else get_path(t, field.key))
            for t in dumped
        ]
        labels[field.key] = field.label

    return CompareTable(
        slugs=[e.slug for e in entries],
        names=[e.name for e in entries],
        fields=columns,
        labels=labels,
    )
