# src/catalog/json_catalog.py — v1
"""JSON file catalog provider (default).

Accepts either a top-level list of tools or an object with a ``tools`` list.
Entries that fail validation are skipped with a warning so that one bad
record never takes the whole catalog down.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from toolcompare.catalog.base_catalog import BaseCatalogProvider
from toolcompare.core.models import CatalogEntry

logger = logging.getLogger(__name__)


class JsonCatalogProvider(BaseCatalogProvider):
    """Loads catalog entries from a JSON file on every call."""

    def __init__(self, path: Path | str) -> None:
        self._path = Path(path).expanduser()

    @property
    def path(self) -> Path:
        return self._path

    def list_entries(self) -> list[CatalogEntry]:
        """Read and validate the catalog file.

        Raises:
            FileNotFoundError: If the catalog file does not exist.
            ValueError: If the file is not a list or ``{"tools": [...]}``.
        """
        raw = json.loads(self._path.read_text(encoding="utf-8"))
        records = _extract_records(raw)

        entries: list[CatalogEntry] = []
        for i, record in enumerate(records):
            if not isinstance(record, dict) or not record.get("slug"):
                logger.warning("Skipping catalog record %d: missing slug", i)
                continue
            try:
                entries.append(CatalogEntry(**record))
            except PydanticValidationError as e:
                logger.warning(
                    "Skipping catalog record %r: %d validation error(s)",
                    record.get("slug"), e.error_count(),
                )

        logger.info("Loaded %d catalog entries from %s", len(entries), self._path)
        return entries


def _extract_records(raw: Any) -> list[Any]:
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict) and isinstance(raw.get("tools"), list):
        return raw["tools"]
    raise ValueError("Catalog JSON must be a list or an object with a 'tools' list")
