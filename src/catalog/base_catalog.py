# src/catalog/base_catalog.py — v1
"""Abstract catalog provider interface.

The catalog pipeline owns the data; this side only reads a snapshot.
"""

from __future__ import annotations

from abc import ABC, abstractmethod

from toolcompare.core.models import CatalogEntry


class BaseCatalogProvider(ABC):
    """Read-only source of catalog entries."""

    @abstractmethod
    def list_entries(self) -> list[CatalogEntry]:
        """Return every catalog entry in catalog order."""


class StaticCatalogProvider(BaseCatalogProvider):
    """In-memory provider wrapping an already materialized entry list."""

    def __init__(self, entries: list[CatalogEntry]) -> None:
        self._entries = list(entries)

    def list_entries(self) -> list[CatalogEntry]:
        return list(self._entries)
