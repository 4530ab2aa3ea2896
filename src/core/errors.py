# src/core/errors.py — v1
"""Error taxonomy for selection, generation and cache failures.

ValidationError and ResolutionError are surfaced to the caller as client
errors. UpstreamError is a server error in buffered mode and an inline
marker in streaming mode. SerializationError and StorageError never leave
the cache layer.
"""

from __future__ import annotations


class CompareError(Exception):
    """Base class for all toolcompare errors."""


class ValidationError(CompareError):
    """Malformed, missing or over-limit identifiers."""


class ResolutionError(CompareError):
    """No identifier resolves to a canonical catalog entry."""


class EmptySelection(ResolutionError):
    """Normalization produced an empty canonical slug list."""

    def __init__(self, unresolved: list[str] | None = None) -> None:
        self.unresolved = list(unresolved or [])
        detail = f": {', '.join(self.unresolved)}" if self.unresolved else ""
        super().__init__(f"No identifiers resolved to a known tool{detail}")


class UpstreamError(CompareError):
    """Generation collaborator failed, timed out or returned a malformed payload."""

    def __init__(self, message: str, provider: str | None = None) -> None:
        self.provider = provider
        super().__init__(message)


class SerializationError(CompareError):
    """A cache entry could not be read or parsed."""


class StorageError(CompareError):
    """A cache entry could not be written."""
