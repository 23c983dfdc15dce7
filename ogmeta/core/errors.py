"""
Error taxonomy for the meta rendering path.

- ConfigurationError: required environment values are absent.
- ContentStoreError: transport failure or non-2xx response from the store.

Resolution misses are not errors: resolvers return None and callers decide
between pass-through and a 404 body.
"""

from __future__ import annotations


class OgMetaError(Exception):
    """Base class for ogmeta errors."""


class ConfigurationError(OgMetaError):
    """Required configuration (store URL or key) is missing."""

    def __init__(self, missing: list[str]) -> None:
        self.missing = missing
        super().__init__(f"Missing configuration: {', '.join(missing)}")


class ContentStoreError(OgMetaError):
    """The content store could not answer a read."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)
