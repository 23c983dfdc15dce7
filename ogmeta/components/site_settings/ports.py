"""
Site settings component port definitions.
"""

from __future__ import annotations

from typing import Any, Protocol

from ogmeta.core.entities import SiteSettings


class SettingsStorePort(Protocol):
    """Read access to the singleton settings row."""

    async def fetch_site_settings(self) -> dict[str, Any] | None:
        """
        Fetch the settings row, or None when the table is empty.

        Raises ContentStoreError when the store cannot answer.
        """
        ...


class SettingsCachePort(Protocol):
    """Cache collaborator with explicit invalidation."""

    def get(self) -> SiteSettings | None:
        """Return the cached settings, or None when empty or expired."""
        ...

    def put(self, settings: SiteSettings) -> None:
        """Store settings until the TTL elapses."""
        ...

    def invalidate(self) -> None:
        """Drop the cached value."""
        ...
