"""
SiteSettingsService - branding defaults for meta documents.

GET always returns settings: when the row is missing or the store fails,
the configured defaults are used. Only rows actually read from the store
are cached.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from ogmeta.adapters.settings_cache import NoOpSettingsCache
from ogmeta.core.entities import DEFAULT_SITE_NAME, SiteSettings
from ogmeta.core.errors import ContentStoreError

from .ports import SettingsCachePort, SettingsStorePort

logger = logging.getLogger(__name__)


def get_default_settings(site_name: str | None = None) -> SiteSettings:
    """Fallback settings used when the row cannot be read."""
    return SiteSettings(site_name=site_name or DEFAULT_SITE_NAME)


class SiteSettingsService:
    def __init__(
        self,
        store: SettingsStorePort | None,
        cache: SettingsCachePort | None = None,
        default_site_name: str | None = None,
    ) -> None:
        self._store = store
        self._cache = cache or NoOpSettingsCache()
        self._default_site_name = default_site_name or DEFAULT_SITE_NAME

    def defaults(self) -> SiteSettings:
        return get_default_settings(self._default_site_name)

    async def get(self) -> SiteSettings:
        cached = self._cache.get()
        if cached is not None:
            return cached

        if self._store is None:
            return self.defaults()

        try:
            row = await self._store.fetch_site_settings()
        except ContentStoreError as e:
            logger.warning("Site settings unavailable, using defaults: %s", e)
            return self.defaults()

        if row is None:
            return self.defaults()

        try:
            settings = SiteSettings.model_validate(row)
        except ValidationError as e:
            logger.warning("Malformed settings row, using defaults: %s", e)
            return self.defaults()

        if not settings.site_name:
            settings = settings.model_copy(update={"site_name": self._default_site_name})

        self._cache.put(settings)
        return settings

    def invalidate(self) -> None:
        """Drop cached settings (after an admin edit)."""
        self._cache.invalidate()
