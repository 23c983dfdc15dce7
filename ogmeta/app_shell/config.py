"""
Environment configuration and wiring for every adapter.

Variable names differ per hosting platform; each setting accepts the
platform-specific fallbacks used by the deployments.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Literal

import httpx

from ogmeta.adapters.clock import SystemClock
from ogmeta.adapters.settings_cache import TTLSettingsCache
from ogmeta.adapters.supabase_rest import SupabaseRestClient
from ogmeta.components.articles import ArticleResolver
from ogmeta.components.meta_document import MetaDocumentConfig
from ogmeta.components.site_settings import SettingsCachePort, SiteSettingsService
from ogmeta.core.entities import DEFAULT_SITE_NAME
from ogmeta.core.errors import ConfigurationError
from ogmeta.edge import DirectMetaSource, EdgeDispatcher, MetaSource, RemoteMetaSource
from ogmeta.rules.loader import load_rules
from ogmeta.rules.models import Rules

logger = logging.getLogger(__name__)

SourceMode = Literal["direct", "remote"]


def _first(env: Mapping[str, str], *names: str) -> str | None:
    for name in names:
        value = env.get(name)
        if value:
            return value
    return None


class Settings:
    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        env = os.environ if environ is None else environ
        self.supabase_url = _first(env, "SUPABASE_URL", "VITE_SUPABASE_URL")
        self.supabase_key = _first(
            env,
            "SUPABASE_ANON_KEY",
            "VITE_SUPABASE_PUBLISHABLE_KEY",
            "SUPABASE_SERVICE_ROLE_KEY",
        )
        self.site_url = _first(env, "SITE_URL", "VITE_SITE_URL")
        self.site_name = _first(env, "SITE_NAME") or DEFAULT_SITE_NAME
        self.origin_url = _first(env, "ORIGIN_URL")
        self.renderer_url = _first(env, "OG_RENDERER_URL") or (
            f"{self.supabase_url.rstrip('/')}/functions/v1/og-meta" if self.supabase_url else None
        )
        self.rules_path = Path(env.get("OGMETA_RULES_PATH", "rules.yaml"))

    @property
    def is_store_configured(self) -> bool:
        return bool(self.supabase_url and self.supabase_key)

    def missing_store_config(self) -> list[str]:
        missing = []
        if not self.supabase_url:
            missing.append("SUPABASE_URL")
        if not self.supabase_key:
            missing.append("SUPABASE_ANON_KEY")
        return missing

    def require_store(self) -> tuple[str, str]:
        """Return (url, key) or raise ConfigurationError."""
        if not self.supabase_url or not self.supabase_key:
            raise ConfigurationError(self.missing_store_config())
        return self.supabase_url, self.supabase_key


def load_rules_or_defaults(path: Path) -> Rules:
    """Load rules.yaml; a missing file means built-in defaults."""
    if not path.exists():
        logger.info("Rules file %s not found; using defaults", path)
        return Rules()
    return load_rules(path)


def validate_store_config(settings: Settings) -> None:
    """Log missing store configuration at startup. Never exits."""
    missing = settings.missing_store_config()
    if missing:
        logger.error(
            "Missing content store configuration: %s. Meta rendering is disabled.",
            ", ".join(missing),
        )


def build_meta_config(rules: Rules, settings: Settings) -> MetaDocumentConfig:
    return MetaDocumentConfig(
        article_prefix=rules.routing.article_prefix,
        default_image_path=rules.images.default_path,
        image_type=rules.images.mime_type,
        image_width=rules.images.width,
        image_height=rules.images.height,
        locale=rules.branding.locale,
        lang=rules.branding.lang,
        twitter_site=rules.branding.twitter_site,
        default_logo_path=rules.branding.default_logo_path,
        default_favicon_path=rules.branding.default_favicon_path,
        default_site_name=settings.site_name,
    )


def create_settings_cache(rules: Rules) -> TTLSettingsCache:
    return TTLSettingsCache(rules.caching.settings_ttl_seconds, SystemClock())


def create_store(settings: Settings, client: httpx.AsyncClient) -> SupabaseRestClient:
    url, key = settings.require_store()
    return SupabaseRestClient(url, key, client)


def create_direct_source(
    settings: Settings,
    rules: Rules,
    client: httpx.AsyncClient,
    cache: SettingsCachePort | None = None,
) -> DirectMetaSource:
    store = create_store(settings, client)
    return DirectMetaSource(
        resolver=ArticleResolver(store),
        settings_service=SiteSettingsService(
            store, cache=cache, default_site_name=settings.site_name
        ),
        config=build_meta_config(rules, settings),
        site_url=settings.site_url,
    )


def create_meta_source(
    settings: Settings,
    rules: Rules,
    client: httpx.AsyncClient,
    mode: SourceMode = "direct",
    cache: SettingsCachePort | None = None,
) -> MetaSource | None:
    """Build the meta source for an adapter; None when unconfigured."""
    if mode == "remote":
        if not settings.renderer_url:
            logger.error("No central renderer URL (OG_RENDERER_URL or SUPABASE_URL) configured")
            return None
        return RemoteMetaSource(
            settings.renderer_url,
            client,
            site_url=settings.site_url,
            site_name=settings.site_name,
        )

    if not settings.is_store_configured:
        validate_store_config(settings)
        return None
    return create_direct_source(settings, rules, client, cache=cache)


def create_edge_dispatcher(
    settings: Settings,
    rules: Rules,
    client: httpx.AsyncClient,
    mode: SourceMode = "direct",
    cache: SettingsCachePort | None = None,
    allow_force: bool = False,
) -> EdgeDispatcher:
    return EdgeDispatcher(
        source=create_meta_source(settings, rules, client, mode=mode, cache=cache),
        signatures=rules.bots.signatures,
        article_prefix=rules.routing.article_prefix,
        cache_control=rules.caching.cache_control,
        allow_force=allow_force,
        force_param=rules.bots.force_param,
    )
