"""
Environment-driven construction of the edge adapters.

- create_worker_from_env: CDN-worker proxy in front of ORIGIN_URL.
- install_bot_meta: add the crawler middleware to an existing SPA host.

`mode="remote"` gives the delegating variant: the adapter asks the
central renderer (OG_RENDERER_URL) instead of querying the store.
"""

from __future__ import annotations

import httpx
from fastapi import FastAPI

from ogmeta.core.errors import ConfigurationError
from ogmeta.edge import BotMetaMiddleware, EdgeDispatcher, create_worker_app
from ogmeta.rules.models import Rules

from .config import (
    Settings,
    SourceMode,
    create_edge_dispatcher,
    create_settings_cache,
    load_rules_or_defaults,
)


def create_worker_from_env(
    settings: Settings | None = None,
    rules: Rules | None = None,
    mode: SourceMode = "direct",
    client: httpx.AsyncClient | None = None,
) -> FastAPI:
    settings = settings or Settings()
    rules = rules or load_rules_or_defaults(settings.rules_path)
    if not settings.origin_url:
        raise ConfigurationError(["ORIGIN_URL"])

    owns_client = client is None
    if client is None:
        client = httpx.AsyncClient(timeout=rules.http.timeout_seconds)

    dispatcher = create_edge_dispatcher(
        settings, rules, client, mode=mode, cache=create_settings_cache(rules)
    )
    return create_worker_app(dispatcher, settings.origin_url, client, close_client=owns_client)


def install_bot_meta(
    app: FastAPI,
    client: httpx.AsyncClient,
    settings: Settings | None = None,
    rules: Rules | None = None,
    mode: SourceMode = "direct",
) -> EdgeDispatcher:
    """Wrap `app` with BotMetaMiddleware and return the dispatcher it uses."""
    settings = settings or Settings()
    rules = rules or load_rules_or_defaults(settings.rules_path)
    dispatcher = create_edge_dispatcher(
        settings, rules, client, mode=mode, cache=create_settings_cache(rules)
    )
    app.add_middleware(BotMetaMiddleware, dispatcher=dispatcher)
    return dispatcher
