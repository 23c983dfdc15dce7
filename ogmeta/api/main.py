import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Any

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ogmeta.api.deps import load_default_rules, load_settings
from ogmeta.app_shell.config import Settings, create_settings_cache, validate_store_config
from ogmeta.components.site_settings import SettingsCachePort
from ogmeta.rules.models import Rules

logger = logging.getLogger(__name__)


def create_app(
    settings: Settings | None = None,
    rules: Rules | None = None,
    http_client: httpx.AsyncClient | None = None,
    settings_cache: SettingsCachePort | None = None,
) -> FastAPI:
    """
    Create the meta rendering API.

    Args:
        settings: Environment settings (read from os.environ if omitted)
        rules: Rendering rules (loaded from rules.yaml if omitted)
        http_client: Client for content store calls; created per lifespan if omitted
        settings_cache: Site settings cache (TTL from rules if omitted)
    """
    settings = settings or load_settings()
    rules = rules or load_default_rules()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        """Application lifespan handler for startup/shutdown."""
        validate_store_config(settings)
        if http_client is None:
            app.state.http_client = httpx.AsyncClient(timeout=rules.http.timeout_seconds)
            try:
                yield
            finally:
                await app.state.http_client.aclose()
        else:
            yield

    app = FastAPI(
        title="ogmeta",
        version="0.1.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url=None,
    )
    app.state.settings = settings
    app.state.rules = rules
    app.state.http_client = http_client
    app.state.settings_cache = settings_cache or create_settings_cache(rules)

    # --- Routers ---
    from ogmeta.api.routes import og_meta

    app.include_router(og_meta.router, tags=["OG Meta"])

    # The central renderer is fetched cross-origin by edge functions.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["authorization", "x-client-info", "apikey", "content-type"],
    )

    @app.get("/health")
    def health_check() -> dict[str, Any]:
        """Health check endpoint."""
        return {"status": "ok", "service": "ogmeta"}

    return app


app = create_app()
