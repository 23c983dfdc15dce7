"""
Meta sources - where the dispatcher gets a rendered document from.

- DirectMetaSource: resolves, loads settings and renders in process.
- RemoteMetaSource: asks a central renderer endpoint over HTTP.

Both return None on any miss so the dispatcher can fail open.
"""

from __future__ import annotations

import logging
from typing import Protocol

import httpx

from ogmeta.components.articles import ArticleResolver
from ogmeta.components.meta_document import MetaDocumentConfig, RenderInput, RenderOutput
from ogmeta.components.meta_document import run as run_render
from ogmeta.components.site_settings import SiteSettingsService

from .models import EdgeRequest

logger = logging.getLogger(__name__)


class MetaSource(Protocol):
    """Produces the meta document for an identifier, or None."""

    async def fetch(self, identifier: str, request: EdgeRequest) -> str | None:
        ...


class DirectMetaSource:
    """Resolve + render against the content store from this process."""

    def __init__(
        self,
        resolver: ArticleResolver,
        settings_service: SiteSettingsService,
        config: MetaDocumentConfig | None = None,
        site_url: str | None = None,
    ) -> None:
        self._resolver = resolver
        self._settings_service = settings_service
        self._config = config or MetaDocumentConfig()
        self._site_url = site_url.rstrip("/") if site_url else None

    def site_base_url(self, request_origin: str) -> str:
        return self._site_url or request_origin.rstrip("/")

    async def build(
        self,
        identifier: str,
        site_base_url: str,
        request_url: str | None = None,
        by_id: bool = False,
        site_name: str | None = None,
    ) -> RenderOutput | None:
        """Resolve and render; None when the article cannot be resolved."""
        if by_id:
            article = await self._resolver.resolve_by_id(identifier)
        else:
            article = await self._resolver.resolve(identifier)
        if article is None:
            return None

        settings = await self._settings_service.get()
        if site_name:
            settings = settings.model_copy(update={"site_name": site_name})

        return run_render(
            RenderInput(
                article=article,
                settings=settings,
                site_base_url=site_base_url,
                request_url=request_url,
            ),
            config=self._config,
            fallback_slug=identifier,
        )

    async def fetch(self, identifier: str, request: EdgeRequest) -> str | None:
        output = await self.build(
            identifier,
            self.site_base_url(request.origin),
            request_url=request.url,
        )
        return output.html if output else None


class RemoteMetaSource:
    """Delegate resolution and rendering to a central renderer endpoint."""

    def __init__(
        self,
        renderer_url: str,
        client: httpx.AsyncClient,
        site_url: str | None = None,
        site_name: str | None = None,
    ) -> None:
        self._renderer_url = renderer_url
        self._client = client
        self._site_url = site_url.rstrip("/") if site_url else None
        self._site_name = site_name

    async def fetch(self, identifier: str, request: EdgeRequest) -> str | None:
        params = {
            "slug": identifier,
            "site_url": self._site_url or request.origin.rstrip("/"),
        }
        if self._site_name:
            params["site_name"] = self._site_name

        try:
            response = await self._client.get(self._renderer_url, params=params)
        except httpx.HTTPError as e:
            logger.error("Central renderer request failed for %r: %s", identifier, e)
            return None

        if not response.is_success:
            logger.warning(
                "Central renderer returned %s for %r", response.status_code, identifier
            )
            return None
        return response.text
