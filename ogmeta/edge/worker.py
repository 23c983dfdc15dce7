"""
CDN-worker style adapter: a standalone proxy in front of the SPA origin.

Crawlers on article paths get the meta document; every other request is
forwarded to the origin unchanged (pass-through = fetch from origin).
"""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.responses import Response

from .dispatcher import EdgeDispatcher
from .middleware import edge_request_from_starlette, outcome_response

logger = logging.getLogger(__name__)

# Headers that describe one hop, not the resource; never forwarded.
HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailers",
        "transfer-encoding",
        "upgrade",
        "host",
        "content-length",
        "content-encoding",
    }
)


def _forwardable(headers: httpx.Headers | dict[str, str]) -> dict[str, str]:
    return {k: v for k, v in headers.items() if k.lower() not in HOP_BY_HOP_HEADERS}


async def forward_to_origin(
    request: Request,
    origin_url: str,
    client: httpx.AsyncClient,
) -> Response:
    """Replay the request against the origin and relay its answer."""
    # Forward the path as received so escapes are not decoded a second time.
    raw_path = request.scope.get("raw_path")
    path = raw_path.decode("latin-1").split("?", 1)[0] if raw_path else request.url.path
    target = f"{origin_url.rstrip('/')}{path}"
    body = await request.body()
    try:
        upstream = await client.request(
            request.method,
            target,
            params=list(request.query_params.multi_items()),
            headers=_forwardable(dict(request.headers)),
            content=body or None,
        )
    except httpx.HTTPError as e:
        logger.error("Origin request to %s failed: %s", target, e)
        return Response(content="Bad Gateway", status_code=502, media_type="text/plain")

    return Response(
        content=upstream.content,
        status_code=upstream.status_code,
        headers=_forwardable(upstream.headers),
    )


def create_worker_app(
    dispatcher: EdgeDispatcher,
    origin_url: str,
    client: httpx.AsyncClient,
    close_client: bool = False,
) -> FastAPI:
    """
    Create the proxy app.

    Args:
        dispatcher: Shared edge dispatcher
        origin_url: Base URL of the SPA origin
        client: HTTP client for origin requests
        close_client: Close the client on shutdown

    Returns:
        FastAPI application
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        try:
            yield
        finally:
            if close_client:
                await client.aclose()

    app = FastAPI(title="ogmeta worker", lifespan=lifespan, docs_url=None, redoc_url=None)
    app.state.origin_client = client

    @app.api_route(
        "/{path:path}",
        methods=["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        include_in_schema=False,
    )
    async def handle(request: Request, path: str) -> Response:
        if request.method in ("GET", "HEAD"):
            outcome = await dispatcher.dispatch(edge_request_from_starlette(request))
            if outcome.served:
                return outcome_response(outcome)

        return await forward_to_origin(request, origin_url, request.app.state.origin_client)

    return app
