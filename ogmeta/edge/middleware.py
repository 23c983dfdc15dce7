"""
In-process adapters for ASGI hosts that also serve the SPA.

- BotMetaMiddleware: reverse-proxy style middleware wrapped around the app.
- make_on_request: pages-function style `(request, call_next)` handler for
  `app.middleware("http")`.

Both serve the meta document when the dispatcher says so and otherwise
hand the request to the wrapped application untouched.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from .dispatcher import EdgeDispatcher
from .models import EdgeOutcome, EdgeRequest

OnRequest = Callable[[Request, RequestResponseEndpoint], Awaitable[Response]]


def edge_request_from_starlette(request: Request) -> EdgeRequest:
    """Translate a Starlette request into the dispatcher's plain form."""
    origin = f"{request.url.scheme}://{request.url.netloc}"
    return EdgeRequest(
        path=request.url.path,
        origin=origin,
        url=str(request.url),
        user_agent=request.headers.get("user-agent"),
        query=dict(request.query_params),
        method=request.method,
    )


def outcome_response(outcome: EdgeOutcome) -> Response:
    """Build the HTML response for a served outcome."""
    return Response(content=outcome.html, status_code=200, headers=outcome.headers)


def make_on_request(dispatcher: EdgeDispatcher) -> OnRequest:
    """Create a `(request, call_next)` handler around a dispatcher."""

    async def on_request(request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.method not in ("GET", "HEAD"):
            return await call_next(request)

        outcome = await dispatcher.dispatch(edge_request_from_starlette(request))
        if outcome.served:
            return outcome_response(outcome)
        return await call_next(request)

    return on_request


class BotMetaMiddleware(BaseHTTPMiddleware):
    """Serve meta documents to crawlers in front of any ASGI app."""

    def __init__(self, app: ASGIApp, dispatcher: EdgeDispatcher) -> None:
        super().__init__(app, dispatch=make_on_request(dispatcher))
        self.dispatcher = dispatcher
