"""
Meta document endpoints.

- /api/og-meta: serverless function variant. Crawlers (or forced requests)
  get the document; humans are redirected to the article page.
- /functions/v1/og-meta: central renderer called by delegating adapters.
  No bot check; the caller already made that decision.

Error contract (JSON `{"error": ...}`):
- 400: no slug or id could be extracted
- 404: article missing, unpublished, or the store failed
- 500: content store credentials are not configured
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse, Response

from ogmeta.api.deps import get_bot_rules, get_meta_source, get_rules, get_settings
from ogmeta.app_shell.config import Settings
from ogmeta.components.bots import BotRulesPort, ClassifyInput
from ogmeta.components.bots import run as run_classify
from ogmeta.components.meta_document import RenderOutput
from ogmeta.edge import HTML_CONTENT_TYPE, DirectMetaSource, extract_article_identifier
from ogmeta.rules.models import Rules

logger = logging.getLogger(__name__)

router = APIRouter()

MISSING_IDENTIFIER_ERROR = "Article slug or id is required"
NOT_FOUND_ERROR = "Article not found"
NOT_CONFIGURED_ERROR = "Supabase not configured"


# --- Helpers ---


def _origin(request: Request) -> str:
    return f"{request.url.scheme}://{request.url.netloc}"


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse(content={"error": message}, status_code=status_code)


def _not_configured(settings: Settings) -> JSONResponse:
    logger.error(
        "Missing content store configuration: %s",
        ", ".join(settings.missing_store_config()),
    )
    return _error(NOT_CONFIGURED_ERROR, 500)


def _html(output: RenderOutput, rules: Rules) -> Response:
    return Response(
        content=output.html,
        status_code=200,
        headers={
            "Content-Type": HTML_CONTENT_TYPE,
            "Cache-Control": rules.caching.cache_control,
        },
    )


# --- Endpoints ---


@router.get(
    "/api/og-meta",
    summary="Serverless OG meta",
    description="Meta document for crawlers; humans are redirected to the article.",
)
@router.get("/api/og-meta/{rest:path}", include_in_schema=False)
async def og_meta(
    request: Request,
    slug: str | None = None,
    article_id: str | None = Query(None, alias="id"),
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
    bot_rules: BotRulesPort = Depends(get_bot_rules),
    source: DirectMetaSource | None = Depends(get_meta_source),
) -> Response:
    """
    Serve the meta document for one article.

    The identifier comes from `slug`, then `id`, then an `/article/<x>`
    segment in the path (rewrites keep the original path).
    """
    prefix = rules.routing.article_prefix
    identifier = slug or article_id or extract_article_identifier(request.url.path, prefix)

    forced = rules.bots.force_param in request.query_params
    classification = run_classify(
        ClassifyInput(user_agent=request.headers.get("user-agent"), forced=forced),
        rules=bot_rules,
    )

    if not classification.wants_meta:
        target = f"{prefix}{identifier}" if identifier else "/"
        return RedirectResponse(url=f"{_origin(request)}{target}", status_code=302)

    if not identifier:
        return _error(MISSING_IDENTIFIER_ERROR, 400)

    if source is None:
        return _not_configured(settings)

    output = await source.build(
        identifier,
        source.site_base_url(_origin(request)),
        request_url=str(request.url),
    )
    if output is None:
        logger.warning("Article %r not found for meta request", identifier)
        return _error(NOT_FOUND_ERROR, 404)

    logger.info(
        "Serving meta document for %r to %s",
        identifier,
        classification.signature or "forced request",
    )
    return _html(output, rules)


@router.get(
    "/functions/v1/og-meta",
    summary="Central meta renderer",
    description="Render the meta document by slug or id for delegating edge adapters.",
)
async def central_renderer(
    request: Request,
    slug: str | None = None,
    article_id: str | None = Query(None, alias="id"),
    site_url: str | None = None,
    site_name: str | None = None,
    settings: Settings = Depends(get_settings),
    rules: Rules = Depends(get_rules),
    source: DirectMetaSource | None = Depends(get_meta_source),
) -> Response:
    if not slug and not article_id:
        return _error(MISSING_IDENTIFIER_ERROR, 400)

    if source is None:
        return _not_configured(settings)

    base_url = site_url.rstrip("/") if site_url else source.site_base_url(_origin(request))
    output = await source.build(
        slug or article_id or "",
        base_url,
        request_url=str(request.url),
        by_id=not slug,
        site_name=site_name,
    )
    if output is None:
        logger.warning("Article %r not found for central render", slug or article_id)
        return _error(NOT_FOUND_ERROR, 404)

    return _html(output, rules)
