"""
Tests for the edge dispatcher state machine and its meta sources.
"""

from __future__ import annotations

import asyncio
from typing import Any

import httpx
import pytest

from ogmeta.adapters.supabase_rest import SupabaseRestClient
from ogmeta.components.articles import ArticleResolver
from ogmeta.components.site_settings import SiteSettingsService
from ogmeta.edge import (
    HTML_CONTENT_TYPE,
    DirectMetaSource,
    EdgeDispatcher,
    EdgeRequest,
    OutcomeKind,
    PassReason,
    RemoteMetaSource,
    extract_article_identifier,
)

BOT_UA = "facebookexternalhit/1.1"
CHROME_UA = "Mozilla/5.0 (X11; Linux x86_64) Chrome/119.0 Safari/537.36"
ARTICLE_ID = "3f2b8c1a-9d4e-4f6a-8b7c-1e2d3f4a5b6c"


class RecordingSource:
    """Meta source returning canned HTML and recording identifiers."""

    def __init__(self, html: str | None = "<html>meta</html>") -> None:
        self.html = html
        self.calls: list[str] = []

    async def fetch(self, identifier: str, request: EdgeRequest) -> str | None:
        self.calls.append(identifier)
        return self.html


def edge_request(path: str, user_agent: str | None = BOT_UA, **query: str) -> EdgeRequest:
    return EdgeRequest(
        path=path,
        origin="https://edge.example",
        url=f"https://edge.example{path}",
        user_agent=user_agent,
        query=dict(query),
    )


@pytest.fixture
def source() -> RecordingSource:
    return RecordingSource()


# --- Identifier extraction ---


class TestExtractIdentifier:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/article/pm-visits-dhaka", "pm-visits-dhaka"),
            ("/article/pm-visits-dhaka/", "pm-visits-dhaka"),
            ("/article/pm-visits-dhaka/comments", "pm-visits-dhaka"),
            (f"/article/{ARTICLE_ID}", ARTICLE_ID),
            ("/api/og-meta/article/x", "x"),
            ("/article/ঢাকা-সফর", "ঢাকা-সফর"),
            ("/article/50%25-off", "50%25-off"),
            ("/article/", None),
            ("/category/sports", None),
        ],
    )
    def test_extract(self, path: str, expected: str | None) -> None:
        assert extract_article_identifier(path) == expected

    def test_custom_prefix(self) -> None:
        assert extract_article_identifier("/news/x", "/news/") == "x"


# --- State machine ---


class TestDispatch:
    def test_bot_on_article_is_served(self, source: RecordingSource) -> None:
        dispatcher = EdgeDispatcher(source)

        outcome = asyncio.run(dispatcher.dispatch(edge_request("/article/pm-visits-dhaka")))

        assert outcome.kind is OutcomeKind.SERVED
        assert outcome.served is True
        assert outcome.html == "<html>meta</html>"
        assert outcome.headers == {
            "Content-Type": HTML_CONTENT_TYPE,
            "Cache-Control": "public, max-age=3600, s-maxage=3600",
        }
        assert source.calls == ["pm-visits-dhaka"]

    def test_non_article_path(self, source: RecordingSource) -> None:
        outcome = asyncio.run(EdgeDispatcher(source).dispatch(edge_request("/about")))

        assert outcome.reason is PassReason.NOT_ARTICLE_PATH
        assert source.calls == []

    def test_human_passes_through(self, source: RecordingSource) -> None:
        outcome = asyncio.run(
            EdgeDispatcher(source).dispatch(edge_request("/article/x", user_agent=CHROME_UA))
        )

        assert outcome.kind is OutcomeKind.PASS_THROUGH
        assert outcome.reason is PassReason.NOT_BOT
        assert source.calls == []

    def test_missing_user_agent_passes_through(self, source: RecordingSource) -> None:
        outcome = asyncio.run(
            EdgeDispatcher(source).dispatch(edge_request("/article/x", user_agent=None))
        )
        assert outcome.reason is PassReason.NOT_BOT

    def test_no_identifier(self, source: RecordingSource) -> None:
        outcome = asyncio.run(EdgeDispatcher(source).dispatch(edge_request("/article/")))
        assert outcome.reason is PassReason.NO_IDENTIFIER

    def test_unconfigured_fails_open(self) -> None:
        outcome = asyncio.run(EdgeDispatcher(None).dispatch(edge_request("/article/x")))

        assert outcome.reason is PassReason.NOT_CONFIGURED
        assert outcome.identifier == "x"

    def test_not_found_fails_open(self) -> None:
        source = RecordingSource(html=None)
        outcome = asyncio.run(EdgeDispatcher(source).dispatch(edge_request("/article/gone")))

        assert outcome.kind is OutcomeKind.PASS_THROUGH
        assert outcome.reason is PassReason.NOT_FOUND
        assert outcome.html is None

    def test_failing_source_fails_open(self, caplog: pytest.LogCaptureFixture) -> None:
        class FailingSource:
            async def fetch(self, identifier: str, request: EdgeRequest) -> str | None:
                raise RuntimeError("renderer exploded")

        with caplog.at_level("ERROR", logger="ogmeta.edge.dispatcher"):
            outcome = asyncio.run(
                EdgeDispatcher(FailingSource()).dispatch(edge_request("/article/x"))
            )

        assert outcome.kind is OutcomeKind.PASS_THROUGH
        assert outcome.reason is PassReason.NOT_FOUND
        assert outcome.identifier == "x"
        assert "Meta source failed for 'x'" in caplog.text

    def test_force_ignored_unless_allowed(self, source: RecordingSource) -> None:
        request = edge_request("/article/x", user_agent=CHROME_UA, force="1")

        blocked = asyncio.run(EdgeDispatcher(source).dispatch(request))
        allowed = asyncio.run(EdgeDispatcher(source, allow_force=True).dispatch(request))

        assert blocked.reason is PassReason.NOT_BOT
        assert allowed.served is True

    def test_custom_signatures_and_cache_control(self, source: RecordingSource) -> None:
        dispatcher = EdgeDispatcher(source, signatures=["curl"], cache_control="no-store")

        served = asyncio.run(dispatcher.dispatch(edge_request("/article/x", user_agent="curl/8")))
        skipped = asyncio.run(dispatcher.dispatch(edge_request("/article/x")))

        assert served.headers["Cache-Control"] == "no-store"
        assert skipped.reason is PassReason.NOT_BOT


# --- Sources ---


class TestDirectMetaSource:
    def _source(self, http_client: httpx.AsyncClient, site_url: str | None) -> DirectMetaSource:
        store = SupabaseRestClient("https://project.supabase.co", "anon-key", http_client)
        return DirectMetaSource(
            resolver=ArticleResolver(store),
            settings_service=SiteSettingsService(store),
            site_url=site_url,
        )

    def test_fetch_renders_with_configured_site_url(self, http_client: httpx.AsyncClient) -> None:
        source = self._source(http_client, "https://site/")

        html = asyncio.run(source.fetch("pm-visits-dhaka", edge_request("/article/x")))

        assert html is not None
        assert '<link rel="canonical" href="https://site/article/pm-visits-dhaka">' in html

    def test_fetch_falls_back_to_request_origin(self, http_client: httpx.AsyncClient) -> None:
        source = self._source(http_client, None)

        html = asyncio.run(source.fetch(ARTICLE_ID, edge_request("/article/x")))

        assert html is not None
        assert 'href="https://edge.example/article/pm-visits-dhaka"' in html

    def test_fetch_missing_article(self, http_client: httpx.AsyncClient) -> None:
        source = self._source(http_client, "https://site")
        assert asyncio.run(source.fetch("does-not-exist", edge_request("/article/x"))) is None

    def test_build_by_id_with_site_name(self, http_client: httpx.AsyncClient) -> None:
        source = self._source(http_client, "https://site")

        output = asyncio.run(
            source.build(ARTICLE_ID, "https://site", by_id=True, site_name="Override")
        )

        assert output is not None
        assert output.metadata.site_name == "Override"

    def test_slug_and_id_render_identically(self, http_client: httpx.AsyncClient) -> None:
        source = self._source(http_client, "https://site")

        by_slug = asyncio.run(source.fetch("pm-visits-dhaka", edge_request("/article/a")))
        by_id = asyncio.run(source.fetch(ARTICLE_ID, edge_request("/article/b")))

        assert by_slug == by_id


class TestRemoteMetaSource:
    def _source(self, handler: Any, **kwargs: Any) -> RemoteMetaSource:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return RemoteMetaSource("https://renderer/functions/v1/og-meta", client, **kwargs)

    def test_passes_slug_site_url_and_name(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="<html>remote</html>")

        source = self._source(handler, site_url="https://site/", site_name="Times")
        html = asyncio.run(source.fetch("pm-visits-dhaka", edge_request("/article/x")))

        assert html == "<html>remote</html>"
        params = seen[0].url.params
        assert params["slug"] == "pm-visits-dhaka"
        assert params["site_url"] == "https://site"
        assert params["site_name"] == "Times"

    def test_site_url_defaults_to_origin(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text="ok")

        asyncio.run(self._source(handler).fetch("x", edge_request("/article/x")))

        assert seen[0].url.params["site_url"] == "https://edge.example"
        assert "site_name" not in seen[0].url.params

    def test_renderer_404_is_none(self) -> None:
        source = self._source(lambda request: httpx.Response(404, json={"error": "x"}))
        assert asyncio.run(source.fetch("x", edge_request("/article/x"))) is None

    def test_renderer_unreachable_is_none(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectTimeout("timeout", request=request)

        assert asyncio.run(self._source(handler).fetch("x", edge_request("/article/x"))) is None
