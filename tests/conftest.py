from __future__ import annotations

import asyncio
from collections.abc import Callable, Iterator
from typing import Any
from urllib.parse import urlparse

import httpx
import pytest

from ogmeta.app_shell.config import Settings
from ogmeta.core.entities import Article, SiteSettings
from ogmeta.rules.models import Rules

SITE_URL = "https://site"
SUPABASE_URL = "https://project.supabase.co"
ARTICLE_ID = "3f2b8c1a-9d4e-4f6a-8b7c-1e2d3f4a5b6c"


def make_article_row(**overrides: Any) -> dict[str, Any]:
    """A published article row as PostgREST returns it."""
    row: dict[str, Any] = {
        "id": ARTICLE_ID,
        "slug": "pm-visits-dhaka",
        "title": "প্রধানমন্ত্রী ঢাকা সফরে",
        "excerpt": "প্রধানমন্ত্রী আজ ঢাকায় পৌঁছেছেন।",
        "content": "<p>বিস্তারিত</p>",
        "featured_image": "https://cdn.example.com/pm.jpg",
        "publish_date": "2024-05-01T10:00:00+00:00",
        "created_at": "2024-04-30T08:00:00+00:00",
        "updated_at": "2024-05-02T09:30:00+00:00",
        "status": "published",
        "tags": ["রাজনীতি", "ঢাকা"],
        "seo_metadata": None,
        "author_id": "ignored-column",
    }
    row.update(overrides)
    return row


# --- Fake Supabase over HTTP ---


class FakeSupabase:
    """
    PostgREST stand-in served through httpx.MockTransport.

    Understands `column=eq.value` filters on the articles table and the
    settings select. Set `status_code` to make every call fail.
    """

    def __init__(self) -> None:
        self.articles: list[dict[str, Any]] = []
        self.settings: dict[str, Any] | None = {
            "site_name": "বাংলা টাইমস",
            "site_description": "সর্বশেষ খবর",
            "logo": "/logo.png",
            "favicon": None,
        }
        self.status_code = 200
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.status_code != 200:
            return httpx.Response(self.status_code, json={"message": "boom"})

        table = urlparse(str(request.url)).path.rsplit("/", 1)[-1]
        if table == "settings":
            return httpx.Response(200, json=[self.settings] if self.settings else [])

        filters = {
            key: value.removeprefix("eq.")
            for key, value in request.url.params.items()
            if value.startswith("eq.")
        }
        rows = [
            row
            for row in self.articles
            if all(str(row.get(key)) == value for key, value in filters.items())
        ]
        return httpx.Response(200, json=rows[:1])

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def article_row() -> dict[str, Any]:
    return make_article_row()


@pytest.fixture
def article(article_row: dict[str, Any]) -> Article:
    return Article.model_validate(article_row)


@pytest.fixture
def site_settings() -> SiteSettings:
    return SiteSettings(site_name="বাংলা টাইমস", logo="/logo.png")


@pytest.fixture
def fake_supabase(article_row: dict[str, Any]) -> FakeSupabase:
    fake = FakeSupabase()
    fake.articles.append(article_row)
    return fake


@pytest.fixture
def http_client(fake_supabase: FakeSupabase) -> Iterator[httpx.AsyncClient]:
    client = httpx.AsyncClient(transport=fake_supabase.transport())
    yield client
    asyncio.run(client.aclose())


@pytest.fixture
def settings() -> Settings:
    return Settings(
        environ={
            "SUPABASE_URL": SUPABASE_URL,
            "SUPABASE_ANON_KEY": "anon-key",
            "SITE_URL": SITE_URL,
        }
    )


@pytest.fixture
def unconfigured_settings() -> Settings:
    return Settings(environ={})


@pytest.fixture
def rules() -> Rules:
    return Rules()


@pytest.fixture
def make_row() -> Callable[..., dict[str, Any]]:
    """Factory for article rows with overridden columns."""
    return make_article_row
