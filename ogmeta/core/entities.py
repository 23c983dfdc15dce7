"""
Read-only entities mirrored from the content store.

Rows arrive as PostgREST JSON; unknown columns are ignored so schema growth
on the CMS side never breaks rendering. Timestamps stay as the strings the
store returned, which keeps rendered output byte-stable.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

ArticleStatus = Literal["draft", "published", "archived"]

DEFAULT_SITE_NAME = "বাংলা টাইমস"


def _text_or_none(value: object) -> str | None:
    return value if isinstance(value, str) else None


def _string_list(value: object) -> list[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


class SeoMetadata(BaseModel):
    """Per-article SEO overrides edited in the admin panel.

    The blob is free-form jsonb; values of the wrong shape are dropped so
    rendering falls back to the article's own fields.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    description: str | None = None
    keywords: list[str] = Field(default_factory=list)

    @field_validator("title", "description", mode="before")
    @classmethod
    def _non_text_override(cls, value: object) -> object:
        return _text_or_none(value)

    @field_validator("keywords", mode="before")
    @classmethod
    def _keyword_list(cls, value: object) -> object:
        return _string_list(value)


class Article(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    slug: str = ""
    title: str | None = None
    excerpt: str | None = None
    content: str | None = None
    featured_image: str | None = None
    publish_date: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    status: ArticleStatus = "draft"
    tags: list[str] = Field(default_factory=list)
    seo_metadata: SeoMetadata | None = None

    @field_validator("slug", mode="before")
    @classmethod
    def _non_text_slug(cls, value: object) -> object:
        return value if isinstance(value, str) else ""

    @field_validator(
        "title",
        "excerpt",
        "content",
        "featured_image",
        "publish_date",
        "created_at",
        "updated_at",
        mode="before",
    )
    @classmethod
    def _non_text_optional(cls, value: object) -> object:
        # Optional display fields degrade to their fallbacks, never fail the row.
        return _text_or_none(value)

    @field_validator("tags", mode="before")
    @classmethod
    def _tag_list(cls, value: object) -> object:
        return _string_list(value)

    @field_validator("seo_metadata", mode="before")
    @classmethod
    def _non_object_seo(cls, value: object) -> object:
        # The column is jsonb; anything but an object carries no overrides.
        return value if isinstance(value, dict) else None

    @property
    def is_published(self) -> bool:
        return self.status == "published"


class SiteSettings(BaseModel):
    """Singleton branding row (settings table)."""

    model_config = ConfigDict(extra="ignore")

    site_name: str | None = None
    site_description: str | None = None
    logo: str | None = None
    favicon: str | None = None
