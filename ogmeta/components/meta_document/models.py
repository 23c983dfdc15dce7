"""
Meta document component models.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ogmeta.core.entities import DEFAULT_SITE_NAME, Article, SiteSettings


@dataclass(frozen=True)
class MetaDocumentConfig:
    """Static rendering choices, normally built from rules.yaml."""

    article_prefix: str = "/article/"
    default_image_path: str = "/og-default.png"
    image_type: str = "image/jpeg"
    image_width: int = 1200
    image_height: int = 630
    locale: str = "bn_BD"
    lang: str = "bn"
    twitter_site: str | None = "@banglatimes"
    default_logo_path: str = "/logo.png"
    default_favicon_path: str = "/favicon.ico"
    default_site_name: str = DEFAULT_SITE_NAME


@dataclass(frozen=True)
class RenderContext:
    """Everything one render needs; built and dropped within a request."""

    article: Article
    settings: SiteSettings
    site_base_url: str
    canonical_url: str
    request_url: str | None = None


@dataclass(frozen=True)
class MetaTag:
    """HTML meta tag representation."""

    name: str | None = None
    property: str | None = None
    content: str = ""


@dataclass(frozen=True)
class ArticleMetadata:
    """Derived, unescaped values for one article document."""

    title: str
    description: str
    article_title: str
    image_url: str
    canonical_url: str
    site_name: str
    logo_url: str
    favicon_url: str
    locale: str
    image_type: str
    image_width: int
    image_height: int
    published_time: str | None = None
    modified_time: str | None = None
    tags: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    twitter_site: str | None = None

    @property
    def document_title(self) -> str:
        return f"{self.title} | {self.site_name}"

    def to_meta_tags(self) -> list[MetaTag]:
        """Convert to the ordered list of head meta tags."""
        tags = [
            MetaTag(name="title", content=self.document_title),
            MetaTag(name="description", content=self.description),
        ]
        if self.keywords:
            tags.append(MetaTag(name="keywords", content=", ".join(self.keywords)))
        tags.append(MetaTag(name="robots", content="index, follow"))

        # Open Graph
        tags.extend(
            [
                MetaTag(property="og:type", content="article"),
                MetaTag(property="og:url", content=self.canonical_url),
                MetaTag(property="og:title", content=self.title),
                MetaTag(property="og:description", content=self.description),
                MetaTag(property="og:image", content=self.image_url),
                MetaTag(property="og:image:secure_url", content=self.image_url),
                MetaTag(property="og:image:type", content=self.image_type),
                MetaTag(property="og:image:width", content=str(self.image_width)),
                MetaTag(property="og:image:height", content=str(self.image_height)),
                MetaTag(property="og:image:alt", content=self.article_title),
                MetaTag(property="og:site_name", content=self.site_name),
                MetaTag(property="og:locale", content=self.locale),
            ]
        )
        if self.published_time:
            tags.append(MetaTag(property="article:published_time", content=self.published_time))
        if self.modified_time:
            tags.append(MetaTag(property="article:modified_time", content=self.modified_time))
        tags.extend(MetaTag(property="article:tag", content=tag) for tag in self.tags)

        # Twitter Card
        tags.extend(
            [
                MetaTag(name="twitter:card", content="summary_large_image"),
                MetaTag(name="twitter:url", content=self.canonical_url),
                MetaTag(name="twitter:title", content=self.title),
                MetaTag(name="twitter:description", content=self.description),
                MetaTag(name="twitter:image", content=self.image_url),
                MetaTag(name="twitter:image:alt", content=self.article_title),
            ]
        )
        if self.twitter_site:
            tags.append(MetaTag(name="twitter:site", content=self.twitter_site))

        return tags


@dataclass(frozen=True)
class RenderInput:
    """Input for rendering an article meta document."""

    article: Article
    settings: SiteSettings
    site_base_url: str
    request_url: str | None = None


@dataclass(frozen=True)
class RenderOutput:
    """Rendered document and the metadata it was built from."""

    html: str
    metadata: ArticleMetadata
    context: RenderContext
    warnings: list[str] = field(default_factory=list)
