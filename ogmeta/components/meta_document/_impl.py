"""
Meta document renderer - crawler-facing HTML for one article.

Builds a self-contained HTML document with Open Graph, Twitter Card and
NewsArticle JSON-LD metadata, plus an immediate refresh to the canonical
article URL so stray human visitors land on the real page.

Key behaviors:
- Title: SEO override > article title > "Article"
- Description: SEO override > excerpt > title > "", max 160 codepoints
- Image: featured image (made absolute) > {base}/og-default.png
- Canonical URL: {base}/article/{slug}, never the inbound path
- Every interpolated value is HTML-escaped
- Pure function: same inputs always produce byte-identical output
"""

from __future__ import annotations

import json
from dataclasses import replace

from ogmeta.core.entities import Article, SiteSettings

from .models import ArticleMetadata, MetaDocumentConfig, MetaTag, RenderContext

DESCRIPTION_MAX_LENGTH = 160
ELLIPSIS = "..."
MAX_ARTICLE_TAGS = 5
FALLBACK_TITLE = "Article"


# --- Escaping ---


def escape_html(text: str) -> str:
    """Escape HTML special characters."""
    return (
        str(text)
        .replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
        .replace("'", "&#039;")
    )


# --- URL helpers ---


def ensure_absolute_url(url: str | None, site_url: str, fallback: str) -> str:
    """Make a stored image/icon path absolute, or return the fallback."""
    if not url or not url.strip():
        return fallback
    url = url.strip()
    if url.startswith(("http://", "https://")):
        return url
    if url.startswith("//"):
        return f"https:{url}"
    separator = "" if url.startswith("/") else "/"
    return f"{site_url}{separator}{url}"


def build_canonical_url(site_base_url: str, slug: str, prefix: str = "/article/") -> str:
    """Build the canonical article URL from the resolved slug."""
    base = site_base_url.rstrip("/")
    if not prefix.startswith("/"):
        prefix = "/" + prefix
    if not prefix.endswith("/"):
        prefix = prefix + "/"
    return f"{base}{prefix}{slug}"


# --- Derived values ---


def truncate_description(text: str, max_length: int = DESCRIPTION_MAX_LENGTH) -> str:
    """
    Truncate to at most `max_length` codepoints.

    Longer text keeps its first `max_length - 3` codepoints followed by
    "...". Python strings index by codepoint, so Bengali text is never cut
    inside a character.
    """
    if len(text) <= max_length:
        return text
    return text[: max_length - len(ELLIPSIS)] + ELLIPSIS


def display_title(article: Article) -> str:
    seo = article.seo_metadata
    if seo and seo.title:
        return seo.title
    return article.title or FALLBACK_TITLE


def display_description(article: Article) -> str:
    seo = article.seo_metadata
    if seo and seo.description:
        description = seo.description
    else:
        description = article.excerpt or article.title or ""
    return truncate_description(description)


def display_image(article: Article, site_base_url: str, config: MetaDocumentConfig) -> str:
    default_image = f"{site_base_url}{config.default_image_path}"
    return ensure_absolute_url(article.featured_image, site_base_url, default_image)


def build_article_metadata(
    ctx: RenderContext,
    config: MetaDocumentConfig | None = None,
) -> ArticleMetadata:
    """Derive every value the document needs, unescaped."""
    config = config or MetaDocumentConfig()
    article = ctx.article
    settings = ctx.settings
    base = ctx.site_base_url.rstrip("/")

    seo = article.seo_metadata
    keywords = tuple(k for k in (seo.keywords if seo else []) if k)

    return ArticleMetadata(
        title=display_title(article),
        description=display_description(article),
        article_title=article.title or FALLBACK_TITLE,
        image_url=display_image(article, base, config),
        canonical_url=ctx.canonical_url,
        site_name=settings.site_name or config.default_site_name,
        logo_url=ensure_absolute_url(settings.logo, base, f"{base}{config.default_logo_path}"),
        favicon_url=ensure_absolute_url(
            settings.favicon, base, f"{base}{config.default_favicon_path}"
        ),
        locale=config.locale,
        image_type=config.image_type,
        image_width=config.image_width,
        image_height=config.image_height,
        published_time=article.publish_date or article.created_at,
        modified_time=article.updated_at,
        tags=tuple(article.tags[:MAX_ARTICLE_TAGS]),
        keywords=keywords,
        twitter_site=config.twitter_site,
    )


# --- HTML Rendering ---


def render_meta_tag_html(tag: MetaTag) -> str:
    content = escape_html(tag.content)
    if tag.property:
        return f'<meta property="{escape_html(tag.property)}" content="{content}">'
    return f'<meta name="{escape_html(tag.name or "")}" content="{content}">'


def render_json_ld(metadata: ArticleMetadata) -> str:
    """
    Render the NewsArticle JSON-LD payload.

    Values are HTML-escaped, then JSON-encoded, so embedded quotes stay
    valid JSON and nothing can close the script element early.
    """
    published = metadata.published_time or ""
    data = {
        "@context": "https://schema.org",
        "@type": "NewsArticle",
        "headline": escape_html(metadata.title),
        "description": escape_html(metadata.description),
        "image": [escape_html(metadata.image_url)],
        "datePublished": escape_html(published),
        "dateModified": escape_html(metadata.modified_time or published),
        "publisher": {
            "@type": "Organization",
            "name": escape_html(metadata.site_name),
            "logo": {
                "@type": "ImageObject",
                "url": escape_html(metadata.logo_url),
            },
        },
        "mainEntityOfPage": {
            "@type": "WebPage",
            "@id": escape_html(metadata.canonical_url),
        },
    }
    return json.dumps(data, ensure_ascii=False, indent=2)


def render_meta_document(
    metadata: ArticleMetadata,
    lang: str = "bn",
) -> str:
    """Render the complete crawler document."""
    canonical = escape_html(metadata.canonical_url)
    image = escape_html(metadata.image_url)
    alt = escape_html(metadata.article_title)
    favicon = escape_html(metadata.favicon_url)
    size = f'width="{metadata.image_width}" height="{metadata.image_height}"'

    head_parts = [
        '<meta charset="UTF-8">',
        '<meta name="viewport" content="width=device-width, initial-scale=1.0">',
        f'<link rel="icon" type="image/x-icon" href="{favicon}">',
        f'<link rel="shortcut icon" href="{favicon}">',
        f'<link rel="apple-touch-icon" href="{escape_html(metadata.logo_url)}">',
        f"<title>{escape_html(metadata.document_title)}</title>",
    ]
    head_parts.extend(render_meta_tag_html(tag) for tag in metadata.to_meta_tags())
    head_parts.extend(
        [
            f'<meta http-equiv="refresh" content="0;url={canonical}">',
            f'<link rel="canonical" href="{canonical}">',
            f'<script type="application/ld+json">\n{render_json_ld(metadata)}\n</script>',
        ]
    )
    head_html = "\n    ".join(head_parts)

    return f"""<!DOCTYPE html>
<html lang="{escape_html(lang)}">
<head>
    {head_html}
</head>
<body>
    <article>
        <h1>{alt}</h1>
        <p>{escape_html(metadata.description)}</p>
        <img src="{image}" alt="{alt}" {size}>
        <p>Redirecting to <a href="{canonical}">{canonical}</a>...</p>
    </article>
</body>
</html>"""


# --- Entry helpers ---


def create_render_context(
    article: Article,
    settings: SiteSettings,
    site_base_url: str,
    request_url: str | None = None,
    config: MetaDocumentConfig | None = None,
    fallback_slug: str | None = None,
) -> RenderContext:
    """Build a render context, deriving the canonical URL from the slug."""
    config = config or MetaDocumentConfig()
    base = site_base_url.rstrip("/")
    slug = article.slug or fallback_slug or article.id
    return RenderContext(
        article=article,
        settings=settings,
        site_base_url=base,
        canonical_url=build_canonical_url(base, slug, config.article_prefix),
        request_url=request_url,
    )


def render(
    article: Article,
    settings: SiteSettings,
    site_base_url: str,
    canonical_url: str | None = None,
    config: MetaDocumentConfig | None = None,
) -> str:
    """
    Render the meta document for one published article.

    Args:
        article: Resolved article
        settings: Site branding settings
        site_base_url: Absolute public site URL (no trailing slash needed)
        canonical_url: Canonical article URL; derived from the slug if omitted
        config: Rendering configuration

    Returns:
        Complete HTML document
    """
    config = config or MetaDocumentConfig()
    ctx = create_render_context(article, settings, site_base_url, config=config)
    if canonical_url:
        ctx = replace(ctx, canonical_url=canonical_url)
    metadata = build_article_metadata(ctx, config)
    return render_meta_document(metadata, lang=config.lang)
