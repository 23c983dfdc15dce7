"""
Meta document component - crawler-facing article HTML.

Invariants:
- I1: <title> and og:image are never empty
- I2: Description is at most 160 codepoints
- I3: Every interpolated value is HTML-escaped
- I4: Canonical URL is derived from the resolved slug
- I5: Same inputs produce byte-identical output
"""

from __future__ import annotations

from ._impl import build_article_metadata, create_render_context, render_meta_document
from .models import MetaDocumentConfig, RenderInput, RenderOutput


def run(
    inp: RenderInput,
    *,
    config: MetaDocumentConfig | None = None,
    fallback_slug: str | None = None,
) -> RenderOutput:
    """
    Render the meta document for a resolved article.

    Args:
        inp: Article, settings and site base URL.
        config: Rendering configuration (rules.yaml values).
        fallback_slug: Identifier used when the article row has no slug.

    Returns:
        RenderOutput with the HTML and the derived metadata.
    """
    config = config or MetaDocumentConfig()
    ctx = create_render_context(
        inp.article,
        inp.settings,
        inp.site_base_url,
        request_url=inp.request_url,
        config=config,
        fallback_slug=fallback_slug,
    )
    metadata = build_article_metadata(ctx, config)

    warnings: list[str] = []
    if not inp.article.featured_image:
        warnings.append("No featured image; using default OG image")
    if not inp.article.slug:
        warnings.append("Article has no slug; canonical URL built from identifier")

    return RenderOutput(
        html=render_meta_document(metadata, lang=config.lang),
        metadata=metadata,
        context=ctx,
        warnings=warnings,
    )
