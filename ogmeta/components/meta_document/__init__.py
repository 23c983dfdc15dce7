"""
Meta document component - Open Graph / Twitter / JSON-LD document renderer.
"""

from ._impl import (
    DESCRIPTION_MAX_LENGTH,
    FALLBACK_TITLE,
    MAX_ARTICLE_TAGS,
    build_article_metadata,
    build_canonical_url,
    create_render_context,
    display_description,
    display_image,
    display_title,
    ensure_absolute_url,
    escape_html,
    render,
    render_json_ld,
    render_meta_document,
    truncate_description,
)
from .component import run
from .models import (
    ArticleMetadata,
    MetaDocumentConfig,
    MetaTag,
    RenderContext,
    RenderInput,
    RenderOutput,
)

__all__ = [
    # Entry points
    "run",
    "render",
    # Models
    "ArticleMetadata",
    "MetaDocumentConfig",
    "MetaTag",
    "RenderContext",
    "RenderInput",
    "RenderOutput",
    # Functions
    "build_article_metadata",
    "build_canonical_url",
    "create_render_context",
    "display_description",
    "display_image",
    "display_title",
    "ensure_absolute_url",
    "escape_html",
    "render_json_ld",
    "render_meta_document",
    "truncate_description",
    # Constants
    "DESCRIPTION_MAX_LENGTH",
    "FALLBACK_TITLE",
    "MAX_ARTICLE_TAGS",
]
