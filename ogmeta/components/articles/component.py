"""
Articles component - published article resolution.

Invariants:
- I1: Only status=published articles are returned
- I2: Slug lookup always runs before id lookup
- I3: Id lookup only for UUID-shaped identifiers
- I4: Store errors are reported as not found, never raised
"""

from __future__ import annotations

from ._impl import ArticleResolver, normalize_identifier
from .models import LookupKind, ResolveError, ResolveInput, ResolveOutput
from .ports import ArticleStorePort

NOT_FOUND = ResolveError(code="not_found", message="Article not found")
MISSING_IDENTIFIER = ResolveError(
    code="missing_identifier", message="Article slug or id is required"
)


async def run(
    inp: ResolveInput,
    *,
    store: ArticleStorePort,
) -> ResolveOutput:
    """
    Resolve an article from a slug or id.

    Args:
        inp: Identifier and optional lookup kind.
        store: Article store port.

    Returns:
        ResolveOutput with the article, or a not_found error.
    """
    if not normalize_identifier(inp.identifier):
        return ResolveOutput(article=None, errors=[MISSING_IDENTIFIER], success=False)

    resolver = ArticleResolver(store)

    matched_by: LookupKind | None
    if inp.kind == "id":
        article = await resolver.resolve_by_id(inp.identifier)
        matched_by = "id" if article else None
    else:
        article, matched_by = await resolver.resolve_with_kind(inp.identifier)

    if article is None:
        return ResolveOutput(article=None, errors=[NOT_FOUND], success=False)

    return ResolveOutput(article=article, matched_by=matched_by)
