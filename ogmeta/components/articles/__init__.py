"""
Articles component - published article resolution by slug or id.
"""

from ._impl import (
    UUID_PATTERN,
    ArticleResolver,
    normalize_identifier,
    is_uuid,
)
from .component import MISSING_IDENTIFIER, NOT_FOUND, run
from .models import ResolveError, ResolveInput, ResolveOutput
from .ports import ArticleStorePort

__all__ = [
    # Entry point
    "run",
    # Service
    "ArticleResolver",
    # Helpers
    "UUID_PATTERN",
    "normalize_identifier",
    "is_uuid",
    # Models
    "ResolveError",
    "ResolveInput",
    "ResolveOutput",
    "NOT_FOUND",
    "MISSING_IDENTIFIER",
    # Ports
    "ArticleStorePort",
]
