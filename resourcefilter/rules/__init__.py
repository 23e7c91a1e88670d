"""ResourceFilter Rules.

This package decides which resources a query returns:
- FilterEvaluator: Per-column predicates combined with AND
- VisibilityResolver: Hides unknown, classpath-only top-level folders
- matches_origin: Origin-kind matching across layers
"""

from .filters import Filter, FilterEvaluator, UnsupportedFilterColumnError, is_active, parse_column
from .origin import matches_origin, origin_kind
from .visibility import VisibilityContext, VisibilityResolver, top_level_segment

__all__ = [
    # Column filters
    "Filter",
    "FilterEvaluator",
    "UnsupportedFilterColumnError",
    "is_active",
    "parse_column",
    # Origin matching
    "matches_origin",
    "origin_kind",
    # Visibility
    "VisibilityContext",
    "VisibilityResolver",
    "top_level_segment",
]
