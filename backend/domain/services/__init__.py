"""
Domain services - pure domain logic (stateless, no I/O).
"""

from .search_ranker import MIN_REVERSE_TAG_LENGTH, SearchRanker, SearchResults, rank
from .tag_fallback import KEYWORD_TAGS, fallback_tags

__all__ = [
    "SearchRanker",
    "SearchResults",
    "rank",
    "MIN_REVERSE_TAG_LENGTH",
    "KEYWORD_TAGS",
    "fallback_tags",
]
