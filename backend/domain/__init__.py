"""
Domain layer for internal business logic.

Structure:
- value_objects/: Enums and section metadata (UserRole, EntrySection, ...)
- services/: Pure domain logic (search ranking, fallback tags)
- exceptions.py: HTTP-aware domain exceptions
"""

from .services import MIN_REVERSE_TAG_LENGTH, SearchRanker, SearchResults, fallback_tags, rank
from .value_objects.enums import EntrySection, ExportFormat, IngestionStage, UserRole

__all__ = [
    # Services
    "SearchRanker",
    "SearchResults",
    "rank",
    "MIN_REVERSE_TAG_LENGTH",
    "fallback_tags",
    # Enums
    "EntrySection",
    "ExportFormat",
    "IngestionStage",
    "UserRole",
]
