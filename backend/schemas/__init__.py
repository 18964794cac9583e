"""
Pydantic schemas for API request/response models.

This package organizes schemas by resource type:
- entries.py: Entry CRUD, listing and search schemas
- generation.py: Language model output and ingestion schemas
- common.py: Shared base classes and mixins
"""

from schemas.common import TimestampSerializerMixin
from schemas.entries import (
    BatchUpdateItem,
    BatchUpdateRequest,
    BatchUpdateResponse,
    Entry,
    EntryBase,
    EntryCreate,
    EntryListResponse,
    EntrySummary,
    EntryUpdate,
    SearchResponse,
)
from schemas.generation import (
    ContentRequest,
    GeneratedContent,
    IngestPreview,
    IngestRequest,
    ParseRequest,
    StructuredNotes,
    TagList,
    TagsRequest,
    TagsResponse,
)

__all__ = [
    # Common
    "TimestampSerializerMixin",
    # Entries
    "EntryBase",
    "EntryCreate",
    "EntryUpdate",
    "Entry",
    "EntrySummary",
    "EntryListResponse",
    "BatchUpdateItem",
    "BatchUpdateRequest",
    "BatchUpdateResponse",
    "SearchResponse",
    # Generation
    "StructuredNotes",
    "GeneratedContent",
    "TagList",
    "ParseRequest",
    "ContentRequest",
    "TagsRequest",
    "TagsResponse",
    "IngestRequest",
    "IngestPreview",
]
