"""Entry schemas: create, update, read, listing and search responses."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.common import TimestampSerializerMixin, coerce_string_list
from utils.formatting import get_entry_preview
from utils.youtube import get_youtube_thumbnail

_LIST_FIELDS = (
    "key_takeaways",
    "strengths",
    "weaknesses",
    "counterarguments",
    "practical_lessons",
    "two_minute_version",
    "action_checklist",
    "social_media_hooks",
    "content_topics",
    "monetization_ideas",
    "tags",
)

_TEXT_FIELDS = ("title", "youtube_link", "speaker", "main_idea", "central_problem", "notes")


class EntryBase(BaseModel):
    """Base schema for entry data."""

    title: str = ""
    youtube_link: str = ""
    date: Optional[datetime] = None
    speaker: str = ""
    main_idea: str = ""
    key_takeaways: List[str] = []
    central_problem: str = ""
    strengths: List[str] = []
    weaknesses: List[str] = []
    counterarguments: List[str] = []
    practical_lessons: List[str] = []
    two_minute_version: List[str] = []
    action_checklist: List[str] = []
    social_media_hooks: List[str] = []
    content_topics: List[str] = []
    monetization_ideas: List[str] = []
    tags: List[str] = []
    notes: str = ""

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def validate_list_fields(cls, v: Any) -> List[str]:
        return coerce_string_list(v)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def validate_text_fields(cls, v: Any) -> str:
        return "" if v is None else v


class EntryCreate(EntryBase):
    """Schema for creating a new entry. The id is assigned by the store."""

    model_config = ConfigDict(extra="forbid")


class EntryUpdate(BaseModel):
    """Schema for updating an entry.

    Only fields present in the payload are written. There is no id field,
    so an update can never change an entry's identity.
    """

    model_config = ConfigDict(extra="forbid")

    title: Optional[str] = None
    youtube_link: Optional[str] = None
    date: Optional[datetime] = None
    speaker: Optional[str] = None
    main_idea: Optional[str] = None
    key_takeaways: Optional[List[str]] = None
    central_problem: Optional[str] = None
    strengths: Optional[List[str]] = None
    weaknesses: Optional[List[str]] = None
    counterarguments: Optional[List[str]] = None
    practical_lessons: Optional[List[str]] = None
    two_minute_version: Optional[List[str]] = None
    action_checklist: Optional[List[str]] = None
    social_media_hooks: Optional[List[str]] = None
    content_topics: Optional[List[str]] = None
    monetization_ideas: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    notes: Optional[str] = None

    @field_validator(*_LIST_FIELDS, mode="before")
    @classmethod
    def validate_list_fields(cls, v: Any) -> List[str]:
        return coerce_string_list(v)

    @field_validator(*_TEXT_FIELDS, mode="before")
    @classmethod
    def validate_text_fields(cls, v: Any) -> str:
        return "" if v is None else v

    def changes(self) -> dict:
        """Fields explicitly set in the payload."""
        return self.model_dump(exclude_unset=True)


class Entry(TimestampSerializerMixin, EntryBase):
    """Schema for a stored entry."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    created_at: datetime
    updated_at: datetime


class EntrySummary(TimestampSerializerMixin, BaseModel):
    """Schema for entry listing."""

    id: int
    title: str
    speaker: str
    date: Optional[datetime] = None
    youtube_link: str = ""
    tags: List[str] = []
    preview: str
    thumbnail_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_entry(cls, entry) -> "EntrySummary":
        return cls(
            id=entry.id,
            title=entry.title,
            speaker=entry.speaker,
            date=entry.date,
            youtube_link=entry.youtube_link,
            tags=entry.tags or [],
            preview=get_entry_preview(entry.main_idea, entry.key_takeaways or []),
            thumbnail_url=get_youtube_thumbnail(entry.youtube_link),
            created_at=entry.created_at,
            updated_at=entry.updated_at,
        )


class EntryListResponse(BaseModel):
    """Paginated entry listing."""

    items: List[EntrySummary]
    total: int
    limit: Optional[int] = None
    offset: int = 0


class BatchUpdateItem(BaseModel):
    """One element of a batch update."""

    id: int
    update: EntryUpdate


class BatchUpdateRequest(BaseModel):
    """Schema for a batch update. Applied all-or-nothing."""

    updates: List[BatchUpdateItem] = Field(min_length=1)


class BatchUpdateResponse(BaseModel):
    updated: int


class SearchResponse(BaseModel):
    """Ranked search results.

    The tier lists hold entry ids; ``results`` holds the entries themselves in
    rank order.
    """

    query: str
    results: List[Entry]
    tag_matches: List[int] = []
    title_matches: List[int] = []
    main_idea_matches: List[int] = []
    content_matches: List[int] = []
    total: int
    ranked: bool = True
    fallback: bool = False
