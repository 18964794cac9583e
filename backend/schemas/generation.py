"""Schemas for language model generation and the ingestion pipeline."""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator
from pydantic.alias_generators import to_camel

from schemas.common import coerce_string_list
from schemas.entries import EntryCreate

MAX_TAGS = 7

# =============================================================================
# Decoded language model output
# =============================================================================


class StructuredNotes(BaseModel):
    """Fields extracted from raw summary text.

    Accepts both snake_case and the camelCase keys the prompt asks for.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    title: str = ""
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

    @field_validator(
        "key_takeaways",
        "strengths",
        "weaknesses",
        "counterarguments",
        "practical_lessons",
        "two_minute_version",
        "action_checklist",
        mode="before",
    )
    @classmethod
    def validate_list_fields(cls, v: Any) -> List[str]:
        return coerce_string_list(v)

    @field_validator("title", "speaker", "main_idea", "central_problem", mode="before")
    @classmethod
    def validate_text_fields(cls, v: Any) -> str:
        return "" if v is None else v


class GeneratedContent(BaseModel):
    """Social hooks, content topics and monetization ideas."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    social_media_hooks: List[str] = []
    content_topics: List[str] = []
    monetization_ideas: List[str] = []

    @field_validator("social_media_hooks", "content_topics", "monetization_ideas", mode="before")
    @classmethod
    def validate_list_fields(cls, v: Any) -> List[str]:
        return coerce_string_list(v)


class TagList(RootModel[List[Any]]):
    """A JSON array of tags: trimmed, blank and non-string items dropped, at most seven."""

    @field_validator("root")
    @classmethod
    def clean_tags(cls, v: List[Any]) -> List[str]:
        tags = [tag.strip() for tag in v if isinstance(tag, str) and tag.strip()]
        if not tags:
            raise ValueError("tag list is empty")
        return tags[:MAX_TAGS]


# =============================================================================
# Request / response bodies
# =============================================================================


class ParseRequest(BaseModel):
    """Raw summary text to structure."""

    raw_text: str = Field(min_length=1)

    @field_validator("raw_text")
    @classmethod
    def validate_raw_text(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("raw_text must not be blank")
        return v


class ContentRequest(BaseModel):
    main_idea: str = ""
    key_takeaways: List[str] = []
    central_problem: str = ""


class TagsRequest(BaseModel):
    title: str = ""
    speaker: str = ""
    main_idea: str = ""
    key_takeaways: List[str] = []
    central_problem: str = ""


class TagsResponse(BaseModel):
    tags: List[str]
    fallback: bool = False


class IngestRequest(ParseRequest):
    """Raw text plus the fields the user supplies alongside it."""

    youtube_link: str = ""
    date: Optional[datetime] = None
    notes: str = ""


class IngestPreview(BaseModel):
    """Result of running the pipeline without saving."""

    entry: EntryCreate
    tags_from_fallback: bool = False
