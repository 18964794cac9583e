"""
Ingestion pipeline: raw text in, finished entry out.

Stages run strictly in order and a failure aborts the rest:
    parse -> title backfill -> content ideas -> tags -> persist

Nothing is written to the store unless every earlier stage succeeded.
"""

import logging

import crud
from domain.exceptions import IngestionError, LLMServiceError, ResponseParseError, StoreUnavailableError
from domain.value_objects.enums import IngestionStage
from infrastructure.database import models
from schemas.entries import EntryCreate
from schemas.generation import GeneratedContent, IngestPreview, IngestRequest
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from utils.youtube import ensure_valid_youtube_url

from services.generation_service import GenerationService, generate_title

logger = logging.getLogger("IngestionService")


class IngestionService:
    """Runs the ingestion stages against a GenerationService."""

    def __init__(self, generation: GenerationService):
        self.generation = generation

    async def build_entry(self, request: IngestRequest) -> IngestPreview:
        """
        Run every stage except persist.

        Raises:
            InvalidVideoLinkError: If the supplied link is not a YouTube URL
            IngestionError: If the parse or content stage fails
        """
        ensure_valid_youtube_url(request.youtube_link)

        logger.info(f"🔄 Ingesting {len(request.raw_text)} characters of text")
        try:
            notes = await self.generation.parse_notes(request.raw_text)
        except (LLMServiceError, ResponseParseError) as e:
            raise IngestionError(str(IngestionStage.PARSE), e) from e

        title = notes.title.strip() or generate_title(notes.main_idea, notes.speaker or None)

        content = GeneratedContent()
        if notes.main_idea or notes.key_takeaways or notes.central_problem:
            try:
                content = await self.generation.generate_content(
                    notes.main_idea, notes.key_takeaways, notes.central_problem
                )
            except (LLMServiceError, ResponseParseError) as e:
                raise IngestionError(str(IngestionStage.CONTENT), e) from e

        # The title is never blank here, so tags are always generated
        generated = await self.generation.generate_tags(
            title=title,
            speaker=notes.speaker,
            main_idea=notes.main_idea,
            key_takeaways=notes.key_takeaways,
            central_problem=notes.central_problem,
        )

        entry = EntryCreate(
            title=title,
            youtube_link=request.youtube_link,
            date=request.date,
            speaker=notes.speaker,
            main_idea=notes.main_idea,
            key_takeaways=notes.key_takeaways,
            central_problem=notes.central_problem,
            strengths=notes.strengths,
            weaknesses=notes.weaknesses,
            counterarguments=notes.counterarguments,
            practical_lessons=notes.practical_lessons,
            two_minute_version=notes.two_minute_version,
            action_checklist=notes.action_checklist,
            social_media_hooks=content.social_media_hooks,
            content_topics=content.content_topics,
            monetization_ideas=content.monetization_ideas,
            tags=generated.tags,
            notes=request.notes,
        )
        return IngestPreview(entry=entry, tags_from_fallback=generated.fallback)

    async def ingest(self, db: AsyncSession, request: IngestRequest) -> models.Entry:
        """
        Run the whole pipeline and save the result.

        Raises:
            InvalidVideoLinkError: If the supplied link is not a YouTube URL
            IngestionError: If any stage fails; nothing is persisted
        """
        preview = await self.build_entry(request)

        try:
            entry = await crud.create_entry(db, preview.entry)
        except SQLAlchemyError as e:
            logger.error(f"❌ Failed to save ingested entry: {e}")
            raise IngestionError(str(IngestionStage.PERSIST), StoreUnavailableError(str(e))) from e

        logger.info(f"✅ Ingested entry {entry.id}: '{entry.title}'")
        return entry
