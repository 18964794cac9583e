"""
Search service - fetch candidates, rank them, apply the tag facet.

If the filtered fetch fails, search degrades to an unranked speaker-only
listing instead of failing outright.
"""

import logging
from datetime import datetime
from typing import List, Optional, Sequence

import crud
from domain.exceptions import StoreUnavailableError
from domain.services.search_ranker import SearchRanker
from infrastructure.database import models
from schemas.entries import Entry, SearchResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger("SearchService")

DEFAULT_PAGE_SIZE = 20


def filter_by_tags(entries: Sequence[models.Entry], tags: Optional[Sequence[str]]) -> List[models.Entry]:
    """Keep entries carrying at least one of the given tags (exact match). No tags keeps everything."""
    wanted = {tag for tag in tags or [] if tag}
    if not wanted:
        return list(entries)
    return [entry for entry in entries if wanted.intersection(entry.tags or [])]


def _ids(entries: Sequence[models.Entry]) -> List[int]:
    return [entry.id for entry in entries]


async def search_entries(
    db: AsyncSession,
    query: str = "",
    speaker: Optional[str] = None,
    tags: Optional[Sequence[str]] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    page_size: int = DEFAULT_PAGE_SIZE,
) -> SearchResponse:
    """
    Search entries.

    Args:
        db: Database session
        query: Free-text query; blank returns the newest entries unranked
        speaker: Exact speaker filter
        tags: Keep only entries with at least one of these tags
        date_from: Earliest entry date
        date_to: Latest entry date
        page_size: Maximum number of results

    Returns:
        SearchResponse with results in rank order and per-tier entry ids

    Raises:
        StoreUnavailableError: If both the search fetch and the fallback listing fail
    """
    try:
        candidates = await crud.list_entries(db, speaker=speaker, date_from=date_from, date_to=date_to)
    except SQLAlchemyError as e:
        logger.error(f"❌ Search fetch failed, falling back to plain listing: {e}")
        return await _fallback_search(db, query, speaker, tags, page_size)

    candidates = filter_by_tags(candidates, tags)
    ranked = SearchRanker.rank(candidates, query, page_size)

    logger.debug(f"Search {query!r}: {len(candidates)} candidates, {ranked.total} results")
    return SearchResponse(
        query=query,
        results=[Entry.model_validate(entry) for entry in ranked.results],
        tag_matches=_ids(ranked.tag_matches),
        title_matches=_ids(ranked.title_matches),
        main_idea_matches=_ids(ranked.main_idea_matches),
        content_matches=_ids(ranked.content_matches),
        total=ranked.total,
        ranked=bool(SearchRanker.normalize_query(query)),
    )


async def _fallback_search(
    db: AsyncSession,
    query: str,
    speaker: Optional[str],
    tags: Optional[Sequence[str]],
    page_size: int,
) -> SearchResponse:
    try:
        await db.rollback()
        entries = await crud.list_entries(db)
    except SQLAlchemyError as e:
        logger.error(f"❌ Fallback listing failed: {e}")
        raise StoreUnavailableError("Search is unavailable") from e

    if speaker:
        entries = [entry for entry in entries if entry.speaker == speaker]
    entries = filter_by_tags(entries, tags)[:page_size]

    return SearchResponse(
        query=query,
        results=[Entry.model_validate(entry) for entry in entries],
        total=len(entries),
        ranked=False,
        fallback=True,
    )
