"""
CRUD operations for Entry documents.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from domain.exceptions import EntryNotFoundError
from infrastructure.database import models
from infrastructure.database.connection import retry_on_db_lock, serialized_write
from schemas.entries import BatchUpdateItem, EntryCreate, EntryUpdate
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select

logger = logging.getLogger("EntryCRUD")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def create_entry(db: AsyncSession, data: EntryCreate) -> models.Entry:
    """Insert a new entry. The store assigns the id; both timestamps are set to now."""
    now = _utcnow()
    db_entry = models.Entry(**data.model_dump(), created_at=now, updated_at=now)
    db.add(db_entry)
    async with serialized_write(db):
        await db.commit()
    await db.refresh(db_entry)
    logger.info(f"📝 Created entry {db_entry.id}: '{db_entry.title}'")
    return db_entry


async def get_entry(db: AsyncSession, entry_id: int) -> Optional[models.Entry]:
    """Get a specific entry by id."""
    result = await db.execute(select(models.Entry).where(models.Entry.id == entry_id))
    return result.scalar_one_or_none()


def _apply_update(entry: models.Entry, update: EntryUpdate, now: datetime) -> None:
    for field, value in update.changes().items():
        setattr(entry, field, value)
    entry.updated_at = now


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def update_entry(db: AsyncSession, entry_id: int, update: EntryUpdate) -> Optional[models.Entry]:
    """
    Merge the fields present in the update into an entry.

    Args:
        db: Database session
        entry_id: Entry to update
        update: Partial update; unset fields are left untouched

    Returns:
        The updated entry, or None if it does not exist
    """
    entry = await get_entry(db, entry_id)
    if entry is None:
        return None

    _apply_update(entry, update, _utcnow())

    async with serialized_write(db):
        await db.commit()
    await db.refresh(entry)
    return entry


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def delete_entry(db: AsyncSession, entry_id: int) -> bool:
    """Delete an entry. Returns False when there was nothing to delete."""
    entry = await get_entry(db, entry_id)
    if entry is None:
        return False

    await db.delete(entry)
    async with serialized_write(db):
        await db.commit()
    logger.info(f"🗑️ Deleted entry {entry_id}")
    return True


async def list_entries(
    db: AsyncSession,
    speaker: Optional[str] = None,
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    limit: Optional[int] = None,
    offset: int = 0,
) -> List[models.Entry]:
    """
    List entries, newest first.

    Args:
        db: Database session
        speaker: Only entries with exactly this speaker
        date_from: Only entries whose date is on or after this moment
        date_to: Only entries whose date is on or before this moment
        limit: Maximum number of entries (None for all)
        offset: Number of entries to skip

    Returns:
        Entries ordered by created_at descending
    """
    query = select(models.Entry)
    if speaker:
        query = query.where(models.Entry.speaker == speaker)
    if date_from is not None:
        query = query.where(models.Entry.date >= date_from)
    if date_to is not None:
        query = query.where(models.Entry.date <= date_to)

    query = query.order_by(models.Entry.created_at.desc(), models.Entry.id.desc()).offset(offset)
    if limit is not None:
        query = query.limit(limit)

    result = await db.execute(query)
    return list(result.scalars().all())


async def get_entries_by_speaker(db: AsyncSession, speaker: str) -> List[models.Entry]:
    """All entries for one speaker, newest first."""
    return await list_entries(db, speaker=speaker)


async def count_entries(db: AsyncSession, speaker: Optional[str] = None) -> int:
    """Count entries, optionally for one speaker."""
    query = select(func.count(models.Entry.id))
    if speaker:
        query = query.where(models.Entry.speaker == speaker)
    result = await db.execute(query)
    return result.scalar_one()


@retry_on_db_lock(max_retries=5, initial_delay=0.1, backoff_factor=2)
async def batch_update_entries(db: AsyncSession, updates: Sequence[BatchUpdateItem]) -> int:
    """
    Apply several partial updates in one transaction.

    Every id is resolved before anything is written, so an unknown id aborts
    the whole batch.

    Raises:
        EntryNotFoundError: If any id does not exist

    Returns:
        Number of entries updated
    """
    if not updates:
        return 0

    ids = {item.id for item in updates}
    result = await db.execute(select(models.Entry).where(models.Entry.id.in_(ids)))
    entries = {entry.id: entry for entry in result.scalars().all()}

    missing = [item.id for item in updates if item.id not in entries]
    if missing:
        raise EntryNotFoundError(missing[0])

    now = _utcnow()
    try:
        for item in updates:
            _apply_update(entries[item.id], item.update, now)
        async with serialized_write(db):
            await db.commit()
    except SQLAlchemyError:
        await db.rollback()
        raise

    logger.info(f"Batch updated {len(updates)} entries")
    return len(updates)


async def get_all_speakers(db: AsyncSession) -> List[str]:
    """Distinct non-empty speakers, trimmed and sorted. Returns [] if the query fails."""
    try:
        result = await db.execute(select(models.Entry.speaker).distinct())
        speakers = result.scalars().all()
    except SQLAlchemyError as e:
        logger.warning(f"⚠️ Could not load speakers: {e}")
        return []

    return sorted({speaker.strip() for speaker in speakers if speaker and speaker.strip()})


async def get_all_tags(db: AsyncSession) -> List[str]:
    """Distinct non-empty tags across all entries, trimmed and sorted. Returns [] if the query fails."""
    try:
        result = await db.execute(select(models.Entry.tags))
        tag_lists = result.scalars().all()
    except SQLAlchemyError as e:
        logger.warning(f"⚠️ Could not load tags: {e}")
        return []

    tags = set()
    for tag_list in tag_lists:
        for tag in tag_list or []:
            if isinstance(tag, str) and tag.strip():
                tags.add(tag.strip())
    return sorted(tags)
