"""Entry management routes for CRUD and batch updates."""

import logging
from typing import Optional

import crud
import schemas
from core.dependencies import get_entry_or_404
from domain.exceptions import DeleteNotConfirmedError, EntryNotFoundError
from fastapi import APIRouter, Depends, Query
from infrastructure.auth import require_admin
from infrastructure.database import get_db, models
from sqlalchemy.ext.asyncio import AsyncSession
from utils.youtube import ensure_valid_youtube_url

router = APIRouter()

logger = logging.getLogger("EntriesRouter")


@router.get("", response_model=schemas.EntryListResponse)
async def list_entries(
    speaker: Optional[str] = None,
    limit: Optional[int] = Query(None, ge=1, le=500),
    offset: int = Query(0, ge=0),
    db: AsyncSession = Depends(get_db),
):
    """List entries, newest first."""
    entries = await crud.list_entries(db, speaker=speaker, limit=limit, offset=offset)
    total = await crud.count_entries(db, speaker=speaker)
    return schemas.EntryListResponse(
        items=[schemas.EntrySummary.from_entry(entry) for entry in entries],
        total=total,
        limit=limit,
        offset=offset,
    )


@router.post("", response_model=schemas.Entry, status_code=201, dependencies=[Depends(require_admin)])
async def create_entry(entry: schemas.EntryCreate, db: AsyncSession = Depends(get_db)):
    """Create an entry from an edited draft."""
    ensure_valid_youtube_url(entry.youtube_link)
    return await crud.create_entry(db, entry)


@router.post("/batch", response_model=schemas.BatchUpdateResponse, dependencies=[Depends(require_admin)])
async def batch_update(request: schemas.BatchUpdateRequest, db: AsyncSession = Depends(get_db)):
    """Apply several partial updates at once. An unknown id rejects the whole batch."""
    for item in request.updates:
        ensure_valid_youtube_url(item.update.youtube_link)
    updated = await crud.batch_update_entries(db, request.updates)
    return schemas.BatchUpdateResponse(updated=updated)


@router.get("/{entry_id}", response_model=schemas.Entry)
async def get_entry(entry: models.Entry = Depends(get_entry_or_404)):
    """Get a specific entry by ID."""
    return entry


@router.patch("/{entry_id}", response_model=schemas.Entry, dependencies=[Depends(require_admin)])
async def update_entry(entry_id: int, update: schemas.EntryUpdate, db: AsyncSession = Depends(get_db)):
    """Update the fields present in the body; everything else is left as is."""
    ensure_valid_youtube_url(update.youtube_link)
    entry = await crud.update_entry(db, entry_id, update)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    return entry


@router.put("/{entry_id}", response_model=schemas.Entry, dependencies=[Depends(require_admin)])
async def replace_entry(entry_id: int, replacement: schemas.EntryCreate, db: AsyncSession = Depends(get_db)):
    """Replace every field of an entry. Fields missing from the body reset to their defaults."""
    ensure_valid_youtube_url(replacement.youtube_link)
    entry = await crud.update_entry(db, entry_id, schemas.EntryUpdate(**replacement.model_dump()))
    if entry is None:
        raise EntryNotFoundError(entry_id)
    return entry


@router.delete("/{entry_id}", dependencies=[Depends(require_admin)])
async def delete_entry(
    entry_id: int,
    confirm: bool = Query(False, description="Must be true; deletes are permanent"),
    db: AsyncSession = Depends(get_db),
):
    """Permanently delete an entry. Requires ?confirm=true."""
    if not confirm:
        raise DeleteNotConfirmedError(entry_id)
    if not await crud.delete_entry(db, entry_id):
        raise EntryNotFoundError(entry_id)
    return {"message": "Entry deleted successfully"}
