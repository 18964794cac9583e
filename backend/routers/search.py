"""Search and facet routes. Registered before the entry routes so /entries/search is not read as an id."""

from datetime import datetime
from typing import List, Optional

import crud
import schemas
from core.dependencies import get_app_settings
from core.settings import Settings
from fastapi import APIRouter, Depends, Query
from infrastructure.database import get_db
from services.search_service import search_entries
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter()


@router.get("/search", response_model=schemas.SearchResponse)
async def search(
    q: str = Query("", description="Free-text query; blank lists the newest entries"),
    speaker: Optional[str] = None,
    tags: Optional[List[str]] = Query(None),
    date_from: Optional[datetime] = None,
    date_to: Optional[datetime] = None,
    page_size: Optional[int] = Query(None, ge=1, le=200),
    settings: Settings = Depends(get_app_settings),
    db: AsyncSession = Depends(get_db),
):
    """Search entries: tag matches first, then title or speaker, then main idea or central problem."""
    return await search_entries(
        db,
        query=q,
        speaker=speaker,
        tags=tags,
        date_from=date_from,
        date_to=date_to,
        page_size=page_size or settings.search_page_size,
    )


@router.get("/speakers", response_model=List[str])
async def list_speakers(db: AsyncSession = Depends(get_db)):
    """All distinct speakers, sorted."""
    return await crud.get_all_speakers(db)


@router.get("/tags", response_model=List[str])
async def list_tags(db: AsyncSession = Depends(get_db)):
    """All distinct tags, sorted."""
    return await crud.get_all_tags(db)
