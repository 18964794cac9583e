"""Ingestion routes: run the full pipeline, with or without saving."""

import schemas
from core.dependencies import get_ingestion_service
from fastapi import APIRouter, Depends
from infrastructure.auth import require_admin
from infrastructure.database import get_db
from services.ingestion_service import IngestionService
from sqlalchemy.ext.asyncio import AsyncSession

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/preview", response_model=schemas.IngestPreview)
async def preview_ingest(request: schemas.IngestRequest, service: IngestionService = Depends(get_ingestion_service)):
    """Parse, title, generate content and tags. Nothing is saved; the client reviews and edits the draft."""
    return await service.build_entry(request)


@router.post("", response_model=schemas.Entry, status_code=201)
async def ingest(
    request: schemas.IngestRequest,
    service: IngestionService = Depends(get_ingestion_service),
    db: AsyncSession = Depends(get_db),
):
    """Run every stage and save the entry. Any failing stage aborts without saving."""
    return await service.ingest(db, request)
