"""Shared dependencies for FastAPI endpoints."""

import logging

import crud
from domain.exceptions import EntryNotFoundError
from fastapi import Depends, Request
from infrastructure.database import get_db, models
from services.generation_service import GenerationService
from services.ingestion_service import IngestionService
from sqlalchemy.ext.asyncio import AsyncSession

from core.settings import Settings, get_settings

logger = logging.getLogger("Dependencies")


def get_app_settings() -> Settings:
    return get_settings()


def get_generation_service(request: Request) -> GenerationService:
    """
    Dependency to get the generation service instance from app state.

    The instance is created during application startup in the lifespan context.
    """
    return request.app.state.generation_service


def get_ingestion_service(request: Request) -> IngestionService:
    """
    Dependency to get the ingestion service instance from app state.

    The instance is created during application startup in the lifespan context.
    """
    return request.app.state.ingestion_service


async def get_entry_or_404(entry_id: int, db: AsyncSession = Depends(get_db)) -> models.Entry:
    """Load an entry by path id or raise EntryNotFoundError."""
    entry = await crud.get_entry(db, entry_id)
    if entry is None:
        raise EntryNotFoundError(entry_id)
    return entry
