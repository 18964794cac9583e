"""Generation routes: each wraps a single language model call."""

import schemas
from core.dependencies import get_generation_service
from fastapi import APIRouter, Depends
from infrastructure.auth import require_admin
from services.generation_service import GenerationService

router = APIRouter(dependencies=[Depends(require_admin)])


@router.post("/parse", response_model=schemas.StructuredNotes)
async def parse_text(request: schemas.ParseRequest, service: GenerationService = Depends(get_generation_service)):
    """Structure raw summary text into entry fields."""
    return await service.parse_notes(request.raw_text)


@router.post("/content", response_model=schemas.GeneratedContent)
async def generate_content(
    request: schemas.ContentRequest,
    service: GenerationService = Depends(get_generation_service),
):
    """Generate social media hooks, content topics and monetization ideas."""
    return await service.generate_content(request.main_idea, request.key_takeaways, request.central_problem)


@router.post("/tags", response_model=schemas.TagsResponse)
async def generate_tags(request: schemas.TagsRequest, service: GenerationService = Depends(get_generation_service)):
    """Generate 3-7 topic tags. Falls back to keyword tags if the model fails."""
    return await service.generate_tags(
        title=request.title,
        speaker=request.speaker,
        main_idea=request.main_idea,
        key_takeaways=request.key_takeaways,
        central_problem=request.central_problem,
    )
