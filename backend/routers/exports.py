"""Export routes: Markdown and PDF downloads, share summary, section copy text."""

from typing import List, Optional

from core.dependencies import get_entry_or_404
from domain.value_objects.enums import EntrySection, ExportFormat
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from infrastructure.database import models
from pydantic import BaseModel
from services.export_service import (
    SUMMARY_MAX_LENGTH,
    export_filename,
    format_section,
    generate_summary,
    render_markdown,
    render_pdf,
    render_sections,
    section_content,
)

router = APIRouter()


class SectionCopyRequest(BaseModel):
    section: EntrySection


class TextResponse(BaseModel):
    text: str


def _attachment(filename: str) -> dict:
    return {"Content-Disposition": f'attachment; filename="{filename}"'}


@router.get("/{entry_id}/export/markdown")
async def export_markdown(
    sections: Optional[List[EntrySection]] = Query(None, description="Limit the export to these sections"),
    entry: models.Entry = Depends(get_entry_or_404),
):
    """Download the entry as a Markdown file."""
    body = render_sections(entry, sections) if sections else render_markdown(entry)
    return Response(
        content=body,
        media_type="text/markdown; charset=utf-8",
        headers=_attachment(export_filename(entry, ExportFormat.MARKDOWN.value)),
    )


@router.get("/{entry_id}/export/pdf")
async def export_pdf(entry: models.Entry = Depends(get_entry_or_404)):
    """Download the entry as an A4 PDF."""
    return Response(
        content=render_pdf(entry),
        media_type="application/pdf",
        headers=_attachment(export_filename(entry, ExportFormat.PDF.value)),
    )


@router.get("/{entry_id}/export/summary", response_model=TextResponse)
async def export_summary(
    max_length: int = Query(SUMMARY_MAX_LENGTH, ge=20, le=5000),
    entry: models.Entry = Depends(get_entry_or_404),
):
    """Short share text for social media. The client copies it to the clipboard."""
    return TextResponse(text=generate_summary(entry, max_length=max_length))


@router.post("/{entry_id}/export/section", response_model=TextResponse)
async def export_section(request: SectionCopyRequest, entry: models.Entry = Depends(get_entry_or_404)):
    """Formatted text of a single section, ready to paste."""
    return TextResponse(text=format_section(request.section.heading, section_content(entry, request.section)))
