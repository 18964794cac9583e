"""
Services layer for business logic.

This package contains the services that coordinate the store, the language
model client and the domain logic.
"""

from .export_service import (
    export_filename,
    format_section,
    generate_summary,
    render_markdown,
    render_pdf,
    render_sections,
)
from .generation_service import GenerationService, generate_title
from .ingestion_service import IngestionService
from .search_service import search_entries

__all__ = [
    "GenerationService",
    "IngestionService",
    "generate_title",
    "search_entries",
    "render_markdown",
    "render_pdf",
    "render_sections",
    "export_filename",
    "format_section",
    "generate_summary",
]
