"""
Value objects - enums and constants shared across layers.
"""

from .enums import (
    ANALYSIS_SECTIONS,
    GENERATED_SECTIONS,
    SECTION_HEADINGS,
    EntrySection,
    ExportFormat,
    IngestionStage,
    UserRole,
)

__all__ = [
    "UserRole",
    "ExportFormat",
    "IngestionStage",
    "EntrySection",
    "SECTION_HEADINGS",
    "ANALYSIS_SECTIONS",
    "GENERATED_SECTIONS",
]
