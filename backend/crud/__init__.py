"""
CRUD operations module.

This module provides database operations organized by domain aggregate.
All CRUD functions are exported at the package level.
"""

from .entries import (
    batch_update_entries,
    count_entries,
    create_entry,
    delete_entry,
    get_all_speakers,
    get_all_tags,
    get_entries_by_speaker,
    get_entry,
    list_entries,
    update_entry,
)

__all__ = [
    "create_entry",
    "get_entry",
    "update_entry",
    "delete_entry",
    "list_entries",
    "get_entries_by_speaker",
    "count_entries",
    "batch_update_entries",
    "get_all_speakers",
    "get_all_tags",
]
