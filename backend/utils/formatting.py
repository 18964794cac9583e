"""
Text formatting helpers shared by schemas, services and exports.
"""

import re
from datetime import date, datetime
from typing import Iterable, List, Optional, Union

BULLET = "•"

# Leading bullet markers accepted when converting edited text back to a list
_BULLET_PREFIX = re.compile(r"^[•\-\*]\s*")

PREVIEW_LENGTH = 120


def array_to_text(items: Optional[Iterable[str]]) -> str:
    """
    Render a list as one "• item" line per element.

    Args:
        items: List items (None or empty renders as "")

    Returns:
        Newline-joined bullet lines
    """
    if not items:
        return ""
    return "\n".join(f"{BULLET} {item}" for item in items)


def text_to_array(text: Optional[str]) -> List[str]:
    """
    Parse bullet text back into a list.

    Strips one leading bullet marker (•, - or *) per line, trims whitespace
    and drops blank lines.
    """
    if not text:
        return []
    lines = (_BULLET_PREFIX.sub("", line).strip() for line in text.split("\n"))
    return [line for line in lines if line]


def truncate_text(text: str, max_length: int) -> str:
    """Cut text to max_length characters and append '...' when it was longer."""
    if not text or len(text) <= max_length:
        return text
    return text[:max_length] + "..."


def format_date(value: Union[datetime, date, str, None]) -> str:
    """
    Format a date for display, e.g. "Mar 5, 2024".

    Accepts datetimes, dates or ISO strings. Anything unparseable renders as "".
    """
    if not value:
        return ""
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return ""
    return f"{value.strftime('%b')} {value.day}, {value.year}"


def get_entry_preview(main_idea: str, key_takeaways: List[str]) -> str:
    """
    Short preview for entry listings.

    Uses the main idea, else the first takeaway, else a placeholder.
    """
    if main_idea:
        return truncate_text(main_idea, PREVIEW_LENGTH)
    if key_takeaways:
        return truncate_text(key_takeaways[0], PREVIEW_LENGTH)
    return "No preview available"
