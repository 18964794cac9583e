"""
YouTube link helpers.
"""

import re
from typing import Optional

from domain.exceptions import InvalidVideoLinkError

YOUTUBE_URL_PATTERN = re.compile(r"^(https?://)?(www\.)?(youtube\.com/(watch\?v=|embed/)|youtu\.be/)[\w-]+(&[\w=]*)?$")

_VIDEO_ID_PATTERN = re.compile(r"^.*(youtu\.be/|v/|u/\w/|embed/|watch\?v=|&v=)([^#&?]*).*")

VIDEO_ID_LENGTH = 11


def is_valid_youtube_url(url: Optional[str]) -> bool:
    """Check a link against the accepted YouTube URL shapes. An empty link is valid."""
    if not url:
        return True
    return YOUTUBE_URL_PATTERN.match(url) is not None


def ensure_valid_youtube_url(url: Optional[str]) -> None:
    """Raise InvalidVideoLinkError when a non-empty link is not a YouTube URL."""
    if not is_valid_youtube_url(url):
        raise InvalidVideoLinkError(url or "")


def extract_youtube_id(url: Optional[str]) -> Optional[str]:
    """
    Extract the 11-character video id from a YouTube URL.

    Returns:
        The video id, or None when the URL has none of the expected length
    """
    if not url:
        return None
    match = _VIDEO_ID_PATTERN.match(url)
    if match and len(match.group(2)) == VIDEO_ID_LENGTH:
        return match.group(2)
    return None


def get_youtube_thumbnail(url: Optional[str]) -> Optional[str]:
    """Thumbnail image URL for a YouTube link, or None."""
    video_id = extract_youtube_id(url)
    if video_id is None:
        return None
    return f"https://img.youtube.com/vi/{video_id}/maxresdefault.jpg"
