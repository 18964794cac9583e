"""
Keyword-based tags used when the language model cannot produce any.
"""

from typing import List, Sequence

# Checked in order; the first occurrence of each tag wins
KEYWORD_TAGS = (
    ("business", "Business"),
    ("marketing", "Marketing"),
    ("entrepreneur", "Entrepreneurship"),
    ("finance", "Finance"),
    ("investment", "Investment"),
    ("technology", "Technology"),
    ("ai", "AI & Technology"),
    ("health", "Health & Wellness"),
    ("productivity", "Productivity"),
    ("leadership", "Leadership"),
    ("personal", "Personal Development"),
    ("money", "Personal Finance"),
)

DEFAULT_TAG = "General"


def fallback_tags(main_idea: str, key_takeaways: Sequence[str]) -> List[str]:
    """
    Derive tags from keywords in the main idea and takeaways.

    Keywords are matched as substrings of the lower-cased text.

    Returns:
        Matching tags in table order, or ["General"] when nothing matches
    """
    text = f"{main_idea or ''} {' '.join(key_takeaways or [])}".lower()

    tags: List[str] = []
    for keyword, tag in KEYWORD_TAGS:
        if keyword in text and tag not in tags:
            tags.append(tag)

    return tags or [DEFAULT_TAG]
