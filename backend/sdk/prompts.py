"""
Prompt templates for the three generation calls.

1. Parse: structure raw summary text into entry fields
2. Content: social hooks, content topics and monetization ideas
3. Tags: 3-7 Title Case topic tags

Each template is filled with str.format; literal braces are doubled.
"""

from typing import Iterable

# Sampling hints passed to the client alongside each prompt
PARSE_TEMPERATURE = 0.1
CONTENT_TEMPERATURE = 0.7
TAGS_TEMPERATURE = 0.3

# =============================================================================
# Parse
# =============================================================================

PARSE_SYSTEM_PROMPT = (
    "You are a precise text parser that extracts structured data from podcast summaries. "
    "Return only valid JSON without any additional text or formatting."
)

PARSE_PROMPT = """Parse the following podcast summary into structured JSON. Extract information for these exact fields only:

- title: The podcast or episode title
- speaker: The main speaker/guest name
- mainIdea: The core concept or main idea
- keyTakeaways: Array of key takeaways or lessons
- centralProblem: The main problem being discussed
- strengths: Array of strengths mentioned
- weaknesses: Array of weaknesses mentioned
- counterarguments: Array of counterarguments presented
- practicalLessons: Array of practical lessons or advice
- twoMinuteVersion: Array of points for a 2-minute summary
- actionChecklist: Array of actionable items or steps

Rules:
1. Return ONLY valid JSON with the exact field names above
2. Use empty arrays [] for missing list fields
3. Use empty strings "" for missing text fields
4. Preserve bullet points and formatting within strings
5. Do not duplicate content across fields
6. If a section is not found, leave that field empty

Text to parse:
{raw_text}
"""

# =============================================================================
# Content ideas
# =============================================================================

CONTENT_SYSTEM_PROMPT = (
    "You are a creative content strategist and marketing expert. Generate engaging, "
    "actionable content ideas based on podcast summaries. Return only valid JSON."
)

CONTENT_PROMPT = """Based on the following podcast content, generate creative ideas for social media and monetization:

Main Idea: {main_idea}
Key Takeaways: {key_takeaways}
Central Problem: {central_problem}

Generate the following in JSON format:

1. socialMediaHooks: 3-5 engaging social media hooks using the E-M-V (Emotion-Mystery-Value) framework
2. contentTopics: 2-3 content topics perfect for videos, blogs, or scripts
3. monetizationIdeas: 1-2 monetization ideas (digital products, physical products, or services)

Rules:
- Make hooks attention-grabbing and shareable
- Content topics should be specific and actionable
- Monetization ideas should be realistic and aligned with the content
- Return ONLY valid JSON with no additional text
- Keep each item concise but compelling

Example format:
{{
  "socialMediaHooks": ["Hook 1", "Hook 2", "Hook 3"],
  "contentTopics": ["Topic 1", "Topic 2"],
  "monetizationIdeas": ["Idea 1", "Idea 2"]
}}
"""

# =============================================================================
# Tags
# =============================================================================

TAGS_SYSTEM_PROMPT = (
    "You are a precise content categorization expert. Generate semantic topic tags that "
    "accurately represent the core themes of podcast content. Return only a JSON array of strings."
)

TAGS_PROMPT = """Analyze the following podcast content and generate 3-7 precise topic tags that represent the core themes and subjects discussed.

Podcast Details:
Title: {title}
Speaker: {speaker}
Main Idea: {main_idea}
Key Takeaways: {key_takeaways}
Central Problem: {central_problem}

Requirements:
1. Generate 3-7 specific topic tags that capture the main themes
2. Tags should be 1-3 words each (e.g., "Marketing", "AI Tools", "Personal Finance")
3. Focus on the core subject matter, not peripheral mentions
4. Use proper case (Title Case)
5. Be specific but broad enough for categorization
6. Return ONLY a JSON array of tag strings

Return format:
["Tag 1", "Tag 2", "Tag 3"]
"""


def _join(items: Iterable[str]) -> str:
    return "; ".join(items or [])


def build_parse_prompt(raw_text: str) -> str:
    return PARSE_PROMPT.format(raw_text=raw_text)


def build_content_prompt(main_idea: str, key_takeaways: Iterable[str], central_problem: str) -> str:
    return CONTENT_PROMPT.format(
        main_idea=main_idea or "",
        key_takeaways=_join(key_takeaways),
        central_problem=central_problem or "",
    )


def build_tags_prompt(
    title: str,
    speaker: str,
    main_idea: str,
    key_takeaways: Iterable[str],
    central_problem: str,
) -> str:
    return TAGS_PROMPT.format(
        title=title or "N/A",
        speaker=speaker or "N/A",
        main_idea=main_idea or "N/A",
        key_takeaways=_join(key_takeaways),
        central_problem=central_problem or "N/A",
    )
