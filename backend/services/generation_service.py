"""
Generation service - the three language model calls behind ingestion.

1. parse_notes: raw summary text -> StructuredNotes
2. generate_content: main idea, takeaways, central problem -> GeneratedContent
3. generate_tags: entry fields -> 3-7 tags, with a keyword fallback
"""

import logging
from typing import List, Optional, Sequence

from domain.exceptions import LLMServiceError, ResponseParseError
from domain.services.tag_fallback import fallback_tags
from schemas.generation import GeneratedContent, StructuredNotes, TagList, TagsResponse
from sdk import prompts
from sdk.client.llm_client import LLMClient
from sdk.parsing.json_response import decode_response

logger = logging.getLogger("GenerationService")

UNTITLED_TITLE = "Untitled Podcast Entry"
TITLE_WORD_COUNT = 8


def generate_title(main_idea: str, speaker: Optional[str] = None) -> str:
    """
    Derive a title from the first eight words of the main idea.

    Prefixed with "<speaker>: " when a speaker is known. Without a main idea
    the title is "Untitled Podcast Entry".
    """
    if not main_idea:
        return UNTITLED_TITLE
    words = " ".join(main_idea.split(" ")[:TITLE_WORD_COUNT])
    return f"{speaker}: {words}" if speaker else words


class GenerationService:
    """Wraps the LLM client with the prompts and decoding for each call."""

    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def parse_notes(self, raw_text: str) -> StructuredNotes:
        """
        Structure raw summary text into entry fields.

        Raises:
            LLMServiceError: If the model call fails
            ResponseParseError: If the reply is not the expected JSON object
        """
        reply = await self.llm.complete(
            prompts.PARSE_SYSTEM_PROMPT,
            prompts.build_parse_prompt(raw_text),
            temperature_hint=prompts.PARSE_TEMPERATURE,
        )
        notes = decode_response(reply, StructuredNotes)
        logger.info(f"Parsed notes: title={notes.title!r}, {len(notes.key_takeaways)} takeaways")
        return notes

    async def generate_content(
        self,
        main_idea: str,
        key_takeaways: Sequence[str],
        central_problem: str,
    ) -> GeneratedContent:
        """
        Generate social hooks, content topics and monetization ideas.

        Raises:
            LLMServiceError: If the model call fails
            ResponseParseError: If the reply is not the expected JSON object
        """
        reply = await self.llm.complete(
            prompts.CONTENT_SYSTEM_PROMPT,
            prompts.build_content_prompt(main_idea, key_takeaways, central_problem),
            temperature_hint=prompts.CONTENT_TEMPERATURE,
        )
        return decode_response(reply, GeneratedContent)

    async def generate_tags(
        self,
        title: str = "",
        speaker: str = "",
        main_idea: str = "",
        key_takeaways: Sequence[str] = (),
        central_problem: str = "",
    ) -> TagsResponse:
        """
        Generate topic tags. Never fails: any model or parse error falls back
        to keyword tags derived from the main idea and takeaways.
        """
        try:
            reply = await self.llm.complete(
                prompts.TAGS_SYSTEM_PROMPT,
                prompts.build_tags_prompt(title, speaker, main_idea, key_takeaways, central_problem),
                temperature_hint=prompts.TAGS_TEMPERATURE,
            )
            tags: List[str] = decode_response(reply, TagList).root
            return TagsResponse(tags=tags)
        except (LLMServiceError, ResponseParseError) as e:
            logger.warning(f"⚠️ Tag generation failed, using keyword fallback: {e.detail}")
            return TagsResponse(tags=fallback_tags(main_idea, list(key_takeaways)), fallback=True)
