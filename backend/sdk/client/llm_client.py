"""LLMClient - single-turn text completion through the Claude Agent SDK."""

import logging
from typing import Optional

from claude_agent_sdk import ClaudeAgentOptions, query
from claude_agent_sdk.types import AssistantMessage, ResultMessage, TextBlock
from core.settings import Settings
from domain.exceptions import LLMServiceError

logger = logging.getLogger("LLMClient")


class LLMClient:
    """Stateless text-in, text-out wrapper around ``claude_agent_sdk.query``.

    Each call is an independent one-shot conversation with no tools.
    """

    def __init__(self, model: str, max_turns: int = 1):
        self.model = model
        self.max_turns = max_turns

    @classmethod
    def from_settings(cls, settings: Settings) -> "LLMClient":
        return cls(model=settings.llm_model, max_turns=settings.llm_max_turns)

    def build_options(self, system_prompt: str) -> ClaudeAgentOptions:
        return ClaudeAgentOptions(
            model=self.model,
            system_prompt=system_prompt,
            max_turns=self.max_turns,
            permission_mode="default",
            allowed_tools=[],
            tools=[],
            setting_sources=[],
            env={"CLAUDE_AGENT_SDK_SKIP_VERSION_CHECK": "true"},
        )

    async def complete(self, system_prompt: str, prompt: str, temperature_hint: Optional[float] = None) -> str:
        """
        Send one prompt and return the model's text reply.

        Args:
            system_prompt: Role and output-format instructions
            prompt: The user prompt
            temperature_hint: Intended sampling temperature (logged; the SDK picks its own)

        Returns:
            Reply text, stripped

        Raises:
            LLMServiceError: If the call fails, reports an error, or returns no text
        """
        options = self.build_options(system_prompt)
        logger.debug(f"LLM request: model={self.model} temperature_hint={temperature_hint} chars={len(prompt)}")

        text_parts: list[str] = []
        result_text: Optional[str] = None
        try:
            async for message in query(prompt=prompt, options=options):
                if isinstance(message, AssistantMessage):
                    for block in message.content:
                        if isinstance(block, TextBlock):
                            text_parts.append(block.text)
                elif isinstance(message, ResultMessage):
                    if message.is_error:
                        raise LLMServiceError(f"Language model reported an error: {message.result or 'unknown'}")
                    result_text = message.result
        except LLMServiceError:
            raise
        except Exception as e:
            logger.error(f"❌ LLM request failed: {e}")
            raise LLMServiceError(f"Language model request failed: {e}") from e

        content = "".join(text_parts).strip() or (result_text or "").strip()
        if not content:
            logger.warning("LLM returned an empty response")
            raise LLMServiceError("No response from language model")

        return content
