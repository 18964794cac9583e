"""SDK client components - Claude Agent SDK integration."""

from sdk.client.llm_client import LLMClient

__all__ = [
    "LLMClient",
]
