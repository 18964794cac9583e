"""
Language model integration for the note refinery.

Package structure:
- sdk/client/ - Claude Agent SDK client (single-turn text completion)
- sdk/parsing/ - JSON decoding of model replies into pydantic models
- sdk/prompts.py - Prompt templates for parse, content and tag generation
"""

from sdk.client.llm_client import LLMClient
from sdk.parsing.json_response import decode_response

__all__ = [
    "LLMClient",
    "decode_response",
]
