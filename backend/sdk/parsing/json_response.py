"""
Decode language model replies into typed pydantic models.

Replies are expected to be bare JSON, but models sometimes wrap them in
Markdown code fences or add a sentence around them. Both are tolerated;
anything that still fails to parse or validate raises ResponseParseError.
"""

import json
import logging
import re
from typing import Any, Type, TypeVar

from domain.exceptions import ResponseParseError
from pydantic import BaseModel, ValidationError

logger = logging.getLogger("ResponseParser")

ModelT = TypeVar("ModelT", bound=BaseModel)

_CODE_FENCE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?\s*```$", re.DOTALL)


def strip_code_fences(text: str) -> str:
    """Remove a surrounding ```json ... ``` fence, if present."""
    text = text.strip()
    match = _CODE_FENCE.match(text)
    if match:
        return match.group(1).strip()
    return text


def extract_json(text: str) -> Any:
    """
    Parse the JSON payload of a reply.

    Tries the fence-stripped text first, then the outermost {...} or [...] span.

    Raises:
        ValueError: If no JSON value can be parsed
    """
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except json.JSONDecodeError:
        pass

    for opener, closer in (("{", "}"), ("[", "]")):
        start = cleaned.find(opener)
        end = cleaned.rfind(closer)
        if start != -1 and end > start:
            try:
                return json.loads(cleaned[start : end + 1])
            except json.JSONDecodeError:
                continue

    raise ValueError("response is not valid JSON")


def decode_response(text: str, model: Type[ModelT]) -> ModelT:
    """
    Decode a reply into an instance of ``model``.

    Args:
        text: Raw reply text
        model: Pydantic model (or RootModel) describing the expected shape

    Returns:
        Validated model instance

    Raises:
        ResponseParseError: If the text is not JSON or does not match the model
    """
    try:
        data = extract_json(text)
    except ValueError as e:
        logger.error(f"Failed to parse response as JSON: {text[:200]!r}")
        raise ResponseParseError("Invalid JSON response from language model") from e

    try:
        return model.model_validate(data)
    except ValidationError as e:
        logger.error(f"Response did not match {model.__name__}: {e.error_count()} error(s)")
        raise ResponseParseError(f"Unexpected response shape for {model.__name__}") from e
