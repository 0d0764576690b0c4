"""
Response extractor - recovers a JSON value from free-form model output.

Models return pure JSON, JSON inside a markdown fence, or JSON buried in
prose. Strategies are tried in order and the first successful parse wins:

    1. The whole text
    2. The interior of the first fenced code block (```json ... ```)
    3. The greedy span from the first "{" to the last "}"
"""

import json
import logging
import re
from typing import Any, Callable

from worldgen.errors import ExtractionFailure

logger = logging.getLogger(__name__)

_FENCE_PATTERN = re.compile(r"```(?:json)?[ \t]*\n?([\s\S]*?)```", re.IGNORECASE)
_OBJECT_PATTERN = re.compile(r"\{[\s\S]*\}")


def _whole_text(text: str) -> str | None:
    return text


def _fenced_block(text: str) -> str | None:
    match = _FENCE_PATTERN.search(text)
    return match.group(1) if match else None


def _outer_braces(text: str) -> str | None:
    match = _OBJECT_PATTERN.search(text)
    return match.group() if match else None


STRATEGIES: list[tuple[str, Callable[[str], str | None]]] = [
    ("whole_text", _whole_text),
    ("fenced_block", _fenced_block),
    ("outer_braces", _outer_braces),
]


def extract_json(text: str | None) -> Any:
    """
    Recover a single JSON value from raw model output.

    Args:
        text: The raw LLM response

    Returns:
        The parsed JSON value

    Raises:
        ExtractionFailure: If no strategy yields parseable JSON
    """
    if text is None or not text.strip():
        raise ExtractionFailure("LLM returned empty response")

    cleaned = text.strip()

    for name, strategy in STRATEGIES:
        candidate = strategy(cleaned)
        if candidate is None:
            continue
        try:
            value = json.loads(candidate.strip())
        except (ValueError, RecursionError) as e:
            logger.debug(f"Extraction strategy '{name}' failed: {e}")
            continue
        logger.debug(f"Extracted JSON using strategy '{name}'")
        return value

    snippet = cleaned[:200] + "..." if len(cleaned) > 200 else cleaned
    raise ExtractionFailure(f"Failed to parse JSON from LLM response. Response preview: {snippet}")
