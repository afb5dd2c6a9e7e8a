"""
Recovery parser for model output

Models wrap JSON in code fences, add commentary around it, or stop mid-string
when they hit the output token limit. parse_json_response() tries, in order:
fence stripping, brace-span extraction, a direct parse, then one repair of an
unterminated string. Two repairs are tried for that string: a closing quote
right after its opening quote, then a closing quote at the truncation point
(just before the final brace).
"""
import json
import logging
import re
from typing import Any

from stock_agent.exceptions import ParseError

logger = logging.getLogger(__name__)

EXCERPT_LENGTH = 500

_FENCE_OPEN = re.compile(r"^```[A-Za-z0-9_+-]*[ \t]*\n?")
_FENCE_CLOSE = re.compile(r"\n?```\s*$")


def strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    if cleaned.startswith("```"):
        cleaned = _FENCE_OPEN.sub("", cleaned, count=1)
        cleaned = _FENCE_CLOSE.sub("", cleaned, count=1)
    return cleaned


def extract_object_span(text: str) -> str:
    """First '{' to last '}', or the text unchanged if there is no such span."""
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start:end + 1]
    return text


def _unescaped_quotes(text: str) -> list[int]:
    positions = []
    for i, char in enumerate(text):
        if char != '"':
            continue
        backslashes = 0
        j = i - 1
        while j >= 0 and text[j] == "\\":
            backslashes += 1
            j -= 1
        if backslashes % 2 == 0:
            positions.append(i)
    return positions


def _find_unterminated_opener(quotes: list[int]) -> int | None:
    # An even number of quotes before a quote makes it an opener.
    for index in range(len(quotes) - 1, -1, -1):
        if index % 2 == 0:
            return quotes[index]
    return None


def _repair_candidates(text: str) -> list[str]:
    last_brace = text.rfind("}")
    if last_brace <= 0:
        return []

    truncated = text[:last_brace + 1]
    quotes = _unescaped_quotes(truncated)
    if len(quotes) % 2 == 0:
        return [truncated]

    opener = _find_unterminated_opener(quotes)
    if opener is None:
        return [truncated]

    return [
        truncated[:opener + 1] + '"' + truncated[opener + 1:],
        # string content runs up to the truncation point
        truncated[:last_brace] + '"' + truncated[last_brace:],
    ]


def _loads_object(text: str) -> dict[str, Any]:
    result = json.loads(text)
    if not isinstance(result, dict):
        raise ValueError(f"Expected a JSON object, got {type(result).__name__}")
    return result


def parse_json_response(response: str) -> dict[str, Any]:
    """
    Parse a model response into a JSON object.

    Args:
        response: Raw model text

    Returns:
        Parsed object

    Raises:
        ParseError: Every strategy failed. Carries the first 500
            characters of the cleaned text.
    """
    cleaned = extract_object_span(strip_code_fence(response))

    try:
        return _loads_object(cleaned)
    except ValueError as error:
        original_error = error

    for candidate in _repair_candidates(cleaned):
        try:
            report = _loads_object(candidate)
        except ValueError:
            continue
        logger.warning("Recovered model output after repairing truncated JSON")
        return report

    excerpt = cleaned[:EXCERPT_LENGTH]
    logger.error(f"Failed to parse JSON response. First {EXCERPT_LENGTH} chars: {excerpt}")
    raise ParseError(str(original_error), excerpt=excerpt)
