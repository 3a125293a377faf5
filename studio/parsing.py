import json
import logging
import re
from typing import Any, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

_FENCE_JSON = re.compile(r"```json\s*")
_FENCE = re.compile(r"```\s*")


def strip_code_fences(text: str) -> str:
    """Remove every ```json / ``` marker and surrounding whitespace."""
    text = _FENCE_JSON.sub("", text)
    text = _FENCE.sub("", text)
    return text.strip()


def _bracket_slice(text: str) -> Optional[str]:
    """Slice from the first opener to the last matching closer.

    The opener is ``{`` when it appears before any ``[``, otherwise ``[``.
    """
    idx_obj = text.find("{")
    idx_arr = text.find("[")

    if idx_obj != -1 and (idx_arr == -1 or idx_obj < idx_arr):
        start, end = idx_obj, text.rfind("}")
    else:
        start, end = idx_arr, text.rfind("]")

    if start == -1 or end == -1:
        return None
    return text[start : end + 1]


def extract_json(text: Optional[str], fallback: T) -> Any:
    """
    Recover a JSON value from generator output.

    Tiers: fence-stripped direct parse, then a bracket-sliced parse of the raw
    text, then ``fallback`` (returned as the same object). Never raises.

    Args:
        text: raw response text, may be empty or None
        fallback: value returned when nothing parseable is found

    Returns:
        The parsed JSON document (not validated against any shape) or ``fallback``.
    """
    if not text:
        return fallback

    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned)
    except (ValueError, RecursionError) as e:
        logger.warning("Direct JSON parse failed, attempting extraction: %s", e)

    candidate = _bracket_slice(text)
    if candidate is not None:
        try:
            return json.loads(candidate)
        except (ValueError, RecursionError) as e:
            logger.error("Failed to extract JSON: %s", e)
    else:
        logger.error("Failed to extract JSON: no bracketed payload in response")

    return fallback
