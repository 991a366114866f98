"""Locate a JSON object inside free-form LLM output."""

import json


FENCE_MARKERS = ("```json", "```JSON", "```")


def _is_valid_json(candidate: str) -> bool:
    try:
        json.loads(candidate)
    except json.JSONDecodeError:
        return False
    return True


def _brace_span(text: str) -> str:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end == -1 or end <= start:
        return ""
    return text[start : end + 1]


def extract_json(text: str) -> str:
    """Return the first well-formed JSON object found in ``text``.

    The span from the first ``{`` to the last ``}`` is tried first. When that
    is not valid JSON, fenced blocks tagged ``json``, ``JSON`` or untagged
    are probed in that order.

    Args:
        text: Raw model response

    Returns:
        The JSON text, or an empty string when nothing valid was found
    """
    text = text.strip()

    candidate = _brace_span(text)
    if candidate and _is_valid_json(candidate):
        return candidate

    for marker in FENCE_MARKERS:
        start = text.find(marker)
        if start == -1:
            continue

        body_start = start + len(marker)
        end = text.find("```", body_start)
        if end == -1:
            continue

        fenced = _brace_span(text[body_start:end].strip())
        if fenced and _is_valid_json(fenced):
            return fenced

    return ""
