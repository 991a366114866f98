"""Name normalization for artifact file names."""

import re
from typing import Iterable


_INVALID_CHARS = re.compile(r"[^a-z0-9_-]")
_HYPHEN_RUNS = re.compile(r"-+")

UNNAMED = "unnamed"


def sanitize(name: str) -> str:
    """Turn an arbitrary name into a kebab-case, filesystem-safe identifier.

    ``CodeReviewer`` becomes ``code-reviewer`` and ``api2Docs`` becomes
    ``api2-docs``. Underscores survive. A name with nothing usable left
    becomes ``unnamed``.

    Args:
        name: Raw name, possibly camelCase or containing punctuation

    Returns:
        Sanitized identifier
    """
    chars: list[str] = []
    for index, char in enumerate(name):
        if index > 0 and "A" <= char <= "Z":
            previous = name[index - 1]
            if "a" <= previous <= "z" or "0" <= previous <= "9":
                chars.append("-")
        chars.append(char)

    result = "".join(chars).lower()
    result = _INVALID_CHARS.sub("-", result)
    result = _HYPHEN_RUNS.sub("-", result)
    result = result.strip("-")

    return result or UNNAMED


def merge_unique(recommended: Iterable[str], base: Iterable[str]) -> list[str]:
    """Union of base and recommended names, base first, order preserved."""
    seen: set[str] = set()
    merged: list[str] = []

    for item in list(base) + list(recommended):
        if item not in seen:
            seen.add(item)
            merged.append(item)

    return merged
