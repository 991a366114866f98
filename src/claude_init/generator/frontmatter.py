"""Read metadata back from generated agent, skill and command files.

Parsing never fails: a missing or malformed frontmatter block degrades to
defaults derived from the file name and the first line of the body.
"""

from pathlib import Path
from typing import Any, Optional
from ..models import AgentInfo, CommandInfo, SkillInfo


DELIMITER = "---"
MAX_DESCRIPTION_CHARS = 200
SKILL_CATEGORIES = ("language", "framework", "base")


def split_frontmatter(content: str) -> tuple[Optional[str], str]:
    """Split raw frontmatter text from the Markdown body.

    Returns:
        ``(frontmatter, body)``; frontmatter is None when no closed block exists
    """
    text = content.lstrip()
    if not text.startswith(DELIMITER):
        return None, content

    parts = text.split(DELIMITER, 2)
    if len(parts) < 3:
        return None, content

    _, raw_meta, body = parts
    return raw_meta, body


def parse_frontmatter(raw_meta: str) -> dict[str, str]:
    """Parse a frontmatter block as flat ``key: value`` lines.

    Only the first colon separates key from value, and values are kept as
    written: ``#`` and words like ``yes`` carry no special meaning. List
    fields stay as ``[a, b]`` text for ``parse_list_value``.
    """
    metadata = {}
    for raw_line in raw_meta.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        key, sep, value = line.partition(":")
        if sep and key.strip():
            metadata[key.strip()] = value.strip()
    return metadata


def parse_list_value(value: Any) -> list[str]:
    """Normalize a list-valued field.

    ``[a, b]`` (as text or as a sequence) becomes ``["a", "b"]`` with quotes
    around items dropped; any other non-empty value becomes a one-element list.
    """
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return [str(item).strip() for item in value if item is not None and str(item).strip()]

    text = str(value).strip()
    if not text:
        return []
    if text.startswith("["):
        inner = text[1:]
        if inner.endswith("]"):
            inner = inner[:-1]
        items = (part.strip().strip("\"'").strip() for part in inner.split(","))
        return [item for item in items if item]
    return [text]


def _text(metadata: dict[str, Any], key: str) -> str:
    value = metadata.get(key)
    if value is None:
        return ""
    return str(value).strip().strip('"').strip("'").strip()


def first_body_line(body: str, skip_headings: bool = False) -> str:
    """First non-empty body line without its heading marks, clipped to 200 chars."""
    for raw_line in body.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        if skip_headings and line.startswith("#"):
            continue
        line = line.lstrip("#").strip()
        if not line:
            continue
        if len(line) > MAX_DESCRIPTION_CHARS:
            return line[:MAX_DESCRIPTION_CHARS] + "..."
        return line
    return ""


def _read(path: Path) -> tuple[dict[str, Any], str]:
    content = path.read_text(encoding="utf-8", errors="replace")
    raw_meta, body = split_frontmatter(content)
    if raw_meta is None:
        return {}, body
    return parse_frontmatter(raw_meta), body


def parse_agent(path: Path) -> AgentInfo:
    """Parse an agent file; the name always comes from the file name.

    Raises:
        OSError: If the file cannot be read
    """
    metadata, body = _read(path)
    name = path.stem

    description = _text(metadata, "description") or first_body_line(body) or f"Agent {name}"
    return AgentInfo(
        name=name,
        description=description,
        color=_text(metadata, "color") or "gray",
        model=_text(metadata, "model") or "sonnet",
        tools=parse_list_value(metadata.get("tools")),
        skills=parse_list_value(metadata.get("skills")),
        path=path,
    )


def skill_category(path: Path, declared: str = "") -> str:
    """Category from the parent directory, then the declared one, else ``other``."""
    if path.parent.name in SKILL_CATEGORIES:
        return path.parent.name
    if declared in SKILL_CATEGORIES:
        return declared
    return "other"


def parse_skill(path: Path) -> SkillInfo:
    metadata, body = _read(path)
    name = path.stem

    description = _text(metadata, "description") or first_body_line(body, skip_headings=True)
    return SkillInfo(
        name=name,
        category=skill_category(path, _text(metadata, "category")),
        description=description or f"Skill {name}",
        purpose=_text(metadata, "purpose") or f"Provides {name}-related expertise and capabilities",
        path=path,
    )


def parse_command(path: Path) -> CommandInfo:
    metadata, body = _read(path)
    name = path.stem

    description = _text(metadata, "description") or first_body_line(body) or f"Command {name}"
    return CommandInfo(
        name=name,
        description=description,
        usage=_text(metadata, "usage") or name,
        path=path,
    )
