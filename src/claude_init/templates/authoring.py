"""Authoring guides shipped as package data."""

import logging
from importlib import resources


logger = logging.getLogger(__name__)

GUIDE_FILES = {
    "agent": "agent_guide.md",
    "command": "command_guide.md",
    "skill": "skill_guide.md",
}

FALLBACK_GUIDES = {
    "agent": (
        "# Agent Guide\n\n"
        "An agent defines a role and a reasoning loop. Technical knowledge comes "
        "from injected skills.\n\n"
        "Required frontmatter: name, description, tools, model, color.\n"
    ),
    "command": (
        "# Command Guide\n\n"
        "A command orchestrates agents through explicit phases with validation.\n\n"
        "Required frontmatter: name, description, usage.\n"
    ),
    "skill": (
        "# Skill Guide\n\n"
        "A skill is self-contained domain knowledge that agents can inject.\n\n"
        "Required frontmatter: name, description.\n"
    ),
}


def load_guide(kind: str) -> str:
    """Return the authoring guide for ``agent``, ``command`` or ``skill``.

    A missing or empty resource degrades to a minimal built-in guide.

    Raises:
        KeyError: If ``kind`` is not a known guide
    """
    file_name = GUIDE_FILES[kind]
    try:
        content = resources.files(__package__).joinpath("guides").joinpath(file_name).read_text(
            encoding="utf-8"
        )
    except (FileNotFoundError, OSError):
        content = ""

    if not content.strip():
        logger.warning("The %s guide is empty, using the built-in fallback", kind)
        return FALLBACK_GUIDES[kind]

    return content
