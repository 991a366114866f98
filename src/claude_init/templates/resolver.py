"""External template lookup (``claude_examples/``) and adaptation."""

import logging
import re
from pathlib import Path
from typing import Iterable, Optional
from ..models import ProjectProfile


logger = logging.getLogger(__name__)

TEMPLATE_DIR_NAME = "claude_examples"
SEARCH_CANDIDATES = [
    Path(".") / TEMPLATE_DIR_NAME,
    Path("..") / TEMPLATE_DIR_NAME,
    Path("../..") / TEMPLATE_DIR_NAME,
]

TEMPLATE_KINDS = ("agent", "command", "skill")

# Tokens baked into the upstream example templates
SOURCE_PROJECT_NAME = "Griddo API"
SOURCE_FRAMEWORK = "Griddo"

AGENT_DESCRIPTION_PATTERN = re.compile(r"description: Specialist[^\n]*for Griddo API[^.\n]*\.")

LANGUAGE_SUBSTITUTIONS = {
    "go": [
        ("TypeScript", "Go"),
        ("typescript", "go"),
        ("npm run", "go run"),
        ("Express", "Gin"),
        ("Zod", "validator"),
        ("TypeORM", "GORM"),
    ],
    "python": [
        ("TypeScript", "Python"),
        ("typescript", "python"),
        ("npm run", "python"),
        ("Express", "Flask"),
        ("Zod", "Pydantic"),
        ("TypeORM", "SQLAlchemy"),
        (".ts", ".py"),
    ],
    "rust": [
        ("TypeScript", "Rust"),
        ("typescript", "rust"),
        ("npm run", "cargo run"),
        ("Express", "Actix-web"),
        (".ts", ".rs"),
    ],
}

LANGUAGE_ALIASES = {"golang": "go"}

JS_LANGUAGES = {"typescript", "javascript", "js", "ts"}

# Checked in order; the first framework keyword found wins
JS_FRAMEWORK_REPLACEMENTS = [
    ("react", "React"),
    ("next", "Next.js"),
    ("vue", "Vue"),
    ("angular", "Angular"),
]


class TemplateResolver:
    """Finds upstream example templates on disk and adapts them to a project."""

    def __init__(
        self,
        base_dir: Optional[Path] = None,
        extra_paths: Iterable[Path] = (),
    ):
        """Probe candidate roots and keep the first one that exists.

        Args:
            base_dir: Directory the relative candidates are resolved against;
                defaults to the current working directory
            extra_paths: Roots probed before the relative candidates
        """
        base = base_dir or Path.cwd()
        candidates = list(extra_paths) + [base / candidate for candidate in SEARCH_CANDIDATES]

        self.templates_path: Optional[Path] = None
        for candidate in candidates:
            if candidate.is_dir():
                self.templates_path = candidate
                logger.debug("Using external templates from %s", candidate)
                break

    def template_path(self, kind: str, name: str) -> Optional[Path]:
        """Map ``(kind, name)`` to ``<root>/<kind>s/<name>.md``.

        Skill names may carry their category, e.g. ``language/go``.
        """
        if self.templates_path is None or kind not in TEMPLATE_KINDS:
            return None
        return self.templates_path / f"{kind}s" / f"{name}.md"

    def has_template(self, kind: str, name: str) -> bool:
        path = self.template_path(kind, name)
        return path is not None and path.is_file()

    def load_template(self, kind: str, name: str) -> str:
        """Read a template.

        Raises:
            FileNotFoundError: If no template exists for ``(kind, name)``
        """
        path = self.template_path(kind, name)
        if path is None or not path.is_file():
            raise FileNotFoundError(f"{kind} template not found: {name}")
        return path.read_text(encoding="utf-8", errors="replace")

    def available_templates(self) -> dict[str, list[str]]:
        """List template names per kind directory."""
        result: dict[str, list[str]] = {f"{kind}s": [] for kind in TEMPLATE_KINDS}
        if self.templates_path is None:
            return result

        for kind_dir in result:
            directory = self.templates_path / kind_dir
            if directory.is_dir():
                result[kind_dir] = sorted(
                    path.relative_to(directory).with_suffix("").as_posix()
                    for path in directory.rglob("*.md")
                )
        return result

    def adapt(self, kind: str, content: str, profile: ProjectProfile) -> str:
        """Rewrite an upstream template for the target project."""
        return adapt_template(kind, content, profile)


def adapt_template(kind: str, content: str, profile: ProjectProfile) -> str:
    """Substitute project tokens and language-specific technology names.

    Args:
        kind: ``agent``, ``command`` or ``skill``
        content: Template text
        profile: Target project

    Returns:
        Adapted template text
    """
    if kind == "agent":
        content = AGENT_DESCRIPTION_PATTERN.sub(
            f"description: Specialist in architecture design for {profile.name}. "
            "Responsible for defining module structure, layers and the interaction "
            "between components.",
            content,
        )

    content = content.replace(SOURCE_PROJECT_NAME, profile.name)
    content = content.replace(SOURCE_FRAMEWORK, profile.framework or profile.name)

    return replace_technology_specifics(content, profile.language, profile.framework)


def replace_technology_specifics(content: str, language: str, framework: str = "") -> str:
    """Apply the substitution table for ``language``."""
    language = language.strip().lower()
    language = LANGUAGE_ALIASES.get(language, language)

    if language in JS_LANGUAGES:
        framework_lower = framework.lower()
        for keyword, replacement in JS_FRAMEWORK_REPLACEMENTS:
            if keyword in framework_lower:
                return content.replace("Express", replacement)
        return content

    for old, new in LANGUAGE_SUBSTITUTIONS.get(language, []):
        content = content.replace(old, new)

    return content
