"""Interactive project survey."""

from pathlib import Path
from typing import Iterable, Optional
import click
from .models import MIN_BUSINESS_CONTEXT_LENGTH, ProjectProfile, RepositoryAnalysis
from .scanner.project_context import COMMON_DOC_DIRS


# (profile field, analysis field, prompt, required)
QUESTIONS = [
    ("name", "name", "Project name", True),
    ("description", "description", "Short project description", True),
    ("language", "language", "Main language", True),
    ("framework", "framework", "Framework (optional, Enter to skip)", False),
    ("architecture", "architecture", "Architecture", True),
    ("database", "database", "Database (optional, Enter to skip)", False),
    ("category", "project_category", "Project category (e.g. API REST, Web App, CLI, Library)", True),
    ("business_context", "business_context", "Business context (detailed description)", True),
]


def _validate_business_context(value: str) -> str:
    value = value.strip()
    if len(value) < MIN_BUSINESS_CONTEXT_LENGTH:
        raise click.BadParameter(
            f"business context must be at least {MIN_BUSINESS_CONTEXT_LENGTH} characters"
        )
    return value


def _ask(label: str, default: str, required: bool, field: str) -> str:
    if field == "business_context":
        return click.prompt(label, default=default or None, value_proc=_validate_business_context)
    if required:
        return click.prompt(label, default=default or None).strip()
    return click.prompt(label, default=default, show_default=bool(default)).strip()


def detect_documentation_dirs(project_path: Path) -> list[str]:
    """Well-known documentation directories present in ``project_path``."""
    return [name for name in COMMON_DOC_DIRS if (project_path / name).is_dir()]


def parse_extra_dirs(project_path: Path, raw: str, known: Iterable[str] = ()) -> list[str]:
    """Split a comma-separated list, keeping only new directories that exist."""
    seen = set(known)
    dirs = []
    for entry in raw.split(","):
        entry = entry.strip().strip("/")
        if not entry or entry in seen:
            continue
        if not (project_path / entry).is_dir():
            click.echo(f"   ⚠️  Skipping '{entry}': not a directory")
            continue
        seen.add(entry)
        dirs.append(entry)
    return dirs


def ask_documentation_dirs(project_path: Path) -> list[str]:
    detected = detect_documentation_dirs(project_path)
    if detected:
        click.echo(f"📚 Documentation directories found: {', '.join(detected)}")

    raw = click.prompt(
        "Extra documentation directories (comma-separated, Enter to skip)",
        default="",
        show_default=False,
    )
    return detected + parse_extra_dirs(project_path, raw, detected)


def run_survey(
    project_path: Path,
    origin: str = "new",
    provider_id: str = "cli",
    prefill: Optional[RepositoryAnalysis] = None,
) -> ProjectProfile:
    """Ask the profile questions and build a validated ProjectProfile.

    Args:
        project_path: Project root, used to find documentation directories
        origin: ``new`` or ``existing``
        provider_id: Provider recorded in the profile
        prefill: Analyzer draft whose values become the prompt defaults

    Returns:
        ProjectProfile

    Raises:
        pydantic.ValidationError: If the answers do not form a valid profile
    """
    answers = {}
    for field, analysis_field, label, required in QUESTIONS:
        default = getattr(prefill, analysis_field, "") if prefill else ""
        answers[field] = _ask(label, default, required, field)

    documentation_dirs = ask_documentation_dirs(project_path) if origin == "existing" else []

    return ProjectProfile(
        origin=origin,
        provider_id=provider_id,
        documentation_dirs=documentation_dirs,
        **answers,
    )
