"""Persistence of the project profile sidecar (``<config-dir>/project.yaml``)."""

import logging
from datetime import datetime, timezone
from pathlib import Path
import yaml
from .config import DEFAULT_CONFIG_DIR
from .models import ProjectProfile


logger = logging.getLogger(__name__)

PROJECT_FILE_NAME = "project.yaml"


def project_file_path(project_path: Path, config_dir: str = DEFAULT_CONFIG_DIR) -> Path:
    return project_path / config_dir / PROJECT_FILE_NAME


def profile_to_dict(profile: ProjectProfile) -> dict:
    """Map a profile onto the sidecar keys."""
    created_at = profile.created_at.astimezone(timezone.utc).replace(microsecond=0)
    return {
        "project_origin": profile.origin,
        "project_name": profile.name,
        "description": profile.description,
        "language": profile.language,
        "framework": profile.framework,
        "architecture": profile.architecture,
        "database": profile.database,
        "project_category": profile.category,
        "business_context": profile.business_context,
        "ai_provider": profile.provider_id,
        "created_at": created_at.isoformat().replace("+00:00", "Z"),
    }


def profile_from_dict(data: dict) -> ProjectProfile:
    """Build a profile from sidecar keys.

    Raises:
        pydantic.ValidationError: If required fields are missing or blank
    """
    origin = str(data.get("project_origin") or "new").strip().lower()
    # Older sidecars stored the survey labels verbatim
    if origin in ("existente", "existing"):
        origin = "existing"
    else:
        origin = "new"

    fields = {
        "origin": origin,
        "name": data.get("project_name") or "",
        "description": data.get("description") or "",
        "language": data.get("language") or "",
        "framework": data.get("framework") or "",
        "architecture": data.get("architecture") or "",
        "database": data.get("database") or "",
        "category": data.get("project_category") or "",
        "business_context": data.get("business_context") or "",
        "provider_id": data.get("ai_provider") or "cli",
    }

    created_at = data.get("created_at")
    if isinstance(created_at, datetime):
        fields["created_at"] = created_at
    elif isinstance(created_at, str) and created_at.strip():
        fields["created_at"] = datetime.fromisoformat(created_at.strip().replace("Z", "+00:00"))

    return ProjectProfile(**fields)


def save_profile(
    profile: ProjectProfile, project_path: Path, config_dir: str = DEFAULT_CONFIG_DIR
) -> Path:
    """Write the sidecar, creating the config directory if needed."""
    output_path = project_file_path(project_path, config_dir)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    content = yaml.safe_dump(profile_to_dict(profile), sort_keys=False, allow_unicode=True)
    output_path.write_text(content, encoding="utf-8")

    logger.debug("Project config saved to %s", output_path)
    return output_path


def load_profile(project_path: Path, config_dir: str = DEFAULT_CONFIG_DIR) -> ProjectProfile:
    """Read the sidecar written by ``init``.

    Raises:
        FileNotFoundError: If the sidecar does not exist
        ValueError: If the sidecar is not a YAML mapping
    """
    input_path = project_file_path(project_path, config_dir)
    if not input_path.exists():
        raise FileNotFoundError(
            f"Project config not found at {input_path} (run 'claude-init init' first)"
        )

    data = yaml.safe_load(input_path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Invalid project config: {input_path}")

    return profile_from_dict(data)
