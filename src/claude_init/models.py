"""Core data models for claude-init."""

from datetime import datetime, timezone
from pathlib import Path
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


MIN_BUSINESS_CONTEXT_LENGTH = 20

REQUIRED_PROFILE_FIELDS = (
    "name",
    "description",
    "language",
    "architecture",
    "category",
    "business_context",
)


class ProjectProfile(BaseModel):
    """Facts about the target project, collected once by the survey."""

    model_config = ConfigDict(frozen=True)

    origin: Literal["new", "existing"] = "new"
    name: str
    description: str
    language: str
    framework: str = ""
    architecture: str
    database: str = ""
    category: str
    business_context: str
    provider_id: str = "cli"
    documentation_dirs: List[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @field_validator("*", mode="before")
    @classmethod
    def _strip_strings(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @field_validator(*REQUIRED_PROFILE_FIELDS)
    @classmethod
    def _require_non_empty(cls, value: str, info) -> str:
        if not value:
            raise ValueError(f"{info.field_name} is required")
        return value

    @field_validator("business_context")
    @classmethod
    def _business_context_length(cls, value: str) -> str:
        if len(value) < MIN_BUSINESS_CONTEXT_LENGTH:
            raise ValueError(
                f"business context must be at least {MIN_BUSINESS_CONTEXT_LENGTH} characters"
            )
        return value

    @field_validator("documentation_dirs", mode="before")
    @classmethod
    def _clean_doc_dirs(cls, value):
        if value is None:
            return []
        return [entry.strip() for entry in value if entry and entry.strip()]


class Recommendation(BaseModel):
    """Agents, commands and skills suggested for a project."""

    agents: List[str] = Field(default_factory=list)
    commands: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    description: str = ""


class RepositoryAnalysis(BaseModel):
    """Draft profile inferred from an existing repository."""

    name: str = ""
    description: str = ""
    language: str = ""
    framework: str = ""
    architecture: str = ""
    database: str = ""
    project_category: str = ""
    business_context: str = ""
    git_system: str = ""
    testing_framework: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value):
        # LLMs occasionally answer null or a number for a text field
        if value is None:
            return ""
        if not isinstance(value, str):
            return str(value)
        return value.strip()


class AgentInfo(BaseModel):
    """Metadata read back from a generated agent file."""

    name: str
    description: str = ""
    color: str = "gray"
    model: str = "sonnet"
    tools: List[str] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    path: Optional[Path] = None


class SkillInfo(BaseModel):
    """Metadata read back from a generated skill file."""

    name: str
    category: Literal["language", "framework", "base", "other"] = "other"
    description: str = ""
    purpose: str = ""
    path: Optional[Path] = None


class CommandInfo(BaseModel):
    """Metadata read back from a generated command file."""

    name: str
    description: str = ""
    usage: str = ""
    path: Optional[Path] = None


class BaseItems(BaseModel):
    """Artifacts that every generation includes regardless of recommendation."""

    model_config = ConfigDict(frozen=True)

    agents: tuple[str, ...]
    commands: tuple[str, ...]
    skills: tuple[str, ...]


BASE_ITEMS = BaseItems(
    agents=("architect", "writer", "debugger", "planning-agent", "orchestrator-agent"),
    commands=("plan-manage", "orchestrator", "pre-flight"),
    skills=("technical-writer", "code-reviewer", "debug-master"),
)
