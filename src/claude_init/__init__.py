"""claude-init - Bootstrap an AI-assisted development configuration for a project."""

__version__ = "0.1.0"

from .config import Config, GlobalConfig, ProviderConfig
from .models import (
    AgentInfo,
    CommandInfo,
    ProjectProfile,
    Recommendation,
    RepositoryAnalysis,
    SkillInfo,
)

__all__ = [
    "Config",
    "GlobalConfig",
    "ProviderConfig",
    "AgentInfo",
    "CommandInfo",
    "ProjectProfile",
    "Recommendation",
    "RepositoryAnalysis",
    "SkillInfo",
]
