"""Pytest configuration and shared fixtures."""

import re
from pathlib import Path
from typing import Callable, Optional
import pytest
from claude_init.config import PROVIDER_API_KEY_ENV
from claude_init.llm.provider import LLMProvider, ProviderError
from claude_init.models import ProjectProfile


COMMAND_PROMPT_NAME = re.compile(r"configuration file for a (\S+) command")
AGENT_PROMPT_NAME = re.compile(r"configuration file for a (\S+) agent")
SKILL_PROMPT_NAME = re.compile(r"skill called (\S+) for a project")


class MockProvider(LLMProvider):
    """Provider double that records calls and answers from a handler."""

    def __init__(
        self,
        handler: Optional[Callable[[str, str], str]] = None,
        provider_id: str = "cli",
        available: bool = True,
    ):
        self.provider_id = provider_id
        self.handler = handler or (lambda system, user: "ok")
        self.available = available
        self.calls: list[tuple[str, str]] = []
        self.closed = False

    def send(self, system_prompt: str, user_message: str) -> str:
        self.calls.append((system_prompt, user_message))
        return self.handler(system_prompt, user_message)

    def is_available(self) -> bool:
        return self.available

    def close(self) -> None:
        self.closed = True


class ScriptedResponses:
    """Answers each pipeline prompt with plausible Markdown.

    Args:
        recommendation: JSON text for the recommendation prompt; None makes it fail
        fail_commands: Command names whose generation raises ProviderError
        output_dir: When set, records whether both READMEs existed at each command call
    """

    def __init__(
        self,
        recommendation: Optional[str] = None,
        fail_commands: tuple[str, ...] = (),
        output_dir: Optional[Path] = None,
    ):
        self.recommendation = recommendation
        self.fail_commands = fail_commands
        self.output_dir = output_dir
        self.readmes_seen_by_command: dict[str, bool] = {}

    def __call__(self, system_prompt: str, user_message: str) -> str:
        if "CLAUDE.md file for the following project" in user_message:
            return "# CLAUDE.md\n\nProject context for tests.\n"

        if "recommend the optimal" in user_message:
            if self.recommendation is None:
                raise ProviderError("recommendation unavailable")
            return self.recommendation

        if "detailed development guide" in user_message:
            return "# Development Guide\n\nHow to work on this project.\n"

        match = COMMAND_PROMPT_NAME.search(user_message)
        if match:
            name = match.group(1)
            if self.output_dir is not None:
                self.readmes_seen_by_command[name] = (
                    (self.output_dir / "agents" / "README.md").exists()
                    and (self.output_dir / "skills" / "README.md").exists()
                )
            if name in self.fail_commands:
                raise ProviderError(f"API error (status 500): {name} failed")
            return f"---\nname: {name}\ndescription: Generated {name} command\nusage: {name} [args]\n---\n\n# Command: {name}\n"

        match = AGENT_PROMPT_NAME.search(user_message)
        if match:
            name = match.group(1)
            return f"---\nname: {name}\ndescription: Generated {name} agent\ntools: Read, Write\nmodel: sonnet\ncolor: gray\n---\n\n# {name}\n"

        match = SKILL_PROMPT_NAME.search(user_message)
        if match:
            name = match.group(1)
            return f"---\nname: {name}\ndescription: Generated {name} skill\n---\n\n# {name}\n"

        return "unexpected prompt"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch) -> Path:
    """Point the global config at a temp dir and hide real API keys."""
    config_home = tmp_path / "xdg"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    for env_var in PROVIDER_API_KEY_ENV.values():
        monkeypatch.delenv(env_var, raising=False)
    for env_var in ("CLAUDE_INIT_CONFIG_DIR", "CLAUDE_INIT_TEMPLATES_DIR", "CLAUDE_INIT_LOG_LEVEL"):
        monkeypatch.delenv(env_var, raising=False)
    return config_home / "claude-init" / "config.yaml"


@pytest.fixture
def temp_repo(tmp_path: Path) -> Path:
    """Create a temporary repository structure for testing."""
    repo = tmp_path / "test_repo"
    repo.mkdir()

    (repo / "README.md").write_text("# Test Project")
    (repo / "main.go").write_text("package main\n")
    (repo / "go.mod").write_text("module example.com/svc\n\ngo 1.22\n")

    return repo


@pytest.fixture
def profile() -> ProjectProfile:
    """A new Go service profile."""
    return ProjectProfile(
        origin="new",
        name="svc",
        description="Order processing service",
        language="Go",
        architecture="Clean",
        category="API REST",
        business_context="Processes customer orders for the online store",
    )


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider(ScriptedResponses())
