"""Configuration management for claude-init.

Two layers live here: the process-level ``Config`` read from the environment
(and an optional ``.env`` file), and the persistent ``GlobalConfig`` that the
``config`` command writes to the user's configuration directory.
"""

import os
from pathlib import Path
from typing import Optional
import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


load_dotenv()


DEFAULT_CONFIG_DIR = ".claude"
DEFAULT_PROVIDER = "cli"
CONFIG_APP_DIR = "claude-init"
CONFIG_FILE_NAME = "config.yaml"

# Environment variables consulted when the config file has no key for a provider
PROVIDER_API_KEY_ENV = {
    "claude-api": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
    "zai": "ZAI_API_KEY",
    "gemini": "GEMINI_API_KEY",
    "groq": "GROQ_API_KEY",
}


class Config(BaseModel):
    """Application configuration."""

    # Output Settings
    config_dir: str = Field(default=DEFAULT_CONFIG_DIR)

    # Subprocess provider
    cli_binary: str = Field(default="claude")
    cli_timeout: int = Field(default=120)

    # Template lookup
    templates_dir: Optional[Path] = Field(default=None)

    log_level: str = Field(default="INFO")

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        def _parse_int(value: Optional[str], fallback: int) -> int:
            try:
                return int(value) if value is not None else fallback
            except ValueError:
                return fallback

        templates_dir_env = os.getenv("CLAUDE_INIT_TEMPLATES_DIR")

        return cls(
            config_dir=os.getenv("CLAUDE_INIT_CONFIG_DIR", DEFAULT_CONFIG_DIR),
            cli_binary=os.getenv("CLAUDE_INIT_CLI_BINARY", "claude"),
            cli_timeout=_parse_int(os.getenv("CLAUDE_INIT_CLI_TIMEOUT"), 120),
            templates_dir=Path(templates_dir_env) if templates_dir_env else None,
            log_level=os.getenv("CLAUDE_INIT_LOG_LEVEL", "INFO").upper(),
        )


class ProviderConfig(BaseModel):
    """Per-provider settings stored in the global config file."""

    api_key: str = ""
    base_url: str = ""
    model: str = ""
    max_tokens: int = 0

    def is_configured(self) -> bool:
        return bool(self.api_key.strip())


class GlobalConfig(BaseModel):
    """Persistent user configuration (``~/.config/claude-init/config.yaml``)."""

    provider: str = DEFAULT_PROVIDER
    providers: dict[str, ProviderConfig] = Field(default_factory=dict)

    @staticmethod
    def path() -> Path:
        """Resolve the config file location.

        ``$XDG_CONFIG_HOME`` takes precedence, then ``%APPDATA%`` on Windows,
        then ``~/.config``.
        """
        xdg = os.getenv("XDG_CONFIG_HOME")
        if xdg:
            return Path(xdg) / CONFIG_APP_DIR / CONFIG_FILE_NAME

        appdata = os.getenv("APPDATA")
        if appdata:
            return Path(appdata) / CONFIG_APP_DIR / CONFIG_FILE_NAME

        return Path.home() / ".config" / CONFIG_APP_DIR / CONFIG_FILE_NAME

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "GlobalConfig":
        """Load the config file, returning defaults when it does not exist.

        Raises:
            ValueError: If the file exists but is not valid YAML
        """
        config_path = path or cls.path()
        if not config_path.exists():
            return cls()

        try:
            data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid config file {config_path}: {e}") from e

        if not isinstance(data, dict):
            raise ValueError(f"Invalid config file {config_path}: expected a mapping")

        providers = {
            name: ProviderConfig(**(settings or {}))
            for name, settings in (data.get("providers") or {}).items()
        }
        return cls(provider=data.get("provider") or DEFAULT_PROVIDER, providers=providers)

    def save(self, path: Optional[Path] = None) -> Path:
        """Write the config file with owner-only permissions."""
        config_path = path or self.path()
        config_path.parent.mkdir(parents=True, exist_ok=True)

        content = yaml.safe_dump(self.model_dump(), sort_keys=False, default_flow_style=False)
        # Owner-only from creation; chmod also tightens a pre-existing file
        fd = os.open(config_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            os.chmod(config_path, 0o600)
            f.write(content)
        return config_path

    def get_provider_config(self, provider_id: str) -> ProviderConfig:
        """Return stored settings for a provider, filling the key from the environment."""
        stored = self.providers.get(provider_id, ProviderConfig())
        if stored.is_configured():
            return stored

        env_var = PROVIDER_API_KEY_ENV.get(provider_id)
        env_key = os.getenv(env_var, "") if env_var else ""
        if env_key.strip():
            return stored.model_copy(update={"api_key": env_key.strip()})
        return stored

    def set_provider_config(self, provider_id: str, settings: ProviderConfig) -> None:
        self.providers[provider_id] = settings

    def is_configured(self, provider_id: str) -> bool:
        """A provider is usable when it is ``cli`` or has a non-blank key."""
        if provider_id == "cli":
            return True
        return self.get_provider_config(provider_id).is_configured()
