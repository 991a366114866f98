"""Provider selection: turn a provider id into a ready client."""

import logging
from typing import Optional
import httpx
from ..config import Config, GlobalConfig
from .anthropic import AnthropicProvider
from .cli_provider import ClaudeCLIProvider
from .descriptors import PROVIDERS
from .gemini import GeminiProvider
from .openai_compat import OpenAICompatibleProvider
from .provider import LLMProvider


logger = logging.getLogger(__name__)


class ConfigurationError(ValueError):
    """Unknown provider id or a provider without credentials."""


def available_providers() -> list[str]:
    return list(PROVIDERS)


def create_provider(
    provider_id: str,
    global_config: Optional[GlobalConfig] = None,
    config: Optional[Config] = None,
    http_client: Optional[httpx.Client] = None,
) -> LLMProvider:
    """Build the provider for ``provider_id``.

    Per-provider defaults are merged with any overrides stored in the global
    config (base URL, model, max tokens).

    Args:
        provider_id: One of ``cli, claude-api, openai, zai, gemini, groq``
        global_config: Persistent config; loaded from disk when omitted
        config: Process configuration (CLI binary and timeout)
        http_client: Optional HTTP client shared with the provider

    Returns:
        Provider instance

    Raises:
        ConfigurationError: If the id is unknown or its API key is missing
    """
    provider_id = (provider_id or "").strip()
    if provider_id not in PROVIDERS:
        raise ConfigurationError(f"invalid provider: {provider_id}")

    config = config or Config.from_env()

    if provider_id == "cli":
        return ClaudeCLIProvider(binary=config.cli_binary, timeout=config.cli_timeout)

    global_config = global_config or GlobalConfig.load()
    settings = global_config.get_provider_config(provider_id)
    if not settings.is_configured():
        raise ConfigurationError(
            f"{provider_id} provider not configured. "
            f"Please run: claude-init config --provider {provider_id}"
        )

    logger.debug(
        "Creating %s provider (model=%s, base_url=%s)",
        provider_id,
        settings.model or PROVIDERS[provider_id].default_model,
        settings.base_url or "default",
    )

    common = dict(
        api_key=settings.api_key.strip(),
        model=settings.model,
        base_url=settings.base_url,
        max_tokens=settings.max_tokens,
        client=http_client,
    )

    if provider_id == "claude-api":
        return AnthropicProvider(**common)
    if provider_id == "gemini":
        return GeminiProvider(**common)
    return OpenAICompatibleProvider(provider_id, **common)
