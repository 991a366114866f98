"""LLM provider abstraction layer."""

from .provider import LLMProvider, ProviderError
from .descriptors import PROVIDERS, ProviderDescriptor, get_descriptor
from .cli_provider import ClaudeCLIProvider
from .anthropic import AnthropicProvider
from .openai_compat import OpenAICompatibleProvider
from .gemini import GeminiProvider
from .factory import ConfigurationError, available_providers, create_provider

__all__ = [
    "LLMProvider",
    "ProviderError",
    "PROVIDERS",
    "ProviderDescriptor",
    "get_descriptor",
    "ClaudeCLIProvider",
    "AnthropicProvider",
    "OpenAICompatibleProvider",
    "GeminiProvider",
    "ConfigurationError",
    "available_providers",
    "create_provider",
]
