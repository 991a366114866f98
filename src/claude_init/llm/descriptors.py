"""Static facts about each supported provider."""

from pydantic import BaseModel, ConfigDict


class ProviderDescriptor(BaseModel):
    """Defaults fixed per provider id."""

    model_config = ConfigDict(frozen=True)

    id: str
    display_name: str
    requires_api_key: bool
    default_endpoint: str = ""
    default_model: str = ""
    default_max_tokens: int = 0
    timeout: float = 120.0
    api_key_url: str = ""


PROVIDERS: dict[str, ProviderDescriptor] = {
    "cli": ProviderDescriptor(
        id="cli",
        display_name="Claude CLI",
        requires_api_key=False,
        timeout=120.0,
        api_key_url="https://claude.com/claude-code",
    ),
    "claude-api": ProviderDescriptor(
        id="claude-api",
        display_name="Claude API",
        requires_api_key=True,
        default_endpoint="https://api.anthropic.com/v1/messages",
        default_model="claude-opus-4",
        default_max_tokens=200000,
        api_key_url="https://console.anthropic.com/settings/keys",
    ),
    "openai": ProviderDescriptor(
        id="openai",
        display_name="OpenAI",
        requires_api_key=True,
        default_endpoint="https://api.openai.com/v1",
        default_model="gpt-5.1",
        default_max_tokens=100000,
        api_key_url="https://platform.openai.com/account/api-keys",
    ),
    "zai": ProviderDescriptor(
        id="zai",
        display_name="Z.AI",
        requires_api_key=True,
        default_endpoint="https://api.z.ai/api/paas/v4",
        default_model="glm-4.6",
        default_max_tokens=32768,
        api_key_url="https://z.ai",
    ),
    "gemini": ProviderDescriptor(
        id="gemini",
        display_name="Gemini",
        requires_api_key=True,
        default_endpoint="https://generativelanguage.googleapis.com/v1beta/models",
        default_model="gemini-2.5-flash",
        default_max_tokens=1000000,
        api_key_url="https://aistudio.google.com/apikey",
    ),
    "groq": ProviderDescriptor(
        id="groq",
        display_name="Groq",
        requires_api_key=True,
        default_endpoint="https://api.groq.com/openai/v1",
        default_model="llama-3.3-70b-versatile",
        default_max_tokens=32768,
        timeout=60.0,
        api_key_url="https://console.groq.com/keys",
    ),
}


def get_descriptor(provider_id: str) -> ProviderDescriptor:
    """Look up a provider.

    Raises:
        KeyError: If the id is not one of the supported providers
    """
    return PROVIDERS[provider_id]
