"""Chat Completions providers: OpenAI, Z.AI and Groq share one wire format."""

from typing import Optional
import httpx
from .descriptors import PROVIDERS
from .provider import LLMProvider, ProviderError, build_http_client, post_json


DEFAULT_TEMPERATURE = 0.7


def uses_max_completion_tokens(model: str) -> bool:
    """GPT-5 family models reject ``max_tokens``."""
    lowered = model.lower()
    return "gpt-5" in lowered and "gpt-4" not in lowered and "gpt-3" not in lowered


class OpenAICompatibleProvider(LLMProvider):
    """Provider for any ``/chat/completions`` endpoint with Bearer auth.

    The provider id selects the defaults (``openai``, ``zai`` or ``groq``).
    """

    def __init__(
        self,
        provider_id: str,
        api_key: str,
        model: str = "",
        base_url: str = "",
        max_tokens: int = 0,
        temperature: float = DEFAULT_TEMPERATURE,
        client: Optional[httpx.Client] = None,
    ):
        descriptor = PROVIDERS[provider_id]
        self.provider_id = provider_id
        self.api_key = api_key
        self.model = model or descriptor.default_model
        self.base_url = (base_url or descriptor.default_endpoint).rstrip("/")
        self.max_tokens = max_tokens or descriptor.default_max_tokens
        self.temperature = temperature
        self.client, self._owns_client = build_http_client(descriptor.timeout, client)

    def build_payload(self, system_prompt: str, user_message: str) -> dict:
        messages = []
        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})
        messages.append({"role": "user", "content": user_message})

        payload = {
            "model": self.model,
            "messages": messages,
            "temperature": self.temperature,
        }
        if uses_max_completion_tokens(self.model):
            payload["max_completion_tokens"] = self.max_tokens
        else:
            payload["max_tokens"] = self.max_tokens
        return payload

    def send(self, system_prompt: str, user_message: str) -> str:
        data = post_json(
            self.client,
            f"{self.base_url}/chat/completions",
            self.build_payload(system_prompt, user_message),
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

        error = data.get("error")
        if error:
            if isinstance(error, dict):
                raise ProviderError(f"API error: {error.get('message', error)}")
            raise ProviderError(f"API error: {error}")

        choices = data.get("choices") or []
        if not choices:
            raise ProviderError("empty response from API")

        return (choices[0].get("message") or {}).get("content") or ""

    def is_available(self) -> bool:
        return bool(self.api_key.strip())

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
