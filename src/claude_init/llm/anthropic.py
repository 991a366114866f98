"""Anthropic Messages API provider."""

from typing import Optional
import httpx
from .descriptors import PROVIDERS
from .provider import LLMProvider, ProviderError, build_http_client, post_json


ANTHROPIC_VERSION = "2023-06-01"


class AnthropicProvider(LLMProvider):
    """Claude over HTTP. The system prompt travels outside ``messages``."""

    provider_id = "claude-api"

    def __init__(
        self,
        api_key: str,
        model: str = "",
        base_url: str = "",
        max_tokens: int = 0,
        client: Optional[httpx.Client] = None,
    ):
        descriptor = PROVIDERS[self.provider_id]
        self.api_key = api_key
        self.model = model or descriptor.default_model
        self.base_url = base_url or descriptor.default_endpoint
        self.max_tokens = max_tokens or descriptor.default_max_tokens
        self.client, self._owns_client = build_http_client(descriptor.timeout, client)

    def build_payload(self, system_prompt: str, user_message: str) -> dict:
        payload = {
            "model": self.model,
            "max_tokens": self.max_tokens,
            "messages": [{"role": "user", "content": user_message}],
        }
        if system_prompt:
            payload["system"] = system_prompt
        return payload

    def send(self, system_prompt: str, user_message: str) -> str:
        data = post_json(
            self.client,
            self.base_url,
            self.build_payload(system_prompt, user_message),
            headers={"x-api-key": self.api_key, "anthropic-version": ANTHROPIC_VERSION},
        )

        error = data.get("error")
        if error:
            if isinstance(error, dict):
                raise ProviderError(
                    f"API error: {error.get('type', '')} - {error.get('message', '')}"
                )
            raise ProviderError(f"API error: {error}")

        content = data.get("content") or []
        if not content:
            raise ProviderError("empty response from API")

        return content[0].get("text", "")

    def is_available(self) -> bool:
        return bool(self.api_key.strip())

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
