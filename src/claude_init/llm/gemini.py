"""Google Gemini ``generateContent`` provider."""

from typing import Optional
import httpx
from .descriptors import PROVIDERS
from .provider import LLMProvider, ProviderError, build_http_client, post_json


class GeminiProvider(LLMProvider):
    """Gemini over HTTP. The API key goes in the query string."""

    provider_id = "gemini"

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
        self.base_url = (base_url or descriptor.default_endpoint).rstrip("/")
        self.max_tokens = max_tokens or descriptor.default_max_tokens
        self.client, self._owns_client = build_http_client(descriptor.timeout, client)

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    def build_payload(self, system_prompt: str, user_message: str) -> dict:
        payload = {
            "contents": [{"role": "user", "parts": [{"text": user_message}]}],
            "generationConfig": {"maxOutputTokens": self.max_tokens},
        }
        if system_prompt:
            payload["systemInstruction"] = {"parts": [{"text": system_prompt}]}
        return payload

    def send(self, system_prompt: str, user_message: str) -> str:
        data = post_json(
            self.client,
            self.endpoint,
            self.build_payload(system_prompt, user_message),
            params={"key": self.api_key},
        )

        error = data.get("error")
        if error:
            if isinstance(error, dict):
                raise ProviderError(
                    f"API error: {error.get('status', '')} - {error.get('message', '')}"
                )
            raise ProviderError(f"API error: {error}")

        candidates = data.get("candidates") or []
        if not candidates:
            raise ProviderError("empty response from API")

        parts = (candidates[0].get("content") or {}).get("parts") or []
        if not parts:
            raise ProviderError("empty response from API")

        return parts[0].get("text", "")

    def is_available(self) -> bool:
        return bool(self.api_key.strip())

    def close(self) -> None:
        if self._owns_client:
            self.client.close()
