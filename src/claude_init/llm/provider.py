"""Abstract LLM provider interface."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Optional
import httpx


logger = logging.getLogger(__name__)


class ProviderError(RuntimeError):
    """A provider could not produce a response."""


class LLMProvider(ABC):
    """Uniform ``send(system, user) -> text`` over every back-end."""

    provider_id: str = ""

    @abstractmethod
    def send(self, system_prompt: str, user_message: str) -> str:
        """Send one message and return the response text.

        Args:
            system_prompt: System prompt, may be empty
            user_message: The user prompt

        Returns:
            Generated text

        Raises:
            ProviderError: If the back-end fails or returns no content
        """
        pass

    @abstractmethod
    def is_available(self) -> bool:
        """Report whether the provider can be used right now."""
        pass

    def close(self) -> None:
        """Release resources held by the provider."""

    def __enter__(self) -> "LLMProvider":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def post_json(
    client: httpx.Client,
    url: str,
    payload: dict,
    headers: Optional[dict] = None,
    params: Optional[dict] = None,
) -> dict:
    """POST a JSON body and decode the JSON answer.

    Args:
        client: HTTP client owned by the calling provider
        url: Endpoint URL
        payload: Request body
        headers: Extra request headers
        params: Query string parameters

    Returns:
        Decoded JSON object

    Raises:
        ProviderError: On transport failure, non-200 status or undecodable body
    """
    request_headers = {"Content-Type": "application/json"}
    if headers:
        request_headers.update(headers)

    logger.debug("POST %s", url)
    try:
        response = client.post(url, json=payload, headers=request_headers, params=params)
    except httpx.HTTPError as e:
        raise ProviderError(f"error sending request: {e}") from e

    if response.status_code != httpx.codes.OK:
        raise ProviderError(f"API error (status {response.status_code}): {response.text}")

    try:
        data = response.json()
    except json.JSONDecodeError as e:
        raise ProviderError(f"error decoding response: {e}") from e

    if not isinstance(data, dict):
        raise ProviderError(f"unexpected response body: {response.text[:200]}")
    return data


def build_http_client(timeout: float, client: Optional[httpx.Client] = None) -> tuple[httpx.Client, bool]:
    """Return the client to use and whether the provider owns it."""
    if client is not None:
        return client, False
    return httpx.Client(timeout=timeout), True
