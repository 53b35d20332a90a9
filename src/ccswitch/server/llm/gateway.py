"""Async client for the OpenAI-compatible gateway behind the prompt optimizer."""

from __future__ import annotations

import os
from typing import Any

import httpx


class AIGatewayError(Exception):
    """Any failed gateway call."""

    pass


class AIGatewayRateLimitError(AIGatewayError):
    """HTTP 429 from the gateway."""

    pass


class AIGatewayQuotaError(AIGatewayError):
    """HTTP 402: the account has no credits left."""

    pass


class AIGatewayAuthenticationError(AIGatewayError):
    """Missing key, or HTTP 401 from the gateway."""

    pass


def _error_for_status(response: httpx.Response) -> AIGatewayError:
    status = response.status_code
    if status == 429:
        return AIGatewayRateLimitError("Too many requests, please try again later")
    if status == 402:
        return AIGatewayQuotaError("AI credits exhausted, please top up")
    if status == 401:
        return AIGatewayAuthenticationError(f"Gateway rejected the API key: {response.text}")
    return AIGatewayError(f"Gateway returned HTTP {status}: {response.text}")


class AIGatewayClient:
    """
    Non-streaming chat completions against ``{base_url}/chat/completions``.

    Settings come from the constructor first, then the ``AI_GATEWAY_API_KEY``,
    ``AI_GATEWAY_MODEL`` and ``AI_GATEWAY_URL`` environment variables, then
    the class defaults. A ``transport`` can be injected for tests.
    """

    BASE_URL = "https://ai.gateway.lovable.dev/v1"
    DEFAULT_MODEL = "google/gemini-2.5-flash"

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float = 60.0,
        base_url: str | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.api_key = api_key or os.getenv("AI_GATEWAY_API_KEY")
        if not self.api_key:
            raise AIGatewayAuthenticationError(
                "No AI gateway key configured; set AI_GATEWAY_API_KEY."
            )

        self.model = model or os.getenv("AI_GATEWAY_MODEL") or self.DEFAULT_MODEL
        self.base_url = base_url or os.getenv("AI_GATEWAY_URL") or self.BASE_URL
        self.timeout = timeout
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
            headers={"Authorization": f"Bearer {self.api_key}"},
        )

    async def chat(
        self,
        messages: list[dict[str, str]],
        *,
        model: str | None = None,
        **kwargs: Any,
    ) -> str:
        """
        Send ``messages`` and return the first choice's text.

        Extra keyword arguments are merged into the request body. A missing
        or null ``content`` yields an empty string.

        Raises:
            AIGatewayError: Or one of its subclasses, depending on the HTTP status.
        """
        body = {"model": model or self.model, "messages": messages, "stream": False, **kwargs}

        try:
            response = await self._client.post("/chat/completions", json=body)
        except httpx.RequestError as e:
            raise AIGatewayError(f"Request failed: {e!s}") from e
        if response.is_error:
            raise _error_for_status(response)

        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            raise AIGatewayError(f"Gateway sent a non-JSON body: {e!s}") from e

        choices = data.get("choices") or [{}]
        message = choices[0].get("message") or {}
        return message.get("content") or ""

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> AIGatewayClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()
