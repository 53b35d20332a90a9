"""Tests for the AI gateway client and the prompt optimizer."""

from __future__ import annotations

import json

import httpx
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from ccswitch.data.models.user import User
from ccswitch.server.llm.gateway import (
    AIGatewayAuthenticationError,
    AIGatewayClient,
    AIGatewayError,
    AIGatewayQuotaError,
    AIGatewayRateLimitError,
)
from ccswitch.server.services.optimizer import (
    OptimizerError,
    PromptOptimizer,
    build_messages,
    resolve_template_id,
)


def _completion(content: str | None) -> dict[str, object]:
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


def _gateway(handler) -> AIGatewayClient:
    return AIGatewayClient(api_key="test-key", transport=httpx.MockTransport(handler))


class TestAIGatewayClient:
    """Test AIGatewayClient configuration and error mapping."""

    def test_requires_api_key(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("AI_GATEWAY_API_KEY", raising=False)
        with pytest.raises(AIGatewayAuthenticationError):
            AIGatewayClient()

    def test_env_configuration(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("AI_GATEWAY_API_KEY", "env-key")
        monkeypatch.setenv("AI_GATEWAY_MODEL", "some/model")
        monkeypatch.delenv("AI_GATEWAY_URL", raising=False)
        client = AIGatewayClient()
        assert client.api_key == "env-key"
        assert client.model == "some/model"
        assert client.base_url == AIGatewayClient.BASE_URL

    async def test_chat_success(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/v1/chat/completions"
            assert request.headers["Authorization"] == "Bearer test-key"
            payload = json.loads(request.content)
            assert payload["stream"] is False
            assert payload["model"] == AIGatewayClient.DEFAULT_MODEL
            return httpx.Response(200, json=_completion("better prompt"))

        async with _gateway(handler) as client:
            assert await client.chat([{"role": "user", "content": "hi"}]) == "better prompt"

    async def test_empty_content(self) -> None:
        async with _gateway(lambda request: httpx.Response(200, json=_completion(None))) as client:
            assert await client.chat([]) == ""

    @pytest.mark.parametrize(
        ("status", "error"),
        [
            (429, AIGatewayRateLimitError),
            (402, AIGatewayQuotaError),
            (401, AIGatewayAuthenticationError),
            (500, AIGatewayError),
        ],
    )
    async def test_error_mapping(self, status: int, error: type[Exception]) -> None:
        async with _gateway(lambda request: httpx.Response(status, text="nope")) as client:
            with pytest.raises(error):
                await client.chat([])

    async def test_network_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("down", request=request)

        async with _gateway(handler) as client:
            with pytest.raises(AIGatewayError, match="Request failed"):
                await client.chat([])


class TestTemplates:
    """Tests for template selection."""

    def test_resolve_template_id(self) -> None:
        assert resolve_template_id("optimize") == "optimize/general"
        assert resolve_template_id("optimize", template="academic") == "optimize/academic"
        assert resolve_template_id("optimize", mode="user") == "user-optimize/general"
        assert resolve_template_id("iterate") == "iterate/refine"
        assert resolve_template_id("evaluate") == "evaluate/analyze"
        with pytest.raises(OptimizerError):
            resolve_template_id("optimize", template="poetry")

    def test_build_messages_keeps_braces(self) -> None:
        messages = build_messages("optimize/general", "Hello {{name}}")

        assert messages[0]["role"] == "system"
        assert messages[1]["role"] == "user"
        assert "Hello {{name}}" in messages[1]["content"]

    def test_iterate_messages_include_feedback(self) -> None:
        messages = build_messages("iterate/refine", "orig", "v1", "shorter please")

        assert "v1" in messages[1]["content"]
        assert "shorter please" in messages[1]["content"]


async def test_optimize_records_history(session: AsyncSession, user: User) -> None:
    """Each call is stored with its template and action."""
    client = _gateway(lambda request: httpx.Response(200, json=_completion("# Role\nBetter")))
    optimizer = PromptOptimizer(session, user.id, client=client)

    result = await optimizer.run("optimize", "be helpful")

    assert result.result == "# Role\nBetter"
    assert result.analysis is None
    assert result.template == "optimize/general"
    history = await optimizer.history()
    assert [(h.id, h.action, h.optimized_prompt) for h in history] == [
        (result.history_id, "optimize", "# Role\nBetter")
    ]
    await client.close()


async def test_evaluate_keeps_original_prompt(session: AsyncSession, user: User) -> None:
    """Evaluations return an analysis and store the prompt unchanged."""
    client = _gateway(lambda request: httpx.Response(200, json=_completion("Score: 7/10")))
    optimizer = PromptOptimizer(session, user.id, client=client)

    result = await optimizer.run("evaluate", "be helpful")

    assert result.analysis == "Score: 7/10"
    entry = (await optimizer.history(limit=1))[0]
    assert entry.optimized_prompt == "be helpful"
    assert entry.analysis == "Score: 7/10"
    await client.close()


async def test_invalid_requests(session: AsyncSession, user: User) -> None:
    """Empty prompts and incomplete iterations are rejected before any request."""

    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = _gateway(handler)
    optimizer = PromptOptimizer(session, user.id, client=client)

    with pytest.raises(OptimizerError):
        await optimizer.run("optimize", "   ")
    with pytest.raises(OptimizerError):
        await optimizer.run("iterate", "prompt", optimized_prompt="v1")
    assert await optimizer.history() == []
    await client.close()
