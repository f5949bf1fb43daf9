"""Integration tests for the chat endpoint."""

import os
from unittest.mock import MagicMock

import pytest
import pytest_check as check
from httpx import ASGITransport, AsyncClient

from lingua_relay.api.app import app
from lingua_relay.errors import GatewayError
from lingua_relay.prompts import LANGUAGE_PROMPTS


def has_llm_api_key() -> bool:
    key = os.environ.get("GROQ_API_KEY", "")
    return bool(key and not key.isspace())


requires_api_key = pytest.mark.skipif(
    not has_llm_api_key(),
    reason="GROQ_API_KEY not set - skipping LLM integration test",
)


class TestChatEndpoint:
    """Integration tests for POST /api/chat."""

    async def test_chat_success(self, async_client: AsyncClient, gateway: MagicMock) -> None:
        gateway.complete.return_value = "Hola"

        response = await async_client.post(
            "/api/chat", json={"message": "Hello", "language": "Spanish"}
        )

        assert response.status_code == 200
        assert response.json() == {"response": "Hola", "language": "Spanish"}
        assert gateway.complete.call_args.kwargs["system_prompt"] == LANGUAGE_PROMPTS["Spanish"]

    async def test_chat_default_language(
        self, async_client: AsyncClient, gateway: MagicMock
    ) -> None:
        response = await async_client.post("/api/chat", json={"message": "Hello"})

        check.equal(response.status_code, 200)
        check.equal(response.json()["language"], "Chinese")
        check.equal(
            gateway.complete.call_args.kwargs["system_prompt"], LANGUAGE_PROMPTS["Chinese"]
        )

    async def test_chat_empty_reply(self, async_client: AsyncClient, gateway: MagicMock) -> None:
        gateway.complete.return_value = ""

        response = await async_client.post("/api/chat", json={"message": "Hello"})

        assert response.status_code == 200
        assert response.json()["response"] == ""

    @pytest.mark.parametrize(
        "payload",
        [{}, {"message": ""}, {"message": None}, {"message": 123}, {"language": "English"}],
    )
    async def test_invalid_message_returns_400(
        self, async_client: AsyncClient, gateway: MagicMock, payload: dict
    ) -> None:
        response = await async_client.post("/api/chat", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Valid message is required"
        gateway.complete.assert_not_awaited()

    @pytest.mark.parametrize("body", [b"not json", b"", b"[1, 2]", b'"hello"'])
    async def test_malformed_body_returns_400(
        self, async_client: AsyncClient, gateway: MagicMock, body: bytes
    ) -> None:
        response = await async_client.post(
            "/api/chat", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        gateway.complete.assert_not_awaited()

    async def test_gateway_failure_returns_500(
        self, async_client: AsyncClient, gateway: MagicMock
    ) -> None:
        gateway.complete.side_effect = GatewayError("Request timed out.")

        response = await async_client.post("/api/chat", json={"message": "Hello"})

        assert response.status_code == 500
        assert response.json() == {
            "error": "Chat failed",
            "kind": "transport_failure",
            "message": "Request timed out.",
        }


class TestChatLive:
    """Chat against the real model."""

    @pytest.fixture
    async def client(self) -> AsyncClient:
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            yield client

    @requires_api_key
    async def test_chat_returns_text(self, client: AsyncClient) -> None:
        response = await client.post("/api/chat", json={"message": "hi", "language": "English"})

        assert response.status_code == 200
        assert isinstance(response.json()["response"], str)
