"""Testes do cliente HTTP da Graph API (httpx.MockTransport)."""

from __future__ import annotations

import json
from types import SimpleNamespace

import httpx
import pytest

from api.connectors.whatsapp import http_base
from api.connectors.whatsapp.http_base import HttpClientConfig, HttpError
from api.connectors.whatsapp.http_client import WhatsAppHttpClient
from api.connectors.whatsapp.meta_errors import parse_meta_error, user_message_for_status

ENDPOINT = "https://graph.facebook.com/v18.0/123/messages"
PAYLOAD = {"messaging_product": "whatsapp", "to": "15551234567", "type": "text"}


def _client(handler, max_retries: int = 2) -> WhatsAppHttpClient:
    config = HttpClientConfig(max_retries=max_retries, backoff_base_seconds=0.0)
    return WhatsAppHttpClient(config=config, transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_send_message_success() -> None:
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"messages": [{"id": "wamid.1"}]})

    response = await _client(handler).send_message(ENDPOINT, "token", PAYLOAD)

    assert response == {"messages": [{"id": "wamid.1"}]}
    assert len(seen) == 1
    assert seen[0].headers["Authorization"] == "Bearer token"
    assert json.loads(seen[0].content) == PAYLOAD


@pytest.mark.asyncio
@pytest.mark.parametrize("token", ["", "   "])
async def test_send_message_requires_token(token: str) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("não deveria chamar a API")

    with pytest.raises(ValueError, match="access_token"):
        await _client(handler).send_message(ENDPOINT, token, PAYLOAD)


@pytest.mark.asyncio
async def test_meta_error_is_not_retried() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(
            401,
            json={"error": {"type": "OAuthException", "code": 190, "message": "bad token"}},
        )

    with pytest.raises(HttpError) as exc_info:
        await _client(handler).send_message(ENDPOINT, "token", PAYLOAD)

    assert exc_info.value.status_code == 401
    assert exc_info.value.is_retryable is False
    assert calls == 1


@pytest.mark.asyncio
async def test_server_error_retried_until_exhausted() -> None:
    calls = 0

    def handler(request: httpx.Request) -> httpx.Response:
        nonlocal calls
        calls += 1
        return httpx.Response(500, json={})

    with pytest.raises(HttpError) as exc_info:
        await _client(handler, max_retries=2).send_message(ENDPOINT, "token", PAYLOAD)

    assert exc_info.value.status_code == 500
    assert exc_info.value.is_retryable is True
    assert calls == 3


@pytest.mark.asyncio
async def test_rate_limit_then_success() -> None:
    responses = [
        httpx.Response(429, json={}),
        httpx.Response(200, json={"messages": [{"id": "wamid.2"}]}),
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    response = await _client(handler).send_message(ENDPOINT, "token", PAYLOAD)

    assert response["messages"][0]["id"] == "wamid.2"


@pytest.mark.asyncio
async def test_connection_error_becomes_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(HttpError, match="http_connection_error"):
        await _client(handler, max_retries=1).send_message(ENDPOINT, "token", PAYLOAD)


@pytest.mark.asyncio
async def test_invalid_json_response() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, content=b"<html>")

    with pytest.raises(HttpError) as exc_info:
        await _client(handler).send_message(ENDPOINT, "token", PAYLOAD)

    assert exc_info.value.status_code == 200


@pytest.mark.asyncio
async def test_client_error_without_meta_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404, json={})

    with pytest.raises(HttpError) as exc_info:
        await _client(handler).send_message(ENDPOINT, "token", PAYLOAD)

    assert exc_info.value.status_code == 404


class TestMetaErrors:
    def test_parse_meta_error(self) -> None:
        error = parse_meta_error(
            {"error": {"type": "OAuthException", "code": 190, "message": "expired"}}
        )
        assert error is not None
        assert error.error_code == 190
        assert error.is_permanent is True

    def test_parse_meta_error_transient(self) -> None:
        error = parse_meta_error({"error": {"type": "Throttling", "code": 4}})
        assert error is not None
        assert error.is_permanent is False

    @pytest.mark.parametrize("data", [{"messages": []}, {"error": "x"}, [], None])
    def test_parse_meta_error_without_error(self, data: object) -> None:
        assert parse_meta_error(data) is None

    @pytest.mark.parametrize(
        ("status", "fragment"),
        [
            (400, "Invalid phone number"),
            (401, "access token"),
            (403, "permissions denied"),
            (429, "Rate limit"),
            (None, "Failed to send message via WhatsApp"),
            (502, "WhatsApp API error (502)"),
        ],
    )
    def test_user_message_for_status(self, status: int | None, fragment: str) -> None:
        assert fragment in user_message_for_status(status)


@pytest.mark.asyncio
async def test_retry_after_header_is_honored(monkeypatch: pytest.MonkeyPatch) -> None:
    delays: list[float] = []

    async def _fake_sleep(seconds: float) -> None:
        delays.append(seconds)

    monkeypatch.setattr(http_base, "asyncio", SimpleNamespace(sleep=_fake_sleep))
    responses = [
        httpx.Response(429, headers={"Retry-After": "7"}, json={}),
        httpx.Response(200, json={"messages": [{"id": "wamid.3"}]}),
    ]

    def handler(request: httpx.Request) -> httpx.Response:
        return responses.pop(0)

    config = HttpClientConfig(max_retries=1, backoff_base_seconds=2.0, backoff_max_seconds=30.0)
    client = WhatsAppHttpClient(config=config, transport=httpx.MockTransport(handler))

    await client.send_message(ENDPOINT, "token", PAYLOAD)

    assert delays == [7.0]
