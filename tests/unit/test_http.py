"""Testes unitários para infra/http.py.

Valida cliente HTTP com timeout, classificação de erros e logging.
"""

from __future__ import annotations

import httpx
import pytest

from line_messaging.config.settings import Settings
from line_messaging.infra.http import (
    HttpClient,
    HttpClientConfig,
    HttpError,
    _sanitize_url,
    build_http_config,
    is_retryable_status,
)


def _client_with(handler) -> HttpClient:
    client = HttpClient(HttpClientConfig(timeout_seconds=1.0))
    client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return client


class TestHttpClientConfig:
    """Testes para HttpClientConfig."""

    def test_default_values(self) -> None:
        """Valores padrão devem ser seguros."""
        config = HttpClientConfig()
        assert config.timeout_seconds == 30.0
        assert config.verify_ssl is True
        assert config.default_headers == {}

    def test_build_from_settings(self) -> None:
        """Timeout e User-Agent vêm de Settings."""
        config = build_http_config(Settings(line_request_timeout_seconds=5, version="1.2.3"))
        assert config.timeout_seconds == 5.0
        assert config.default_headers["User-Agent"] == "line_messaging/1.2.3"


class TestHttpError:
    """Testes para HttpError."""

    def test_error_with_status_code(self) -> None:
        """HttpError guarda status e não é retentável por padrão."""
        error = HttpError("Not found", status_code=404)
        assert error.status_code == 404
        assert error.is_retryable is False
        assert str(error) == "Not found"


class TestHelpers:
    """Testes para funções auxiliares."""

    @pytest.mark.parametrize("status", [429, 500, 502, 503])
    def test_retryable_status(self, status: int) -> None:
        """429 e 5xx são retentáveis."""
        assert is_retryable_status(status) is True

    @pytest.mark.parametrize("status", [400, 401, 403, 404])
    def test_permanent_status(self, status: int) -> None:
        """4xx (exceto 429) não são retentáveis."""
        assert is_retryable_status(status) is False

    def test_sanitize_url_drops_query(self) -> None:
        """Query string nunca vai para o log."""
        url = "https://api.line.me/v2/bot/insight/followers?date=20240101"
        assert _sanitize_url(url) == "https://api.line.me/v2/bot/insight/followers"


class TestHttpClientRequests:
    """Testes para requisições do HttpClient."""

    @pytest.mark.asyncio
    async def test_get_success(self) -> None:
        """GET 200 devolve a resposta."""
        client = _client_with(lambda request: httpx.Response(200, json={"ok": True}))
        async with client:
            response = await client.request("GET", "https://api.line.me/v2/bot/info")
        assert response.json() == {"ok": True}

    @pytest.mark.asyncio
    async def test_post_sends_json(self) -> None:
        """POST envia o corpo JSON informado."""
        seen: dict = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = request.content
            seen["method"] = request.method
            return httpx.Response(200, json={})

        client = _client_with(handler)
        await client.request("POST", "https://api.line.me/v2/bot/message/push", json={"to": "U1"})
        await client.close()

        assert seen["method"] == "POST"
        assert b'"to"' in seen["body"]

    @pytest.mark.asyncio
    async def test_non_success_raises_http_error(self) -> None:
        """Status 4xx levanta HttpError não retentável."""
        client = _client_with(lambda request: httpx.Response(400, json={}))
        with pytest.raises(HttpError) as exc_info:
            await client.request("DELETE", "https://api.line.me/v2/bot/richmenu/x")
        await client.close()

        assert exc_info.value.status_code == 400
        assert exc_info.value.is_retryable is False

    @pytest.mark.asyncio
    async def test_server_error_is_retryable(self) -> None:
        """503 levanta HttpError retentável."""
        client = _client_with(lambda request: httpx.Response(503))
        with pytest.raises(HttpError) as exc_info:
            await client.request("GET", "https://api.line.me/v2/bot/info")
        await client.close()

        assert exc_info.value.is_retryable is True

    @pytest.mark.asyncio
    async def test_timeout_becomes_retryable_http_error(self) -> None:
        """Timeout vira HttpError retentável."""

        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        client = _client_with(handler)
        with pytest.raises(HttpError, match="Timeout") as exc_info:
            await client.request("GET", "https://api.line.me/v2/bot/info")
        await client.close()

        assert exc_info.value.is_retryable is True

    @pytest.mark.asyncio
    async def test_connect_error_becomes_http_error(self) -> None:
        """Erro de conexão vira HttpError."""
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        client = _client_with(handler)
        with pytest.raises(HttpError, match="conexão"):
            await client.request("GET", "https://api.line.me/v2/bot/info")
        await client.close()

    @pytest.mark.asyncio
    async def test_close_is_idempotent(self) -> None:
        """close pode ser chamado mais de uma vez."""
        client = HttpClient()
        await client.close()
        await client.close()
