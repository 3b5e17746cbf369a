"""Transporte HTTP assíncrono (httpx) para a LINE Messaging API.

- Timeout obrigatório em toda chamada
- Logs estruturados com URL sem query string (datas, request ids)
- Falhas classificadas em HttpError(is_retryable) para quem chama decidir

Sem retry automático: uma chamada, um request.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any
from urllib.parse import urlsplit

import httpx

from line_messaging.observability.logging import get_logger

if TYPE_CHECKING:
    from line_messaging.config.settings import Settings

logger: logging.Logger = get_logger(__name__)


def _sanitize_url(url: str) -> str:
    """URL sem query string, segura para log."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}" if parts.scheme else parts.path


def is_retryable_status(status_code: int) -> bool:
    """429 e 5xx são transitórios."""
    return status_code == 429 or 500 <= status_code < 600


@dataclass
class HttpClientConfig:
    timeout_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Falha de transporte ou status não-2xx (mensagem sem dados sensíveis)."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


def _log(level: int, event: str, method: str, url: str, **fields: Any) -> None:
    logger.log(level, event, extra={"method": method, "url": _sanitize_url(url), **fields})


def _transport_error(exc: Exception, method: str, url: str) -> HttpError:
    """Traduz exceções do httpx para HttpError."""
    if isinstance(exc, httpx.TimeoutException):
        _log(logging.WARNING, "http_timeout", method, url)
        return HttpError("Timeout", is_retryable=True)
    if isinstance(exc, httpx.ConnectError):
        _log(logging.WARNING, "http_connect_failed", method, url)
        return HttpError("Erro de conexão", is_retryable=True)

    _log(logging.ERROR, "http_unexpected_error", method, url, error_type=type(exc).__name__)
    return HttpError(f"Erro inesperado: {type(exc).__name__}")


class HttpClient:
    """Cliente httpx com ciclo de vida explícito.

    Uso:
        async with HttpClient(config) as http:
            response = await http.request("GET", url)
    """

    def __init__(self, config: HttpClientConfig | None = None) -> None:
        self._config = config or HttpClientConfig()
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        # Criado sob demanda; recriado se fechado
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout_seconds),
                headers=self._config.default_headers,
                verify=self._config.verify_ssl,
            )
        return self._client

    async def close(self) -> None:
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None

    async def __aenter__(self) -> HttpClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.close()

    async def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Executa a chamada e devolve a resposta, qualquer que seja o status.

        Raises:
            HttpError: Em timeout, erro de conexão ou falha inesperada
        """
        client = await self._get_client()
        _log(logging.DEBUG, "http_request", method, url)
        try:
            return await client.request(method, url, **kwargs)
        except Exception as exc:
            raise _transport_error(exc, method, url) from exc

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        """Executa a chamada; status não-2xx levanta HttpError.

        Raises:
            HttpError: Em falha de transporte ou status não-2xx
        """
        response = await self._send(method, url, **kwargs)
        status = response.status_code
        if response.is_success:
            _log(logging.DEBUG, "http_response", method, url, status_code=status)
            return response

        retryable = is_retryable_status(status)
        _log(
            logging.WARNING,
            "http_status_error",
            method,
            url,
            status_code=status,
            is_retryable=retryable,
        )
        raise HttpError(f"HTTP {status}", status_code=status, is_retryable=retryable)


def build_http_config(settings: Settings) -> HttpClientConfig:
    """HttpClientConfig com timeout e User-Agent vindos de Settings."""
    return HttpClientConfig(
        timeout_seconds=float(settings.line_request_timeout_seconds),
        default_headers={"User-Agent": f"{settings.service_name}/{settings.version}"},
    )
