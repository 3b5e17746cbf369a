"""Cliente HTTP especializado para a LINE Messaging API.

Estende HttpClient genérico com comportamentos específicos da LINE:
- Autenticação por Bearer token do canal (nunca logado)
- Endpoints relativos a {base}/{version}/bot
- Tratamento de erros LINE ({"message": ..., "details": [...]})
- Logging estruturado sem tokens, IDs de usuário ou conteúdo
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import httpx

from line_messaging.adapters.line.models import LineApiRequest
from line_messaging.infra.http import (
    HttpClient,
    HttpClientConfig,
    HttpError,
    build_http_config,
    is_retryable_status,
)
from line_messaging.observability.logging import get_logger

if TYPE_CHECKING:
    from line_messaging.config.settings import Settings

logger: logging.Logger = get_logger(__name__)

_REQUEST_ID_HEADER = "x-line-request-id"


@dataclass(frozen=True)
class LineApiError:
    """Erro retornado pela API LINE."""

    status_code: int
    message: str
    details: tuple[dict[str, Any], ...] = ()
    request_id: str | None = None

    @property
    def is_retryable(self) -> bool:
        return is_retryable_status(self.status_code)


class LineHttpError(HttpError):
    """HttpError com o corpo de erro da LINE já interpretado."""

    def __init__(self, api_error: LineApiError) -> None:
        super().__init__(
            f"LINE API error {api_error.status_code}: {api_error.message}",
            status_code=api_error.status_code,
            is_retryable=api_error.is_retryable,
        )
        self.api_error = api_error


def _parse_line_error(response: httpx.Response) -> LineApiError:
    """Extrai informações de erro do response da LINE.

    Corpo fora do formato esperado vira mensagem genérica com o status.
    """
    message = f"HTTP {response.status_code}"
    details: tuple[dict[str, Any], ...] = ()
    try:
        data = response.json()
    except (json.JSONDecodeError, ValueError):
        data = None

    if isinstance(data, dict):
        message = str(data.get("message") or message)
        raw_details = data.get("details")
        if isinstance(raw_details, list):
            details = tuple(item for item in raw_details if isinstance(item, dict))

    return LineApiError(
        status_code=response.status_code,
        message=message,
        details=details,
        request_id=response.headers.get(_REQUEST_ID_HEADER),
    )


def _log_line_error(api_error: LineApiError, method: str, path: str) -> None:
    """Loga erro da LINE sem expor dados sensíveis."""
    logger.warning(
        "Erro da API LINE",
        extra={
            "method": method,
            "endpoint": path,
            "status_code": api_error.status_code,
            "detail_count": len(api_error.details),
            "request_id": api_error.request_id,
            "is_retryable": api_error.is_retryable,
        },
    )


class LineHttpClient(HttpClient):
    """Transporte para a LINE Messaging API.

    Implementa `send(LineApiRequest) -> dict`:
    - 2xx: retorna o JSON do corpo ({} quando vazio)
    - não-2xx: levanta LineHttpError com LineApiError
    - timeout/conexão: levanta HttpError (is_retryable=True)
    """

    def __init__(
        self,
        channel_access_token: str,
        api_endpoint: str,
        config: HttpClientConfig | None = None,
    ) -> None:
        """Inicializa cliente LINE.

        Args:
            channel_access_token: Bearer token do canal
            api_endpoint: URL base, ex.: https://api.line.me/v2/bot
            config: Configuração HTTP base
        """
        super().__init__(config)
        self._channel_access_token = channel_access_token
        self.api_endpoint = api_endpoint.rstrip("/")

    def _build_headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._channel_access_token}",
            "Content-Type": "application/json",
        }

    async def send(self, request: LineApiRequest) -> dict[str, Any]:
        """Executa a chamada descrita por `request`.

        Raises:
            LineHttpError: Se a API responder com erro
            HttpError: Em falhas de transporte
        """
        url = f"{self.api_endpoint}/{request.path.lstrip('/')}"
        kwargs: dict[str, Any] = {"headers": self._build_headers()}
        if request.body is not None:
            kwargs["json"] = request.body
        if request.params:
            kwargs["params"] = request.params

        response = await self._send(request.method, url, **kwargs)
        if not response.is_success:
            api_error = _parse_line_error(response)
            _log_line_error(api_error, request.method, request.path)
            raise LineHttpError(api_error)

        logger.debug(
            "Chamada LINE bem-sucedida",
            extra={
                "method": request.method,
                "endpoint": request.path,
                "status_code": response.status_code,
                "request_id": response.headers.get(_REQUEST_ID_HEADER),
            },
        )
        return self._parse_body(response, request.path)

    @staticmethod
    def _parse_body(response: httpx.Response, path: str) -> dict[str, Any]:
        if not response.content:
            return {}
        try:
            data = response.json()
        except (json.JSONDecodeError, ValueError) as exc:
            logger.error("Response JSON inválido", extra={"endpoint": path})
            raise HttpError("Response JSON inválido", status_code=response.status_code) from exc
        return data if isinstance(data, dict) else {"data": data}


def create_line_http_client(settings: Settings) -> LineHttpClient:
    """Factory para criar cliente LINE configurado.

    Raises:
        ValueError: Se a configuração de acesso for inválida
    """
    errors = settings.validate_line_config()
    if errors:
        raise ValueError("; ".join(errors))

    config = build_http_config(settings)
    logger.info(
        "Cliente LINE HTTP criado",
        extra={"timeout": config.timeout_seconds, "endpoint": settings.line_api_endpoint},
    )
    return LineHttpClient(
        channel_access_token=settings.line_channel_access_token or "",
        api_endpoint=settings.line_api_endpoint,
        config=config,
    )
