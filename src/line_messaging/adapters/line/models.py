"""Modelos de requisição e resposta do cliente LINE.

Responsabilidade:
- Estruturar os corpos de push, reply, multicast, broadcast e narrowcast
- Descrever a chamada entregue ao transporte (LineApiRequest)
- Padronizar o retorno do cliente (LineApiResponse), sem expor tokens
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from line_messaging.domain.base import LineModel
from line_messaging.domain.filters import DemographicFilter, RecipientObject
from line_messaging.domain.messages import Message


class _MessagesRequest(LineModel):
    messages: tuple[Message, ...]
    notification_disabled: bool | None = None


class PushMessageRequest(_MessagesRequest):
    """Envio para um usuário, grupo ou sala."""

    to: str


class ReplyMessageRequest(_MessagesRequest):
    """Resposta a um evento de webhook (reply token de uso único)."""

    reply_token: str


class MulticastRequest(_MessagesRequest):
    """Envio para até 500 user IDs."""

    to: tuple[str, ...]


class BroadcastRequest(_MessagesRequest):
    """Envio para todos os amigos do canal."""


class NarrowcastFilter(LineModel):
    demographic: DemographicFilter | None = None


class NarrowcastLimit(LineModel):
    max: int | None = None
    up_to_remaining_quota: bool | None = None


class NarrowcastRequest(_MessagesRequest):
    """Envio segmentado por audiences e/ou atributos demográficos."""

    recipient: RecipientObject | None = None
    filter: NarrowcastFilter | None = None
    limit: NarrowcastLimit | None = None


class LineApiRequest(BaseModel):
    """Chamada HTTP já montada, entregue ao transporte."""

    method: str = "POST"
    path: str  # relativo a {base}/{version}/bot, ex.: "message/push"
    body: dict[str, Any] | None = None
    params: dict[str, Any] | None = None


class LineApiResponse(BaseModel):
    """Resposta do cliente.

    `errors` traz os erros de validação local (sem actual_value) quando
    `error_code == "VALIDATION_ERROR"`; nesse caso nada foi enviado.
    """

    success: bool
    data: dict[str, Any] | None = None
    error_code: str | None = None
    error_message: str | None = None
    status_code: int | None = None
    errors: list[dict[str, Any]] = Field(default_factory=list)
    result: Any = None  # modelo tipado da resposta, quando houver
