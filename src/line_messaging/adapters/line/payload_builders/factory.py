"""Factory para obter endpoint e builder corretos por tipo de requisição."""

from __future__ import annotations

from line_messaging.adapters.line.models import (
    BroadcastRequest,
    LineApiRequest,
    MulticastRequest,
    NarrowcastRequest,
    PushMessageRequest,
    ReplyMessageRequest,
)
from line_messaging.adapters.line.payload_builders.base import (
    NarrowcastPayloadBuilder,
    PayloadBuilder,
    WirePayloadBuilder,
)
from line_messaging.domain.base import LineModel
from line_messaging.domain.rich_menu import RichMenu

_WIRE_BUILDER = WirePayloadBuilder()

# Mapeamento de tipo de requisição para (endpoint relativo, builder)
_BUILDERS: dict[type, tuple[str, PayloadBuilder]] = {
    PushMessageRequest: ("message/push", _WIRE_BUILDER),
    ReplyMessageRequest: ("message/reply", _WIRE_BUILDER),
    MulticastRequest: ("message/multicast", _WIRE_BUILDER),
    BroadcastRequest: ("message/broadcast", _WIRE_BUILDER),
    NarrowcastRequest: ("message/narrowcast", NarrowcastPayloadBuilder()),
    RichMenu: ("richmenu", _WIRE_BUILDER),
}


def get_payload_builder(payload_type: type) -> tuple[str, PayloadBuilder] | None:
    """Retorna (endpoint, builder) para o tipo ou None se não suportado."""
    return _BUILDERS.get(payload_type)


def build_api_request(payload: LineModel) -> LineApiRequest:
    """Monta a chamada HTTP completa para a API LINE.

    Args:
        payload: Requisição validada (push, reply, multicast, ...)

    Returns:
        LineApiRequest pronta para o transporte

    Raises:
        ValueError: Se tipo de payload não suportado
    """
    entry = get_payload_builder(type(payload))
    if entry is None:
        raise ValueError(f"Tipo de payload não suportado: {type(payload).__name__}")

    path, builder = entry
    return LineApiRequest(method="POST", path=path, body=builder.build(payload))
