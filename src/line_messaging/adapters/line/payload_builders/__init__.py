"""Builders de corpo JSON para a LINE Messaging API.

Cada tipo de requisição tem um endpoint e um builder; o corpo é a árvore
normalizada serializada no formato wire.
"""

from line_messaging.adapters.line.payload_builders.base import (
    PayloadBuilder,
    WirePayloadBuilder,
)
from line_messaging.adapters.line.payload_builders.factory import (
    build_api_request,
    get_payload_builder,
)

__all__ = [
    "PayloadBuilder",
    "WirePayloadBuilder",
    "build_api_request",
    "get_payload_builder",
]
