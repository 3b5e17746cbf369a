"""Interfaces e utilidades base para builders de payload."""

from __future__ import annotations

from typing import Any, Protocol

from line_messaging.domain.base import LineModel


class PayloadBuilder(Protocol):
    """Protocolo para builders de corpo JSON por tipo de requisição."""

    def build(self, payload: LineModel) -> dict[str, Any]:
        """Constrói o corpo JSON (formato wire, camelCase).

        Args:
            payload: Requisição já validada e normalizada

        Returns:
            Corpo pronto para envio
        """
        ...


class WirePayloadBuilder:
    """Serializa a árvore normalizada sem alterações (campos None omitidos)."""

    def build(self, payload: LineModel) -> dict[str, Any]:
        return payload.to_wire()


class NarrowcastPayloadBuilder(WirePayloadBuilder):
    """Narrowcast: omite `filter` vazio (sem demographic)."""

    def build(self, payload: LineModel) -> dict[str, Any]:
        body = super().build(payload)
        if body.get("filter") == {}:
            del body["filter"]
        return body
