"""Modelo base para objetos da LINE Messaging API.

Todos os objetos são value objects imutáveis:
- Construção valida apenas o formato (tipos e discriminador `type`)
- Limites documentados (tamanho, faixa, esquema de URL) são checados pelo validador
- Campos não modelados passam adiante no payload sem alteração
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class LineModel(BaseModel):
    """Base imutável com aliases camelCase conforme o formato wire."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
        extra="allow",
    )

    def to_wire(self) -> dict[str, Any]:
        """Serializa no formato JSON esperado pela API."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")
