"""Recipient e demographic filters para narrowcast.

Folhas (audience, gender, age, ...) são combinadas por nós operadores
(and/or/not) arbitrariamente aninhados.

Formato wire de um operador: {"type": "operator", "and": [...]}.
Internamente o operador é uma variante explícita (`operator` + `operands`),
então "exatamente um de and/or/not" é garantido pela estrutura.
O mesmo vale para faixas {"gte": X} | {"lt": X} (`comparison` + `value`).
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import Field, model_serializer, model_validator

from line_messaging.domain.base import LineModel
from line_messaging.domain.enums import LogicalOperator, RangeComparison

_OPERATOR_KEYS = frozenset(op.value for op in LogicalOperator)
_COMPARISON_KEYS = frozenset(c.value for c in RangeComparison)


class _OperatorNode(LineModel):
    """Base de nós operadores; subclasses definem o tipo dos operandos."""

    type: Literal["operator"] = "operator"
    operator: LogicalOperator

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        """Converte {"and": [...]} em operator/operands."""
        if not isinstance(data, dict) or "operator" in data:
            return data

        present = [key for key in data if key in _OPERATOR_KEYS]
        if len(present) != 1:
            raise ValueError("operator object must set exactly one of: and, or, not")

        key = present[0]
        operands = data[key]
        # A API aceita um único objeto no lugar da lista
        if not isinstance(operands, (list, tuple)):
            operands = [operands]

        rest = {k: v for k, v in data.items() if k not in _OPERATOR_KEYS}
        return {**rest, "operator": key, "operands": operands}

    @model_serializer(mode="wrap")
    def _to_wire(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        # Dentro de uniões o handler pode devolver outro formato
        if isinstance(data, dict) and "operator" in data:
            data[str(data.pop("operator"))] = data.pop("operands")
        return data


class _RangeDemographic(LineModel):
    """Base para filtros de faixa (gte ou lt)."""

    comparison: RangeComparison
    value: str

    @model_validator(mode="before")
    @classmethod
    def _from_wire(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "comparison" in data:
            return data

        present = [key for key in data if key in _COMPARISON_KEYS]
        if len(present) != 1:
            raise ValueError("range filter must set exactly one of: gte, lt")

        key = present[0]
        rest = {k: v for k, v in data.items() if k not in _COMPARISON_KEYS}
        return {**rest, "comparison": key, "value": data[key]}

    @model_serializer(mode="wrap")
    def _to_wire(self, handler: Any) -> dict[str, Any]:
        data = handler(self)
        if isinstance(data, dict) and "comparison" in data:
            data[str(data.pop("comparison"))] = data.pop("value")
        return data


# -----------------------------------------------------------------------------
# Recipient objects
# -----------------------------------------------------------------------------


class AudienceRecipient(LineModel):
    type: Literal["audience"] = "audience"
    audience_group_id: int


class RecipientOperator(_OperatorNode):
    operands: tuple[RecipientObject, ...]


RecipientObject = Annotated[
    Union[AudienceRecipient, RecipientOperator],
    Field(discriminator="type"),
]

RecipientOperator.model_rebuild()


# -----------------------------------------------------------------------------
# Demographic filter objects
# -----------------------------------------------------------------------------


class GenderDemographic(LineModel):
    type: Literal["gender"] = "gender"
    one_of: tuple[str, ...]


class AgeDemographic(_RangeDemographic):
    type: Literal["age"] = "age"


class AppTypeDemographic(LineModel):
    type: Literal["appType"] = "appType"
    one_of: tuple[str, ...]


class AreaDemographic(LineModel):
    type: Literal["area"] = "area"
    one_of: tuple[str, ...]


class SubscriptionPeriodDemographic(_RangeDemographic):
    type: Literal["subscriptionPeriod"] = "subscriptionPeriod"


class DemographicOperator(_OperatorNode):
    operands: tuple[DemographicFilter, ...]


DemographicFilter = Annotated[
    Union[
        GenderDemographic,
        AgeDemographic,
        AppTypeDemographic,
        AreaDemographic,
        SubscriptionPeriodDemographic,
        DemographicOperator,
    ],
    Field(discriminator="type"),
]

DemographicOperator.model_rebuild()

OperatorNode = RecipientOperator | DemographicOperator
