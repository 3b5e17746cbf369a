"""Erros de validação para payloads da LINE Messaging API.

Problemas de entrada são dados (FieldError), coletados em uma única passada.
Somente violações de contrato interno (variante desconhecida) são exceções.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Generic, TypeVar

T = TypeVar("T")

Path = tuple[str | int, ...]


class ErrorCode(StrEnum):
    """Categorias de erro local (pré-transporte)."""

    FIELD_CONSTRAINT_VIOLATION = "FIELD_CONSTRAINT_VIOLATION"
    MUTUAL_EXCLUSION_VIOLATION = "MUTUAL_EXCLUSION_VIOLATION"
    STRUCTURAL_BOUND_VIOLATION = "STRUCTURAL_BOUND_VIOLATION"
    CROSS_CHILD_INVARIANT_VIOLATION = "CROSS_CHILD_INVARIANT_VIOLATION"
    EMPTY_OPERATOR_LIST = "EMPTY_OPERATOR_LIST"
    DEPTH_EXCEEDED = "DEPTH_EXCEEDED"


@dataclass(frozen=True, slots=True)
class FieldError:
    """Violação atribuída a um caminho do payload (nomes wire e índices)."""

    path: Path
    code: ErrorCode
    constraint: str
    detail: str
    actual_value: Any = None

    @property
    def dotted_path(self) -> str:
        """Renderiza o caminho, ex.: contents.body.contents[2].action."""
        rendered = ""
        for part in self.path:
            if isinstance(part, int):
                rendered += f"[{part}]"
            else:
                rendered += f".{part}" if rendered else part
        return rendered

    def to_dict(self) -> dict[str, Any]:
        """Formato serializável (sem actual_value, que pode conter PII)."""
        return {
            "path": self.dotted_path,
            "code": self.code.value,
            "constraint": self.constraint,
            "detail": self.detail,
        }


class ValidationError(Exception):
    """Payload inválido; carrega todos os erros encontrados."""

    def __init__(self, errors: tuple[FieldError, ...] | list[FieldError]) -> None:
        self.errors = tuple(errors)
        summary = "; ".join(f"{e.dotted_path or '<root>'}: {e.detail}" for e in self.errors[:5])
        if len(self.errors) > 5:
            summary += f"; (+{len(self.errors) - 5} more)"
        super().__init__(summary)


class UnknownVariantError(Exception):
    """Nó com tipo fora do conjunto conhecido (erro de programação)."""


@dataclass(frozen=True)
class ValidationResult(Generic[T]):
    """Resultado da validação: árvore normalizada e erros (vazio = válido)."""

    value: T
    errors: tuple[FieldError, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> T:
        """Retorna a árvore normalizada ou levanta ValidationError."""
        if self.errors:
            raise ValidationError(self.errors)
        return self.value
