"""Validadores primitivos de campo (tamanho, enum, faixa, esquema de URL, padrão).

Cada constraint é um descritor imutável com `check(value, path)`, que
retorna um FieldError ou None. `check_field` aplica os descritores em ordem
e para no primeiro erro (um erro por campo).
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import urlsplit

from line_messaging.adapters.line.validators.errors import ErrorCode, FieldError, Path


class Constraint(Protocol):
    """Descritor de restrição aplicável a um valor escalar."""

    def check(self, value: Any, path: Path) -> FieldError | None: ...


def violation(
    path: Path,
    constraint: str,
    detail: str,
    actual_value: Any = None,
    code: ErrorCode = ErrorCode.FIELD_CONSTRAINT_VIOLATION,
) -> FieldError:
    """Atalho para construir um FieldError."""
    return FieldError(
        path=path,
        code=code,
        constraint=constraint,
        detail=detail,
        actual_value=actual_value,
    )


@dataclass(frozen=True, slots=True)
class Length:
    """Tamanho em caracteres de strings (ou itens de sequências)."""

    max: int | None = None
    min: int | None = None

    def check(self, value: Any, path: Path) -> FieldError | None:
        size = len(value)
        if self.min is not None and size < self.min:
            return violation(
                path,
                f"minLength:{self.min}",
                f"must have at least {self.min} characters (got {size})",
                value,
            )
        if self.max is not None and size > self.max:
            return violation(
                path,
                f"maxLength:{self.max}",
                f"must not exceed {self.max} characters (got {size})",
                value,
            )
        return None


@dataclass(frozen=True, slots=True)
class OneOf:
    """Valor pertence a um conjunto enumerado."""

    values: Sequence[str]

    def check(self, value: Any, path: Path) -> FieldError | None:
        if value in self.values:
            return None
        return violation(
            path,
            "oneOf:" + "|".join(self.values),
            f"must be one of {', '.join(self.values)}",
            value,
        )


@dataclass(frozen=True, slots=True)
class Range:
    """Faixa numérica inclusiva."""

    min: float | None = None
    max: float | None = None

    def check(self, value: Any, path: Path) -> FieldError | None:
        if self.min is not None and value < self.min:
            return violation(path, f"min:{self.min:g}", f"must be >= {self.min:g}", value)
        if self.max is not None and value > self.max:
            return violation(path, f"max:{self.max:g}", f"must be <= {self.max:g}", value)
        return None


@dataclass(frozen=True, slots=True)
class UrlScheme:
    """Esquema de URL permitido e tamanho máximo."""

    schemes: Sequence[str]
    max_length: int | None = None

    def check(self, value: Any, path: Path) -> FieldError | None:
        if self.max_length is not None and len(value) > self.max_length:
            return violation(
                path,
                f"maxLength:{self.max_length}",
                f"must not exceed {self.max_length} characters (got {len(value)})",
                value,
            )
        scheme = urlsplit(value).scheme.lower()
        if scheme not in self.schemes:
            return violation(
                path,
                "scheme:" + "|".join(self.schemes),
                f"URL scheme must be one of {', '.join(self.schemes)}",
                value,
            )
        return None


@dataclass(frozen=True, slots=True)
class Pattern:
    """Formato textual (ex.: datas do datetime picker)."""

    regex: str
    name: str

    def check(self, value: Any, path: Path) -> FieldError | None:
        if re.fullmatch(self.regex, value):
            return None
        return violation(path, f"format:{self.name}", f"must match format {self.name}", value)


def check_field(
    value: Any,
    path: Path,
    *constraints: Constraint,
    required: bool = False,
) -> list[FieldError]:
    """Valida um campo escalar; ausência só é erro se `required`."""
    if value is None or value == "":
        if required:
            return [violation(path, "required", "is required", value)]
        return []

    for constraint in constraints:
        error = constraint.check(value, path)
        if error is not None:
            return [error]
    return []


def check_count(
    items: Sequence[Any],
    path: Path,
    *,
    min_items: int | None = None,
    max_items: int | None = None,
) -> list[FieldError]:
    """Limite estrutural de quantidade de filhos."""
    count = len(items)
    if min_items is not None and count < min_items:
        return [
            violation(
                path,
                f"min:{min_items}",
                f"must contain at least {min_items} items (got {count})",
                count,
                ErrorCode.STRUCTURAL_BOUND_VIOLATION,
            )
        ]
    if max_items is not None and count > max_items:
        return [
            violation(
                path,
                f"max:{max_items}",
                f"must not contain more than {max_items} items (got {count})",
                count,
                ErrorCode.STRUCTURAL_BOUND_VIOLATION,
            )
        ]
    return []


def check_each(
    values: Iterable[Any],
    path: Path,
    *constraints: Constraint,
) -> list[FieldError]:
    """Aplica as constraints a cada item de uma lista escalar."""
    errors: list[FieldError] = []
    for index, value in enumerate(values):
        errors.extend(check_field(value, (*path, index), *constraints, required=True))
    return errors
