"""Validação e avaliação de recipient/demographic filters (narrowcast).

Semântica dos operadores:
- and: todos os operandos são verdadeiros
- or: ao menos um operando é verdadeiro
- not: nenhum operando é verdadeiro (negação do "or" dos operandos)

Caminhos usam o formato wire: ("and", 1, "not", 0, "oneOf", 2).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from line_messaging.adapters.line.validators.errors import (
    ErrorCode,
    FieldError,
    Path,
    UnknownVariantError,
    ValidationResult,
)
from line_messaging.adapters.line.validators.fields import (
    Length,
    OneOf,
    check_each,
    check_field,
    violation,
)
from line_messaging.adapters.line.validators.limits import (
    DEMOGRAPHIC_AGES,
    DEMOGRAPHIC_APP_TYPES,
    DEMOGRAPHIC_AREAS,
    DEMOGRAPHIC_GENDERS,
    DEMOGRAPHIC_SUBSCRIPTION_PERIODS,
    MAX_NARROWCAST_AUDIENCES,
)
from line_messaging.config.settings import DEFAULT_VALIDATION_MAX_DEPTH
from line_messaging.domain.enums import LogicalOperator, RangeComparison
from line_messaging.domain.filters import (
    AgeDemographic,
    AppTypeDemographic,
    AreaDemographic,
    AudienceRecipient,
    DemographicOperator,
    GenderDemographic,
    RecipientOperator,
    SubscriptionPeriodDemographic,
)
from line_messaging.observability.logging import get_logger

logger = get_logger(__name__)

_OPERATORS = (RecipientOperator, DemographicOperator)
_ONE_OF_VALUES = {
    GenderDemographic: DEMOGRAPHIC_GENDERS,
    AppTypeDemographic: DEMOGRAPHIC_APP_TYPES,
    AreaDemographic: tuple(sorted(DEMOGRAPHIC_AREAS)),
}
_RANGE_BUCKETS = {
    AgeDemographic: DEMOGRAPHIC_AGES,
    SubscriptionPeriodDemographic: DEMOGRAPHIC_SUBSCRIPTION_PERIODS,
}
# Chaves do registro avaliado por evaluate_filter
_RECORD_KEYS = {
    GenderDemographic: "gender",
    AppTypeDemographic: "appType",
    AreaDemographic: "area",
    AgeDemographic: "age",
    SubscriptionPeriodDemographic: "subscriptionPeriod",
}


def count_audiences(tree: Any) -> int:
    """Quantidade de folhas audience em uma árvore de recipients."""
    if isinstance(tree, AudienceRecipient):
        return 1
    if isinstance(tree, RecipientOperator):
        return sum(count_audiences(operand) for operand in tree.operands)
    return 0


class FilterValidator:
    """Valida árvores de filtros, com limite de profundidade.

    Todos os operandos são visitados; erros de todos os ramos são reportados.
    """

    def __init__(self, max_depth: int = DEFAULT_VALIDATION_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        self.max_depth = max_depth

    def validate(self, tree: Any, path: Path = ()) -> ValidationResult[Any]:
        """Valida uma árvore de recipient ou demographic filter."""
        errors = [*self.check(tree, path), *self.check_audience_cap(tree, path)]

        logger.debug(
            "filter_validated",
            extra={"node_type": type(tree).__name__, "error_count": len(errors)},
        )
        return ValidationResult(value=tree, errors=tuple(errors))

    def check_audience_cap(self, tree: Any, path: Path = ()) -> list[FieldError]:
        """Recipients: no máximo 10 audiences na árvore inteira."""
        if not isinstance(tree, (AudienceRecipient, RecipientOperator)):
            return []
        audiences = count_audiences(tree)
        if audiences <= MAX_NARROWCAST_AUDIENCES:
            return []
        return [
            violation(
                path,
                f"maxAudiences:{MAX_NARROWCAST_AUDIENCES}",
                f"must not reference more than {MAX_NARROWCAST_AUDIENCES} "
                f"audiences (got {audiences})",
                audiences,
                ErrorCode.STRUCTURAL_BOUND_VIOLATION,
            )
        ]

    def check(self, node: Any, path: Path = (), depth: int = 0) -> list[FieldError]:
        """Coleta erros do nó e de seus descendentes."""
        if depth >= self.max_depth:
            return [
                violation(
                    path,
                    f"maxDepth:{self.max_depth}",
                    f"filter nesting exceeds {self.max_depth} levels",
                    depth,
                    ErrorCode.DEPTH_EXCEEDED,
                )
            ]

        if isinstance(node, _OPERATORS):
            return self._check_operator(node, path, depth)
        if isinstance(node, AudienceRecipient):
            return []
        if type(node) in _ONE_OF_VALUES:
            return self._check_one_of(node, path)
        if type(node) in _RANGE_BUCKETS:
            allowed = _RANGE_BUCKETS[type(node)]
            return check_field(node.value, (*path, node.comparison.value), OneOf(allowed))
        raise UnknownVariantError(f"Unknown filter variant: {type(node).__name__}")

    def _check_operator(self, node: Any, path: Path, depth: int) -> list[FieldError]:
        if not node.operands:
            return [
                violation(
                    path,
                    f"nonEmpty:{node.operator.value}",
                    f"'{node.operator.value}' operator must have at least one operand",
                    code=ErrorCode.EMPTY_OPERATOR_LIST,
                )
            ]

        errors: list[FieldError] = []
        for index, operand in enumerate(node.operands):
            errors += self.check(operand, (*path, node.operator.value, index), depth + 1)
        return errors

    def _check_one_of(self, node: Any, path: Path) -> list[FieldError]:
        one_of_path = (*path, "oneOf")
        errors = check_field(node.one_of, one_of_path, Length(min=1), required=True)
        return errors + check_each(node.one_of, one_of_path, OneOf(_ONE_OF_VALUES[type(node)]))


def evaluate_filter(tree: Any, record: Mapping[str, Any]) -> bool:
    """Avalia um filtro contra um registro de usuário.

    O registro usa os nomes wire: gender, age, appType, area,
    subscriptionPeriod e audienceGroupIds (coleção de ids).

    Raises:
        ValidationError: Se a árvore for inválida (ex.: operador vazio)
    """
    FilterValidator().validate(tree).raise_for_errors()
    return _evaluate(tree, record)


def _evaluate(node: Any, record: Mapping[str, Any]) -> bool:
    if isinstance(node, _OPERATORS):
        results = (_evaluate(operand, record) for operand in node.operands)
        if node.operator == LogicalOperator.AND:
            return all(results)
        if node.operator == LogicalOperator.OR:
            return any(results)
        return not any(results)

    if isinstance(node, AudienceRecipient):
        return node.audience_group_id in record.get("audienceGroupIds", ())

    key = _RECORD_KEYS.get(type(node))
    if key is None:
        raise UnknownVariantError(f"Unknown filter variant: {type(node).__name__}")

    actual = record.get(key)
    if type(node) in _ONE_OF_VALUES:
        return actual in node.one_of

    buckets = _RANGE_BUCKETS[type(node)]
    if actual not in buckets:
        return False
    position = buckets.index(actual)
    bound = buckets.index(node.value)
    if node.comparison == RangeComparison.GTE:
        return position >= bound
    return position < bound
