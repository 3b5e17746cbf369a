"""Validação recursiva de payloads da LINE Messaging API.

Este pacote contém validadores especializados por família de nó
(mensagens, ações, templates, flex, filtros) e o TreeWalker que os
combina em uma única passada.

Uso:
    from line_messaging.adapters.line.validators import LineMessageValidator

    result = LineMessageValidator().validate_message(message)
    if not result.is_valid:
        for error in result.errors:
            print(error.dotted_path, error.constraint)
"""

from line_messaging.adapters.line.validators.errors import (
    ErrorCode,
    FieldError,
    UnknownVariantError,
    ValidationError,
    ValidationResult,
)
from line_messaging.adapters.line.validators.filters import (
    FilterValidator,
    count_audiences,
    evaluate_filter,
)
from line_messaging.adapters.line.validators.orchestrator import (
    LineMessageValidator,
)
from line_messaging.adapters.line.validators.walker import TreeWalker

__all__ = [
    "ErrorCode",
    "FieldError",
    "FilterValidator",
    "LineMessageValidator",
    "TreeWalker",
    "UnknownVariantError",
    "ValidationError",
    "ValidationResult",
    "count_audiences",
    "evaluate_filter",
]
