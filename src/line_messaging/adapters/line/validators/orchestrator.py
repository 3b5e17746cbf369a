"""Orquestrador de validação para payloads da LINE Messaging API."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from line_messaging.adapters.line.models import (
    BroadcastRequest,
    MulticastRequest,
    NarrowcastRequest,
    PushMessageRequest,
    ReplyMessageRequest,
)
from line_messaging.adapters.line.validators.errors import FieldError, Path, ValidationResult
from line_messaging.adapters.line.validators.fields import (
    Length,
    Range,
    check_count,
    check_each,
    check_field,
)
from line_messaging.adapters.line.validators.filters import FilterValidator
from line_messaging.adapters.line.validators.limits import (
    MAX_MESSAGES_PER_REQUEST,
    MAX_MULTICAST_RECIPIENTS,
)
from line_messaging.adapters.line.validators.walker import TreeWalker
from line_messaging.config.settings import get_settings
from line_messaging.domain.rich_menu import RichMenu
from line_messaging.observability.logging import get_logger

logger = get_logger(__name__)


class LineMessageValidator:
    """Validador central para payloads LINE.

    Orquestra TreeWalker (mensagens, ações, rich menu) e FilterValidator
    (recipient/demographic). Nunca levanta para erros de entrada: tudo
    volta em ValidationResult.errors.
    """

    def __init__(self, max_depth: int | None = None) -> None:
        if max_depth is None:
            max_depth = get_settings().validation_max_depth
        self._walker = TreeWalker(max_depth)
        self._filters = FilterValidator(max_depth)

    def validate_message(self, message: Any) -> ValidationResult[Any]:
        """Valida uma mensagem e todos os seus descendentes."""
        return self._walker.walk(message)

    def validate_messages(
        self,
        messages: Sequence[Any],
        path: Path = ("messages",),
    ) -> ValidationResult[tuple[Any, ...]]:
        """Valida a lista de mensagens de uma requisição (1 a 5)."""
        errors = check_count(
            messages, path, min_items=1, max_items=MAX_MESSAGES_PER_REQUEST
        )
        normalized = []
        for index, message in enumerate(messages):
            result = self._walker.walk(message, (*path, index))
            normalized.append(result.value)
            errors += result.errors

        value = tuple(messages)
        if any(new is not old for new, old in zip(normalized, messages)):
            value = tuple(normalized)
        return ValidationResult(value=value, errors=tuple(errors))

    def validate_action(self, action: Any) -> ValidationResult[Any]:
        """Valida uma ação fora de um container (sem regras de contexto)."""
        return self._walker.walk(action)

    def validate_rich_menu(self, rich_menu: RichMenu) -> ValidationResult[RichMenu]:
        return self._walker.walk(rich_menu)

    def validate_push(self, request: PushMessageRequest) -> ValidationResult[PushMessageRequest]:
        return self._validate_request(request, check_field(request.to, ("to",), required=True))

    def validate_reply(
        self, request: ReplyMessageRequest
    ) -> ValidationResult[ReplyMessageRequest]:
        return self._validate_request(
            request, check_field(request.reply_token, ("replyToken",), required=True)
        )

    def validate_broadcast(self, request: BroadcastRequest) -> ValidationResult[BroadcastRequest]:
        return self._validate_request(request, [])

    def validate_multicast(self, request: MulticastRequest) -> ValidationResult[MulticastRequest]:
        """Valida multicast: 1 a 500 destinatários não vazios."""
        errors = [
            *check_count(request.to, ("to",), min_items=1, max_items=MAX_MULTICAST_RECIPIENTS),
            *check_each(request.to, ("to",), Length(min=1)),
        ]
        return self._validate_request(request, errors)

    def validate_narrowcast(
        self, request: NarrowcastRequest
    ) -> ValidationResult[NarrowcastRequest]:
        """Valida narrowcast: recipient (<= 10 audiences), filtro demográfico e limite."""
        errors: list[FieldError] = []
        if request.recipient is not None:
            errors += self._filters.validate(request.recipient, ("recipient",)).errors
        if request.filter is not None and request.filter.demographic is not None:
            errors += self._filters.validate(
                request.filter.demographic, ("filter", "demographic")
            ).errors
        if request.limit is not None:
            errors += check_field(request.limit.max, ("limit", "max"), Range(min=1))
        return self._validate_request(request, errors)

    def _validate_request(self, request: Any, errors: list[FieldError]) -> ValidationResult[Any]:
        result = self.validate_messages(request.messages)
        all_errors = (*errors, *result.errors)
        if result.value is not request.messages:
            request = request.model_copy(update={"messages": result.value})

        logger.debug(
            "request_validated",
            extra={
                "request_type": type(request).__name__,
                "message_count": len(request.messages),
                "error_count": len(all_errors),
            },
        )
        return ValidationResult(value=request, errors=all_errors)
