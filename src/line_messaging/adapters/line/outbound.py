"""Cliente outbound para a LINE Messaging API.

Responsabilidade:
- Validar localmente todo payload antes do envio (erros como dados)
- Serializar a árvore normalizada e entregar ao transporte
- Converter falhas de transporte em LineApiResponse
- Evitar exposição de tokens, IDs de usuário e conteúdo em logs
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from typing import Any, Protocol

from pydantic import BaseModel
from pydantic import ValidationError as ModelValidationError

from line_messaging.adapters.line.http_client import create_line_http_client
from line_messaging.adapters.line.models import (
    BroadcastRequest,
    LineApiRequest,
    LineApiResponse,
    MulticastRequest,
    NarrowcastFilter,
    NarrowcastLimit,
    NarrowcastRequest,
    PushMessageRequest,
    ReplyMessageRequest,
)
from line_messaging.adapters.line.payload_builders import build_api_request
from line_messaging.adapters.line.validators import (
    FieldError,
    LineMessageValidator,
    ValidationResult,
)
from line_messaging.adapters.line.validators.fields import check_field
from line_messaging.config.settings import Settings, get_settings
from line_messaging.domain.insight import (
    FriendDemographics,
    NarrowcastProgressResponse,
    NumberOfFollowers,
    NumberOfMessageDeliveries,
    NumberOfMessagesSentThisMonth,
    RichMenuIdResponse,
    SentMessagesResponse,
    TargetLimitForAdditionalMessages,
    UserProfile,
)
from line_messaging.domain.rich_menu import RichMenu
from line_messaging.infra.http import HttpError
from line_messaging.observability.logging import get_logger

logger: logging.Logger = get_logger(__name__)


class Transport(Protocol):
    """Colaborador que executa a chamada HTTP.

    Levanta HttpError em falhas; retorna o corpo JSON em sucesso.
    """

    async def send(self, request: LineApiRequest) -> dict[str, Any]: ...


def _resource(path: str) -> str:
    """Primeiro segmento do endpoint (sem IDs de usuário para logs)."""
    return path.split("/", 1)[0]


def _validation_failure(errors: Sequence[FieldError]) -> LineApiResponse:
    return LineApiResponse(
        success=False,
        error_code="VALIDATION_ERROR",
        error_message=f"{len(errors)} validation error(s)",
        errors=[error.to_dict() for error in errors],
    )


class LineOutboundClient:
    """Cliente para chamadas à API LINE.

    Orquestra validação, construção de payload e envio.
    """

    def __init__(
        self,
        transport: Transport,
        validator: LineMessageValidator | None = None,
        validate_before_send: bool = True,
    ) -> None:
        """Inicializa o cliente.

        Args:
            transport: Implementação de `send` (ex.: LineHttpClient)
            validator: Validador local; padrão usa Settings
            validate_before_send: Se False, envia sem validar (não normaliza)
        """
        self.transport = transport
        self.validator = validator or LineMessageValidator()
        self.validate_before_send = validate_before_send

    # ------------------------------------------------------------------
    # Mensagens
    # ------------------------------------------------------------------

    async def push_message(
        self,
        to: str,
        messages: Sequence[Any],
        notification_disabled: bool | None = None,
    ) -> LineApiResponse:
        """Envia mensagens para um usuário, grupo ou sala."""
        request = PushMessageRequest(
            to=to, messages=tuple(messages), notification_disabled=notification_disabled
        )
        return await self._send_payload(
            request, self.validator.validate_push, SentMessagesResponse
        )

    def push_message_sync(self, to: str, messages: Sequence[Any]) -> LineApiResponse:
        """Envia push em contexto síncrono (apoio para scripts/local)."""
        return asyncio.run(self.push_message(to, messages))

    async def reply_message(
        self,
        reply_token: str,
        messages: Sequence[Any],
        notification_disabled: bool | None = None,
    ) -> LineApiResponse:
        """Responde a um evento de webhook."""
        request = ReplyMessageRequest(
            reply_token=reply_token,
            messages=tuple(messages),
            notification_disabled=notification_disabled,
        )
        return await self._send_payload(
            request, self.validator.validate_reply, SentMessagesResponse
        )

    async def multicast(
        self,
        to: Sequence[str],
        messages: Sequence[Any],
        notification_disabled: bool | None = None,
    ) -> LineApiResponse:
        """Envia as mesmas mensagens para vários user IDs (máx. 500)."""
        request = MulticastRequest(
            to=tuple(to), messages=tuple(messages), notification_disabled=notification_disabled
        )
        return await self._send_payload(request, self.validator.validate_multicast)

    async def broadcast(
        self,
        messages: Sequence[Any],
        notification_disabled: bool | None = None,
    ) -> LineApiResponse:
        """Envia mensagens para todos os amigos do canal."""
        request = BroadcastRequest(
            messages=tuple(messages), notification_disabled=notification_disabled
        )
        return await self._send_payload(request, self.validator.validate_broadcast)

    async def narrowcast(
        self,
        messages: Sequence[Any],
        recipient: Any = None,
        demographic: Any = None,
        limit_max: int | None = None,
        up_to_remaining_quota: bool | None = None,
        notification_disabled: bool | None = None,
    ) -> LineApiResponse:
        """Envia mensagens para um segmento (audiences e/ou demografia)."""
        limit = None
        if limit_max is not None or up_to_remaining_quota is not None:
            limit = NarrowcastLimit(max=limit_max, up_to_remaining_quota=up_to_remaining_quota)
        request = NarrowcastRequest(
            messages=tuple(messages),
            recipient=recipient,
            filter=NarrowcastFilter(demographic=demographic) if demographic is not None else None,
            limit=limit,
            notification_disabled=notification_disabled,
        )
        return await self._send_payload(request, self.validator.validate_narrowcast)

    async def get_narrowcast_progress(self, request_id: str) -> LineApiResponse:
        """Consulta o progresso de um narrowcast (request id do envio)."""
        return await self._get(
            "message/progress/narrowcast",
            NarrowcastProgressResponse,
            params={"requestId": request_id},
            required={"requestId": request_id},
        )

    # ------------------------------------------------------------------
    # Rich menu
    # ------------------------------------------------------------------

    async def create_rich_menu(self, rich_menu: RichMenu) -> LineApiResponse:
        """Cria um rich menu; `result` traz o richMenuId."""
        return await self._send_payload(
            rich_menu, self.validator.validate_rich_menu, RichMenuIdResponse
        )

    async def delete_rich_menu(self, rich_menu_id: str) -> LineApiResponse:
        return await self._call(
            LineApiRequest(method="DELETE", path=f"richmenu/{rich_menu_id}"),
            required={"richMenuId": rich_menu_id},
        )

    async def link_rich_menu_to_user(self, user_id: str, rich_menu_id: str) -> LineApiResponse:
        return await self._call(
            LineApiRequest(method="POST", path=f"user/{user_id}/richmenu/{rich_menu_id}"),
            required={"userId": user_id, "richMenuId": rich_menu_id},
        )

    async def unlink_rich_menu_from_user(self, user_id: str) -> LineApiResponse:
        return await self._call(
            LineApiRequest(method="DELETE", path=f"user/{user_id}/richmenu"),
            required={"userId": user_id},
        )

    async def set_default_rich_menu(self, rich_menu_id: str) -> LineApiResponse:
        return await self._call(
            LineApiRequest(method="POST", path=f"user/all/richmenu/{rich_menu_id}"),
            required={"richMenuId": rich_menu_id},
        )

    # ------------------------------------------------------------------
    # Perfil, insights e cota
    # ------------------------------------------------------------------

    async def get_user_profile(self, user_id: str) -> LineApiResponse:
        return await self._get(f"profile/{user_id}", UserProfile, required={"userId": user_id})

    async def get_number_of_message_deliveries(self, date: str) -> LineApiResponse:
        """Entregas por tipo no dia `date` (yyyyMMdd, fuso UTC+9)."""
        return await self._get(
            "insight/message/delivery",
            NumberOfMessageDeliveries,
            params={"date": date},
            required={"date": date},
        )

    async def get_number_of_followers(self, date: str) -> LineApiResponse:
        """Seguidores no dia `date` (yyyyMMdd, fuso UTC+9)."""
        return await self._get(
            "insight/followers",
            NumberOfFollowers,
            params={"date": date},
            required={"date": date},
        )

    async def get_friend_demographics(self) -> LineApiResponse:
        return await self._get("insight/demographic", FriendDemographics)

    async def get_target_limit_for_additional_messages(self) -> LineApiResponse:
        return await self._get("message/quota", TargetLimitForAdditionalMessages)

    async def get_number_of_messages_sent_this_month(self) -> LineApiResponse:
        return await self._get("message/quota/consumption", NumberOfMessagesSentThisMonth)

    # ------------------------------------------------------------------
    # Internos
    # ------------------------------------------------------------------

    async def _send_payload(
        self,
        payload: Any,
        validate: Callable[[Any], ValidationResult[Any]],
        result_model: type[BaseModel] | None = None,
    ) -> LineApiResponse:
        """Valida, serializa a árvore normalizada e envia."""
        if self.validate_before_send:
            result = validate(payload)
            if not result.is_valid:
                logger.info(
                    "line_payload_rejected",
                    extra={
                        "payload_type": type(payload).__name__,
                        "error_count": len(result.errors),
                    },
                )
                return _validation_failure(result.errors)
            payload = result.value

        return await self._call(build_api_request(payload), result_model=result_model)

    async def _get(
        self,
        path: str,
        result_model: type[BaseModel],
        params: dict[str, Any] | None = None,
        required: dict[str, str] | None = None,
    ) -> LineApiResponse:
        return await self._call(
            LineApiRequest(method="GET", path=path, params=params),
            result_model=result_model,
            required=required,
        )

    async def _call(
        self,
        request: LineApiRequest,
        result_model: type[BaseModel] | None = None,
        required: dict[str, str] | None = None,
    ) -> LineApiResponse:
        """Executa a chamada e converte o resultado em LineApiResponse."""
        errors = [
            error
            for name, value in (required or {}).items()
            for error in check_field(value, (name,), required=True)
        ]
        if errors:
            return _validation_failure(errors)

        try:
            data = await self.transport.send(request)
        except HttpError as exc:
            logger.error(
                "line_api_call_failed",
                extra={
                    "method": request.method,
                    "resource": _resource(request.path),
                    "status_code": exc.status_code,
                    "is_retryable": exc.is_retryable,
                },
            )
            api_error = getattr(exc, "api_error", None)
            return LineApiResponse(
                success=False,
                error_code="LINE_API_ERROR",
                error_message=str(exc),
                status_code=exc.status_code,
                errors=list(api_error.details) if api_error else [],
            )

        logger.info(
            "line_api_call_succeeded",
            extra={"method": request.method, "resource": _resource(request.path)},
        )
        if result_model is None:
            return LineApiResponse(success=True, data=data)

        try:
            parsed = result_model.model_validate(data)
        except ModelValidationError as exc:
            logger.error(
                "line_response_parse_failed",
                extra={"resource": _resource(request.path), "error_count": exc.error_count()},
            )
            return LineApiResponse(
                success=False,
                data=data,
                error_code="RESPONSE_PARSE_ERROR",
                error_message=f"Unexpected response shape for {result_model.__name__}",
            )
        return LineApiResponse(success=True, data=data, result=parsed)


def create_line_outbound_client(settings: Settings | None = None) -> LineOutboundClient:
    """Factory: cliente outbound com LineHttpClient e validador configurados.

    Raises:
        ValueError: Se a configuração de acesso ou de validação for inválida
    """
    settings = settings or get_settings()
    errors = settings.validate_validation_config()
    if errors:
        raise ValueError("; ".join(errors))

    return LineOutboundClient(
        transport=create_line_http_client(settings),
        validator=LineMessageValidator(max_depth=settings.validation_max_depth),
        validate_before_send=settings.validate_before_send,
    )
