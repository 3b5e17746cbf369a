"""Testes do LineMessageValidator (requisições completas)."""

from __future__ import annotations

import pytest

from line_messaging.adapters.line.models import (
    BroadcastRequest,
    MulticastRequest,
    NarrowcastFilter,
    NarrowcastLimit,
    NarrowcastRequest,
    PushMessageRequest,
    ReplyMessageRequest,
)
from line_messaging.adapters.line.validators import LineMessageValidator
from line_messaging.adapters.line.validators.errors import ErrorCode
from line_messaging.domain.actions import PostbackAction
from line_messaging.domain.enums import LogicalOperator
from line_messaging.domain.filters import (
    AudienceRecipient,
    DemographicOperator,
    GenderDemographic,
    RecipientOperator,
)
from line_messaging.domain.flex import FlexBox, FlexBubble, FlexSpan, FlexText
from line_messaging.domain.messages import FlexMessage, TextMessage


def _spans_message() -> FlexMessage:
    text = FlexText(text="ignored", contents=(FlexSpan(text="Hi"),))
    return FlexMessage(
        alt_text="alt",
        contents=FlexBubble(body=FlexBox(layout="vertical", contents=(text,))),
    )


class TestValidateMessages:
    """Testes para validate_messages e validate_action."""

    def test_message_paths_are_prefixed(self, validator: LineMessageValidator) -> None:
        """Erros de mensagem vêm prefixados com ("messages", i)."""
        result = validator.validate_messages((TextMessage(text="ok"), TextMessage(text="")))

        assert [e.path for e in result.errors] == [("messages", 1, "text")]

    def test_more_than_five_messages(self, validator: LineMessageValidator) -> None:
        """Mais de 5 mensagens: erro estrutural em `messages`."""
        result = validator.validate_messages(tuple(TextMessage(text="m") for _ in range(6)))

        assert len(result.errors) == 1
        assert result.errors[0].path == ("messages",)
        assert result.errors[0].code == ErrorCode.STRUCTURAL_BOUND_VIOLATION

    def test_empty_list(self, validator: LineMessageValidator) -> None:
        """Lista vazia de mensagens gera min:1."""
        result = validator.validate_messages(())
        assert result.errors[0].constraint == "min:1"

    def test_action_standalone(self, validator: LineMessageValidator) -> None:
        """Ação avulsa é validada sem prefixo de caminho."""
        result = validator.validate_action(PostbackAction(data="x" * 301))

        assert len(result.errors) == 1
        assert result.errors[0].path == ("data",)

    def test_default_depth_from_settings(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Sem max_depth explícito, usa VALIDATION_MAX_DEPTH do ambiente."""
        monkeypatch.setenv("VALIDATION_MAX_DEPTH", "3")

        box = FlexBox(layout="vertical", contents=(FlexBox(layout="vertical"),))
        message = FlexMessage(alt_text="alt", contents=FlexBubble(body=box))

        errors = LineMessageValidator().validate_message(message).errors

        assert [e.code for e in errors] == [ErrorCode.DEPTH_EXCEEDED]
        assert errors[0].path == ("contents", "body", "contents", 0)


class TestValidateRequests:
    """Testes para push, reply, broadcast e multicast."""

    def test_push_requires_to(self, validator: LineMessageValidator) -> None:
        """Push sem destinatário gera required em `to`."""
        request = PushMessageRequest(to="", messages=(TextMessage(text="hi"),))

        errors = validator.validate_push(request).errors

        assert [(e.path, e.constraint) for e in errors] == [(("to",), "required")]

    def test_reply_requires_token(self, validator: LineMessageValidator) -> None:
        """Reply sem token gera erro em `replyToken`."""
        request = ReplyMessageRequest(reply_token="", messages=(TextMessage(text="hi"),))
        assert validator.validate_reply(request).errors[0].path == ("replyToken",)

    def test_broadcast_valid(self, validator: LineMessageValidator) -> None:
        """Broadcast válido devolve a própria requisição."""
        request = BroadcastRequest(messages=(TextMessage(text="hi"),))

        result = validator.validate_broadcast(request)

        assert result.is_valid
        assert result.value is request

    def test_multicast_recipients(self, validator: LineMessageValidator) -> None:
        """Multicast aceita no máximo 500 destinatários."""
        request = MulticastRequest(to=tuple(f"U{i}" for i in range(501)), messages=(
            TextMessage(text="hi"),
        ))

        errors = validator.validate_multicast(request).errors

        assert [(e.path, e.constraint) for e in errors] == [(("to",), "max:500")]

    def test_multicast_empty_id(self, validator: LineMessageValidator) -> None:
        """ID vazio em multicast aponta o índice."""
        request = MulticastRequest(to=("U1", ""), messages=(TextMessage(text="hi"),))
        assert validator.validate_multicast(request).errors[0].path == ("to", 1)

    def test_request_is_normalized(self, validator: LineMessageValidator) -> None:
        """Requisição normalizada é uma cópia; a original fica intacta."""
        request = PushMessageRequest(to="U1", messages=(_spans_message(),))

        result = validator.validate_push(request)

        assert result.is_valid
        assert result.value is not request
        assert result.value.messages[0].contents.body.contents[0].text is None
        assert request.messages[0].contents.body.contents[0].text == "ignored"


class TestValidateNarrowcast:
    """Testes para validate_narrowcast."""

    def test_valid(self, validator: LineMessageValidator) -> None:
        """Recipient, filtro e limite válidos."""
        request = NarrowcastRequest(
            messages=(TextMessage(text="hi"),),
            recipient=AudienceRecipient(audience_group_id=1),
            filter=NarrowcastFilter(demographic=GenderDemographic(one_of=("male",))),
            limit=NarrowcastLimit(max=100),
        )
        assert validator.validate_narrowcast(request).is_valid

    def test_errors_in_every_part(self, validator: LineMessageValidator) -> None:
        """Erros de recipient, filtro, limite e mensagens na mesma passada."""
        request = NarrowcastRequest(
            messages=(TextMessage(text=""),),
            recipient=RecipientOperator(operator=LogicalOperator.OR, operands=()),
            filter=NarrowcastFilter(
                demographic=DemographicOperator(
                    operator=LogicalOperator.AND,
                    operands=(GenderDemographic(one_of=("other",)),),
                )
            ),
            limit=NarrowcastLimit(max=0),
        )

        errors = validator.validate_narrowcast(request).errors

        assert {e.path for e in errors} == {
            ("recipient",),
            ("filter", "demographic", "and", 0, "oneOf", 0),
            ("limit", "max"),
            ("messages", 0, "text"),
        }
