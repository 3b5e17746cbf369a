"""Validadores de action objects.

O contexto onde a ação aparece define as regras do label e quais tipos
são permitidos (camera/cameraRoll/location só em quick reply; uri nunca
em quick reply).
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from line_messaging.adapters.line.validators.errors import (
    ErrorCode,
    FieldError,
    Path,
    UnknownVariantError,
)
from line_messaging.adapters.line.validators.fields import (
    Length,
    OneOf,
    Pattern,
    UrlScheme,
    check_field,
    violation,
)
from line_messaging.adapters.line.validators.limits import (
    ACTION_URI_SCHEMES,
    MAX_ACTION_LABEL_LENGTH,
    MAX_ACTION_TEXT_LENGTH,
    MAX_IMAGE_CAROUSEL_LABEL_LENGTH,
    MAX_POSTBACK_DATA_LENGTH,
    MAX_URL_LENGTH,
)
from line_messaging.domain.actions import (
    QUICK_REPLY_ONLY_ACTIONS,
    CameraAction,
    CameraRollAction,
    DatetimePickerAction,
    LocationAction,
    MessageAction,
    PostbackAction,
    UriAction,
)
from line_messaging.domain.enums import DatetimePickerMode


@dataclass(frozen=True, slots=True)
class ActionContext:
    """Regras de ação dependentes de onde ela aparece."""

    name: str
    label_required: bool = False
    label_max: int = MAX_ACTION_LABEL_LENGTH
    quick_reply: bool = False
    # False quando a ação é validada fora de um container
    checks_placement: bool = True


STANDALONE = ActionContext("standalone", checks_placement=False)
TEMPLATE_ACTION = ActionContext("template", label_required=True)
DEFAULT_ACTION = ActionContext("defaultAction")
IMAGE_CAROUSEL_ACTION = ActionContext(
    "imageCarousel", label_max=MAX_IMAGE_CAROUSEL_LABEL_LENGTH
)
FLEX_BUTTON_ACTION = ActionContext("flexButton", label_required=True)
FLEX_ACTION = ActionContext("flex")
RICH_MENU_ACTION = ActionContext("richMenu")
QUICK_REPLY_ACTION = ActionContext("quickReply", label_required=True, quick_reply=True)

_DATETIME_PATTERNS = {
    DatetimePickerMode.DATE: Pattern(r"\d{4}-\d{2}-\d{2}", "YYYY-MM-DD"),
    DatetimePickerMode.TIME: Pattern(r"\d{2}:\d{2}", "HH:mm"),
    DatetimePickerMode.DATETIME: Pattern(
        r"\d{4}-\d{2}-\d{2}[Tt]\d{2}:\d{2}", "YYYY-MM-DDTHH:mm"
    ),
}


def _validate_postback(action: PostbackAction, path: Path) -> list[FieldError]:
    errors = [
        *check_field(
            action.data, (*path, "data"), Length(max=MAX_POSTBACK_DATA_LENGTH), required=True
        ),
        *check_field(action.text, (*path, "text"), Length(max=MAX_ACTION_TEXT_LENGTH)),
        *check_field(
            action.display_text, (*path, "displayText"), Length(max=MAX_ACTION_TEXT_LENGTH)
        ),
    ]
    if action.text and action.display_text:
        errors.append(
            violation(
                path,
                "mutuallyExclusive:text|displayText",
                "text and displayText cannot be set together",
                code=ErrorCode.MUTUAL_EXCLUSION_VIOLATION,
            )
        )
    return errors


def _validate_message(action: MessageAction, path: Path) -> list[FieldError]:
    return check_field(
        action.text, (*path, "text"), Length(max=MAX_ACTION_TEXT_LENGTH), required=True
    )


def _validate_uri(action: UriAction, path: Path) -> list[FieldError]:
    return check_field(
        action.uri,
        (*path, "uri"),
        UrlScheme(ACTION_URI_SCHEMES, max_length=MAX_URL_LENGTH),
        required=True,
    )


def _validate_datetime_picker(action: DatetimePickerAction, path: Path) -> list[FieldError]:
    errors = check_field(
        action.data, (*path, "data"), Length(max=MAX_POSTBACK_DATA_LENGTH), required=True
    )
    mode_errors = check_field(
        action.mode, (*path, "mode"), OneOf(tuple(DatetimePickerMode)), required=True
    )
    if mode_errors:
        # Sem modo válido não há formato para checar initial/min/max
        return errors + mode_errors

    pattern = _DATETIME_PATTERNS[DatetimePickerMode(action.mode)]
    format_errors: list[FieldError] = []
    for field in ("initial", "min", "max"):
        format_errors += check_field(getattr(action, field), (*path, field), pattern)
    errors += format_errors

    # Mesmo formato ISO: comparação lexicográfica equivale à cronológica
    bounded = not format_errors and action.min and action.max
    if bounded and action.min.lower() >= action.max.lower():
        errors.append(
            violation(
                (*path, "min"),
                "lessThan:max",
                "min must be earlier than max",
                action.min,
            )
        )
    return errors


def _validate_label_only(action: Any, path: Path) -> list[FieldError]:
    return []


_VALIDATORS: dict[type, Callable[[Any, Path], list[FieldError]]] = {
    PostbackAction: _validate_postback,
    MessageAction: _validate_message,
    UriAction: _validate_uri,
    DatetimePickerAction: _validate_datetime_picker,
    CameraAction: _validate_label_only,
    CameraRollAction: _validate_label_only,
    LocationAction: _validate_label_only,
}


def validate_action(
    action: Any,
    path: Path = (),
    context: ActionContext = STANDALONE,
) -> list[FieldError]:
    """Valida uma ação no contexto informado.

    Raises:
        UnknownVariantError: Se o tipo da ação não for conhecido
    """
    validator = _VALIDATORS.get(type(action))
    if validator is None:
        raise UnknownVariantError(f"Unknown action variant: {type(action).__name__}")

    quick_reply_only = isinstance(action, QUICK_REPLY_ONLY_ACTIONS)
    errors = check_field(
        action.label,
        (*path, "label"),
        Length(max=context.label_max),
        required=context.label_required or quick_reply_only,
    )

    if context.checks_placement and quick_reply_only and not context.quick_reply:
        errors.append(
            violation(
                (*path, "type"),
                "context:quickReply",
                f"{action.type} action is only allowed in quick reply items",
                action.type,
            )
        )
    if context.quick_reply and isinstance(action, UriAction):
        errors.append(
            violation(
                (*path, "type"),
                "context:notQuickReply",
                "uri action is not allowed in quick reply items",
                action.type,
            )
        )

    return errors + validator(action, path)
