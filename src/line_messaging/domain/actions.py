"""Action objects (união discriminada por `type`).

Usados em templates, componentes flex, rich menus e quick replies.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from line_messaging.domain.base import LineModel


class PostbackAction(LineModel):
    """Retorna `data` via webhook (postback event).

    `text` (depreciado) e `display_text` não podem coexistir.
    """

    type: Literal["postback"] = "postback"
    label: str | None = None
    data: str
    text: str | None = None
    display_text: str | None = None


class MessageAction(LineModel):
    """Envia `text` como mensagem do usuário."""

    type: Literal["message"] = "message"
    label: str | None = None
    text: str


class UriAction(LineModel):
    """Abre `uri` (http, https, line, tel)."""

    type: Literal["uri"] = "uri"
    label: str | None = None
    uri: str


class DatetimePickerAction(LineModel):
    """Retorna data/hora escolhida via postback."""

    type: Literal["datetimepicker"] = "datetimepicker"
    label: str | None = None
    data: str
    mode: str
    initial: str | None = None
    max: str | None = None
    min: str | None = None


class CameraAction(LineModel):
    """Abre a câmera (somente quick reply)."""

    type: Literal["camera"] = "camera"
    label: str


class CameraRollAction(LineModel):
    """Abre o rolo da câmera (somente quick reply)."""

    type: Literal["cameraRoll"] = "cameraRoll"
    label: str


class LocationAction(LineModel):
    """Abre a tela de localização (somente quick reply)."""

    type: Literal["location"] = "location"
    label: str


TemplateAction = Annotated[
    Union[
        PostbackAction,
        MessageAction,
        UriAction,
        DatetimePickerAction,
        CameraAction,
        CameraRollAction,
        LocationAction,
    ],
    Field(discriminator="type"),
]

# Ações que só fazem sentido em itens de quick reply
QUICK_REPLY_ONLY_ACTIONS = (CameraAction, CameraRollAction, LocationAction)
