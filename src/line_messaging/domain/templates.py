"""Templates: buttons, confirm, carousel e image carousel."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from line_messaging.domain.actions import TemplateAction
from line_messaging.domain.base import LineModel


class ButtonsTemplate(LineModel):
    """Imagem, título, texto e até 4 botões de ação."""

    type: Literal["buttons"] = "buttons"
    thumbnail_image_url: str | None = None
    image_aspect_ratio: str | None = None
    image_size: str | None = None
    image_background_color: str | None = None
    title: str | None = None
    text: str
    default_action: TemplateAction | None = None
    actions: tuple[TemplateAction, ...]


class ConfirmTemplate(LineModel):
    """Texto com exatamente dois botões."""

    type: Literal["confirm"] = "confirm"
    text: str
    actions: tuple[TemplateAction, ...]


class CarouselColumn(LineModel):
    thumbnail_image_url: str | None = None
    image_background_color: str | None = None
    title: str | None = None
    text: str
    default_action: TemplateAction | None = None
    actions: tuple[TemplateAction, ...]


class CarouselTemplate(LineModel):
    """Colunas navegáveis horizontalmente (máx. 10).

    Todas as colunas devem ter a mesma quantidade de ações.
    """

    type: Literal["carousel"] = "carousel"
    columns: tuple[CarouselColumn, ...]
    image_aspect_ratio: str | None = None
    image_size: str | None = None


class ImageCarouselColumn(LineModel):
    image_url: str
    action: TemplateAction


class ImageCarouselTemplate(LineModel):
    type: Literal["image_carousel"] = "image_carousel"
    columns: tuple[ImageCarouselColumn, ...]


Template = Annotated[
    Union[ButtonsTemplate, ConfirmTemplate, CarouselTemplate, ImageCarouselTemplate],
    Field(discriminator="type"),
]
