"""Flex Message: containers (bubble, carousel) e componentes de layout.

Estrutura recursiva:
- carousel possui bubbles
- bubble possui até quatro blocos (header, hero, body, footer)
- box possui componentes, inclusive outros boxes

Posse sempre de cima para baixo; não há referência para ancestrais.
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from line_messaging.domain.actions import TemplateAction
from line_messaging.domain.base import LineModel


class FlexSpan(LineModel):
    """Trecho de texto com estilo próprio dentro de um FlexText."""

    type: Literal["span"] = "span"
    text: str
    color: str | None = None
    size: str | None = None
    weight: str | None = None
    style: str | None = None
    decoration: str | None = None


class FlexText(LineModel):
    """Texto; se `contents` estiver presente, `text` é ignorado pela API."""

    type: Literal["text"] = "text"
    text: str | None = None
    contents: tuple[FlexSpan, ...] | None = None
    flex: int | None = None
    margin: str | None = None
    size: str | None = None
    align: str | None = None
    gravity: str | None = None
    wrap: bool | None = None
    max_lines: int | None = None
    weight: str | None = None
    color: str | None = None
    action: TemplateAction | None = None
    style: str | None = None
    decoration: str | None = None


class FlexButton(LineModel):
    type: Literal["button"] = "button"
    action: TemplateAction
    flex: int | None = None
    margin: str | None = None
    height: str | None = None
    style: str | None = None
    color: str | None = None
    gravity: str | None = None


class FlexIcon(LineModel):
    """Ícone decorativo; permitido apenas em box baseline."""

    type: Literal["icon"] = "icon"
    url: str
    margin: str | None = None
    size: str | None = None
    aspect_ratio: str | None = None


class FlexImage(LineModel):
    type: Literal["image"] = "image"
    url: str
    flex: int | None = None
    margin: str | None = None
    align: str | None = None
    gravity: str | None = None
    size: str | None = None
    aspect_ratio: str | None = None
    aspect_mode: str | None = None
    background_color: str | None = None
    action: TemplateAction | None = None


class FlexSeparator(LineModel):
    type: Literal["separator"] = "separator"
    margin: str | None = None
    color: str | None = None


class FlexFiller(LineModel):
    type: Literal["filler"] = "filler"
    flex: int | None = None


class FlexSpacer(LineModel):
    """Espaçador (não recomendado pela API; prefira padding)."""

    type: Literal["spacer"] = "spacer"
    size: str | None = None


class FlexBox(LineModel):
    """Box: define o layout dos componentes filhos (inclusive outros boxes)."""

    type: Literal["box"] = "box"
    layout: str
    contents: tuple[FlexComponent, ...] = ()
    flex: int | None = None
    spacing: str | None = None
    margin: str | None = None
    background_color: str | None = None
    border_color: str | None = None
    border_width: str | None = None
    corner_radius: str | None = None
    width: str | None = None
    height: str | None = None
    padding_all: str | None = None
    padding_top: str | None = None
    padding_bottom: str | None = None
    padding_start: str | None = None
    padding_end: str | None = None
    action: TemplateAction | None = None


FlexComponent = Annotated[
    Union[
        FlexBox,
        FlexButton,
        FlexIcon,
        FlexImage,
        FlexText,
        FlexSeparator,
        FlexFiller,
        FlexSpacer,
    ],
    Field(discriminator="type"),
]

FlexBox.model_rebuild()

FlexHero = Annotated[Union[FlexBox, FlexImage], Field(discriminator="type")]


class FlexBlockStyle(LineModel):
    background_color: str | None = None
    separator: bool | None = None
    separator_color: str | None = None


class FlexBubbleStyles(LineModel):
    header: FlexBlockStyle | None = None
    hero: FlexBlockStyle | None = None
    body: FlexBlockStyle | None = None
    footer: FlexBlockStyle | None = None


class FlexBubble(LineModel):
    """Bubble: um balão com blocos header/hero/body/footer."""

    type: Literal["bubble"] = "bubble"
    size: str | None = None
    direction: str | None = None
    header: FlexBox | None = None
    hero: FlexHero | None = None
    body: FlexBox | None = None
    footer: FlexBox | None = None
    styles: FlexBubbleStyles | None = None
    action: TemplateAction | None = None


class FlexCarousel(LineModel):
    """Carousel: sequência ordenada de bubbles com a mesma largura."""

    type: Literal["carousel"] = "carousel"
    contents: tuple[FlexBubble, ...]


FlexContainer = Annotated[Union[FlexBubble, FlexCarousel], Field(discriminator="type")]
