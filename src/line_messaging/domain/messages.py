"""Message objects da LINE Messaging API (união discriminada por `type`).

Responsabilidade:
- Definir estruturas pydantic para cada tipo de mensagem
- Preservar o formato wire (camelCase) na serialização
- Deixar limites documentados para o validador (erros reportados como dados)
"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import Field

from line_messaging.domain.actions import TemplateAction
from line_messaging.domain.base import LineModel
from line_messaging.domain.flex import FlexContainer
from line_messaging.domain.templates import Template


class QuickReplyItem(LineModel):
    """Botão de quick reply (ação sem URI)."""

    type: Literal["action"] = "action"
    image_url: str | None = None
    action: TemplateAction


class QuickReply(LineModel):
    """Container de botões de quick reply (máx. 13 itens)."""

    items: tuple[QuickReplyItem, ...]


class _MessageBase(LineModel):
    quick_reply: QuickReply | None = None


class TextMessage(_MessageBase):
    type: Literal["text"] = "text"
    text: str


class ImageMessage(_MessageBase):
    """Imagem JPEG via HTTPS."""

    type: Literal["image"] = "image"
    original_content_url: str
    preview_image_url: str


class VideoMessage(_MessageBase):
    """Vídeo mp4 via HTTPS com imagem de preview."""

    type: Literal["video"] = "video"
    original_content_url: str
    preview_image_url: str


class AudioMessage(_MessageBase):
    """Áudio m4a; `duration` em milissegundos."""

    type: Literal["audio"] = "audio"
    original_content_url: str
    duration: int


class LocationMessage(_MessageBase):
    type: Literal["location"] = "location"
    title: str
    address: str
    latitude: float
    longitude: float


class StickerMessage(_MessageBase):
    type: Literal["sticker"] = "sticker"
    package_id: str
    sticker_id: str


class ImagemapArea(LineModel):
    """Área tocável; origem no canto superior esquerdo."""

    x: int
    y: int
    width: int
    height: int


class ImagemapBaseSize(LineModel):
    width: int
    height: int


class ImagemapUriAction(LineModel):
    type: Literal["uri"] = "uri"
    label: str | None = None
    link_uri: str
    area: ImagemapArea


class ImagemapMessageAction(LineModel):
    type: Literal["message"] = "message"
    label: str | None = None
    text: str
    area: ImagemapArea


ImagemapAction = Annotated[
    Union[ImagemapUriAction, ImagemapMessageAction],
    Field(discriminator="type"),
]


class ImagemapExternalLink(LineModel):
    """Link exibido ao final do vídeo."""

    link_uri: str
    label: str


class ImagemapVideo(LineModel):
    original_content_url: str
    preview_image_url: str
    area: ImagemapArea
    external_link: ImagemapExternalLink | None = None


class ImagemapMessage(_MessageBase):
    """Imagem com múltiplas áreas tocáveis (máx. 50 ações)."""

    type: Literal["imagemap"] = "imagemap"
    base_url: str
    alt_text: str
    base_size: ImagemapBaseSize
    video: ImagemapVideo | None = None
    actions: tuple[ImagemapAction, ...]


class TemplateMessage(_MessageBase):
    type: Literal["template"] = "template"
    alt_text: str
    template: Template


class FlexMessage(_MessageBase):
    type: Literal["flex"] = "flex"
    alt_text: str
    contents: FlexContainer


Message = Annotated[
    Union[
        TextMessage,
        ImageMessage,
        VideoMessage,
        AudioMessage,
        LocationMessage,
        StickerMessage,
        ImagemapMessage,
        TemplateMessage,
        FlexMessage,
    ],
    Field(discriminator="type"),
]
