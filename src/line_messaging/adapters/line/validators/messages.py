"""Validadores de campos de message objects (sem descer em filhos).

A descida em templates, containers flex, ações e quick replies é feita
pelo TreeWalker.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from line_messaging.adapters.line.validators.errors import FieldError, Path, UnknownVariantError
from line_messaging.adapters.line.validators.fields import (
    Length,
    Range,
    UrlScheme,
    check_field,
)
from line_messaging.adapters.line.validators.limits import (
    ACTION_URI_SCHEMES,
    ASSET_URL_SCHEMES,
    MAX_ALT_TEXT_LENGTH,
    MAX_EXTERNAL_LINK_LABEL_LENGTH,
    MAX_IMAGEMAP_LABEL_LENGTH,
    MAX_IMAGEMAP_MESSAGE_TEXT_LENGTH,
    MAX_LOCATION_ADDRESS_LENGTH,
    MAX_LOCATION_TITLE_LENGTH,
    MAX_TEXT_LENGTH,
    MAX_URL_LENGTH,
)
from line_messaging.domain.messages import (
    AudioMessage,
    FlexMessage,
    ImagemapArea,
    ImagemapMessage,
    ImagemapMessageAction,
    ImagemapUriAction,
    ImageMessage,
    LocationMessage,
    QuickReplyItem,
    StickerMessage,
    TemplateMessage,
    TextMessage,
    VideoMessage,
)

_ASSET_URL = UrlScheme(ASSET_URL_SCHEMES, max_length=MAX_URL_LENGTH)
_LINK_URI = UrlScheme(ACTION_URI_SCHEMES, max_length=MAX_URL_LENGTH)


def _check_alt_text(alt_text: str, path: Path) -> list[FieldError]:
    return check_field(
        alt_text, (*path, "altText"), Length(max=MAX_ALT_TEXT_LENGTH), required=True
    )


def _validate_text(message: TextMessage, path: Path) -> list[FieldError]:
    return check_field(message.text, (*path, "text"), Length(max=MAX_TEXT_LENGTH), required=True)


def _validate_visual_media(message: ImageMessage | VideoMessage, path: Path) -> list[FieldError]:
    return [
        *check_field(
            message.original_content_url, (*path, "originalContentUrl"), _ASSET_URL, required=True
        ),
        *check_field(
            message.preview_image_url, (*path, "previewImageUrl"), _ASSET_URL, required=True
        ),
    ]


def _validate_audio(message: AudioMessage, path: Path) -> list[FieldError]:
    return [
        *check_field(
            message.original_content_url, (*path, "originalContentUrl"), _ASSET_URL, required=True
        ),
        *check_field(message.duration, (*path, "duration"), Range(min=0), required=True),
    ]


def _validate_location(message: LocationMessage, path: Path) -> list[FieldError]:
    return [
        *check_field(
            message.title, (*path, "title"), Length(max=MAX_LOCATION_TITLE_LENGTH), required=True
        ),
        *check_field(
            message.address,
            (*path, "address"),
            Length(max=MAX_LOCATION_ADDRESS_LENGTH),
            required=True,
        ),
        *check_field(message.latitude, (*path, "latitude"), Range(min=-90, max=90)),
        *check_field(message.longitude, (*path, "longitude"), Range(min=-180, max=180)),
    ]


def _validate_sticker(message: StickerMessage, path: Path) -> list[FieldError]:
    return [
        *check_field(message.package_id, (*path, "packageId"), required=True),
        *check_field(message.sticker_id, (*path, "stickerId"), required=True),
    ]


def _validate_imagemap(message: ImagemapMessage, path: Path) -> list[FieldError]:
    errors = [
        *check_field(message.base_url, (*path, "baseUrl"), _ASSET_URL, required=True),
        *_check_alt_text(message.alt_text, path),
        *check_field(message.base_size.width, (*path, "baseSize", "width"), Range(min=1)),
        *check_field(message.base_size.height, (*path, "baseSize", "height"), Range(min=1)),
    ]

    video = message.video
    if video is not None:
        video_path = (*path, "video")
        errors += [
            *check_field(
                video.original_content_url,
                (*video_path, "originalContentUrl"),
                _ASSET_URL,
                required=True,
            ),
            *check_field(
                video.preview_image_url,
                (*video_path, "previewImageUrl"),
                _ASSET_URL,
                required=True,
            ),
            *validate_imagemap_area(video.area, (*video_path, "area")),
        ]
        link = video.external_link
        if link is not None:
            link_path = (*video_path, "externalLink")
            errors += [
                *check_field(link.link_uri, (*link_path, "linkUri"), _LINK_URI, required=True),
                *check_field(
                    link.label,
                    (*link_path, "label"),
                    Length(max=MAX_EXTERNAL_LINK_LABEL_LENGTH),
                    required=True,
                ),
            ]
    return errors


def _validate_template_message(message: TemplateMessage, path: Path) -> list[FieldError]:
    return _check_alt_text(message.alt_text, path)


def _validate_flex_message(message: FlexMessage, path: Path) -> list[FieldError]:
    return _check_alt_text(message.alt_text, path)


_VALIDATORS: dict[type, Callable[[Any, Path], list[FieldError]]] = {
    TextMessage: _validate_text,
    ImageMessage: _validate_visual_media,
    VideoMessage: _validate_visual_media,
    AudioMessage: _validate_audio,
    LocationMessage: _validate_location,
    StickerMessage: _validate_sticker,
    ImagemapMessage: _validate_imagemap,
    TemplateMessage: _validate_template_message,
    FlexMessage: _validate_flex_message,
}


def validate_message_fields(message: Any, path: Path = ()) -> list[FieldError]:
    """Valida os campos próprios de uma mensagem.

    Raises:
        UnknownVariantError: Se o tipo da mensagem não for conhecido
    """
    validator = _VALIDATORS.get(type(message))
    if validator is None:
        raise UnknownVariantError(f"Unknown message variant: {type(message).__name__}")
    return validator(message, path)


def validate_imagemap_area(area: ImagemapArea, path: Path) -> list[FieldError]:
    return [
        *check_field(area.x, (*path, "x"), Range(min=0)),
        *check_field(area.y, (*path, "y"), Range(min=0)),
        *check_field(area.width, (*path, "width"), Range(min=1)),
        *check_field(area.height, (*path, "height"), Range(min=1)),
    ]


def validate_imagemap_action(action: Any, path: Path) -> list[FieldError]:
    """Valida uma ação de imagemap (uri ou message) e sua área."""
    label_errors = check_field(
        action.label, (*path, "label"), Length(max=MAX_IMAGEMAP_LABEL_LENGTH)
    )
    if isinstance(action, ImagemapUriAction):
        field_errors = check_field(action.link_uri, (*path, "linkUri"), _LINK_URI, required=True)
    elif isinstance(action, ImagemapMessageAction):
        field_errors = check_field(
            action.text,
            (*path, "text"),
            Length(max=MAX_IMAGEMAP_MESSAGE_TEXT_LENGTH),
            required=True,
        )
    else:
        raise UnknownVariantError(f"Unknown imagemap action variant: {type(action).__name__}")

    return label_errors + field_errors + validate_imagemap_area(action.area, (*path, "area"))


def validate_quick_reply_item(item: QuickReplyItem, path: Path) -> list[FieldError]:
    """Valida o ícone do item; a ação é validada pelo walker."""
    return check_field(item.image_url, (*path, "imageUrl"), _ASSET_URL)
