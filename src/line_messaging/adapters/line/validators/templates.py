"""Validadores de campos de templates (buttons, confirm, carousel, image carousel)."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from line_messaging.adapters.line.validators.errors import FieldError, Path, UnknownVariantError
from line_messaging.adapters.line.validators.fields import (
    Length,
    OneOf,
    UrlScheme,
    check_field,
)
from line_messaging.adapters.line.validators.limits import (
    ASSET_URL_SCHEMES,
    MAX_BUTTONS_TEXT_LENGTH,
    MAX_CAROUSEL_TEXT_LENGTH,
    MAX_CONFIRM_TEXT_LENGTH,
    MAX_TEMPLATE_TITLE_LENGTH,
    MAX_TEXT_WITH_IMAGE_OR_TITLE_LENGTH,
    MAX_URL_LENGTH,
    TEMPLATE_IMAGE_ASPECT_RATIOS,
    TEMPLATE_IMAGE_SIZES,
)
from line_messaging.domain.templates import (
    ButtonsTemplate,
    CarouselColumn,
    CarouselTemplate,
    ConfirmTemplate,
    ImageCarouselColumn,
    ImageCarouselTemplate,
)

_ASSET_URL = UrlScheme(ASSET_URL_SCHEMES, max_length=MAX_URL_LENGTH)


def _check_image_options(template: Any, path: Path) -> list[FieldError]:
    return [
        *check_field(
            template.image_aspect_ratio,
            (*path, "imageAspectRatio"),
            OneOf(TEMPLATE_IMAGE_ASPECT_RATIOS),
        ),
        *check_field(template.image_size, (*path, "imageSize"), OneOf(TEMPLATE_IMAGE_SIZES)),
    ]


def _check_titled_text(node: Any, path: Path, max_text: int) -> list[FieldError]:
    """Título, thumbnail e texto; texto encolhe quando há imagem ou título."""
    if node.thumbnail_image_url or node.title:
        max_text = MAX_TEXT_WITH_IMAGE_OR_TITLE_LENGTH
    return [
        *check_field(node.thumbnail_image_url, (*path, "thumbnailImageUrl"), _ASSET_URL),
        *check_field(node.title, (*path, "title"), Length(max=MAX_TEMPLATE_TITLE_LENGTH)),
        *check_field(node.text, (*path, "text"), Length(max=max_text), required=True),
    ]


def _validate_buttons(template: ButtonsTemplate, path: Path) -> list[FieldError]:
    return _check_image_options(template, path) + _check_titled_text(
        template, path, MAX_BUTTONS_TEXT_LENGTH
    )


def _validate_confirm(template: ConfirmTemplate, path: Path) -> list[FieldError]:
    return check_field(
        template.text, (*path, "text"), Length(max=MAX_CONFIRM_TEXT_LENGTH), required=True
    )


def _validate_carousel(template: CarouselTemplate, path: Path) -> list[FieldError]:
    return _check_image_options(template, path)


def _validate_image_carousel(template: ImageCarouselTemplate, path: Path) -> list[FieldError]:
    return []


_VALIDATORS: dict[type, Callable[[Any, Path], list[FieldError]]] = {
    ButtonsTemplate: _validate_buttons,
    ConfirmTemplate: _validate_confirm,
    CarouselTemplate: _validate_carousel,
    ImageCarouselTemplate: _validate_image_carousel,
}


def validate_template_fields(template: Any, path: Path = ()) -> list[FieldError]:
    """Valida os campos próprios de um template.

    Raises:
        UnknownVariantError: Se o tipo do template não for conhecido
    """
    validator = _VALIDATORS.get(type(template))
    if validator is None:
        raise UnknownVariantError(f"Unknown template variant: {type(template).__name__}")
    return validator(template, path)


def validate_carousel_column(column: CarouselColumn, path: Path) -> list[FieldError]:
    return _check_titled_text(column, path, MAX_CAROUSEL_TEXT_LENGTH)


def validate_image_carousel_column(column: ImageCarouselColumn, path: Path) -> list[FieldError]:
    return check_field(column.image_url, (*path, "imageUrl"), _ASSET_URL, required=True)
