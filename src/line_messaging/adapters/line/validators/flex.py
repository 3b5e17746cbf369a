"""Validadores de campos de containers e componentes flex.

Regras:
- Box baseline aceita apenas icon, text, filler e spacer
- Icon só pode aparecer dentro de box baseline
- Text com `contents` (spans) ignora `text`; a normalização remove `text`
"""

from __future__ import annotations

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any

from line_messaging.adapters.line.validators.errors import FieldError, Path, UnknownVariantError
from line_messaging.adapters.line.validators.fields import (
    OneOf,
    Pattern,
    Range,
    UrlScheme,
    check_field,
    violation,
)
from line_messaging.adapters.line.validators.limits import (
    ASSET_URL_SCHEMES,
    BASELINE_COMPONENTS,
    FLEX_ALIGNS,
    FLEX_ASPECT_MODES,
    FLEX_BUTTON_HEIGHTS,
    FLEX_BUTTON_STYLES,
    FLEX_DECORATIONS,
    FLEX_DIRECTIONS,
    FLEX_GRAVITIES,
    FLEX_IMAGE_SIZES,
    FLEX_SPACER_SIZES,
    FLEX_SPACING_SIZES,
    FLEX_STYLES,
    FLEX_TEXT_SIZES,
    FLEX_WEIGHTS,
    MAX_FLEX_URL_LENGTH,
)
from line_messaging.domain.enums import BubbleSize, FlexBoxLayout, FlexComponentType
from line_messaging.domain.flex import (
    FlexBox,
    FlexBubble,
    FlexButton,
    FlexCarousel,
    FlexFiller,
    FlexIcon,
    FlexImage,
    FlexSeparator,
    FlexSpacer,
    FlexSpan,
    FlexText,
)

_PIXELS = re.compile(r"\d+(\.\d+)?px")


@dataclass(frozen=True, slots=True)
class FlexSize:
    """Palavra-chave de tamanho ou valor em pixels (ex.: "12px")."""

    keywords: Sequence[str]

    def check(self, value: Any, path: Path) -> FieldError | None:
        if value in self.keywords or _PIXELS.fullmatch(str(value)):
            return None
        return violation(
            path,
            "oneOf:" + "|".join(self.keywords) + "|<n>px",
            f"must be one of {', '.join(self.keywords)} or a pixel value",
            value,
        )


_URL = UrlScheme(ASSET_URL_SCHEMES, max_length=MAX_FLEX_URL_LENGTH)
_ASPECT_RATIO = Pattern(r"\d+(\.\d+)?:\d+(\.\d+)?", "width:height")
_FLEX = Range(min=0)
_MARGIN = FlexSize(FLEX_SPACING_SIZES)


def _validate_bubble(bubble: FlexBubble, path: Path) -> list[FieldError]:
    return [
        *check_field(bubble.size, (*path, "size"), OneOf(tuple(BubbleSize))),
        *check_field(bubble.direction, (*path, "direction"), OneOf(FLEX_DIRECTIONS)),
    ]


def _validate_carousel(carousel: FlexCarousel, path: Path) -> list[FieldError]:
    return []


def _validate_box(box: FlexBox, path: Path) -> list[FieldError]:
    return [
        *check_field(box.layout, (*path, "layout"), OneOf(tuple(FlexBoxLayout)), required=True),
        *check_field(box.flex, (*path, "flex"), _FLEX),
        *check_field(box.spacing, (*path, "spacing"), FlexSize(FLEX_SPACING_SIZES)),
        *check_field(box.margin, (*path, "margin"), _MARGIN),
    ]


def _validate_button(button: FlexButton, path: Path) -> list[FieldError]:
    return [
        *check_field(button.flex, (*path, "flex"), _FLEX),
        *check_field(button.margin, (*path, "margin"), _MARGIN),
        *check_field(button.height, (*path, "height"), OneOf(FLEX_BUTTON_HEIGHTS)),
        *check_field(button.style, (*path, "style"), OneOf(FLEX_BUTTON_STYLES)),
        *check_field(button.gravity, (*path, "gravity"), OneOf(FLEX_GRAVITIES)),
    ]


def _validate_icon(icon: FlexIcon, path: Path) -> list[FieldError]:
    return [
        *check_field(icon.url, (*path, "url"), _URL, required=True),
        *check_field(icon.margin, (*path, "margin"), _MARGIN),
        *check_field(icon.size, (*path, "size"), FlexSize(FLEX_TEXT_SIZES)),
        *check_field(icon.aspect_ratio, (*path, "aspectRatio"), _ASPECT_RATIO),
    ]


def _validate_image(image: FlexImage, path: Path) -> list[FieldError]:
    return [
        *check_field(image.url, (*path, "url"), _URL, required=True),
        *check_field(image.flex, (*path, "flex"), _FLEX),
        *check_field(image.margin, (*path, "margin"), _MARGIN),
        *check_field(image.align, (*path, "align"), OneOf(FLEX_ALIGNS)),
        *check_field(image.gravity, (*path, "gravity"), OneOf(FLEX_GRAVITIES)),
        *check_field(image.size, (*path, "size"), FlexSize(FLEX_IMAGE_SIZES)),
        *check_field(image.aspect_ratio, (*path, "aspectRatio"), _ASPECT_RATIO),
        *check_field(image.aspect_mode, (*path, "aspectMode"), OneOf(FLEX_ASPECT_MODES)),
    ]


def _check_typography(node: FlexText | FlexSpan, path: Path) -> list[FieldError]:
    return [
        *check_field(node.size, (*path, "size"), FlexSize(FLEX_TEXT_SIZES)),
        *check_field(node.weight, (*path, "weight"), OneOf(FLEX_WEIGHTS)),
        *check_field(node.style, (*path, "style"), OneOf(FLEX_STYLES)),
        *check_field(node.decoration, (*path, "decoration"), OneOf(FLEX_DECORATIONS)),
    ]


def _validate_text(text: FlexText, path: Path) -> list[FieldError]:
    errors = _check_typography(text, path) + [
        *check_field(text.flex, (*path, "flex"), _FLEX),
        *check_field(text.margin, (*path, "margin"), _MARGIN),
        *check_field(text.align, (*path, "align"), OneOf(FLEX_ALIGNS)),
        *check_field(text.gravity, (*path, "gravity"), OneOf(FLEX_GRAVITIES)),
        *check_field(text.max_lines, (*path, "maxLines"), Range(min=0)),
    ]
    if not text.contents:
        errors += check_field(text.text, (*path, "text"), required=True)
    return errors


def _validate_span(span: FlexSpan, path: Path) -> list[FieldError]:
    return check_field(span.text, (*path, "text"), required=True) + _check_typography(span, path)


def _validate_separator(separator: FlexSeparator, path: Path) -> list[FieldError]:
    return check_field(separator.margin, (*path, "margin"), _MARGIN)


def _validate_filler(filler: FlexFiller, path: Path) -> list[FieldError]:
    return check_field(filler.flex, (*path, "flex"), _FLEX)


def _validate_spacer(spacer: FlexSpacer, path: Path) -> list[FieldError]:
    return check_field(spacer.size, (*path, "size"), OneOf(FLEX_SPACER_SIZES), required=True)


_VALIDATORS: dict[type, Callable[[Any, Path], list[FieldError]]] = {
    FlexBubble: _validate_bubble,
    FlexCarousel: _validate_carousel,
    FlexBox: _validate_box,
    FlexButton: _validate_button,
    FlexIcon: _validate_icon,
    FlexImage: _validate_image,
    FlexText: _validate_text,
    FlexSpan: _validate_span,
    FlexSeparator: _validate_separator,
    FlexFiller: _validate_filler,
    FlexSpacer: _validate_spacer,
}


def validate_flex_fields(node: Any, path: Path = ()) -> list[FieldError]:
    """Valida os campos próprios de um nó flex.

    Raises:
        UnknownVariantError: Se o tipo do nó não for conhecido
    """
    validator = _VALIDATORS.get(type(node))
    if validator is None:
        raise UnknownVariantError(f"Unknown flex variant: {type(node).__name__}")
    return validator(node, path)


def validate_box_children(box: FlexBox, path: Path) -> list[FieldError]:
    """Tipos de filho permitidos conforme o layout do box."""
    baseline = box.layout == FlexBoxLayout.BASELINE
    errors: list[FieldError] = []
    for index, child in enumerate(box.contents):
        child_path = (*path, "contents", index, "type")
        if baseline and child.type not in BASELINE_COMPONENTS:
            errors.append(
                violation(
                    child_path,
                    "layout:baseline",
                    f"{child.type} is not allowed in a baseline box",
                    child.type,
                )
            )
        elif not baseline and child.type == FlexComponentType.ICON:
            errors.append(
                violation(
                    child_path,
                    "layout:baseline",
                    "icon is only allowed in a baseline box",
                    child.type,
                )
            )
    return errors


def normalize_flex_text(text: FlexText) -> FlexText:
    """Com spans presentes, `text` é ignorado pela API; remove-o."""
    if text.contents and text.text is not None:
        return text.model_copy(update={"text": None})
    return text
