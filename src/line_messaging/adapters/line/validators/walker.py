"""Travessia recursiva de árvores de mensagens.

Responsabilidade:
- Despachar cada nó para seu validador por tipo (tabela _HANDLERS)
- Acompanhar o caminho (nomes wire e índices) até cada nó
- Checar limites estruturais e invariantes entre irmãos
- Aplicar guarda de profundidade (DEPTH_EXCEEDED, sem descer além)
- Devolver a árvore normalizada (nós inalterados são reaproveitados)

O walker não tem estado compartilhado: cada chamada de `walk` usa um
acumulador próprio, então uma instância pode ser usada entre threads.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from line_messaging.adapters.line.validators.actions import (
    DEFAULT_ACTION,
    FLEX_ACTION,
    FLEX_BUTTON_ACTION,
    IMAGE_CAROUSEL_ACTION,
    QUICK_REPLY_ACTION,
    RICH_MENU_ACTION,
    STANDALONE,
    TEMPLATE_ACTION,
    ActionContext,
    validate_action,
)
from line_messaging.adapters.line.validators.errors import (
    ErrorCode,
    FieldError,
    Path,
    UnknownVariantError,
    ValidationResult,
)
from line_messaging.adapters.line.validators.fields import (
    Length,
    Range,
    check_count,
    check_field,
    violation,
)
from line_messaging.adapters.line.validators.filters import FilterValidator
from line_messaging.adapters.line.validators.flex import (
    normalize_flex_text,
    validate_box_children,
    validate_flex_fields,
)
from line_messaging.adapters.line.validators.limits import (
    CONFIRM_TEMPLATE_ACTIONS,
    DEFAULT_BUBBLE_SIZE,
    MAX_BUTTONS_TEMPLATE_ACTIONS,
    MAX_CAROUSEL_COLUMN_ACTIONS,
    MAX_CAROUSEL_COLUMNS,
    MAX_FLEX_CAROUSEL_BUBBLES,
    MAX_IMAGEMAP_ACTIONS,
    MAX_QUICK_REPLY_ITEMS,
    MAX_RICH_MENU_AREAS,
    MAX_RICH_MENU_CHAT_BAR_TEXT_LENGTH,
    MAX_RICH_MENU_NAME_LENGTH,
    RICH_MENU_SIZES,
)
from line_messaging.adapters.line.validators.messages import (
    validate_imagemap_action,
    validate_message_fields,
    validate_quick_reply_item,
)
from line_messaging.adapters.line.validators.templates import (
    validate_carousel_column,
    validate_image_carousel_column,
    validate_template_fields,
)
from line_messaging.config.settings import DEFAULT_VALIDATION_MAX_DEPTH
from line_messaging.domain import actions, filters, flex, messages, rich_menu, templates
from line_messaging.observability.logging import get_logger

logger = get_logger(__name__)

_RICH_MENU_SIZE_LABEL = "|".join(f"{w}x{h}" for w, h in sorted(RICH_MENU_SIZES, reverse=True))


def _replace(node: Any, **changes: Any) -> Any:
    """Copia o nó apenas se algum filho foi de fato substituído."""
    updates = {key: value for key, value in changes.items() if value is not getattr(node, key)}
    return node.model_copy(update=updates) if updates else node


class _Walk:
    """Acumulador de uma única travessia."""

    def __init__(self, max_depth: int) -> None:
        self.max_depth = max_depth
        self.errors: list[FieldError] = []

    # ------------------------------------------------------------------
    # Despacho
    # ------------------------------------------------------------------

    def visit(self, node: Any, path: Path, depth: int) -> Any:
        if not self._within_depth(path, depth):
            return node
        handler = _HANDLERS.get(type(node))
        if handler is None:
            raise UnknownVariantError(f"Unknown node variant: {type(node).__name__}")
        return handler(self, node, path, depth)

    def visit_optional(self, node: Any, path: Path, depth: int) -> Any:
        return None if node is None else self.visit(node, path, depth)

    def visit_each(self, nodes: tuple[Any, ...], path: Path, depth: int) -> tuple[Any, ...]:
        visited = tuple(self.visit(node, (*path, i), depth) for i, node in enumerate(nodes))
        if all(new is old for new, old in zip(visited, nodes)):
            return nodes
        return visited

    def action(self, action: Any, path: Path, depth: int, context: ActionContext) -> Any:
        if action is not None and self._within_depth(path, depth):
            self.errors += validate_action(action, path, context)
        return action

    def _within_depth(self, path: Path, depth: int) -> bool:
        if depth < self.max_depth:
            return True
        self.errors.append(
            violation(
                path,
                f"maxDepth:{self.max_depth}",
                f"nesting exceeds {self.max_depth} levels",
                depth,
                ErrorCode.DEPTH_EXCEEDED,
            )
        )
        return False

    def bound(
        self,
        items: tuple[Any, ...],
        path: Path,
        *,
        min_items: int | None = None,
        max_items: int | None = None,
    ) -> None:
        self.errors += check_count(items, path, min_items=min_items, max_items=max_items)

    # ------------------------------------------------------------------
    # Mensagens
    # ------------------------------------------------------------------

    def message(self, message: Any, path: Path, depth: int) -> Any:
        self.errors += validate_message_fields(message, path)
        quick_reply = self.visit_optional(message.quick_reply, (*path, "quickReply"), depth + 1)

        if isinstance(message, messages.ImagemapMessage):
            actions_path = (*path, "actions")
            self.bound(message.actions, actions_path, min_items=1, max_items=MAX_IMAGEMAP_ACTIONS)
            self.visit_each(message.actions, actions_path, depth + 1)
        elif isinstance(message, messages.TemplateMessage):
            template = self.visit(message.template, (*path, "template"), depth + 1)
            return _replace(message, quick_reply=quick_reply, template=template)
        elif isinstance(message, messages.FlexMessage):
            contents = self.visit(message.contents, (*path, "contents"), depth + 1)
            return _replace(message, quick_reply=quick_reply, contents=contents)

        return _replace(message, quick_reply=quick_reply)

    def imagemap_action(self, action: Any, path: Path, depth: int) -> Any:
        self.errors += validate_imagemap_action(action, path)
        return action

    def quick_reply(self, quick_reply: messages.QuickReply, path: Path, depth: int) -> Any:
        items_path = (*path, "items")
        self.bound(quick_reply.items, items_path, min_items=1, max_items=MAX_QUICK_REPLY_ITEMS)
        self.visit_each(quick_reply.items, items_path, depth + 1)
        return quick_reply

    def quick_reply_item(self, item: messages.QuickReplyItem, path: Path, depth: int) -> Any:
        self.errors += validate_quick_reply_item(item, path)
        self.action(item.action, (*path, "action"), depth + 1, QUICK_REPLY_ACTION)
        return item

    # ------------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------------

    def buttons(self, template: templates.ButtonsTemplate, path: Path, depth: int) -> Any:
        self.errors += validate_template_fields(template, path)
        self.action(template.default_action, (*path, "defaultAction"), depth + 1, DEFAULT_ACTION)
        self._template_actions(
            template.actions, (*path, "actions"), depth, 1, MAX_BUTTONS_TEMPLATE_ACTIONS
        )
        return template

    def confirm(self, template: templates.ConfirmTemplate, path: Path, depth: int) -> Any:
        self.errors += validate_template_fields(template, path)
        self._template_actions(
            template.actions,
            (*path, "actions"),
            depth,
            CONFIRM_TEMPLATE_ACTIONS,
            CONFIRM_TEMPLATE_ACTIONS,
        )
        return template

    def carousel_template(
        self, template: templates.CarouselTemplate, path: Path, depth: int
    ) -> Any:
        self.errors += validate_template_fields(template, path)
        columns_path = (*path, "columns")
        self.bound(template.columns, columns_path, min_items=1, max_items=MAX_CAROUSEL_COLUMNS)
        self.visit_each(template.columns, columns_path, depth + 1)

        action_counts = {len(column.actions) for column in template.columns}
        if len(action_counts) > 1:
            self.errors.append(
                violation(
                    columns_path,
                    "sameActionCount",
                    "all columns must have the same number of actions",
                    sorted(action_counts),
                    ErrorCode.CROSS_CHILD_INVARIANT_VIOLATION,
                )
            )
        return template

    def carousel_column(self, column: templates.CarouselColumn, path: Path, depth: int) -> Any:
        self.errors += validate_carousel_column(column, path)
        self.action(column.default_action, (*path, "defaultAction"), depth + 1, DEFAULT_ACTION)
        self._template_actions(
            column.actions, (*path, "actions"), depth, 1, MAX_CAROUSEL_COLUMN_ACTIONS
        )
        return column

    def image_carousel(
        self, template: templates.ImageCarouselTemplate, path: Path, depth: int
    ) -> Any:
        self.errors += validate_template_fields(template, path)
        columns_path = (*path, "columns")
        self.bound(template.columns, columns_path, min_items=1, max_items=MAX_CAROUSEL_COLUMNS)
        self.visit_each(template.columns, columns_path, depth + 1)
        return template

    def image_carousel_column(
        self, column: templates.ImageCarouselColumn, path: Path, depth: int
    ) -> Any:
        self.errors += validate_image_carousel_column(column, path)
        self.action(column.action, (*path, "action"), depth + 1, IMAGE_CAROUSEL_ACTION)
        return column

    def _template_actions(
        self, items: tuple[Any, ...], path: Path, depth: int, min_items: int, max_items: int
    ) -> None:
        self.bound(items, path, min_items=min_items, max_items=max_items)
        for index, item in enumerate(items):
            self.action(item, (*path, index), depth + 1, TEMPLATE_ACTION)

    # ------------------------------------------------------------------
    # Flex
    # ------------------------------------------------------------------

    def bubble(self, bubble: flex.FlexBubble, path: Path, depth: int) -> Any:
        self.errors += validate_flex_fields(bubble, path)
        blocks = {
            block: self.visit_optional(getattr(bubble, block), (*path, block), depth + 1)
            for block in ("header", "hero", "body", "footer")
        }
        self.action(bubble.action, (*path, "action"), depth + 1, FLEX_ACTION)
        return _replace(bubble, **blocks)

    def flex_carousel(self, carousel: flex.FlexCarousel, path: Path, depth: int) -> Any:
        contents_path = (*path, "contents")
        self.bound(
            carousel.contents, contents_path, min_items=1, max_items=MAX_FLEX_CAROUSEL_BUBBLES
        )
        contents = self.visit_each(carousel.contents, contents_path, depth + 1)

        sizes = {bubble.size or DEFAULT_BUBBLE_SIZE for bubble in carousel.contents}
        if len(sizes) > 1:
            self.errors.append(
                violation(
                    contents_path,
                    "sameBubbleSize",
                    "all bubbles in a carousel must have the same size",
                    sorted(sizes),
                    ErrorCode.CROSS_CHILD_INVARIANT_VIOLATION,
                )
            )
        return _replace(carousel, contents=contents)

    def box(self, box: flex.FlexBox, path: Path, depth: int) -> Any:
        self.errors += validate_flex_fields(box, path)
        self.errors += validate_box_children(box, path)
        contents = self.visit_each(box.contents, (*path, "contents"), depth + 1)
        self.action(box.action, (*path, "action"), depth + 1, FLEX_ACTION)
        return _replace(box, contents=contents)

    def text(self, text: flex.FlexText, path: Path, depth: int) -> Any:
        self.errors += validate_flex_fields(text, path)
        if text.contents:
            self.visit_each(text.contents, (*path, "contents"), depth + 1)
        self.action(text.action, (*path, "action"), depth + 1, FLEX_ACTION)
        return normalize_flex_text(text)

    def button(self, button: flex.FlexButton, path: Path, depth: int) -> Any:
        self.errors += validate_flex_fields(button, path)
        self.action(button.action, (*path, "action"), depth + 1, FLEX_BUTTON_ACTION)
        return button

    def image(self, image: flex.FlexImage, path: Path, depth: int) -> Any:
        self.errors += validate_flex_fields(image, path)
        self.action(image.action, (*path, "action"), depth + 1, FLEX_ACTION)
        return image

    def flex_leaf(self, node: Any, path: Path, depth: int) -> Any:
        self.errors += validate_flex_fields(node, path)
        return node

    # ------------------------------------------------------------------
    # Rich menu, ações avulsas e filtros
    # ------------------------------------------------------------------

    def rich_menu(self, menu: rich_menu.RichMenu, path: Path, depth: int) -> Any:
        self.errors += check_field(
            menu.name, (*path, "name"), Length(max=MAX_RICH_MENU_NAME_LENGTH), required=True
        )
        self.errors += check_field(
            menu.chat_bar_text,
            (*path, "chatBarText"),
            Length(max=MAX_RICH_MENU_CHAT_BAR_TEXT_LENGTH),
            required=True,
        )
        if (menu.size.width, menu.size.height) not in RICH_MENU_SIZES:
            self.errors.append(
                violation(
                    (*path, "size"),
                    f"oneOf:{_RICH_MENU_SIZE_LABEL}",
                    f"size must be one of {_RICH_MENU_SIZE_LABEL.replace('|', ', ')}",
                    (menu.size.width, menu.size.height),
                )
            )
        areas_path = (*path, "areas")
        self.bound(menu.areas, areas_path, max_items=MAX_RICH_MENU_AREAS)
        self.visit_each(menu.areas, areas_path, depth + 1)
        return menu

    def rich_menu_area(self, area: rich_menu.RichMenuArea, path: Path, depth: int) -> Any:
        bounds_path = (*path, "bounds")
        self.errors += [
            *check_field(area.bounds.x, (*bounds_path, "x"), Range(min=0)),
            *check_field(area.bounds.y, (*bounds_path, "y"), Range(min=0)),
            *check_field(area.bounds.width, (*bounds_path, "width"), Range(min=1)),
            *check_field(area.bounds.height, (*bounds_path, "height"), Range(min=1)),
        ]
        self.action(area.action, (*path, "action"), depth + 1, RICH_MENU_ACTION)
        return area

    def standalone_action(self, action: Any, path: Path, depth: int) -> Any:
        self.errors += validate_action(action, path, STANDALONE)
        return action

    def filter_tree(self, node: Any, path: Path, depth: int) -> Any:
        validator = FilterValidator(self.max_depth)
        # Sempre raiz: FilterValidator percorre os operandos
        self.errors += validator.check(node, path, depth)
        self.errors += validator.check_audience_cap(node, path)
        return node


_Handler = Callable[[_Walk, Any, Path, int], Any]

_HANDLERS: dict[type, _Handler] = {
    **{
        message_type: _Walk.message
        for message_type in (
            messages.TextMessage,
            messages.ImageMessage,
            messages.VideoMessage,
            messages.AudioMessage,
            messages.LocationMessage,
            messages.StickerMessage,
            messages.ImagemapMessage,
            messages.TemplateMessage,
            messages.FlexMessage,
        )
    },
    messages.ImagemapUriAction: _Walk.imagemap_action,
    messages.ImagemapMessageAction: _Walk.imagemap_action,
    messages.QuickReply: _Walk.quick_reply,
    messages.QuickReplyItem: _Walk.quick_reply_item,
    templates.ButtonsTemplate: _Walk.buttons,
    templates.ConfirmTemplate: _Walk.confirm,
    templates.CarouselTemplate: _Walk.carousel_template,
    templates.CarouselColumn: _Walk.carousel_column,
    templates.ImageCarouselTemplate: _Walk.image_carousel,
    templates.ImageCarouselColumn: _Walk.image_carousel_column,
    flex.FlexBubble: _Walk.bubble,
    flex.FlexCarousel: _Walk.flex_carousel,
    flex.FlexBox: _Walk.box,
    flex.FlexText: _Walk.text,
    flex.FlexButton: _Walk.button,
    flex.FlexImage: _Walk.image,
    flex.FlexIcon: _Walk.flex_leaf,
    flex.FlexSpan: _Walk.flex_leaf,
    flex.FlexSeparator: _Walk.flex_leaf,
    flex.FlexFiller: _Walk.flex_leaf,
    flex.FlexSpacer: _Walk.flex_leaf,
    rich_menu.RichMenu: _Walk.rich_menu,
    rich_menu.RichMenuArea: _Walk.rich_menu_area,
    **{
        action_type: _Walk.standalone_action
        for action_type in (
            actions.PostbackAction,
            actions.MessageAction,
            actions.UriAction,
            actions.DatetimePickerAction,
            actions.CameraAction,
            actions.CameraRollAction,
            actions.LocationAction,
        )
    },
    **{
        filter_type: _Walk.filter_tree
        for filter_type in (
            filters.AudienceRecipient,
            filters.RecipientOperator,
            filters.GenderDemographic,
            filters.AgeDemographic,
            filters.AppTypeDemographic,
            filters.AreaDemographic,
            filters.SubscriptionPeriodDemographic,
            filters.DemographicOperator,
        )
    },
}


class TreeWalker:
    """Valida uma árvore inteira, coletando todos os erros em uma passada."""

    def __init__(self, max_depth: int = DEFAULT_VALIDATION_MAX_DEPTH) -> None:
        if max_depth < 1:
            raise ValueError("max_depth must be >= 1")
        self.max_depth = max_depth

    def walk(self, node: Any, path: Path = ()) -> ValidationResult[Any]:
        """Valida `node` e descendentes.

        Returns:
            ValidationResult com a árvore normalizada e os erros encontrados

        Raises:
            UnknownVariantError: Se algum nó tiver tipo desconhecido
        """
        walk = _Walk(self.max_depth)
        normalized = walk.visit(node, path, 0)
        logger.debug(
            "tree_walked",
            extra={"root_type": type(node).__name__, "error_count": len(walk.errors)},
        )
        return ValidationResult(value=normalized, errors=tuple(walk.errors))
