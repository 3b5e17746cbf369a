"""Testes do TreeWalker: travessia recursiva, caminhos, limites e normalização."""

from __future__ import annotations

import pytest

from line_messaging.adapters.line.validators import TreeWalker, UnknownVariantError
from line_messaging.adapters.line.validators.errors import ErrorCode
from line_messaging.domain.actions import CameraAction, MessageAction, PostbackAction, UriAction
from line_messaging.domain.enums import LogicalOperator
from line_messaging.domain.filters import AudienceRecipient, RecipientOperator
from line_messaging.domain.flex import (
    FlexBox,
    FlexBubble,
    FlexButton,
    FlexCarousel,
    FlexIcon,
    FlexImage,
    FlexSpan,
    FlexText,
)
from line_messaging.domain.messages import (
    FlexMessage,
    ImagemapArea,
    ImagemapBaseSize,
    ImagemapMessage,
    ImagemapUriAction,
    QuickReply,
    QuickReplyItem,
    TemplateMessage,
    TextMessage,
)
from line_messaging.domain.rich_menu import RichMenu, RichMenuArea, RichMenuBounds, RichMenuSize
from line_messaging.domain.templates import (
    ButtonsTemplate,
    CarouselColumn,
    CarouselTemplate,
    ConfirmTemplate,
    ImageCarouselColumn,
    ImageCarouselTemplate,
)


def _column(actions: int = 2) -> CarouselColumn:
    return CarouselColumn(
        text="Column",
        actions=tuple(MessageAction(label=f"A{i}", text="hi") for i in range(actions)),
    )


def _nested_box(levels: int) -> FlexBox:
    box = FlexBox(layout="vertical", contents=(FlexText(text="leaf"),))
    for _ in range(levels - 1):
        box = FlexBox(layout="vertical", contents=(box,))
    return box


def _bubble(size: str | None = None) -> FlexBubble:
    body = FlexBox(layout="vertical", contents=(FlexText(text="Hello"),))
    return FlexBubble(size=size, body=body)


@pytest.fixture
def walker() -> TreeWalker:
    return TreeWalker(max_depth=64)


class TestValidTrees:
    """Árvores válidas não geram falsos positivos."""

    def test_text_message(self, walker: TreeWalker) -> None:
        """Mensagem de texto válida volta sem cópia."""
        message = TextMessage(text="Hello")

        result = walker.walk(message)

        assert result.is_valid
        assert result.value is message

    def test_rich_flex_message(self, walker: TreeWalker) -> None:
        """Flex com imagem, box baseline e botão é válido."""
        body = FlexBox(
            layout="vertical",
            spacing="md",
            contents=(
                FlexImage(url="https://example.com/a.png", size="full", aspect_ratio="20:13"),
                FlexBox(
                    layout="baseline",
                    contents=(
                        FlexIcon(url="https://example.com/star.png", size="sm"),
                        FlexText(text="4.0", margin="12px", size="sm"),
                    ),
                ),
                FlexButton(
                    style="primary",
                    action=UriAction(label="Open", uri="https://example.com"),
                ),
            ),
        )
        message = FlexMessage(alt_text="Menu", contents=FlexBubble(size="kilo", body=body))

        assert walker.walk(message).errors == ()

    def test_buttons_template(self, walker: TreeWalker) -> None:
        """Buttons template com thumbnail e ações é válido."""
        template = ButtonsTemplate(
            thumbnail_image_url="https://example.com/t.jpg",
            title="Menu",
            text="Please select",
            default_action=UriAction(uri="https://example.com"),
            actions=(
                PostbackAction(label="Buy", data="action=buy"),
                MessageAction(label="Info", text="info"),
            ),
        )

        assert walker.walk(TemplateMessage(alt_text="Menu", template=template)).is_valid


class TestFieldErrorsAndPaths:
    """Erros carregam o caminho wire completo até o campo."""

    def test_nested_flex_action_label(self, walker: TreeWalker) -> None:
        """Label longo em botão aninhado: caminho até o campo."""
        body = FlexBox(
            layout="vertical",
            contents=(
                FlexText(text="a"),
                FlexText(text="b"),
                FlexButton(action=MessageAction(label="x" * 21, text="hi")),
            ),
        )
        message = FlexMessage(alt_text="alt", contents=FlexBubble(body=body))

        errors = walker.walk(message).errors

        assert len(errors) == 1
        assert errors[0].path == ("contents", "body", "contents", 2, "action", "label")
        assert errors[0].constraint == "maxLength:20"

    def test_flex_button_requires_label(self, walker: TreeWalker) -> None:
        """Botão flex exige label na ação."""
        bubble = FlexBubble(
            footer=FlexBox(
                layout="vertical", contents=(FlexButton(action=MessageAction(text="hi")),)
            )
        )

        errors = walker.walk(bubble).errors

        assert [e.path for e in errors] == [("footer", "contents", 0, "action", "label")]

    def test_collects_errors_from_all_branches(self, walker: TreeWalker) -> None:
        """Uma passada reporta todos os erros, não apenas o primeiro."""
        message = TextMessage(
            text="",
            quick_reply=QuickReply(
                items=(
                    QuickReplyItem(action=MessageAction(label="a" * 21, text="hi")),
                    QuickReplyItem(action=CameraAction(label="Camera")),
                    QuickReplyItem(action=UriAction(label="Web", uri="https://example.com")),
                )
            ),
        )

        errors = walker.walk(message).errors

        assert {(e.path, e.constraint) for e in errors} == {
            (("text",), "required"),
            (("quickReply", "items", 0, "action", "label"), "maxLength:20"),
            (("quickReply", "items", 2, "action", "type"), "context:notQuickReply"),
        }

    def test_baseline_box_rejects_button(self, walker: TreeWalker) -> None:
        """Box baseline não aceita botão; erro no `type` do filho."""
        box = FlexBox(
            layout="baseline",
            contents=(FlexButton(action=MessageAction(label="Go", text="go")),),
        )

        errors = walker.walk(box).errors

        assert len(errors) == 1
        assert errors[0].path == ("contents", 0, "type")
        assert errors[0].constraint == "layout:baseline"

    def test_icon_outside_baseline(self, walker: TreeWalker) -> None:
        """Icon só é aceito em box baseline."""
        box = FlexBox(layout="vertical", contents=(FlexIcon(url="https://example.com/i.png"),))

        errors = walker.walk(box).errors

        assert errors[0].constraint == "layout:baseline"

    def test_imagemap(self, walker: TreeWalker) -> None:
        """Erros de uri e área do imagemap com caminhos wire."""
        message = ImagemapMessage(
            base_url="https://example.com/bot/images/rm001",
            alt_text="imagemap",
            base_size=ImagemapBaseSize(width=1040, height=1040),
            actions=(
                ImagemapUriAction(
                    link_uri="ftp://example.com",
                    area=ImagemapArea(x=0, y=0, width=0, height=1040),
                ),
            ),
        )

        errors = walker.walk(message).errors

        assert {(e.path, e.constraint) for e in errors} == {
            (("actions", 0, "linkUri"), "scheme:http|https|line|tel"),
            (("actions", 0, "area", "width"), "min:1"),
        }


class TestStructuralBounds:
    """Limites de quantidade de filhos."""

    def test_carousel_with_eleven_columns(self, walker: TreeWalker) -> None:
        """11 colunas com a mesma quantidade de ações: um único erro."""
        template = CarouselTemplate(columns=tuple(_column() for _ in range(11)))

        errors = walker.walk(template).errors

        assert len(errors) == 1
        assert errors[0].path == ("columns",)
        assert errors[0].code == ErrorCode.STRUCTURAL_BOUND_VIOLATION
        assert errors[0].constraint == "max:10"

    def test_confirm_needs_two_actions(self, walker: TreeWalker) -> None:
        """Confirm exige exatamente 2 ações."""
        template = ConfirmTemplate(text="Sure?", actions=(MessageAction(label="Yes", text="y"),))

        errors = walker.walk(template).errors

        assert errors[0].path == ("actions",)
        assert errors[0].constraint == "min:2"

    def test_quick_reply_item_limit(self, walker: TreeWalker) -> None:
        """Quick reply aceita no máximo 13 itens."""
        items = tuple(
            QuickReplyItem(action=MessageAction(label=str(i), text="t")) for i in range(14)
        )

        errors = walker.walk(TextMessage(text="hi", quick_reply=QuickReply(items=items))).errors

        assert [(e.path, e.constraint) for e in errors] == [(("quickReply", "items"), "max:13")]


class TestCrossChildInvariants:
    """Regras que comparam irmãos."""

    def test_carousel_columns_action_count(self, walker: TreeWalker) -> None:
        """Reportado uma vez, no caminho das colunas."""
        template = CarouselTemplate(columns=(_column(2), _column(1), _column(2)))
        message = TemplateMessage(alt_text="alt", template=template)

        errors = walker.walk(message).errors

        assert len(errors) == 1
        assert errors[0].path == ("template", "columns")
        assert errors[0].code == ErrorCode.CROSS_CHILD_INVARIANT_VIOLATION
        assert errors[0].constraint == "sameActionCount"

    def test_flex_carousel_bubble_sizes(self, walker: TreeWalker) -> None:
        """Bolhas de tamanhos diferentes: um erro em `contents`."""
        carousel = FlexCarousel(contents=(_bubble("kilo"), _bubble("mega"), _bubble("kilo")))

        errors = walker.walk(carousel).errors

        assert len(errors) == 1
        assert errors[0].path == ("contents",)
        assert errors[0].constraint == "sameBubbleSize"

    def test_missing_size_counts_as_mega(self, walker: TreeWalker) -> None:
        """Bolha sem size conta como mega."""
        carousel = FlexCarousel(contents=(_bubble(), _bubble("mega")))
        assert walker.walk(carousel).is_valid

    def test_image_carousel_column(self, walker: TreeWalker) -> None:
        """Coluna de image carousel exige https e label curto."""
        template = ImageCarouselTemplate(
            columns=(
                ImageCarouselColumn(
                    image_url="http://example.com/a.jpg",
                    action=MessageAction(label="Longer than 12", text="t"),
                ),
            )
        )

        errors = walker.walk(template).errors

        assert {(e.path, e.constraint) for e in errors} == {
            (("columns", 0, "imageUrl"), "scheme:https"),
            (("columns", 0, "action", "label"), "maxLength:12"),
        }


class TestDepthGuard:
    """Testes para a guarda de profundidade."""

    def test_depth_exceeded_reported_once(self, walker: TreeWalker) -> None:
        """Box com 100 níveis e limite 64: um erro, sem descer além."""
        errors = walker.walk(_nested_box(100)).errors

        assert len(errors) == 1
        assert errors[0].code == ErrorCode.DEPTH_EXCEEDED
        assert errors[0].path == ("contents", 0) * 64
        assert errors[0].constraint == "maxDepth:64"

    def test_tree_within_limit(self) -> None:
        """Árvore abaixo do limite é válida."""
        assert TreeWalker(max_depth=10).walk(_nested_box(9)).is_valid

    def test_invalid_max_depth(self) -> None:
        """max_depth < 1 é rejeitado na construção."""
        with pytest.raises(ValueError):
            TreeWalker(max_depth=0)


class TestNormalization:
    """Normalização preserva identidade quando nada muda."""

    def test_text_with_spans_drops_text(self, walker: TreeWalker) -> None:
        """Text com spans perde `text` na árvore normalizada."""
        text = FlexText(text="ignored", contents=(FlexSpan(text="Hello", weight="bold"),))
        message = FlexMessage(
            alt_text="alt",
            contents=FlexBubble(body=FlexBox(layout="vertical", contents=(text,))),
        )

        result = walker.walk(message)

        assert result.is_valid
        normalized_text = result.value.contents.body.contents[0]
        assert normalized_text.text is None
        assert normalized_text.contents == text.contents
        assert "text" not in result.value.to_wire()["contents"]["body"]["contents"][0]
        # O original não é alterado
        assert text.text == "ignored"

    def test_validation_is_idempotent(self, walker: TreeWalker) -> None:
        """Validar a árvore normalizada devolve o mesmo objeto."""
        text = FlexText(text="ignored", contents=(FlexSpan(text="Hello"),))
        first = walker.walk(FlexBox(layout="vertical", contents=(text,)))

        second = walker.walk(first.value)

        assert second.value is first.value
        assert second.errors == first.errors

    def test_unchanged_tree_is_reused(self, walker: TreeWalker) -> None:
        """Árvore sem normalização não é copiada."""
        carousel = FlexCarousel(contents=(_bubble(), _bubble()))
        assert walker.walk(carousel).value is carousel


class TestRichMenu:
    """Testes para rich menu."""

    def _menu(self, **overrides: object) -> RichMenu:
        data: dict = {
            "size": RichMenuSize(width=2500, height=843),
            "selected": False,
            "name": "Main menu",
            "chat_bar_text": "Tap here",
            "areas": (
                RichMenuArea(
                    bounds=RichMenuBounds(x=0, y=0, width=1250, height=843),
                    action=PostbackAction(data="action=a"),
                ),
            ),
        }
        data.update(overrides)
        return RichMenu(**data)

    def test_valid(self, walker: TreeWalker) -> None:
        """Rich menu com tamanho padrão e uma área é válido."""
        assert walker.walk(self._menu()).is_valid

    def test_invalid_size_and_chat_bar_text(self, walker: TreeWalker) -> None:
        """Tamanho fora da lista e chatBarText longo."""
        menu = self._menu(size=RichMenuSize(width=1000, height=1000), chat_bar_text="x" * 15)

        errors = walker.walk(menu).errors

        assert {e.path for e in errors} == {("size",), ("chatBarText",)}

    def test_too_many_areas(self, walker: TreeWalker) -> None:
        """Mais de 20 áreas: erro estrutural."""
        area = self._menu().areas[0]

        errors = walker.walk(self._menu(areas=(area,) * 21)).errors

        assert [(e.path, e.constraint) for e in errors] == [(("areas",), "max:20")]


class TestFilterTrees:
    """Árvores de recipients passadas direto ao walker."""

    def test_audience_cap_applies_at_root(self, walker: TreeWalker) -> None:
        """11 audiences em um operador: um erro de limite na raiz."""
        tree = RecipientOperator(
            operator=LogicalOperator.OR,
            operands=tuple(AudienceRecipient(audience_group_id=i) for i in range(11)),
        )

        errors = walker.walk(tree, ("recipient",)).errors

        assert [(e.path, e.constraint) for e in errors] == [(("recipient",), "maxAudiences:10")]

    def test_ten_audiences_are_valid(self, walker: TreeWalker) -> None:
        """Exatamente 10 audiences: árvore válida."""
        tree = RecipientOperator(
            operator=LogicalOperator.OR,
            operands=tuple(AudienceRecipient(audience_group_id=i) for i in range(10)),
        )

        assert walker.walk(tree).is_valid


class TestUnknownVariants:
    """Tipos desconhecidos levantam UnknownVariantError."""

    def test_foreign_object_raises(self, walker: TreeWalker) -> None:
        """Objeto estranho na raiz."""
        with pytest.raises(UnknownVariantError):
            walker.walk(object())

    def test_foreign_child_raises(self, walker: TreeWalker) -> None:
        """Objeto estranho como filho."""
        bubble = FlexBubble.model_construct(body=object())
        with pytest.raises(UnknownVariantError):
            walker.walk(bubble)
