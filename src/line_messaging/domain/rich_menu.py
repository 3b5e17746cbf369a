"""Rich menu: menu fixo na barra do chat com áreas tocáveis."""

from __future__ import annotations

from line_messaging.domain.actions import TemplateAction
from line_messaging.domain.base import LineModel


class RichMenuSize(LineModel):
    width: int
    height: int


class RichMenuBounds(LineModel):
    x: int
    y: int
    width: int
    height: int


class RichMenuArea(LineModel):
    bounds: RichMenuBounds
    action: TemplateAction


class RichMenu(LineModel):
    """Definição de rich menu (máx. 20 áreas)."""

    size: RichMenuSize
    selected: bool
    name: str
    chat_bar_text: str
    areas: tuple[RichMenuArea, ...]
