"""Enums de domínio (componentes flex, layouts, filtros e respostas) da LINE Messaging API."""

from __future__ import annotations

from enum import StrEnum


class FlexComponentType(StrEnum):
    """Componentes que podem aparecer dentro de um box."""

    BOX = "box"
    BUTTON = "button"
    ICON = "icon"
    IMAGE = "image"
    TEXT = "text"
    SEPARATOR = "separator"
    FILLER = "filler"
    SPACER = "spacer"


class FlexBoxLayout(StrEnum):
    """Layouts de box."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    BASELINE = "baseline"


class BubbleSize(StrEnum):
    """Larguras de bubble (carousel exige o mesmo valor em todos)."""

    NANO = "nano"
    MICRO = "micro"
    KILO = "kilo"
    MEGA = "mega"
    GIGA = "giga"


class DatetimePickerMode(StrEnum):
    """Modos do datetime picker."""

    DATE = "date"
    TIME = "time"
    DATETIME = "datetime"


class LogicalOperator(StrEnum):
    """Operadores lógicos para recipient/demographic filters."""

    AND = "and"
    OR = "or"
    NOT = "not"


class RangeComparison(StrEnum):
    """Comparação de faixa (age, subscriptionPeriod)."""

    GTE = "gte"
    LT = "lt"


class NarrowcastPhase(StrEnum):
    """Fases de progresso de um narrowcast."""

    WAITING = "waiting"
    SENDING = "sending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class InsightStatus(StrEnum):
    """Status de estatísticas de insight."""

    READY = "ready"
    UNREADY = "unready"
    OUT_OF_SERVICE = "out_of_service"
