"""Modelos de resposta da API (perfil, narrowcast, insights, cota).

Respostas são somente leitura e aceitam campos extras sem falhar.
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field

from line_messaging.domain.base import LineModel
from line_messaging.domain.enums import InsightStatus, NarrowcastPhase


class UserProfile(LineModel):
    display_name: str
    user_id: str
    picture_url: str | None = None
    status_message: str | None = None


class NarrowcastProgressResponse(LineModel):
    """Progresso de um narrowcast.

    `error_code` (1 | 2) não tem semântica documentada; repassado como veio.
    """

    phase: NarrowcastPhase
    success_count: int | None = None
    failure_count: int | None = None
    target_count: str | int | None = None
    failed_description: str | None = None
    error_code: int | None = None
    accepted_time: str | None = None
    completed_time: str | None = None


class InsightStatisticsResponse(LineModel):
    status: InsightStatus


class NumberOfMessageDeliveries(InsightStatisticsResponse):
    broadcast: int | None = None
    targeting: int | None = None
    auto_response: int | None = None
    welcome_response: int | None = None
    chat: int | None = None
    api_broadcast: int | None = None
    api_push: int | None = None
    api_multicast: int | None = None
    api_reply: int | None = None


class NumberOfFollowers(InsightStatisticsResponse):
    followers: int | None = None
    targeted_reaches: int | None = None
    blocks: int | None = None


class _Percentage(LineModel):
    percentage: float


class GenderPercentage(_Percentage):
    gender: str


class AgePercentage(_Percentage):
    age: str


class AreaPercentage(_Percentage):
    area: str


class AppTypePercentage(_Percentage):
    app_type: str


class SubscriptionPeriodPercentage(_Percentage):
    subscription_period: str


class FriendDemographics(LineModel):
    available: bool
    genders: tuple[GenderPercentage, ...] = ()
    ages: tuple[AgePercentage, ...] = ()
    areas: tuple[AreaPercentage, ...] = ()
    app_types: tuple[AppTypePercentage, ...] = ()
    subscription_periods: tuple[SubscriptionPeriodPercentage, ...] = ()


class TargetLimitForAdditionalMessages(LineModel):
    type: Literal["none", "limited"]
    value: int | None = None


class NumberOfMessagesSentThisMonth(LineModel):
    total_usage: int


class SentMessage(LineModel):
    id: str
    quote_token: str | None = None


class SentMessagesResponse(LineModel):
    sent_messages: tuple[SentMessage, ...] = Field(default_factory=tuple)


class RichMenuIdResponse(LineModel):
    rich_menu_id: str
