"""Testes unitários para config/settings.py.

Valida configurações, constantes e métodos de validação.
"""

from __future__ import annotations

import pytest

from line_messaging.config.settings import (
    DEFAULT_VALIDATION_MAX_DEPTH,
    LINE_API_BASE_URL,
    LINE_API_VERSION,
    Settings,
    get_settings,
)


class TestLineApiConstants:
    """Testes para constantes da LINE Messaging API."""

    def test_base_url_is_api_line_me(self) -> None:
        """URL base deve ser api.line.me via https."""
        assert LINE_API_BASE_URL == "https://api.line.me"

    def test_api_version(self) -> None:
        """Versão da API é v2."""
        assert LINE_API_VERSION == "v2"

    def test_default_max_depth(self) -> None:
        """Guarda de profundidade padrão é 64."""
        assert DEFAULT_VALIDATION_MAX_DEPTH == 64


class TestSettingsDefaults:
    """Testes para valores padrão de Settings."""

    def test_default_environment_is_development(self) -> None:
        """Ambiente padrão deve ser development."""
        s = Settings()
        assert s.environment == "development"
        assert s.is_production is False

    def test_default_validation_settings(self) -> None:
        """Validação local habilitada por padrão com profundidade 64."""
        s = Settings()
        assert s.validate_before_send is True
        assert s.validation_max_depth == 64

    def test_default_timeout(self) -> None:
        """Timeout padrão é 30 segundos."""
        s = Settings()
        assert s.line_request_timeout_seconds == 30


class TestSettingsEndpoints:
    """Testes para endpoints da API."""

    def test_line_api_endpoint_property(self) -> None:
        """Endpoint deve combinar base URL + versão + bot."""
        s = Settings()
        assert s.line_api_endpoint == "https://api.line.me/v2/bot"


class TestSettingsValidation:
    """Testes para validate_line_config e validate_validation_config."""

    def test_missing_token_is_reported(self) -> None:
        """Token ausente gera erro."""
        errors = Settings().validate_line_config()
        assert any("LINE_CHANNEL_ACCESS_TOKEN" in e for e in errors)

    def test_valid_config_has_no_errors(self) -> None:
        """Com token, a configuração padrão é válida."""
        s = Settings(line_channel_access_token="token")
        assert s.validate_line_config() == []

    def test_production_requires_https(self) -> None:
        """Em production, a URL base deve usar https."""
        s = Settings(
            environment="production",
            line_channel_access_token="token",
            line_api_base_url="http://localhost:8080",
        )
        errors = s.validate_line_config()
        assert any("https" in e for e in errors)

    def test_non_positive_timeout_is_reported(self) -> None:
        """Timeout <= 0 gera erro."""
        s = Settings(line_channel_access_token="token", line_request_timeout_seconds=0)
        assert any("TIMEOUT" in e for e in s.validate_line_config())

    def test_invalid_max_depth_is_reported(self) -> None:
        """VALIDATION_MAX_DEPTH < 1 gera erro."""
        s = Settings(validation_max_depth=0)
        assert s.validate_validation_config() == ["VALIDATION_MAX_DEPTH deve ser >= 1"]


class TestGetSettings:
    """Testes para get_settings cacheado."""

    def test_returns_same_instance(self) -> None:
        """get_settings devolve a mesma instância."""
        assert get_settings() is get_settings()

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Variáveis de ambiente sobrescrevem os padrões."""
        monkeypatch.setenv("VALIDATION_MAX_DEPTH", "8")
        monkeypatch.setenv("LINE_CHANNEL_ACCESS_TOKEN", "abc")
        get_settings.cache_clear()

        s = get_settings()

        assert s.validation_max_depth == 8
        assert s.line_channel_access_token == "abc"
