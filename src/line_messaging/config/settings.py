"""Configurações do cliente via variáveis de ambiente.

Todas as configurações são carregadas de env vars.
Nunca hardcode tokens de canal ou secrets.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict

# -----------------------------------------------------------------------------
# Constantes da LINE Messaging API
# Referência: https://developers.line.biz/en/reference/messaging-api/
# -----------------------------------------------------------------------------
LINE_API_BASE_URL: str = "https://api.line.me"
LINE_API_VERSION: str = "v2"

# Guarda de profundidade para árvores aninhadas (flex box, operadores)
DEFAULT_VALIDATION_MAX_DEPTH: int = 64


class Settings(BaseSettings):
    """Configurações lidas do ambiente."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
    )

    # Aplicação
    service_name: str = "line_messaging"
    version: str = "0.1.0"
    environment: str = "development"
    log_level: str = "INFO"
    log_format: str = "json"  # json | text

    # LINE Messaging API
    line_channel_access_token: str | None = None  # Bearer token do canal
    line_channel_secret: str | None = None  # Secret do canal (assinatura de webhook)
    line_api_base_url: str = LINE_API_BASE_URL
    line_api_version: str = LINE_API_VERSION
    line_request_timeout_seconds: int = 30

    # Validação local antes do envio
    validation_max_depth: int = DEFAULT_VALIDATION_MAX_DEPTH
    validate_before_send: bool = True

    @property
    def line_api_endpoint(self) -> str:
        """Retorna a URL base completa da API (base + versão)."""
        return f"{self.line_api_base_url}/{self.line_api_version}/bot"

    @property
    def is_production(self) -> bool:
        """Retorna True se ambiente é produção."""
        return self.environment.lower() in ("production", "prod")

    def validate_line_config(self) -> list[str]:
        """Valida configuração de acesso à API.

        Retorna lista de erros (vazia = OK).
        """
        errors: list[str] = []
        if not self.line_channel_access_token:
            errors.append("LINE_CHANNEL_ACCESS_TOKEN é obrigatório para chamadas à API")
        if self.is_production and not self.line_api_base_url.startswith("https://"):
            errors.append("LINE_API_BASE_URL deve usar https em production")
        if self.line_request_timeout_seconds <= 0:
            errors.append("LINE_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        return errors

    def validate_validation_config(self) -> list[str]:
        """Valida parâmetros do validador local."""
        errors: list[str] = []
        if self.validation_max_depth < 1:
            errors.append("VALIDATION_MAX_DEPTH deve ser >= 1")
        return errors


@lru_cache
def get_settings() -> Settings:
    """Retorna instância única de Settings (cacheada)."""
    return Settings()
