"""Configurações centralizadas do line_messaging.

Este módulo exporta:
- Settings: classe de configuração via variáveis de ambiente
- get_settings: função cacheada para obter instância única
- Constantes da LINE Messaging API

Uso típico:
    from line_messaging.config import get_settings, LINE_API_BASE_URL
"""

from line_messaging.config.settings import (
    DEFAULT_VALIDATION_MAX_DEPTH,
    LINE_API_BASE_URL,
    LINE_API_VERSION,
    Settings,
    get_settings,
)

__all__ = [
    "Settings",
    "get_settings",
    "LINE_API_BASE_URL",
    "LINE_API_VERSION",
    "DEFAULT_VALIDATION_MAX_DEPTH",
]
