"""Logging estruturado (JSON por padrão) com service e correlation_id."""

from __future__ import annotations

import logging

from pythonjsonlogger.json import JsonFormatter

from line_messaging.observability.correlation import get_correlation_id

_JSON_FIELDS = "%(asctime)s %(levelname)s %(name)s %(message)s %(correlation_id)s %(service)s"
_TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(correlation_id)s] %(message)s"


class CorrelationIdFilter(logging.Filter):
    """Completa o record com `service` e `correlation_id`.

    Nunca logar tokens de canal, user IDs ou conteúdo de mensagens.
    """

    def __init__(self, service_name: str) -> None:
        super().__init__()
        self._service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:  # noqa: A003
        # `extra={"correlation_id": ...}` tem precedência sobre o contexto
        if not getattr(record, "correlation_id", None):
            record.correlation_id = get_correlation_id()
        record.service = self._service_name
        return True


def _build_formatter(log_format: str) -> logging.Formatter:
    if log_format == "text":
        return logging.Formatter(_TEXT_FORMAT)
    return JsonFormatter(_JSON_FIELDS, rename_fields={"levelname": "level", "name": "logger"})


def configure_logging(level: str, service_name: str, log_format: str = "json") -> None:
    """Instala um único handler no root logger.

    Args:
        level: Nível (ex.: "INFO")
        service_name: Valor do campo `service`
        log_format: "json" (padrão) ou "text" para uso local
    """
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(_build_formatter(log_format))
    handler.addFilter(CorrelationIdFilter(service_name))

    root = logging.getLogger()
    root.setLevel(level)
    root.handlers = [handler]


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
