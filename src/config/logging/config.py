"""Configuração centralizada de logging.

Um único handler JSON no root logger, com correlation_id/service
injetados pelo filter. Bibliotecas que logam URLs completas (httpx
inclui o phone_number_id da Graph API) ficam em WARNING.

Uso:
    from config.logging import configure_logging, get_logger

    configure_logging(level="INFO", service_name="sellio_connect")

    logger = get_logger(__name__)
    logger.info("otp_issued", extra={"phone": mask_phone_number(phone)})
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import create_json_formatter

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

VALID_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})

DEFAULT_SERVICE_NAME = "sellio_connect"

QUIET_LOGGERS: Mapping[str, str] = {
    "httpx": "WARNING",
    "httpcore": "WARNING",
}


def _normalize_level(level: str) -> str:
    normalized = level.upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(
            f"Nível de log inválido: {level}. "
            f"Válidos: {', '.join(sorted(VALID_LOG_LEVELS))}"
        )
    return normalized


def configure_logging(
    level: str = "INFO",
    service_name: str = DEFAULT_SERVICE_NAME,
    correlation_id_getter: Callable[[], str] | None = None,
    quiet_loggers: Mapping[str, str] | None = None,
) -> None:
    """Configura logging JSON estruturado no root logger.

    Chamada uma vez pelo bootstrap; chamadas repetidas substituem o
    handler anterior em vez de duplicar saída.

    Args:
        level: DEBUG, INFO, WARNING, ERROR ou CRITICAL (case-insensitive).
        service_name: Valor do campo `service` em todo log.
        correlation_id_getter: Retorna o correlation_id do contexto atual.
        quiet_loggers: Nível mínimo por logger de biblioteca
            (padrão: QUIET_LOGGERS).

    Raises:
        ValueError: Se algum nível for inválido.
    """
    root_level = _normalize_level(level)
    overrides = {
        name: _normalize_level(value)
        for name, value in (QUIET_LOGGERS if quiet_loggers is None else quiet_loggers).items()
    }

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(root_level)
    handler.setFormatter(create_json_formatter())
    handler.addFilter(CorrelationIdFilter(service_name, correlation_id_getter))

    root = logging.getLogger()
    root.setLevel(root_level)
    root.handlers = [handler]

    for name, value in overrides.items():
        logging.getLogger(name).setLevel(value)


def get_logger(name: str) -> logging.Logger:
    """Atalho para logging.getLogger; service e correlation_id vêm do filter."""
    return logging.getLogger(name)
