"""Configuração de logging estruturado.

Uso:
    from config.logging import configure_logging, get_logger

    # Na inicialização (bootstrap)
    configure_logging(level="INFO", service_name="sellio_connect")

    # Em qualquer módulo
    logger = get_logger(__name__)
    logger.info("otp_sent", extra={"latency_ms": 42})

Campos obrigatórios em todo log: correlation_id, service, level,
logger, message, asctime. Telefones sempre mascarados, códigos nunca logados.
"""

from config.logging.config import configure_logging, get_logger
from config.logging.filters import CorrelationIdFilter
from config.logging.formatters import (
    FIELD_RENAME_MAP,
    REQUIRED_LOG_FIELDS,
    create_json_formatter,
)
from config.logging.masking import mask_phone_number

__all__ = [
    "FIELD_RENAME_MAP",
    "REQUIRED_LOG_FIELDS",
    "CorrelationIdFilter",
    "configure_logging",
    "create_json_formatter",
    "get_logger",
    "mask_phone_number",
]
