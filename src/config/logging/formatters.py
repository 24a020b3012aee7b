"""Formatters de logging estruturado.

Logs JSON com campos obrigatórios: correlation_id, service,
timestamp (asctime), level, logger (name) e message.
"""

from __future__ import annotations

from pythonjsonlogger.json import JsonFormatter

# Ordem fixa para manter o output estável entre execuções
REQUIRED_LOG_FIELDS = (
    "asctime",
    "levelname",
    "name",
    "message",
    "correlation_id",
    "service",
)

FIELD_RENAME_MAP = {
    "levelname": "level",
    "name": "logger",
}


def create_json_formatter() -> JsonFormatter:
    """Cria formatter JSON com campos padronizados.

    Exemplo de output:
        {
            "asctime": "2026-02-02 10:30:00,123",
            "level": "INFO",
            "logger": "app.use_cases.whatsapp.verify_otp",
            "message": "otp_verified",
            "correlation_id": "abc-123",
            "service": "sellio_connect"
        }
    """
    format_string = " ".join(f"%({field})s" for field in REQUIRED_LOG_FIELDS)

    return JsonFormatter(
        format_string,
        rename_fields=FIELD_RENAME_MAP,
    )
