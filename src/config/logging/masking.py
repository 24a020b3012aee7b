"""Máscara de PII para logs."""

from __future__ import annotations

MASK_PREFIX = "***"


def mask_phone_number(phone_number: str | None) -> str:
    """Mascara telefone para log, preservando só os 4 últimos dígitos.

    Exemplo:
        mask_phone_number("+15551234567") -> "***4567"
    """
    if not phone_number:
        return ""
    digits = "".join(ch for ch in phone_number if ch.isdigit())
    if len(digits) <= 4:
        return MASK_PREFIX
    return f"{MASK_PREFIX}{digits[-4:]}"
