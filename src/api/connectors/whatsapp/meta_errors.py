"""Erros e helpers de parsing para API Meta/WhatsApp."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WhatsAppApiError:
    """Erro retornado pela API Meta/WhatsApp."""

    error_type: str
    error_code: int
    error_message: str
    is_permanent: bool  # True se erro não é retentável


def is_permanent_error(error_code: int, error_type: str) -> bool:
    """Classifica erro como permanente ou transitório.

    Erros permanentes: 400, 401, 403, 404, 413 e OAuth/InvalidRequest.
    Erros transitórios: 429 (rate limit), 500+ (server errors).
    """
    if error_code in {400, 401, 403, 404, 413}:
        return True
    return error_type in {"OAuthException", "InvalidRequest"}


def parse_meta_error(response_data: Any) -> WhatsAppApiError | None:
    """Extrai informações de erro do response da Meta.

    Returns:
        WhatsAppApiError se houver erro, None se sucesso.
    """
    if not isinstance(response_data, dict):
        return None
    error_obj = response_data.get("error")
    if not error_obj or not isinstance(error_obj, dict):
        return None

    error_type = error_obj.get("type", "unknown")
    error_code = error_obj.get("code", 0)
    error_message = error_obj.get("message", "Erro desconhecido")

    return WhatsAppApiError(
        error_type=error_type,
        error_code=error_code,
        error_message=error_message,
        is_permanent=is_permanent_error(error_code, error_type),
    )


# Mensagens amigáveis por status HTTP da Graph API
_USER_MESSAGES_BY_STATUS: dict[int, str] = {
    400: "Invalid phone number or message format. Please check the phone number.",
    401: "Invalid WhatsApp access token. Please check your API configuration.",
    403: "WhatsApp API permissions denied. Please check your app permissions.",
    429: "Rate limit exceeded. Please wait a moment before trying again.",
}


def user_message_for_status(status_code: int | None) -> str:
    """Traduz status HTTP da Graph API em mensagem para o usuário final."""
    if status_code in _USER_MESSAGES_BY_STATUS:
        return _USER_MESSAGES_BY_STATUS[status_code]
    if status_code is None:
        return "Failed to send message via WhatsApp"
    return f"WhatsApp API error ({status_code})"
