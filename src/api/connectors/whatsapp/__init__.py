"""Conector WhatsApp - adapter de borda para Meta Graph API.

Único ponto de IO para o canal WhatsApp:
- HTTP client para Graph API (envio de mensagens)
- Erros e logging do Graph API
"""

from .http_base import HttpClient, HttpClientConfig, HttpError
from .http_client import WhatsAppHttpClient, create_whatsapp_http_client
from .meta_errors import (
    WhatsAppApiError,
    is_permanent_error,
    parse_meta_error,
    user_message_for_status,
)

__all__ = [
    "HttpClient",
    "HttpClientConfig",
    "HttpError",
    "WhatsAppApiError",
    "WhatsAppHttpClient",
    "create_whatsapp_http_client",
    "is_permanent_error",
    "parse_meta_error",
    "user_message_for_status",
]
