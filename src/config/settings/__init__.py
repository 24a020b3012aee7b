"""Agregador de settings do Sellio Connect.

Re-exporta todas as settings e funções de cada módulo.
Organização por domínio para isolamento de mudanças.
"""

from __future__ import annotations

# Base settings
from config.settings.base import (
    BaseSettings,
    Environment,
    OtpSettings,
    OtpStoreBackend,
    get_base_settings,
    get_otp_settings,
)

# Channel-specific settings
from config.settings.whatsapp import (
    GRAPH_API_BASE_URL,
    GRAPH_API_VERSION,
    WhatsAppSettings,
    get_whatsapp_settings,
)

__all__ = [
    # Constants
    "GRAPH_API_BASE_URL",
    "GRAPH_API_VERSION",
    # Base
    "BaseSettings",
    "Environment",
    "OtpSettings",
    "OtpStoreBackend",
    # Channels
    "WhatsAppSettings",
    "get_base_settings",
    "get_otp_settings",
    "get_whatsapp_settings",
]
