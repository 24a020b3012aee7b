"""Agregador de settings base.

Re-exporta todas as settings base para uso externo.
"""

from __future__ import annotations

from config.settings.base.core import (
    BaseSettings,
    Environment,
    get_base_settings,
)
from config.settings.base.otp import (
    OtpSettings,
    OtpStoreBackend,
    get_otp_settings,
)

__all__ = [
    # Core
    "BaseSettings",
    # Types
    "Environment",
    # OTP
    "OtpSettings",
    "OtpStoreBackend",
    "get_base_settings",
    "get_otp_settings",
]
