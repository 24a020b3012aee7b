"""Protocolos e contratos do core da aplicação."""

from .otp_sender import OtpDeliveryResult, OtpSenderProtocol
from .otp_store import DEFAULT_MAX_ATTEMPTS, DEFAULT_TTL_MINUTES, OtpStoreProtocol

__all__ = [
    "DEFAULT_MAX_ATTEMPTS",
    "DEFAULT_TTL_MINUTES",
    "OtpDeliveryResult",
    "OtpSenderProtocol",
    "OtpStoreProtocol",
]
