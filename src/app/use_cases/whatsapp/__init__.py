"""Use cases específicos de WhatsApp."""

from .send_otp import SendOtpResult, SendOtpUseCase
from .verify_otp import VerifyOtpResult, VerifyOtpUseCase

__all__ = [
    # Emissão
    "SendOtpResult",
    "SendOtpUseCase",
    # Verificação
    "VerifyOtpResult",
    "VerifyOtpUseCase",
]
