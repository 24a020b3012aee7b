"""Factory de wiring para os use cases OTP (bootstrap)."""

from __future__ import annotations

from typing import TYPE_CHECKING

from app.bootstrap.whatsapp_adapters import GraphApiOtpSender
from app.use_cases.whatsapp.send_otp import SendOtpUseCase
from app.use_cases.whatsapp.verify_otp import VerifyOtpUseCase
from config.settings import get_base_settings, get_otp_settings, get_whatsapp_settings

if TYPE_CHECKING:
    from app.protocols.otp_sender import OtpSenderProtocol
    from app.protocols.otp_store import OtpStoreProtocol


def create_otp_sender() -> GraphApiOtpSender:
    """Cria sender de OTP via Graph API com settings do ambiente."""
    return GraphApiOtpSender(get_whatsapp_settings())


def create_send_otp_use_case(
    store: OtpStoreProtocol,
    sender: OtpSenderProtocol | None = None,
) -> SendOtpUseCase:
    """Cria use case de emissão com dependências injetadas."""
    otp_settings = get_otp_settings()
    base_settings = get_base_settings()
    return SendOtpUseCase(
        store=store,
        sender=sender or create_otp_sender(),
        sender_configured=get_whatsapp_settings().is_configured,
        ttl_minutes=otp_settings.ttl_minutes,
        code_length=otp_settings.code_length,
        expose_debug_code=otp_settings.expose_debug_code and base_settings.is_development,
    )


def create_verify_otp_use_case(store: OtpStoreProtocol) -> VerifyOtpUseCase:
    """Cria use case de verificação."""
    return VerifyOtpUseCase(store=store, code_length=get_otp_settings().code_length)
