"""Dependências FastAPI das rotas OTP.

Store e sender vivem em `app.state` (criados no lifespan); os use cases são
montados por requisição. Testes substituem via `app.dependency_overrides`.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import Depends, Request

from app.bootstrap.whatsapp_factory import (
    create_send_otp_use_case,
    create_verify_otp_use_case,
)

if TYPE_CHECKING:
    from app.protocols.otp_sender import OtpSenderProtocol
    from app.protocols.otp_store import OtpStoreProtocol
    from app.use_cases.whatsapp.send_otp import SendOtpUseCase
    from app.use_cases.whatsapp.verify_otp import VerifyOtpUseCase


def get_otp_store(request: Request) -> OtpStoreProtocol:
    """Store de desafios OTP da aplicação."""
    return request.app.state.otp_store


def get_otp_sender(request: Request) -> OtpSenderProtocol:
    """Sender de OTP da aplicação."""
    return request.app.state.otp_sender


def get_send_otp_use_case(
    store: OtpStoreProtocol = Depends(get_otp_store),
    sender: OtpSenderProtocol = Depends(get_otp_sender),
) -> SendOtpUseCase:
    return create_send_otp_use_case(store, sender)


def get_verify_otp_use_case(
    store: OtpStoreProtocol = Depends(get_otp_store),
) -> VerifyOtpUseCase:
    return create_verify_otp_use_case(store)
