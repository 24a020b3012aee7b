"""Protocolo de entrega de códigos OTP."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True, slots=True)
class OtpDeliveryResult:
    """Resultado de entrega do código pelo canal de mensagens."""

    success: bool
    message_id: str | None = None
    error_message: str | None = None


class OtpSenderProtocol(Protocol):
    """Contrato mínimo para entregar o código ao telefone."""

    async def send_code(
        self,
        phone_number: str,
        code: str,
        ttl_minutes: float,
    ) -> OtpDeliveryResult: ...
