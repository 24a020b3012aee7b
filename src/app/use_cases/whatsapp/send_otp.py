"""Use case de emissão e envio de código OTP via WhatsApp."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.constants.otp import (
    MSG_ALREADY_PENDING,
    MSG_DELIVERY_FAILED,
    MSG_INVALID_PHONE,
    MSG_NOT_CONFIGURED,
    MSG_PHONE_REQUIRED,
    MSG_SENT,
    SendOtpStatus,
    wait_message,
)
from app.observability import record_latency, record_otp_outcome
from app.protocols.otp_store import DEFAULT_TTL_MINUTES
from app.services.otp_codes import OTP_CODE_LENGTH, generate_otp_code, is_valid_phone_number
from config.logging import mask_phone_number

if TYPE_CHECKING:
    from app.protocols.otp_sender import OtpSenderProtocol
    from app.protocols.otp_store import OtpStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class SendOtpResult:
    """Desfecho de uma solicitação de envio.

    Attributes:
        status: Desfecho
        message: Mensagem para o cliente
        remaining_seconds: Validade restante do desafio já pendente
        debug_code: Código emitido (somente quando exposto em development)
    """

    status: SendOtpStatus
    message: str
    remaining_seconds: int | None = None
    debug_code: str | None = None

    @property
    def success(self) -> bool:
        return self.status == SendOtpStatus.SENT


class SendOtpUseCase:
    """Emite um desafio para o telefone e entrega o código pelo sender.

    Args:
        store: Store de desafios OTP
        sender: Canal de entrega do código
        sender_configured: False quando as credenciais do canal faltam
        ttl_minutes: Validade do código
        code_length: Dígitos do código
        expose_debug_code: Devolve o código no resultado (development)
    """

    def __init__(
        self,
        store: OtpStoreProtocol,
        sender: OtpSenderProtocol,
        *,
        sender_configured: bool = True,
        ttl_minutes: float = DEFAULT_TTL_MINUTES,
        code_length: int = OTP_CODE_LENGTH,
        expose_debug_code: bool = False,
    ) -> None:
        self._store = store
        self._sender = sender
        self._sender_configured = sender_configured
        self._ttl_minutes = ttl_minutes
        self._code_length = code_length
        self._expose_debug_code = expose_debug_code

    async def execute(self, phone_number: str | None) -> SendOtpResult:
        """Valida o telefone, emite o desafio e envia o código.

        Raises:
            Exception: falhas inesperadas do sender são relançadas depois de
                remover o desafio recém-emitido.
        """
        if not phone_number:
            return self._finish(
                phone_number, SendOtpResult(SendOtpStatus.MISSING_PHONE, MSG_PHONE_REQUIRED)
            )

        if not is_valid_phone_number(phone_number):
            return self._finish(
                phone_number, SendOtpResult(SendOtpStatus.INVALID_PHONE, MSG_INVALID_PHONE)
            )

        if not self._sender_configured:
            logger.error("otp_sender_not_configured", extra={"component": "send_otp"})
            return self._finish(
                phone_number, SendOtpResult(SendOtpStatus.NOT_CONFIGURED, MSG_NOT_CONFIGURED)
            )

        # Store síncrono (Redis bloqueia em rede): fora do event loop
        pending = await asyncio.to_thread(self._store.get, phone_number)
        if pending is not None:
            remaining = await asyncio.to_thread(self._store.remaining_seconds, phone_number)
            return self._finish(
                phone_number,
                SendOtpResult(
                    SendOtpStatus.ALREADY_PENDING,
                    MSG_ALREADY_PENDING,
                    remaining_seconds=remaining,
                ),
            )

        code = generate_otp_code(self._code_length)
        await asyncio.to_thread(self._store.issue, phone_number, code, self._ttl_minutes)

        started_at = time.perf_counter()
        try:
            delivery = await self._sender.send_code(phone_number, code, self._ttl_minutes)
        except Exception:
            await asyncio.to_thread(self._store.delete, phone_number)
            raise
        finally:
            record_latency("send_otp", "deliver", (time.perf_counter() - started_at) * 1000)

        if not delivery.success:
            await asyncio.to_thread(self._store.delete, phone_number)
            return self._finish(
                phone_number,
                SendOtpResult(
                    SendOtpStatus.DELIVERY_FAILED,
                    delivery.error_message or MSG_DELIVERY_FAILED,
                ),
            )

        return self._finish(
            phone_number,
            SendOtpResult(
                SendOtpStatus.SENT,
                MSG_SENT,
                debug_code=code if self._expose_debug_code else None,
            ),
        )

    @staticmethod
    def _finish(phone_number: str | None, result: SendOtpResult) -> SendOtpResult:
        logger.info(
            "otp_sent" if result.success else "otp_send_rejected",
            extra={
                "component": "send_otp",
                "phone": mask_phone_number(phone_number),
                "status": str(result.status),
            },
        )
        record_otp_outcome("send", str(result.status))
        return result
