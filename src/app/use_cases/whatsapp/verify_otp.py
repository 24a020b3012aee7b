"""Use case de verificação de código OTP.

Compõe as operações do store no protocolo de verificação:
formato -> busca -> limite de tentativas -> consumo atômico -> falha.
Todo desfecho é um VerifyOtpResult; nada é relançado ao chamador.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from app.constants.otp import (
    MSG_NOT_FOUND,
    MSG_TOO_MANY_ATTEMPTS,
    MSG_VERIFIED,
    MSG_VERIFY_MISSING_FIELDS,
    VerifyOtpStatus,
    invalid_code_message,
    invalid_format_message,
)
from app.observability import record_otp_outcome
from app.services.otp_codes import OTP_CODE_LENGTH, is_valid_otp_format
from config.logging import mask_phone_number

if TYPE_CHECKING:
    from app.protocols.otp_store import OtpStoreProtocol

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class VerifyOtpResult:
    """Desfecho de uma verificação.

    Attributes:
        status: Desfecho terminal
        message: Mensagem para o cliente
        remaining_attempts: Tentativas restantes (apenas em falhas de código)
    """

    status: VerifyOtpStatus
    message: str
    remaining_attempts: int | None = None

    @property
    def success(self) -> bool:
        return self.status == VerifyOtpStatus.VERIFIED


class VerifyOtpUseCase:
    """Verifica o código submetido contra o desafio pendente do telefone."""

    def __init__(
        self,
        store: OtpStoreProtocol,
        code_length: int = OTP_CODE_LENGTH,
    ) -> None:
        self._store = store
        self._code_length = code_length

    def execute(self, phone_number: str | None, otp: str | None) -> VerifyOtpResult:
        """Executa o protocolo de verificação.

        Args:
            phone_number: Telefone do desafio
            otp: Código submetido

        Returns:
            VerifyOtpResult com o desfecho.
        """
        if not phone_number or not otp:
            return self._finish(
                phone_number,
                VerifyOtpResult(VerifyOtpStatus.MISSING_FIELDS, MSG_VERIFY_MISSING_FIELDS),
            )

        # Formato antes de qualquer acesso ao store
        if not is_valid_otp_format(otp, self._code_length):
            return self._finish(
                phone_number,
                VerifyOtpResult(
                    VerifyOtpStatus.INVALID_FORMAT,
                    invalid_format_message(self._code_length),
                ),
            )

        challenge = self._store.get(phone_number)
        if challenge is None:
            return self._finish(
                phone_number,
                VerifyOtpResult(VerifyOtpStatus.NOT_FOUND, MSG_NOT_FOUND),
            )

        max_attempts = self._store.max_attempts
        if challenge.attempts >= max_attempts:
            self._store.delete(phone_number)
            return self._finish(
                phone_number,
                VerifyOtpResult(
                    VerifyOtpStatus.TOO_MANY_ATTEMPTS,
                    MSG_TOO_MANY_ATTEMPTS,
                    remaining_attempts=0,
                ),
            )

        # Comparação e remoção sob a mesma operação do store (sem replay)
        if self._store.consume(phone_number, otp):
            return self._finish(
                phone_number,
                VerifyOtpResult(VerifyOtpStatus.VERIFIED, MSG_VERIFIED),
            )

        return self._finish(phone_number, self._register_mismatch(phone_number, max_attempts))

    def _register_mismatch(self, phone_number: str, max_attempts: int) -> VerifyOtpResult:
        attempts = self._store.increment_attempts(phone_number)
        if attempts is None:
            # Expirou ou foi consumido desde o get
            return VerifyOtpResult(VerifyOtpStatus.NOT_FOUND, MSG_NOT_FOUND)

        remaining = max(0, max_attempts - attempts)
        if remaining == 0:
            # O store já removeu o desafio ao atingir o limite
            return VerifyOtpResult(
                VerifyOtpStatus.TOO_MANY_ATTEMPTS,
                MSG_TOO_MANY_ATTEMPTS,
                remaining_attempts=0,
            )
        return VerifyOtpResult(
            VerifyOtpStatus.INVALID_CODE,
            invalid_code_message(remaining),
            remaining_attempts=remaining,
        )

    @staticmethod
    def _finish(phone_number: str | None, result: VerifyOtpResult) -> VerifyOtpResult:
        extra: dict[str, object] = {
            "component": "verify_otp",
            "phone": mask_phone_number(phone_number),
            "status": str(result.status),
        }
        if result.remaining_attempts is not None:
            extra["remaining_attempts"] = result.remaining_attempts
        if result.success:
            logger.info("otp_verified", extra=extra)
        else:
            logger.info("otp_verification_rejected", extra=extra)
        record_otp_outcome("verify", str(result.status))
        return result
