"""Protocolo de domínio para o store de desafios OTP.

Interface leve (ABC) dependida pelos use cases de verificação.
"""

from __future__ import annotations

import time
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.domain.otp_challenge import OtpChallenge, OtpStoreStats

DEFAULT_TTL_MINUTES = 5
DEFAULT_MAX_ATTEMPTS = 3


class OtpStoreProtocol(ABC):
    """Contrato síncrono para stores de desafio OTP.

    Invariantes que toda implementação mantém:
    - no máximo um desafio por telefone; `issue` sobrescreve;
    - `get` nunca devolve desafio expirado e o remove ao encontrá-lo;
    - `attempts` só cresce; ao atingir `max_attempts` o desafio é removido.

    Nenhuma operação levanta exceção em uso normal: ausência é retorno válido.
    """

    max_attempts: int = DEFAULT_MAX_ATTEMPTS

    @abstractmethod
    def issue(
        self,
        phone_number: str,
        code: str,
        ttl_minutes: float = DEFAULT_TTL_MINUTES,
    ) -> None:
        """Grava novo desafio com attempts=0, substituindo qualquer anterior."""

    @abstractmethod
    def get(self, phone_number: str) -> OtpChallenge | None:
        """Retorna o desafio atual ou None (ausente/expirado).

        Expirado é removido antes de retornar None.
        """

    @abstractmethod
    def increment_attempts(self, phone_number: str) -> int | None:
        """Incrementa attempts do desafio existente, atomicamente.

        Ao atingir `max_attempts` o desafio é removido na mesma operação.

        Returns:
            attempts após o incremento; None se não havia desafio vigente.
        """

    def register_failed_attempt(self, phone_number: str) -> bool:
        """Registra tentativa falha.

        Returns:
            True se havia desafio para incrementar; False caso contrário.
        """
        return self.increment_attempts(phone_number) is not None

    @abstractmethod
    def consume(self, phone_number: str, code: str) -> bool:
        """Compara o código e remove o desafio numa única operação atômica.

        Um desafio reemitido entre a leitura e a comparação nunca é
        consumido com o código antigo.

        Returns:
            True se o desafio vigente tinha exatamente esse código e foi
            removido; False caso contrário (nada é alterado).
        """

    @abstractmethod
    def delete(self, phone_number: str) -> bool:
        """Remove o desafio (idempotente).

        Returns:
            True se algo foi removido.
        """

    @abstractmethod
    def sweep(self) -> int:
        """Remove todos os desafios expirados.

        Returns:
            Quantidade removida.
        """

    @abstractmethod
    def stats(self) -> OtpStoreStats:
        """Contagem de desafios total/expirados/válidos."""

    def _now(self) -> float:
        """Epoch atual em segundos (relógio do store)."""
        return time.time()

    # Consultas derivadas, implementadas sobre `get`

    def remaining_seconds(self, phone_number: str) -> int:
        """Segundos até expirar; 0 se ausente."""
        challenge = self.get(phone_number)
        if challenge is None:
            return 0
        return challenge.remaining_seconds(self._now())

    def remaining_attempts(self, phone_number: str) -> int:
        """Tentativas restantes; 0 se ausente."""
        challenge = self.get(phone_number)
        if challenge is None:
            return 0
        return max(0, self.max_attempts - challenge.attempts)

    def is_valid(self, phone_number: str) -> bool:
        """True se há desafio vigente com tentativas disponíveis."""
        challenge = self.get(phone_number)
        if challenge is None:
            return False
        return challenge.attempts < self.max_attempts
