"""Modelo de desafio OTP pendente.

Um desafio por número de telefone. Instantes são epoch em segundos
(mesma base de `time.time()`), o que permite serializar sem perda no Redis.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any


@dataclass
class OtpChallenge:
    """Desafio OTP aguardando verificação.

    Attributes:
        code: Dígitos do código emitido
        expires_at: Epoch (s) a partir do qual o desafio é inválido
        attempts: Tentativas falhas registradas até agora
        created_at: Epoch (s) da emissão
    """

    code: str
    expires_at: float
    attempts: int = 0
    created_at: float = 0.0

    def is_expired(self, now: float) -> bool:
        """Expirado quando now >= expires_at."""
        return now >= self.expires_at

    def remaining_seconds(self, now: float) -> int:
        """Segundos até expirar, arredondado para cima (mínimo 0)."""
        return max(0, math.ceil(self.expires_at - now))

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "expires_at": self.expires_at,
            "attempts": self.attempts,
            "created_at": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> OtpChallenge:
        return cls(
            code=str(data["code"]),
            expires_at=float(data["expires_at"]),
            attempts=int(data.get("attempts", 0)),
            created_at=float(data.get("created_at", 0.0)),
        )


@dataclass(frozen=True, slots=True)
class OtpStoreStats:
    """Contagem de desafios no store (diagnóstico)."""

    total: int
    expired: int
    valid: int

    def as_dict(self) -> dict[str, int]:
        return {"total": self.total, "expired": self.expired, "valid": self.valid}
