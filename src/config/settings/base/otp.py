"""Settings de OTP (verificação de telefone).

Configurações do store de desafios OTP e do sweeper periódico.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from config.settings.base.core import BaseSettings

OtpStoreBackend = Literal["memory", "redis"]


@dataclass(frozen=True)
class OtpSettings:
    """Configurações de OTP.

    Attributes:
        store_backend: Backend do store de desafios (memory|redis)
        ttl_minutes: Validade de um código emitido
        max_attempts: Tentativas falhas permitidas antes do bloqueio
        code_length: Quantidade de dígitos do código
        sweep_interval_seconds: Intervalo do sweep de desafios expirados
        expose_debug_code: Devolve o código na resposta (apenas development)
    """

    store_backend: OtpStoreBackend = "memory"
    ttl_minutes: float = 5
    max_attempts: int = 3
    code_length: int = 6
    sweep_interval_seconds: float = 300.0
    expose_debug_code: bool = True

    def validate(self, base: BaseSettings) -> list[str]:
        """Valida configurações de OTP.

        Args:
            base: BaseSettings para verificar ambiente.

        Returns:
            Lista de erros de validação.
        """
        errors: list[str] = []

        if self.store_backend not in ("memory", "redis"):
            errors.append(f"OTP_STORE_BACKEND inválido: {self.store_backend}")

        if self.store_backend == "memory" and not base.is_development:
            errors.append(
                "OTP_STORE_BACKEND=memory não compartilha estado entre instâncias. "
                "Use Redis em staging/production."
            )

        if self.store_backend == "redis" and not base.redis_url:
            errors.append("OTP_STORE_BACKEND=redis requer REDIS_URL configurado")

        if self.ttl_minutes <= 0:
            errors.append("OTP_TTL_MINUTES deve ser > 0")

        if self.max_attempts < 1:
            errors.append("OTP_MAX_ATTEMPTS deve ser >= 1")

        if self.code_length < 4:
            errors.append("OTP_CODE_LENGTH deve ser >= 4")

        if self.sweep_interval_seconds <= 0:
            errors.append("OTP_SWEEP_INTERVAL_SECONDS deve ser > 0")

        return errors


def _load_otp_from_env() -> OtpSettings:
    """Carrega OtpSettings de variáveis de ambiente."""
    backend_str = os.getenv("OTP_STORE_BACKEND", "memory").lower()
    backend: OtpStoreBackend = backend_str if backend_str in ("memory", "redis") else "memory"
    return OtpSettings(
        store_backend=backend,
        ttl_minutes=float(os.getenv("OTP_TTL_MINUTES", "5")),
        max_attempts=int(os.getenv("OTP_MAX_ATTEMPTS", "3")),
        code_length=int(os.getenv("OTP_CODE_LENGTH", "6")),
        sweep_interval_seconds=float(os.getenv("OTP_SWEEP_INTERVAL_SECONDS", "300")),
        expose_debug_code=os.getenv("OTP_EXPOSE_DEBUG_CODE", "true").lower() in ("true", "1"),
    )


@lru_cache(maxsize=1)
def get_otp_settings() -> OtpSettings:
    """Retorna instância cacheada de OtpSettings."""
    return _load_otp_from_env()
