"""Exceções de domínio para falhas recuperáveis de infraestrutura.

A borda HTTP traduz qualquer InfrastructureError em 503; erros de
validação e de estado do OTP nunca são exceções (viram resultados).
"""

from __future__ import annotations


class InfrastructureError(RuntimeError):
    """Base para falhas de infraestrutura transitórias."""


class OtpStoreUnavailableError(InfrastructureError):
    """Store de desafios OTP inacessível.

    Attributes:
        operation: Operação do store que falhou (ex: "issue", "get")
    """

    def __init__(self, message: str, *, operation: str = "") -> None:
        super().__init__(message)
        self.operation = operation


class RedisConnectionError(OtpStoreUnavailableError):
    """Falha de conexão/timeout ao acessar Redis."""
