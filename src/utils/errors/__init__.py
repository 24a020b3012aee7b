"""Exceções utilitárias compartilhadas."""

from .exceptions import (
    InfrastructureError,
    OtpStoreUnavailableError,
    RedisConnectionError,
)

__all__ = [
    "InfrastructureError",
    "OtpStoreUnavailableError",
    "RedisConnectionError",
]
