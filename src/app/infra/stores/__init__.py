"""Stores: implementações concretas de persistência.

Módulos disponíveis:
    - memory_stores: Store de OTP em memória (processo único)
    - redis_otp_store: Store de OTP usando Redis (multi-instância)
"""

from __future__ import annotations

from app.infra.stores.memory_stores import MemoryOtpStore
from app.infra.stores.redis_otp_store import RedisOtpStore

__all__ = [
    # Memory (processo único)
    "MemoryOtpStore",
    # Redis
    "RedisOtpStore",
]
