"""Factories de stores baseadas em configuração de ambiente."""

from __future__ import annotations

import logging

from app.bootstrap.clients import create_redis_client
from app.infra.stores import MemoryOtpStore, RedisOtpStore
from app.protocols.otp_store import OtpStoreProtocol
from config.settings import get_base_settings, get_otp_settings

logger = logging.getLogger(__name__)


def create_otp_store() -> OtpStoreProtocol:
    """Cria store de desafios OTP conforme OTP_STORE_BACKEND.

    Chamado uma vez pelo lifespan da aplicação; o store resultante vive em
    `app.state.otp_store`.

    Raises:
        ValueError: Backend desconhecido ou Redis sem REDIS_URL.
    """
    otp_settings = get_otp_settings()
    environment = get_base_settings().environment
    backend = otp_settings.store_backend

    if backend == "redis":
        store = RedisOtpStore(create_redis_client(), max_attempts=otp_settings.max_attempts)
        logger.info("otp_store_created", extra={"backend": "redis"})
        return store

    if backend == "memory":
        if environment not in ("development", "test"):
            logger.warning(
                "memory_otp_store_in_non_dev",
                extra={"backend": "memory", "environment": environment},
            )
        store = MemoryOtpStore(max_attempts=otp_settings.max_attempts)
        logger.info("otp_store_created", extra={"backend": "memory"})
        return store

    msg = f"OTP_STORE_BACKEND inválido: {backend}"
    raise ValueError(msg)
