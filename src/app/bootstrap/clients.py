"""Factories de clientes externos: Redis do store OTP."""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import TYPE_CHECKING

from config.settings import get_base_settings

if TYPE_CHECKING:
    from redis import Redis

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def create_redis_client() -> Redis[bytes]:
    """Cria cliente Redis síncrono (singleton).

    O store OTP é síncrono (executa em threadpool), então o cliente
    também é; não há variante async.

    Raises:
        ValueError: Se REDIS_URL não configurado
    """
    import redis

    redis_url = get_base_settings().redis_url
    if not redis_url:
        msg = "REDIS_URL não configurado"
        raise ValueError(msg)

    client: Redis[bytes] = redis.from_url(
        redis_url,
        decode_responses=False,
        socket_timeout=5.0,
        socket_connect_timeout=5.0,
        retry_on_timeout=True,
    )

    host = client.connection_pool.connection_kwargs.get("host", "unknown")
    logger.info("redis_client_created", extra={"host": host})
    return client


def close_redis_client(client: Redis[bytes]) -> None:
    """Fecha o pool e descarta o singleton (próximo create recria)."""
    try:
        client.close()
    except Exception as exc:
        logger.warning("redis_client_close_failed", extra={"error_type": type(exc).__name__})
    finally:
        create_redis_client.cache_clear()
    logger.info("redis_client_closed")
