"""Redis OTP Store: desafios OTP compartilhados entre instâncias.

Mesma máquina de estados do MemoryOtpStore, com expiração nativa do Redis
(PEXPIREAT) no lugar do sweep periódico.

Contrato de Keys:
    Telefones são PII e nunca viram key em texto puro: a key é
    `otp:<sha256(telefone)>`.

Layout do hash:
    code, attempts, expires_at, created_at
"""

from __future__ import annotations

import hashlib
import logging
import time
from typing import TYPE_CHECKING

from app.domain.otp_challenge import OtpChallenge, OtpStoreStats
from app.protocols.otp_store import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TTL_MINUTES,
    OtpStoreProtocol,
)
from utils.errors import RedisConnectionError

if TYPE_CHECKING:
    from collections.abc import Callable

    from redis import Redis

logger = logging.getLogger(__name__)

OTP_PREFIX = "otp:"

# Incremento + remoção no limite numa única operação atômica.
# Retorna -1 se não há desafio; caso contrário, attempts após o incremento.
_INCREMENT_ATTEMPTS_LUA = """
if redis.call('EXISTS', KEYS[1]) == 0 then
    return -1
end
local attempts = redis.call('HINCRBY', KEYS[1], 'attempts', 1)
if attempts >= tonumber(ARGV[1]) then
    redis.call('DEL', KEYS[1])
end
return attempts
"""

# Comparação + remoção atômicas: 1 se consumiu, 0 caso contrário.
# ARGV: código submetido, epoch atual, max_attempts.
_CONSUME_LUA = """
local stored = redis.call('HMGET', KEYS[1], 'code', 'attempts', 'expires_at')
if not stored[1] then
    return 0
end
if tonumber(stored[3]) <= tonumber(ARGV[2]) then
    redis.call('DEL', KEYS[1])
    return 0
end
if tonumber(stored[2]) >= tonumber(ARGV[3]) or stored[1] ~= ARGV[1] then
    return 0
end
redis.call('DEL', KEYS[1])
return 1
"""


def _decode(value: bytes | str) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else value


class RedisOtpStore(OtpStoreProtocol):
    """Store de desafios OTP usando Redis.

    Args:
        redis_client: Cliente Redis síncrono
        max_attempts: Tentativas falhas até o desafio ser removido
        clock: Fonte de epoch em segundos (injetável em testes)
    """

    def __init__(
        self,
        redis_client: Redis[bytes],
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._redis = redis_client
        self.max_attempts = max_attempts
        self._clock = clock
        self._increment_attempts = redis_client.register_script(_INCREMENT_ATTEMPTS_LUA)
        self._consume = redis_client.register_script(_CONSUME_LUA)

    def _now(self) -> float:
        return self._clock()

    def _key(self, phone_number: str) -> str:
        """Gera chave Redis com namespace, sem PII."""
        digest = hashlib.sha256(phone_number.encode("utf-8")).hexdigest()
        return f"{OTP_PREFIX}{digest}"

    def issue(
        self,
        phone_number: str,
        code: str,
        ttl_minutes: float = DEFAULT_TTL_MINUTES,
    ) -> None:
        now = self._now()
        challenge = OtpChallenge(
            code=code,
            expires_at=now + ttl_minutes * 60,
            attempts=0,
            created_at=now,
        )
        key = self._key(phone_number)
        try:
            pipeline = self._redis.pipeline(transaction=True)
            pipeline.delete(key)
            pipeline.hset(key, mapping=challenge.to_dict())
            pipeline.pexpireat(key, int(challenge.expires_at * 1000))
            pipeline.execute()
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao gravar desafio OTP no Redis", operation="issue"
            ) from exc

    def get(self, phone_number: str) -> OtpChallenge | None:
        key = self._key(phone_number)
        try:
            raw = self._redis.hgetall(key)
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao consultar desafio OTP no Redis", operation="get"
            ) from exc
        if not raw:
            return None

        challenge = OtpChallenge.from_dict({_decode(k): _decode(v) for k, v in raw.items()})
        if challenge.is_expired(self._now()):
            # Relógio local à frente do TTL do Redis
            self.delete(phone_number)
            return None
        return challenge

    def increment_attempts(self, phone_number: str) -> int | None:
        try:
            attempts = self._increment_attempts(
                keys=[self._key(phone_number)],
                args=[self.max_attempts],
            )
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao registrar tentativa OTP no Redis",
                operation="increment_attempts",
            ) from exc
        attempts = int(attempts)
        return attempts if attempts >= 0 else None

    def consume(self, phone_number: str, code: str) -> bool:
        try:
            consumed = self._consume(
                keys=[self._key(phone_number)],
                args=[code, self._now(), self.max_attempts],
            )
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao consumir desafio OTP no Redis", operation="consume"
            ) from exc
        return int(consumed) == 1

    def delete(self, phone_number: str) -> bool:
        try:
            removed = self._redis.delete(self._key(phone_number))
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao remover desafio OTP no Redis", operation="delete"
            ) from exc
        return bool(removed)

    def sweep(self) -> int:
        """No-op: o Redis expira as keys nativamente."""
        return 0

    def stats(self) -> OtpStoreStats:
        try:
            total = sum(1 for _ in self._redis.scan_iter(match=f"{OTP_PREFIX}*", count=500))
        except Exception as exc:
            raise RedisConnectionError(
                "Falha ao contar desafios OTP no Redis", operation="stats"
            ) from exc
        return OtpStoreStats(total=total, expired=0, valid=total)
