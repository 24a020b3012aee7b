"""Store de OTP em memória.

ATENÇÃO: estado local ao processo. Não sobrevive a reinícios e não é
compartilhado entre instâncias; para isso use RedisOtpStore.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import TYPE_CHECKING

from app.domain.otp_challenge import OtpChallenge, OtpStoreStats
from app.protocols.otp_store import (
    DEFAULT_MAX_ATTEMPTS,
    DEFAULT_TTL_MINUTES,
    OtpStoreProtocol,
)
from app.services.otp_codes import codes_match

if TYPE_CHECKING:
    from collections.abc import Callable

logger = logging.getLogger(__name__)


class MemoryOtpStore(OtpStoreProtocol):
    """Store de desafios OTP em memória, protegido por lock.

    Endpoints sync do FastAPI rodam em threadpool; cada operação executa
    sob o mesmo lock para que incremento e remoção sejam atômicos.

    Args:
        max_attempts: Tentativas falhas até o desafio ser removido
        clock: Fonte de epoch em segundos (injetável em testes)
    """

    def __init__(
        self,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_attempts = max_attempts
        self._clock = clock
        self._lock = threading.RLock()
        self._store: dict[str, OtpChallenge] = {}  # phone_number -> challenge

    def _now(self) -> float:
        return self._clock()

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
        with self._lock:
            self._store[phone_number] = challenge

    def get(self, phone_number: str) -> OtpChallenge | None:
        with self._lock:
            challenge = self._current(phone_number)
            if challenge is None:
                return None
            # Cópia: o chamador não altera o estado armazenado
            return OtpChallenge(**challenge.to_dict())

    def _current(self, phone_number: str) -> OtpChallenge | None:
        """Desafio vigente; remove o expirado. Chamar com o lock adquirido."""
        challenge = self._store.get(phone_number)
        if challenge is None:
            return None
        if challenge.is_expired(self._now()):
            del self._store[phone_number]
            return None
        return challenge

    def increment_attempts(self, phone_number: str) -> int | None:
        with self._lock:
            challenge = self._current(phone_number)
            if challenge is None:
                return None
            challenge.attempts += 1
            if challenge.attempts >= self.max_attempts:
                del self._store[phone_number]
            return challenge.attempts

    def consume(self, phone_number: str, code: str) -> bool:
        with self._lock:
            challenge = self._current(phone_number)
            if challenge is None or challenge.attempts >= self.max_attempts:
                return False
            if not codes_match(challenge.code, code):
                return False
            del self._store[phone_number]
            return True

    def delete(self, phone_number: str) -> bool:
        with self._lock:
            return self._store.pop(phone_number, None) is not None

    def sweep(self) -> int:
        now = self._now()
        with self._lock:
            expired = [k for k, v in self._store.items() if v.is_expired(now)]
            for k in expired:
                del self._store[k]
        if expired:
            logger.debug("otp_store_swept", extra={"removed": len(expired)})
        return len(expired)

    def stats(self) -> OtpStoreStats:
        now = self._now()
        with self._lock:
            total = len(self._store)
            expired = sum(1 for v in self._store.values() if v.is_expired(now))
        return OtpStoreStats(total=total, expired=expired, valid=total - expired)

    def clear(self) -> None:
        """Remove todos os desafios (apenas para testes)."""
        with self._lock:
            self._store.clear()
