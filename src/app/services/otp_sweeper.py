"""Sweep periódico de desafios OTP expirados.

Task asyncio explícita, iniciada no startup e cancelada no shutdown
pelo lifespan da aplicação. Limita o crescimento de memória com desafios
abandonados; a corretude não depende dela (o store expira na leitura).
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from app.protocols.otp_store import OtpStoreProtocol

logger = logging.getLogger(__name__)

DEFAULT_SWEEP_INTERVAL_SECONDS = 300.0


class OtpSweeper:
    """Executa `store.sweep()` a cada `interval_seconds`.

    Args:
        store: Store de desafios OTP
        interval_seconds: Intervalo entre sweeps
    """

    def __init__(
        self,
        store: OtpStoreProtocol,
        interval_seconds: float = DEFAULT_SWEEP_INTERVAL_SECONDS,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds deve ser > 0")
        self._store = store
        self._interval_seconds = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Agenda o loop no event loop corrente (idempotente)."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="otp-sweeper")
        logger.info(
            "otp_sweeper_started",
            extra={"interval_seconds": self._interval_seconds},
        )

    async def stop(self) -> None:
        """Cancela o loop e aguarda o término."""
        task = self._task
        self._task = None
        if task is None:
            return
        task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await task
        logger.info("otp_sweeper_stopped")

    def sweep_once(self) -> int:
        """Executa um sweep; falhas são logadas e não interrompem o loop."""
        try:
            removed = self._store.sweep()
        except Exception as exc:
            logger.error(
                "otp_sweep_failed",
                extra={"error_type": type(exc).__name__},
            )
            return 0
        if removed:
            logger.info("otp_sweep_completed", extra={"removed": removed})
        return removed

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval_seconds)
            self.sweep_once()
