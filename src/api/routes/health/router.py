"""Endpoints de health check."""

from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Literal

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse
from pydantic import BaseModel

logger = logging.getLogger(__name__)

router = APIRouter()

SERVICE_NAME = "sellio-connect"
REDIS_PING_TIMEOUT_SECONDS = 2.0


class HealthResponse(BaseModel):
    """Resposta do health check."""

    status: str
    service: str
    timestamp: str
    version: str = "1.0.0"


@dataclass(frozen=True, slots=True)
class DependencyCheck:
    """Resultado de checagem de dependência."""

    status: Literal["ok", "failed"]
    backend: str | None = None
    latency_ms: float | None = None
    error: str | None = None

    def as_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "backend": self.backend,
            "latency_ms": self.latency_ms,
            "error": self.error,
        }


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Liveness probe: verifica se o serviço está rodando."""
    return HealthResponse(
        status="healthy",
        service=SERVICE_NAME,
        timestamp=datetime.now(UTC).isoformat(),
    )


@router.get("/ready")
async def readiness_check(request: Request) -> JSONResponse:
    """Readiness probe: store OTP criado e, no backend Redis, respondendo."""
    store_check = await _check_otp_store(
        getattr(request.app.state, "otp_store", None),
        getattr(request.app.state, "otp_store_backend", None),
        getattr(request.app.state, "redis_client", None),
    )
    ready = store_check.status == "ok"

    payload = {
        "status": "ready" if ready else "not_ready",
        "checks": {"otp_store": store_check.as_dict()},
        "timestamp": datetime.now(UTC).isoformat(),
    }
    return JSONResponse(content=payload, status_code=200 if ready else 503)


async def _check_otp_store(
    store: Any | None,
    backend: str | None,
    redis_client: Any | None,
) -> DependencyCheck:
    if store is None:
        return DependencyCheck(status="failed", backend=backend, error="not_configured")
    if backend != "redis":
        return DependencyCheck(status="ok", backend=backend)
    if redis_client is None:
        return DependencyCheck(status="failed", backend=backend, error="not_configured")

    started_at = time.perf_counter()
    try:
        # Cliente síncrono: ping fora do event loop
        await asyncio.wait_for(
            asyncio.to_thread(redis_client.ping),
            timeout=REDIS_PING_TIMEOUT_SECONDS,
        )
    except TimeoutError:
        return DependencyCheck(status="failed", backend=backend, error="timeout")
    except Exception as exc:
        logger.warning("readiness_redis_check_failed", extra={"error_type": type(exc).__name__})
        return DependencyCheck(status="failed", backend=backend, error=type(exc).__name__)
    latency_ms = (time.perf_counter() - started_at) * 1000
    return DependencyCheck(status="ok", backend=backend, latency_ms=round(latency_ms, 2))
