"""Cliente HTTP base (httpx) com retry para a Graph API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any

import httpx

logger = logging.getLogger(__name__)

RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


@dataclass
class HttpClientConfig:
    """Configuração do cliente HTTP."""

    timeout_seconds: float = 30.0
    max_retries: int = 3
    backoff_base_seconds: float = 2.0
    backoff_max_seconds: float = 30.0
    default_headers: dict[str, str] = field(default_factory=dict)
    verify_ssl: bool = True


class HttpError(Exception):
    """Erro de requisição HTTP sem dados sensíveis.

    Attributes:
        status_code: Status HTTP da última resposta (None se não houve resposta)
        is_retryable: True para falhas transitórias
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        is_retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.is_retryable = is_retryable


class HttpClient:
    """Cliente HTTP com retry e backoff exponencial.

    Retenta 429/5xx e falhas de conexão/timeout até `max_retries`; em 429
    respeita `Retry-After` (limitado a `backoff_max_seconds`). Demais
    status retornam a response para o chamador interpretar.

    Args:
        config: Configuração de timeouts e retries
        transport: Transport httpx opcional (ex: httpx.MockTransport em testes)
    """

    def __init__(
        self,
        config: HttpClientConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._config = config or HttpClientConfig()
        self._transport = transport

    async def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str] | None = None,
    ) -> httpx.Response:
        merged_headers = {**self._config.default_headers, **(headers or {})}
        async with httpx.AsyncClient(
            verify=self._config.verify_ssl,
            transport=self._transport,
            timeout=self._config.timeout_seconds,
        ) as client:
            attempt = 0
            while True:
                try:
                    response = await client.post(url, json=json, headers=merged_headers)
                except (httpx.TimeoutException, httpx.ConnectError) as exc:
                    if attempt >= self._config.max_retries:
                        raise HttpError("http_connection_error", is_retryable=True) from exc
                    await self._wait_before_retry(attempt, reason=type(exc).__name__)
                    attempt += 1
                    continue

                if response.status_code not in RETRYABLE_STATUS_CODES:
                    return response
                if attempt >= self._config.max_retries:
                    raise HttpError(
                        "http_retryable_status",
                        status_code=response.status_code,
                        is_retryable=True,
                    )
                await self._wait_before_retry(
                    attempt,
                    reason=str(response.status_code),
                    retry_after=_parse_retry_after(response),
                )
                attempt += 1

    async def _wait_before_retry(
        self,
        attempt: int,
        *,
        reason: str,
        retry_after: float | None = None,
    ) -> None:
        if retry_after is None:
            retry_after = (2**attempt) * self._config.backoff_base_seconds
        delay = min(retry_after, self._config.backoff_max_seconds)
        logger.info(
            "http_backoff",
            extra={"backoff_seconds": delay, "attempt": attempt, "reason": reason},
        )
        await asyncio.sleep(delay)


def _parse_retry_after(response: httpx.Response) -> float | None:
    """Retry-After em segundos; None se ausente ou em formato de data."""
    raw = response.headers.get("retry-after")
    if raw is None:
        return None
    try:
        return max(0.0, float(raw))
    except ValueError:
        return None
