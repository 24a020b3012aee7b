"""Registro de métricas via structured logging.

As métricas são registradas como logs estruturados e agregadas
posteriormente pelo backend de logs.

Métricas suportadas:
- Latência: tempos de execução por componente/operação
- Desfecho OTP: counter de resultados de envio e verificação

Uso:
    from app.observability import record_latency, record_otp_outcome

    record_latency("send_otp", "deliver", 132.4)
    record_otp_outcome("verify", "invalid_code")
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def record_latency(
    component: str,
    operation: str,
    latency_ms: float,
    correlation_id: str | None = None,
) -> None:
    """Registra latência de operação.

    Args:
        component: Nome do componente (ex: "send_otp")
        operation: Nome da operação (ex: "deliver")
        latency_ms: Latência em milissegundos
        correlation_id: ID de correlação (o filter de logging preenche se None)
    """
    extra: dict[str, object] = {
        "metric_type": "latency",
        "component": component,
        "operation": operation,
        "latency_ms": round(latency_ms, 2),
    }
    if correlation_id:
        extra["correlation_id"] = correlation_id
    logger.info("metric_latency", extra=extra)


def record_otp_outcome(flow: str, outcome: str) -> None:
    """Registra desfecho de um fluxo OTP.

    Args:
        flow: "send" ou "verify"
        outcome: Status terminal (ex: "verified", "too_many_attempts")
    """
    logger.info(
        "metric_otp_outcome",
        extra={
            "metric_type": "counter",
            "component": "otp",
            "flow": flow,
            "outcome": outcome,
        },
    )
