"""Filters de logging para injeção de contexto e proteção de PII.

Campos injetados:
- correlation_id: ID de rastreamento da requisição
- service: Nome do serviço (ex: sellio_connect)

Campos sanitizados:
- phone: telefone passado via `extra` sem máscara
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from config.logging.masking import MASK_PREFIX, mask_phone_number

if TYPE_CHECKING:
    from collections.abc import Callable


class CorrelationIdFilter(logging.Filter):
    """Injeta correlation_id e service em cada record de log.

    Também mascara o campo `phone` quando chega em claro, para que um
    telefone completo nunca chegue ao backend de logs.

    Args:
        service_name: Nome do serviço para identificação nos logs.
        correlation_id_getter: Função que retorna o correlation_id atual.
            Se não fornecida, usa string vazia como fallback.
    """

    def __init__(
        self,
        service_name: str,
        correlation_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_correlation_id = correlation_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        """Enriquece o record; nunca o descarta.

        Se correlation_id já foi passado via `extra`, preserva o valor.
        """
        existing = getattr(record, "correlation_id", None)
        record.correlation_id = existing if existing else self._get_correlation_id()
        record.service = self._service_name

        phone = getattr(record, "phone", None)
        if isinstance(phone, str) and phone and not phone.startswith(MASK_PREFIX):
            record.phone = mask_phone_number(phone)
        return True
