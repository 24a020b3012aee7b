"""Settings do canal WhatsApp (Graph API) usado para entregar os códigos."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache

GRAPH_API_VERSION: str = "v18.0"
GRAPH_API_BASE_URL: str = "https://graph.facebook.com"


@dataclass(frozen=True)
class WhatsAppSettings:
    """Credenciais e limites de chamada da Graph API.

    Sem `access_token` e `phone_number_id` o serviço sobe, mas o envio
    de OTP responde "not configured".

    Attributes:
        access_token: Bearer token do app Meta
        phone_number_id: Número remetente no Meta Business
        api_version: Versão da Graph API (ex: v18.0)
        api_base_url: Host da Graph API
        request_timeout_seconds: Timeout por requisição
        max_retries: Retentativas em 429/5xx/conexão
        brand_name: Marca exibida na mensagem de verificação
    """

    access_token: str = ""
    phone_number_id: str = ""
    api_version: str = GRAPH_API_VERSION
    api_base_url: str = GRAPH_API_BASE_URL
    request_timeout_seconds: float = 30.0
    max_retries: int = 3
    brand_name: str = "Sellio"

    @property
    def is_configured(self) -> bool:
        """True quando as credenciais mínimas de envio estão presentes."""
        return bool(self.access_token and self.phone_number_id)

    def get_messages_endpoint(self) -> str:
        """URL `{base}/{version}/{phone_number_id}/messages`.

        Raises:
            ValueError: Se phone_number_id não configurado.
        """
        if not self.phone_number_id:
            raise ValueError("phone_number_id é obrigatório")
        base = self.api_base_url.rstrip("/")
        return f"{base}/{self.api_version}/{self.phone_number_id}/messages"

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.phone_number_id:
            errors.append("WHATSAPP_PHONE_NUMBER_ID não configurado")
        if not self.access_token:
            errors.append("WHATSAPP_ACCESS_TOKEN não configurado")
        if self.request_timeout_seconds <= 0:
            errors.append("WHATSAPP_REQUEST_TIMEOUT_SECONDS deve ser > 0")
        if self.max_retries < 0:
            errors.append("WHATSAPP_MAX_RETRIES deve ser >= 0")
        if not self.brand_name.strip():
            errors.append("WHATSAPP_BRAND_NAME não pode ser vazio")
        return errors


def _load_from_env() -> WhatsAppSettings:
    """Carrega WhatsAppSettings a partir de variáveis de ambiente."""
    return WhatsAppSettings(
        access_token=os.getenv("WHATSAPP_ACCESS_TOKEN", "").strip(),
        phone_number_id=os.getenv("WHATSAPP_PHONE_NUMBER_ID", "").strip(),
        api_version=os.getenv("WHATSAPP_API_VERSION", GRAPH_API_VERSION),
        api_base_url=os.getenv("WHATSAPP_API_BASE_URL", GRAPH_API_BASE_URL),
        request_timeout_seconds=float(os.getenv("WHATSAPP_REQUEST_TIMEOUT_SECONDS", "30")),
        max_retries=int(os.getenv("WHATSAPP_MAX_RETRIES", "3")),
        brand_name=os.getenv("WHATSAPP_BRAND_NAME", "Sellio"),
    )


@lru_cache(maxsize=1)
def get_whatsapp_settings() -> WhatsAppSettings:
    """Retorna instância cacheada de WhatsAppSettings."""
    return _load_from_env()
