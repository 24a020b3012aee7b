"""Cliente HTTP especializado para WhatsApp/Meta API.

Estende HttpClient genérico com comportamentos específicos de WhatsApp:
- Authorization Bearer validado antes do uso
- Tratamento de erros Meta (error.type, error.code)
- Logging estruturado sem PII (tokens, números)
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from api.connectors.whatsapp.http_base import HttpClient, HttpClientConfig, HttpError
from api.connectors.whatsapp.meta_errors import parse_meta_error
from api.connectors.whatsapp.meta_logging import log_meta_error, log_success

if TYPE_CHECKING:
    import httpx

    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)


class WhatsAppHttpClient(HttpClient):
    """Cliente HTTP para Meta/WhatsApp API.

    Nunca retorna resposta de erro: status >= 400 ou corpo com `error`
    viram HttpError com o status HTTP original.
    """

    async def send_message(
        self,
        endpoint: str,
        access_token: str,
        payload: dict[str, Any],
    ) -> dict[str, Any]:
        """Envia mensagem via WhatsApp API.

        Args:
            endpoint: URL do endpoint (ex: .../messages)
            access_token: Bearer token para autenticação
            payload: Payload JSON da mensagem

        Returns:
            Response JSON da Meta

        Raises:
            ValueError: Se access_token está vazio
            HttpError: Se erro HTTP ou Meta
        """
        if not access_token or not access_token.strip():
            logger.error("whatsapp_access_token_missing", extra={"endpoint": endpoint})
            raise ValueError(
                "access_token é obrigatório para envio de mensagens. "
                "Verifique se WHATSAPP_ACCESS_TOKEN está configurado."
            )

        headers = {
            "Content-Type": "application/json",
            "Authorization": f"Bearer {access_token}",
        }
        response = await self.post(endpoint, json=payload, headers=headers)
        return self._process_response(response, endpoint)

    def _process_response(self, response: httpx.Response, endpoint: str) -> dict[str, Any]:
        try:
            response_data = response.json()
        except json.JSONDecodeError as exc:
            logger.error(
                "whatsapp_response_invalid_json",
                extra={"endpoint": endpoint, "status_code": response.status_code},
            )
            raise HttpError(
                "Response JSON inválido",
                status_code=response.status_code,
            ) from exc

        meta_error = parse_meta_error(response_data)
        if meta_error is not None:
            log_meta_error(meta_error, response.status_code, endpoint)
            raise HttpError(
                f"Meta API error: {meta_error.error_type} ({meta_error.error_code})",
                status_code=response.status_code,
                is_retryable=not meta_error.is_permanent,
            )

        if response.status_code >= 400:
            raise HttpError("http_error_status", status_code=response.status_code)

        log_success(endpoint, response.status_code)
        return response_data


def create_whatsapp_http_client(
    settings: WhatsAppSettings | None = None,
) -> WhatsAppHttpClient:
    """Factory para criar cliente WhatsApp com config das settings.

    Args:
        settings: WhatsAppSettings opcional. Se None, carrega do ambiente.
    """
    # Import local para evitar dependência circular
    from config.settings import get_whatsapp_settings

    whatsapp = settings or get_whatsapp_settings()
    config = HttpClientConfig(
        timeout_seconds=whatsapp.request_timeout_seconds,
        max_retries=whatsapp.max_retries,
    )
    return WhatsAppHttpClient(config=config)
