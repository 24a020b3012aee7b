"""Adapters concretos para WhatsApp (wiring em app/bootstrap).

Este módulo é o único autorizado a acoplar app <-> api.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING

from api.connectors.whatsapp.http_base import HttpError
from api.connectors.whatsapp.http_client import WhatsAppHttpClient, create_whatsapp_http_client
from api.connectors.whatsapp.meta_errors import user_message_for_status
from api.payload_builders.whatsapp.text import TextPayloadBuilder, build_verification_text
from app.protocols.otp_sender import OtpDeliveryResult, OtpSenderProtocol
from config.logging import mask_phone_number

if TYPE_CHECKING:
    from config.settings import WhatsAppSettings

logger = logging.getLogger(__name__)


class GraphApiOtpSender(OtpSenderProtocol):
    """Entrega códigos OTP como mensagem de texto via Graph API.

    Falhas HTTP/Meta viram OtpDeliveryResult(success=False) com
    mensagem amigável; não propaga exceção de envio.
    """

    def __init__(
        self,
        settings: WhatsAppSettings,
        http_client: WhatsAppHttpClient | None = None,
    ) -> None:
        self._settings = settings
        self._http_client = http_client or create_whatsapp_http_client(settings)
        self._builder = TextPayloadBuilder()

    async def send_code(
        self,
        phone_number: str,
        code: str,
        ttl_minutes: float,
    ) -> OtpDeliveryResult:
        body = build_verification_text(code, ttl_minutes, self._settings.brand_name)
        payload = self._builder.build(phone_number, body)
        try:
            endpoint = self._settings.get_messages_endpoint()
            response = await self._http_client.send_message(
                endpoint=endpoint,
                access_token=self._settings.access_token,
                payload=payload,
            )
        except HttpError as exc:
            logger.warning(
                "otp_delivery_failed",
                extra={
                    "phone": mask_phone_number(phone_number),
                    "status_code": exc.status_code,
                    "error": str(exc),
                },
            )
            return OtpDeliveryResult(
                success=False,
                error_message=user_message_for_status(exc.status_code),
            )
        except ValueError as exc:
            logger.warning(
                "otp_delivery_misconfigured",
                extra={"phone": mask_phone_number(phone_number), "error": str(exc)},
            )
            return OtpDeliveryResult(success=False, error_message=str(exc))

        messages = response.get("messages") or [{}]
        message_id = messages[0].get("id") or f"msg_{int(time.time() * 1000)}"
        logger.info(
            "otp_delivered",
            extra={"phone": mask_phone_number(phone_number), "message_id": message_id},
        )
        return OtpDeliveryResult(success=True, message_id=message_id)
