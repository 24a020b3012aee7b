"""Endpoints de verificação de telefone via OTP.

Endpoints:
- POST /api/whatsapp/send-otp: emite código e envia por WhatsApp
- POST /api/whatsapp/verify-otp: verifica código submetido

Contrato de erro: `{"error": "<mensagem>"}` com status 400/429/500/503.
Todo desfecho é uma resposta explícita; nada é descartado em silêncio.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from api.routes.whatsapp.dependencies import get_send_otp_use_case, get_verify_otp_use_case
from app.constants.otp import SendOtpStatus, VerifyOtpStatus, wait_message
from app.observability import (
    CORRELATION_ID_HEADER,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from utils.errors import InfrastructureError, OtpStoreUnavailableError

if TYPE_CHECKING:
    from app.use_cases.whatsapp.send_otp import SendOtpResult, SendOtpUseCase
    from app.use_cases.whatsapp.verify_otp import VerifyOtpResult, VerifyOtpUseCase

logger = logging.getLogger(__name__)

router = APIRouter()

MSG_INVALID_BODY = "Invalid request body"
MSG_SERVICE_UNAVAILABLE = "Service temporarily unavailable. Please try again."
MSG_INTERNAL_ERROR = "Internal server error"

_SEND_STATUS_CODES: dict[SendOtpStatus, int] = {
    SendOtpStatus.SENT: status.HTTP_200_OK,
    SendOtpStatus.MISSING_PHONE: status.HTTP_400_BAD_REQUEST,
    SendOtpStatus.INVALID_PHONE: status.HTTP_400_BAD_REQUEST,
    SendOtpStatus.NOT_CONFIGURED: status.HTTP_500_INTERNAL_SERVER_ERROR,
    SendOtpStatus.ALREADY_PENDING: status.HTTP_429_TOO_MANY_REQUESTS,
    SendOtpStatus.DELIVERY_FAILED: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


class SendOtpRequest(BaseModel):
    """Body de /send-otp."""

    model_config = ConfigDict(populate_by_name=True)

    phone_number: str | None = Field(default=None, alias="phoneNumber")


class VerifyOtpRequest(BaseModel):
    """Body de /verify-otp."""

    model_config = ConfigDict(populate_by_name=True)

    phone_number: str | None = Field(default=None, alias="phoneNumber")
    otp: str | None = None


@router.post("/send-otp")
async def send_otp(
    request: Request,
    use_case: SendOtpUseCase = Depends(get_send_otp_use_case),
) -> JSONResponse:
    """Emite um código OTP e o envia por WhatsApp."""
    token = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
    try:
        body = await _parse_body(request, SendOtpRequest)
        if body is None:
            return _error(status.HTTP_400_BAD_REQUEST, MSG_INVALID_BODY)
        try:
            result = await use_case.execute(body.phone_number)
        except InfrastructureError as exc:
            logger.error(
                "send_otp_infra_failed",
                extra={"error_type": type(exc).__name__, "operation": _operation(exc)},
            )
            return _error(status.HTTP_503_SERVICE_UNAVAILABLE, MSG_SERVICE_UNAVAILABLE)
        except Exception:
            logger.exception("send_otp_failed")
            return _error(
                status.HTTP_500_INTERNAL_SERVER_ERROR,
                "Internal server error. Please try again.",
            )
        return _send_response(result)
    finally:
        reset_correlation_id(token)


@router.post("/verify-otp")
async def verify_otp(
    request: Request,
    use_case: VerifyOtpUseCase = Depends(get_verify_otp_use_case),
) -> JSONResponse:
    """Verifica o código OTP submetido para o telefone."""
    token = set_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
    try:
        body = await _parse_body(request, VerifyOtpRequest)
        if body is None:
            return _error(status.HTTP_400_BAD_REQUEST, MSG_INVALID_BODY)
        try:
            # Store síncrono (Redis pode bloquear): executa fora do event loop
            result = await asyncio.to_thread(use_case.execute, body.phone_number, body.otp)
        except InfrastructureError as exc:
            logger.error(
                "verify_otp_infra_failed",
                extra={"error_type": type(exc).__name__, "operation": _operation(exc)},
            )
            return _error(status.HTTP_503_SERVICE_UNAVAILABLE, MSG_SERVICE_UNAVAILABLE)
        except Exception:
            logger.exception("verify_otp_failed")
            return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, MSG_INTERNAL_ERROR)
        return _verify_response(result)
    finally:
        reset_correlation_id(token)


async def _parse_body(request: Request, model: type[BaseModel]) -> Any | None:
    """Lê e valida o JSON do body; None quando malformado."""
    try:
        payload = json.loads(await request.body() or b"{}")
        return model.model_validate(payload)
    except (json.JSONDecodeError, UnicodeDecodeError, PydanticValidationError) as exc:
        logger.warning("otp_request_body_invalid", extra={"error_type": type(exc).__name__})
        return None


def _operation(exc: InfrastructureError) -> str:
    return exc.operation if isinstance(exc, OtpStoreUnavailableError) else ""


def _send_response(result: SendOtpResult) -> JSONResponse:
    status_code = _SEND_STATUS_CODES[result.status]
    if result.success:
        content: dict[str, Any] = {"success": True, "message": result.message}
        if result.debug_code is not None:
            content["debug"] = {"otp": result.debug_code}
        return _json(status_code, content)

    content = {"error": result.message}
    if result.status == SendOtpStatus.ALREADY_PENDING:
        remaining = result.remaining_seconds or 0
        content["remainingTime"] = remaining
        content["message"] = wait_message(remaining)
    return _json(status_code, content)


def _verify_response(result: VerifyOtpResult) -> JSONResponse:
    if result.success:
        return _json(status.HTTP_200_OK, {"success": True, "message": result.message})

    content: dict[str, Any] = {"error": result.message}
    if result.status in (VerifyOtpStatus.INVALID_CODE, VerifyOtpStatus.TOO_MANY_ATTEMPTS):
        content["remainingAttempts"] = result.remaining_attempts or 0
    return _json(status.HTTP_400_BAD_REQUEST, content)


def _error(status_code: int, message: str) -> JSONResponse:
    return _json(status_code, {"error": message})


def _json(status_code: int, content: dict[str, Any]) -> JSONResponse:
    return JSONResponse(
        content=content,
        status_code=status_code,
        headers={CORRELATION_ID_HEADER: get_correlation_id()},
    )
