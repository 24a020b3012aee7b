"""Router principal do WhatsApp: agrega todos os endpoints do canal."""

from __future__ import annotations

from fastapi import APIRouter

from api.routes.whatsapp.otp import router as otp_router

router = APIRouter()

# Verificação de telefone (send-otp / verify-otp)
router.include_router(otp_router)
