"""Entrypoint da aplicação Sellio Connect.

Inicializa o bootstrap e expõe a aplicação ASGI (FastAPI).

Uso (produção):
    uvicorn app.app:app --host 0.0.0.0 --port 8080

Uso (desenvolvimento):
    uvicorn app.app:app --reload --host 0.0.0.0 --port 8080
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import create_api_router
from app.bootstrap import SERVICE_NAME, initialize_app, validate_runtime_settings
from app.bootstrap.clients import close_redis_client, create_redis_client
from app.bootstrap.dependencies import create_otp_store
from app.bootstrap.whatsapp_factory import create_otp_sender
from app.services.otp_sweeper import OtpSweeper
from config.logging import get_logger
from config.settings import get_otp_settings

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

# Inicializar logging ANTES de qualquer import que use logger
initialize_app()

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Gerencia ciclo de vida da aplicação.

    Startup:
    - Valida configurações
    - Cria store OTP e sender (donos: app.state)
    - Inicia sweep periódico

    Shutdown:
    - Cancela o sweep
    - Fecha conexão Redis
    """
    logger.info("app_starting", extra={"service": SERVICE_NAME})
    validate_runtime_settings()

    otp_settings = get_otp_settings()
    app.state.otp_store_backend = otp_settings.store_backend
    app.state.redis_client = (
        create_redis_client() if otp_settings.store_backend == "redis" else None
    )
    app.state.otp_store = create_otp_store()
    app.state.otp_sender = create_otp_sender()

    sweeper = OtpSweeper(app.state.otp_store, otp_settings.sweep_interval_seconds)
    sweeper.start()
    app.state.otp_sweeper = sweeper

    try:
        yield
    finally:
        logger.info("app_shutting_down", extra={"service": SERVICE_NAME})
        await sweeper.stop()
        redis_client = app.state.redis_client
        if redis_client is not None:
            close_redis_client(redis_client)


def create_app() -> FastAPI:
    """Cria e configura a aplicação FastAPI.

    Returns:
        Aplicação FastAPI configurada.
    """
    fastapi_app = FastAPI(
        title="Sellio Connect",
        description="Verificação de telefone via WhatsApp (OTP)",
        version="1.0.0",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )

    fastapi_app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    fastapi_app.include_router(create_api_router())

    logger.info("app_configured", extra={"service": SERVICE_NAME})

    return fastapi_app


# Aplicação ASGI exposta para uvicorn
app = create_app()


def main() -> None:
    """Entrypoint para execução direta (desenvolvimento)."""
    import uvicorn

    logger.info("Starting Sellio Connect in development mode")
    uvicorn.run(
        "app.app:app",
        host="0.0.0.0",
        port=8080,
        reload=True,
    )


if __name__ == "__main__":
    main()
