"""Settings base do Sellio Connect (ambiente, logging, Redis)."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Literal

Environment = Literal["development", "test", "staging", "production"]

_ENVIRONMENT_ALIASES: dict[str, Environment] = {
    "production": "production",
    "prod": "production",
    "staging": "staging",
    "stage": "staging",
    "test": "test",
    "development": "development",
    "dev": "development",
}

_LOG_LEVELS = frozenset({"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"})


@dataclass(frozen=True)
class BaseSettings:
    """Configurações comuns do serviço.

    Attributes:
        environment: development|test|staging|production
        service_name: Nome do serviço em logs
        debug: Modo debug ativo
        log_level: Nível do root logger
        redis_url: URL do Redis (obrigatória com OTP_STORE_BACKEND=redis)
    """

    environment: Environment = "development"
    service_name: str = "sellio-connect"
    debug: bool = False
    log_level: str = "INFO"
    redis_url: str = ""

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def is_development(self) -> bool:
        """development ou test: ambientes onde atalhos locais são aceitos."""
        return self.environment in ("development", "test")

    def validate(self) -> list[str]:
        """Lista de erros (vazia = OK)."""
        errors: list[str] = []

        if self.environment not in set(_ENVIRONMENT_ALIASES.values()):
            errors.append(f"ENVIRONMENT inválido: {self.environment}")

        if not self.service_name:
            errors.append("SERVICE_NAME não pode ser vazio")

        if self.log_level.upper() not in _LOG_LEVELS:
            errors.append(f"LOG_LEVEL inválido: {self.log_level}")

        if self.debug and self.is_production:
            errors.append("DEBUG não pode estar ativo em production")

        return errors


def _parse_environment(raw: str) -> Environment:
    """Aceita aliases (prod, stage, dev); desconhecido vira development."""
    return _ENVIRONMENT_ALIASES.get(raw.strip().lower(), "development")


def _env_flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("true", "1", "yes")


def _load_base_from_env() -> BaseSettings:
    """Carrega BaseSettings de variáveis de ambiente."""
    return BaseSettings(
        environment=_parse_environment(os.getenv("ENVIRONMENT", "development")),
        service_name=os.getenv("SERVICE_NAME", "sellio-connect"),
        debug=_env_flag("DEBUG"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        redis_url=os.getenv("REDIS_URL", ""),
    )


@lru_cache(maxsize=1)
def get_base_settings() -> BaseSettings:
    """Retorna instância cacheada de BaseSettings."""
    return _load_base_from_env()
