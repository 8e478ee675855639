"""
Application settings loaded from environment variables.
"""

from __future__ import annotations

import os
from typing import List, Optional

from pydantic import ValidationError, field_validator
from pydantic_settings import BaseSettings


class ConfigurationError(RuntimeError):
    """Raised when the process cannot start with the given environment."""


class Settings(BaseSettings):
    # ── Security Secrets ──────────────────────────────────────────────────
    secret_key: str                       # HMAC secret for auth tokens (required)
    token_expiry_seconds: int = 3600      # 1 hour
    bcrypt_rounds: int = 10

    # ── Server ───────────────────────────────────────────────────────────
    environment: str = "development"      # "development" | "production"
    host: Optional[str] = None            # overrides the environment default
    port: int = 3000
    debug: bool = False
    cors_origins: List[str] = ["*"]

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
    }

    @field_validator("secret_key")
    @classmethod
    def _secret_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def bind_host(self) -> str:
        """Loopback in development, all interfaces in production."""
        if self.host:
            return self.host
        return "0.0.0.0" if self.is_production else "127.0.0.1"


def load_settings(**overrides) -> Settings:
    """
    Build ``Settings`` from the environment, failing fast on a missing secret.

    The ``.env`` file is only consulted outside production.
    """
    env_file = None if os.getenv("ENVIRONMENT", "").lower() == "production" else ".env"
    try:
        return Settings(_env_file=env_file, **overrides)
    except ValidationError as exc:
        fields = [
            ".".join(str(part) for part in err["loc"]).upper() or "SETTINGS"
            for err in exc.errors()
        ]
        message = f"Invalid configuration ({', '.join(fields)})"
        if "SECRET_KEY" in fields:
            message += ": set SECRET_KEY in the environment before starting the server"
        raise ConfigurationError(message) from exc
