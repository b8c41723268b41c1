"""
Environment settings for the checkout adapter.

Settings are read once at process start, validated, and passed explicitly to
the app factory. A missing processor secret is a configuration error; the
entry point turns it into an immediate non-zero exit.
"""

from __future__ import annotations

import logging
import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)

NON_PRODUCTION_ENVIRONMENTS = {"development", "dev", "local", "test"}
LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ConfigurationError(RuntimeError):
    """Raised when required environment configuration is missing or invalid."""


class Settings(BaseModel):
    model_config = ConfigDict(frozen=True)

    stripe_secret_key: str = Field(min_length=1, repr=False)
    port: int = Field(default=3000, ge=1, le=65535)
    host: str = "0.0.0.0"
    frontend_url: Optional[str] = None
    environment: Optional[str] = None
    app_url_scheme: Optional[str] = None
    landing_config_path: Optional[str] = None
    integrations_mode: Literal["real", "mock"] = "real"
    log_level: str = "INFO"

    @field_validator("frontend_url", "environment", "app_url_scheme", "landing_config_path", mode="before")
    @classmethod
    def _blank_to_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value.strip() if isinstance(value, str) else value

    @field_validator("integrations_mode", mode="before")
    @classmethod
    def _normalize_mode(cls, value):
        mode = (value or "real").strip().lower()
        if mode in {"live", "real"}:
            return "real"
        if mode in {"mock", "test"}:
            return "mock"
        return mode

    @field_validator("log_level", mode="before")
    @classmethod
    def _valid_log_level(cls, value):
        level = (value or "INFO").strip().upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"Unknown log level {value!r}")
        return level

    @property
    def environment_name(self) -> str:
        return self.environment or "development"

    @property
    def expose_stack_traces(self) -> bool:
        # Only when an environment was explicitly configured as non-production.
        return (self.environment or "").lower() in NON_PRODUCTION_ENVIRONMENTS

    @property
    def stripe_configured(self) -> bool:
        return bool(self.stripe_secret_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build Settings from environment variables.

        Raises:
            ConfigurationError: if the processor secret is missing or a value is invalid
        """
        env = os.environ if environ is None else environ

        secret = (env.get("STRIPE_SECRET_KEY") or env.get("PRIVATE_KEY") or "").strip()
        if not secret:
            raise ConfigurationError("STRIPE_SECRET_KEY environment variable is not set")

        values = {
            "stripe_secret_key": secret,
            "port": env.get("PORT") or 3000,
            "host": env.get("HOST") or "0.0.0.0",
            "frontend_url": env.get("FRONTEND_URL"),
            "environment": env.get("APP_ENV") or env.get("ENVIRONMENT"),
            "app_url_scheme": env.get("APP_URL_SCHEME"),
            "landing_config_path": env.get("LANDING_CONFIG_PATH"),
            "integrations_mode": env.get("INTEGRATIONS_MODE"),
            "log_level": env.get("LOG_LEVEL"),
        }
        try:
            settings = cls(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

        logger.debug("Settings loaded: mode=%s environment=%s", settings.integrations_mode, settings.environment_name)
        return settings
