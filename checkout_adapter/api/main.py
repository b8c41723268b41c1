"""
Checkout adapter - main entry point

    checkout-adapter
    uvicorn checkout_adapter.api.main:build_app --factory
"""

from dotenv import load_dotenv

load_dotenv()

import logging
import sys

import uvicorn
from fastapi import FastAPI

from checkout_adapter.api.app import create_app
from checkout_adapter.utils.settings import ConfigurationError, Settings

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def load_settings_or_exit() -> Settings:
    """Read settings from the environment; exit with status 1 if they are unusable."""
    try:
        return Settings.from_env()
    except ConfigurationError as e:
        logger.error("Startup aborted: %s", e)
        sys.exit(1)


def log_startup_banner(settings: Settings) -> None:
    logger.info("Checkout adapter starting on %s:%s", settings.host, settings.port)
    logger.info("Health check: http://localhost:%s/health", settings.port)
    logger.info("- Stripe key: %s", "configured" if settings.stripe_configured else "missing")
    logger.info("- Integrations mode: %s", settings.integrations_mode)
    logger.info("- Frontend URL: %s", settings.frontend_url or "not set (will use request origin)")
    logger.info("- Environment: %s", settings.environment_name)


def _startup_settings() -> Settings:
    configure_logging()
    settings = load_settings_or_exit()
    logging.getLogger().setLevel(settings.log_level)
    log_startup_banner(settings)
    return settings


def build_app() -> FastAPI:
    return create_app(_startup_settings())


def run() -> None:
    settings = _startup_settings()
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    run()
