"""
FastAPI application factory.

Everything the handlers need (settings, processor client, landing config) is
built here once and stored on ``app.state``; nothing lives in module globals.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from checkout_adapter.api.endpoints.checkout import router as checkout_router
from checkout_adapter.api.endpoints.health import AVAILABLE_ENDPOINTS
from checkout_adapter.api.endpoints.health import router as health_router
from checkout_adapter.api.endpoints.landing import router as landing_router
from checkout_adapter.error_handler import ErrorHandler
from checkout_adapter.integrations.clients.mocks.payments import MockCheckoutClient
from checkout_adapter.integrations.clients.real_http.stripe_checkout import StripeCheckoutClient
from checkout_adapter.integrations.contracts.interfaces import CheckoutProcessor
from checkout_adapter.integrations.contracts.payments import (
    REQUIRED_FIELDS,
    CheckoutValidationError,
    received_fields,
)
from checkout_adapter.integrations.policy.checkout_service import CheckoutService
from checkout_adapter.integrations.policy.response_wrappers import ProcessorError
from checkout_adapter.utils.config_loader import LandingConfig, load_landing_config
from checkout_adapter.utils.settings import Settings

logger = logging.getLogger(__name__)


def build_processor(settings: Settings) -> CheckoutProcessor:
    if settings.integrations_mode == "mock":
        logger.warning("INTEGRATIONS_MODE=mock: checkout sessions are simulated in memory")
        return MockCheckoutClient()
    return StripeCheckoutClient(api_key=settings.stripe_secret_key)


def _route_not_found(request: Request) -> JSONResponse:
    logger.info("404 - Route not found: %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=404,
        content={
            "error": "Route not found",
            "path": request.url.path,
            "method": request.method,
            "availableEndpoints": AVAILABLE_ENDPOINTS,
        },
    )


def _register_exception_handlers(app: FastAPI, error_handler: ErrorHandler) -> None:
    @app.exception_handler(CheckoutValidationError)
    async def validation_error_handler(request: Request, exc: CheckoutValidationError):
        logger.info("Validation failed for %s: %s", request.url.path, exc.message)
        return JSONResponse(status_code=400, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def request_validation_error_handler(request: Request, exc: RequestValidationError):
        body = exc.body if isinstance(exc.body, dict) else {}
        logger.info("Malformed request body for %s: %s", request.url.path, exc.errors())
        content: Dict[str, Any] = {
            "error": "Invalid request body",
            "required": list(REQUIRED_FIELDS),
            "received": received_fields(body),
            "success": False,
        }
        return JSONResponse(status_code=400, content=content)

    @app.exception_handler(ProcessorError)
    async def processor_error_handler(request: Request, exc: ProcessorError):
        return JSONResponse(status_code=500, content=exc.to_dict())

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        # Wrong method on a known path is reported like an unknown path.
        if exc.status_code in (404, 405):
            return _route_not_found(request)
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail, "success": False},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        body = error_handler.handle_exception(exc, context={"method": request.method, "path": request.url.path})
        return JSONResponse(status_code=500, content=body)


def create_app(
    settings: Settings,
    processor: Optional[CheckoutProcessor] = None,
    landing_config: Optional[LandingConfig] = None,
) -> FastAPI:
    """
    Build the checkout adapter application.

    Args:
        settings: validated environment settings
        processor: checkout processor client; chosen from settings when omitted
        landing_config: landing page config; loaded from YAML when omitted
    """
    app = FastAPI(
        title="Checkout Adapter API",
        description="Creates and verifies hosted checkout sessions without exposing processor credentials",
        version="1.0.0",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization", "Accept"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        response = await call_next(request)
        logger.debug("%s %s -> %s", request.method, request.url.path, response.status_code)
        return response

    processor = processor or build_processor(settings)
    app.state.settings = settings
    app.state.checkout_service = CheckoutService(processor, frontend_url=settings.frontend_url)
    app.state.landing_config = landing_config or load_landing_config(
        settings.landing_config_path,
        app_url_scheme=settings.app_url_scheme,
    )

    app.include_router(health_router)
    app.include_router(checkout_router)
    app.include_router(landing_router)

    _register_exception_handlers(app, ErrorHandler(expose_stack_traces=settings.expose_stack_traces))
    return app
