from fastapi import Request

from checkout_adapter.integrations.policy.checkout_service import CheckoutService
from checkout_adapter.utils.config_loader import LandingConfig
from checkout_adapter.utils.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_checkout_service(request: Request) -> CheckoutService:
    return request.app.state.checkout_service


def get_landing_config(request: Request) -> LandingConfig:
    return request.app.state.landing_config
