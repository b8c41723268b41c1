"""Pytest fixtures for the checkout adapter tests."""

import pytest
from fastapi.testclient import TestClient

from checkout_adapter.api.app import create_app
from checkout_adapter.integrations.clients.mocks.payments import MockCheckoutClient
from checkout_adapter.utils.config_loader import LandingConfig
from checkout_adapter.utils.settings import Settings


@pytest.fixture
def settings():
    return Settings(stripe_secret_key="sk_test_dummy", integrations_mode="mock", environment="production")


@pytest.fixture
def landing_config():
    return LandingConfig(app_url_scheme="checkoutapp", redirect_delay_seconds=2)


@pytest.fixture
def mock_processor():
    """In-memory checkout processor shared between the app and the test."""
    return MockCheckoutClient()


@pytest.fixture
def app(settings, mock_processor, landing_config):
    return create_app(settings, processor=mock_processor, landing_config=landing_config)


@pytest.fixture
def client(app):
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def valid_payload():
    return {"amount": 19.99, "userId": "u1", "planId": "p1", "planName": "Pro"}
