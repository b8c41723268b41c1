"""
Integrations layer.
This package contains all code used to communicate with the payment processor:
- contracts: request/response shapes and validation helpers
- clients/real_http: the Stripe-backed processor client
- clients/mocks: an in-memory processor for development and tests
- policy: the checkout service and processor-error normalization

Key rule:
- API routes MUST NOT call the processor SDK directly.
- Routes call CheckoutService, which talks to a CheckoutProcessor.

Switching implementations:
- The selection of mock vs real clients happens in ONE place (checkout_adapter/api/app.py).
"""

from .contracts.interfaces import (
    CheckoutMode,
    CheckoutProcessor,
    CheckoutSession,
    CheckoutSessionParams,
    CheckoutSessionRequest,
    LineItem,
    PaymentStatus,
    SessionVerification,
)
from .contracts.payments import (
    CheckoutValidationError,
    build_checkout_request,
    from_minor_units,
    to_minor_units,
)
from .policy.response_wrappers import ProcessorError

__all__ = [
    # interfaces
    "CheckoutMode", "CheckoutProcessor", "CheckoutSession", "CheckoutSessionParams",
    "CheckoutSessionRequest", "LineItem", "PaymentStatus", "SessionVerification",
    # payments
    "CheckoutValidationError", "build_checkout_request", "from_minor_units", "to_minor_units",
    # policy
    "ProcessorError",
]
