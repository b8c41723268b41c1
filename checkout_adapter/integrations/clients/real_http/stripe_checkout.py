"""
Stripe Checkout client.

Creates and retrieves hosted Checkout Sessions with the server-held secret
key. Uses the async half of the Stripe SDK over its httpx transport so the
FastAPI event loop is never blocked by a processor round trip.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

import stripe

from checkout_adapter.integrations.contracts.interfaces import (
    CheckoutProcessor,
    CheckoutSession,
    CheckoutSessionParams,
)
from checkout_adapter.integrations.policy.response_wrappers import (
    normalize_checkout_session,
    processor_error_from_exception,
)

logger = logging.getLogger(__name__)


class StripeCheckoutClient(CheckoutProcessor):
    def __init__(
        self,
        api_key: str,
        client: Optional[Any] = None,
    ) -> None:
        if not api_key and client is None:
            raise ValueError("Stripe secret key is not configured.")
        self._client = client or stripe.StripeClient(
            api_key,
            http_client=stripe.HTTPXClient(),
            max_network_retries=0,
        )

    @property
    def name(self) -> str:
        return "stripe"

    async def create_checkout_session(self, params: CheckoutSessionParams) -> CheckoutSession:
        try:
            session = await self._client.checkout.sessions.create_async(params=params.to_params())
        except stripe.StripeError as e:
            logger.error("Stripe checkout session create failed: %s", e)
            raise processor_error_from_exception(e) from e

        return normalize_checkout_session(session)

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        try:
            session = await self._client.checkout.sessions.retrieve_async(session_id)
        except stripe.StripeError as e:
            logger.error("Stripe checkout session retrieve failed for %s: %s", session_id, e)
            raise processor_error_from_exception(e) from e

        return normalize_checkout_session(session)
