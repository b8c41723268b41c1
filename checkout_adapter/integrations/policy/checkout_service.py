"""
Checkout Service

Implements the two processor-facing operations of the adapter:
- create_session: validate a payment request and open a hosted checkout session
- verify_session: look a session up and relay its status, amount and metadata

The service owns no state besides the processor client and the frontend base
URL it was constructed with. Every call is one round trip to the processor;
failures are surfaced as ProcessorError and never retried.
"""

import logging
from typing import Any, Dict, Mapping, Optional

from checkout_adapter.integrations.contracts.interfaces import (
    CheckoutProcessor,
    CheckoutSession,
    CheckoutSessionParams,
    CheckoutSessionRequest,
    LineItem,
    SessionVerification,
)
from checkout_adapter.integrations.contracts.payments import (
    CheckoutValidationError,
    build_checkout_request,
    from_minor_units,
    to_minor_units,
)
from checkout_adapter.integrations.policy.response_wrappers import ProcessorError

logger = logging.getLogger(__name__)

SUCCESS_PATH = "/payment-success"
CANCEL_PATH = "/payment-cancel"
SESSION_ID_PLACEHOLDER = "{CHECKOUT_SESSION_ID}"
SUBSCRIPTION_TYPE = "monthly"


class CheckoutService:
    def __init__(self, processor: CheckoutProcessor, frontend_url: Optional[str] = None):
        self.processor = processor
        self.frontend_url = (frontend_url or "").rstrip("/") or None

    def _redirect_base(self, origin: Optional[str], fallback_base: Optional[str]) -> str:
        for candidate in (self.frontend_url, origin, fallback_base):
            if candidate and candidate.strip() and candidate.strip() != "null":
                return candidate.strip().rstrip("/")
        return ""

    def build_session_params(
        self,
        request: CheckoutSessionRequest,
        origin: Optional[str] = None,
        fallback_base: Optional[str] = None,
    ) -> CheckoutSessionParams:
        base = self._redirect_base(origin, fallback_base)
        success_url = request.success_url or f"{base}{SUCCESS_PATH}?session_id={SESSION_ID_PLACEHOLDER}"
        cancel_url = request.cancel_url or f"{base}{CANCEL_PATH}"

        line_item = LineItem(
            name=request.plan_name,
            description=f"30-day {request.plan_name} subscription",
            unit_amount=to_minor_units(request.amount),
            currency=request.currency,
        )
        return CheckoutSessionParams(
            line_items=[line_item],
            success_url=success_url,
            cancel_url=cancel_url,
            metadata={
                "userId": request.user_id,
                "planId": request.plan_id,
                "planName": request.plan_name,
                "subscriptionType": SUBSCRIPTION_TYPE,
            },
        )

    async def create_session(
        self,
        payload: Mapping[str, Any],
        origin: Optional[str] = None,
        fallback_base: Optional[str] = None,
    ) -> CheckoutSession:
        """
        Validate ``payload`` and create a one-time payment checkout session.

        Args:
            payload: camelCase client request body
            origin: the request's Origin header, used when no frontend URL is configured
            fallback_base: this service's own base URL, used when neither is available

        Raises:
            CheckoutValidationError: request is missing fields or has bad values
            ProcessorError: the processor rejected the request or could not be reached
        """
        request = build_checkout_request(payload)
        params = self.build_session_params(request, origin=origin, fallback_base=fallback_base)
        unit_amount = params.line_items[0].unit_amount
        logger.info(
            "Creating checkout session via %s: plan=%s user=%s amount=%s currency=%s",
            self.processor.name,
            request.plan_name,
            request.user_id,
            unit_amount,
            request.currency,
        )

        try:
            session = await self.processor.create_checkout_session(params)
        except ProcessorError as e:
            logger.error("Checkout session creation failed: %s (%s)", e.message, e.error_type)
            raise

        logger.info("Checkout session created: id=%s", session.session_id)
        return session

    async def verify_session(self, session_id: Optional[str]) -> SessionVerification:
        """Fetch a session and relay its payment status, amount and metadata."""
        if session_id is None or not session_id.strip():
            raise CheckoutValidationError("Missing sessionId")

        session_id = session_id.strip()
        logger.info("Verifying checkout session %s", session_id)
        try:
            session = await self.processor.retrieve_checkout_session(session_id)
        except ProcessorError as e:
            logger.error("Checkout session lookup failed for %s: %s", session_id, e.message)
            raise

        verification = SessionVerification(
            status=session.payment_status,
            amount=from_minor_units(session.amount_total),
            metadata=dict(session.metadata),
        )
        logger.info("Session %s retrieved: status=%s amount=%s", session_id, verification.status, verification.amount)
        return verification


def verification_to_dict(verification: SessionVerification) -> Dict[str, Any]:
    return {
        "status": verification.status,
        "amount": verification.amount,
        "metadata": verification.metadata,
        "success": True,
    }
