"""
Checkout processor: MOCK client.

⚠️  This is a mock implementation for development and testing.
    It makes no network calls and keeps sessions in memory (reset on restart).
    Enable it with INTEGRATIONS_MODE=mock.

Behavior:
- create_checkout_session(...) returns a ``cs_test_`` id, a fake hosted URL
  and an ``unpaid`` payment status
- retrieve_checkout_session(...) returns the stored session, or an
  invalid_request_error for unknown ids, like the real processor
- complete_session(...) lets tests and local tooling move a session to ``paid``
"""

import logging
import uuid
from dataclasses import replace
from typing import Dict, List, Optional

from checkout_adapter.integrations.contracts.interfaces import (
    CheckoutProcessor,
    CheckoutSession,
    CheckoutSessionParams,
    PaymentStatus,
)
from checkout_adapter.integrations.policy.response_wrappers import ProcessorError

logger = logging.getLogger(__name__)

MOCK_CHECKOUT_HOST = "https://checkout.mock.local/c/pay"


class MockCheckoutClient(CheckoutProcessor):
    """
    In-memory checkout processor.

    Parameters
    ----------
    fail_with : ProcessorError, optional
        When set, every call raises this error. Useful for exercising the
        processor-failure path without a network.
    """

    def __init__(self, fail_with: Optional[ProcessorError] = None):
        self._fail_with = fail_with
        self._sessions: Dict[str, CheckoutSession] = {}
        self.created_params: List[CheckoutSessionParams] = []
        logger.info("[CHECKOUT MOCK] Client initialised")

    @property
    def name(self) -> str:
        return "mock"

    def _new_session_id(self) -> str:
        return f"cs_test_{uuid.uuid4().hex}"

    async def create_checkout_session(self, params: CheckoutSessionParams) -> CheckoutSession:
        if self._fail_with is not None:
            raise self._fail_with

        self.created_params.append(params)
        session_id = self._new_session_id()
        amount_total = sum(item.unit_amount * item.quantity for item in params.line_items)
        currency = params.line_items[0].currency if params.line_items else None

        session = CheckoutSession(
            session_id=session_id,
            url=f"{MOCK_CHECKOUT_HOST}/{session_id}",
            payment_status=PaymentStatus.UNPAID.value,
            amount_total=amount_total,
            currency=currency,
            metadata=dict(params.metadata),
        )
        self._sessions[session_id] = session
        logger.info("[CHECKOUT MOCK] Session %s created amount=%s %s", session_id, amount_total, currency)
        return session

    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        if self._fail_with is not None:
            raise self._fail_with

        session = self._sessions.get(session_id)
        if session is None:
            raise ProcessorError(
                f"No such checkout.session: '{session_id}'",
                error_type="invalid_request_error",
                status_code=404,
            )
        return replace(session, metadata=dict(session.metadata))

    def complete_session(self, session_id: str) -> CheckoutSession:
        """Mark a stored session as paid, as if the customer finished checkout."""
        session = replace(self._sessions[session_id], payment_status=PaymentStatus.PAID.value)
        self._sessions[session_id] = session
        logger.info("[CHECKOUT MOCK] Session %s → %s", session_id, session.payment_status)
        return session
