from typing import Any, Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from checkout_adapter.api.dependencies import get_checkout_service
from checkout_adapter.integrations.policy.checkout_service import CheckoutService, verification_to_dict

router = APIRouter()


class CreateCheckoutSessionBody(BaseModel):
    """Fields are untyped here; CheckoutService validates them and reports 400s."""

    model_config = ConfigDict(populate_by_name=True)

    amount: Any = Field(default=None, description="Amount in major currency units, e.g. 19.99")
    currency: Any = Field(default=None, description="ISO 4217 code, defaults to usd")
    user_id: Any = Field(default=None, alias="userId")
    plan_id: Any = Field(default=None, alias="planId")
    plan_name: Any = Field(default=None, alias="planName")
    success_url: Optional[str] = Field(default=None, alias="successUrl")
    cancel_url: Optional[str] = Field(default=None, alias="cancelUrl")


@router.post("/create-checkout-session", tags=["Checkout"])
async def create_checkout_session(
    body: CreateCheckoutSessionBody,
    request: Request,
    service: CheckoutService = Depends(get_checkout_service),
):
    """Create a hosted checkout session and return its id and redirect URL."""
    session = await service.create_session(
        body.model_dump(by_alias=True),
        origin=request.headers.get("origin"),
        fallback_base=str(request.base_url),
    )
    return {"id": session.session_id, "url": session.url, "success": True}


@router.get("/verify-session", tags=["Checkout"], include_in_schema=False)
@router.get("/verify-session/", tags=["Checkout"], include_in_schema=False)
@router.get("/verify-session/{session_id}", tags=["Checkout"])
async def verify_session(
    session_id: Optional[str] = None,
    service: CheckoutService = Depends(get_checkout_service),
):
    """Relay the processor's payment status, amount and metadata for a session."""
    verification = await service.verify_session(session_id)
    return verification_to_dict(verification)
