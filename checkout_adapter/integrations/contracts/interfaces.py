from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Any, Dict, List, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class PaymentStatus(str, Enum):
    """Checkout session payment status as reported by the processor."""
    PENDING = "pending"
    PAID = "paid"
    UNPAID = "unpaid"
    NO_PAYMENT_REQUIRED = "no_payment_required"


class CheckoutMode(str, Enum):
    PAYMENT = "payment"


# ---------------------------------------------------------------------------
# Shared data models
# ---------------------------------------------------------------------------

@dataclass
class CheckoutSessionRequest:
    amount: Decimal                      # major currency units, > 0
    user_id: str
    plan_id: str
    plan_name: str
    currency: str = "usd"
    success_url: Optional[str] = None
    cancel_url: Optional[str] = None


@dataclass
class LineItem:
    name: str
    description: str
    unit_amount: int                     # minor currency units
    currency: str
    quantity: int = 1

    def to_params(self) -> Dict[str, Any]:
        return {
            "price_data": {
                "currency": self.currency,
                "product_data": {
                    "name": self.name,
                    "description": self.description,
                },
                "unit_amount": self.unit_amount,
            },
            "quantity": self.quantity,
        }


@dataclass
class CheckoutSessionParams:
    """Everything the processor needs to open a hosted checkout session."""
    line_items: List[LineItem]
    success_url: str
    cancel_url: str
    mode: CheckoutMode = CheckoutMode.PAYMENT
    payment_method_types: List[str] = field(default_factory=lambda: ["card"])
    metadata: Dict[str, str] = field(default_factory=dict)

    def to_params(self) -> Dict[str, Any]:
        return {
            "payment_method_types": list(self.payment_method_types),
            "line_items": [item.to_params() for item in self.line_items],
            "mode": self.mode.value,
            "success_url": self.success_url,
            "cancel_url": self.cancel_url,
            "metadata": dict(self.metadata),
        }


@dataclass
class CheckoutSession:
    session_id: str
    url: Optional[str]
    payment_status: str
    amount_total: Optional[int]          # minor currency units
    currency: Optional[str] = None
    metadata: Dict[str, str] = field(default_factory=dict)


@dataclass
class SessionVerification:
    status: str
    amount: Optional[float]              # major currency units
    metadata: Dict[str, str] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Abstract processor interface
# ---------------------------------------------------------------------------

class CheckoutProcessor(ABC):
    """Every hosted-checkout processor client must implement this interface."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short processor name used in logs and diagnostics."""

    @abstractmethod
    async def create_checkout_session(self, params: CheckoutSessionParams) -> CheckoutSession:
        """Open a hosted checkout session and return its id and redirect URL."""

    @abstractmethod
    async def retrieve_checkout_session(self, session_id: str) -> CheckoutSession:
        """Fetch the current state of a previously created session."""
