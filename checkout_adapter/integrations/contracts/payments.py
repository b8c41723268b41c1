"""
Checkout payment contract: request validation and currency helpers.

Incoming client payloads are camelCase JSON objects; the helpers below turn
them into a validated CheckoutSessionRequest or raise CheckoutValidationError
describing what was wrong. Amount conversion between major and minor units
uses Decimal arithmetic with half-up rounding in both directions.
"""
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Optional

from .interfaces import CheckoutSessionRequest

REQUIRED_FIELDS: List[str] = ["amount", "userId", "planId", "planName"]
DEFAULT_CURRENCY = "usd"
MINOR_UNITS_PER_MAJOR = Decimal(100)

_CURRENCY_RE = re.compile(r"^[a-z]{3}$")


class CheckoutValidationError(ValueError):
    """Raised when a client request is missing fields or carries bad values."""

    def __init__(
        self,
        message: str,
        *,
        required: Optional[List[str]] = None,
        received: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.required = required
        self.received = received

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message, "success": False}
        if self.required is not None:
            body["required"] = list(self.required)
        if self.received is not None:
            body["received"] = self.received
        return body


# ---------------------------------------------------------------------------
# Validation helpers
# ---------------------------------------------------------------------------

def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def find_missing_fields(payload: Mapping[str, Any]) -> List[str]:
    """Return the required field names that are absent, null or blank."""
    return [name for name in REQUIRED_FIELDS if _is_missing(payload.get(name))]


def received_fields(payload: Mapping[str, Any]) -> Dict[str, Any]:
    """Echo back the required fields that were actually sent."""
    return {name: payload[name] for name in REQUIRED_FIELDS if not _is_missing(payload.get(name))}


def parse_amount(raw: Any) -> Decimal:
    """
    Parse a major-unit amount from a JSON number or numeric string.

    Raises:
        CheckoutValidationError: if the value is not a finite number that
            converts to at least one minor unit
    """
    if isinstance(raw, bool) or not isinstance(raw, (int, float, str)):
        raise CheckoutValidationError("Invalid amount", received=raw)

    try:
        amount = Decimal(str(raw).strip())
    except InvalidOperation:
        raise CheckoutValidationError("Invalid amount", received=raw) from None

    if not amount.is_finite() or amount <= 0:
        raise CheckoutValidationError("Invalid amount", received=raw)

    # Must price to at least one minor unit and fit Decimal precision.
    try:
        minor = to_minor_units(amount)
    except InvalidOperation:
        raise CheckoutValidationError("Invalid amount", received=raw) from None
    if minor < 1:
        raise CheckoutValidationError("Invalid amount", received=raw)
    return amount


def parse_identifier(name: str, raw: Any) -> str:
    """Identifiers go into processor metadata, so only scalars are accepted."""
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        raise CheckoutValidationError(f"Invalid {name}", received=raw)
    return str(raw).strip()


def normalize_currency(raw: Any) -> str:
    if _is_missing(raw):
        return DEFAULT_CURRENCY
    currency = str(raw).strip().lower()
    if not _CURRENCY_RE.match(currency):
        raise CheckoutValidationError("Invalid currency", received=raw)
    return currency


def to_minor_units(amount: Decimal) -> int:
    """19.99 -> 1999, 10.005 -> 1001 (half-up)."""
    return int((amount * MINOR_UNITS_PER_MAJOR).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def from_minor_units(amount: Optional[int]) -> Optional[float]:
    if amount is None:
        return None
    major = (Decimal(amount) / MINOR_UNITS_PER_MAJOR).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return float(major)


def build_checkout_request(payload: Mapping[str, Any]) -> CheckoutSessionRequest:
    """
    Validate a raw create-checkout-session payload.

    Missing fields are reported together; amount and currency are checked
    only once every required field is present.
    """
    missing = find_missing_fields(payload)
    if missing:
        raise CheckoutValidationError(
            "Missing required fields",
            required=list(REQUIRED_FIELDS),
            received=received_fields(payload),
        )

    amount = parse_amount(payload["amount"])
    currency = normalize_currency(payload.get("currency"))

    return CheckoutSessionRequest(
        amount=amount,
        user_id=parse_identifier("userId", payload["userId"]),
        plan_id=parse_identifier("planId", payload["planId"]),
        plan_name=parse_identifier("planName", payload["planName"]),
        currency=currency,
        success_url=None if _is_missing(payload.get("successUrl")) else str(payload["successUrl"]),
        cancel_url=None if _is_missing(payload.get("cancelUrl")) else str(payload["cancelUrl"]),
    )
