from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from checkout_adapter.integrations.contracts.interfaces import CheckoutSession


class ProcessorError(RuntimeError):
    """Any failure reported by (or while talking to) the payment processor."""

    def __init__(
        self,
        message: str,
        *,
        error_type: Optional[str] = None,
        details: Optional[str] = None,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.error_type = error_type or "unknown"
        self.details = details or "No additional details"
        self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": self.message,
            "type": self.error_type,
            "details": self.details,
            "success": False,
        }


def processor_error_from_exception(exc: Exception) -> ProcessorError:
    """
    Build a ProcessorError from a processor SDK exception.

    Stripe errors carry an optional error object with the API error type
    (``invalid_request_error``, ``card_error``...); connection failures have
    none, so the exception class name is used instead.
    """
    error_obj = getattr(exc, "error", None)
    error_type = getattr(error_obj, "type", None) or type(exc).__name__
    message = getattr(exc, "user_message", None) or str(exc) or type(exc).__name__
    details = getattr(error_obj, "message", None) or message
    return ProcessorError(
        message,
        error_type=error_type,
        details=details,
        status_code=getattr(exc, "http_status", None),
    )


def _as_dict(value: Any) -> Dict[str, Any]:
    if value is None:
        return {}
    if hasattr(value, "to_dict"):
        return dict(value.to_dict())
    return dict(value)


def _field(raw: Any, name: str, default: Any = None) -> Any:
    if isinstance(raw, Mapping):
        return raw.get(name, default)
    return getattr(raw, name, default)


def normalize_checkout_session(raw: Any) -> CheckoutSession:
    """Map a processor session object (or plain dict) onto CheckoutSession."""
    session_id = _field(raw, "id")
    if not session_id:
        raise ProcessorError("Processor returned a session without an id", error_type="invalid_response")

    payment_status = _field(raw, "payment_status")
    if not payment_status:
        raise ProcessorError(
            f"Processor returned session {session_id} without a payment status",
            error_type="invalid_response",
        )

    amount_total = _field(raw, "amount_total")
    return CheckoutSession(
        session_id=str(session_id),
        url=_field(raw, "url"),
        payment_status=str(payment_status),
        amount_total=int(amount_total) if amount_total is not None else None,
        currency=_field(raw, "currency"),
        metadata={str(k): v for k, v in _as_dict(_field(raw, "metadata")).items()},
    )
