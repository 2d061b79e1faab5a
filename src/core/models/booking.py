from enum import Enum
from typing import Any

from pydantic import BaseModel


class Booking(BaseModel):
    id: str
    time_slot_id: str | None = None
    stripe_session_id: str | None = None
    customer_email: str | None = None
    payment_status: str = "pending"

    @property
    def is_paid(self) -> bool:
        return self.payment_status == "paid"


class VerificationStatus(str, Enum):
    ALREADY_PAID = "already_paid"
    NO_STRIPE_SESSION = "no_stripe_session"
    STRIPE_ERROR = "stripe_error"
    PAYMENT_CONFIRMED = "payment_confirmed"
    UNPAID = "unpaid"
    OTHER = "other"


class PaymentVerificationResult(BaseModel):
    success: bool
    status: VerificationStatus
    message: str
    stripe_status: str | None = None

    def to_response(self) -> dict[str, Any]:
        body: dict[str, Any] = {"success": self.success, "status": self.status.value, "message": self.message}
        if self.stripe_status is not None:
            body["stripeStatus"] = self.stripe_status
        return body
