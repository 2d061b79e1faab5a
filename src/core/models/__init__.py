"""
Pydantic models for Studio Functions.
"""

from core.models.booking import Booking, PaymentVerificationResult, VerificationStatus
from core.models.discount import DiscountRedemption
from core.models.eligibility import EligibilityResult, ReasonCode
from core.models.stripe_event import CheckoutSession, StripeEvent
from core.models.tokens import CustomerToken, TokenStatus

__all__ = [
    "Booking",
    "CheckoutSession",
    "CustomerToken",
    "DiscountRedemption",
    "EligibilityResult",
    "PaymentVerificationResult",
    "ReasonCode",
    "StripeEvent",
    "TokenStatus",
    "VerificationStatus",
]
