"""Introductory Offer eligibility."""

import logging

from core.errors import ValidationError
from core.models.eligibility import EligibilityResult, ReasonCode
from core.offers import normalize_email
from core.store import BookingStore

logger = logging.getLogger(__name__)


def check_intro_eligibility(
    email: object, store: BookingStore, logger: logging.Logger = logger
) -> EligibilityResult:
    """A customer qualifies only with no paid booking and no prior offer tokens.

    When both checks match, the prior booking is reported.
    """
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("Email is required")

    normalized = normalize_email(email)
    has_previous_bookings = store.has_paid_booking(normalized)
    has_used_intro_offer = store.has_intro_offer_tokens(normalized)

    if has_previous_bookings:
        result = EligibilityResult.disqualified(ReasonCode.PREVIOUS_BOOKINGS)
    elif has_used_intro_offer:
        result = EligibilityResult.disqualified(ReasonCode.ALREADY_USED_OFFER)
    else:
        result = EligibilityResult.eligible()

    logger.info("Intro eligibility for %s: %s (%s)", normalized, result.is_eligible, result.reason_code)
    return result
