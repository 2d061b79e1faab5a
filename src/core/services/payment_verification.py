"""Manual recovery for bookings whose webhook never arrived.

Staff trigger this for a booking stuck in ``pending``. The Stripe checkout
session is re-read and, when paid, the booking goes through the same
``confirm_booking`` transition the webhook uses.
"""

import logging
from datetime import datetime, timezone

import stripe

from core.errors import ConfigurationError, NotFoundError, ValidationError
from core.models.booking import PaymentVerificationResult, VerificationStatus
from core.store import BookingStore

logger = logging.getLogger(__name__)

AUDIT_ACTION = "MANUAL_PAYMENT_VERIFICATION"


def verify_booking_payment(
    booking_id: object,
    store: BookingStore,
    stripe_secret_key: str,
    logger: logging.Logger = logger,
) -> PaymentVerificationResult:
    if not isinstance(booking_id, str) or not booking_id.strip():
        raise ValidationError("Booking ID is required")
    if not stripe_secret_key:
        raise ConfigurationError("Stripe secret key not configured")

    booking = store.get_booking(booking_id)
    if booking is None:
        raise NotFoundError(f"Booking {booking_id} not found")

    if booking.is_paid:
        return PaymentVerificationResult(
            success=True,
            status=VerificationStatus.ALREADY_PAID,
            message="Booking is already marked as paid",
        )

    if not booking.stripe_session_id:
        return PaymentVerificationResult(
            success=False,
            status=VerificationStatus.NO_STRIPE_SESSION,
            message="No Stripe session ID found for this booking. This booking may have been created manually.",
        )

    try:
        session = stripe.checkout.Session.retrieve(booking.stripe_session_id, api_key=stripe_secret_key)
    except stripe.StripeError as e:
        logger.warning("Could not retrieve Stripe session %s: %s", booking.stripe_session_id, e)
        return PaymentVerificationResult(
            success=False,
            status=VerificationStatus.STRIPE_ERROR,
            message=f"Could not retrieve Stripe session: {e}",
        )

    payment_status = session.payment_status
    logger.info("Stripe session status for booking %s: %s", booking_id, payment_status)

    if payment_status == "paid":
        if not booking.time_slot_id:
            raise ValidationError(f"Booking {booking_id} has no time slot to confirm")

        store.confirm_booking(booking.time_slot_id, booking.stripe_session_id)
        store.record_audit_event(
            AUDIT_ACTION,
            "bookings",
            booking.id,
            {
                "payment_status": "paid",
                "stripe_session_status": payment_status,
                "verified_at": datetime.now(timezone.utc).isoformat(),
            },
        )
        return PaymentVerificationResult(
            success=True,
            status=VerificationStatus.PAYMENT_CONFIRMED,
            message="Payment verified! Booking has been marked as paid.",
        )

    if payment_status == "unpaid":
        return PaymentVerificationResult(
            success=False,
            status=VerificationStatus.UNPAID,
            message="Stripe shows this payment as unpaid. The customer may have abandoned checkout.",
            stripe_status=payment_status,
        )

    return PaymentVerificationResult(
        success=False,
        status=VerificationStatus.OTHER,
        message=f"Stripe payment status is: {payment_status}",
        stripe_status=payment_status,
    )
