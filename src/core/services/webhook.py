"""Stripe webhook verification and booking confirmation."""

import json
import logging
from typing import Any

import pydantic
import stripe

from core.errors import AuthenticationError, ConfigurationError, ErrorCode, ValidationError
from core.models.discount import DiscountRedemption
from core.models.stripe_event import CHECKOUT_SESSION_COMPLETED, CheckoutSession, StripeEvent
from core.store import BookingStore

logger = logging.getLogger(__name__)


def verify_event(payload: bytes, signature: str | None, secret: str) -> StripeEvent:
    """Verify ``signature`` against the exact raw ``payload`` and parse the event.

    Raises ConfigurationError if no secret is configured, AuthenticationError
    if the signature is absent or does not match, ValidationError if the
    verified payload is not a Stripe event.
    """
    if not secret:
        raise ConfigurationError("Stripe webhook secret not configured")
    if not signature:
        raise AuthenticationError("No Stripe signature found", code=ErrorCode.SIGNATURE_MISSING)

    try:
        text = payload.decode("utf-8")
    except UnicodeDecodeError as e:
        raise AuthenticationError(f"Webhook payload is not UTF-8: {e}") from e

    try:
        stripe.WebhookSignature.verify_header(text, signature, secret, tolerance=stripe.Webhook.DEFAULT_TOLERANCE)
    except stripe.SignatureVerificationError as e:
        raise AuthenticationError(f"Stripe signature verification failed: {e}") from e

    try:
        return StripeEvent.model_validate(json.loads(text))
    except (json.JSONDecodeError, pydantic.ValidationError) as e:
        raise ValidationError(f"Verified payload is not a Stripe event: {e}", code=ErrorCode.INVALID_REQUEST) from e


def process_event(event: StripeEvent, store: BookingStore, logger: logging.Logger = logger) -> Any:
    """Confirm the booking behind a completed booking checkout.

    A discount code used at checkout is recorded against the booking once
    it is confirmed. Every other event is acknowledged without side
    effects. Returns the store's confirmation result, or None when nothing
    was done.
    """
    logger.info("Webhook event received: %s (%s)", event.type, event.id)

    if event.type != CHECKOUT_SESSION_COMPLETED:
        logger.info("Acknowledged %s without action", event.type)
        return None

    try:
        session = CheckoutSession.model_validate(event.data.object)
    except pydantic.ValidationError as e:
        raise ValidationError(f"Malformed checkout session in event {event.id}: {e}") from e

    if not session.is_booking:
        logger.info("Checkout %s is not a booking (type=%s)", session.id, session.metadata.get("type"))
        return None

    time_slot_id = session.metadata.get("timeSlotId")
    if not time_slot_id:
        raise ValidationError(f"Booking checkout {session.id} has no timeSlotId in metadata")

    logger.info("Processing booking confirmation for slot %s, session %s", time_slot_id, session.id)
    result = store.confirm_booking(time_slot_id, session.id)
    logger.info("Booking confirmed for session %s: %s", session.id, result)

    redemption = DiscountRedemption.from_metadata(session.metadata)
    if redemption is not None:
        recorded = store.record_discount_redemption(session.id, redemption)
        logger.info(
            "Discount %s for session %s %s",
            redemption.discount_code_id,
            session.id,
            "recorded" if recorded else "already recorded or booking missing",
        )
    return result
