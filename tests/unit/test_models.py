from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from core.models import (
    Booking,
    CheckoutSession,
    CustomerToken,
    DiscountRedemption,
    EligibilityResult,
    PaymentVerificationResult,
    ReasonCode,
    StripeEvent,
    TokenStatus,
    VerificationStatus,
)

# --- Stripe event ---


def test_stripe_event_parses_minimal_payload():
    event = StripeEvent.model_validate(
        {"id": "evt_1", "type": "checkout.session.completed", "data": {"object": {"id": "cs_1"}}, "livemode": False}
    )
    assert event.type == "checkout.session.completed"
    assert event.data.object["id"] == "cs_1"


def test_stripe_event_requires_data():
    with pytest.raises(ValidationError):
        StripeEvent.model_validate({"id": "evt_1", "type": "ping"})


def test_checkout_session_booking_flag():
    session = CheckoutSession.model_validate({"id": "cs_1", "metadata": {"type": "booking", "timeSlotId": "slot-1"}})
    assert session.is_booking
    assert not CheckoutSession.model_validate({"id": "cs_2", "metadata": {"type": "gift_card"}}).is_booking


def test_checkout_session_null_metadata():
    session = CheckoutSession.model_validate({"id": "cs_1", "metadata": None})
    assert session.metadata == {}
    assert not session.is_booking


# --- Eligibility ---


def test_eligible_result_serialises_camel_case():
    body = EligibilityResult.eligible().model_dump(mode="json", by_alias=True)
    assert body == {"isEligible": True, "reason": None, "reasonCode": None}


def test_disqualified_result_carries_reason():
    body = EligibilityResult.disqualified(ReasonCode.ALREADY_USED_OFFER).model_dump(mode="json", by_alias=True)
    assert body["isEligible"] is False
    assert body["reason"] == "You have already used the Introductory Offer"
    assert body["reasonCode"] == "already_used_offer"


# --- Tokens ---


def _token(token_id: str, remaining: int, notes: str | None = None, expires_at: datetime | None = None):
    return CustomerToken(
        id=token_id, customer_email="a@b.co", tokens_remaining=remaining, notes=notes, expires_at=expires_at
    )


def test_token_status_empty():
    assert TokenStatus().to_response() == {"hasTokens": False, "tokensRemaining": 0, "tokenDetails": None}


def test_token_status_sums_and_uses_first_batch():
    expiry = datetime(2026, 12, 1, tzinfo=timezone.utc)
    status = TokenStatus(
        tokens=[_token("t1", 2, "Introductory Offer - 3 Sessions", expiry), _token("t2", 5, "Bulk pack")]
    )
    body = status.to_response()
    assert body["hasTokens"] is True
    assert body["tokensRemaining"] == 7
    assert body["isIntroOffer"] is True
    assert body["tokenDetails"] == {
        "id": "t1",
        "expiresAt": expiry.isoformat(),
        "notes": "Introductory Offer - 3 Sessions",
        "tokensInFirstBatch": 2,
    }
    assert [t["id"] for t in body["allTokens"]] == ["t1", "t2"]
    assert body["allTokens"][1]["expiresAt"] is None


# --- Bookings ---


def test_booking_is_paid():
    assert Booking(id="b1", payment_status="paid").is_paid
    assert not Booking(id="b1").is_paid


def test_verification_result_response():
    result = PaymentVerificationResult(
        success=False, status=VerificationStatus.UNPAID, message="unpaid", stripe_status="unpaid"
    )
    assert result.to_response() == {
        "success": False,
        "status": "unpaid",
        "message": "unpaid",
        "stripeStatus": "unpaid",
    }
    confirmed = PaymentVerificationResult(success=True, status=VerificationStatus.PAYMENT_CONFIRMED, message="ok")
    assert "stripeStatus" not in confirmed.to_response()


# --- Discount redemption ---


def test_discount_redemption_from_metadata():
    redemption = DiscountRedemption.from_metadata(
        {
            "type": "booking",
            "discountCodeId": "dc-1",
            "originalAmount": "45",
            "discountAmount": "9.5",
            "finalAmount": "35.5",
        }
    )
    assert redemption == DiscountRedemption(
        discount_code_id="dc-1", original_amount=45.0, discount_amount=9.5, final_amount=35.5
    )


@pytest.mark.parametrize(
    "metadata",
    [
        {},
        {"discountCodeId": "", "discountAmount": "10"},
        {"discountCodeId": "dc-1"},
        {"discountCodeId": "dc-1", "discountAmount": "0"},
        {"discountCodeId": "dc-1", "discountAmount": "abc"},
        {"discountCodeId": "dc-1", "discountAmount": "nan"},
    ],
)
def test_no_discount_applied(metadata):
    assert DiscountRedemption.from_metadata(metadata) is None


def test_discount_redemption_unparseable_amounts_are_zero():
    redemption = DiscountRedemption.from_metadata(
        {"discountCodeId": "dc-1", "discountAmount": "5", "originalAmount": "", "finalAmount": "n/a"}
    )
    assert redemption is not None
    assert redemption.original_amount == 0.0
    assert redemption.final_amount == 0.0
