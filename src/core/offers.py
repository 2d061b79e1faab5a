"""Introductory Offer conventions shared by the eligibility and token checks.

Redemption of the Introductory Offer is not stored as a flag. It is inferred
from a ``customer_tokens`` row whose ``notes`` contain ``INTRO_OFFER_MARKER``
(matched case-insensitively). Keep every reader of that convention behind
``is_intro_offer_note`` or ``BookingStore.has_intro_offer_tokens`` so that a
future dedicated redemption column only has to change here and in the store.
"""

INTRO_OFFER_MARKER = "Introductory Offer"


def normalize_email(email: str) -> str:
    return email.strip().lower()


def is_intro_offer_note(notes: str | None) -> bool:
    if not notes:
        return False
    return INTRO_OFFER_MARKER.lower() in notes.lower()
