"""Discount code use recorded against a confirmed booking."""

import math

from pydantic import BaseModel

BOOKING_ENTITY_TYPE = "booking"


def _amount(value: str | None) -> float:
    """Checkout metadata carries amounts as strings; unparseable means zero."""
    try:
        amount = float(value or 0)
    except ValueError:
        return 0.0
    return amount if math.isfinite(amount) else 0.0


class DiscountRedemption(BaseModel):
    discount_code_id: str
    original_amount: float = 0.0
    discount_amount: float = 0.0
    final_amount: float = 0.0

    @classmethod
    def from_metadata(cls, metadata: dict[str, str]) -> "DiscountRedemption | None":
        """Build a redemption from checkout metadata, or None when no discount applied."""
        code_id = (metadata.get("discountCodeId") or "").strip()
        discount = _amount(metadata.get("discountAmount"))
        if not code_id or discount <= 0:
            return None
        return cls(
            discount_code_id=code_id,
            original_amount=_amount(metadata.get("originalAmount")),
            discount_amount=discount,
            final_amount=_amount(metadata.get("finalAmount")),
        )
