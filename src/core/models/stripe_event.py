"""Subset of the Stripe event schema the webhook acts on."""

from typing import Any

from pydantic import BaseModel, Field, field_validator

CHECKOUT_SESSION_COMPLETED = "checkout.session.completed"
BOOKING_METADATA_TYPE = "booking"


class EventData(BaseModel):
    object: dict[str, Any]


class StripeEvent(BaseModel):
    id: str
    type: str
    data: EventData


class CheckoutSession(BaseModel):
    id: str
    mode: str | None = None
    payment_status: str | None = None
    metadata: dict[str, str] = Field(default_factory=dict)

    @field_validator("metadata", mode="before")
    @classmethod
    def null_metadata_is_empty(cls, value: Any) -> Any:
        return value or {}

    @property
    def is_booking(self) -> bool:
        return self.metadata.get("type") == BOOKING_METADATA_TYPE
