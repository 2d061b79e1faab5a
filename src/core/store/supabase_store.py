"""Supabase (PostgREST) implementation of the booking store."""

from datetime import datetime
from typing import Any

from postgrest.exceptions import APIError
from supabase import Client

from core.errors import ErrorCode, UpstreamQueryError
from core.models.booking import Booking
from core.models.discount import BOOKING_ENTITY_TYPE, DiscountRedemption
from core.models.tokens import CustomerToken
from core.offers import INTRO_OFFER_MARKER

from .interface import BookingStore

# PostgREST: ".single()" matched zero rows
NO_ROWS_CODE = "PGRST116"
# Postgres: invalid_text_representation, e.g. an id that is not a UUID
INVALID_TEXT_CODE = "22P02"


def _is_absent(error: APIError) -> bool:
    """No row matched, or the key cannot name a row at all."""
    return error.code in (NO_ROWS_CODE, INVALID_TEXT_CODE)


class SupabaseBookingStore(BookingStore):
    def __init__(self, client: Client):
        self._client = client

    def _execute(self, query: Any, description: str) -> Any:
        try:
            return query.execute()
        except APIError as e:
            raise UpstreamQueryError(f"{description} failed: {e.message}") from e

    def confirm_booking(self, time_slot_id: str, stripe_session_id: str) -> Any:
        query = self._client.rpc(
            "confirm_booking",
            {"p_time_slot_id": time_slot_id, "p_stripe_session_id": stripe_session_id},
        )
        try:
            response = query.execute()
        except APIError as e:
            raise UpstreamQueryError(
                f"confirm_booking failed for session {stripe_session_id}: {e.message}",
                code=ErrorCode.CONFIRMATION_FAILED,
            ) from e
        return response.data

    def has_paid_booking(self, email: str) -> bool:
        query = (
            self._client.table("bookings")
            .select("id")
            .eq("customer_email", email)
            .eq("payment_status", "paid")
            .limit(1)
        )
        response = self._execute(query, "Paid booking lookup")
        return bool(response.data)

    def has_intro_offer_tokens(self, email: str) -> bool:
        query = (
            self._client.table("customer_tokens")
            .select("id")
            .eq("customer_email", email)
            .ilike("notes", f"%{INTRO_OFFER_MARKER}%")
            .limit(1)
        )
        response = self._execute(query, "Introductory Offer token lookup")
        return bool(response.data)

    def list_active_tokens(self, email: str, now: datetime) -> list[CustomerToken]:
        query = (
            self._client.table("customer_tokens")
            .select("*")
            .eq("customer_email", email)
            .gt("tokens_remaining", 0)
            .or_(f"expires_at.is.null,expires_at.gt.{now.isoformat()}")
            .order("expires_at")
        )
        response = self._execute(query, "Token lookup")
        return [CustomerToken.model_validate(row) for row in response.data or []]

    def get_booking(self, booking_id: str) -> Booking | None:
        query = self._client.table("bookings").select("*").eq("id", booking_id).single()
        try:
            response = query.execute()
        except APIError as e:
            if _is_absent(e):
                return None
            raise UpstreamQueryError(f"Booking lookup failed: {e.message}") from e
        if not response.data:
            return None
        return Booking.model_validate(response.data)

    def record_discount_redemption(self, stripe_session_id: str, redemption: DiscountRedemption) -> bool:
        booking_query = self._client.table("bookings").select("id").eq("stripe_session_id", stripe_session_id).limit(1)
        bookings = self._execute(booking_query, "Booking lookup by session").data
        if not bookings:
            return False
        booking_id = bookings[0]["id"]

        existing_query = (
            self._client.table("discount_redemptions")
            .select("id")
            .eq("entity_type", BOOKING_ENTITY_TYPE)
            .eq("entity_id", booking_id)
            .limit(1)
        )
        if self._execute(existing_query, "Discount redemption lookup").data:
            return False

        insert_query = self._client.table("discount_redemptions").insert(
            {
                **redemption.model_dump(),
                "entity_type": BOOKING_ENTITY_TYPE,
                "entity_id": booking_id,
            }
        )
        self._execute(insert_query, "Discount redemption insert")
        return True

    def record_audit_event(
        self, action: str, table_name: str, record_id: str, new_values: dict[str, Any]
    ) -> None:
        query = self._client.table("audit_logs").insert(
            {"action": action, "table_name": table_name, "record_id": record_id, "new_values": new_values}
        )
        self._execute(query, "Audit log insert")
