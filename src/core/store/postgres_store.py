"""Direct PostgreSQL implementation of the booking store.

Used for local development and for deployments that reach the database
without PostgREST. Speaks to the same schema and the same
``confirm_booking`` procedure as the Supabase store.
"""

from datetime import datetime
from typing import Any

import psycopg
from psycopg.rows import dict_row
from psycopg.types.json import Json

from core.errors import ErrorCode, StudioError, UpstreamQueryError
from core.models.booking import Booking
from core.models.discount import BOOKING_ENTITY_TYPE, DiscountRedemption
from core.models.tokens import CustomerToken
from core.offers import INTRO_OFFER_MARKER

from .interface import BookingStore

_PAID_BOOKING_SQL = """
    SELECT 1 FROM bookings
    WHERE customer_email = %s AND payment_status = 'paid'
    LIMIT 1
"""

_INTRO_OFFER_TOKEN_SQL = """
    SELECT 1 FROM customer_tokens
    WHERE customer_email = %s AND notes ILIKE %s
    LIMIT 1
"""

_ACTIVE_TOKENS_SQL = """
    SELECT id, customer_email, tokens_remaining, expires_at, notes
    FROM customer_tokens
    WHERE customer_email = %s
      AND tokens_remaining > 0
      AND (expires_at IS NULL OR expires_at > %s)
    ORDER BY expires_at ASC NULLS LAST
"""

_BOOKING_SQL = """
    SELECT id, time_slot_id, stripe_session_id, customer_email, payment_status
    FROM bookings
    WHERE id::text = %s
"""

_DISCOUNT_REDEMPTION_SQL = """
    INSERT INTO discount_redemptions
        (discount_code_id, entity_type, entity_id, original_amount, discount_amount, final_amount)
    SELECT %s, %s, b.id, %s, %s, %s
    FROM bookings b
    WHERE b.stripe_session_id = %s
      AND NOT EXISTS (
          SELECT 1 FROM discount_redemptions r
          WHERE r.entity_type = %s AND r.entity_id = b.id
      )
    ON CONFLICT DO NOTHING
    RETURNING id
"""

_AUDIT_SQL = """
    INSERT INTO audit_logs (action, table_name, record_id, new_values)
    VALUES (%s, %s, %s, %s)
"""


class PostgresBookingStore(BookingStore):
    def __init__(self, conninfo: str) -> None:
        self._conninfo = conninfo
        self._conn: psycopg.Connection | None = None

    def connect(self) -> None:
        # Each statement commits on its own; confirm_booking is atomic inside the procedure.
        self._conn = psycopg.connect(self._conninfo, autocommit=True, row_factory=dict_row)

    def disconnect(self) -> None:
        if self._conn and not self._conn.closed:
            self._conn.close()
        self._conn = None

    def _require_connection(self) -> psycopg.Connection:
        if self._conn is None or self._conn.closed:
            self.connect()
        if self._conn is None:
            raise StudioError("PostgresBookingStore could not open a connection.")
        return self._conn

    def _fetch(self, sql: str, params: tuple[Any, ...], description: str) -> list[dict[str, Any]]:
        try:
            conn = self._require_connection()
            with conn.cursor() as cur:
                cur.execute(sql, params)
                return cur.fetchall() if cur.description else []
        except psycopg.Error as e:
            raise UpstreamQueryError(f"{description} failed: {e}") from e

    def confirm_booking(self, time_slot_id: str, stripe_session_id: str) -> Any:
        try:
            conn = self._require_connection()
            with conn.cursor() as cur:
                cur.execute("SELECT confirm_booking(%s, %s) AS result", (time_slot_id, stripe_session_id))
                row = cur.fetchone()
        except psycopg.Error as e:
            raise UpstreamQueryError(
                f"confirm_booking failed for session {stripe_session_id}: {e}",
                code=ErrorCode.CONFIRMATION_FAILED,
            ) from e
        return row["result"] if row else None

    def has_paid_booking(self, email: str) -> bool:
        return bool(self._fetch(_PAID_BOOKING_SQL, (email,), "Paid booking lookup"))

    def has_intro_offer_tokens(self, email: str) -> bool:
        rows = self._fetch(_INTRO_OFFER_TOKEN_SQL, (email, f"%{INTRO_OFFER_MARKER}%"), "Introductory Offer token lookup")
        return bool(rows)

    def list_active_tokens(self, email: str, now: datetime) -> list[CustomerToken]:
        rows = self._fetch(_ACTIVE_TOKENS_SQL, (email, now), "Token lookup")
        return [CustomerToken(**{**row, "id": str(row["id"])}) for row in rows]

    def get_booking(self, booking_id: str) -> Booking | None:
        rows = self._fetch(_BOOKING_SQL, (booking_id,), "Booking lookup")
        if not rows:
            return None
        row = rows[0]
        return Booking(
            id=str(row["id"]),
            time_slot_id=str(row["time_slot_id"]) if row["time_slot_id"] is not None else None,
            stripe_session_id=row["stripe_session_id"],
            customer_email=row["customer_email"],
            payment_status=row["payment_status"],
        )

    def record_discount_redemption(self, stripe_session_id: str, redemption: DiscountRedemption) -> bool:
        params = (
            redemption.discount_code_id,
            BOOKING_ENTITY_TYPE,
            redemption.original_amount,
            redemption.discount_amount,
            redemption.final_amount,
            stripe_session_id,
            BOOKING_ENTITY_TYPE,
        )
        return bool(self._fetch(_DISCOUNT_REDEMPTION_SQL, params, "Discount redemption insert"))

    def record_audit_event(
        self, action: str, table_name: str, record_id: str, new_values: dict[str, Any]
    ) -> None:
        self._fetch(_AUDIT_SQL, (action, table_name, record_id, Json(new_values)), "Audit log insert")

    def __enter__(self) -> "PostgresBookingStore":
        self.connect()
        return self

    def __exit__(self, *args: object) -> None:
        self.disconnect()
