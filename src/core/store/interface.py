from abc import ABC, abstractmethod
from datetime import datetime
from typing import Any

from core.models.booking import Booking
from core.models.discount import DiscountRedemption
from core.models.tokens import CustomerToken


class BookingStore(ABC):
    """Read/write access to bookings, customer tokens and the audit log.

    ``confirm_booking`` is a transactional contract: implementations must
    delegate to the store's ``confirm_booking`` procedure, which is
    idempotent per ``stripe_session_id``. Callers never update
    ``payment_status`` themselves.

    ``record_discount_redemption`` writes at most one redemption per booking
    and returns False when the booking is unknown or already has one.

    All methods raise ``UpstreamQueryError`` on query failure. Emails are
    expected to be normalised by the caller.
    """

    @abstractmethod
    def confirm_booking(self, time_slot_id: str, stripe_session_id: str) -> Any: ...

    @abstractmethod
    def has_paid_booking(self, email: str) -> bool: ...

    @abstractmethod
    def has_intro_offer_tokens(self, email: str) -> bool: ...

    @abstractmethod
    def list_active_tokens(self, email: str, now: datetime) -> list[CustomerToken]: ...

    @abstractmethod
    def get_booking(self, booking_id: str) -> Booking | None: ...

    @abstractmethod
    def record_audit_event(
        self, action: str, table_name: str, record_id: str, new_values: dict[str, Any]
    ) -> None: ...

    @abstractmethod
    def record_discount_redemption(self, stripe_session_id: str, redemption: DiscountRedemption) -> bool: ...
