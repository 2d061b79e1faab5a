"""Storage boundary: the hosted booking database behind one interface."""

from core.store.interface import BookingStore
from core.store.postgres_store import PostgresBookingStore
from core.store.supabase_store import SupabaseBookingStore

__all__ = ["BookingStore", "PostgresBookingStore", "SupabaseBookingStore"]
