"""Lazy-initialized store clients, reused across warm Lambda invocations."""

from functools import lru_cache

from supabase import Client, ClientOptions, create_client

from core.config import get_config
from core.errors import ConfigurationError
from core.store import BookingStore, PostgresBookingStore, SupabaseBookingStore


@lru_cache(maxsize=1)
def get_supabase_client() -> Client:
    config = get_config()
    if not config.supabase_url or not config.supabase_service_role_key:
        raise ConfigurationError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be set")
    return create_client(
        config.supabase_url,
        config.supabase_service_role_key,
        options=ClientOptions(auto_refresh_token=False, persist_session=False),
    )


@lru_cache(maxsize=1)
def get_store() -> BookingStore:
    config = get_config()
    if config.store_backend == "postgres":
        if not config.database_url:
            raise ConfigurationError("DATABASE_URL must be set when STORE_BACKEND=postgres")
        return PostgresBookingStore(config.database_url)
    if config.store_backend != "supabase":
        raise ConfigurationError(f"Unknown STORE_BACKEND: {config.store_backend}")
    return SupabaseBookingStore(get_supabase_client())
