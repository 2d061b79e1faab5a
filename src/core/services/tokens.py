import logging
from datetime import datetime, timezone

from core.errors import ValidationError
from core.models.tokens import TokenStatus
from core.offers import normalize_email
from core.store import BookingStore

logger = logging.getLogger(__name__)


def get_token_status(
    email: object,
    store: BookingStore,
    now: datetime | None = None,
    logger: logging.Logger = logger,
) -> TokenStatus:
    """Summarise unexpired tokens with sessions left, earliest expiry first."""
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("Email is required")

    normalized = normalize_email(email)
    tokens = store.list_active_tokens(normalized, now or datetime.now(timezone.utc))
    status = TokenStatus(tokens=tokens)
    logger.info("Token status for %s: %d tokens across %d batches", normalized, status.tokens_remaining, len(tokens))
    return status
