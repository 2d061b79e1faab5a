from datetime import datetime
from typing import Any

from pydantic import BaseModel

from core.offers import is_intro_offer_note


class CustomerToken(BaseModel):
    id: str
    customer_email: str
    tokens_remaining: int
    expires_at: datetime | None = None
    notes: str | None = None

    def to_summary(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "tokensRemaining": self.tokens_remaining,
            "expiresAt": self.expires_at.isoformat() if self.expires_at else None,
            "notes": self.notes,
        }


class TokenStatus(BaseModel):
    """Usable tokens for one customer, earliest expiry first."""

    tokens: list[CustomerToken] = []

    @property
    def has_tokens(self) -> bool:
        return bool(self.tokens)

    @property
    def tokens_remaining(self) -> int:
        return sum(t.tokens_remaining for t in self.tokens)

    @property
    def primary(self) -> CustomerToken | None:
        return self.tokens[0] if self.tokens else None

    def to_response(self) -> dict[str, Any]:
        primary = self.primary
        if primary is None:
            return {"hasTokens": False, "tokensRemaining": 0, "tokenDetails": None}

        return {
            "hasTokens": True,
            "tokensRemaining": self.tokens_remaining,
            "isIntroOffer": is_intro_offer_note(primary.notes),
            "tokenDetails": {
                "id": primary.id,
                "expiresAt": primary.expires_at.isoformat() if primary.expires_at else None,
                "notes": primary.notes,
                "tokensInFirstBatch": primary.tokens_remaining,
            },
            "allTokens": [t.to_summary() for t in self.tokens],
        }
