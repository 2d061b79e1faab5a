from enum import Enum

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class ReasonCode(str, Enum):
    PREVIOUS_BOOKINGS = "previous_bookings"
    ALREADY_USED_OFFER = "already_used_offer"


REASON_MESSAGES: dict[ReasonCode, str] = {
    ReasonCode.PREVIOUS_BOOKINGS: "You have previous bookings with us",
    ReasonCode.ALREADY_USED_OFFER: "You have already used the Introductory Offer",
}


class EligibilityResult(BaseModel):
    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    is_eligible: bool
    reason: str | None = None
    reason_code: ReasonCode | None = None

    @classmethod
    def eligible(cls) -> "EligibilityResult":
        return cls(is_eligible=True)

    @classmethod
    def disqualified(cls, code: ReasonCode) -> "EligibilityResult":
        return cls(is_eligible=False, reason=REASON_MESSAGES[code], reason_code=code)
