from datetime import datetime, timezone
from typing import Literal

from pydantic import BaseModel, Field

from chainwise.core.tiers import Tier

RefillType = Literal["refill", "bonus", "monthly_reset"]
REFILL_TYPES: tuple[str, ...] = ("refill", "bonus", "monthly_reset")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserCreditAccount(BaseModel):
    user_id: str
    tier: Tier = "free"
    credits: int = 0


class CreditReservation(BaseModel):
    reservation_id: str
    user_id: str
    amount: int
    reason: str


class CreditTransaction(BaseModel):
    user_id: str
    amount: int  # negative for debits, positive for refills and bonuses
    reason: str
    balance_after: int
    created_at: datetime = Field(default_factory=_utcnow)
