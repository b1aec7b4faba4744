"""Subscription tiers and access checks."""
from typing import Literal

from pydantic import BaseModel

from chainwise.core.exceptions import InsufficientTierError

Tier = Literal["free", "pro", "elite"]

TIER_HIERARCHY: dict[str, int] = {"free": 0, "pro": 1, "elite": 2}


class TierConfig(BaseModel):
    name: str
    monthly_credits: int
    price: float


TIER_CONFIG: dict[str, TierConfig] = {
    "free": TierConfig(name="Buddy", monthly_credits=100, price=0),
    "pro": TierConfig(name="Professor", monthly_credits=500, price=12.99),
    "elite": TierConfig(name="Trader", monthly_credits=2000, price=24.99),
}


def tier_rank(tier: str | None) -> int:
    """Rank of a tier; unknown or missing tiers rank as free."""
    return TIER_HIERARCHY.get((tier or "").lower(), 0)


def has_tier_access(user_tier: str | None, required_tier: str) -> bool:
    return tier_rank(user_tier) >= tier_rank(required_tier)


def ensure_tier_access(user_tier: str | None, required_tier: str, feature: str) -> None:
    """Raise InsufficientTierError when user_tier is below required_tier."""
    if not has_tier_access(user_tier, required_tier):
        raise InsufficientTierError(feature, required_tier, user_tier or "free")
