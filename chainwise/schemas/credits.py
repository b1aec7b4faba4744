from datetime import datetime

from chainwise.schemas.chat import CamelModel


class BalanceResponse(CamelModel):
    user_id: str
    tier: str
    credits: int
    monthly_credits: int


class TransactionOut(CamelModel):
    amount: int
    reason: str
    balance_after: int
    created_at: datetime


class TransactionSummary(CamelModel):
    total_spent: int
    total_earned: int
    net_credits: int


class Pagination(CamelModel):
    limit: int
    offset: int
    total: int


class TransactionsResponse(CamelModel):
    transactions: list[TransactionOut]
    summary: TransactionSummary
    pagination: Pagination


class RefillRequest(CamelModel):
    amount: int | None = None
    refill_type: str = "refill"


class RefillResponse(CamelModel):
    credits: int
    refill_type: str
    message: str
    success: bool = True
