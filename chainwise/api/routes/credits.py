from fastapi import APIRouter, Depends, HTTPException, Query

from chainwise.api.dependencies import get_ledger, get_user_id, load_account
from chainwise.core.exceptions import ChainWiseError
from chainwise.core.tiers import TIER_CONFIG
from chainwise.schemas.credits import (
    BalanceResponse,
    Pagination,
    RefillRequest,
    RefillResponse,
    TransactionOut,
    TransactionsResponse,
    TransactionSummary,
)
from chainwise.services.credit_service import CreditLedger

router = APIRouter()


@router.get("/api/credits/balance", response_model=BalanceResponse)
async def get_balance(
    user_id: str = Depends(get_user_id), ledger: CreditLedger = Depends(get_ledger)
):
    account = await load_account(ledger, user_id)
    return BalanceResponse(
        user_id=account.user_id,
        tier=account.tier,
        credits=account.credits,
        monthly_credits=TIER_CONFIG[account.tier].monthly_credits,
    )


@router.get("/api/credits/transactions", response_model=TransactionsResponse)
async def get_transactions(
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    user_id: str = Depends(get_user_id),
    ledger: CreditLedger = Depends(get_ledger),
):
    """Newest-first page of the caller's transactions with spend/earn totals for the page."""
    try:
        transactions = await ledger.transactions(user_id, limit=limit, offset=offset)
    except ChainWiseError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    total_spent = sum(-t.amount for t in transactions if t.amount < 0)
    total_earned = sum(t.amount for t in transactions if t.amount > 0)
    return TransactionsResponse(
        transactions=[
            TransactionOut(
                amount=t.amount,
                reason=t.reason,
                balance_after=t.balance_after,
                created_at=t.created_at,
            )
            for t in transactions
        ],
        summary=TransactionSummary(
            total_spent=total_spent,
            total_earned=total_earned,
            net_credits=total_earned - total_spent,
        ),
        pagination=Pagination(limit=limit, offset=offset, total=len(transactions)),
    )


@router.post("/api/credits/refill", response_model=RefillResponse)
async def refill_credits(
    refill_request: RefillRequest,
    user_id: str = Depends(get_user_id),
    ledger: CreditLedger = Depends(get_ledger),
):
    """Add credits to the caller's account; ``monthly_reset`` restores the tier allotment."""
    try:
        credits = await ledger.refill(
            user_id, refill_request.amount, refill_request.refill_type
        )
    except ChainWiseError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))

    if refill_request.refill_type == "monthly_reset":
        message = "Credits reset to the monthly allotment"
    else:
        message = f"Successfully added {refill_request.amount} credits"
    return RefillResponse(
        credits=credits, refill_type=refill_request.refill_type, message=message
    )
