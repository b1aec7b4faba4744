from fastapi import Header, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from chainwise.core.config import settings
from chainwise.core.exceptions import ChainWiseError
from chainwise.models.credit import UserCreditAccount
from chainwise.services.credit_service import CreditLedger
from chainwise.services.market_data_service import MarketDataService
from chainwise.services.openai_service import AIService

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


def get_ai_service(request: Request) -> AIService:
    return request.app.state.ai_service


def get_ledger(request: Request) -> CreditLedger:
    return request.app.state.ledger


def get_market_data_service(request: Request) -> MarketDataService:
    return request.app.state.market_data


def get_user_id(x_user_id: str | None = Header(default=None)) -> str:
    if not x_user_id:
        raise HTTPException(status_code=401, detail="Missing X-User-Id header")
    return x_user_id


async def load_account(ledger: CreditLedger, user_id: str) -> UserCreditAccount:
    try:
        return await ledger.get_account(user_id)
    except ChainWiseError as e:
        raise HTTPException(status_code=e.status_code, detail=str(e))
