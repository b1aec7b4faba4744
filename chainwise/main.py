from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from chainwise.api.dependencies import limiter
from chainwise.api.routes import chat, credits, market, tools
from chainwise.core.config import settings
from chainwise.llm.backends import create_completion_backend
from chainwise.llm.utils import create_tavily_client
from chainwise.services.credit_service import InMemoryCreditLedger
from chainwise.services.documentation_service import DocumentationService
from chainwise.services.market_data_service import (
    MarketDataService,
    create_coingecko_client,
)
from chainwise.services.openai_service import AIService

DEMO_ACCOUNTS = {"demo-free": "free", "demo-pro": "pro", "demo-elite": "elite"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Build the AI pipeline on startup and close upstream clients on shutdown."""
    coingecko_client = create_coingecko_client()
    market_data = MarketDataService(coingecko_client)
    documentation = DocumentationService(create_tavily_client())

    ledger = InMemoryCreditLedger()
    if settings.SEED_DEMO_ACCOUNTS:
        for user_id, tier in DEMO_ACCOUNTS.items():
            ledger.seed(user_id, tier)
        logger.info(f"Seeded demo accounts: {', '.join(DEMO_ACCOUNTS)}")

    app.state.market_data = market_data
    app.state.ledger = ledger
    app.state.ai_service = AIService(
        backend=create_completion_backend(settings),
        market_data=market_data,
        documentation=documentation,
    )
    yield
    await coingecko_client.aclose()


app = FastAPI(title=settings.APP_NAME, debug=settings.DEBUG, lifespan=lifespan)

# Configure rate limiting
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.ALLOWED_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["Content-Type", "Authorization", "X-User-Id"],
)

# Include routers
app.include_router(chat.router, tags=["chat"])
app.include_router(tools.router, tags=["tools"])
app.include_router(credits.router, tags=["credits"])
app.include_router(market.router, tags=["market"])


@app.get("/")
def read_root():
    return {"status": "ok", "service": settings.APP_NAME}
