from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict

Sentiment = Literal["bullish", "bearish", "neutral"]


class AssetMarketData(BaseModel):
    price: float
    change_24h: float
    change_24h_percent: float
    market_cap: float
    volume: float
    high_24h: float
    low_24h: float
    ath: float
    ath_change_percent: float


class MarketSentiment(BaseModel):
    dominance_btc: float
    total_market_cap: float
    fear_greed_index: int | None = None
    trending_sentiment: Sentiment = "neutral"


class TopMover(BaseModel):
    symbol: str
    name: str
    price: float
    change_24h_percent: float


class MarketSnapshot(BaseModel):
    """Point-in-time view of the crypto market, always replaced as a whole."""

    bitcoin: AssetMarketData
    ethereum: AssetMarketData
    market_sentiment: MarketSentiment
    top_movers: list[TopMover] = []
    last_updated: datetime

    model_config = ConfigDict(frozen=True)


class TechnicalAnalysis(BaseModel):
    support: float
    resistance: float
    trend: Sentiment
    risk_reward: str
    recommendation: Literal["buy", "sell", "hold"]
    timeframe: str = "24h"


class CryptoPrice(BaseModel):
    id: str
    symbol: str
    name: str
    current_price: float
    price_change_24h: float | None = None
    price_change_percentage_24h: float | None = None
    market_cap: float | None = None
    total_volume: float | None = None
    high_24h: float | None = None
    low_24h: float | None = None
    last_updated: str | None = None
