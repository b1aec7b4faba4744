"""Live crypto market data for prompt enrichment.

Wraps the CoinGecko REST API with a shared TTL snapshot cache. Every public
method degrades instead of raising: the snapshot falls back to static values,
point lookups fall back to ``None`` or ``{}``.
"""
import asyncio
from datetime import datetime, timezone
from typing import Any

import httpx
from loguru import logger

from chainwise.core.config import settings
from chainwise.models.market import (
    AssetMarketData,
    CryptoPrice,
    MarketSentiment,
    MarketSnapshot,
    TechnicalAnalysis,
    TopMover,
)
from chainwise.utils.cache import TTLCache
from chainwise.utils.formatting import format_usd, signed_percent

SYMBOL_TO_COINGECKO_ID: dict[str, str] = {
    "btc": "bitcoin",
    "bitcoin": "bitcoin",
    "eth": "ethereum",
    "ethereum": "ethereum",
    "bnb": "binancecoin",
    "sol": "solana",
    "solana": "solana",
    "ada": "cardano",
    "cardano": "cardano",
    "xrp": "ripple",
}


def create_coingecko_client(
    base_url: str | None = None, api_key: str | None = None, timeout: float = 10.0
) -> httpx.AsyncClient:
    headers: dict[str, str] = {"Accept": "application/json"}
    api_key = api_key if api_key is not None else settings.COINGECKO_API_KEY
    if api_key:
        headers["x-cg-pro-api-key"] = api_key
    return httpx.AsyncClient(
        base_url=base_url or settings.COINGECKO_BASE_URL,
        headers=headers,
        timeout=timeout,
    )


def fallback_market_snapshot() -> MarketSnapshot:
    """Static snapshot served when CoinGecko is unreachable."""
    return MarketSnapshot(
        bitcoin=AssetMarketData(
            price=112869,
            change_24h=1450,
            change_24h_percent=1.3,
            market_cap=2_232_000_000_000,
            volume=28_500_000_000,
            high_24h=115000,
            low_24h=110000,
            ath=115000,
            ath_change_percent=-1.8,
        ),
        ethereum=AssetMarketData(
            price=4423,
            change_24h=25,
            change_24h_percent=0.57,
            market_cap=532_000_000_000,
            volume=15_200_000_000,
            high_24h=4450,
            low_24h=4380,
            ath=4878,
            ath_change_percent=-9.3,
        ),
        market_sentiment=MarketSentiment(
            dominance_btc=54.5,
            total_market_cap=2_800_000_000_000,
            trending_sentiment="neutral",
        ),
        top_movers=[
            TopMover(symbol="BTC", name="Bitcoin", price=112869, change_24h_percent=1.3),
            TopMover(symbol="ETH", name="Ethereum", price=4423, change_24h_percent=0.57),
            TopMover(symbol="SOL", name="Solana", price=256, change_24h_percent=2.1),
        ],
        last_updated=datetime.now(timezone.utc),
    )


def _asset_from_market_item(item: dict[str, Any]) -> AssetMarketData:
    return AssetMarketData(
        price=item.get("current_price") or 0,
        change_24h=item.get("price_change_24h") or 0,
        change_24h_percent=item.get("price_change_percentage_24h") or 0,
        market_cap=item.get("market_cap") or 0,
        volume=item.get("total_volume") or 0,
        high_24h=item.get("high_24h") or 0,
        low_24h=item.get("low_24h") or 0,
        ath=item.get("ath") or 0,
        ath_change_percent=item.get("ath_change_percentage") or 0,
    )


def build_snapshot(coins: list[dict[str, Any]]) -> MarketSnapshot:
    """Derive a snapshot from a ``/coins/markets`` payload ordered by market cap."""
    bitcoin = next((c for c in coins if c.get("id") == "bitcoin"), None)
    ethereum = next((c for c in coins if c.get("id") == "ethereum"), None)
    if bitcoin is None or ethereum is None:
        raise ValueError("Could not fetch Bitcoin or Ethereum data")

    total_market_cap = sum(c.get("market_cap") or 0 for c in coins)
    dominance_btc = (
        round((bitcoin.get("market_cap") or 0) / total_market_cap * 100, 2)
        if total_market_cap
        else 0.0
    )

    top_five_changes = [c.get("price_change_percentage_24h") or 0 for c in coins[:5]]
    avg_change = sum(top_five_changes) / len(top_five_changes)
    if avg_change > 2:
        sentiment = "bullish"
    elif avg_change < -2:
        sentiment = "bearish"
    else:
        sentiment = "neutral"

    movers = sorted(
        coins[:20],
        key=lambda c: c.get("price_change_percentage_24h") or 0,
        reverse=True,
    )[:5]

    return MarketSnapshot(
        bitcoin=_asset_from_market_item(bitcoin),
        ethereum=_asset_from_market_item(ethereum),
        market_sentiment=MarketSentiment(
            dominance_btc=dominance_btc,
            total_market_cap=total_market_cap,
            trending_sentiment=sentiment,
        ),
        top_movers=[
            TopMover(
                symbol=(c.get("symbol") or "").upper(),
                name=c.get("name") or "",
                price=c.get("current_price") or 0,
                change_24h_percent=c.get("price_change_percentage_24h") or 0,
            )
            for c in movers
        ],
        last_updated=datetime.now(timezone.utc),
    )


def generate_technical_analysis(
    price: float, change_24h_percent: float, high_24h: float, low_24h: float
) -> TechnicalAnalysis:
    """Heuristic support/resistance read from the 24h range."""
    current_range = high_24h - low_24h
    price_position = (price - low_24h) / current_range if current_range else 0.5

    support = low_24h * 0.995
    resistance = high_24h * 1.005

    if change_24h_percent > 3:
        trend = "bullish"
    elif change_24h_percent < -3:
        trend = "bearish"
    else:
        trend = "neutral"

    if price:
        upside = (resistance - price) / price * 100
        downside = (price - support) / price * 100
    else:
        upside = downside = 0.0
    risk_reward = f"1:{round(upside / max(downside, 1), 1)}"

    if trend == "bullish" and price_position < 0.7:
        recommendation = "buy"
    elif trend == "bearish" and price_position > 0.3:
        recommendation = "sell"
    else:
        recommendation = "hold"

    return TechnicalAnalysis(
        support=round(support, 2),
        resistance=round(resistance, 2),
        trend=trend,
        risk_reward=risk_reward,
        recommendation=recommendation,
        timeframe="24h",
    )


def _movers_line(snapshot: MarketSnapshot, count: int) -> str:
    return ", ".join(
        f"{m.symbol} {signed_percent(m.change_24h_percent, 1)}"
        for m in snapshot.top_movers[:count]
    )


def format_market_data_for_ai(snapshot: MarketSnapshot, persona: str) -> str:
    """Render the snapshot as a persona-styled block for the system prompt."""
    btc = snapshot.bitcoin
    eth = snapshot.ethereum
    sentiment = snapshot.market_sentiment
    timestamp = snapshot.last_updated.strftime("%H:%M:%S UTC")

    if persona == "buddy":
        return (
            "CURRENT CRYPTO MARKET (Live Data):\n"
            f"💰 Bitcoin: {format_usd(btc.price)} ({signed_percent(btc.change_24h_percent)} today)\n"
            f"💎 Ethereum: {format_usd(eth.price)} ({signed_percent(eth.change_24h_percent)} today)\n"
            f"📊 Market Mood: {sentiment.trending_sentiment}\n"
            f"🔥 Today's Top Movers: {_movers_line(snapshot, 3)}\n"
            f"⏰ Updated: {timestamp}"
        )

    if persona == "professor":
        return (
            "MARKET ANALYSIS DATA (Real-Time):\n"
            f"Bitcoin: {format_usd(btc.price)} | 24h: {signed_percent(btc.change_24h_percent)}"
            f" | Vol: ${btc.volume / 1e9:.1f}B\n"
            f"Ethereum: {format_usd(eth.price)} | 24h: {signed_percent(eth.change_24h_percent)}"
            f" | Vol: ${eth.volume / 1e9:.1f}B\n"
            f"Market Cap: ${sentiment.total_market_cap / 1e12:.2f}T"
            f" | BTC Dominance: {sentiment.dominance_btc}%\n"
            f"Sentiment: {sentiment.trending_sentiment.upper()}\n"
            f"Data as of: {timestamp}"
        )

    if persona == "trader":
        lines = ["TRADING DATA (Live):"]
        for symbol, asset in (("BTC", btc), ("ETH", eth)):
            ta = generate_technical_analysis(
                asset.price, asset.change_24h_percent, asset.high_24h, asset.low_24h
            )
            lines.append(
                f"{symbol}: {format_usd(asset.price)} | {signed_percent(asset.change_24h_percent)}"
                f" | S: {format_usd(ta.support)} | R: {format_usd(ta.resistance)}"
                f" | {ta.trend.upper()} | R/R: {ta.risk_reward}"
            )
        lines.append(
            f"Sentiment: {sentiment.trending_sentiment.upper()} | Movers: {_movers_line(snapshot, 2)}"
        )
        lines.append(f"Timestamp: {timestamp}")
        return "\n".join(lines)

    return ""


class MarketDataService:
    """CoinGecko-backed market snapshot provider with a shared TTL cache."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        cache: TTLCache[MarketSnapshot] | None = None,
        top_n: int | None = None,
        retry_backoff: float = 1.0,
    ):
        self._client = client
        self._cache = cache or TTLCache(settings.MARKET_DATA_TTL)
        self._top_n = top_n or settings.MARKET_TOP_N
        self._retry_backoff = retry_backoff

    async def _get_json(self, path: str, params: dict[str, Any]) -> Any:
        response = await self._client.get(path, params=params)
        if response.status_code == 429:
            logger.warning(f"CoinGecko rate limited on {path}, retrying once")
            await asyncio.sleep(self._retry_backoff)
            response = await self._client.get(path, params=params)
        response.raise_for_status()
        return response.json()

    async def _fetch_markets(self, per_page: int, ids: str | None = None) -> list[dict]:
        params: dict[str, Any] = {
            "vs_currency": "usd",
            "order": "market_cap_desc",
            "per_page": per_page,
            "page": 1,
            "sparkline": "false",
            "price_change_percentage": "24h",
        }
        if ids:
            params["ids"] = ids
        return await self._get_json("/coins/markets", params)

    async def get_current_market_data(self) -> MarketSnapshot:
        cached = self._cache.get()
        if cached is not None:
            logger.debug("Serving cached market snapshot")
            return cached

        try:
            logger.info("Fetching fresh market data for AI")
            coins = await self._fetch_markets(self._top_n)
            snapshot = build_snapshot(coins)
            self._cache.set(snapshot)
            logger.info("Fresh market data cached for AI responses")
            return snapshot
        except Exception as e:
            logger.error(f"Error fetching market data: {e}")
            cached = self._cache.get()
            if cached is not None:
                return cached
            return fallback_market_snapshot()

    async def get_crypto_price(self, symbol: str) -> CryptoPrice | None:
        coin_id = SYMBOL_TO_COINGECKO_ID.get(symbol.lower())
        if coin_id is None:
            return None

        try:
            coins = await self._fetch_markets(1, ids=coin_id)
            if not coins:
                return None
            return CryptoPrice.model_validate(coins[0])
        except Exception as e:
            logger.error(f"Error fetching price for {symbol}: {e}")
            return None

    async def get_bulk_prices(self, coin_ids: list[str]) -> dict[str, dict[str, float]]:
        if not coin_ids:
            return {}
        try:
            return await self._get_json(
                "/simple/price",
                {
                    "ids": ",".join(coin_ids),
                    "vs_currencies": "usd",
                    "include_24hr_change": "true",
                },
            )
        except Exception as e:
            logger.error(f"Error fetching bulk prices: {e}")
            return {}
