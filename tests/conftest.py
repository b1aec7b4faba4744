"""Shared fixtures for the ChainWise test suite."""

from datetime import datetime, timezone

import pytest

from chainwise.models.market import (
    AssetMarketData,
    MarketSentiment,
    MarketSnapshot,
    TopMover,
)


def make_snapshot(
    btc_price: float = 50000,
    btc_change: float = 2.5,
    sentiment: str = "neutral",
) -> MarketSnapshot:
    return MarketSnapshot(
        bitcoin=AssetMarketData(
            price=btc_price,
            change_24h=btc_price * btc_change / 100,
            change_24h_percent=btc_change,
            market_cap=1_000_000_000_000,
            volume=30_000_000_000,
            high_24h=51000,
            low_24h=49000,
            ath=69000,
            ath_change_percent=-27.5,
        ),
        ethereum=AssetMarketData(
            price=3000,
            change_24h=30,
            change_24h_percent=1.0,
            market_cap=360_000_000_000,
            volume=15_000_000_000,
            high_24h=3050,
            low_24h=2950,
            ath=4878,
            ath_change_percent=-38.5,
        ),
        market_sentiment=MarketSentiment(
            dominance_btc=52.1,
            total_market_cap=1_920_000_000_000,
            trending_sentiment=sentiment,
        ),
        top_movers=[
            TopMover(symbol="SOL", name="Solana", price=150, change_24h_percent=6.2),
            TopMover(symbol="BTC", name="Bitcoin", price=btc_price, change_24h_percent=btc_change),
            TopMover(symbol="ETH", name="Ethereum", price=3000, change_24h_percent=1.0),
        ],
        last_updated=datetime(2024, 5, 1, 12, 30, 0, tzinfo=timezone.utc),
    )


class FakeMarketData:
    """Market data provider returning a fixed snapshot and counting calls."""

    def __init__(self, snapshot: MarketSnapshot | None = None):
        self.snapshot = snapshot or make_snapshot()
        self.calls = 0

    async def get_current_market_data(self) -> MarketSnapshot:
        self.calls += 1
        return self.snapshot


class FakeDocumentation:
    def __init__(self, fragment: str = ""):
        self.fragment = fragment
        self.calls = 0

    async def get_contextual_info(self, persona: str, message: str) -> str:
        self.calls += 1
        return self.fragment


class RecordingBackend:
    """Completion backend that records requests and returns a canned answer."""

    def __init__(self, text: str = "live answer", error: Exception | None = None, name: str = "openai"):
        self.name = name
        self.text = text
        self.error = error
        self.requests = []

    async def complete(self, request) -> str:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self.text


@pytest.fixture
def snapshot() -> MarketSnapshot:
    return make_snapshot()


@pytest.fixture
def market_data() -> FakeMarketData:
    return FakeMarketData()


@pytest.fixture
def documentation() -> FakeDocumentation:
    return FakeDocumentation()
