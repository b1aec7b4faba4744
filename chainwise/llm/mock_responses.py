"""Deterministic stand-in answers used when the live model is unavailable.

Responses are keyword driven and always quote the numbers of the snapshot they
are given, so the same (persona, message, snapshot) triple yields the same text.
"""
import json
from typing import Any

from chainwise.models.market import AssetMarketData, MarketSnapshot
from chainwise.services.market_data_service import generate_technical_analysis
from chainwise.utils.formatting import format_usd, signed_percent


def _mentions(message: str, *keywords: str) -> bool:
    return any(keyword in message for keyword in keywords)


def _price_line(name: str, asset: AssetMarketData) -> str:
    return f"{name} is at {format_usd(asset.price)} ({signed_percent(asset.change_24h_percent)} today)"


def _signal_line(symbol: str, asset: AssetMarketData) -> str:
    ta = generate_technical_analysis(
        asset.price, asset.change_24h_percent, asset.high_24h, asset.low_24h
    )
    return (
        f"{symbol}: {format_usd(asset.price)} | {signed_percent(asset.change_24h_percent)}"
        f" | S: {format_usd(ta.support)} | R: {format_usd(ta.resistance)}"
        f" | {ta.trend.upper()} | R/R: {ta.risk_reward} | Action: {ta.recommendation.upper()}"
    )


class MockResponseGenerator:
    def chat_response(
        self, persona: str, message: str, snapshot: MarketSnapshot
    ) -> str:
        lower_message = message.lower()
        handler = getattr(self, f"_{persona}_response", None)
        if handler is None:
            return "I'm experiencing technical difficulties. Please try again."
        return handler(lower_message, snapshot)

    def _buddy_response(self, message: str, snapshot: MarketSnapshot) -> str:
        btc, eth = snapshot.bitcoin, snapshot.ethereum
        mood = snapshot.market_sentiment.trending_sentiment
        if _mentions(message, "bitcoin", "btc"):
            return (
                f"Hey! So here's what I'm seeing: {_price_line('Bitcoin', btc)}. "
                f"I'd keep an eye on {format_usd(btc.low_24h)} as support. The overall "
                f"market mood is {mood}. Always do your own research and never invest "
                "more than you can afford to lose! 🚀"
            )
        if _mentions(message, "ethereum", "eth"):
            return (
                f"Great question! {_price_line('Ethereum', eth)}. It powers most of "
                f"DeFi and NFTs, so it's worth understanding. Today's range has been "
                f"{format_usd(eth.low_24h)} to {format_usd(eth.high_24h)}. Take it slow "
                "and build your position over time! 💎"
            )
        if _mentions(message, "price", "sell"):
            return (
                f"That's a great question! Right now {_price_line('Bitcoin', btc)} and the "
                f"market mood is {mood}. Market timing is tricky, so think about your "
                "goals, your risk tolerance and your overall portfolio balance. Having a "
                "plan that works for you matters most!"
            )
        return (
            f"Hey there! Quick market check: {_price_line('Bitcoin', btc)} and "
            f"{_price_line('Ethereum', eth)}. What would you like to know about the "
            "crypto world today?"
        )

    def _professor_response(self, message: str, snapshot: MarketSnapshot) -> str:
        btc, eth = snapshot.bitcoin, snapshot.ethereum
        sentiment = snapshot.market_sentiment
        market_line = (
            f"BTC @ {format_usd(btc.price)}, ETH @ {format_usd(eth.price)}, "
            f"Market Cap ${sentiment.total_market_cap / 1e12:.2f}T, "
            f"BTC Dominance {sentiment.dominance_btc}%."
        )
        if _mentions(message, "bitcoin", "btc"):
            return (
                f"{market_line} Bitcoin remains the dominant cryptocurrency with strong "
                f"institutional adoption. Its 24h range of {format_usd(btc.low_24h)} to "
                f"{format_usd(btc.high_24h)} frames the near-term structure. First, "
                "consider market cycles. Second, weigh regulatory developments. "
                "Therefore, size positions to your timeline."
            )
        if _mentions(message, "ethereum", "eth"):
            return (
                f"{market_line} Ethereum is {signed_percent(eth.change_24h_percent)} over "
                f"24h and trades {abs(eth.ath_change_percent):.1f}% from its all-time "
                "high. Its value accrues from network usage, so on-chain activity and "
                "fee revenue are the fundamentals worth studying."
            )
        if _mentions(message, "price", "sell"):
            return (
                f"{market_line} Investment decisions should rest on fundamental analysis, "
                "technical indicators and your investment timeline. With sentiment "
                f"{sentiment.trending_sentiment.upper()}, review volume patterns and your "
                "overall allocation before acting."
            )
        return (
            f"{market_line} I'm here to provide educational insights about cryptocurrency "
            "markets and blockchain technology. What would you like to learn about?"
        )

    def _trader_response(self, message: str, snapshot: MarketSnapshot) -> str:
        btc, eth = snapshot.bitcoin, snapshot.ethereum
        sentiment = snapshot.market_sentiment.trending_sentiment.upper()
        if _mentions(message, "bitcoin", "btc"):
            return f"{_signal_line('BTC', btc)}\nSentiment: {sentiment}. Set stops below support."
        if _mentions(message, "ethereum", "eth"):
            return f"{_signal_line('ETH', eth)}\nSentiment: {sentiment}. Set stops below support."
        if _mentions(message, "price", "sell"):
            return (
                f"{_signal_line('BTC', btc)}\n"
                "Consider partial profit-taking on strength. Trailing stops 8-12% below "
                "entry. Monitor volume and momentum."
            )
        return (
            f"{_signal_line('BTC', btc)}\n{_signal_line('ETH', eth)}\n"
            "What's your current position or target asset?"
        )

    def tool_response(
        self, tool: str, user_input: Any, snapshot: MarketSnapshot
    ) -> str:
        btc, eth = snapshot.bitcoin, snapshot.ethereum
        sentiment = snapshot.market_sentiment
        market_context = (
            f"BTC {format_usd(btc.price)} ({signed_percent(btc.change_24h_percent)}) | "
            f"ETH {format_usd(eth.price)} ({signed_percent(eth.change_24h_percent)}) | "
            f"Sentiment {sentiment.trending_sentiment.upper()} | "
            f"BTC Dominance {sentiment.dominance_btc}%"
        )
        request = json.dumps(user_input, sort_keys=True, default=str)
        movers = ", ".join(
            f"{m.symbol} {signed_percent(m.change_24h_percent, 1)}"
            for m in snapshot.top_movers[:3]
        )
        btc_ta = generate_technical_analysis(
            btc.price, btc.change_24h_percent, btc.high_24h, btc.low_24h
        )

        bodies = {
            "portfolio_allocator": (
                "**Allocation Matrix**\n"
                "- BTC 45% | ETH 30% | Large-cap alts 15% | Stablecoins 10%\n"
                "**Risk Metrics**: Risk score 6/10, rebalance on 5% drift\n"
                f"**Implementation**: DCA over 4 weeks, first tranche near {format_usd(btc_ta.support)}"
            ),
            "whale_tracker": (
                "**Executive Summary**: Whale wallets show mixed accumulation and "
                "distribution across the majors.\n"
                f"**Key Movements**: Large whale transfers cluster around the BTC 24h range "
                f"{format_usd(btc.low_24h)} to {format_usd(btc.high_24h)}.\n"
                "**Market Impact**: Exchange inflows from whale addresses would add sell "
                "pressure; cold storage outflows signal accumulation.\n"
                "**Risk Monitoring**: Watch for whale deposits to exchanges above 1,000 BTC."
            ),
            "narrative_scanner": (
                "**Narrative Radar**: AI tokens, real-world assets and L2 scaling lead "
                "social volume.\n"
                f"**Impact Scoring**: Momentum leaders today: {movers}\n"
                "**Risk Monitoring**: Watch for sentiment reversal on crowded narratives."
            ),
            "smart_alerts": (
                f"**Alert Logic**: BTC break above {format_usd(btc_ta.resistance)} with "
                "volume confirmation.\n"
                f"**Trigger Specifications**: BTC close below {format_usd(btc_ta.support)} "
                "on the 4h chart.\n"
                "**Action Protocols**: Reduce exposure 25% on breakdown, add on confirmed breakout."
            ),
            "altcoin_detector": (
                f"**Opportunity Summary**: Top momentum candidates: {movers}\n"
                "**Analysis Matrix**: Momentum 7/10 | Fundamental 6/10 | Risk 5/10\n"
                "**Entry Strategy**: Scale in on pullbacks, size at most 2% per position."
            ),
            "signals_pack": (
                f"**Signal Overview**\n{_signal_line('BTC', btc)}\n{_signal_line('ETH', eth)}\n"
                f"**Risk Management**: Stop below {format_usd(btc_ta.support)}, "
                "risk at most 1% of capital per trade."
            ),
            "ai_reports": (
                f"**Executive Summary**: Market regime {sentiment.trending_sentiment.upper()}, "
                f"total cap ${sentiment.total_market_cap / 1e12:.2f}T.\n"
                f"**Market Analysis**: Top movers {movers}\n"
                "**Action Plan**: Maintain core BTC/ETH exposure, rotate gradually into "
                "strength."
            ),
        }
        body = bodies.get(
            tool, "Analysis unavailable for this tool. Please try again shortly."
        )
        return f"**Market Context**: {market_context}\n\n{body}\n\n**Request**: {request}"
