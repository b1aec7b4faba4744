"""Conversational scenarios layered on top of a persona prompt."""
import json
from typing import Callable, Literal

from pydantic import BaseModel, ConfigDict

from chainwise.models.market import MarketSnapshot

ScenarioCategory = Literal[
    "market-analysis", "trading", "education", "portfolio", "news-reaction"
]


class ScenarioTemplate(BaseModel):
    id: str
    name: str
    category: ScenarioCategory
    personas: tuple[str, ...]
    context_prompt: str
    expected_output_format: str

    model_config = ConfigDict(frozen=True)


CRYPTO_SCENARIOS: dict[str, ScenarioTemplate] = {
    "btc_price_prediction": ScenarioTemplate(
        id="btc_price_prediction",
        name="Bitcoin Price Analysis",
        category="market-analysis",
        personas=("buddy", "professor", "trader"),
        context_prompt="""User is asking about Bitcoin's price direction. Use LIVE market data to provide:
- Current BTC price and 24h movement from your data feed
- Key technical levels (support/resistance) from live charts
- Market sentiment indicators from your context
- Correlation with macro factors (DXY, stocks) if available""",
        expected_output_format="Price analysis with specific levels and actionable guidance",
    ),
    "altcoin_opportunity": ScenarioTemplate(
        id="altcoin_opportunity",
        name="Altcoin Investment Opportunity",
        category="trading",
        personas=("professor", "trader"),
        context_prompt="""User is asking about altcoin opportunities. Focus on:
- Current altcoin performance vs BTC/ETH from live data
- Sector rotation signals and narrative trends
- Volume and momentum indicators from your data
- Risk-adjusted opportunity assessment""",
        expected_output_format="Specific altcoin recommendations with entry criteria and risk management",
    ),
    "market_crash_response": ScenarioTemplate(
        id="market_crash_response",
        name="Market Crash Response",
        category="education",
        personas=("buddy", "professor"),
        context_prompt="""Market is experiencing significant downside movement. User needs guidance on:
- Current market conditions and volatility levels from live data
- Historical context for similar market events
- Risk management and portfolio protection strategies
- Psychological support and decision-making framework""",
        expected_output_format="Calm, educational response with actionable protective measures",
    ),
    "defi_yield_analysis": ScenarioTemplate(
        id="defi_yield_analysis",
        name="DeFi Yield Strategy",
        category="portfolio",
        personas=("professor", "trader"),
        context_prompt="""User is asking about DeFi yield opportunities. Address:
- Current yield rates across major protocols from live data
- Risk assessment for different DeFi strategies
- Gas costs and efficiency considerations from network data
- Portfolio allocation recommendations for DeFi exposure""",
        expected_output_format="Structured DeFi strategy with specific protocols and risk warnings",
    ),
    "news_reaction_analysis": ScenarioTemplate(
        id="news_reaction_analysis",
        name="Breaking News Impact",
        category="news-reaction",
        personas=("professor", "trader"),
        context_prompt="""Breaking crypto news has just occurred. User wants to understand impact:
- Immediate market reaction from live price data
- Historical precedent for similar news events
- Short-term and long-term market implications
- Trading opportunities and risks from this development""",
        expected_output_format="Rapid news analysis with market impact assessment and action items",
    ),
    "portfolio_rebalancing": ScenarioTemplate(
        id="portfolio_rebalancing",
        name="Portfolio Rebalancing",
        category="portfolio",
        personas=("buddy", "professor"),
        context_prompt="""User needs portfolio rebalancing advice. Consider:
- Current portfolio allocation vs target weights
- Market conditions and asset performance from live data
- Rebalancing frequency and tax implications
- Risk tolerance and investment timeline adjustments""",
        expected_output_format="Step-by-step rebalancing plan with specific allocation targets",
    ),
    "bear_market_strategy": ScenarioTemplate(
        id="bear_market_strategy",
        name="Bear Market Navigation",
        category="education",
        personas=("buddy", "professor"),
        context_prompt="""Market is in sustained downtrend. User needs bear market guidance:
- Current market phase identification from trend data
- Historical bear market patterns and duration
- Accumulation strategies and dollar-cost averaging
- Psychological resilience and long-term perspective""",
        expected_output_format="Comprehensive bear market survival guide with actionable steps",
    ),
    "bull_market_optimization": ScenarioTemplate(
        id="bull_market_optimization",
        name="Bull Market Profit-Taking",
        category="trading",
        personas=("professor", "trader"),
        context_prompt="""Market is in strong uptrend. User needs bull market strategy:
- Current momentum and euphoria indicators from market data
- Profit-taking strategies and target levels
- Risk management during exuberant phases
- Portfolio optimization for continued upside with downside protection""",
        expected_output_format="Bull market strategy with specific profit-taking levels and risk controls",
    ),
    "regulatory_impact": ScenarioTemplate(
        id="regulatory_impact",
        name="Regulatory News Analysis",
        category="news-reaction",
        personas=("professor",),
        context_prompt="""New regulatory developments affecting crypto. User needs analysis:
- Immediate market reaction to regulatory news from price data
- Long-term implications for crypto adoption and infrastructure
- Geographic impact and jurisdiction-specific effects
- Portfolio positioning recommendations given regulatory changes""",
        expected_output_format="Educational analysis of regulatory impact with strategic positioning advice",
    ),
    "technical_breakdown": ScenarioTemplate(
        id="technical_breakdown",
        name="Technical Analysis Deep Dive",
        category="trading",
        personas=("professor", "trader"),
        context_prompt="""User wants detailed technical analysis. Provide:
- Current chart patterns and trend analysis from live data
- Key technical indicators (RSI, MACD, moving averages) readings
- Support and resistance levels with confluence zones
- Volume analysis and momentum confirmation signals""",
        expected_output_format="Comprehensive technical analysis with specific trading levels and signals",
    ),
}

ScenarioPredicate = Callable[[str, MarketSnapshot | None], bool]


def _sentiment(snapshot: MarketSnapshot | None) -> str | None:
    if snapshot is None:
        return None
    return snapshot.market_sentiment.trending_sentiment


def _mentions(message: str, *keywords: str) -> bool:
    return any(keyword in message for keyword in keywords)


# Evaluated in order; the first matching predicate wins.
SCENARIO_RULES: list[tuple[ScenarioPredicate, ScenarioTemplate]] = [
    (
        lambda m, s: "price" in m and _mentions(m, "bitcoin", "btc"),
        CRYPTO_SCENARIOS["btc_price_prediction"],
    ),
    (
        lambda m, s: "altcoin" in m or ("alt" in m and "opportunity" in m),
        CRYPTO_SCENARIOS["altcoin_opportunity"],
    ),
    (
        lambda m, s: _sentiment(s) == "bearish" and _mentions(m, "crash", "dump", "falling"),
        CRYPTO_SCENARIOS["market_crash_response"],
    ),
    (
        lambda m, s: _mentions(m, "defi", "yield", "staking"),
        CRYPTO_SCENARIOS["defi_yield_analysis"],
    ),
    (
        lambda m, s: _mentions(m, "portfolio", "allocation", "rebalance"),
        CRYPTO_SCENARIOS["portfolio_rebalancing"],
    ),
    (
        lambda m, s: _mentions(m, "technical", "chart", "rsi", "support"),
        CRYPTO_SCENARIOS["technical_breakdown"],
    ),
    (
        lambda m, s: _sentiment(s) == "bullish" and _mentions(m, "bull", "moon", "profit"),
        CRYPTO_SCENARIOS["bull_market_optimization"],
    ),
    (
        lambda m, s: _sentiment(s) == "bearish" and _mentions(m, "bear", "dca", "accumulate"),
        CRYPTO_SCENARIOS["bear_market_strategy"],
    ),
]


def identify_scenario(
    message: str, snapshot: MarketSnapshot | None = None
) -> ScenarioTemplate | None:
    lower_message = message.lower()
    for predicate, scenario in SCENARIO_RULES:
        if predicate(lower_message, snapshot):
            return scenario
    return None


def enhance_prompt_with_scenario(
    base_prompt: str,
    scenario: ScenarioTemplate,
    persona: str,
    snapshot: MarketSnapshot | None,
) -> str:
    """Append the scenario block, unless the scenario does not apply to ``persona``."""
    if persona not in scenario.personas:
        return base_prompt

    market_json = json.dumps(
        snapshot.model_dump(mode="json") if snapshot is not None else None, indent=2
    )
    return (
        f"{base_prompt}\n\n"
        f"**SCENARIO CONTEXT: {scenario.name.upper()}**\n"
        f"{scenario.context_prompt}\n\n"
        f"**EXPECTED OUTPUT**: {scenario.expected_output_format}\n\n"
        "**LIVE MARKET DATA FOR SCENARIO**: Use the following real-time data to "
        "inform your scenario-specific response:\n"
        f"{market_json}\n"
    )
