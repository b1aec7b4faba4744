"""Scenario matching precedence and prompt enhancement."""

import pytest

from chainwise.core.scenarios import (
    CRYPTO_SCENARIOS,
    SCENARIO_RULES,
    enhance_prompt_with_scenario,
    identify_scenario,
)
from conftest import make_snapshot


def scenario_id(message, sentiment="neutral"):
    scenario = identify_scenario(message, make_snapshot(sentiment=sentiment))
    return scenario.id if scenario else None


class TestIdentifyScenario:
    @pytest.mark.parametrize(
        "message,sentiment,expected",
        [
            ("What is the BTC price today?", "neutral", "btc_price_prediction"),
            ("Any altcoin worth buying?", "neutral", "altcoin_opportunity"),
            ("Is there an alt opportunity here?", "neutral", "altcoin_opportunity"),
            ("Why is everything falling?", "bearish", "market_crash_response"),
            ("Best staking options?", "neutral", "defi_yield_analysis"),
            ("How should I rebalance?", "neutral", "portfolio_rebalancing"),
            ("Show me the RSI", "neutral", "technical_breakdown"),
            ("When moon?", "bullish", "bull_market_optimization"),
            ("Should I DCA now?", "bearish", "bear_market_strategy"),
            ("Hello there", "neutral", None),
        ],
    )
    def test_each_rule(self, message, sentiment, expected):
        assert scenario_id(message, sentiment) == expected

    def test_sentiment_gated_rules_need_matching_sentiment(self):
        assert scenario_id("Is this a crash?", "neutral") is None
        assert scenario_id("When moon?", "bearish") is None
        assert scenario_id("Should I DCA now?", "bullish") is None

    def test_price_prediction_beats_technical(self):
        assert scenario_id("Bitcoin price support levels?") == "btc_price_prediction"

    def test_altcoin_beats_defi(self):
        assert scenario_id("altcoin yield farming") == "altcoin_opportunity"

    def test_crash_beats_portfolio_when_bearish(self):
        assert scenario_id("crash is hitting my portfolio", "bearish") == "market_crash_response"
        assert scenario_id("crash is hitting my portfolio", "neutral") == "portfolio_rebalancing"

    def test_defi_beats_portfolio(self):
        assert scenario_id("defi portfolio ideas") == "defi_yield_analysis"

    def test_portfolio_beats_technical(self):
        assert scenario_id("portfolio chart review") == "portfolio_rebalancing"

    def test_technical_beats_bull(self):
        assert scenario_id("chart says bull run", "bullish") == "technical_breakdown"

    def test_missing_snapshot_skips_sentiment_rules(self):
        assert identify_scenario("crash", None) is None

    def test_rule_order_pinned(self):
        assert [template.id for _, template in SCENARIO_RULES] == [
            "btc_price_prediction",
            "altcoin_opportunity",
            "market_crash_response",
            "defi_yield_analysis",
            "portfolio_rebalancing",
            "technical_breakdown",
            "bull_market_optimization",
            "bear_market_strategy",
        ]

    def test_news_templates_have_no_rule(self):
        matched = {template.id for _, template in SCENARIO_RULES}
        assert "news_reaction_analysis" in CRYPTO_SCENARIOS
        assert "regulatory_impact" in CRYPTO_SCENARIOS
        assert "news_reaction_analysis" not in matched
        assert "regulatory_impact" not in matched


class TestEnhancePrompt:
    def test_appends_block_for_listed_persona(self):
        scenario = CRYPTO_SCENARIOS["btc_price_prediction"]
        prompt = enhance_prompt_with_scenario("BASE", scenario, "trader", make_snapshot())

        assert prompt.startswith("BASE\n\n**SCENARIO CONTEXT: BITCOIN PRICE ANALYSIS**")
        assert scenario.context_prompt in prompt
        assert f"**EXPECTED OUTPUT**: {scenario.expected_output_format}" in prompt
        assert '"price": 50000.0' in prompt

    def test_unlisted_persona_unchanged(self):
        scenario = CRYPTO_SCENARIOS["altcoin_opportunity"]
        assert enhance_prompt_with_scenario("BASE", scenario, "buddy", make_snapshot()) == "BASE"
