"""System prompt assembly for persona chat and premium tools."""
import json
from typing import Any

from chainwise.core.personas import PersonaDefinition
from chainwise.core.premium_tools import PremiumToolDefinition
from chainwise.core.scenarios import enhance_prompt_with_scenario, identify_scenario
from chainwise.models.market import MarketSnapshot
from chainwise.services.market_data_service import format_market_data_for_ai
from chainwise.utils.formatting import format_usd, signed_percent


def build_chat_system_prompt(
    persona: PersonaDefinition,
    message: str,
    snapshot: MarketSnapshot,
    documentation: str = "",
) -> str:
    """Persona prompt, enhanced with the matched scenario, docs and live market block."""
    system_prompt = persona.system_prompt

    scenario = identify_scenario(message, snapshot)
    if scenario:
        system_prompt = enhance_prompt_with_scenario(
            system_prompt, scenario, persona.id, snapshot
        )

    if documentation:
        system_prompt = f"{system_prompt}{documentation}"

    market_block = format_market_data_for_ai(snapshot, persona.id)
    if market_block:
        system_prompt = f"{system_prompt}\n\n{market_block}"
    return system_prompt


def build_market_context(snapshot: MarketSnapshot) -> str:
    btc = snapshot.bitcoin
    eth = snapshot.ethereum
    sentiment = snapshot.market_sentiment
    return (
        "**LIVE MARKET CONTEXT**\n"
        "Current market conditions for analysis:\n"
        f"- BTC: {format_usd(btc.price)} ({signed_percent(btc.change_24h_percent)})\n"
        f"- ETH: {format_usd(eth.price)} ({signed_percent(eth.change_24h_percent)})\n"
        f"- Market Sentiment: {(sentiment.trending_sentiment or 'neutral').upper()}\n"
        f"- Total Market Cap: ${sentiment.total_market_cap / 1e12:.2f}T\n"
        f"- BTC Dominance: {sentiment.dominance_btc}%\n\n"
        "Use this real-time data to inform your analysis and recommendations."
    )


def build_premium_tool_prompt(
    tool: PremiumToolDefinition,
    user_input: Any,
    snapshot: MarketSnapshot | None,
    user_tier: str | None,
) -> str:
    contextual_prompt = tool.system_prompt

    if snapshot is not None:
        contextual_prompt += f"\n\n{build_market_context(snapshot)}"

    contextual_prompt += (
        "\n\n**USER CONTEXT**\n"
        f"- Tier: {(user_tier or 'free').upper()}\n"
        f"- Tool: {tool.display_name}\n"
        f"- Credit Cost: {tool.credit_cost} credits\n"
        f"- Expected Output: {tool.output_format}\n\n"
        "**USER INPUT DATA**\n"
        f"{json.dumps(user_input, indent=2, default=str)}\n\n"
        "Generate your response according to the framework above, using the live "
        "market data and user input to create precise, actionable analysis."
    )
    return contextual_prompt


def build_messages(
    system_prompt: str, history: list[dict[str, str]] | None, message: str
) -> list[dict[str, str]]:
    """[system, ...history, user] in the shape the chat completions API expects."""
    messages = [{"role": "system", "content": system_prompt}]
    for item in history or []:
        messages.append({"role": item["role"], "content": item["content"]})
    messages.append({"role": "user", "content": message})
    return messages
