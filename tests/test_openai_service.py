"""AIService pipeline: hard errors, fallback paths and end-to-end scenarios."""

import asyncio
from unittest.mock import AsyncMock

import httpx
import openai
import pytest

from chainwise.core.exceptions import InsufficientTierError, InvalidPersonaError, UnknownToolError
from chainwise.llm.backends import MockBackend, create_completion_backend, is_valid_openai_key
from chainwise.llm.mock_responses import MockResponseGenerator
from chainwise.services.openai_service import AIService
from conftest import FakeDocumentation, FakeMarketData, RecordingBackend, make_snapshot


def rate_limit_error() -> openai.RateLimitError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return openai.RateLimitError(
        "You exceeded your current quota",
        response=httpx.Response(429, request=request),
        body=None,
    )


def auth_error() -> openai.AuthenticationError:
    request = httpx.Request("POST", "https://api.openai.com/v1/chat/completions")
    return openai.AuthenticationError(
        "Incorrect API key provided",
        response=httpx.Response(401, request=request),
        body=None,
    )


def make_service(backend, market_data=None, documentation=None, timeout=5.0):
    return AIService(
        backend=backend,
        market_data=market_data or FakeMarketData(),
        documentation=documentation or FakeDocumentation(),
        timeout=timeout,
    )


class SlowBackend:
    name = "openai"

    async def complete(self, request):
        await asyncio.sleep(1)
        return "too late"


class TestChatGeneration:
    @pytest.mark.asyncio
    @pytest.mark.parametrize("persona", ["buddy", "professor", "trader"])
    async def test_live_answer(self, persona):
        backend = RecordingBackend(text="  live answer \n")
        service = make_service(backend)

        generation = await service.generate_chat(persona, "What about BTC?")

        assert generation.text == "live answer"
        assert generation.source == "openai"
        assert not generation.fallback
        assert len(backend.requests) == 1

    @pytest.mark.asyncio
    async def test_request_uses_persona_model_and_history(self):
        backend = RecordingBackend()
        service = make_service(backend)
        history = [{"role": "user", "content": "hi"}, {"role": "assistant", "content": "hey"}]

        await service.generate_chat_response(
            "trader", "BTC?", history, max_tokens=200, temperature=0.2
        )

        request = backend.requests[0]
        assert request.model == "gpt-4"
        assert request.max_tokens == 200
        assert request.temperature == 0.2
        assert [m["role"] for m in request.messages] == ["system", "user", "assistant", "user"]
        assert request.messages[-1]["content"] == "BTC?"
        assert "TRADING DATA (Live):" in request.messages[0]["content"]

    @pytest.mark.asyncio
    async def test_invalid_persona_makes_no_calls(self):
        backend = RecordingBackend()
        market_data = FakeMarketData()
        documentation = FakeDocumentation()
        service = make_service(backend, market_data, documentation)

        with pytest.raises(InvalidPersonaError):
            await service.generate_chat_response("oracle", "hello")

        assert backend.requests == []
        assert market_data.calls == 0
        assert documentation.calls == 0

    @pytest.mark.asyncio
    async def test_quota_error_falls_back_to_persona_mock(self):
        snapshot = make_snapshot()
        service = make_service(RecordingBackend(error=rate_limit_error()), FakeMarketData(snapshot))

        text = await service.generate_chat_response("professor", "bitcoin outlook")

        expected = MockResponseGenerator().chat_response("professor", "bitcoin outlook", snapshot)
        assert text == expected

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "backend",
        [
            RecordingBackend(text=""),
            RecordingBackend(text="   "),
            RecordingBackend(error=auth_error()),
            RecordingBackend(error=httpx.ConnectError("boom")),
            RecordingBackend(error=RuntimeError("unexpected")),
        ],
    )
    async def test_failures_fall_back(self, backend):
        service = make_service(backend)

        generation = await service.generate_chat("buddy", "hi")

        assert generation.fallback
        assert generation.source == "mock"
        assert generation.text
        assert len(backend.requests) == 1

    @pytest.mark.asyncio
    async def test_timeout_falls_back(self):
        service = make_service(SlowBackend(), timeout=0.01)
        generation = await service.generate_chat("trader", "What about BTC?")
        assert generation.fallback
        assert generation.text.startswith("BTC: $50,000")

    @pytest.mark.asyncio
    async def test_mock_mode_is_deterministic(self):
        service = make_service(MockBackend())

        first = await service.generate_chat("buddy", "Should I sell my ETH?")
        second = await service.generate_chat("buddy", "Should I sell my ETH?")

        assert first.text == second.text
        assert first.fallback
        assert first.source == "mock"

    @pytest.mark.asyncio
    async def test_trader_btc_end_to_end(self):
        service = make_service(
            MockBackend(), FakeMarketData(make_snapshot(btc_price=50000, btc_change=2.5))
        )

        text = await service.generate_chat_response("trader", "What about BTC?")

        assert "BTC:" in text
        assert "$50,000" in text
        assert "+2.50%" in text

    @pytest.mark.asyncio
    async def test_documentation_reaches_prompt(self):
        backend = RecordingBackend()
        docs = FakeDocumentation("\n\nRelevant documentation from solidity:\npragma...")
        service = make_service(backend, documentation=docs)

        await service.generate_chat("professor", "explain solidity")

        assert "Relevant documentation from solidity" in backend.requests[0].messages[0]["content"]


class TestPremiumTools:
    @pytest.mark.asyncio
    async def test_tier_gate_blocks_before_backend(self):
        backend = AsyncMock()
        backend.name = "openai"
        market_data = FakeMarketData()
        service = make_service(backend, market_data)

        with pytest.raises(InsufficientTierError) as exc_info:
            await service.generate_premium_tool_response("whale_tracker", {}, "free")

        assert exc_info.value.required_tier == "pro"
        assert backend.complete.call_count == 0
        assert market_data.calls == 0

    @pytest.mark.asyncio
    async def test_unknown_tool(self):
        backend = RecordingBackend()
        service = make_service(backend)
        with pytest.raises(UnknownToolError):
            await service.generate_premium_tool_response("moon_finder", {}, "elite")
        assert backend.requests == []

    @pytest.mark.asyncio
    async def test_whale_tracker_pro_mock(self):
        service = make_service(MockBackend())
        text = await service.generate_premium_tool_response(
            "whale_tracker", {"wallet": "0xabc"}, "pro"
        )
        assert "whale" in text.lower()

    @pytest.mark.asyncio
    async def test_premium_model_always_used(self):
        backend = RecordingBackend()
        service = make_service(backend)

        await service.generate_premium_tool("smart_alerts", {"asset": "ETH"}, "elite", max_tokens=900)

        request = backend.requests[0]
        assert request.model == "gpt-4"
        assert request.max_tokens == 900
        assert request.kind == "tool"
        assert '"asset": "ETH"' in request.messages[0]["content"]

    @pytest.mark.asyncio
    async def test_tool_quota_error_falls_back(self):
        service = make_service(RecordingBackend(error=rate_limit_error()))
        generation = await service.generate_premium_tool("whale_tracker", {}, "elite")
        assert generation.fallback
        assert "whale" in generation.text.lower()

    @pytest.mark.asyncio
    async def test_tool_prompt_skips_documentation_lookup(self):
        documentation = FakeDocumentation("\n\nRelevant documentation from solidity:\n...")
        backend = RecordingBackend()
        service = make_service(backend, documentation=documentation)

        await service.generate_premium_tool("smart_alerts", {"asset": "solidity"}, "elite")

        assert documentation.calls == 0
        assert "Relevant documentation" not in backend.requests[0].messages[0]["content"]


class TestBackendSelection:
    @pytest.mark.parametrize(
        "key,valid",
        [
            ("", False),
            (None, False),
            ("sk-short", False),
            ("sk-placeholder-key-for-local-dev", False),
            ("not-an-openai-key-at-all-000000", False),
            ("sk-" + "a" * 40, True),
        ],
    )
    def test_key_validation(self, key, valid):
        assert is_valid_openai_key(key) is valid

    def test_missing_key_selects_mock(self):
        class Config:
            OPENAI_API_KEY = ""

        assert create_completion_backend(Config()).name == "mock"

    def test_valid_key_selects_openai(self):
        class Config:
            OPENAI_API_KEY = "sk-" + "a" * 40

        assert create_completion_backend(Config()).name == "openai"
