"""Completion backends: the live OpenAI API and the deterministic mock.

The backend is chosen once, when the service is built, from the configured
credential. ``AIService`` keeps a ``MockBackend`` around as its fallback path.
"""
from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

from loguru import logger
from openai import AsyncOpenAI

from chainwise.core.config import Settings, settings as default_settings
from chainwise.llm.mock_responses import MockResponseGenerator
from chainwise.llm.utils import create_openai_client
from chainwise.models.market import MarketSnapshot
from chainwise.services.market_data_service import fallback_market_snapshot


@dataclass
class CompletionRequest:
    model: str
    messages: list[dict[str, str]]
    max_tokens: int = 500
    temperature: float = 0.7
    kind: Literal["chat", "tool"] = "chat"
    # persona id for chat, tool id for premium tools
    subject: str = ""
    user_message: str = ""
    user_input: Any = None
    market_data: MarketSnapshot | None = field(default=None, repr=False)


class CompletionBackend(Protocol):
    name: str

    async def complete(self, request: CompletionRequest) -> str: ...


class OpenAIBackend:
    name = "openai"

    def __init__(self, client: AsyncOpenAI):
        self._client = client

    async def complete(self, request: CompletionRequest) -> str:
        response = await self._client.chat.completions.create(
            model=request.model,
            messages=request.messages,
            max_tokens=request.max_tokens,
            temperature=request.temperature,
            stream=False,
        )
        if response.usage:
            logger.info(
                f"OpenAI usage ({request.model}): prompt={response.usage.prompt_tokens} "
                f"completion={response.usage.completion_tokens} "
                f"total={response.usage.total_tokens}"
            )
        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()


class MockBackend:
    name = "mock"

    def __init__(self, generator: MockResponseGenerator | None = None):
        self._generator = generator or MockResponseGenerator()

    async def complete(self, request: CompletionRequest) -> str:
        snapshot = request.market_data or fallback_market_snapshot()

        if request.kind == "tool":
            return self._generator.tool_response(
                request.subject, request.user_input, snapshot
            )
        return self._generator.chat_response(
            request.subject, request.user_message, snapshot
        )


def is_valid_openai_key(api_key: str | None) -> bool:
    if not api_key:
        return False
    return (
        api_key.startswith("sk-")
        and len(api_key) > 20
        and "placeholder" not in api_key.lower()
    )


def create_completion_backend(config: Settings | None = None) -> CompletionBackend:
    config = config or default_settings
    if is_valid_openai_key(config.OPENAI_API_KEY):
        logger.info("Using live OpenAI completion backend")
        return OpenAIBackend(create_openai_client(config.OPENAI_API_KEY))

    logger.warning("OPENAI_API_KEY missing or malformed, using mock completion backend")
    return MockBackend()
