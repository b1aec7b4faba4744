"""Persona chat and premium tool generation with mock fallback.

Every request makes exactly one attempt on the configured backend. Credential
problems, quota errors, timeouts, empty output and any other failure fall back
to the deterministic mock backend; only unknown personas/tools and tier
violations are raised to the caller, and both are checked before any I/O.
"""
import asyncio
from dataclasses import dataclass
from typing import Any

import openai
from loguru import logger

from chainwise.core.config import settings
from chainwise.core.personas import get_persona
from chainwise.core.premium_tools import get_premium_tool
from chainwise.core.prompts import (
    build_chat_system_prompt,
    build_messages,
    build_premium_tool_prompt,
)
from chainwise.core.tiers import ensure_tier_access
from chainwise.llm.backends import CompletionBackend, CompletionRequest, MockBackend
from chainwise.services.documentation_service import DocumentationService
from chainwise.services.market_data_service import MarketDataService


@dataclass
class Generation:
    text: str
    source: str
    model: str
    fallback: bool = False


class AIService:
    def __init__(
        self,
        backend: CompletionBackend,
        market_data: MarketDataService,
        documentation: DocumentationService,
        fallback: CompletionBackend | None = None,
        timeout: float | None = None,
    ):
        self.backend = backend
        self.fallback = fallback or MockBackend()
        self.market_data = market_data
        self.documentation = documentation
        self.timeout = timeout if timeout is not None else settings.COMPLETION_TIMEOUT

    async def _complete(self, request: CompletionRequest) -> Generation:
        reason = None
        try:
            text = await asyncio.wait_for(
                self.backend.complete(request), timeout=self.timeout
            )
            if text and text.strip():
                return Generation(
                    text=text.strip(),
                    source=self.backend.name,
                    model=request.model,
                    fallback=self.backend.name == self.fallback.name,
                )
            reason = "empty completion"
        except asyncio.TimeoutError:
            reason = f"timed out after {self.timeout}s"
        except openai.AuthenticationError as e:
            reason = f"authentication failed: {e}"
        except openai.RateLimitError as e:
            reason = f"rate limited or quota exceeded: {e}"
        except Exception as e:
            reason = f"{type(e).__name__}: {e}"

        logger.warning(
            f"{self.backend.name} backend failed for {request.kind} '{request.subject}' "
            f"({reason}), using {self.fallback.name} response"
        )
        text = await self.fallback.complete(request)
        return Generation(
            text=text.strip(), source=self.fallback.name, model=request.model, fallback=True
        )

    async def generate_chat(
        self,
        persona: str,
        message: str,
        conversation_history: list[dict[str, str]] | None = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> Generation:
        persona_config = get_persona(persona)

        documentation = await self.documentation.get_contextual_info(persona, message)
        snapshot = await self.market_data.get_current_market_data()

        system_prompt = build_chat_system_prompt(
            persona_config, message, snapshot, documentation
        )
        request = CompletionRequest(
            model=persona_config.model,
            messages=build_messages(system_prompt, conversation_history, message),
            max_tokens=max_tokens,
            temperature=temperature,
            kind="chat",
            subject=persona_config.id,
            user_message=message,
            market_data=snapshot,
        )
        logger.info(f"Generating {persona} response with {persona_config.model}")
        return await self._complete(request)

    async def generate_chat_response(
        self,
        persona: str,
        message: str,
        conversation_history: list[dict[str, str]] | None = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ) -> str:
        generation = await self.generate_chat(
            persona, message, conversation_history, max_tokens, temperature
        )
        return generation.text

    async def generate_premium_tool(
        self,
        tool: str,
        user_input: Any,
        user_tier: str | None,
        max_tokens: int = 1500,
        temperature: float = 0.7,
    ) -> Generation:
        tool_config = get_premium_tool(tool)
        ensure_tier_access(user_tier, tool_config.required_tier, tool_config.display_name)

        snapshot = await self.market_data.get_current_market_data()
        system_prompt = build_premium_tool_prompt(
            tool_config, user_input, snapshot, user_tier
        )
        request = CompletionRequest(
            model=settings.OPENAI_PREMIUM_MODEL,
            messages=build_messages(
                system_prompt, None, f"Run {tool_config.display_name} on the input above."
            ),
            max_tokens=max_tokens,
            temperature=temperature,
            kind="tool",
            subject=tool_config.tool_id,
            user_input=user_input,
            market_data=snapshot,
        )
        logger.info(f"Running premium tool {tool} for {user_tier or 'free'} tier")
        return await self._complete(request)

    async def generate_premium_tool_response(
        self,
        tool: str,
        user_input: Any,
        user_tier: str | None,
        max_tokens: int = 1500,
    ) -> str:
        generation = await self.generate_premium_tool(
            tool, user_input, user_tier, max_tokens
        )
        return generation.text
