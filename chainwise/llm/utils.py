from loguru import logger
from openai import AsyncOpenAI
from tavily import AsyncTavilyClient

from chainwise.core.config import settings


def create_openai_client(api_key: str | None = None) -> AsyncOpenAI:
    return AsyncOpenAI(
        api_key=api_key or settings.OPENAI_API_KEY,
        timeout=settings.COMPLETION_TIMEOUT,
        max_retries=0,
    )


def create_tavily_client(api_key: str | None = None) -> AsyncTavilyClient | None:
    api_key = api_key if api_key is not None else settings.TAVILY_API_KEY
    if not api_key:
        logger.info("TAVILY_API_KEY not set, documentation context disabled")
        return None
    return AsyncTavilyClient(api_key=api_key)
