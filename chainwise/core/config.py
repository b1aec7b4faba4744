import os
from dotenv import load_dotenv

load_dotenv()


class Settings:
    # App
    APP_NAME: str = "ChainWise AI"
    DEBUG: bool = os.getenv("DEBUG", "False").lower() == "true"

    # CORS
    ALLOWED_ORIGINS: list[str] = os.getenv(
        "ALLOWED_ORIGINS", "http://localhost:3000,https://chainwise.app"
    ).split(",")

    # OpenAI
    OPENAI_API_KEY: str = os.getenv("OPENAI_API_KEY", "")
    OPENAI_PREMIUM_MODEL: str = os.getenv("OPENAI_PREMIUM_MODEL", "gpt-4")
    COMPLETION_TIMEOUT: float = float(os.getenv("COMPLETION_TIMEOUT", "30"))

    # Tavily (documentation context)
    TAVILY_API_KEY: str = os.getenv("TAVILY_API_KEY", "")
    DOCS_TIMEOUT: float = float(os.getenv("DOCS_TIMEOUT", "10"))

    # CoinGecko
    COINGECKO_BASE_URL: str = os.getenv(
        "COINGECKO_BASE_URL", "https://api.coingecko.com/api/v3"
    )
    COINGECKO_API_KEY: str = os.getenv("COINGECKO_API_KEY", "")
    MARKET_DATA_TTL: float = float(os.getenv("MARKET_DATA_TTL", "120"))  # 2 minutes
    MARKET_TOP_N: int = int(os.getenv("MARKET_TOP_N", "10"))

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = os.getenv("RATE_LIMIT_ENABLED", "True").lower() == "true"
    RATE_LIMIT_CHAT: str = os.getenv(
        "RATE_LIMIT_CHAT", "10/minute"
    )  # 10 requests per minute per IP
    RATE_LIMIT_TOOLS: str = os.getenv(
        "RATE_LIMIT_TOOLS", "5/minute"
    )  # 5 premium tool runs per minute per IP

    # Credits
    CHARGE_FALLBACK_RESPONSES: bool = (
        os.getenv("CHARGE_FALLBACK_RESPONSES", "False").lower() == "true"
    )
    SEED_DEMO_ACCOUNTS: bool = os.getenv("SEED_DEMO_ACCOUNTS", "True").lower() == "true"


settings = Settings()
