"""
Environment configuration for the CV adapter backend.

Values are read once at import time; a `.env` file next to the process is
honoured through python-dotenv.
"""
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import ValidationError

from .exceptions import ConfigurationError
from .schemas import ProviderConfig

load_dotenv()

OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1").rstrip("/")
ANTHROPIC_BASE_URL = os.getenv("ANTHROPIC_BASE_URL", "https://api.anthropic.com/v1").rstrip("/")

OPENAI_DEFAULT_MODEL = os.getenv("OPENAI_DEFAULT_MODEL", "gpt-4-turbo-preview")
CLAUDE_DEFAULT_MODEL = os.getenv("CLAUDE_DEFAULT_MODEL", "claude-3-5-sonnet-20241022")

ANTHROPIC_VERSION = os.getenv("ANTHROPIC_VERSION", "2023-06-01")
CLAUDE_MAX_TOKENS = int(os.getenv("CLAUDE_MAX_TOKENS", "4096"))
OPENAI_TEMPERATURE = float(os.getenv("OPENAI_TEMPERATURE", "0.7"))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "3001"))


def provider_timeout() -> Optional[float]:
    """httpx timeout in seconds; None (wait indefinitely) unless PROVIDER_TIMEOUT is set."""
    raw = os.getenv("PROVIDER_TIMEOUT")
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(f"Invalid PROVIDER_TIMEOUT: {raw!r}") from None


def default_provider_config() -> Optional[ProviderConfig]:
    """Server-side fallback configuration from CV_PROVIDER / CV_API_KEY / CV_MODEL."""
    provider = os.getenv("CV_PROVIDER")
    api_key = os.getenv("CV_API_KEY")
    if not provider or not api_key:
        return None
    try:
        return ProviderConfig(provider=provider, api_key=api_key, model=os.getenv("CV_MODEL") or None)
    except ValidationError:
        raise ConfigurationError(f"Unsupported CV_PROVIDER: {provider}") from None


def allowed_origins() -> List[str]:
    origins = [
        os.getenv("FRONTEND_URL"),
        "http://localhost:5173",
        "http://localhost:80",
        "http://frontend:80",
        "http://localhost:3000",
    ]
    return [o for o in origins if o]


def is_development() -> bool:
    return os.getenv("APP_ENV", "production") == "development"
