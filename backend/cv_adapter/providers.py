"""
Provider transport for the CV adapter.

Each provider knows how to build an authenticated request for its API and how
to pull the reply text out of the JSON it gets back. `send` is the only
function that touches the network: one POST per call, no retries.
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Tuple

import httpx

from . import config as settings
from .exceptions import ConfigurationError, ProviderError
from .prompts import SYSTEM_PROMPT
from .schemas import ProviderConfig

logger = logging.getLogger(__name__)

RequestSpec = Tuple[str, Dict[str, str], Dict[str, Any]]


class LLMProvider(ABC):
    """Request/response shape of one text-generation API."""

    name: str = ""
    label: str = ""
    default_model: str = ""

    def model_for(self, config: ProviderConfig) -> str:
        return config.model or self.default_model

    @abstractmethod
    def build_request(self, config: ProviderConfig, instruction: str) -> RequestSpec:
        """Return (url, headers, json payload) for a single call."""

    @abstractmethod
    def extract_text(self, data: Dict[str, Any]) -> str:
        """Return the reply text; raise KeyError/IndexError/TypeError if absent."""


class OpenAIProvider(LLMProvider):
    name = "openai"
    label = "OpenAI"
    default_model = settings.OPENAI_DEFAULT_MODEL

    def build_request(self, config: ProviderConfig, instruction: str) -> RequestSpec:
        headers = {
            "Authorization": f"Bearer {config.api_key.get_secret_value()}",
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model_for(config),
            "messages": [
                {"role": "system", "content": SYSTEM_PROMPT},
                {"role": "user", "content": instruction},
            ],
            "response_format": {"type": "json_object"},
            "temperature": settings.OPENAI_TEMPERATURE,
        }
        return f"{settings.OPENAI_BASE_URL}/chat/completions", headers, payload

    def extract_text(self, data: Dict[str, Any]) -> str:
        return data["choices"][0]["message"]["content"]


class ClaudeProvider(LLMProvider):
    name = "claude"
    label = "Claude"
    default_model = settings.CLAUDE_DEFAULT_MODEL

    def build_request(self, config: ProviderConfig, instruction: str) -> RequestSpec:
        headers = {
            "x-api-key": config.api_key.get_secret_value(),
            "anthropic-version": settings.ANTHROPIC_VERSION,
            "Content-Type": "application/json",
        }
        payload = {
            "model": self.model_for(config),
            "max_tokens": settings.CLAUDE_MAX_TOKENS,
            "messages": [{"role": "user", "content": instruction}],
            "system": SYSTEM_PROMPT,
        }
        return f"{settings.ANTHROPIC_BASE_URL}/messages", headers, payload

    def extract_text(self, data: Dict[str, Any]) -> str:
        return data["content"][0]["text"]


PROVIDERS: Dict[str, LLMProvider] = {
    OpenAIProvider.name: OpenAIProvider(),
    ClaudeProvider.name: ClaudeProvider(),
}


def get_provider(name: str) -> LLMProvider:
    try:
        return PROVIDERS[name]
    except KeyError:
        raise ConfigurationError(f"Unknown provider: {name}") from None


def _upstream_error_message(response: Any) -> Optional[str]:
    """Pull `error.message` (or a bare `error` string) out of an error body."""
    try:
        body = response.json()
    except ValueError:
        return None
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and isinstance(error.get("message"), str):
        return error["message"]
    if isinstance(error, str):
        return error
    return None


async def send(config: Optional[ProviderConfig], instruction: str, *, client: Optional[httpx.AsyncClient] = None) -> str:
    """Send `instruction` to the configured provider and return its raw reply text.

    An injected `client` is used as-is and left open; otherwise a client is
    created for this call only. Cancellation propagates out of the await and
    closes the connection.
    """
    if config is None:
        raise ConfigurationError("API configuration not set")
    provider = get_provider(config.provider)
    url, headers, payload = provider.build_request(config, instruction)
    logger.info("Calling %s model %s", provider.label, payload["model"])

    try:
        if client is None:
            async with httpx.AsyncClient(timeout=settings.provider_timeout()) as own_client:
                response = await own_client.post(url, headers=headers, json=payload)
        else:
            response = await client.post(url, headers=headers, json=payload)
    except httpx.HTTPError as e:
        message = str(e) or "network request failed"
        logger.error("%s request failed: %s", provider.label, message)
        raise ProviderError(f"{provider.label} API error: {message}", provider=provider.name) from e

    if not 200 <= response.status_code < 300:
        message = _upstream_error_message(response) or f"request failed with status code {response.status_code}"
        logger.error("%s returned %s: %s", provider.label, response.status_code, message)
        raise ProviderError(
            f"{provider.label} API error: {message}",
            provider=provider.name,
            status_code=response.status_code,
        )

    try:
        text = provider.extract_text(response.json())
    except (ValueError, KeyError, IndexError, TypeError) as e:
        logger.error("%s reply had an unexpected shape", provider.label)
        raise ProviderError(f"{provider.label} API error: unexpected response format", provider=provider.name) from e
    if not isinstance(text, str):
        raise ProviderError(f"{provider.label} API error: unexpected response format", provider=provider.name)
    return text
