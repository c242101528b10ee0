"""
Domain facade: the two operations the rest of the app calls.

Each call builds a prompt, makes exactly one provider call and normalizes the
reply. Transport failures (ProviderError) propagate; malformed replies come
back as fallback results.
"""
import logging
from typing import Awaitable, Callable, Optional

from .exceptions import ConfigurationError
from .normalizer import parse_adaptation_response, parse_ats_response
from .prompts import build_adaptation_prompt, build_ats_prompt
from .providers import send
from .schemas import AdaptationRequest, AdaptationResult, AnalysisRequest, ATSAssessment, ProviderConfig

logger = logging.getLogger(__name__)

Transport = Callable[[ProviderConfig, str], Awaitable[str]]


def _require_config(config: Optional[ProviderConfig]) -> ProviderConfig:
    if config is None:
        raise ConfigurationError("API configuration not set")
    return config


async def assess_format(
    config: Optional[ProviderConfig], cv_text: str, *, transport: Transport = send
) -> ATSAssessment:
    """Ask the provider whether `cv_text` is ATS friendly."""
    config = _require_config(config)
    prompt = build_ats_prompt(AnalysisRequest(cv_text=cv_text))
    raw = await transport(config, prompt)
    result = parse_ats_response(raw)
    logger.info("ATS check via %s: score=%s compliant=%s", config.provider, result.score, result.is_compliant)
    return result


async def adapt_to_job(
    config: Optional[ProviderConfig], cv_text: str, job_description: str, *, transport: Transport = send
) -> AdaptationResult:
    """Ask the provider for a version of `cv_text` tailored to `job_description`."""
    config = _require_config(config)
    prompt = build_adaptation_prompt(AdaptationRequest(cv_text=cv_text, job_description=job_description))
    raw = await transport(config, prompt)
    result = parse_adaptation_response(raw)
    logger.info("CV adaptation via %s: %d changes", config.provider, len(result.change_log))
    return result


class CVAdapterService:
    """Holds the session's provider configuration.

    The configuration is replaced as a whole with `set_config`; every call
    reads it once at the start, so replacing it never affects a call that is
    already waiting on the provider.
    """

    def __init__(self, config: Optional[ProviderConfig] = None, transport: Transport = send):
        self._config = config
        self._transport = transport

    @property
    def config(self) -> Optional[ProviderConfig]:
        return self._config

    def set_config(self, config: ProviderConfig) -> None:
        self._config = config

    def clear_config(self) -> None:
        self._config = None

    async def assess_format(self, cv_text: str) -> ATSAssessment:
        config = self._config
        return await assess_format(config, cv_text, transport=self._transport)

    async def adapt_to_job(self, cv_text: str, job_description: str) -> AdaptationResult:
        config = self._config
        return await adapt_to_job(config, cv_text, job_description, transport=self._transport)


def get_cv_service(config: Optional[ProviderConfig] = None) -> CVAdapterService:
    """Get a CV adapter service bound to `config` (which may be set later)."""
    return CVAdapterService(config=config)
