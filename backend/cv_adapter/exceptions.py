"""
Error taxonomy for the CV adapter.

Malformed provider replies are not represented here: the normalizer absorbs
them and returns a fallback result instead of raising.
"""
from typing import Optional


class CVAdapterError(Exception):
    """Base class for errors raised by the CV adapter."""


class ConfigurationError(CVAdapterError):
    """No usable provider configuration was supplied for the call."""


class ProviderError(CVAdapterError):
    """The text-generation provider could not be reached or answered with an error."""

    def __init__(self, message: str, provider: Optional[str] = None, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.provider = provider
        self.status_code = status_code
