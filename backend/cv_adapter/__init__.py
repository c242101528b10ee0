"""CV ATS optimizer: provider abstraction and reply normalization."""

from .exceptions import ConfigurationError, ProviderError
from .schemas import AdaptationResult, ATSAssessment, ProviderConfig
from .service import CVAdapterService, adapt_to_job, assess_format, get_cv_service

__all__ = [
    "ATSAssessment",
    "AdaptationResult",
    "CVAdapterService",
    "ConfigurationError",
    "ProviderConfig",
    "ProviderError",
    "adapt_to_job",
    "assess_format",
    "get_cv_service",
]
