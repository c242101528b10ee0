from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr, field_validator

ProviderName = Literal["openai", "claude"]


class ProviderConfig(BaseModel):
    """Provider selection and credential; replaced as a whole, never mutated."""

    model_config = ConfigDict(frozen=True)

    provider: ProviderName
    api_key: SecretStr
    model: Optional[str] = None


class AnalysisRequest(BaseModel):
    cv_text: str = Field(min_length=1)


class AdaptationRequest(BaseModel):
    cv_text: str = Field(min_length=1)
    job_description: str = Field(min_length=1)


class ATSAssessment(BaseModel):
    is_compliant: bool = False
    score: int = 0
    issues: List[str] = Field(default_factory=list)
    suggestions: List[str] = Field(default_factory=list)

    @field_validator("score")
    @classmethod
    def clamp_score(cls, v: int) -> int:
        return max(0, min(100, v))


class AdaptationResult(BaseModel):
    adapted_text: str = ""
    rendered_document: str = Field(min_length=1)
    change_log: List[str] = Field(default_factory=list)
    highlighted_skills: List[str] = Field(default_factory=list)


# HTTP request bodies
class ProviderCredentials(BaseModel):
    provider: Optional[ProviderName] = None
    api_key: Optional[str] = None
    model: Optional[str] = None

    def to_config(self) -> Optional[ProviderConfig]:
        if not self.provider or not self.api_key:
            return None
        return ProviderConfig(provider=self.provider, api_key=self.api_key, model=self.model or None)


class ATSCheckIn(ProviderCredentials):
    cv_text: str = Field(min_length=1)


class AdaptIn(ProviderCredentials):
    cv_text: str = Field(min_length=1)
    job_description: str = Field(min_length=1)


class RenderIn(BaseModel):
    text: str = ""


class DownloadIn(BaseModel):
    latex_code: str = Field(min_length=1)


class HealthOut(BaseModel):
    status: str
    timestamp: str
