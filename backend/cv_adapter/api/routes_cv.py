"""
CV endpoints: ATS check, job adaptation and LaTeX download.
"""
from typing import Optional

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from ..config import default_provider_config
from ..exceptions import ConfigurationError, ProviderError
from ..renderer import render_document
from ..schemas import AdaptationResult, AdaptIn, ATSAssessment, ATSCheckIn, DownloadIn, ProviderConfig, ProviderCredentials, RenderIn
from ..service import get_cv_service

router = APIRouter(prefix="/cv", tags=["cv"])

DOWNLOAD_FILENAME = "adapted-cv.tex"


def _config_from(body: ProviderCredentials) -> Optional[ProviderConfig]:
    return body.to_config() or default_provider_config()


def _tex_attachment(document: str) -> PlainTextResponse:
    return PlainTextResponse(
        document,
        headers={"Content-Disposition": f'attachment; filename="{DOWNLOAD_FILENAME}"'},
    )


@router.post("/ats-check", response_model=ATSAssessment)
async def ats_check(body: ATSCheckIn):
    try:
        service = get_cv_service(_config_from(body))
        return await service.assess_format(body.cv_text)
    except ConfigurationError as e:
        raise HTTPException(400, str(e))
    except ProviderError as e:
        raise HTTPException(502, e.message)


@router.post("/adapt", response_model=AdaptationResult)
async def adapt(body: AdaptIn):
    try:
        service = get_cv_service(_config_from(body))
        return await service.adapt_to_job(body.cv_text, body.job_description)
    except ConfigurationError as e:
        raise HTTPException(400, str(e))
    except ProviderError as e:
        raise HTTPException(502, e.message)


@router.post("/render", response_class=PlainTextResponse)
def render(body: RenderIn):
    return _tex_attachment(render_document(body.text))


@router.post("/download", response_class=PlainTextResponse)
def download(body: DownloadIn):
    return _tex_attachment(body.latex_code)
