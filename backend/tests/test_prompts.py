from cv_adapter.prompts import (  # type: ignore
    ADAPTATION_RESPONSE_SCHEMA,
    ATS_RESPONSE_SCHEMA,
    build_adaptation_prompt,
    build_ats_prompt,
)
from cv_adapter.schemas import AdaptationRequest, AnalysisRequest  # type: ignore


def test_ats_prompt_embeds_cv_and_schema():
    cv = "Jane Doe\nExperience\n- Built {things} with 100% effort"
    prompt = build_ats_prompt(AnalysisRequest(cv_text=cv))
    assert cv in prompt
    assert ATS_RESPONSE_SCHEMA in prompt
    for field in ("isCompliant", "score", "issues", "suggestions"):
        assert f'"{field}"' in prompt


def test_adaptation_prompt_embeds_both_texts_and_schema():
    req = AdaptationRequest(cv_text="Python developer", job_description="Looking for FastAPI engineer")
    prompt = build_adaptation_prompt(req)
    assert "Python developer" in prompt
    assert "Looking for FastAPI engineer" in prompt
    assert ADAPTATION_RESPONSE_SCHEMA in prompt
    for field in ("adaptedText", "latexCode", "changeLog", "highlightedSkills"):
        assert f'"{field}"' in prompt


def test_prompt_does_not_truncate_long_input():
    cv = "x" * 200_000
    prompt = build_ats_prompt(AnalysisRequest(cv_text=cv))
    assert cv in prompt


def test_prompts_are_deterministic():
    req = AdaptationRequest(cv_text="cv", job_description="jd")
    assert build_adaptation_prompt(req) == build_adaptation_prompt(req)
