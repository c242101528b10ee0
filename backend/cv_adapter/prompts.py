"""
Prompt construction for ATS analysis and job adaptation.

Both builders are pure: the CV and job text are embedded verbatim and the
expected JSON shape is spelled out so the normalizer knows which keys to read.
"""
from .schemas import AdaptationRequest, AnalysisRequest

SYSTEM_PROMPT = "You are a professional CV/resume analyzer and adapter. Always respond with valid JSON."

ATS_RESPONSE_SCHEMA = """{
  "isCompliant": boolean,
  "score": integer (0-100),
  "issues": [list of issues found, as strings],
  "suggestions": [list of suggestions to improve ATS compatibility, as strings]
}"""

ADAPTATION_RESPONSE_SCHEMA = """{
  "adaptedText": "the adapted CV as plain text",
  "latexCode": "complete LaTeX document code for the adapted CV",
  "changeLog": [list of key changes made, as strings],
  "highlightedSkills": [list of skills that were highlighted, as strings]
}"""


def build_ats_prompt(request: AnalysisRequest) -> str:
    return f"""Analyze the following CV/resume text and determine if it's in ATS (Applicant Tracking System) format.
ATS-friendly resumes should:
1. Use standard section headings (Experience, Education, Skills, etc.)
2. Avoid tables, columns, graphics, or complex formatting
3. Use simple, keyword-rich text
4. Have clear, chronological work history
5. Use standard fonts and formatting

CV Text:
{request.cv_text}

Respond in JSON format with exactly these fields:
{ATS_RESPONSE_SCHEMA}"""


def build_adaptation_prompt(request: AdaptationRequest) -> str:
    return f"""Compare the following CV with the job description and create an adapted version that highlights relevant skills and experiences.

Original CV:
{request.cv_text}

Job Description:
{request.job_description}

Create an adapted CV that:
1. Highlights skills and experiences most relevant to the job
2. Reorders sections to emphasize relevant qualifications
3. Adds relevant keywords from the job description naturally
4. Maintains ATS-friendly format
5. Generates LaTeX code for the adapted CV

NEVER fabricate experience, skills, or qualifications that are not in the original CV.

Respond in JSON format with exactly these fields:
{ADAPTATION_RESPONSE_SCHEMA}"""
