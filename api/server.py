"""server.py
Server to launch a FastAPI / Swagger UI instance.
"""
from typing import Any, Dict

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.schemas import GenerateDraftRequest, ParseTextRequest, FormStatePayload
from resume_synth.parse_classes.resume_draft_framework import ResumeDraftFramework


app = FastAPI(title="Resume Draft Synthesis API", version="1.0")

class PromptResponse(BaseModel):
    prompt: str

# Initiate ResumeDraftFramework for use when server calls. Endpoints are plain
# `def` so FastAPI runs them in its threadpool; the framework is shared across them.
resume_draft_framework = ResumeDraftFramework()


def _check_text_size(*texts: str) -> None:
    total = sum(len(text or "") for text in texts)
    if total > SYNTH_DEFAULTS.MAX_REQUEST_TEXT_CHARS:
        raise HTTPException(
            status_code=413,
            detail=f"Request text too large. Max allowed size is {SYNTH_DEFAULTS.MAX_REQUEST_TEXT_CHARS} characters.",
        )


@app.post(
    "/generate_draft",
    summary="Generate a tailored resume draft",
    description=(
        "Builds a resume draft from the posted form state. When `externalDraft` is supplied it is "
        "validated and reconciled with the user's records; otherwise (or if it is invalid) the local "
        "heuristic draft is returned."
    ),
)
def generate_draft(request: GenerateDraftRequest) -> Dict[str, Any]:
    """
    Validate the form state, run the draft pipeline, and return the camelCase draft.
    """
    # ---- Validate payload size ----
    _check_text_size(request.resume_text, request.job_description_text)

    try:
        draft = resume_draft_framework.generate(
            request.to_form_state(),
            external_payload=request.external_draft,
        )
        return draft.to_dict()

    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    "/parse_text",
    summary="Parse plain resume text into structured sections",
    description="Segments the posted text and returns summary, experience, projects, education and skills.",
)
def parse_text(request: ParseTextRequest) -> Dict[str, Any]:
    """
    Parse resume text and return ParsedResumeSections (without the raw blocks).
    """
    _check_text_size(request.text)

    try:
        return resume_draft_framework.parser.parse(request.text).to_dict()

    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))


@app.post(
    "/build_prompt",
    response_model=PromptResponse,
    summary="Render the prompt sent to an external draft generator",
)
def build_prompt(request: FormStatePayload) -> PromptResponse:
    _check_text_size(request.resume_text, request.job_description_text)

    try:
        return PromptResponse(prompt=resume_draft_framework.build_prompt(request.to_form_state()))
    except Exception as e:
        raise HTTPException(status_code=500, detail=str(e))
