"""schemas.py
Pydantic models validating payloads that cross the process boundary: drafts
produced by an external generator and form states posted to the API. Both use
the camelCase wire shape (`startDate`, `fullName`, ...) and convert into the
dataclasses in `resume_synth.models`.
"""
from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictBool, StrictStr, ValidationError
from pydantic.alias_generators import to_camel

from resume_synth.exceptions import DraftPayloadError
from resume_synth.models import (
    BasicDetails,
    EducationRecord,
    ExperienceRecord,
    FormState,
    GeneratedDraft,
    Instructions,
    ProjectRecord,
    WorkAuthorization,
)


class CamelModel(BaseModel):
    """Base model: camelCase aliases, snake_case names also accepted, unknown keys ignored."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

# --------------------------------------------------------------
# CAREER RECORDS
# --------------------------------------------------------------
class ExperiencePayload(CamelModel):
    id: StrictStr = ""
    role: StrictStr
    company: StrictStr
    location: StrictStr = ""
    start_date: StrictStr
    end_date: StrictStr = ""
    current: StrictBool = False
    achievements: List[StrictStr]
    technologies: List[StrictStr] = Field(default_factory=list)

    def to_record(self) -> ExperienceRecord:
        return ExperienceRecord(**self.model_dump())


class ProjectPayload(CamelModel):
    id: StrictStr = ""
    name: StrictStr
    url: StrictStr = ""
    summary: StrictStr
    highlights: List[StrictStr]
    technologies: List[StrictStr] = Field(default_factory=list)

    def to_record(self) -> ProjectRecord:
        return ProjectRecord(**self.model_dump())


class EducationPayload(CamelModel):
    id: StrictStr = ""
    school: StrictStr
    degree: StrictStr
    field: StrictStr = ""
    start_date: StrictStr = ""
    end_date: StrictStr = ""
    location: StrictStr = ""
    grade: StrictStr = ""

    def to_record(self) -> EducationRecord:
        return EducationRecord(**self.model_dump())

# --------------------------------------------------------------
# EXTERNAL DRAFT
# --------------------------------------------------------------
class DraftSections(CamelModel):
    summary: StrictStr = ""
    skills: List[StrictStr] = Field(default_factory=list)
    experience: List[ExperiencePayload] = Field(default_factory=list)
    projects: List[ProjectPayload] = Field(default_factory=list)
    education: List[EducationPayload] = Field(default_factory=list)


class DraftPayload(CamelModel):
    """
    An externally generated draft.

    `atsScore` / `matchedKeywords` are accepted but not trusted: the local
    scorer always recomputes them.
    """
    sections: DraftSections
    ats_score: Optional[float] = None
    matched_keywords: List[StrictStr] = Field(default_factory=list)

    def to_draft(self) -> GeneratedDraft:
        return GeneratedDraft(
            summary=self.sections.summary,
            skills=list(self.sections.skills),
            experience=[entry.to_record() for entry in self.sections.experience],
            projects=[entry.to_record() for entry in self.sections.projects],
            education=[entry.to_record() for entry in self.sections.education],
        )


def parse_draft_payload(payload: Any) -> GeneratedDraft:
    """
    Validate an external draft payload and convert it to a GeneratedDraft.

    Args:
        payload (Any): Decoded JSON mapping, e.g. `{"sections": {...}}`.

    Returns:
        GeneratedDraft: The draft (ids may be empty; no score yet).

    Raises:
        DraftPayloadError: If the payload is not a mapping, has no `sections`
            object or carries malformed fields.
    """
    if not isinstance(payload, Mapping):
        raise DraftPayloadError(message=f"Draft payload must be an object, got {type(payload).__name__}")
    if not isinstance(payload.get("sections"), Mapping):
        raise DraftPayloadError(message="Draft payload is missing the 'sections' object")
    try:
        return DraftPayload.model_validate(payload).to_draft()
    except ValidationError as e:
        raise DraftPayloadError(errors=e.errors())

# --------------------------------------------------------------
# FORM STATE (API requests)
# --------------------------------------------------------------
class WorkAuthorizationPayload(CamelModel):
    status: str = ""
    visa_type: str = ""
    expiry: str = ""


class BasicDetailsPayload(CamelModel):
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    headline: str = ""
    summary: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    work_authorization: Optional[WorkAuthorizationPayload] = None

    def to_basics(self) -> BasicDetails:
        work_authorization = None
        if self.work_authorization is not None:
            work_authorization = WorkAuthorization(**self.work_authorization.model_dump())
        return BasicDetails(
            **self.model_dump(exclude={"work_authorization"}),
            work_authorization=work_authorization,
        )


class FormExperience(ExperiencePayload):
    """Form entries may be incomplete: every field is optional."""
    role: StrictStr = ""
    company: StrictStr = ""
    start_date: StrictStr = ""
    achievements: List[StrictStr] = Field(default_factory=list)


class FormProject(ProjectPayload):
    name: StrictStr = ""
    summary: StrictStr = ""
    highlights: List[StrictStr] = Field(default_factory=list)


class FormEducation(EducationPayload):
    school: StrictStr = ""
    degree: StrictStr = ""


class InstructionsPayload(CamelModel):
    goals: List[str] = Field(default_factory=list)
    keywords: List[str] = Field(default_factory=list)
    constraints: List[str] = Field(default_factory=list)
    prompt: str = ""


class FormStatePayload(CamelModel):
    """Request body of the draft endpoints."""
    basics: BasicDetailsPayload = Field(default_factory=BasicDetailsPayload)
    experience: List[FormExperience] = Field(default_factory=list)
    projects: List[FormProject] = Field(default_factory=list)
    education: List[FormEducation] = Field(default_factory=list)
    skills: List[str] = Field(default_factory=list)
    instructions: InstructionsPayload = Field(default_factory=InstructionsPayload)
    resume_text: str = ""
    job_description_text: str = ""
    preserve_strict: bool = False

    def to_form_state(self) -> FormState:
        return FormState(
            basics=self.basics.to_basics(),
            experience=[entry.to_record() for entry in self.experience],
            projects=[entry.to_record() for entry in self.projects],
            education=[entry.to_record() for entry in self.education],
            skills=list(self.skills),
            instructions=Instructions(**self.instructions.model_dump()),
            resume_text=self.resume_text,
            job_description_text=self.job_description_text,
            preserve_strict=self.preserve_strict,
        )


class GenerateDraftRequest(FormStatePayload):
    """Form state plus an optional, already fetched external draft (validated later)."""
    external_draft: Optional[Any] = None


class ParseTextRequest(CamelModel):
    text: str = ""
