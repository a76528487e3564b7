"""source_records.py
Selects the "original" records a draft is built from: the user's form
entries when present, otherwise the records parsed from the uploaded resume.
"""
from dataclasses import dataclass, field
from typing import List, Optional

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.models import (
    FormState,
    ParsedResumeSections,
    ExperienceRecord,
    ProjectRecord,
    EducationRecord,
)
from resume_synth.parse_classes.resume_text_parser.resume_text_parser import ResumeTextParser


@dataclass
class SourceRecords:
    summary: str = ""
    experience: List[ExperienceRecord] = field(default_factory=list)
    projects: List[ProjectRecord] = field(default_factory=list)
    education: List[EducationRecord] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    parsed: ParsedResumeSections = field(default_factory=ParsedResumeSections)


def parse_uploaded_resume(
    form_state: FormState,
    parser: Optional[ResumeTextParser] = None,
) -> ParsedResumeSections:
    """Parse `form_state.resume_text` (empty result when there is none)."""
    text = form_state.resume_text if isinstance(form_state.resume_text, str) else ""
    if not text.strip():
        return ParsedResumeSections()
    parser = parser or ResumeTextParser()
    return parser.parse(text[: SYNTH_DEFAULTS.MAX_INPUT_CHARS])


def select_source_records(
    form_state: FormState,
    parsed: Optional[ParsedResumeSections] = None,
) -> SourceRecords:
    """
    Pick per field: user entries if any, else the parsed ones.

    Args:
        form_state (FormState): The user's inputs.
        parsed (Optional[ParsedResumeSections]): Already parsed resume text.
            Parsed from `form_state.resume_text` if None.
    """
    if parsed is None:
        parsed = parse_uploaded_resume(form_state)
    return SourceRecords(
        summary=(form_state.basics.summary or "").strip() or parsed.summary,
        experience=list(form_state.experience) or list(parsed.experience),
        projects=list(form_state.projects) or list(parsed.projects),
        education=list(form_state.education) or list(parsed.education),
        skills=list(form_state.skills) or list(parsed.skills),
        parsed=parsed,
    )
