"""models.py
Holds standardized data models used across the pipeline stages.
"""
from typing import List, Optional, Literal, Dict, Any
from dataclasses import dataclass, field, asdict
import secrets

from pydantic.alias_generators import to_camel

from resume_synth.config import SYNTH_DEFAULTS

BlockKind = Literal["heading", "bullet", "text"]


def new_record_id() -> str:
    """
    Return a new random record id.

    Ids only need to be unique; `secrets` draws from the OS entropy pool so the
    generator can be shared by concurrent callers without coordination.
    """
    return secrets.token_hex(SYNTH_DEFAULTS.RECORD_ID_BYTES)


def _camelize(value: Any) -> Any:
    if isinstance(value, dict):
        return {to_camel(k): _camelize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_camelize(v) for v in value]
    return value

# --------------------------------------------------------------
# SEGMENTATION
# --------------------------------------------------------------
@dataclass(frozen=True)
class RawBlock:
    """
    A single non-empty input line, classified by the TextSegmenter.

    Attributes:
        id (str): Position derived id (`block-<n>`, counting from 1) so that
            segmenting the same text twice yields equal blocks.
        text (str): The trimmed line text.
        kind (BlockKind): One of "heading", "bullet", "text".
    """
    id: str
    text: str
    kind: BlockKind


@dataclass
class Section:
    """
    A contiguous run of blocks grouped under one heading.

    Attributes:
        heading (str): Heading text ("" for the implicit leading section).
        section_type (str): Normalized type, e.g. "experience" or "general".
        lines (List[RawBlock]): Non-heading blocks of the section, in order.
            These are blocks, not strings; use `texts()` for the line text.
        heading_block (RawBlock | None): The block the heading came from.
        is_subheading (bool): True when the heading matched no known section
            keyword (e.g. an all-caps company name). Such a section inherits the
            type of the section it sits in and its heading is content.
    """
    heading: str
    section_type: str
    lines: List[RawBlock] = field(default_factory=list)
    heading_block: Optional[RawBlock] = None
    is_subheading: bool = False

    def content_blocks(self) -> List[RawBlock]:
        """Blocks carrying content: the lines, preceded by the heading for subheadings."""
        if self.is_subheading and self.heading_block is not None:
            return [self.heading_block] + list(self.lines)
        return list(self.lines)

    def texts(self) -> List[str]:
        return [block.text for block in self.lines]


@dataclass
class SegmentedDocument:
    """Output of the TextSegmenter: every block plus the section grouping."""
    blocks: List[RawBlock] = field(default_factory=list)
    sections: List[Section] = field(default_factory=list)

    def sections_of_type(self, section_type: str) -> List[Section]:
        return [s for s in self.sections if s.section_type == section_type]

    def all_lines(self) -> List[RawBlock]:
        """Every non-heading block in document order."""
        return [b for b in self.blocks if b.kind != "heading"]

# --------------------------------------------------------------
# CAREER RECORDS
# --------------------------------------------------------------
@dataclass
class ExperienceRecord:
    """
    A single role held by the candidate.

    `id` is empty for records produced by parsing; ids are assigned when the
    final draft is assembled.
    """
    id: str = ""
    role: str = ""
    company: str = ""
    location: str = ""
    start_date: str = ""
    end_date: str = ""
    current: bool = False
    achievements: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)


@dataclass
class ProjectRecord:
    id: str = ""
    name: str = ""
    url: str = ""
    summary: str = ""
    highlights: List[str] = field(default_factory=list)
    technologies: List[str] = field(default_factory=list)


@dataclass
class EducationRecord:
    id: str = ""
    school: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    location: str = ""
    grade: str = ""


@dataclass
class ParsedResumeSections:
    """
    Structured information parsed from free-form resume text.

    Attributes:
        summary (str): Parsed professional summary ("" if none found).
        experience (List[ExperienceRecord]): Parsed roles in document order.
        projects (List[ProjectRecord]): Parsed projects in document order.
        education (List[EducationRecord]): Parsed education entries.
        skills (List[str]): Parsed skills (deduplicated, original casing).
        blocks (List[RawBlock]): Classified lines the records were parsed from.
    """
    summary: str = ""
    experience: List[ExperienceRecord] = field(default_factory=list)
    projects: List[ProjectRecord] = field(default_factory=list)
    education: List[EducationRecord] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    blocks: List[RawBlock] = field(default_factory=list)

    def to_dict(self, include_blocks: bool = False) -> Dict[str, Any]:
        """Serialize to the camelCase wire shape; the raw blocks are left out unless asked for."""
        data = _camelize(asdict(self))
        if not include_blocks:
            data.pop("blocks")
        return data


@dataclass
class KeywordScore:
    """
    Output of the KeywordScorer.

    `ats_score` is None when the job description yields no tokens.
    """
    matched_keywords: List[str] = field(default_factory=list)
    ats_score: Optional[int] = None


@dataclass
class GeneratedDraft:
    """
    The final structured resume draft. Always fully populated: list fields are
    empty lists rather than None.
    """
    summary: str = ""
    skills: List[str] = field(default_factory=list)
    experience: List[ExperienceRecord] = field(default_factory=list)
    projects: List[ProjectRecord] = field(default_factory=list)
    education: List[EducationRecord] = field(default_factory=list)
    ats_score: Optional[int] = None
    matched_keywords: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the camelCase shape consumed by the UI (`atsScore`, `startDate`, ...)."""
        return _camelize(asdict(self))

# --------------------------------------------------------------
# FORM STATE
# --------------------------------------------------------------
@dataclass
class WorkAuthorization:
    """
    Attributes:
        status (str): "Citizen", "Permanent Resident", "Work Visa" or "Not Applicable".
        visa_type (str): Visa name when status is "Work Visa".
        expiry (str): Visa expiry date when status is "Work Visa".
    """
    status: str = ""
    visa_type: str = ""
    expiry: str = ""


@dataclass
class BasicDetails:
    full_name: str = ""
    email: str = ""
    phone: str = ""
    location: str = ""
    headline: str = ""
    summary: str = ""
    linkedin: str = ""
    github: str = ""
    portfolio: str = ""
    work_authorization: Optional[WorkAuthorization] = None


@dataclass
class Instructions:
    """Free-form tailoring instructions entered by the user."""
    goals: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)
    constraints: List[str] = field(default_factory=list)
    prompt: str = ""


@dataclass
class FormState:
    """
    Everything the user supplied: structured form data plus the decoded text of
    an uploaded resume and a pasted job description.

    Attributes:
        preserve_strict (bool): When True the user's own wording is kept
            (whitespace cleanup only) and generated text is never preferred
            unless instructions ask for a rewrite.
    """
    basics: BasicDetails = field(default_factory=BasicDetails)
    experience: List[ExperienceRecord] = field(default_factory=list)
    projects: List[ProjectRecord] = field(default_factory=list)
    education: List[EducationRecord] = field(default_factory=list)
    skills: List[str] = field(default_factory=list)
    instructions: Instructions = field(default_factory=Instructions)
    resume_text: str = ""
    job_description_text: str = ""
    preserve_strict: bool = False
