"""config.py
Holds various defaults for the resume draft synthesis pipeline.
"""

from dataclasses import dataclass, field
from typing import Optional

# --------------------------------------------------------------
# SETUP DEFAULT VALUES
# --------------------------------------------------------------
@dataclass
class SynthDefaults:
    """
    Default settings for parameters used across the resume_synth repo.
    """
    # ---- TextSegmenter settings ----
    MAX_INPUT_CHARS: int = field(
        default = 50_000,
        metadata = {
            "description": "Maximum number of characters of resume / job description text processed"
    })
    HEADING_MAX_CHARS: int = field(
        default = 48,
        metadata = {
            "description": "Longest line (after trimming) that can still be classified as a heading"
    })

    # ---- SectionParser settings ----
    SUMMARY_PARSE_MAX_CHARS: int = field(
        default = 600,
        metadata = {
            "description": "Parsed summary is clamped to this length at a word boundary"
    })
    SUMMARY_MAX_SENTENCES: int = field(
        default = 3,
        metadata = {
            "description": "Maximum number of sentences kept when parsing a summary"
    })

    # ---- NarrativeSanitizer settings ----
    SUMMARY_MAX_CHARS: int = field(
        default = 280,
        metadata = {
            "description": "Maximum length of the final draft summary"
    })
    PROJECT_SUMMARY_MAX_CHARS: int = field(
        default = 260,
        metadata = {
            "description": "Maximum length of a project summary"
    })
    BULLET_MAX_CHARS: int = field(
        default = 220,
        metadata = {
            "description": "Maximum length of a single achievement / highlight"
    })
    HEADING_FIELD_MAX_CHARS: int = field(
        default = 90,
        metadata = {
            "description": "Maximum length of a heading field (role, company, school, ...)"
    })
    MIN_VIABLE_CHARS: int = field(
        default = 40,
        metadata = {
            "description": "A truncated value shorter than this is rejected instead of kept"
    })
    MAX_ACHIEVEMENTS: int = field(
        default = 6,
        metadata = {
            "description": "Cap on achievements / highlights per record after cleanup"
    })
    MAX_SKILLS: int = field(
        default = 20,
        metadata = {
            "description": "Cap on skills in the final draft"
    })

    # ---- KeywordScorer settings ----
    MAX_MATCHED_KEYWORDS: int = field(
        default = 30,
        metadata = {
            "description": "Cap on matched keywords returned by the scorer"
    })
    ATS_DENOM_MIN: int = field(
        default = 5,
        metadata = {
            "description": "Lower clamp of the ATS score denominator"
    })
    ATS_DENOM_MAX: int = field(
        default = 30,
        metadata = {
            "description": "Upper clamp of the ATS score denominator"
    })
    DROP_STOPWORDS: bool = field(
        default = False,
        metadata = {
            "description": "Drop common English stop-words before matching keywords"
    })

    # ---- DraftSynthesizer settings ----
    REWRITE_JD_MIN_CHARS: int = field(
        default = 50,
        metadata = {
            "description": "A job description longer than this favors generated text when blending"
    })
    REWRITE_MIN_LINE_CHARS: int = field(
        default = 30,
        metadata = {
            "description": "User bullets shorter than this are rewritten when not preserving strictly"
    })
    NORMALIZED_BULLET_MAX_WORDS: int = field(
        default = 18,
        metadata = {
            "description": "Word cap applied when normalizing a bullet for the local draft"
    })
    FOLD_PROJECTS_INTO_EXPERIENCE: bool = field(
        default = False,
        metadata = {
            "description": "Fold project records into experience records in the final draft"
    })
    REWRITE_VERB_SEED: Optional[int] = field(
        default = None,
        metadata = {
            "description": "Seed for the random verb chooser. None keeps the deterministic chooser"
    })
    PROMPT_TRUNCATE_CHARS: int = field(
        default = 3_500,
        metadata = {
            "description": "Job description / resume text is truncated to this length in prompts"
    })
    RECORD_ID_BYTES: int = field(
        default = 8,
        metadata = {
            "description": "Number of random bytes used to build record ids"
    })

    # ---- API settings ----
    SERVER_HOST: str = field(
        default = "0.0.0.0",
        metadata = {
            "description": "Host the local uvicorn runner binds to"
    })
    SERVER_PORT: int = field(
        default = 8001,
        metadata = {
            "description": "Port the local uvicorn runner listens on"
    })
    MAX_REQUEST_TEXT_CHARS: int = field(
        default = 200_000,
        metadata = {
            "description": "Requests with a larger combined text payload are rejected by the API"
    })


# Import this where needed
SYNTH_DEFAULTS = SynthDefaults()
