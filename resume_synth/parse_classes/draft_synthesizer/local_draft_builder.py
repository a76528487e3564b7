"""local_draft_builder.py
Heuristic draft synthesis from form state and parsed resume text. This is the
path that is always available, with or without an external generator.
"""
import random
import re
from dataclasses import replace
from datetime import date
from typing import Callable, List, Optional, Sequence

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.keyword_tables import (
    NORMALIZE_VERBS,
    REWRITE_VERBS,
    EMPHASIS_VERBS,
    PLACEHOLDER_REGEX,
)
from resume_synth.logging import LoggerFactory
from resume_synth.models import (
    FormState,
    BasicDetails,
    GeneratedDraft,
    ExperienceRecord,
    KeywordScore,
    ParsedResumeSections,
)
from resume_synth.parse_classes.helpers.text_keys import unique, dedupe_strings
from resume_synth.parse_classes.text_segmenter.text_segmenter import starts_with_action_verb
from resume_synth.parse_classes.narrative_sanitizer.narrative_sanitizer import (
    collect_contact_tokens,
    sanitize,
    tidy_bullets,
)
from resume_synth.parse_classes.keyword_scorer.keyword_scorer import (
    tokenize,
    build_resume_token_set,
    score_keywords,
)
from resume_synth.parse_classes.entity_merger.identity_keys import normalize_date_key
from resume_synth.parse_classes.entity_merger.entity_merger import (
    assign_record_ids,
    combine_skills,
    ensure_all_education,
    ensure_all_projects,
    finalize_experience,
    fold_projects_into_experience,
    normalize_education_output,
    sanitize_project_entries,
)
from resume_synth.parse_classes.draft_synthesizer.source_records import select_source_records

VerbChooser = Callable[[Sequence[str]], str]

logger_factory = LoggerFactory()
builder_logger = logger_factory.get_stage_logger("local_draft_builder")

_PLACEHOLDER = re.compile(PLACEHOLDER_REGEX, re.IGNORECASE)
_EMPHASIS = re.compile(r"\b(?:" + "|".join(EMPHASIS_VERBS) + r")\b", re.IGNORECASE)
_BULLET_FRAGMENT_SPLIT = re.compile(r"[•;]|\s[-–—]\s|\.\s+")
_URL = re.compile(r"https?:[^\s)]+")

# Normalized bullets kept per record
MAX_NORMALIZED_BULLETS = 5
# Technologies appended as a "using ..." hint
MAX_TECH_HINT = 3
# Words from a short line / job description quoted in a rewritten line
MAX_REWRITE_TOKENS = 5


# ----------------------
# Verb choosers
# ----------------------
def first_verb(verbs: Sequence[str]) -> str:
    """Deterministic chooser: always the first entry."""
    return verbs[0]


def make_verb_chooser(seed: Optional[int] = SYNTH_DEFAULTS.REWRITE_VERB_SEED) -> VerbChooser:
    """
    Build the action verb chooser used when a bullet is rewritten.

    Args:
        seed (Optional[int]): None for the deterministic first-entry rule,
            otherwise the seed of a private `random.Random`.
    """
    if seed is None:
        return first_verb
    rng = random.Random(seed)
    return lambda verbs: rng.choice(list(verbs))


# ----------------------
# Line helpers
# ----------------------
def clean_sentence(line: str) -> str:
    """Collapse whitespace and drop bullet glyphs."""
    return re.sub(r"\s+", " ", re.sub(r"•+", "", line or "")).strip()


def enrich(text: str) -> str:
    """Upper-case outcome verbs ("reduced" -> "REDUCED")."""
    return _EMPHASIS.sub(lambda match: match.group(0).upper(), text)


def should_rewrite(line: str) -> bool:
    """Placeholder text and lines too short to stand on their own are rewritten."""
    if not line:
        return False
    return bool(_PLACEHOLDER.search(line)) or len(line) < SYNTH_DEFAULTS.REWRITE_MIN_LINE_CHARS


def rewrite_line(
    line: str,
    jd_tokens: Sequence[str],
    tech_hint: Sequence[str] = (),
    verb_chooser: VerbChooser = first_verb,
) -> str:
    """
    Replace a placeholder / too-short line with "<Verb> outcomes around <top tokens>".

    Example:
        >>> rewrite_line("did api work", ["python", "aws"])
        'Delivered outcomes around did, api, work, python, aws'
    """
    tokens = [t for t in tokenize(line) if len(t) > 2]
    tech = [t for t in list(tech_hint)[:MAX_TECH_HINT] if t]
    merged = unique(tokens + list(jd_tokens) + tech)
    if not merged:
        return clean_sentence(line)
    return f"{verb_chooser(REWRITE_VERBS)} outcomes around {', '.join(merged[:MAX_REWRITE_TOKENS])}"


def _best_fragment(line: str, jd_set: set) -> str:
    parts = [p.strip() for p in _BULLET_FRAGMENT_SPLIT.split(line) if p and p.strip()] or [line]
    best, best_score = parts[0], -1
    for part in parts:
        score = sum(1 for token in tokenize(part) if token in jd_set)
        if score > best_score:
            best, best_score = part, score
    return best


def normalize_bullets(
    lines: Sequence[str],
    jd_tokens: Sequence[str],
    tech_hint: Sequence[str] = (),
    verb_chooser: VerbChooser = first_verb,
) -> List[str]:
    """
    Reduce each line to its fragment with the most job description overlap,
    strip URLs, cap at `SYNTH_DEFAULTS.NORMALIZED_BULLET_MAX_WORDS` words,
    prepend an action verb when missing and append a "using <tech>" hint.
    """
    jd_set = set(jd_tokens)
    tech = [t for t in list(tech_hint)[:MAX_TECH_HINT] if t]
    out: List[str] = []
    seen = set()

    for line in lines or []:
        if not line:
            continue
        text = re.sub(r"\s{2,}", " ", _URL.sub("", _best_fragment(line, jd_set))).strip(" ,;:-")
        if not text:
            continue
        words = text.split()
        if len(words) > SYNTH_DEFAULTS.NORMALIZED_BULLET_MAX_WORDS:
            text = " ".join(words[: SYNTH_DEFAULTS.NORMALIZED_BULLET_MAX_WORDS])
        if not starts_with_action_verb(text):
            # Keep acronyms ("API", "AWS") as written
            if text[0].isupper() and not text[:2].isupper():
                text = text[0].lower() + text[1:]
            text = f"{verb_chooser(NORMALIZE_VERBS)} {text}"
        if tech and "using" not in text.lower():
            text = f"{text} using {', '.join(tech)}"

        key = text.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(text)

    return out[:MAX_NORMALIZED_BULLETS]


# ----------------------
# Summary
# ----------------------
def estimate_years(experience: Sequence[ExperienceRecord], today: Optional[date] = None) -> int:
    """Whole years since the earliest parseable start date (0 if none)."""
    today = today or date.today()
    starts = []
    for record in experience:
        key = normalize_date_key(record.start_date)
        if len(key) < 4:
            continue
        year = int(key[:4])
        if not 1900 <= year <= today.year:
            continue
        month = int(key[4:6]) if len(key) >= 6 and 1 <= int(key[4:6]) <= 12 else 1
        starts.append(date(year, month, 1))
    if not starts:
        return 0
    years = (today - min(starts)).days / 365
    return max(0, int(years + 0.5))


def build_summary(
    basics: BasicDetails,
    experience: Sequence[ExperienceRecord],
    matched_keywords: Sequence[str],
    today: Optional[date] = None,
) -> str:
    """
    Synthesize a one-line summary from the headline, estimated years, top
    matched keywords and work authorization.

    Example:
        "Data Scientist with 6+ years building scalable, user-centric
        applications. Specializes in python, sql. Work authorization: Citizen."
    """
    role = basics.headline or "Software Engineer"
    years = estimate_years(experience, today)
    years_part = f" with {years}+ years" if years >= 1 else ""
    top = list(matched_keywords)[:5]
    strengths = f"Specializes in {', '.join(top)}." if top else ""
    sentence = f"{role}{years_part} building scalable, user-centric applications. {strengths}".strip()

    status = basics.work_authorization.status if basics.work_authorization else ""
    visa_text = f" Work authorization: {status}." if status and status != "Not Applicable" else ""
    return f"{sentence}{visa_text}"


# ----------------------
# Builder
# ----------------------
def build_local_draft(
    form_state: FormState,
    verb_chooser: Optional[VerbChooser] = None,
    today: Optional[date] = None,
    parsed: Optional[ParsedResumeSections] = None,
    score: Optional[KeywordScore] = None,
) -> GeneratedDraft:
    """
    Build a complete draft from form state alone.

    Args:
        form_state (FormState): The user's inputs.
        verb_chooser (Optional[VerbChooser]): Picks action verbs for rewritten
            / normalized bullets. Defaults to `make_verb_chooser()`.
        today (Optional[date]): Reference date for the years-of-experience
            estimate.
        parsed (Optional[ParsedResumeSections]): Already parsed resume text;
            parsed from `form_state.resume_text` if None.
        score (Optional[KeywordScore]): Precomputed keyword score; computed
            here if None.

    Returns:
        GeneratedDraft: Fully populated draft (empty lists, never None).
    """
    verb_chooser = verb_chooser or make_verb_chooser()
    sources = select_source_records(form_state, parsed)
    instructions = form_state.instructions

    jd_text = (form_state.job_description_text or "")[: SYNTH_DEFAULTS.MAX_INPUT_CHARS]
    jd_tokens = unique(tokenize(jd_text) + tokenize(" ".join(instructions.keywords)))
    if score is None:
        score = score_keywords(
            jd_text,
            build_resume_token_set(sources.experience, sources.projects, sources.skills),
            instructions.keywords,
        )

    has_uploaded_resume = bool((form_state.resume_text or "").strip())
    preserve_user_text = has_uploaded_resume and bool(form_state.experience or form_state.projects)

    def bullets_for(lines: List[str], tech_hint: List[str]) -> List[str]:
        if preserve_user_text:
            if form_state.preserve_strict:
                out = [clean_sentence(line) for line in lines]
            else:
                out = [
                    rewrite_line(line, jd_tokens, tech_hint, verb_chooser) if should_rewrite(line) else clean_sentence(line)
                    for line in lines
                ]
        else:
            out = [enrich(line) for line in normalize_bullets(lines, jd_tokens, tech_hint, verb_chooser)]
        return [line for line in out if line]

    experience = [
        replace(record, achievements=bullets_for(list(record.achievements), list(record.technologies)))
        for record in sources.experience
    ]
    projects = [
        replace(
            record,
            highlights=bullets_for(list(record.highlights) or [record.summary], list(record.technologies)),
        )
        for record in sources.projects
    ]

    contact_tokens = collect_contact_tokens(form_state.basics)
    summary = ""
    for candidate in (sources.summary, build_summary(form_state.basics, sources.experience, score.matched_keywords, today)):
        summary = sanitize(candidate, "summary", contact_tokens)
        if summary:
            break

    # Skills: the user's list, else technologies plus matched keywords
    technologies = unique([t for r in list(sources.experience) + list(sources.projects) for t in r.technologies])
    base_skills = [s.strip().rstrip(",.;:") for s in (form_state.skills or technologies + score.matched_keywords)]
    base_skills = [s for s in base_skills if len(s) >= 2 and not re.search(r"\s{2,}", s)]
    skills = combine_skills(base_skills, dedupe_strings(list(sources.parsed.skills) + list(form_state.skills)), contact_tokens)

    if SYNTH_DEFAULTS.FOLD_PROJECTS_INTO_EXPERIENCE:
        experience = fold_projects_into_experience(experience, projects)
        projects = []

    final_experience = finalize_experience(experience, summary, contact_tokens)
    final_projects = [
        replace(project, highlights=tidy_bullets(project.highlights, contact_tokens))
        for project in ensure_all_projects(sanitize_project_entries(projects, contact_tokens, max_combined_chars=None), [])
    ]
    final_education = normalize_education_output(ensure_all_education(sources.education, []))

    builder_logger.info(
        f"Local draft built: {len(final_experience)} experience, {len(final_projects)} projects, "
        f"{len(final_education)} education, {len(skills)} skills"
    )
    return GeneratedDraft(
        summary=summary,
        skills=skills,
        experience=assign_record_ids(final_experience),
        projects=assign_record_ids(final_projects),
        education=assign_record_ids(final_education),
        ats_score=score.ats_score,
        matched_keywords=list(score.matched_keywords),
    )
