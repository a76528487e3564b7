"""draft_normalizer.py
Reconciles a validated external draft with the user's original records.
"""
import re
from typing import Iterable, Optional

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.keyword_tables import REWRITE_KEYWORDS
from resume_synth.models import FormState, GeneratedDraft, ParsedResumeSections
from resume_synth.parse_classes.narrative_sanitizer.narrative_sanitizer import (
    collect_contact_tokens,
    clean_summary_text,
)
from resume_synth.parse_classes.entity_merger.field_reconciler import (
    overlay_experience,
    overlay_project,
    overlay_education,
)
from resume_synth.parse_classes.entity_merger.entity_merger import (
    assign_record_ids,
    build_keyed_map,
    combine_skills,
    ensure_all_education,
    ensure_all_experience,
    ensure_all_projects,
    finalize_experience,
    fold_projects_into_experience,
    lookup_record,
    normalize_education_output,
    sanitize_project_entries,
)
from resume_synth.parse_classes.draft_synthesizer.source_records import select_source_records


def contains_rewrite_cue(value: Optional[str]) -> bool:
    """True if `value` asks for a rewrite ("tailor", "rework", ...)."""
    if not value:
        return False
    lower = value.lower()
    return any(re.search(rf"\b{keyword}", lower) for keyword in REWRITE_KEYWORDS)


def should_favor_rewrite(form_state: FormState) -> bool:
    """
    Decide whether generated text is preferred over the user's wording.

    A rewrite cue in the prompt / goals / constraints, or a job description
    longer than `SYNTH_DEFAULTS.REWRITE_JD_MIN_CHARS`, favors generated text.
    Otherwise generated text is favored unless the user asked to preserve
    their wording strictly.
    """
    instructions = form_state.instructions
    cues: Iterable[str] = [instructions.prompt, *instructions.goals, *instructions.constraints]
    if any(contains_rewrite_cue(cue) for cue in cues):
        return True
    if len((form_state.job_description_text or "").strip()) > SYNTH_DEFAULTS.REWRITE_JD_MIN_CHARS:
        return True
    return not form_state.preserve_strict


def normalize_external_draft(
    draft: GeneratedDraft,
    form_state: FormState,
    prefer_generated: Optional[bool] = None,
    parsed: Optional[ParsedResumeSections] = None,
) -> GeneratedDraft:
    """
    Merge an external draft with the user's originals (form entries, else
    records parsed from the uploaded resume).

    Each generated entry is overlaid on its original (matched by explicit id,
    then identity key), every original not represented is appended, and the
    result goes through the same consolidation / pruning / sanitizing as the
    local path.

    Args:
        draft (GeneratedDraft): Validated external draft.
        form_state (FormState): The user's inputs.
        prefer_generated (Optional[bool]): Bullet blend mode. Defaults to
            `should_favor_rewrite(form_state)`.
        parsed (Optional[ParsedResumeSections]): Already parsed resume text.

    Returns:
        GeneratedDraft: The reconciled draft. `ats_score` and
        `matched_keywords` are left for the caller to fill in.
    """
    if prefer_generated is None:
        prefer_generated = should_favor_rewrite(form_state)
    sources = select_source_records(form_state, parsed)

    keyed_experience = build_keyed_map(sources.experience)
    experience_draft = [
        overlay_experience(entry, lookup_record(keyed_experience, entry), prefer_generated)
        for entry in draft.experience
    ]
    keyed_projects = build_keyed_map(sources.projects)
    projects_draft = [
        overlay_project(entry, lookup_record(keyed_projects, entry), prefer_generated)
        for entry in draft.projects
    ]
    keyed_education = build_keyed_map(sources.education)
    education_draft = [overlay_education(entry, lookup_record(keyed_education, entry)) for entry in draft.education]

    experience = ensure_all_experience(experience_draft, sources.experience)
    projects = ensure_all_projects(projects_draft, sources.projects)
    education = normalize_education_output(ensure_all_education(education_draft, sources.education))

    contact_tokens = collect_contact_tokens(form_state.basics)
    summary = clean_summary_text(draft.summary, sources.summary, contact_tokens=contact_tokens)
    cleaned_projects = sanitize_project_entries(projects, contact_tokens)

    if SYNTH_DEFAULTS.FOLD_PROJECTS_INTO_EXPERIENCE:
        experience = fold_projects_into_experience(experience, cleaned_projects)
        cleaned_projects = []

    return GeneratedDraft(
        summary=summary,
        skills=combine_skills(draft.skills, sources.skills, contact_tokens),
        experience=assign_record_ids(finalize_experience(experience, summary, contact_tokens)),
        projects=assign_record_ids(cleaned_projects),
        education=assign_record_ids(education),
    )
