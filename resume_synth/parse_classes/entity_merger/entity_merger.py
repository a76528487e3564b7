"""entity_merger.py
Reconciles record lists from different sources (generated draft, user form,
parsed resume text) into one deduplicated, ordered list per entity kind.

Pipeline for experience (see `finalize_experience`):
    consolidate -> prune duplicate content -> dedupe cards -> tidy bullets -> drop noise
"""
import re
from dataclasses import replace
from typing import Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.logging import LoggerFactory
from resume_synth.models import ExperienceRecord, ProjectRecord, EducationRecord, new_record_id
from resume_synth.parse_classes.helpers.text_keys import normalize_text_key, dedupe_strings
from resume_synth.parse_classes.narrative_sanitizer.narrative_sanitizer import (
    contains_contact_noise,
    contains_contact_token,
    filter_skill_list,
    sanitize,
    sanitize_heading,
    tidy_bullets,
)
from resume_synth.parse_classes.entity_merger.identity_keys import (
    Record,
    explicit_id_key,
    identity_key,
    experience_headline_key,
)
from resume_synth.parse_classes.entity_merger.field_reconciler import (
    merge_experience_entry,
    merge_project_entry,
    merge_education_entry,
)

R = TypeVar("R", ExperienceRecord, ProjectRecord, EducationRecord)

logger_factory = LoggerFactory()
merger_logger = logger_factory.get_stage_logger("entity_merger")

# Capitalised name pairs and emails echoed from the summary
_NAME_EMAIL_PATTERN = re.compile(r"[A-Z][A-Za-z]+\s+[A-Z][A-Za-z]+|[\w.+-]+@[\w.-]+")

# Headless experience text longer than this is a stray paragraph, not a role
MAX_HEADLESS_CHARS = 320
# Any experience entry with more words than this is a pasted document, not a role
MAX_EXPERIENCE_WORDS = 150
# Project text (summary + highlights) longer than this is rejected from generated drafts
MAX_PROJECT_COMBINED_CHARS = 320


def _bullet_key(text: str) -> str:
    """Normalized key ignoring trailing sentence punctuation."""
    return normalize_text_key(text).rstrip(".!?…")


def clean_terms(values: Iterable[str]) -> List[str]:
    """Technology names passed through `sanitize_heading`, deduplicated."""
    return dedupe_strings(term for term in (sanitize_heading(value) for value in values or []) if term)


# ----------------------
# Keyed lookup
# ----------------------
def build_keyed_map(records: Iterable[R]) -> Dict[str, R]:
    """
    Index `records` by explicit id and by identity key (first record wins for
    each key).
    """
    keyed: Dict[str, R] = {}
    for record in records or []:
        if record is None:
            continue
        id_key = explicit_id_key(record)
        if id_key:
            keyed.setdefault(id_key, record)
        key = identity_key(record)
        if key:
            keyed.setdefault(key, record)
    return keyed


def lookup_record(keyed: Dict[str, R], record: R) -> Optional[R]:
    """Find the counterpart of `record`; an explicit id match wins over the identity key."""
    id_key = explicit_id_key(record)
    if id_key and id_key in keyed:
        return keyed[id_key]
    return keyed.get(identity_key(record))


# ----------------------
# Ordered keyed merge
# ----------------------
def _assimilate(
    generated: Sequence[R],
    original: Sequence[R],
    normalize: Callable[[R], R],
    merge: Callable[[R, R], R],
    kind: str,
) -> List[R]:
    """
    Union `generated` and `original` (generated scanned first). Records sharing
    an identity key, or an explicit id already seen, are merged in place so
    output order is first appearance.
    """
    merged: Dict[str, R] = {}
    keys_by_id: Dict[str, str] = {}

    for index, record in enumerate(list(generated or []) + list(original or [])):
        if record is None:
            continue
        normalized = normalize(record)
        id_key = explicit_id_key(normalized)
        if id_key and id_key in keys_by_id:
            key = keys_by_id[id_key]
        else:
            # Records with no usable content still get a stable, unique slot
            key = identity_key(normalized) or f"{kind}:{index}"

        if key in merged:
            merged[key] = merge(merged[key], normalized)
        else:
            merged[key] = normalized
        if id_key:
            keys_by_id.setdefault(id_key, key)

    return list(merged.values())


def _normalize_experience(record: ExperienceRecord) -> ExperienceRecord:
    return replace(
        record,
        achievements=dedupe_strings(record.achievements),
        technologies=[t.strip() for t in record.technologies if t and t.strip()],
    )


def _normalize_project(record: ProjectRecord) -> ProjectRecord:
    summary = (record.summary or "").strip()
    return replace(
        record,
        name=(record.name or "").strip() or summary or "Project",
        summary=summary,
        highlights=dedupe_strings(record.highlights),
        technologies=[t.strip() for t in record.technologies if t and t.strip()],
    )


def _normalize_education(record: EducationRecord) -> EducationRecord:
    return replace(record, school=(record.school or "").strip(), degree=(record.degree or "").strip())


def ensure_all_experience(
    generated: Sequence[ExperienceRecord],
    original: Sequence[ExperienceRecord],
) -> List[ExperienceRecord]:
    """Every experience record from both lists, same-key records merged."""
    return _assimilate(generated, original, _normalize_experience, merge_experience_entry, "experience")


def ensure_all_projects(
    generated: Sequence[ProjectRecord],
    original: Sequence[ProjectRecord],
) -> List[ProjectRecord]:
    """Every project record from both lists, same-key records merged."""
    return _assimilate(generated, original, _normalize_project, merge_project_entry, "project")


def ensure_all_education(
    generated: Sequence[EducationRecord],
    original: Sequence[EducationRecord],
) -> List[EducationRecord]:
    """Every education record from both lists, same-key records merged."""
    return _assimilate(generated, original, _normalize_education, merge_education_entry, "education")


# ----------------------
# Experience cleanup
# ----------------------
def consolidate_experience_entries(entries: Sequence[ExperienceRecord]) -> List[ExperienceRecord]:
    """
    Merge entries sharing a (company, role, start date) headline and append
    headless fragments to the preceding entry. A leading headless entry is kept
    as is.
    """
    result: List[ExperienceRecord] = []
    index_by_key: Dict[str, int] = {}

    for entry in entries:
        role = sanitize_heading(entry.role)
        company = sanitize_heading(entry.company)

        if not (role or company):
            if not entry.achievements:
                continue
            if result:
                target = result[-1]
                result[-1] = replace(
                    target, achievements=dedupe_strings(list(target.achievements) + list(entry.achievements))
                )
            else:
                result.append(replace(entry, role="", company="", achievements=dedupe_strings(entry.achievements)))
            continue

        key = experience_headline_key(entry)
        if key in index_by_key:
            position = index_by_key[key]
            result[position] = merge_experience_entry(result[position], entry)
        else:
            index_by_key[key] = len(result)
            result.append(replace(entry, role=role, company=company, achievements=dedupe_strings(entry.achievements)))

    return result


def prune_duplicate_experience_content(
    entries: Sequence[ExperienceRecord],
    summary: str = "",
    contact_tokens: Optional[Iterable[str]] = None,
) -> List[ExperienceRecord]:
    """
    Drop achievements that repeat the summary or an earlier achievement, or
    that carry contact details. Headless entries left without achievements
    are removed.
    """
    tokens = frozenset(contact_tokens or ())
    seen = set()
    if summary:
        for sentence in re.split(r"(?<=[.!?])\s+", summary):
            seen.add(_bullet_key(sentence))
        for match in _NAME_EMAIL_PATTERN.findall(summary):
            seen.add(_bullet_key(match))

    out: List[ExperienceRecord] = []
    for entry in entries:
        kept: List[str] = []
        for achievement in entry.achievements:
            key = _bullet_key(achievement)
            if not key or key in seen:
                continue
            if contains_contact_noise(achievement) or contains_contact_token(achievement, tokens):
                continue
            seen.add(key)
            kept.append(achievement)
        has_heading = sanitize_heading(entry.role) or sanitize_heading(entry.company)
        if has_heading or kept:
            out.append(replace(entry, achievements=kept))
    return out


def dedupe_experience_cards(entries: Sequence[ExperienceRecord]) -> List[ExperienceRecord]:
    """Keep the first card per headline key; cards without achievements are dropped."""
    out: List[ExperienceRecord] = []
    seen = set()
    for entry in entries:
        if not entry.achievements:
            continue
        key = experience_headline_key(entry)
        if key and key in seen:
            continue
        if key:
            seen.add(key)
        out.append(entry)
    return out


def should_drop_experience_entry(entry: ExperienceRecord, contact_tokens: Optional[Iterable[str]] = None) -> bool:
    """
    True for entries that are not real roles: no achievements, a headless
    paragraph of contact details or boilerplate, a pasted profile / summary
    block, or an oversized wall of text.
    """
    if not entry.achievements:
        return True
    heading = f"{sanitize_heading(entry.role)} {sanitize_heading(entry.company)}".strip()
    combined = re.sub(r"\s+", " ", " ".join(entry.achievements)).strip()
    lower = combined.lower()

    if not heading:
        if contains_contact_noise(combined) or contains_contact_token(combined, contact_tokens):
            return True
        if "profile summary" in lower or lower.startswith("experience "):
            return True
        if len(combined) > MAX_HEADLESS_CHARS:
            return True

    # A pasted profile block rather than role achievements
    if re.match(r"(?:profile|summary)\b", lower) or "professional summary" in lower:
        return True
    return len(combined.split()) > MAX_EXPERIENCE_WORDS


def finalize_experience(
    entries: Sequence[ExperienceRecord],
    summary: str = "",
    contact_tokens: Optional[Iterable[str]] = None,
) -> List[ExperienceRecord]:
    """
    Run the full experience cleanup: consolidate, prune, dedupe cards, tidy
    bullets (no achievement may appear twice across the whole list) and drop
    non-role entries.
    """
    tokens = frozenset(contact_tokens or ())
    consolidated = consolidate_experience_entries(entries)
    pruned = prune_duplicate_experience_content(consolidated, summary, tokens)
    unique_cards = dedupe_experience_cards(pruned)

    global_keys = set()
    cleaned: List[ExperienceRecord] = []
    for entry in unique_cards:
        bullets: List[str] = []
        for line in tidy_bullets(entry.achievements, tokens):
            key = _bullet_key(line)
            if not key or key in global_keys:
                continue
            global_keys.add(key)
            bullets.append(line)

        candidate = replace(
            entry,
            role=sanitize_heading(entry.role),
            company=sanitize_heading(entry.company),
            location=sanitize_heading(entry.location),
            start_date=sanitize_heading(entry.start_date),
            end_date=sanitize_heading(entry.end_date),
            achievements=bullets,
            technologies=clean_terms(entry.technologies),
        )
        if should_drop_experience_entry(candidate, tokens):
            merger_logger.debug(f"Dropped experience entry '{candidate.role or candidate.company or candidate.id}'")
            continue
        cleaned.append(candidate)
    return cleaned


# ----------------------
# Projects / education / skills
# ----------------------
def sanitize_project_entries(
    projects: Sequence[ProjectRecord],
    contact_tokens: Optional[Iterable[str]] = None,
    max_combined_chars: Optional[int] = MAX_PROJECT_COMBINED_CHARS,
) -> List[ProjectRecord]:
    """
    Sanitize project names, summaries and highlights, dropping projects whose
    text is contact noise or (when `max_combined_chars` is set) too long.
    """
    tokens = frozenset(contact_tokens or ())
    out: List[ProjectRecord] = []
    for project in projects:
        name = sanitize_heading(project.name)
        summary = sanitize(project.summary, "project_summary", tokens)
        highlights = dedupe_strings(sanitize(h, "highlight", tokens) for h in project.highlights)
        combined = re.sub(r"\s+", " ", " ".join([summary] + highlights)).strip()

        if not combined:
            if name:
                out.append(replace(project, name=name, summary="", highlights=[]))
            continue
        if contains_contact_noise(combined) or contains_contact_token(combined, tokens):
            continue
        if max_combined_chars is not None and len(combined) > max_combined_chars:
            merger_logger.debug(f"Dropped oversized project '{name}'")
            continue
        out.append(
            replace(
                project,
                name=name,
                summary=summary,
                highlights=highlights,
                technologies=clean_terms(project.technologies),
            )
        )
    return out


def normalize_education_output(entries: Sequence[EducationRecord]) -> List[EducationRecord]:
    """Keep education records with a usable school or degree heading."""
    meaningful: List[EducationRecord] = []
    for entry in entries:
        school = sanitize_heading(entry.school)
        degree = sanitize_heading(entry.degree)
        if not school and not degree:
            continue
        has_detail = bool(entry.start_date or entry.end_date or entry.field or entry.location or entry.grade)
        if len(school) > 1 or len(degree) > 1 or has_detail:
            meaningful.append(
                replace(
                    entry,
                    school=school,
                    degree=degree,
                    field=sanitize_heading(entry.field),
                    start_date=sanitize_heading(entry.start_date),
                    end_date=sanitize_heading(entry.end_date),
                    location=sanitize_heading(entry.location),
                    grade=sanitize_heading(entry.grade),
                )
            )
    return meaningful


def fold_projects_into_experience(
    experience: Sequence[ExperienceRecord],
    projects: Sequence[ProjectRecord],
) -> List[ExperienceRecord]:
    """
    Fold project content into experience.

    With no experience, each project becomes an experience record (role =
    project name). Otherwise each project highlight is appended to the first
    experience record as "Name: highlight".
    """
    if not projects:
        return list(experience)

    if not experience:
        folded = [
            ExperienceRecord(
                id=project.id,
                role=project.name or "Project",
                achievements=[h for h in (project.highlights or [project.summary]) if h],
                technologies=list(project.technologies),
            )
            for project in projects
        ]
        return ensure_all_experience(folded, [])

    merged = [replace(entry, achievements=dedupe_strings(entry.achievements)) for entry in experience]
    primary = merged[0]
    achievements = list(primary.achievements)
    seen = {normalize_text_key(a) for a in achievements}

    for project in projects:
        highlights = [h.strip() for h in (project.highlights or [project.summary]) if h and h.strip()]
        label = (project.name or "").strip()
        for highlight in highlights:
            entry = f"{label}: {highlight}" if label else highlight
            key = normalize_text_key(entry)
            if key in seen:
                continue
            seen.add(key)
            achievements.append(entry)

    merged[0] = replace(primary, achievements=achievements)
    return merged


def combine_skills(
    generated: Iterable[str],
    original: Iterable[str],
    contact_tokens: Optional[Iterable[str]] = None,
    max_items: int = SYNTH_DEFAULTS.MAX_SKILLS,
) -> List[str]:
    """Generated skills first, then originals; filtered and capped."""
    merged = dedupe_strings(list(generated or []) + list(original or []))
    return filter_skill_list(merged, contact_tokens, max_items=max_items)


def assign_record_ids(records: Sequence[Record], new_id: Callable[[], str] = new_record_id) -> List[Record]:
    """Give every record without an id a fresh one."""
    return [record if record.id else replace(record, id=new_id()) for record in records]
