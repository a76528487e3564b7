"""field_reconciler.py
Field-level "richer wins" reconciliation between two versions of the same
record. Every function returns new values; inputs are never mutated.
"""
from dataclasses import replace
from typing import Iterable, List, Optional

from resume_synth.models import ExperienceRecord, ProjectRecord, EducationRecord
from resume_synth.parse_classes.helpers.text_keys import normalize_text_key, dedupe_strings
from resume_synth.parse_classes.narrative_sanitizer.narrative_sanitizer import sanitize_heading
from resume_synth.parse_classes.entity_merger.identity_keys import normalize_date_key


# ----------------------
# Scalar fields
# ----------------------
def pick_richer(current: Optional[str], incoming: Optional[str]) -> str:
    """
    Prefer the longer of two values; an empty value never wins.

    Example:
        >>> pick_richer("Eng", "")
        'Eng'
        >>> pick_richer("Eng", "Engineer")
        'Engineer'
    """
    current = current or ""
    incoming = incoming or ""
    if not incoming:
        return current
    if not current:
        return incoming
    return incoming if len(incoming) > len(current) else current


def pick_date(current: Optional[str], incoming: Optional[str]) -> str:
    """
    Reconcile two date strings.

    Dates with the same `YYYYMM` key keep the longer spelling ("January 2020"
    over "Jan 2020"); otherwise the current value is kept and a missing or
    unparseable side never wins over a parseable one.
    """
    current = current or ""
    incoming = incoming or ""
    if not current and not incoming:
        return ""
    current_key = normalize_date_key(current)
    incoming_key = normalize_date_key(incoming)
    if not current_key and not incoming_key:
        return incoming or current
    if not incoming_key:
        return current or incoming
    if not current_key:
        return incoming or current
    if current_key == incoming_key:
        return incoming if len(incoming) > len(current) else current
    return current


# ----------------------
# List fields
# ----------------------
def merge_string_lists(original: Iterable[str], generated: Iterable[str]) -> List[str]:
    """Generated values first, then originals, case / whitespace insensitive dedupe."""
    return dedupe_strings(list(generated or []) + list(original or []))


def blend_generated_text(
    original: Iterable[str],
    generated: Iterable[str],
    prefer_generated: bool = False,
) -> List[str]:
    """
    Blend original and generated bullet lists.

    Args:
        original (Iterable[str]): The user's / parsed bullets.
        generated (Iterable[str]): Bullets from a generated draft.
        prefer_generated (bool): If True, every generated bullet comes first
            followed by unrepresented originals. If False, the lists are
            interleaved by index, taking generated[i] over original[i].

    Returns:
        List[str]: Blended bullets with no two entries sharing a normalized key.
    """
    cleaned_original = [str(v).strip() for v in original or [] if v and str(v).strip()]
    cleaned_generated = [str(v).strip() for v in generated or [] if v and str(v).strip()]

    if not cleaned_original:
        return dedupe_strings(cleaned_generated)
    if not cleaned_generated:
        return dedupe_strings(cleaned_original)

    out: List[str] = []
    seen = set()

    def push(value: str) -> None:
        key = normalize_text_key(value)
        if not key or key in seen:
            return
        seen.add(key)
        out.append(value)

    if prefer_generated:
        for value in cleaned_generated + cleaned_original:
            push(value)
        return out

    for index in range(max(len(cleaned_original), len(cleaned_generated))):
        if index < len(cleaned_generated):
            push(cleaned_generated[index])
        else:
            push(cleaned_original[index])
    return out


# ----------------------
# Same-key merges (assimilation / consolidation)
# ----------------------
def merge_experience_entry(base: ExperienceRecord, incoming: ExperienceRecord) -> ExperienceRecord:
    """Merge two experience records that share an identity key."""
    start_date = pick_date(base.start_date, incoming.start_date)
    end_date = pick_date(base.end_date, incoming.end_date)
    return replace(
        base,
        id=base.id or incoming.id,
        role=pick_richer(sanitize_heading(base.role), sanitize_heading(incoming.role)),
        company=pick_richer(sanitize_heading(base.company), sanitize_heading(incoming.company)),
        location=pick_richer(base.location, incoming.location),
        start_date=start_date,
        end_date=end_date,
        current=base.current if (base.current or base.end_date) else incoming.current,
        technologies=merge_string_lists(base.technologies, incoming.technologies),
        achievements=dedupe_strings(list(base.achievements) + list(incoming.achievements)),
    )


def merge_project_entry(base: ProjectRecord, incoming: ProjectRecord) -> ProjectRecord:
    """Merge two project records that share an identity key."""
    return replace(
        base,
        id=base.id or incoming.id,
        name=pick_richer(base.name, incoming.name),
        url=base.url or incoming.url,
        summary=(base.summary or "").strip() or (incoming.summary or "").strip(),
        technologies=merge_string_lists(base.technologies, incoming.technologies),
        highlights=dedupe_strings(list(base.highlights) + list(incoming.highlights)),
    )


def merge_education_entry(base: EducationRecord, incoming: EducationRecord) -> EducationRecord:
    """Merge two education records that share an identity key."""
    return replace(
        base,
        id=base.id or incoming.id,
        school=pick_richer(base.school, incoming.school),
        degree=pick_richer(base.degree, incoming.degree),
        field=pick_richer(base.field, incoming.field),
        start_date=pick_date(base.start_date, incoming.start_date),
        end_date=pick_date(base.end_date, incoming.end_date),
        location=pick_richer(base.location, incoming.location),
        grade=pick_richer(base.grade, incoming.grade),
    )


# ----------------------
# Generated-over-original overlays
# ----------------------
def overlay_experience(
    generated: ExperienceRecord,
    original: Optional[ExperienceRecord],
    prefer_generated: bool = False,
) -> ExperienceRecord:
    """
    Overlay a generated experience entry on its original: generated scalar
    fields win when non-empty after `sanitize_heading`, technologies are
    unioned and achievements blended.
    """
    if original is None:
        return replace(
            generated,
            achievements=blend_generated_text([], generated.achievements, prefer_generated),
            technologies=merge_string_lists([], generated.technologies),
        )
    return replace(
        generated,
        id=generated.id or original.id,
        role=sanitize_heading(generated.role) or original.role,
        company=sanitize_heading(generated.company) or original.company,
        location=sanitize_heading(generated.location) or original.location,
        start_date=sanitize_heading(generated.start_date) or original.start_date,
        end_date=sanitize_heading(generated.end_date) or original.end_date,
        current=generated.current or (not generated.end_date and original.current),
        technologies=merge_string_lists(original.technologies, generated.technologies),
        achievements=blend_generated_text(original.achievements, generated.achievements, prefer_generated),
    )


def overlay_project(
    generated: ProjectRecord,
    original: Optional[ProjectRecord],
    prefer_generated: bool = False,
) -> ProjectRecord:
    """Overlay a generated project entry on its original (see `overlay_experience`)."""
    if original is None:
        return replace(
            generated,
            highlights=blend_generated_text([], generated.highlights, prefer_generated),
            technologies=merge_string_lists([], generated.technologies),
        )
    return replace(
        generated,
        id=generated.id or original.id,
        name=generated.name or original.name,
        url=generated.url or original.url,
        summary=(generated.summary or "").strip() or (original.summary or "").strip(),
        technologies=merge_string_lists(original.technologies, generated.technologies),
        highlights=blend_generated_text(original.highlights, generated.highlights, prefer_generated),
    )


def overlay_education(generated: EducationRecord, original: Optional[EducationRecord]) -> EducationRecord:
    """
    Overlay a generated education entry on its original, field by field. A
    generated value rejected by `sanitize_heading` falls back to the original.
    """
    if original is None:
        return replace(generated)
    return replace(
        generated,
        id=generated.id or original.id,
        school=sanitize_heading(generated.school) or original.school,
        degree=sanitize_heading(generated.degree) or original.degree,
        field=sanitize_heading(generated.field) or original.field,
        start_date=sanitize_heading(generated.start_date) or original.start_date,
        end_date=sanitize_heading(generated.end_date) or original.end_date,
        location=sanitize_heading(generated.location) or original.location,
        grade=sanitize_heading(generated.grade) or original.grade,
    )
