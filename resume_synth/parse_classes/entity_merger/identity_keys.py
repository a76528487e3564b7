"""identity_keys.py
Stable identity keys for experience / project / education records.

A record's key is resolved by walking an ordered list of strategies and taking
the first non-empty result:

    canonical heading key  ->  explicit id  ->  content hash

so the same entity parsed from two differently worded sources maps to the same
key, independent of surface punctuation, case and diacritics.
"""
import hashlib
import re
import unicodedata
from typing import Any, Callable, Dict, List, Optional, Type, Union

from resume_synth.keyword_tables import MONTH_MAP
from resume_synth.models import ExperienceRecord, ProjectRecord, EducationRecord
from resume_synth.parse_classes.helpers.text_keys import normalize_text_key
from resume_synth.parse_classes.narrative_sanitizer.narrative_sanitizer import sanitize_heading

Record = Union[ExperienceRecord, ProjectRecord, EducationRecord]
KeyStrategy = Callable[[Any], str]

_MONTH_TOKENS = [(re.compile(rf"\b{token}"), number) for token, number in MONTH_MAP.items()]


# ----------------------
# Normalizers
# ----------------------
def normalize_entity_key(value: Optional[str]) -> str:
    """
    Case, punctuation and diacritic insensitive key for a heading value.

    Example:
        >>> normalize_entity_key("Café & Co.")
        'cafeandco'
    """
    if not value:
        return ""
    decomposed = unicodedata.normalize("NFKD", value)
    without_marks = "".join(c for c in decomposed if not unicodedata.combining(c))
    lowered = without_marks.lower().replace("&", " and ")
    return re.sub(r"[^a-z0-9]", "", lowered)


def normalize_date_key(value: Optional[str]) -> str:
    """
    Reduce a free-form date to a comparable `YYYYMM` / `YYYY` key.

    Example:
        >>> normalize_date_key("Jan 2020")
        '202001'
        >>> normalize_date_key("2020-3")
        '202003'
        >>> normalize_date_key("2019")
        '2019'
    """
    if not value:
        return ""
    lower = value.strip().lower()
    if not lower:
        return ""

    iso = re.search(r"((?:19|20)\d{2})[-/.](0?[1-9]|1[0-2])(?!\d)", lower)
    if iso:
        return f"{iso.group(1)}{iso.group(2).zfill(2)}"

    flipped = re.search(r"(?<!\d)(0?[1-9]|1[0-2])[-/.]((?:19|20)\d{2})", lower)
    if flipped:
        return f"{flipped.group(2)}{flipped.group(1).zfill(2)}"

    year_match = re.search(r"(?:19|20)\d{2}", lower)
    month = next((number for regex, number in _MONTH_TOKENS if regex.search(lower)), "")
    if year_match and month:
        return f"{year_match.group(0)}{month}"
    if year_match:
        return year_match.group(0)

    digits = re.sub(r"\D", "", lower)
    if len(digits) >= 4:
        return digits[:6]
    return digits


def canonical_key_parts(*values: Optional[str]) -> str:
    """Join the non-empty entity keys of `values` with "|"."""
    return "|".join(key for key in (normalize_entity_key(v) for v in values) if key)


def content_hash(text: str) -> str:
    """Short digest of whitespace / case normalized text ("" for empty text)."""
    normalized = normalize_text_key(text)
    if not normalized:
        return ""
    return "hash:" + hashlib.sha1(normalized.encode("utf-8")).hexdigest()[:16]


# ----------------------
# Strategies
# ----------------------
def explicit_id_key(record: Record) -> str:
    return f"id:{record.id}" if record.id else ""


def experience_canonical_key(record: ExperienceRecord) -> str:
    return canonical_key_parts(record.company, record.role, normalize_date_key(record.start_date))


def experience_content_key(record: ExperienceRecord) -> str:
    return content_hash(" ".join(record.achievements))


def project_canonical_key(record: ProjectRecord) -> str:
    return canonical_key_parts(record.name, record.summary or " ".join(record.highlights))


def project_content_key(record: ProjectRecord) -> str:
    return content_hash(" ".join(record.highlights))


def education_canonical_key(record: EducationRecord) -> str:
    return canonical_key_parts(record.school, record.degree, normalize_date_key(record.start_date))


def education_content_key(record: EducationRecord) -> str:
    return content_hash(record.field)


# Ordered strategy lists per record type; the first non-empty key wins
IDENTITY_STRATEGIES: Dict[Type, List[KeyStrategy]] = {
    ExperienceRecord: [experience_canonical_key, explicit_id_key, experience_content_key],
    ProjectRecord: [project_canonical_key, explicit_id_key, project_content_key],
    EducationRecord: [education_canonical_key, explicit_id_key, education_content_key],
}


def resolve_key(record: Any, strategies: List[KeyStrategy]) -> str:
    """Return the first non-empty key produced by `strategies` ("" if none)."""
    for strategy in strategies:
        key = strategy(record)
        if key:
            return key
    return ""


def identity_key(record: Record) -> str:
    """
    Identity key of an experience, project or education record.

    Raises:
        TypeError: If `record` is not one of the three record types.
    """
    strategies = IDENTITY_STRATEGIES.get(type(record))
    if strategies is None:
        raise TypeError(f"No identity strategies for {type(record).__name__}")
    return resolve_key(record, strategies)


def experience_headline_key(record: ExperienceRecord) -> str:
    """
    Card-level key used to consolidate experience entries: normalized
    (company, role) plus the start date key when there is one.
    """
    heading = canonical_key_parts(sanitize_heading(record.company), sanitize_heading(record.role))
    if heading:
        start = normalize_date_key(record.start_date)
        return f"{heading}|{start}" if start else heading
    return resolve_key(record, [explicit_id_key, experience_content_key])
