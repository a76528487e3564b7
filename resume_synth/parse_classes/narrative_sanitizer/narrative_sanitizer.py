"""narrative_sanitizer.py
Strips contact information, boilerplate and oversized fragments from free-text
fields before they are accepted into a draft.

Every function here is pure and returns "" / an empty list rather than raising
when a value is rejected.
"""
import re
from typing import Iterable, List, Optional, FrozenSet, Literal

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.keyword_tables import NOISE_WORDS, CITY_TOKENS
from resume_synth.models import BasicDetails
from resume_synth.parse_classes.helpers.text_keys import normalize_text_key, dedupe_strings
from resume_synth.parse_classes.section_parser.helpers.patterns import find_url

NarrativeField = Literal["summary", "project_summary", "achievement", "highlight"]

# Define common regex queries used to recognise contact noise
COMMON_REGEX: dict = {
    # Email address: Covers standardized email format
    "email_address": r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}\b",
    # Phone Number: Covers common phone formats:
    # -> `+1 123-456-7890`, `(123) 456-7890`, `123-456-7890`, `123.456.7890`, `1234567890`
    "phone_number": (
        r"(\+?\d{1,3}[\s.-]?)?"           # Optional country code
        r"(\(?\d{3}\)?[\s.-]?)"           # Area code with optional parentheses
        r"\d{3}[\s.-]?\d{4}"              # Local number
    ),
    # Any run of 7+ digits (account numbers, unformatted phones)
    "digit_run": r"\d{7,}",
    # Social profile references without a domain, e.g. "github: jdoe"
    "social_handle": r"\b(?:linkedin|github)\s*[:/]\s*\S+",
}

_CONTACT_REGEXES = [re.compile(pattern, re.IGNORECASE) for pattern in COMMON_REGEX.values()]
_EMAIL_REGEX = re.compile(COMMON_REGEX["email_address"])

FIELD_LIMITS = {
    "summary": SYNTH_DEFAULTS.SUMMARY_MAX_CHARS,
    "project_summary": SYNTH_DEFAULTS.PROJECT_SUMMARY_MAX_CHARS,
    "achievement": SYNTH_DEFAULTS.BULLET_MAX_CHARS,
    "highlight": SYNTH_DEFAULTS.BULLET_MAX_CHARS,
}

_NOISE_VALUES = frozenset(NOISE_WORDS) | frozenset(CITY_TOKENS)

# ----------------------
# Detection
# ----------------------
def contains_contact_noise(text: Optional[str]) -> bool:
    """True if `text` contains an email, URL, phone-like number, 7+ digit run or social handle."""
    if not text:
        return False
    if find_url(text):
        return True
    return any(regex.search(text) for regex in _CONTACT_REGEXES)


def is_noise_value(text: Optional[str]) -> bool:
    """True if the whole value is a generic noise word ("Summary", "Present", a city, ...)."""
    if not text:
        return False
    normalized = normalize_text_key(re.sub(r"[.:;,!?()\[\]]", " ", text))
    return normalized in _NOISE_VALUES


def collect_contact_tokens(basics: Optional[BasicDetails]) -> FrozenSet[str]:
    """
    Collect the user's own name / email tokens (lowercased, 3+ characters).

    The set is built once per draft and passed to `sanitize` so generated text
    never repeats the user's identity back into narrative fields.
    """
    if basics is None:
        return frozenset()
    tokens = set()
    for part in re.split(r"[\s\-]+", basics.full_name or ""):
        part = re.sub(r"[^\w']", "", part).lower()
        if len(part) >= 3:
            tokens.add(part)
    email = (basics.email or "").strip().lower()
    if email:
        tokens.add(email)
        local_part = email.split("@", 1)[0]
        for part in re.split(r"[._+\-]+", local_part):
            if len(part) >= 3 and not part.isdigit():
                tokens.add(part)
    return frozenset(tokens)


def contains_contact_token(text: Optional[str], contact_tokens: Optional[Iterable[str]]) -> bool:
    """True if `text` mentions any of the user's own name / email tokens as a whole word."""
    if not text or not contact_tokens:
        return False
    return any(
        re.search(rf"(?<![\w@.]){re.escape(token)}(?![\w@])", text, flags=re.IGNORECASE)
        for token in contact_tokens
    )


def strip_contact_tokens(text: str, contact_tokens: Optional[Iterable[str]]) -> str:
    """Remove whole-word occurrences of the contact tokens from `text`."""
    if not text or not contact_tokens:
        return text or ""
    out = text
    # Longest first so a full email is removed before its local part
    for token in sorted(contact_tokens, key=len, reverse=True):
        out = re.sub(rf"(?<![\w@.]){re.escape(token)}(?:'s)?(?![\w@])", " ", out, flags=re.IGNORECASE)
    return re.sub(r"\s+", " ", out).strip(" ,;:-")

# ----------------------
# Length limits
# ----------------------
def truncate_at_word(
    text: str,
    max_chars: int,
    min_viable_chars: int = SYNTH_DEFAULTS.MIN_VIABLE_CHARS,
) -> str:
    """
    Cut `text` at the last whole word so that the result (with its "…") fits in
    `max_chars`.

    Returns "" when the kept part would be shorter than `min_viable_chars`.
    """
    if len(text) <= max_chars:
        return text
    cut = text[: max_chars - 1]
    last_space = cut.rfind(" ")
    if last_space > 0:
        cut = cut[:last_space]
    cut = cut.rstrip(" ,;:-–—")
    if len(cut) < min_viable_chars:
        return ""
    return f"{cut}…"

# ----------------------
# Sanitizers
# ----------------------
def sanitize(
    text: Optional[str],
    field: NarrativeField = "achievement",
    contact_tokens: Optional[Iterable[str]] = None,
) -> str:
    """
    Sanitize one free-text value.

    Args:
        text (Optional[str]): Candidate value.
        field (NarrativeField): Which limit applies (summary 280, project
            summary 260, achievement / highlight 220 by default).
        contact_tokens (Optional[Iterable[str]]): Tokens from
            `collect_contact_tokens` to strip from the value.

    Returns:
        str: The cleaned value, or "" if it was rejected (contact noise,
        boilerplate, or too long to truncate meaningfully).

    Example:
        >>> sanitize("Contact me at jane@example.com for details")
        ''
        >>> sanitize("Built a scheduler handling 10k req/s")
        'Built a scheduler handling 10k req/s'
    """
    if not isinstance(text, str):
        return ""
    value = re.sub(r"\s+", " ", text).strip()
    if not value:
        return ""
    if contains_contact_noise(value) or is_noise_value(value):
        return ""

    value = strip_contact_tokens(value, contact_tokens)
    if not value or is_noise_value(value):
        return ""

    return truncate_at_word(value, FIELD_LIMITS.get(field, SYNTH_DEFAULTS.BULLET_MAX_CHARS))


def sanitize_heading(value: Optional[str]) -> str:
    """
    Clean a heading field (role, company, school, project name, ...).

    Rejects values containing bullets, line breaks or contact noise (email,
    URL, phone, long digit runs), and values longer than
    `SYNTH_DEFAULTS.HEADING_FIELD_MAX_CHARS`. Also used for the short detail
    fields (location, field of study, grade, dates).
    """
    if not value or not isinstance(value, str):
        return ""
    trimmed = value.strip()
    if not trimmed:
        return ""
    if re.search(r"[•\n]", trimmed):
        return ""
    if contains_contact_noise(trimmed):
        return ""
    if len(trimmed) > SYNTH_DEFAULTS.HEADING_FIELD_MAX_CHARS:
        return ""
    return re.sub(r"\s+", " ", trimmed)


def tidy_bullets(
    lines: Iterable[str],
    contact_tokens: Optional[Iterable[str]] = None,
    max_items: int = SYNTH_DEFAULTS.MAX_ACHIEVEMENTS,
) -> List[str]:
    """
    Normalize a list of achievement / highlight lines.

    Inline bullet glyphs and semicolons split a line into several bullets, very
    long lines are split on sentence boundaries, each bullet is sanitized,
    capitalized and given end punctuation. Duplicates are dropped and at most
    `max_items` bullets are kept.
    """
    out: List[str] = []
    seen = set()
    for line in lines or []:
        if not line:
            continue
        normalized = re.sub(r"\s+", " ", str(line)).strip()
        if not normalized:
            continue

        if re.search(r"[•▪●·;]", normalized):
            candidates = re.split(r"[•▪●·;]+", normalized)
        elif len(normalized) > 160:
            candidates = re.split(r"\.\s+(?=[A-Z])", normalized)
        else:
            candidates = [normalized]

        for candidate in candidates:
            candidate = sanitize(candidate.strip(" -–—"), "achievement", contact_tokens)
            if not candidate:
                continue
            candidate = candidate[0].upper() + candidate[1:]
            if not re.search(r"[.!?…]$", candidate):
                candidate += "."
            key = normalize_text_key(candidate)
            if key in seen:
                continue
            seen.add(key)
            out.append(candidate)
            if len(out) >= max_items:
                return out
    return out


def filter_skill_list(
    skills: Iterable[str],
    contact_tokens: Optional[Iterable[str]] = None,
    max_items: int = SYNTH_DEFAULTS.MAX_SKILLS,
) -> List[str]:
    """
    Keep concise, non-noise skills: 2-40 characters, at most four words, no
    contact details, not the user's own name. Case-insensitive dedupe, capped
    at `max_items`.
    """
    tokens = set(contact_tokens or [])
    kept: List[str] = []
    for skill in dedupe_strings(skills or []):
        value = skill.strip().rstrip(",.;:").strip()
        if not 2 <= len(value) <= 40:
            continue
        if len(value.split()) > 4:
            continue
        if is_noise_value(value) or contains_contact_noise(value):
            continue
        if value.lower() in tokens:
            continue
        kept.append(value)
    return dedupe_strings(kept)[:max_items]


def clean_summary_text(
    *candidates: Optional[str],
    contact_tokens: Optional[Iterable[str]] = None,
    max_sentences: int = 2,
) -> str:
    """
    Return the first usable summary among `candidates`.

    Contact lines are dropped, the first `max_sentences` sentences are kept and
    the result is sanitized as a summary. A candidate that sanitizes to "" is
    skipped in favor of the next one.
    """
    for candidate in candidates:
        raw = (candidate or "").strip() if isinstance(candidate, str) else ""
        if not raw:
            continue
        kept_lines = [
            line
            for line in re.split(r"\s*\n+\s*", raw)
            if not _EMAIL_REGEX.search(line) and not re.fullmatch(r"\+?\d[\d\s().-]{6,}", line)
        ]
        joined = re.sub(r"\s+", " ", " ".join(kept_lines)).strip()
        if not joined:
            continue
        sentences = [s for s in re.split(r"(?<=[.!?])\s+", joined) if s]
        summary = sanitize(" ".join(sentences[:max_sentences]), "summary", contact_tokens)
        if summary:
            return summary
    return ""
