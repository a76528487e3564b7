"""patterns.py
Regex helpers shared by the SectionParser subclasses: date ranges, URLs,
technology detection and fragment splitting.
"""
import re
from dataclasses import dataclass
from typing import List, Optional

from resume_synth.keyword_tables import (
    PRESENT_TOKENS,
    TECH_PATTERNS,
    COMPANY_KEYWORDS,
    ROLE_KEYWORDS,
    CITY_TOKENS,
    TECH_DOMAIN_NAMES,
)
from resume_synth.parse_classes.helpers.text_keys import unique

# ----------------------
# Dates
# ----------------------
_MONTH = (
    r"(?:jan(?:uary)?|feb(?:ruary)?|mar(?:ch)?|apr(?:il)?|may|june?|july?|aug(?:ust)?"
    r"|sep(?:t(?:ember)?)?|oct(?:ober)?|nov(?:ember)?|dec(?:ember)?)\.?"
)
_YEAR = r"(?<!\d)(?:19|20)\d{2}(?!\d)"
_DATE_POINT = (
    r"(?:"
    rf"\b{_MONTH}\s*,?\s*'?{_YEAR}"                       # Jan 2020, January, 2020
    rf"|\b(?:spring|summer|fall|autumn|winter)\s+{_YEAR}"  # Fall 2019
    r"|(?<!\d)(?:0?[1-9]|1[0-2])[/.-](?:19|20)\d{2}(?!\d)"  # 01/2020
    r"|(?<!\d)(?:19|20)\d{2}[/.-](?:0?[1-9]|1[0-2])(?!\d)"  # 2020-01
    rf"|{_YEAR}"                                           # 2020
    r")"
)
_PRESENT = r"\b(?:" + "|".join(PRESENT_TOKENS) + r"|date)\b"
_RANGE_SEPARATOR = r"(?:\s*[-–—~]+\s*|\s+(?:to|until|till)\s+)"

DATE_RANGE_REGEX = re.compile(
    rf"(?P<start>{_DATE_POINT}){_RANGE_SEPARATOR}(?P<end>{_DATE_POINT}|{_PRESENT})",
    re.IGNORECASE,
)
DATE_POINT_REGEX = re.compile(_DATE_POINT, re.IGNORECASE)

URL_REGEX = re.compile(
    r"(?:https?://|www\.)\S+"
    r"|\b(?P<domain>[\w-]+\.(?:com|io|dev|app|org|co|ai|me|uk))\b(?P<path>/\S*)?",
    re.IGNORECASE,
)

_TECH_DOMAINS = frozenset(TECH_DOMAIN_NAMES)

_TECH_REGEXES = [(name, re.compile(pattern, re.IGNORECASE)) for name, pattern in TECH_PATTERNS]


@dataclass
class DateRange:
    """A date range found in a line, plus the line text with the range removed."""
    start: str = ""
    end: str = ""
    current: bool = False
    remainder: str = ""


def clean_fragment(text: str) -> str:
    """Strip separator punctuation and whitespace from both ends of a fragment."""
    return re.sub(r"^[\s|,;:/()\[\]\-–—@·•]+|[\s|,;:/()\[\]\-–—@·•]+$", "", text or "")


def find_date_range(text: str) -> Optional[DateRange]:
    """
    Find a `<date> – <date|present>` range in `text`.

    Returns:
        Optional[DateRange]: The range (end is "" and current is True for an
        ongoing role), or None if the line carries no range.
    """
    match = DATE_RANGE_REGEX.search(text or "")
    if not match:
        return None
    end = match.group("end").strip()
    current = re.fullmatch(_PRESENT, end, re.IGNORECASE) is not None
    remainder = clean_fragment(
        re.sub(r"\s{2,}", " ", text[: match.start()] + " " + text[match.end():])
    )
    return DateRange(
        start=clean_fragment(match.group("start")),
        end="" if current else clean_fragment(end),
        current=current,
        remainder=remainder,
    )


def find_dates(text: str) -> Optional[DateRange]:
    """Like `find_date_range`, but also accepts a single date (e.g. a graduation year)."""
    found = find_date_range(text)
    if found:
        return found
    match = DATE_POINT_REGEX.search(text or "")
    if not match:
        return None
    remainder = clean_fragment(re.sub(r"\s{2,}", " ", text[: match.start()] + " " + text[match.end():]))
    return DateRange(start="", end=clean_fragment(match.group(0)), remainder=remainder)


def is_date_only(text: str) -> bool:
    found = find_date_range(text)
    return bool(found) and not found.remainder

# ----------------------
# Content detection
# ----------------------
def find_url(text: Optional[str]) -> Optional[re.Match]:
    """
    First link in `text`. A bare domain that names a known product
    ("Socket.io", "Fly.io") only counts when a path follows it.
    """
    for match in URL_REGEX.finditer(text or ""):
        domain = match.group("domain")
        if domain and not match.group("path") and domain.lower() in _TECH_DOMAINS:
            continue
        return match
    return None


def extract_url(text: str) -> Optional[str]:
    match = find_url(text)
    return match.group(0).rstrip(".,;)") if match else None


def detect_technologies(text: str) -> List[str]:
    """Known technologies mentioned in `text`, as display names in table order."""
    found = [name for name, regex in _TECH_REGEXES if regex.search(text or "")]
    return unique(found)


def _words(text: str) -> List[str]:
    return re.findall(r"[a-z]+", (text or "").lower())


def has_company_keyword(text: str) -> bool:
    return any(word in COMPANY_KEYWORDS for word in _words(text))


def has_role_keyword(text: str) -> bool:
    return any(word in ROLE_KEYWORDS for word in _words(text))


def looks_like_location(text: str) -> bool:
    """Location-like fragments: "San Diego, CA", "Remote", "London"."""
    value = clean_fragment(text)
    if not value:
        return False
    lower = value.lower()
    if lower in CITY_TOKENS or re.search(r"\bremote\b", lower):
        return True
    return bool(re.fullmatch(r"[A-Z][A-Za-z .'-]+,\s*[A-Z]{2}", value))


def word_count(text: str) -> int:
    return len((text or "").split())
