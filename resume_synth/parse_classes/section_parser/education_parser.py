"""education_parser.py
Parses education records from segmented resume text.
"""
import re
from dataclasses import dataclass, field as dataclass_field
from typing import List, Optional, Tuple

from resume_synth.models import RawBlock, EducationRecord
from resume_synth.keyword_tables import (
    DEGREE_ABBREVIATION_REGEX,
    DEGREE_LONG_FORM_REGEX,
    SCHOOL_KEYWORDS,
    GRADE_REGEX,
)
from resume_synth.parse_classes.section_parser.section_parser import SectionParser
from resume_synth.parse_classes.section_parser.helpers.patterns import (
    find_dates,
    clean_fragment,
    looks_like_location,
    word_count,
)
from resume_synth.parse_classes.text_segmenter.text_segmenter import strip_bullet

_DEGREE_ABBREVIATION = re.compile(DEGREE_ABBREVIATION_REGEX)
_DEGREE_LONG_FORM = re.compile(DEGREE_LONG_FORM_REGEX, re.IGNORECASE)
_LEADING_ABBREVIATION = re.compile(rf"^(?P<degree>{DEGREE_ABBREVIATION_REGEX})\s+(?:(?:of|in)\s+)?(?P<field>.+)$")
_DEGREE_IN_FIELD = re.compile(r"^(?P<degree>.+?)\s+in\s+(?P<field>.+)$", re.IGNORECASE)
_SCHOOL = re.compile(r"\b(?:" + "|".join(SCHOOL_KEYWORDS) + r")\b", re.IGNORECASE)
_GRADE = re.compile(GRADE_REGEX, re.IGNORECASE)
_FRAGMENT_SPLIT = re.compile(r"\s*[,|;–—]\s*|\s+-\s+")
_STATE_CODE = re.compile(r"[A-Z]{2}")

# A short fragment or line taken as a school name without a school keyword
MAX_BARE_SCHOOL_WORDS = 6


def is_degree_fragment(text: str) -> bool:
    return bool(_DEGREE_ABBREVIATION.search(text or "") or _DEGREE_LONG_FORM.search(text or ""))


def is_school_fragment(text: str) -> bool:
    return bool(_SCHOOL.search(text or ""))


def split_degree(text: str) -> Tuple[str, str]:
    """
    Split a degree fragment into (degree, field of study).

    Example:
        >>> split_degree("Master of Science in Data Science")
        ('Master of Science', 'Data Science')
        >>> split_degree("B.Sc. Computer Science")
        ('B.Sc.', 'Computer Science')
    """
    value = clean_fragment(text)
    in_match = _DEGREE_IN_FIELD.match(value)
    if in_match and is_degree_fragment(in_match.group("degree")):
        return clean_fragment(in_match.group("degree")), clean_fragment(in_match.group("field"))
    abbreviation = _LEADING_ABBREVIATION.match(value)
    if abbreviation:
        return clean_fragment(abbreviation.group("degree")), clean_fragment(abbreviation.group("field"))
    return value, ""


@dataclass
class EducationLineParts:
    """Fields found on one education line."""
    school: str = ""
    degree: str = ""
    field: str = ""
    start_date: str = ""
    end_date: str = ""
    location: str = ""
    grade: str = ""
    leftovers: List[str] = dataclass_field(default_factory=list)

    @property
    def has_dates(self) -> bool:
        return bool(self.start_date or self.end_date)

    @property
    def has_keyword(self) -> bool:
        return bool(self.school or self.degree)

    def is_empty(self) -> bool:
        return not (self.has_keyword or self.field or self.has_dates or self.location or self.grade)


def decompose_education_line(line: str) -> EducationLineParts:
    """
    Decompose one line into school / degree / field / dates / location / grade.

    Dates and grade are cut out first; the rest is split on common delimiters
    and each fragment is keyword matched. When a degree was found and exactly
    one short fragment is left, it is taken as the school (no keyword needed).
    Other fragments nothing claims are kept in `leftovers`.
    """
    parts = EducationLineParts()
    text = strip_bullet(line)

    dates = find_dates(text)
    if dates:
        parts.start_date = dates.start
        parts.end_date = "Present" if dates.current else dates.end
        text = dates.remainder

    grade = _GRADE.search(text)
    if grade:
        parts.grade = clean_fragment(grade.group(0))
        text = text[: grade.start()] + " " + text[grade.end():]

    fragments = [clean_fragment(f) for f in _FRAGMENT_SPLIT.split(text)]
    fragments = [f for f in fragments if f]
    previous_unclaimed: Optional[str] = None
    locations: List[str] = []

    for index, fragment in enumerate(fragments):
        unclaimed = None
        if index > 0 and _STATE_CODE.fullmatch(fragment):
            # "Boston, MA": the city was the previous (unclaimed) fragment
            if previous_unclaimed is not None and parts.leftovers and parts.leftovers[-1] == previous_unclaimed:
                parts.leftovers.pop()
                locations.append(f"{previous_unclaimed}, {fragment}")
            elif is_degree_fragment(fragment) and not parts.degree:
                parts.degree = fragment
            else:
                locations.append(fragment)
        elif is_school_fragment(fragment) and not parts.school:
            parts.school = fragment
        elif is_degree_fragment(fragment) and not parts.degree:
            parts.degree, parts.field = split_degree(fragment)
        elif looks_like_location(fragment):
            locations.append(fragment)
        elif parts.degree and not parts.field and not is_school_fragment(fragment):
            parts.field = fragment
        else:
            parts.leftovers.append(fragment)
            unclaimed = fragment
        previous_unclaimed = unclaimed

    if (
        parts.degree
        and not parts.school
        and len(parts.leftovers) == 1
        and word_count(parts.leftovers[0]) <= MAX_BARE_SCHOOL_WORDS
    ):
        # "B.S. Computer Science, MIT": the one fragment beside a degree is its school
        parts.school = parts.leftovers.pop()
    parts.location = ", ".join(locations)
    return parts


class EducationParser(SectionParser):
    """
    Converts education lines into EducationRecords.

    Fields fill first-wins: later lines only fill what the open record is
    still missing. A line supplying a school or degree the open record already
    has starts a new record. In the whole-document fallback a line must carry
    both a date and a school / degree keyword to be used.
    """
    SECTION_TYPES = ["education"]
    FALLBACK_SCOPE = "document"

    def _parse_blocks(self, blocks: List[RawBlock], fallback: bool) -> List[EducationRecord]:
        records: List[EducationRecord] = []
        current: Optional[EducationRecord] = None

        for block in blocks:
            parts = decompose_education_line(block.text)
            if fallback and not (parts.has_dates and parts.has_keyword):
                continue

            if (
                not fallback
                and not parts.has_keyword
                and block.kind != "bullet"
                and len(parts.leftovers) == 1
                and word_count(parts.leftovers[0]) <= MAX_BARE_SCHOOL_WORDS
                and ":" not in block.text
            ):
                if current is None:
                    # e.g. "Stanford" on its own line, no school keyword
                    parts.school = parts.leftovers[0]
                elif current.degree and not current.field:
                    parts.field = parts.leftovers[0]

            if parts.is_empty():
                continue

            if current is None or (parts.school and current.school) or (parts.degree and current.degree):
                if not parts.has_keyword and current is None:
                    # Dates / grade with no school or degree seen yet cannot start a record
                    continue
                current = EducationRecord()
                records.append(current)

            self._fill(current, parts)

        return [record for record in records if record.school or record.degree]

    @staticmethod
    def _fill(record: EducationRecord, parts: EducationLineParts) -> None:
        """First wins: only empty fields of `record` are filled."""
        for name in ("school", "degree", "field", "start_date", "end_date", "location", "grade"):
            value = getattr(parts, name)
            if value and not getattr(record, name):
                setattr(record, name, value)
