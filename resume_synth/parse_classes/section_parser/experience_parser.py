"""experience_parser.py
Parses work experience records from segmented resume text.
"""
import re
from typing import List, Optional, Tuple

from resume_synth.models import RawBlock, ExperienceRecord
from resume_synth.parse_classes.helpers.text_keys import dedupe_strings
from resume_synth.parse_classes.section_parser.section_parser import SectionParser
from resume_synth.parse_classes.section_parser.helpers.patterns import (
    DateRange,
    find_date_range,
    clean_fragment,
    detect_technologies,
    has_company_keyword,
    has_role_keyword,
    looks_like_location,
    word_count,
)
from resume_synth.parse_classes.narrative_sanitizer.narrative_sanitizer import contains_contact_noise
from resume_synth.parse_classes.text_segmenter.text_segmenter import (
    strip_bullet,
    starts_with_action_verb,
    is_technology_token,
)

# (role, company, location)
HeaderParts = Tuple[str, str, str]

_AT_HEADER = re.compile(r"^(?P<role>.+?)\s+(?:at|@)\s+(?P<rest>.+)$", re.IGNORECASE)
_HEADER_SEPARATORS = re.compile(r"\s*\|\s*|\s+@\s+|\s+[—–]\s+|\s+-\s+")
_COMPANY_SUFFIX = re.compile(r"^(?:inc|llc|ltd|plc|gmbh|corp|co)\.?$", re.IGNORECASE)


def company_score(text: str) -> int:
    """Positive when `text` reads like an organisation, negative when it reads like a job title."""
    return int(has_company_keyword(text)) - int(has_role_keyword(text))


class ExperienceParser(SectionParser):
    """
    Converts experience section lines into ExperienceRecords.

    Record starts:
        - a line carrying a date range ("Jan 2020 - Present"), the rest of the
          line being parsed as a header;
        - a header-shaped line: "Role at Company", "Role | Company | Location",
          "Company — Role", "Role, Company";
        - (section pass only) a short plain line, e.g. a role on its own line.

    While a record has no achievements yet, date-only / header / short lines
    fill its missing role, company, dates or location instead of starting a new
    record. Bullet and action-verb lines become achievements; an achievement
    seen before any record starts a headless record. A lowercase-initial plain
    line continues the previous (wrapped) achievement.
    """
    SECTION_TYPES = ["experience"]
    FALLBACK_SCOPE = "document"

    MAX_HEADER_WORDS = 12
    MAX_PLAIN_HEADER_WORDS = 8
    # Plain bullets in the whole-document pass need this many words to count
    MIN_FALLBACK_ACHIEVEMENT_WORDS = 6

    def _parse_blocks(self, blocks: List[RawBlock], fallback: bool) -> List[ExperienceRecord]:
        records: List[ExperienceRecord] = []
        current: Optional[ExperienceRecord] = None

        def start_record() -> ExperienceRecord:
            record = ExperienceRecord()
            records.append(record)
            return record

        for block in blocks:
            text = block.text

            # ---- Achievements ----
            if block.kind == "bullet":
                achievement = strip_bullet(text)
                if not achievement:
                    continue
                if fallback and not self._is_fallback_achievement(achievement):
                    continue
                if current is None:
                    current = start_record()
                current.achievements.append(achievement)
                continue

            # ---- Date lines ----
            dates = find_date_range(text)
            if dates:
                if current is None or not self._accepts_dates(current):
                    current = start_record()
                self._apply_dates(current, dates)
                if dates.remainder:
                    self._apply_remainder(current, dates.remainder)
                continue

            # ---- Header lines ----
            header = self._split_header(text)
            if header is not None:
                if current is None or not self._is_open(current):
                    current = start_record()
                self._apply_header(current, header)
                continue

            # ---- Wrapped achievement lines ----
            if text[0].islower() and current is not None and current.achievements:
                current.achievements[-1] = f"{current.achievements[-1]} {text}"
                continue

            if fallback:
                continue

            # ---- Location / short heading lines ----
            if looks_like_location(text):
                if current is not None and not current.location:
                    current.location = clean_fragment(text)
                continue

            if self._is_short_plain_line(text):
                if current is None or current.achievements or not self._fill_missing_heading(current, text):
                    current = start_record()
                    self._fill_missing_heading(current, text)
                continue

            # ---- Descriptive prose ----
            if current is None:
                current = start_record()
            current.achievements.append(text)

        return [self._finalize(record) for record in records if self._has_content(record)]

    # ----------------------
    # Line shape helpers
    # ----------------------
    def _is_fallback_achievement(self, text: str) -> bool:
        return starts_with_action_verb(text) or word_count(text) >= self.MIN_FALLBACK_ACHIEVEMENT_WORDS

    def _is_short_plain_line(self, text: str) -> bool:
        if word_count(text) > self.MAX_PLAIN_HEADER_WORDS:
            return False
        if text.endswith((".", "!", "?", "…")):
            return False
        if not (text[0].isupper() or text[0].isdigit()):
            return False
        return not contains_contact_noise(text)

    def _split_header(self, text: str) -> Optional[HeaderParts]:
        """
        Split a header-shaped line into (role, company, location).

        Returns:
            Optional[HeaderParts]: None if the line is not header-shaped.
        """
        if word_count(text) > self.MAX_HEADER_WORDS or text.endswith((".", "!", "?")):
            return None
        if contains_contact_noise(text) or looks_like_location(text):
            return None

        at_match = _AT_HEADER.match(text)
        if at_match:
            rest_parts = self._merge_company_suffixes(
                [clean_fragment(p) for p in re.split(r"\s*[|,]\s*|\s+[—–-]\s+", at_match.group("rest"))]
            )
            rest_parts = [p for p in rest_parts if p]
            if not rest_parts:
                return None
            return (
                clean_fragment(at_match.group("role")),
                rest_parts[0],
                ", ".join(rest_parts[1:]),
            )

        parts = [clean_fragment(p) for p in _HEADER_SEPARATORS.split(text)]
        parts = [p for p in parts if p]
        if len(parts) < 2:
            comma_parts = [clean_fragment(p) for p in text.split(",")]
            comma_parts = [p for p in comma_parts if p]
            if len(comma_parts) not in (2, 3) or any(word_count(p) > 5 for p in comma_parts):
                return None
            parts = comma_parts
        if all(is_technology_token(p) for p in parts):
            return None

        parts = self._merge_company_suffixes(parts)
        names: List[str] = []
        locations: List[str] = []
        for part in parts:
            if looks_like_location(part) or (locations and re.fullmatch(r"[A-Z]{2}", part)):
                locations.append(part)
            elif len(names) < 2:
                names.append(part)
            else:
                locations.append(part)

        if not names:
            return None
        if len(names) == 1:
            single = names[0]
            if company_score(single) > 0:
                return ("", single, ", ".join(locations))
            return (single, "", ", ".join(locations))

        first, second = names
        if company_score(first) > company_score(second):
            first, second = second, first
        return (first, second, ", ".join(locations))

    @staticmethod
    def _merge_company_suffixes(parts: List[str]) -> List[str]:
        """Re-attach "Inc." / "LLC" fragments split off by a comma to the preceding name."""
        merged: List[str] = []
        for part in parts:
            if merged and _COMPANY_SUFFIX.match(part):
                merged[-1] = f"{merged[-1]}, {part}"
            else:
                merged.append(part)
        return merged

    # ----------------------
    # Record helpers
    # ----------------------
    @staticmethod
    def _accepts_dates(record: ExperienceRecord) -> bool:
        return not (record.start_date or record.end_date or record.current or record.achievements)

    @staticmethod
    def _is_open(record: ExperienceRecord) -> bool:
        return not record.achievements and not (record.role and record.company)

    @staticmethod
    def _apply_dates(record: ExperienceRecord, dates: DateRange) -> None:
        record.start_date = dates.start
        record.end_date = dates.end
        record.current = dates.current

    def _apply_remainder(self, record: ExperienceRecord, remainder: str) -> None:
        if looks_like_location(remainder):
            if not record.location:
                record.location = remainder
            return
        header = self._split_header(remainder)
        if header is not None:
            self._apply_header(record, header)
        else:
            self._fill_missing_heading(record, remainder)

    def _apply_header(self, record: ExperienceRecord, header: HeaderParts) -> None:
        role, company, location = header
        if role and company:
            record.role = record.role or role
            record.company = record.company or company
        else:
            self._fill_missing_heading(record, role or company)
        if location and not record.location:
            record.location = location

    @staticmethod
    def _fill_missing_heading(record: ExperienceRecord, text: str) -> bool:
        """Put `text` into the first missing slot (role, company, location). False if none is free."""
        value = clean_fragment(text)
        if not value:
            return False
        if not record.role:
            record.role = value
        elif not record.company:
            record.company = value
        elif not record.location and looks_like_location(value):
            record.location = value
        else:
            return False
        return True

    @staticmethod
    def _has_content(record: ExperienceRecord) -> bool:
        return bool(record.role or record.company or record.start_date or record.end_date or record.achievements)

    @staticmethod
    def _finalize(record: ExperienceRecord) -> ExperienceRecord:
        role, company = record.role, record.company
        if role and company and company_score(role) > company_score(company):
            role, company = company, role
        record.role = role
        record.company = company
        record.achievements = dedupe_strings(record.achievements)
        record.technologies = detect_technologies(" ".join([role, company] + record.achievements))
        return record
