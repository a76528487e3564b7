"""project_parser.py
Parses project records from segmented resume text.
"""
import re
from typing import List, Optional, Tuple

from resume_synth.models import RawBlock, ProjectRecord
from resume_synth.parse_classes.helpers.text_keys import dedupe_strings
from resume_synth.parse_classes.section_parser.section_parser import SectionParser
from resume_synth.parse_classes.section_parser.helpers.patterns import (
    find_dates,
    is_date_only,
    extract_url,
    clean_fragment,
    detect_technologies,
    word_count,
)
from resume_synth.parse_classes.text_segmenter.text_segmenter import strip_bullet

# Whole-document fallback only trusts explicitly labelled projects
_PROJECT_LABEL = re.compile(r"^(?:side\s+)?project\s*[:\-–]\s*(?P<rest>.+)$", re.IGNORECASE)
_TECH_LABEL = re.compile(
    r"^(?:tech(?:nologies)?|tech stack|stack|built with|tools)\s*:\s*(?P<rest>.+)$", re.IGNORECASE
)
_NAME_COLON = re.compile(r"^(?P<name>[^:]{1,80}):\s*(?P<rest>.+)$")
_NAME_SEPARATOR = re.compile(r"\s*\|\s*|\s+[—–]\s+|\s+-\s+")


class ProjectParser(SectionParser):
    """
    Converts project section lines into ProjectRecords.

    The first non-bullet line after a flush (start of section, or a run of
    highlights) names a new project, the next non-bullet line becomes its
    summary, and bullet / action-verb lines become highlights.
    """
    SECTION_TYPES = ["projects"]
    FALLBACK_SCOPE = "document"

    # A "Name: summary" split is only taken if the name is this short
    MAX_NAME_PREFIX_WORDS = 6
    # Text after a name separator only becomes a summary with at least this many words
    MIN_SUMMARY_WORDS = 4
    # A plain line after a summary is read as the next project's name up to this length
    MAX_NAME_WORDS = 8

    def _parse_blocks(self, blocks: List[RawBlock], fallback: bool) -> List[ProjectRecord]:
        records: List[ProjectRecord] = []
        current: Optional[ProjectRecord] = None

        for block in blocks:
            text = strip_bullet(block.text)
            if not text:
                continue

            if fallback:
                label = _PROJECT_LABEL.match(text)
                if label:
                    current = self._start_project(label.group("rest"))
                    records.append(current)
                    continue
                if current is None:
                    continue
                if block.kind != "bullet":
                    # Any unlabelled prose ends the project in the document pass
                    if not current.summary and not current.highlights and word_count(text) >= self.MIN_SUMMARY_WORDS:
                        current.summary = text
                    else:
                        current = None
                    continue

            # ---- Highlights ----
            if block.kind == "bullet":
                if current is None:
                    current = ProjectRecord()
                    records.append(current)
                current.highlights.append(text)
                continue

            # ---- Labelled technology lines ----
            tech_label = _TECH_LABEL.match(text)
            if tech_label and current is not None:
                current.technologies.extend(
                    clean_fragment(t) for t in re.split(r"[,;|/]", tech_label.group("rest")) if clean_fragment(t)
                )
                continue

            if is_date_only(text):
                continue

            url = extract_url(text)
            if url and current is not None and clean_fragment(text.replace(url, "")) == "":
                current.url = current.url or url
                continue

            # ---- Wrapped lines ----
            if current is not None and text[0].islower():
                if current.highlights:
                    current.highlights[-1] = f"{current.highlights[-1]} {text}"
                    continue
                if current.summary:
                    current.summary = f"{current.summary} {text}"
                    continue

            # ---- Name / summary lines ----
            if current is None or current.highlights or (current.summary and self._is_name_like(text)):
                current = self._start_project(text)
                records.append(current)
            elif not current.name:
                current.name, summary, current.url = self._split_name_line(text, current.url)
                current.summary = current.summary or summary
            elif not current.summary:
                current.summary = text
            else:
                current.summary = f"{current.summary} {text}"

        return [self._finalize(record) for record in records if record.name or record.summary or record.highlights]

    def _is_name_like(self, text: str) -> bool:
        return (
            word_count(text) <= self.MAX_NAME_WORDS
            and not text.endswith((".", "!", "?", "…"))
            and text[0].isupper()
        )

    def _start_project(self, line: str) -> ProjectRecord:
        name, summary, url = self._split_name_line(line, "")
        return ProjectRecord(name=name, summary=summary, url=url)

    def _split_name_line(self, line: str, url: str) -> Tuple[str, str, str]:
        """
        Split a project's first line into (name, summary, url).

        A URL is lifted out, dates are dropped, and a "Name: summary" or
        "Name | summary" line is split when the name part is short.
        """
        found_url = extract_url(line)
        if found_url:
            line = line.replace(found_url, " ")
            url = url or found_url
        dates = find_dates(line)
        if dates:
            line = dates.remainder
        line = clean_fragment(re.sub(r"\s+", " ", line))

        colon = _NAME_COLON.match(line)
        if colon and word_count(colon.group("name")) <= self.MAX_NAME_PREFIX_WORDS:
            return clean_fragment(colon.group("name")), clean_fragment(colon.group("rest")), url

        parts = _NAME_SEPARATOR.split(line, maxsplit=1)
        if len(parts) == 2:
            name, rest = clean_fragment(parts[0]), clean_fragment(parts[1])
            if word_count(rest) >= self.MIN_SUMMARY_WORDS:
                return name, rest, url
            return name, "", url
        return line, "", url

    @staticmethod
    def _finalize(record: ProjectRecord) -> ProjectRecord:
        record.highlights = dedupe_strings(record.highlights)
        detected = detect_technologies(" ".join([record.name, record.summary] + record.highlights))
        record.technologies = dedupe_strings(record.technologies + detected)
        return record
