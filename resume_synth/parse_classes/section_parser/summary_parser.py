"""summary_parser.py
Parses the professional summary from segmented resume text.
"""
import re
from typing import List

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.models import RawBlock
from resume_synth.parse_classes.section_parser.section_parser import SectionParser
from resume_synth.parse_classes.section_parser.helpers.patterns import find_date_range, word_count
from resume_synth.parse_classes.narrative_sanitizer.narrative_sanitizer import contains_contact_noise
from resume_synth.parse_classes.text_segmenter.text_segmenter import strip_bullet


def clamp_at_word(text: str, max_chars: int) -> str:
    """Clamp `text` to `max_chars` at the last whole word (no ellipsis)."""
    if len(text) <= max_chars:
        return text
    cut = text[:max_chars]
    last_space = cut.rfind(" ")
    if last_space > 0:
        cut = cut[:last_space]
    return cut.rstrip(" ,;:-")


class SummaryParser(SectionParser):
    """
    Takes the first 1-3 sentences of a summary / profile section.

    Without a summary section the implicit leading ("general") section is used,
    skipping contact lines, date lines and short name-like lines.
    """
    SECTION_TYPES = ["summary"]
    FALLBACK_SCOPE = "general"

    # Lines shorter than this are treated as names / headlines in the general section
    MIN_FALLBACK_WORDS = 5

    def _empty_result(self) -> str:
        return ""

    def _parse_blocks(self, blocks: List[RawBlock], fallback: bool) -> str:
        kept: List[str] = []
        for block in blocks:
            text = strip_bullet(block.text)
            if not text or contains_contact_noise(text):
                continue
            if fallback:
                if block.kind == "bullet" or word_count(text) < self.MIN_FALLBACK_WORDS:
                    continue
                if find_date_range(text):
                    continue
            kept.append(text)

        if not kept:
            return ""

        joined = re.sub(r"\s+", " ", " ".join(kept)).strip()
        sentences = [s for s in re.split(r"(?<=[.!?])\s+", joined) if s]
        summary = " ".join(sentences[: SYNTH_DEFAULTS.SUMMARY_MAX_SENTENCES])
        return clamp_at_word(summary, SYNTH_DEFAULTS.SUMMARY_PARSE_MAX_CHARS)
