"""skills_parser.py
Parses the flat skills list from segmented resume text.
"""
import re
from typing import List

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.models import RawBlock
from resume_synth.parse_classes.helpers.text_keys import dedupe_strings
from resume_synth.parse_classes.section_parser.section_parser import SectionParser
from resume_synth.parse_classes.section_parser.helpers.patterns import detect_technologies, word_count
from resume_synth.parse_classes.narrative_sanitizer.narrative_sanitizer import filter_skill_list
from resume_synth.parse_classes.text_segmenter.text_segmenter import strip_bullet

_CATEGORY_PREFIX = re.compile(r"^(?P<label>[^:]{1,40}?)\s*(?::|\s[-–]\s)\s*(?P<rest>.+)$")
_SKILL_DELIMITERS = re.compile(r"\s*[,;|•·▪●]\s*")
_INLINE_SKILLS = re.compile(
    r"^(?:skills|tools|technologies|tech stack|expertise)\s*:\s*(?P<rest>.+)$", re.IGNORECASE
)


def split_skill_line(line: str, max_label_words: int = 3) -> List[str]:
    """
    Split one skills line into items, dropping a leading category label.

    Example:
        >>> split_skill_line("Languages: Python, SQL | Go")
        ['Python', 'SQL', 'Go']
    """
    text = strip_bullet(line)
    category = _CATEGORY_PREFIX.match(text)
    if category and word_count(category.group("label")) <= max_label_words:
        text = category.group("rest")
    return [item for item in _SKILL_DELIMITERS.split(text) if item.strip()]


class SkillsParser(SectionParser):
    """
    Flattens the skills section into a deduplicated list.

    Without a skills section, inline "Skills: ..." lines are used, plus any
    known technology tokens found anywhere in the document.
    """
    SECTION_TYPES = ["skills"]
    FALLBACK_SCOPE = "document"

    # Parsed skills are capped later, when the draft is assembled
    MAX_PARSED_SKILLS = SYNTH_DEFAULTS.MAX_SKILLS * 3

    def _parse_blocks(self, blocks: List[RawBlock], fallback: bool) -> List[str]:
        items: List[str] = []
        for block in blocks:
            if fallback:
                inline = _INLINE_SKILLS.match(strip_bullet(block.text))
                if inline:
                    items.extend(_SKILL_DELIMITERS.split(inline.group("rest")))
            else:
                items.extend(split_skill_line(block.text))

        if fallback:
            items.extend(detect_technologies("\n".join(block.text for block in blocks)))

        return filter_skill_list(dedupe_strings(items), max_items=self.MAX_PARSED_SKILLS)
