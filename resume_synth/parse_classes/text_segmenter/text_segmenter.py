"""text_segmenter.py
Splits raw resume text into classified blocks (heading / bullet / text) and
groups them into sections by heading keyword.
"""
import re
from typing import List, Optional, Tuple

from resume_synth.models import RawBlock, Section, SegmentedDocument, BlockKind
from resume_synth.keyword_tables import (
    SECTION_KEYWORDS,
    BULLET_GLYPHS,
    NUMBERED_BULLET_REGEX,
    ACTION_VERBS,
    TECH_PATTERNS,
    COMPANY_KEYWORDS,
)
from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.parse_classes.text_segmenter.helpers.prepare_text import (
    prepare_text,
    collapse_whitespace,
)

GENERAL_SECTION = "general"

# (keyword, section_type) pairs, longest keyword first so that
# "volunteer experience" wins over "experience".
_HEADING_KEYWORDS: List[Tuple[str, str]] = sorted(
    (
        (keyword, section_type)
        for section_type, keywords in SECTION_KEYWORDS.items()
        for keyword in keywords
    ),
    key=lambda pair: len(pair[0]),
    reverse=True,
)
_EXACT_HEADINGS = {keyword: section_type for keyword, section_type in _HEADING_KEYWORDS}

_NUMBERED_BULLET = re.compile(NUMBERED_BULLET_REGEX)
_LEADING_GLYPHS = re.compile(
    r"^(?:[" + re.escape("".join(BULLET_GLYPHS)) + r"]|\d{1,2}[.)](?=\s))[\s" + re.escape("".join(BULLET_GLYPHS)) + r"]*"
)
_TECH_REGEXES = [re.compile(pattern, re.IGNORECASE) for _, pattern in TECH_PATTERNS]

# ----------------------
# Line helpers
# ----------------------
def strip_bullet(text: str) -> str:
    """Remove a leading bullet glyph or list marker from a line."""
    return _LEADING_GLYPHS.sub("", (text or "").strip()).strip()


def is_bullet_line(text: str) -> bool:
    """True if the line opens with a bullet glyph or a `1.` / `1)` list marker."""
    stripped = (text or "").strip()
    if not stripped:
        return False
    if stripped.startswith(BULLET_GLYPHS):
        # A "-" or "*" glued to a word ("-based", "*args") is not a bullet
        rest = stripped[1:]
        return not rest or rest[0].isspace() or stripped[0] not in "-*"
    return bool(_NUMBERED_BULLET.match(stripped))


def first_word(text: str) -> str:
    words = re.findall(r"[A-Za-z][A-Za-z'\-]*", text or "")
    return words[0].lower() if words else ""


def starts_with_action_verb(text: str) -> bool:
    """True if the first word of the (bullet stripped) line is a known action verb."""
    stripped = strip_bullet(text)
    if not stripped or not stripped[0].isalpha():
        return False
    return first_word(stripped) in ACTION_VERBS


def is_technology_token(text: str) -> bool:
    """True if the whole value is a single known technology (e.g. "REACT", "Node.js")."""
    value = (text or "").strip()
    return any(regex.fullmatch(value) for regex in _TECH_REGEXES)


def _normalize_heading(text: str) -> str:
    value = (text or "").strip().rstrip(":*").strip().lower()
    value = value.replace("&", " and ")
    value = re.sub(r"[^a-z\s]", " ", value)
    return collapse_whitespace(value)


def _trim_heading(text: str) -> str:
    return (text or "").strip().lstrip("#").rstrip(":*").strip()


def section_type_for_heading(text: str) -> Optional[str]:
    """
    Map a heading line to a section type ("summary", "experience", "projects",
    "education", "skills" or "other").

    An exact keyword match wins. Otherwise a short heading (at most four words,
    no inline punctuation, not opening with an action verb) that ends with a
    keyword is accepted ("Technical Skills", "Selected Key Projects"), while
    "Project Manager" is not.

    Returns:
        Optional[str]: The section type, or None if the text names no known section.
    """
    trimmed = _trim_heading(text)
    if not trimmed or len(trimmed) > SYNTH_DEFAULTS.HEADING_MAX_CHARS:
        return None

    normalized = _normalize_heading(trimmed)
    if not normalized:
        return None
    if normalized in _EXACT_HEADINGS:
        return _EXACT_HEADINGS[normalized]

    if re.search(r"[,:;|@.]", trimmed):
        return None
    words = normalized.split()
    if len(words) > 4 or words[0] in ACTION_VERBS:
        return None
    for keyword, section_type in _HEADING_KEYWORDS:
        # "Acme Technologies" is a company, not a skills heading
        if keyword in COMPANY_KEYWORDS:
            continue
        if normalized.endswith(f" {keyword}"):
            return section_type
    return None


def _is_all_caps_heading(trimmed: str) -> bool:
    letters = [c for c in trimmed if c.isalpha()]
    if len(letters) < 4:
        return False
    if any(c.isdigit() for c in trimmed) or re.search(r"[,;|@]", trimmed):
        return False
    upper_ratio = sum(1 for c in letters if c.isupper()) / len(letters)
    return upper_ratio >= 0.8 and not is_technology_token(trimmed)


def is_heading_line(text: str) -> bool:
    """True if the line looks like a section heading."""
    trimmed = _trim_heading(text)
    if not trimmed or len(trimmed) > SYNTH_DEFAULTS.HEADING_MAX_CHARS:
        return False
    if section_type_for_heading(trimmed) is not None:
        return True
    return _is_all_caps_heading(trimmed)


def classify_line(text: str) -> BlockKind:
    """
    Classify a single non-empty line.

    Order: bullet glyph → heading → action-verb line → plain text.
    """
    if is_bullet_line(text):
        return "bullet"
    if is_heading_line(text):
        return "heading"
    if starts_with_action_verb(text):
        return "bullet"
    return "text"

# ----------------------
# Segmenter
# ----------------------
class TextSegmenter:
    """
    Splits raw resume text into RawBlocks and groups them into Sections.

    Segmentation is pure and deterministic: block ids are derived from line
    position, so segmenting the same text twice yields identical output.

    Attributes:
        text (str): Prepared (coerced and truncated) input text.
    """

    def __init__(self, text: Optional[str] = None):
        """
        Args:
            text (Optional[str]): Raw multi-line text. None / non-string input
                is treated as empty; oversized input is truncated.
        """
        self.text = prepare_text(text)

    def blocks(self) -> List[RawBlock]:
        """Return one classified RawBlock per non-blank line, in order."""
        out: List[RawBlock] = []
        for line in self.text.split("\n"):
            cleaned = collapse_whitespace(line)
            if not cleaned:
                continue
            out.append(
                RawBlock(id=f"block-{len(out) + 1}", text=cleaned, kind=classify_line(cleaned))
            )
        return out

    def segment(self) -> SegmentedDocument:
        """
        Group the classified blocks into sections.

        Lines before the first heading fall into an implicit "general" section.
        A heading naming no known section (e.g. an all-caps company name)
        opens a subheading section that keeps the enclosing section's type.

        Returns:
            SegmentedDocument: Every block plus the ordered sections.
        """
        blocks = self.blocks()
        sections: List[Section] = [Section(heading="", section_type=GENERAL_SECTION)]

        for block in blocks:
            if block.kind != "heading":
                sections[-1].lines.append(block)
                continue

            section_type = section_type_for_heading(block.text)
            if section_type is not None:
                sections.append(
                    Section(heading=_trim_heading(block.text), section_type=section_type, heading_block=block)
                )
            else:
                sections.append(
                    Section(
                        heading=_trim_heading(block.text),
                        section_type=sections[-1].section_type,
                        heading_block=block,
                        is_subheading=True,
                    )
                )

        if not sections[0].lines:
            sections = sections[1:]

        return SegmentedDocument(blocks=blocks, sections=sections)


def segment_text(text: Optional[str]) -> SegmentedDocument:
    """Convenience wrapper: `TextSegmenter(text).segment()`."""
    return TextSegmenter(text).segment()
