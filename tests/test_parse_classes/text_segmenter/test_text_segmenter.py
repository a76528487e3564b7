"""test_text_segmenter.py
Run tests on TextSegmenter and its line classification helpers
"""
import pytest

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.models import RawBlock, SegmentedDocument
from resume_synth.parse_classes.text_segmenter.text_segmenter import (
    TextSegmenter,
    classify_line,
    is_bullet_line,
    section_type_for_heading,
    segment_text,
    strip_bullet,
)
from resume_synth.parse_classes.text_segmenter.helpers.prepare_text import prepare_text
from resume_synth.test_helpers.dummy_variables.dummy_form_states import EXAMPLE_RESUME_TEXT_0


class TestLineClassification:
    """Unit tests for the per-line classification rules."""

    # ----------------------
    # Bullets
    # ----------------------
    @pytest.mark.parametrize("line", [
        "• Built a scheduler",
        "- Reduced cost by 30%",
        "* Wrote the docs",
        "1. Shipped v2",
        "2) Mentored interns",
        "\uf0b7 Designed the schema",
    ])
    def test_glyph_and_numbered_lines_are_bullets(self, line):
        """Lines opening with a bullet glyph or list marker are bullets."""
        assert classify_line(line) == "bullet"

    def test_action_verb_line_is_bullet(self):
        """A line opening with an action verb is treated as an achievement bullet."""
        assert classify_line("Led a team of five engineers") == "bullet"

    def test_glued_dash_is_not_bullet(self):
        """A dash attached to a word is not a bullet glyph."""
        assert not is_bullet_line("-based tooling")
        assert classify_line("-based tooling") == "text"

    def test_strip_bullet(self):
        """Glyphs and list markers are removed, text kept."""
        assert strip_bullet("  •  Built a scheduler") == "Built a scheduler"
        assert strip_bullet("3. Shipped v2") == "Shipped v2"

    # ----------------------
    # Headings
    # ----------------------
    @pytest.mark.parametrize("line, expected", [
        ("EXPERIENCE", "experience"),
        ("Work Experience", "experience"),
        ("Technical Skills:", "skills"),
        ("Selected Key Projects", "projects"),
        ("Education", "education"),
        ("Professional Summary", "summary"),
        ("Volunteer Experience", "other"),
    ])
    def test_section_type_for_heading(self, line, expected):
        """Known headings map to their section type."""
        assert section_type_for_heading(line) == expected
        assert classify_line(line) == "heading"

    @pytest.mark.parametrize("line", ["Project Manager", "Acme Technologies", "Built the projects"])
    def test_non_headings_have_no_section_type(self, line):
        """Role titles, company names and achievement lines are not section headings."""
        assert section_type_for_heading(line) is None

    def test_all_caps_line_is_heading(self):
        """An all-caps line (e.g. a company name) is a heading."""
        assert classify_line("ACME CORPORATION") == "heading"

    def test_technology_token_is_not_heading(self):
        """An all-caps technology name stays plain text."""
        assert classify_line("PYTHON") == "text"

    def test_long_line_is_not_heading(self):
        """Lines over HEADING_MAX_CHARS are never headings."""
        line = "EXPERIENCE " * 10
        assert len(line.strip()) > SYNTH_DEFAULTS.HEADING_MAX_CHARS
        assert classify_line(line.strip()) != "heading"


class TestTextSegmenter:
    """Unit tests for TextSegmenter.segment()."""

    # ----------------------
    # Basic behavior
    # ----------------------
    def test_segment_returns_document(self):
        """Segmenting returns a SegmentedDocument of RawBlocks."""
        document = segment_text(EXAMPLE_RESUME_TEXT_0)
        assert isinstance(document, SegmentedDocument)
        assert all(isinstance(b, RawBlock) for b in document.blocks)

    def test_segment_is_idempotent(self):
        """Segmenting the same text twice yields identical blocks and sections."""
        first = TextSegmenter(EXAMPLE_RESUME_TEXT_0).segment()
        second = TextSegmenter(EXAMPLE_RESUME_TEXT_0).segment()
        assert first.blocks == second.blocks
        assert first.sections == second.sections

    def test_block_ids_are_positional(self):
        """Block ids count non-blank lines from 1."""
        blocks = TextSegmenter("first line\n\n\nsecond line").blocks()
        assert [b.id for b in blocks] == ["block-1", "block-2"]
        assert [b.text for b in blocks] == ["first line", "second line"]

    @pytest.mark.parametrize("value", [None, "", "   \n\t\n", 42])
    def test_empty_or_invalid_input(self, value):
        """None, blank and non-string input produce an empty document."""
        document = TextSegmenter(value).segment()
        assert document.blocks == []
        assert document.sections == []

    # ----------------------
    # Sections
    # ----------------------
    def test_leading_lines_form_general_section(self):
        """Lines before the first heading fall into the implicit general section."""
        document = segment_text("John Doe\njohn@example.com\nEXPERIENCE\n• Built a thing")
        assert document.sections[0].section_type == "general"
        assert document.sections[0].heading == ""
        assert document.sections[0].texts() == ["John Doe", "john@example.com"]
        assert [b.kind for b in document.sections[0].lines] == ["text", "text"]
        assert document.sections[1].section_type == "experience"

    def test_no_general_section_without_leading_lines(self):
        """The general section is dropped when the text opens with a heading."""
        document = segment_text("SKILLS\nPython, Go")
        assert [s.section_type for s in document.sections] == ["skills"]

    def test_subheading_inherits_section_type(self):
        """An unknown all-caps heading keeps the enclosing section type and counts as content."""
        document = segment_text("EXPERIENCE\nACME CORPORATION\n• Built a thing")
        sub = document.sections[-1]
        assert sub.is_subheading
        assert sub.section_type == "experience"
        assert [b.text for b in sub.content_blocks()] == ["ACME CORPORATION", "• Built a thing"]

    def test_mock_resume_sections(self):
        """Every section of the default mock resume is recognised."""
        types = [s.section_type for s in segment_text(EXAMPLE_RESUME_TEXT_0).sections]
        assert types == ["general", "summary", "experience", "projects", "education", "skills"]

    def test_sections_of_type_and_all_lines(self):
        """Helpers select sections by type and list every non-heading block."""
        document = segment_text(EXAMPLE_RESUME_TEXT_0)
        assert len(document.sections_of_type("experience")) == 1
        assert all(b.kind != "heading" for b in document.all_lines())


class TestPrepareText:
    """Unit tests for input coercion and truncation."""

    def test_truncates_to_max_input_chars(self):
        """Oversized input is cut to MAX_INPUT_CHARS."""
        text = "a" * (SYNTH_DEFAULTS.MAX_INPUT_CHARS + 100)
        assert len(prepare_text(text)) == SYNTH_DEFAULTS.MAX_INPUT_CHARS

    def test_normalizes_line_endings_and_invisible_chars(self):
        """CRLF becomes LF and zero-width characters are removed."""
        assert prepare_text("a\r\nb\rc\u200bd") == "a\nb\ncd"
