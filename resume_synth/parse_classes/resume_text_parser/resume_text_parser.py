"""resume_text_parser.py
Runs SectionParser subclasses over one segmentation of raw resume text.
"""
from typing import Any, Optional

from resume_synth.logging import LoggerFactory
from resume_synth.models import ParsedResumeSections, SegmentedDocument
from resume_synth.parse_classes.text_segmenter.text_segmenter import TextSegmenter
from resume_synth.parse_classes.resume_text_parser.helpers.parser_map import (
    ParserMap,
    build_default_parser_map,
    verify_parser_map,
)

# Load parser specific logger
logger_factory = LoggerFactory()
parser_failure_logger = logger_factory.get_stage_logger("section_parser")


class ResumeTextParser:
    """
    Orchestrates parsing of resume text into ParsedResumeSections.

    The text is segmented once and every configured parser reads from that
    same segmentation. The parser_map allows several "backup" parsers per
    field: if one raises, the next in the list is attempted, and if all fail
    the field keeps its ParsedResumeSections default.

    Attributes:
        parser_map (ParserMap): Maps field names to a list of parser instances
            to try in order.
    """

    def __init__(self, parser_map: Optional[ParserMap] = None):
        """
        Args:
            parser_map (Optional[ParserMap]): Map of field names to lists of
                SectionParser instances. Expects keys among "summary",
                "experience", "projects", "education" and "skills"; fields left
                out keep their default. If None, `build_default_parser_map()`
                is used.

        Raises:
            ParserMapConfigError: If a custom parser_map is malformed.
        """
        if parser_map is None:
            parser_map = build_default_parser_map()
        verify_parser_map(parser_map)
        self.parser_map = parser_map

    def _parse_field_with_fallback(self, field_name: str, document: SegmentedDocument) -> Any:
        """
        Parse a single field with each configured parser in turn.

        Returns:
            Any: The first successful result, or the ParsedResumeSections
            default if every parser raised.
        """
        for parser in self.parser_map.get(field_name, []):
            try:
                return parser.parse(document)
            except Exception as e:
                parser_failure_logger.warning(
                    f"Field '{field_name}' failed in parser '{type(parser).__name__}': {str(e)}"
                )
                # Continue to next parser

        return getattr(ParsedResumeSections(), field_name)

    def parse_document(self, document: SegmentedDocument) -> ParsedResumeSections:
        """Parse an already segmented document."""
        parsed = ParsedResumeSections(blocks=list(document.blocks))
        for field_name in self.parser_map:
            setattr(parsed, field_name, self._parse_field_with_fallback(field_name, document))
        return parsed

    def parse(self, text: Optional[str]) -> ParsedResumeSections:
        """
        Segment and parse raw resume text.

        Args:
            text (Optional[str]): Plain text of a resume. None / non-string
                input yields an empty result; nothing here raises on
                malformed text.

        Returns:
            ParsedResumeSections: summary, experience, projects, education,
            skills and the classified blocks.
        """
        return self.parse_document(TextSegmenter(text).segment())


def parse_resume_text(text: Optional[str]) -> ParsedResumeSections:
    """Parse `text` with the default parser map."""
    return ResumeTextParser().parse(text)
