"""section_parser.py
Holds the abstract SectionParser class inherited by section-specific parsers.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Literal, Optional

from resume_synth.models import RawBlock, SegmentedDocument
from resume_synth.exceptions import SectionParserConfigError
from resume_synth.parse_classes.text_segmenter.text_segmenter import GENERAL_SECTION

# Section types a parser may read from
PARSEABLE_SECTION_TYPES = ["summary", "experience", "projects", "education", "skills"]

# Where a parser looks when its own section yields nothing
FALLBACK_SCOPES = Literal["document", "general"]


class SectionParser(ABC):
    """
    Abstract base class for turning the lines of one section type into typed
    records. Concrete parsers implement `_parse_blocks`.

    Parsing never raises on malformed text: an unparseable section simply
    produces an empty result. When the named section yields nothing the parser
    re-runs once against its fallback scope (the whole document, or the
    implicit leading "general" section). Section and fallback results are
    never combined.
    """
    # Define in each child
    SECTION_TYPES: List[str] = []
    FALLBACK_SCOPE: Optional[FALLBACK_SCOPES] = "document"

    def __init__(self, document: Optional[SegmentedDocument] = None):
        """
        Args:
            document (Optional[SegmentedDocument]): Default TextSegmenter output
                to parse when `parse` is called without one. Parsers shared
                between callers should leave this unset and receive the
                document per call.
        """
        self.document = document

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        # Abstract intermediates may leave SECTION_TYPES empty
        for section_type in cls.SECTION_TYPES:
            if section_type not in PARSEABLE_SECTION_TYPES:
                raise SectionParserConfigError(
                    section_type=section_type,
                    message=f"{cls.__name__} declares an unknown section type",
                )

    # ----------------------
    # Public interface
    # ----------------------
    def parse(self, document: Optional[SegmentedDocument] = None) -> Any:
        """
        Parse the configured section type(s) of `document`.

        The document is only passed down the call, never stored, so one parser
        instance can serve concurrent callers.

        Args:
            document (Optional[SegmentedDocument]): Segmented text to parse.
                Defaults to the document given at construction.

        Returns:
            Any: The parser's result type (e.g. `List[ExperienceRecord]` or `str`).
                Empty ("" / []) if nothing could be parsed.

        Raises:
            SectionParserConfigError: If no document was provided or the
                subclass defines no SECTION_TYPES.
        """
        document = document if document is not None else self.document
        if document is None:
            raise SectionParserConfigError(
                message=f"{self.__class__.__name__}.parse requires a document"
            )
        if not self.SECTION_TYPES:
            raise SectionParserConfigError(message=f"{self.__class__.__name__} must define SECTION_TYPES")

        section_blocks = self._section_blocks(document)
        result = self._parse_blocks(section_blocks, fallback=False) if section_blocks else self._empty_result()
        if not self._is_empty(result) or self.FALLBACK_SCOPE is None:
            return result

        fallback_blocks = self._fallback_blocks(document)
        if not fallback_blocks:
            return result
        return self._parse_blocks(fallback_blocks, fallback=True)

    # ----------------------
    # To define in each child
    # ----------------------
    @abstractmethod
    def _parse_blocks(self, blocks: List[RawBlock], fallback: bool) -> Any:
        """
        Parse an ordered list of blocks.

        Args:
            blocks (List[RawBlock]): Blocks to parse (headings of subheading
                sections are included as content).
            fallback (bool): True when running against the fallback scope, in
                which case parsers apply stricter acceptance rules.
        """
        pass

    def _empty_result(self) -> Any:
        return []

    def _is_empty(self, result: Any) -> bool:
        return not result

    # ----------------------
    # Block selection
    # ----------------------
    def _section_blocks(self, document: SegmentedDocument) -> List[RawBlock]:
        """Content blocks of every section whose type is in SECTION_TYPES, in order."""
        blocks: List[RawBlock] = []
        for section in document.sections:
            if section.section_type in self.SECTION_TYPES:
                blocks.extend(section.content_blocks())
        return blocks

    def _fallback_blocks(self, document: SegmentedDocument) -> List[RawBlock]:
        if self.FALLBACK_SCOPE == "general":
            blocks: List[RawBlock] = []
            for section in document.sections_of_type(GENERAL_SECTION):
                blocks.extend(section.content_blocks())
            return blocks

        # Whole document: every block except the headings that named a known section
        named_headings = {
            section.heading_block.id
            for section in document.sections
            if section.heading_block is not None and not section.is_subheading
        }
        return [block for block in document.blocks if block.id not in named_headings]
