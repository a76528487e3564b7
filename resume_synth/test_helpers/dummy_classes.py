"""dummy_classes.py
Holds dummy SectionParser subclasses to test with
"""
from typing import Any, List, Optional

from resume_synth.models import RawBlock, SegmentedDocument
from resume_synth.parse_classes.section_parser.section_parser import SectionParser


class DummyParser(SectionParser):
    """A SectionParser that returns a fixed value for any document."""
    SECTION_TYPES = ["skills"]

    def __init__(self, result: Any = None, **kwargs):
        super().__init__(**kwargs)
        self.result = ["dummy"] if result is None else result

    def parse(self, document: Optional[SegmentedDocument] = None) -> Any:
        return self.result

    def _parse_blocks(self, blocks: List[RawBlock], fallback: bool) -> Any:
        return self.result


class FailingParser(SectionParser):
    """A SectionParser that always raises, to exercise parser fallbacks."""
    SECTION_TYPES = ["skills"]

    def parse(self, document: Optional[SegmentedDocument] = None) -> Any:
        raise RuntimeError("parser exploded")

    def _parse_blocks(self, blocks: List[RawBlock], fallback: bool) -> Any:
        raise RuntimeError("parser exploded")
