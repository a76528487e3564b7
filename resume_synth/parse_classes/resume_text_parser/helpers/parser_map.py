"""parser_map.py
Builds the "parser_map" dictionary used by ResumeTextParser to decide which
SectionParser runs for each ParsedResumeSections field.
"""
from typing import Dict, List, Optional

from resume_synth.exceptions import ParserMapConfigError
from resume_synth.models import ParsedResumeSections, SegmentedDocument
from resume_synth.parse_classes.section_parser.section_parser import SectionParser
from resume_synth.parse_classes.section_parser.summary_parser import SummaryParser
from resume_synth.parse_classes.section_parser.experience_parser import ExperienceParser
from resume_synth.parse_classes.section_parser.project_parser import ProjectParser
from resume_synth.parse_classes.section_parser.education_parser import EducationParser
from resume_synth.parse_classes.section_parser.skills_parser import SkillsParser

ParserMap = Dict[str, List[SectionParser]]

# Fields of ParsedResumeSections filled by section parsers ("blocks" is set directly)
PARSED_FIELDS = ["summary", "experience", "projects", "education", "skills"]


def build_default_parser_map(document: Optional[SegmentedDocument] = None) -> ParserMap:
    """
    Build the default parser map: one parser per field.

    Args:
        document (Optional[SegmentedDocument]): Segmented text to hand to each
            parser. If None, parsers are created without one and receive it
            as the argument of each `parse` call.

    Returns:
        ParserMap: Mapping of field name -> list of parsers to try in order.

    Example:
        {
            "summary": [SummaryParser()],
            "experience": [ExperienceParser()],
            ...
        }
    """
    default_parser_classes_map = {
        "summary": [SummaryParser],
        "experience": [ExperienceParser],
        "projects": [ProjectParser],
        "education": [EducationParser],
        "skills": [SkillsParser],
    }

    parser_map: ParserMap = {
        field: [parser_cls(document=document) for parser_cls in parser_classes]
        for field, parser_classes in default_parser_classes_map.items()
    }

    verify_parser_map(parser_map)
    return parser_map


def verify_parser_map(parser_map: Optional[ParserMap]) -> None:
    """
    Verify the format and content of a parser map.

    Checks that:
    1. parser_map is a non-empty dictionary
    2. every key is a ParsedResumeSections field filled by parsers
    3. every value is a list of SectionParser instances

    Raises:
        ParserMapConfigError: If any check fails.
    """
    if not isinstance(parser_map, dict):
        raise ParserMapConfigError(f"parser_map must be a dictionary, got {type(parser_map).__name__}")
    if not parser_map:
        raise ParserMapConfigError("parser_map must define at least one field")

    known_fields = set(ParsedResumeSections.__dataclass_fields__) & set(PARSED_FIELDS)
    for field, parsers in parser_map.items():
        if not isinstance(field, str) or field not in known_fields:
            raise ParserMapConfigError(
                f"Unknown field '{field}' in parser_map. Expected one of {sorted(known_fields)}"
            )
        if not isinstance(parsers, list):
            raise ParserMapConfigError(
                f"Value for field '{field}' must be a list, got {type(parsers).__name__}"
            )
        for parser in parsers:
            if not isinstance(parser, SectionParser):
                raise ParserMapConfigError(
                    f"All items in parser list for field '{field}' must be "
                    f"SectionParser instances, got {type(parser).__name__}"
                )
