"""test_education_parser.py
Run tests on EducationParser and its line decomposition helpers
"""
from typing import List

import pytest

from resume_synth.models import EducationRecord
from resume_synth.parse_classes.section_parser.education_parser import (
    EducationParser,
    decompose_education_line,
    split_degree,
)
from resume_synth.parse_classes.text_segmenter.text_segmenter import segment_text
from resume_synth.test_helpers.mock_resume_generator import DUMMY_RESUME_BLOCKS, ResumeTemplates
from resume_synth.test_helpers.dummy_variables.dummy_form_states import (
    EXAMPLE_RESUME_TEXT_0,
    MOCK_RESUME_GENERATOR_0,
)


def parse_education(text: str) -> List[EducationRecord]:
    return EducationParser(document=segment_text(text)).parse()


class TestEducationParser:
    """Unit tests for EducationParser."""

    # ----------------------
    # Section parsing
    # ----------------------
    def test_degree_school_then_dates(self):
        """Degree / school on one line and dates on the next fill one record."""
        assert parse_education(EXAMPLE_RESUME_TEXT_0) == [
            EducationRecord(
                school="San Diego State University",
                degree="M.S.",
                field="Computer Science",
                start_date="February 2016",
                end_date="June 2018",
            )
        ]

    def test_school_dash_long_form_degree(self):
        """"School - Bachelor of X in Y" splits into school, degree and field."""
        text = MOCK_RESUME_GENERATOR_0.clone(
            resume_templates=ResumeTemplates(education=DUMMY_RESUME_BLOCKS["education"][1]),
            section_order=["education"],
        ).generate()
        record = parse_education(text)[0]
        assert record.school == "University of Texas at Austin"
        assert record.degree == "Bachelor of Science"
        assert record.field == "Mathematics"
        assert (record.start_date, record.end_date) == ("2012", "2016")

    def test_grade_and_location(self):
        """Grade and location fragments are recognised on a single line."""
        record = parse_education("EDUCATION\nB.Sc. Physics, Imperial College, London, GPA 3.8/4.0, 2014 - 2017")[0]
        assert record.school == "Imperial College"
        assert record.degree == "B.Sc."
        assert record.field == "Physics"
        assert record.location == "London"
        assert record.grade == "GPA 3.8/4.0"
        assert (record.start_date, record.end_date) == ("2014", "2017")

    def test_current_end_date_is_present(self):
        """An ongoing program ends "Present" and a city / state pair becomes the location."""
        text = "EDUCATION\nThe Collegiate School – High school diploma\n2020 - current Richmond, VA"
        record = parse_education(text)[0]
        assert record.school == "The Collegiate School"
        assert record.degree == "High school diploma"
        assert record.end_date == "Present"
        assert record.location == "Richmond, VA"

    def test_bare_school_name(self):
        """A short unclaimed first line is taken as the school."""
        record = parse_education("EDUCATION\nStanford\nM.S. Statistics\n2016 - 2018")[0]
        assert (record.school, record.degree, record.field) == ("Stanford", "M.S.", "Statistics")

    def test_school_without_keyword_beside_degree(self):
        """A lone fragment next to a degree is the school even without a school keyword."""
        record = parse_education("EDUCATION\nB.S. Computer Science, MIT, 2012 - 2016")[0]
        assert (record.school, record.degree, record.field) == ("MIT", "B.S.", "Computer Science")
        assert (record.start_date, record.end_date) == ("2012", "2016")

    def test_repeated_keyword_starts_new_record(self):
        """A second school starts a second record; fields never overwrite."""
        text = (
            "EDUCATION\n"
            "M.S. Statistics, Stanford University, 2016 - 2018\n"
            "B.A. Economics, Boston College, 2012 - 2016\n"
        )
        records = parse_education(text)
        assert [(r.school, r.degree) for r in records] == [
            ("Stanford University", "M.S."),
            ("Boston College", "B.A."),
        ]

    # ----------------------
    # Whole-document fallback
    # ----------------------
    def test_fallback_needs_date_and_keyword(self):
        """Without an education heading only date + keyword lines count."""
        records = parse_education("Jane Roe\nStanford University, 2015\nUniversity life was fun")
        assert len(records) == 1
        assert records[0].school == "Stanford University"
        assert records[0].end_date == "2015"


class TestEducationHelpers:
    """Unit tests for split_degree and decompose_education_line."""

    @pytest.mark.parametrize("text, expected", [
        ("Master of Science in Data Science", ("Master of Science", "Data Science")),
        ("B.Sc. Computer Science", ("B.Sc.", "Computer Science")),
        ("PhD in Chemistry", ("PhD", "Chemistry")),
        ("Diploma", ("Diploma", "")),
    ])
    def test_split_degree(self, text, expected):
        """Degree text splits into (degree, field)."""
        assert split_degree(text) == expected

    def test_decompose_keeps_unclaimed_fragments(self):
        """Fragments no rule claims are kept as leftovers."""
        parts = decompose_education_line("Stanford")
        assert parts.leftovers == ["Stanford"]
        assert not parts.has_keyword
        assert not parts.has_dates

    def test_decompose_takes_lone_fragment_beside_degree_as_school(self):
        """With a degree found, a single unclaimed fragment becomes the school."""
        parts = decompose_education_line("B.S. Computer Science, MIT, 2012 - 2016")
        assert (parts.school, parts.degree, parts.field) == ("MIT", "B.S.", "Computer Science")
        assert parts.leftovers == []

        parts = decompose_education_line("B.S. Computer Science, Caltech, Pasadena Campus Residential Honors Track Program")
        assert parts.school == ""
        assert parts.leftovers == ["Caltech", "Pasadena Campus Residential Honors Track Program"]
