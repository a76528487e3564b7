"""mock_resume_generator.py
Outputs plain resume text that simulates a decoded uploaded resume.
"""
from dataclasses import dataclass
from typing import List, Optional
import copy

DEFAULT_SECTION_ORDER = [
    "contact_info",
    "summary",
    "work_experience",
    "projects",
    "education",
    "skills",
]

# -------------------------------------------------------------------------
# DUMMY RESUME BLOCKS (to construct resumes from)
# -------------------------------------------------------------------------

DUMMY_RESUME_BLOCKS = {
    # ---------------------------------------------------------
    # CONTACT INFO BLOCKS
    # First example is the default used
    # ---------------------------------------------------------
    "contact_info": [
        """{name}
        {email} | {phone} | linkedin.com/in/{linkedin_name}
        """,

        """{name}
        Greater New York | {phone} | {email}
        """,
    ],

    # ---------------------------------------------------------
    # SUMMARY BLOCKS
    # ---------------------------------------------------------
    "summary": [
        """SUMMARY
        Backend engineer with eight years building distributed systems. Focused on reliability and developer tooling.
        """,

        """Professional Profile
        Data scientist turning messy product data into decisions. Comfortable owning pipelines end to end.
        """,
    ],

    # ---------------------------------------------------------
    # WORK EXPERIENCE BLOCKS
    # ---------------------------------------------------------
    "work_experience": [
        """EXPERIENCE
        Senior Developer at {company_name} Jan 2020 - Present
        • Built a scheduler handling 10k req/s across three regions
        • Reduced infrastructure cost by 30% by consolidating Kubernetes clusters
        Software Engineer | Globex LLC | Austin, TX
        Jun 2016 - Dec 2019
        • Implemented a payment reconciliation service in Python and PostgreSQL
        """,

        """WORK EXPERIENCE
        MARCH 2021 - CURRENT
        Data Scientist | {company_name} | San Diego, CA
        ● Pioneered segmentation in Google Analytics 4, leading to 3 successful campaigns
        """,
    ],

    # ---------------------------------------------------------
    # PROJECTS BLOCKS
    # ---------------------------------------------------------
    "projects": [
        """PROJECTS
        RateLimiter: Token bucket rate limiting library for Python services
        • Published to PyPI with 2k monthly downloads
        """,

        """SIDE PROJECTS
        Trailhead | Hiking route planner built with React and Node.js
        • Shipped offline map caching for 500 beta users
        """,
    ],

    # ---------------------------------------------------------
    # EDUCATION BLOCKS
    # ---------------------------------------------------------
    "education": [
        """EDUCATION
        M.S. Computer Science, San Diego State University
        February 2016 - June 2018
        """,

        """EDUCATION
        University of Texas at Austin - Bachelor of Science in Mathematics
        2012 - 2016
        """,
    ],

    # ---------------------------------------------------------
    # SKILLS BLOCKS (FILLABLE)
    # ---------------------------------------------------------
    "skills": [
        """SKILLS
        {skills}
        """,

        """Technical Skills
        Languages: {skills}
        """,
    ],
}


# -------------------------------------------------------------------------
# MockResumeGenerator INPUT DATA MODELS
# -------------------------------------------------------------------------
@dataclass
class ResumeValues:
    """
    Fillable field values that can be overridden when generating a mock
    resume (the variable parts of the text templates).

    Attributes:
        name: Default person name.
        email: Default email address.
        phone: Default phone number.
        linkedin_name: LinkedIn profile slug.
        skills: Skills text inserted into the skills block.
        company_name: Company of the most recent role.
    """
    name: str = "John Doe"
    email: str = "john.doe@example.com"
    phone: str = "123-456-7890"
    linkedin_name: str = "john_doe23"
    skills: str = "Python, Go, PostgreSQL, Kubernetes, AWS"
    company_name: str = "Acme Corp"


@dataclass
class ResumeTemplates:
    """
    Text templates used to render each resume section. Templates may use
    `str.format()` placeholders such as `{name}` or `{skills}`.
    """
    contact_info: str = DUMMY_RESUME_BLOCKS["contact_info"][0]
    summary: str = DUMMY_RESUME_BLOCKS["summary"][0]
    work_experience: str = DUMMY_RESUME_BLOCKS["work_experience"][0]
    projects: str = DUMMY_RESUME_BLOCKS["projects"][0]
    education: str = DUMMY_RESUME_BLOCKS["education"][0]
    skills: str = DUMMY_RESUME_BLOCKS["skills"][0]
    other: Optional[str] = None  # optional, only used if provided

# -------------------------------------------------------------------------
# MOCK RESUME GENERATOR
# -------------------------------------------------------------------------
class MockResumeGenerator:
    """
    Generate realistic mock resume text for testing purposes.

    Builds a resume from the templates and values, substituting fillable
    fields, and joins the sections in `section_order` with blank lines.

    Attributes:
        resume_values (ResumeValues): Fillable field values.
        resume_templates (ResumeTemplates): Templates for each section.
        section_order (List[str]): The sequence of sections to include.
    """

    def __init__(
        self,
        resume_values: Optional[ResumeValues] = None,
        resume_templates: Optional[ResumeTemplates] = None,
        section_order: Optional[List[str]] = None,
    ):
        self.resume_values = resume_values or ResumeValues()
        self.resume_templates = resume_templates or ResumeTemplates()
        self.section_order = DEFAULT_SECTION_ORDER if section_order is None else section_order

    def _render(self, template: Optional[str]) -> str:
        if not template:
            return ""
        try:
            rendered = template.format(**vars(self.resume_values))
        except KeyError:
            # Unknown placeholders: keep the raw text
            rendered = template
        return "\n".join(line.strip() for line in rendered.strip().splitlines())

    # ----------------------
    # Public interface
    # ----------------------
    def generate(self) -> str:
        """
        Build the resume text.

        Returns:
            str: The sections in `section_order`, separated by blank lines.
        """
        parts = []
        for section in self.section_order:
            template = getattr(self.resume_templates, section, None)
            rendered = self._render(template)
            if rendered:
                parts.append(rendered)
        return "\n\n".join(parts)

    def clone(
        self,
        resume_values: Optional[ResumeValues] = None,
        resume_templates: Optional[ResumeTemplates] = None,
        section_order: Optional[List[str]] = None,
    ) -> "MockResumeGenerator":
        """
        Create a copy of this generator, optionally overriding specific attributes.

        Returns:
            MockResumeGenerator: A new generator with the requested overrides.
        """
        new_gen = copy.deepcopy(self)
        if resume_values is not None:
            new_gen.resume_values = resume_values
        if resume_templates is not None:
            new_gen.resume_templates = resume_templates
        if section_order is not None:
            new_gen.section_order = section_order
        return new_gen
