"""dummy_form_states.py
Form states, resume texts and external draft payloads shared by the tests.
"""
from resume_synth.models import (
    BasicDetails,
    EducationRecord,
    ExperienceRecord,
    FormState,
    Instructions,
    ProjectRecord,
    WorkAuthorization,
)
from resume_synth.test_helpers.mock_resume_generator import MockResumeGenerator

# --------------------------------------------------------------
# RESUME TEXT
# --------------------------------------------------------------
MOCK_RESUME_GENERATOR_0 = MockResumeGenerator()
EXAMPLE_RESUME_TEXT_0 = MOCK_RESUME_GENERATOR_0.generate()

# The single-role example with no section headings at all
EXAMPLE_RESUME_TEXT_HEADLESS = (
    "Senior Developer at Acme Corp Jan 2020 - Present\n"
    "• Built a scheduler handling 10k req/s\n"
    "• Reduced deploy time by 40% with blue/green releases\n"
)

DUMMY_JOB_DESCRIPTION = (
    "We are hiring a backend engineer to build Python services on AWS. "
    "Experience with Kubernetes and PostgreSQL is required."
)

# --------------------------------------------------------------
# FORM STATES
# --------------------------------------------------------------
DUMMY_BASICS = BasicDetails(
    full_name="John Doe",
    email="john.doe@example.com",
    phone="123-456-7890",
    headline="Backend Engineer",
    work_authorization=WorkAuthorization(status="Citizen"),
)


def empty_form_state() -> FormState:
    return FormState()


def upload_only_form_state(job_description: str = DUMMY_JOB_DESCRIPTION) -> FormState:
    """Only an uploaded resume and a job description; no form records."""
    return FormState(
        basics=DUMMY_BASICS,
        resume_text=EXAMPLE_RESUME_TEXT_0,
        job_description_text=job_description,
    )


def records_form_state(preserve_strict: bool = False, with_upload: bool = False) -> FormState:
    """Form records typed by the user, optionally alongside an uploaded resume."""
    return FormState(
        basics=DUMMY_BASICS,
        experience=[
            ExperienceRecord(
                id="exp-1",
                role="Senior Developer",
                company="Acme Corp",
                start_date="Jan 2020",
                current=True,
                achievements=[
                    "Built a scheduler handling 10k req/s across three regions",
                    "did api work",
                ],
                technologies=["Python", "Kubernetes"],
            ),
        ],
        projects=[
            ProjectRecord(
                id="proj-1",
                name="RateLimiter",
                summary="Token bucket rate limiting library for Python services",
                highlights=["Published to PyPI with 2k monthly downloads"],
                technologies=["Python"],
            ),
        ],
        education=[
            EducationRecord(
                id="edu-1",
                school="San Diego State University",
                degree="M.S.",
                field="Computer Science",
                start_date="February 2016",
                end_date="June 2018",
            ),
        ],
        skills=["Python", "PostgreSQL", "AWS"],
        instructions=Instructions(goals=["Land a platform engineering role"], keywords=["terraform"]),
        resume_text=EXAMPLE_RESUME_TEXT_0 if with_upload else "",
        job_description_text=DUMMY_JOB_DESCRIPTION,
        preserve_strict=preserve_strict,
    )

# --------------------------------------------------------------
# EXTERNAL DRAFT PAYLOADS
# --------------------------------------------------------------
VALID_EXTERNAL_PAYLOAD = {
    "sections": {
        "summary": "Backend engineer who ships reliable Python services on AWS.",
        "skills": ["Python", "AWS", "Terraform"],
        "experience": [
            {
                "id": "exp-1",
                "role": "Senior Developer",
                "company": "Acme Corp",
                "startDate": "January 2020",
                "current": True,
                "achievements": [
                    "Designed a multi-region scheduler sustaining 10k requests per second",
                    "Led the migration of billing jobs onto Kubernetes",
                ],
                "technologies": ["Kubernetes"],
            }
        ],
        "projects": [
            {
                "name": "RateLimiter",
                "summary": "Token bucket rate limiting library for Python services",
                "highlights": ["Reached 2k monthly downloads on PyPI"],
            }
        ],
        "education": [
            {"id": "edu-1", "school": "San Diego State University", "degree": "M.S."},
        ],
    },
    "atsScore": 99,
    "matchedKeywords": ["everything"],
}

MALFORMED_EXTERNAL_PAYLOADS = [
    "not a payload",
    [],
    {},
    {"sections": "not an object"},
    {"sections": {"experience": [{"role": "Dev"}]}},
    {"sections": {"summary": 42}},
    {"sections": {"skills": "Python, Go"}},
]
