"""conftest.py
Add logging hooks, command line parsing and shared fixtures to pytest.
"""
from datetime import date

import pytest
from resume_synth.logging import LoggerFactory
from resume_synth.parse_classes.draft_synthesizer.local_draft_builder import first_verb, make_verb_chooser
from resume_synth.test_helpers.mock_resume_generator import MockResumeGenerator

# --------------------------------------------------------------
# SETUP TEST LOGGING
# --------------------------------------------------------------

# Integrate logger with pytest
logger = LoggerFactory().get_logger(
    name="pytest_logger",
    logger_type="pytest",
    console=True
)
current_class = None

@pytest.hookimpl(tryfirst=True)
def pytest_sessionstart(session):
    """Session start header."""
    logger.info("==== PYTEST SESSION START ====")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logstart(nodeid, location):
    """Called at the start of each test."""
    global current_class
    class_name = location[0]
    if class_name != current_class:
        current_class = class_name
        logger.info(f"\n---- TestClass: {current_class} ----")

@pytest.hookimpl(tryfirst=True)
def pytest_runtest_logreport(report):
    """Called at the end of each test phase (setup/call/teardown)."""
    if report.when != "call":
        return  # only care about the main call, not setup/teardown

    status = report.outcome.upper()  # PASSED / FAILED / SKIPPED
    if status == "PASSED":
        logger.info(f"PASSED: {report.nodeid}")
    elif status == "FAILED":
        logger.error(f"FAILED: {report.nodeid}\n{report.longreprtext}")
    elif status == "SKIPPED":
        logger.warning(f"SKIPPED: {report.nodeid}\n{report.longreprtext}")

@pytest.hookimpl(tryfirst=True)
def pytest_sessionfinish(session, exitstatus):
    """Session finish footer."""
    logger.info(f"==== PYTEST SESSION END: exitstatus={exitstatus} ====")


# --------------------------------------------------------------
# SETUP RUN ARGUMENT PARSING
# --------------------------------------------------------------
def pytest_addoption(parser):
    """
    Register a command-line option for the seed of the random verb chooser.

    Example usage:
        # Deterministic verb choice (default)
        pytest

        # Seeded random verb choice
        pytest --verb-seed=7
    """
    parser.addoption(
        "--verb-seed",
        action="store",
        type=int,
        default=None,
        help="Seed for the random verb chooser used by VERB_CHOOSER. Default: deterministic chooser.",
    )

@pytest.fixture(scope="session")
def VERB_SEED(request):
    """The `--verb-seed` value (None when not given)."""
    return request.config.getoption("--verb-seed")


# --------------------------------------------------------------
# SHARED FIXTURES
# --------------------------------------------------------------
@pytest.fixture
def VERB_CHOOSER(VERB_SEED):
    """
    Verb chooser selected by `--verb-seed`.

    Tests asserting exact verbs should use DETERMINISTIC_VERB_CHOOSER instead.
    """
    return make_verb_chooser(VERB_SEED)

@pytest.fixture
def DETERMINISTIC_VERB_CHOOSER():
    """Always picks the first verb of the table."""
    return first_verb

@pytest.fixture
def SEEDED_VERB_CHOOSER():
    """A seeded random chooser (fresh per test, so sequences repeat across tests)."""
    return make_verb_chooser(1234)

@pytest.fixture
def FIXED_TODAY():
    """Reference date for the years-of-experience estimate."""
    return date(2025, 6, 1)

@pytest.fixture
def MOCK_RESUME_GENERATOR():
    """Default mock resume generator; use `.clone()` to override parts."""
    return MockResumeGenerator()
