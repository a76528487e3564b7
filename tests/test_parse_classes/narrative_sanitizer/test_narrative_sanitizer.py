"""test_narrative_sanitizer.py
Run tests on the narrative sanitizer functions
"""
import pytest

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.models import BasicDetails
from resume_synth.parse_classes.narrative_sanitizer.narrative_sanitizer import (
    clean_summary_text,
    collect_contact_tokens,
    contains_contact_noise,
    contains_contact_token,
    filter_skill_list,
    is_noise_value,
    sanitize,
    sanitize_heading,
    strip_contact_tokens,
    tidy_bullets,
    truncate_at_word,
)


# ----------------------
# sanitize
# ----------------------
class TestSanitize:
    """Unit tests for sanitize()."""

    def test_contact_sentence_rejected(self):
        """A value containing an email address is rejected outright."""
        assert sanitize("Contact me at jane@example.com for details") == ""

    def test_clean_bullet_unchanged(self):
        """A clean achievement passes through untouched."""
        assert sanitize("Built a scheduler handling 10k req/s") == "Built a scheduler handling 10k req/s"

    def test_whitespace_collapsed(self):
        """Runs of whitespace become a single space."""
        assert sanitize("  Led   the\tmigration \n to Kubernetes ") == "Led the migration to Kubernetes"

    @pytest.mark.parametrize("value", [
        "Call 123-456-7890 anytime",
        "See www.jdoe.dev for more",
        "Portfolio at jdoe.io/work",
        "Account 12345678 reconciled",
        "Find me on github: jdoe",
    ])
    def test_contact_noise_rejected(self, value):
        """Phones, URLs, long digit runs and social handles are rejected."""
        assert sanitize(value) == ""

    @pytest.mark.parametrize("value", [
        "Built a real-time chat service on Socket.io and Node.js",
        "Deployed the API to Fly.io with zero downtime",
    ])
    def test_product_names_are_not_links(self, value):
        """Technologies spelled like bare domains do not count as contact noise."""
        assert sanitize(value) == value

    def test_product_domain_with_path_is_a_link(self):
        assert sanitize("Demo at fly.io/apps/jdoe") == ""

    @pytest.mark.parametrize("value", ["Summary", "Present", "N/A", "San Diego", "remote"])
    def test_noise_words_rejected(self, value):
        """Values that are only a generic noise word or a city are rejected."""
        assert sanitize(value) == ""

    @pytest.mark.parametrize("value", [None, 42, "", "   "])
    def test_empty_and_non_string(self, value):
        """Non-strings and blank strings sanitize to ""."""
        assert sanitize(value) == ""

    def test_contact_tokens_stripped(self):
        """The user's own name tokens are removed from the value."""
        assert sanitize(
            "Mentored by John Doe on platform work",
            contact_tokens={"john", "doe"},
        ) == "Mentored by on platform work"

    def test_long_value_truncated_per_field(self):
        """Each field has its own length limit and truncation adds an ellipsis."""
        value = "Designed resilient services " * 20
        for field, limit in [
            ("summary", SYNTH_DEFAULTS.SUMMARY_MAX_CHARS),
            ("project_summary", SYNTH_DEFAULTS.PROJECT_SUMMARY_MAX_CHARS),
            ("achievement", SYNTH_DEFAULTS.BULLET_MAX_CHARS),
        ]:
            result = sanitize(value, field)
            assert result.endswith("…")
            assert len(result) <= limit


# ----------------------
# Detection helpers
# ----------------------
class TestDetection:
    """Unit tests for the detection helpers."""

    def test_contains_contact_noise(self):
        assert contains_contact_noise("Reach me at https://example.org")
        assert not contains_contact_noise("Reduced infrastructure cost by 30%")
        assert not contains_contact_noise(None)

    def test_is_noise_value(self):
        assert is_noise_value("Present.")
        assert is_noise_value("  EDUCATION ")
        assert not is_noise_value("Python")
        assert not is_noise_value("")

    def test_collect_contact_tokens(self):
        """Name parts and the email (plus its local parts) are collected."""
        basics = BasicDetails(full_name="John Doe", email="John.Doe@example.com")
        assert collect_contact_tokens(basics) == frozenset({"john", "doe", "john.doe@example.com"})

    def test_collect_contact_tokens_skips_short_and_numeric_parts(self):
        """Tokens shorter than three characters and numeric local parts are skipped."""
        basics = BasicDetails(full_name="Jo Ann Lee", email="ann.1984@example.com")
        assert collect_contact_tokens(basics) == frozenset({"ann", "lee", "ann.1984@example.com"})

    def test_collect_contact_tokens_without_basics(self):
        assert collect_contact_tokens(None) == frozenset()

    def test_contains_contact_token_whole_word(self):
        """Tokens match whole words only."""
        assert contains_contact_token("Worked with John on infra", {"john"})
        assert not contains_contact_token("Worked with Johnson on infra", {"john"})
        assert not contains_contact_token("Worked with John on infra", None)

    def test_strip_contact_tokens_possessive(self):
        """A possessive suffix is removed with the token."""
        assert strip_contact_tokens("John's team shipped the release", {"john"}) == "team shipped the release"


# ----------------------
# Length limits
# ----------------------
class TestTruncateAtWord:
    """Unit tests for truncate_at_word()."""

    def test_short_text_untouched(self):
        assert truncate_at_word("Short bullet", 50) == "Short bullet"

    def test_cut_at_word_boundary(self):
        """The cut happens at the last whole word and fits the limit with its ellipsis."""
        text = "alpha beta gamma delta epsilon zeta eta theta iota kappa lambda"
        result = truncate_at_word(text, 45, min_viable_chars=10)
        assert result == "alpha beta gamma delta epsilon zeta eta…"
        assert len(result) <= 45

    def test_too_short_after_cut(self):
        """A kept part shorter than the minimum viable length is rejected."""
        assert truncate_at_word("tiny " + "x" * 100, 50) == ""


# ----------------------
# Headings
# ----------------------
class TestSanitizeHeading:
    """Unit tests for sanitize_heading()."""

    def test_whitespace_collapsed(self):
        assert sanitize_heading("  Senior   Developer ") == "Senior Developer"

    @pytest.mark.parametrize("value", [
        None,
        "",
        "Developer • Lead",
        "Developer\nLead",
        "jdoe@example.com",
        "call 555-123-4567",
        "see www.example.com",
        "https://jdoe.dev",
        "Ref 12345678",
        "x" * (SYNTH_DEFAULTS.HEADING_FIELD_MAX_CHARS + 1),
    ])
    def test_rejected_values(self, value):
        """Bullets, line breaks, contact details and overlong values are rejected."""
        assert sanitize_heading(value) == ""


# ----------------------
# Bullets
# ----------------------
class TestTidyBullets:
    """Unit tests for tidy_bullets()."""

    def test_split_capitalize_punctuate_dedupe(self):
        """Semicolons split bullets; each is capitalized, punctuated and deduped."""
        lines = ["built the api; wrote docs", "Built the API.", "", "Contact me at jane@example.com"]
        assert tidy_bullets(lines) == ["Built the api.", "Wrote docs."]

    def test_inline_bullet_glyphs_split(self):
        """Inline bullet glyphs split one line into several bullets."""
        assert tidy_bullets(["Led hiring • Ran the on-call rotation"]) == [
            "Led hiring.",
            "Ran the on-call rotation.",
        ]

    def test_long_line_split_on_sentences(self):
        """Lines over 160 characters are split on sentence boundaries."""
        line = (
            "Designed a multi-region scheduler that sustained ten thousand requests per second. "
            "Reduced infrastructure cost by thirty percent by consolidating the Kubernetes clusters"
        )
        assert tidy_bullets([line]) == [
            "Designed a multi-region scheduler that sustained ten thousand requests per second.",
            "Reduced infrastructure cost by thirty percent by consolidating the Kubernetes clusters.",
        ]

    def test_max_items(self):
        """At most MAX_ACHIEVEMENTS bullets are kept."""
        result = tidy_bullets([f"Shipped feature {i}" for i in range(10)])
        assert len(result) == SYNTH_DEFAULTS.MAX_ACHIEVEMENTS
        assert result[0] == "Shipped feature 0."

    def test_existing_end_punctuation_kept(self):
        assert tidy_bullets(["Cut latency in half!"]) == ["Cut latency in half!"]

    def test_empty_input(self):
        assert tidy_bullets([]) == []
        assert tidy_bullets(None) == []


# ----------------------
# Skills
# ----------------------
class TestFilterSkillList:
    """Unit tests for filter_skill_list()."""

    def test_noise_filtered(self):
        """Short, long, contact, noise and own-name values are dropped."""
        skills = [
            "Python",
            "python",
            "A",
            "Kubernetes Cluster Autoscaling Tuning Extras",
            "john.doe@example.com",
            "Summary",
            "John",
            "Go,",
        ]
        assert filter_skill_list(skills, contact_tokens={"john"}) == ["Python", "Go"]

    def test_cap(self):
        """At most MAX_SKILLS skills are kept."""
        skills = [f"Skill{i}" for i in range(30)]
        assert filter_skill_list(skills) == skills[: SYNTH_DEFAULTS.MAX_SKILLS]


# ----------------------
# Summaries
# ----------------------
class TestCleanSummaryText:
    """Unit tests for clean_summary_text()."""

    def test_first_two_sentences(self):
        """Empty candidates are skipped and two sentences are kept."""
        assert clean_summary_text("", None, "Backend engineer. Loves Go. Also hikes.") == (
            "Backend engineer. Loves Go."
        )

    def test_contact_lines_dropped(self):
        """Email and phone lines are removed before the summary is built."""
        text = "jane@example.com\n+1 555 123 4567\nPlatform engineer focused on reliability."
        assert clean_summary_text(text) == "Platform engineer focused on reliability."

    def test_rejected_candidate_falls_through(self):
        """A candidate that sanitizes to "" yields to the next one."""
        assert clean_summary_text("Summary", "Engineer who ships.") == "Engineer who ships."

    def test_nothing_usable(self):
        assert clean_summary_text(None, "", "   ") == ""
