"""test_resume_draft_framework.py
Run tests on ResumeDraftFramework
"""
import pytest

from resume_synth.exceptions import ResumeDraftFrameworkConfigError
from resume_synth.models import FormState, GeneratedDraft, ParsedResumeSections
from resume_synth.parse_classes import resume_draft_framework as framework_module
from resume_synth.parse_classes.resume_draft_framework import ResumeDraftFramework
from resume_synth.parse_classes.draft_synthesizer.local_draft_builder import build_local_draft
from resume_synth.parse_classes.resume_text_parser.resume_text_parser import ResumeTextParser
from resume_synth.test_helpers.dummy_classes import DummyParser
from resume_synth.test_helpers.dummy_variables.dummy_form_states import (
    DUMMY_BASICS,
    EXAMPLE_RESUME_TEXT_HEADLESS,
    MALFORMED_EXTERNAL_PAYLOADS,
    VALID_EXTERNAL_PAYLOAD,
    empty_form_state,
    records_form_state,
    upload_only_form_state,
)


@pytest.fixture
def framework(DETERMINISTIC_VERB_CHOOSER, FIXED_TODAY):
    return ResumeDraftFramework(verb_chooser=DETERMINISTIC_VERB_CHOOSER, today=FIXED_TODAY)


@pytest.fixture
def framework_warnings(monkeypatch):
    """Collect warnings sent to the framework stage logger."""
    messages = []
    monkeypatch.setattr(
        framework_module.framework_logger,
        "warning",
        lambda message, *args, **kwargs: messages.append(message),
    )
    return messages


def strip_ids(draft: GeneratedDraft) -> dict:
    """Draft as a dict without the randomly assigned record ids."""
    data = draft.to_dict()
    for key in ["experience", "projects", "education"]:
        for record in data[key]:
            record.pop("id")
    return data


class TestResumeDraftFramework:
    """Unit tests for ResumeDraftFramework."""

    # --------------------------------------
    # Configuration
    # --------------------------------------
    def test_invalid_parser(self):
        with pytest.raises(ResumeDraftFrameworkConfigError):
            ResumeDraftFramework(parser="not a parser")

    def test_invalid_verb_chooser(self):
        with pytest.raises(ResumeDraftFrameworkConfigError):
            ResumeDraftFramework(verb_chooser="Built")

    def test_invalid_form_state(self, framework):
        with pytest.raises(ResumeDraftFrameworkConfigError):
            framework.generate({"basics": {}})

    def test_custom_parser_is_used(self, DETERMINISTIC_VERB_CHOOSER):
        """An injected parser decides what is read from the upload."""
        parser = ResumeTextParser(parser_map={"skills": [DummyParser(result=["Rust"])]})
        framework = ResumeDraftFramework(parser=parser, verb_chooser=DETERMINISTIC_VERB_CHOOSER)
        parsed = framework.parse(upload_only_form_state())
        assert parsed.skills == ["Rust"]
        assert parsed.experience == []

    # --------------------------------------
    # Parse and score
    # --------------------------------------
    def test_parse_without_upload(self, framework):
        assert framework.parse(records_form_state()) == ParsedResumeSections()

    def test_score_uses_form_and_parsed_skills(self, framework):
        form_state = upload_only_form_state()
        form_state.skills = ["Terraform"]
        form_state.job_description_text = "Terraform Go"
        score = framework.score(form_state, framework.parse(form_state))
        assert score.matched_keywords == ["terraform", "go"]

    def test_empty_job_description(self, framework):
        """No job description: no score, no matches, records still parsed."""
        form_state = FormState(basics=DUMMY_BASICS, resume_text=EXAMPLE_RESUME_TEXT_HEADLESS)
        draft = framework.generate(form_state)
        assert draft.ats_score is None
        assert draft.matched_keywords == []
        assert [(r.role, r.company) for r in draft.experience] == [("Senior Developer", "Acme Corp")]

    # --------------------------------------
    # Local path
    # --------------------------------------
    def test_no_payload_matches_local_builder(self, framework, DETERMINISTIC_VERB_CHOOSER, FIXED_TODAY):
        """Without an external payload the local builder result is returned."""
        form_state = upload_only_form_state()
        expected = build_local_draft(form_state, DETERMINISTIC_VERB_CHOOSER, FIXED_TODAY)
        assert strip_ids(framework.generate(form_state)) == strip_ids(expected)

    def test_empty_form_state(self, framework):
        draft = framework.generate(empty_form_state())
        assert isinstance(draft, GeneratedDraft)
        assert draft.experience == [] and draft.skills == [] and draft.ats_score is None

    # --------------------------------------
    # External path
    # --------------------------------------
    @pytest.mark.parametrize("payload", MALFORMED_EXTERNAL_PAYLOADS)
    def test_malformed_payload_falls_back_to_local(self, framework, framework_warnings, payload):
        """A malformed external payload never raises; the local draft is returned and a warning logged."""
        form_state = records_form_state()
        draft = framework.generate(form_state, external_payload=payload)
        assert strip_ids(draft) == strip_ids(framework.generate(form_state))
        assert len(framework_warnings) == 1
        assert "using local draft" in framework_warnings[0]

    def test_normalization_failure_falls_back_to_local(self, framework, framework_warnings, monkeypatch):
        """An unexpected failure while normalizing is logged and the local draft returned."""
        def explode(*args, **kwargs):
            raise RuntimeError("normalizer exploded")

        monkeypatch.setattr(framework_module, "normalize_external_draft", explode)
        draft = framework.generate(records_form_state(), external_payload=VALID_EXTERNAL_PAYLOAD)
        assert draft.summary.startswith("Backend Engineer with 5+ years")
        assert "normalizer exploded" in framework_warnings[0]

    def test_valid_payload_scored_locally(self, framework):
        """External scores are ignored; the local keyword score is used."""
        form_state = records_form_state()
        draft = framework.generate(form_state, external_payload=VALID_EXTERNAL_PAYLOAD)
        score = framework.score(form_state, framework.parse(form_state))
        assert draft.summary == "Backend engineer who ships reliable Python services on AWS."
        assert draft.ats_score == score.ats_score != 99
        assert draft.matched_keywords == score.matched_keywords
        assert "everything" not in draft.matched_keywords
        assert [r.id for r in draft.experience] == ["exp-1"]

    def test_none_payload_skips_external(self, framework, framework_warnings):
        framework.generate(records_form_state(), external_payload=None)
        assert framework_warnings == []

    # --------------------------------------
    # Prompt
    # --------------------------------------
    def test_build_prompt_uses_parsed_records(self, framework):
        prompt = framework.build_prompt(upload_only_form_state())
        assert "- Role: Software Engineer at Globex LLC (Jun 2016 – Dec 2019)" in prompt
