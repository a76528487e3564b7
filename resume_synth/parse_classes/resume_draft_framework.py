"""resume_draft_framework.py
Holds framework to orchestrate ResumeTextParser, the keyword scorer and the
draft synthesizers and return a GeneratedDraft.
"""
from dataclasses import replace
from datetime import date
from typing import Any, Optional

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.exceptions import DraftPayloadError, ResumeDraftFrameworkConfigError
from resume_synth.logging import LoggerFactory
from resume_synth.models import FormState, GeneratedDraft, KeywordScore, ParsedResumeSections
from resume_synth.schemas import parse_draft_payload

from resume_synth.parse_classes.helpers.text_keys import dedupe_strings
from resume_synth.parse_classes.keyword_scorer.keyword_scorer import build_resume_token_set, score_keywords
from resume_synth.parse_classes.resume_text_parser.resume_text_parser import ResumeTextParser
from resume_synth.parse_classes.draft_synthesizer.source_records import parse_uploaded_resume
from resume_synth.parse_classes.draft_synthesizer.local_draft_builder import (
    VerbChooser,
    build_local_draft,
    make_verb_chooser,
)
from resume_synth.parse_classes.draft_synthesizer.draft_normalizer import (
    normalize_external_draft,
    should_favor_rewrite,
)
from resume_synth.parse_classes.draft_synthesizer.prompt_builder import build_generation_prompt

logger_factory = LoggerFactory()
framework_logger = logger_factory.get_stage_logger("resume_draft_framework")


class ResumeDraftFramework:
    """
    Orchestrates draft generation: parse the uploaded resume text once, score
    keywords locally, then either reconcile an external draft with the user's
    records or fall back to the local heuristic builder.

    `generate` never raises for bad input: an invalid or unusable external
    payload is logged and the local draft is returned instead.

    Parameters
    ----------
    parser : ResumeTextParser, optional
        Parser used for `form_state.resume_text`. Defaults to a parser with the
        default parser map.
    verb_chooser : callable, optional
        Picks action verbs for rewritten bullets. Defaults to
        `make_verb_chooser(SYNTH_DEFAULTS.REWRITE_VERB_SEED)`.
    today : datetime.date, optional
        Reference date for the years-of-experience estimate (useful for testing).

    Example
    -------
    >>> framework = ResumeDraftFramework()
    >>> draft = framework.generate(form_state, external_payload={"sections": {...}})
    >>> draft.to_dict()["atsScore"]
    """

    def __init__(
        self,
        parser: Optional[ResumeTextParser] = None,
        verb_chooser: Optional[VerbChooser] = None,
        today: Optional[date] = None,
    ):
        """
        Raises:
            ResumeDraftFrameworkConfigError: If `parser` is not a
                ResumeTextParser or `verb_chooser` is not callable.
        """
        if parser is not None and not isinstance(parser, ResumeTextParser):
            raise ResumeDraftFrameworkConfigError(
                f"parser must be a ResumeTextParser instance, got {type(parser).__name__}"
            )
        if verb_chooser is not None and not callable(verb_chooser):
            raise ResumeDraftFrameworkConfigError(
                f"verb_chooser must be callable, got {type(verb_chooser).__name__}"
            )
        self.parser = parser or ResumeTextParser()
        self.verb_chooser = verb_chooser or make_verb_chooser(SYNTH_DEFAULTS.REWRITE_VERB_SEED)
        self.today = today

    @staticmethod
    def _check_form_state(form_state: Any) -> None:
        if not isinstance(form_state, FormState):
            raise ResumeDraftFrameworkConfigError(
                f"form_state must be a FormState instance, got {type(form_state).__name__}"
            )

    def parse(self, form_state: FormState) -> ParsedResumeSections:
        """Parse the uploaded resume text of `form_state`."""
        self._check_form_state(form_state)
        return parse_uploaded_resume(form_state, self.parser)

    def score(self, form_state: FormState, parsed: ParsedResumeSections) -> KeywordScore:
        """Score the job description against user records, else parsed records."""
        experience = form_state.experience or parsed.experience
        projects = form_state.projects or parsed.projects
        skills = dedupe_strings(list(form_state.skills) + list(parsed.skills))
        return score_keywords(
            (form_state.job_description_text or "")[: SYNTH_DEFAULTS.MAX_INPUT_CHARS],
            build_resume_token_set(experience, projects, skills),
            form_state.instructions.keywords,
        )

    def build_prompt(self, form_state: FormState) -> str:
        """Prompt text for an external generator (see `build_generation_prompt`)."""
        return build_generation_prompt(form_state, self.parse(form_state))

    def generate(self, form_state: FormState, external_payload: Optional[Any] = None) -> GeneratedDraft:
        """
        Full pipeline: parse → score → external or local draft.

        Args:
            form_state (FormState): The user's inputs.
            external_payload (Optional[Any]): Already fetched external draft
                (decoded JSON). None skips straight to the local builder.

        Returns:
            GeneratedDraft: Fully populated draft. `ats_score` and
            `matched_keywords` always come from the local scorer.

        Raises:
            ResumeDraftFrameworkConfigError: If `form_state` is not a FormState.
        """
        parsed = self.parse(form_state)
        score = self.score(form_state, parsed)

        if external_payload is not None:
            draft = self._generate_external(form_state, external_payload, parsed, score)
            if draft is not None:
                return draft

        return build_local_draft(
            form_state,
            verb_chooser=self.verb_chooser,
            today=self.today,
            parsed=parsed,
            score=score,
        )

    def _generate_external(
        self,
        form_state: FormState,
        external_payload: Any,
        parsed: ParsedResumeSections,
        score: KeywordScore,
    ) -> Optional[GeneratedDraft]:
        """
        Validate and normalize an external draft.

        Returns:
            Optional[GeneratedDraft]: The normalized draft, or None when the
            payload was rejected or normalization failed.
        """
        try:
            draft = parse_draft_payload(external_payload)
        except DraftPayloadError as e:
            framework_logger.warning(f"External draft rejected, using local draft: {e.full_message}")
            return None

        try:
            normalized = normalize_external_draft(
                draft,
                form_state,
                prefer_generated=should_favor_rewrite(form_state),
                parsed=parsed,
            )
        except Exception as e:
            framework_logger.warning(f"External draft normalization failed, using local draft: {str(e)}")
            return None

        framework_logger.info("External draft accepted")
        return replace(normalized, ats_score=score.ats_score, matched_keywords=list(score.matched_keywords))
