"""keyword_scorer.py
Keyword overlap between a job description and resume-derived text, plus a
bounded ATS-style match percentage.
"""
import re
from typing import Iterable, List, Optional, Set

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.keyword_tables import STOPWORDS
from resume_synth.models import KeywordScore, ExperienceRecord, ProjectRecord
from resume_synth.parse_classes.helpers.text_keys import unique

_STOPWORDS = frozenset(STOPWORDS)


def tokenize(text: Optional[str], drop_stopwords: bool = False) -> List[str]:
    """
    Lowercase, replace non-alphanumerics with spaces and split on whitespace.

    Example:
        >>> tokenize("Built REST APIs (Python/Go)")
        ['built', 'rest', 'apis', 'python', 'go']
    """
    tokens = re.sub(r"[^a-z0-9\s]", " ", (text or "").lower()).split()
    if drop_stopwords:
        return [t for t in tokens if t not in _STOPWORDS]
    return tokens


def build_resume_token_set(
    experience: Iterable[ExperienceRecord] = (),
    projects: Iterable[ProjectRecord] = (),
    skills: Iterable[str] = (),
) -> Set[str]:
    """
    Collect the resume side of the comparison: technologies (lowercased, kept
    whole), achievement and highlight words, project summaries and explicit
    skills.
    """
    experience = list(experience or [])
    projects = list(projects or [])
    skills = list(skills or [])
    tokens: Set[str] = set()

    for technology in [t for e in experience for t in e.technologies] + [t for p in projects for t in p.technologies]:
        if technology and technology.strip():
            tokens.add(technology.strip().lower())
            tokens.update(tokenize(technology))

    for achievement in (a for e in experience for a in e.achievements):
        tokens.update(tokenize(achievement))
    for project in projects:
        for highlight in project.highlights:
            tokens.update(tokenize(highlight))
        tokens.update(tokenize(project.summary))

    for skill in skills:
        if skill and skill.strip():
            tokens.add(skill.strip().lower())
            tokens.update(tokenize(skill))
    return tokens


def score_keywords(
    job_description: Optional[str],
    resume_tokens: Iterable[str],
    keywords: Iterable[str] = (),
    drop_stopwords: bool = SYNTH_DEFAULTS.DROP_STOPWORDS,
) -> KeywordScore:
    """
    Compare job description (+ instruction keywords) tokens with resume tokens.

    Args:
        job_description (Optional[str]): Job description text.
        resume_tokens (Iterable[str]): Output of `build_resume_token_set`.
        keywords (Iterable[str]): Extra target keywords from the instructions.
        drop_stopwords (bool): Ignore common English stop words on the job
            description side.

    Returns:
        KeywordScore: `matched_keywords` in job description order (capped), and
        `ats_score` = round(min(100, matches / clamp(|jd set|, 5, 30) * 100)),
        or None when the job description yields no tokens.
    """
    jd_tokens = tokenize((job_description or "")[: SYNTH_DEFAULTS.MAX_INPUT_CHARS], drop_stopwords)
    keyword_tokens = tokenize(" ".join(k for k in keywords or [] if k), drop_stopwords)
    jd_ordered = unique(jd_tokens + keyword_tokens)
    if not jd_ordered:
        return KeywordScore(matched_keywords=[], ats_score=None)

    resume_set = set(resume_tokens or [])
    matched = [token for token in jd_ordered if token in resume_set]

    denominator = max(SYNTH_DEFAULTS.ATS_DENOM_MIN, min(SYNTH_DEFAULTS.ATS_DENOM_MAX, len(jd_ordered)))
    # Half-up rounding, not banker's rounding
    ats_score = min(100, int(len(matched) / denominator * 100 + 0.5))
    return KeywordScore(
        matched_keywords=matched[: SYNTH_DEFAULTS.MAX_MATCHED_KEYWORDS],
        ats_score=max(0, ats_score),
    )
