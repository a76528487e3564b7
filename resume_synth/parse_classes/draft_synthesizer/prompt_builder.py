"""prompt_builder.py
Renders the form state (with parsed fallbacks) into the text prompt an
external generator is sent. Pure: no network access.
"""
from typing import List, Optional

from resume_synth.config import SYNTH_DEFAULTS
from resume_synth.models import FormState, ParsedResumeSections
from resume_synth.parse_classes.draft_synthesizer.source_records import select_source_records

SYSTEM_PROMPT = (
    "You are an expert technical resume writer. You craft concise, results-oriented resume sections "
    "that align tightly with the provided job description, goals, and candidate history."
)


def truncate_text(value: str, max_chars: int = SYNTH_DEFAULTS.PROMPT_TRUNCATE_CHARS) -> str:
    if len(value) <= max_chars:
        return value
    return f"{value[:max_chars]}…"


def build_generation_prompt(form_state: FormState, parsed: Optional[ParsedResumeSections] = None) -> str:
    """
    Build the user prompt for an external draft generator.

    Sections: policy preamble, candidate basics, existing summary, skills,
    goals / keywords / constraints / custom prompt, experience, projects,
    education, truncated job description and resume text, output requirements.
    Records come from the form when present, otherwise from the parsed resume.
    """
    sources = select_source_records(form_state, parsed)
    basics = form_state.basics
    instructions = form_state.instructions
    lines: List[str] = []

    lines.append(
        "Craft resume sections tailored to the following context. Use only the provided information. "
        "Do not invent companies, dates, or credentials."
    )
    lines.append(
        'Focus: Provide impact-oriented bullet points with concrete outcomes. Avoid placeholders like "XYZ" or generic filler.'
    )
    lines.append(
        "Preserve every experience and project supplied (including those from uploads). Rephrase for clarity, "
        "but do not drop roles, projects, or achievements. If bullets are provided, return at least the same "
        "number per item, keeping the core accomplishment."
    )
    if form_state.preserve_strict:
        lines.append("Rewrite policy: STRICT. Preserve the existing wording closely; fix grammar and flow but avoid major rewrites.")
    else:
        lines.append("Rewrite policy: You may rewrite achievements for clarity, but keep them truthful and grounded in the provided details.")
    lines.append("Return JSON that matches the supplied schema. Do not include commentary or markdown.")

    lines.append("\n### Candidate Basics")
    lines.append(f"Name: {basics.full_name or 'Unknown'}")
    lines.append(f"Email: {basics.email or 'Unknown'}")
    if basics.headline:
        lines.append(f"Headline: {basics.headline}")
    if basics.location:
        lines.append(f"Location: {basics.location}")
    if basics.work_authorization and basics.work_authorization.status:
        lines.append(f"Work Authorization: {basics.work_authorization.status}")

    if sources.summary:
        lines.append("\n### Existing Summary")
        lines.append(sources.summary)

    if sources.skills:
        lines.append("\n### Skills Provided")
        lines.append(", ".join(sources.skills))

    if instructions.goals:
        lines.append("\n### Goals")
        lines.extend(f"- {goal}" for goal in instructions.goals)
    if instructions.keywords:
        lines.append("\n### Target Keywords")
        lines.extend(f"- {keyword}" for keyword in instructions.keywords)
    if instructions.constraints:
        lines.append("\n### Constraints")
        lines.extend(f"- {constraint}" for constraint in instructions.constraints)
    if instructions.prompt:
        lines.append("\n### Custom Prompt")
        lines.append(instructions.prompt)

    if sources.experience:
        lines.append("\n### Experience Provided")
        for record in sources.experience:
            end = "Present" if record.current else (record.end_date or "?")
            lines.append(
                f"- Role: {record.role or 'Unknown'} at {record.company or 'Unknown'} ({record.start_date or '?'} – {end})"
            )
            if record.location:
                lines.append(f"  Location: {record.location}")
            if record.technologies:
                lines.append(f"  Technologies: {', '.join(record.technologies)}")
            if record.achievements:
                lines.append(f"  Achievements ({len(record.achievements)} bullets):")
                lines.extend(f"    {i}. {a}" for i, a in enumerate(record.achievements, start=1))

    if sources.projects:
        lines.append("\n### Projects Provided")
        for record in sources.projects:
            lines.append(f"- {record.name or 'Project'}: {record.summary or ''}")
            if record.technologies:
                lines.append(f"  Technologies: {', '.join(record.technologies)}")
            if record.highlights:
                lines.append(f"  Highlights ({len(record.highlights)} bullets):")
                lines.extend(f"    {i}. {h}" for i, h in enumerate(record.highlights, start=1))

    if sources.education:
        lines.append("\n### Education Highlights (for context only)")
        for record in sources.education:
            when = f" ({record.end_date})" if record.end_date else ""
            lines.append(f"- {record.degree or 'Program'} at {record.school}{when}")

    if form_state.job_description_text:
        lines.append("\n### Job Description (truncated)")
        lines.append(truncate_text(form_state.job_description_text))

    if form_state.resume_text:
        lines.append("\n### Existing Resume Text (truncated)")
        lines.append(truncate_text(form_state.resume_text))

    lines.append("\n### Output Requirements")
    lines.append("- summary: 1-2 sentences, highlight strengths relevant to goals and JD.")
    lines.append("- skills: 6-12 concise items, prioritize technologies and tools from inputs and JD.")
    lines.append(
        "- experience / projects: Rephrase or enhance provided bullets; retain truthful content, include metrics "
        "where given. Do not omit provided bullets. Rewrite them so each original point is represented."
    )
    lines.append("- achievements/highlights: reflect every provided bullet (add more only when valuable), keep them action-driven with no placeholders.")
    lines.append("- education: Mirror each provided education record (school, degree, dates). Rephrase descriptions without dropping entries.")
    lines.append("- atsScore: approximate 0-100 match to JD. matchedKeywords: the JD keywords you used.")

    return "\n".join(lines)
