"""prepare_text.py
Coerce and bound raw text before it enters the pipeline.
"""
import re
from typing import Any, Optional

from resume_synth.config import SYNTH_DEFAULTS

# Zero-width characters and byte order marks left behind by document decoders
_INVISIBLE_CHARS = re.compile("[\\u200b\\u200c\\u200d\\u2060\\ufeff]")


def prepare_text(text: Any, max_chars: Optional[int] = None) -> str:
    """
    Return `text` as a string no longer than `max_chars`.

    None and non-string values are treated as empty text. Windows / old Mac line
    endings are normalized to `\\n` and invisible characters are removed.

    Args:
        text (Any): Raw input text.
        max_chars (Optional[int]): Truncation limit. Defaults to
            `SYNTH_DEFAULTS.MAX_INPUT_CHARS`.

    Returns:
        str: Prepared text ("" when the input is unusable).
    """
    if not isinstance(text, str):
        return ""
    limit = SYNTH_DEFAULTS.MAX_INPUT_CHARS if max_chars is None else max_chars
    text = text[:limit]
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    return _INVISIBLE_CHARS.sub("", text)


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace (incl. non-breaking spaces) to single spaces."""
    return re.sub(r"\s+", " ", text or "").strip()
