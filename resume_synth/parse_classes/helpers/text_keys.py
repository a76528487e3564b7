"""text_keys.py
Case / whitespace insensitive keys and order preserving dedupe helpers.
"""
import re
from typing import Iterable, List, Hashable, TypeVar

T = TypeVar("T", bound=Hashable)


def normalize_text_key(value: str) -> str:
    """Collapse whitespace, trim and lowercase (the dedupe key for free text)."""
    return re.sub(r"\s+", " ", value or "").strip().lower()


def dedupe_strings(values: Iterable[str]) -> List[str]:
    """
    Trim each value and drop empties and case / whitespace insensitive duplicates,
    keeping the first occurrence and the original order.
    """
    seen = set()
    out: List[str] = []
    for value in values:
        if value is None:
            continue
        trimmed = re.sub(r"\s+", " ", str(value)).strip()
        if not trimmed:
            continue
        key = trimmed.lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(trimmed)
    return out


def unique(values: Iterable[T]) -> List[T]:
    """Order preserving exact dedupe."""
    return list(dict.fromkeys(values))
