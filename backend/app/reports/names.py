"""Display-name helpers."""

from typing import Iterable, Optional

UNNAMED_TEACHER = "Unnamed Teacher"


def normalize_name(parts: Iterable[Optional[str]]) -> str:
    """Join the non-empty name parts with single spaces.

    >>> normalize_name(["John", "", "  Smith "])
    'John Smith'
    """
    words = []
    for part in parts:
        if part:
            words.extend(part.split())
    return " ".join(words)


def display_name(user, fallback: str = "") -> str:
    return normalize_name(user.name_parts) or fallback
