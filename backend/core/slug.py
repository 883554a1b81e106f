"""
Slug normalization.
"""

import re

MAX_SLUG_BASE_LENGTH = 200

_DISALLOWED = re.compile(r"[^\w\s-]", re.ASCII)
_WHITESPACE = re.compile(r"\s+")
_HYPHENS = re.compile(r"-+")


def slugify(text: str) -> str:
    """Convert text to a URL-safe slug.

    Lower-cases, drops anything that is not an ASCII word character,
    whitespace or hyphen, turns whitespace runs into a hyphen, collapses
    repeated hyphens and trims hyphens from both ends. May return an empty
    string (e.g. for a title made only of punctuation).
    """
    text = text.lower()
    text = _DISALLOWED.sub("", text)
    text = _WHITESPACE.sub("-", text)
    text = _HYPHENS.sub("-", text)
    text = text.strip("-")
    return text[:MAX_SLUG_BASE_LENGTH].rstrip("-")
