"""
Text utility helpers shared by the ATS scorer and the matching engine.
"""

import re
from typing import Iterator

# Latin and Cyrillic word characters only; accented letters split tokens
_TOKEN_RE = re.compile(r"[A-Za-zА-Яа-я0-9_]+")


def tokenize(text: str) -> Iterator[str]:
    """
    Yields lowercase word tokens (runs of letters, digits or underscore).
    No stemming. Call again to restart.
    """
    for match in _TOKEN_RE.finditer(text.lower()):
        yield match.group()


def unique_tokens(text: str, min_length: int = 0, exclude=frozenset()) -> list[str]:
    """
    Unique tokens longer than min_length, in first-encounter order,
    skipping anything in exclude.
    """
    seen = dict.fromkeys(
        t for t in tokenize(text) if len(t) > min_length and t not in exclude
    )
    return list(seen)


def normalize_skills(skills) -> set[str]:
    """Lowercased, stripped skill names; blanks dropped."""
    return {s.strip().lower() for s in skills if s and s.strip()}


def word_count(text: str) -> int:
    """Number of whitespace-separated chunks."""
    return len(text.split())


def clean_text(text: str) -> str:
    """Strips excessive whitespace while preserving single newlines."""
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()
