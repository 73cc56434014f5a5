"""Line tokenisation shared by the rhyme and prosody code."""

from __future__ import annotations

import re
from typing import List, NamedTuple

TOKEN_PATTERN = re.compile(r"[A-Za-z']+")
_TRAILING_PUNCTUATION = re.compile(r"[.,!?;:'\"()\[\]{}—–-]+$")
_NON_WORD_CHARACTERS = re.compile(r"[^A-Za-z']")


class Token(NamedTuple):
    word: str
    position: int


def tokenize_line(line: str) -> List[Token]:
    """Split ``line`` into lowercased words with their character offsets."""

    if not line or not line.strip():
        return []
    return [
        Token(match.group(0).lower(), match.start())
        for match in TOKEN_PATTERN.finditer(line)
    ]


def last_word(line: str) -> str:
    """Return the lowercased final word of ``line`` or ``""``.

    Trailing punctuation is removed before splitting on whitespace, then any
    character other than a letter or apostrophe is dropped from the word.
    """

    if not line or not line.strip():
        return ""

    cleaned = _TRAILING_PUNCTUATION.sub("", line).strip()
    words = cleaned.split()
    if not words:
        return ""
    return _NON_WORD_CHARACTERS.sub("", words[-1]).lower()


__all__ = ["TOKEN_PATTERN", "Token", "tokenize_line", "last_word"]
