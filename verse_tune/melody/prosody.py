"""Syllable and stress extraction for lyric lines."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from verse_tune.core.cmudict_loader import DEFAULT_DICTIONARY, PhonemeDictionary
from verse_tune.core.phonemes import stress_pattern
from verse_tune.core.text import tokenize_line
from verse_tune.utils.observability import get_logger
from verse_tune.utils.syllables import estimate_stress_pattern

logger = get_logger(__name__)


@dataclass
class LineProsody:
    """Stress string for a line plus the words that were not in the dictionary."""

    text: str
    stress_pattern: str
    unknown_words: List[str] = field(default_factory=list)

    @property
    def syllable_count(self) -> int:
        return len(self.stress_pattern)


def line_prosody(line: str, dictionary: Optional[PhonemeDictionary] = None) -> LineProsody:
    """Concatenate the stress patterns of the words in ``line``.

    Words missing from the dictionary contribute a stress pattern guessed
    from their spelling.
    """

    if dictionary is None:
        dictionary = DEFAULT_DICTIONARY
    pattern: List[str] = []
    unknown: List[str] = []

    for token in tokenize_line(line):
        try:
            phonemes = dictionary.lookup(token.word)
        except Exception as exc:
            logger.warning(
                "Dictionary lookup failed",
                context={"word": token.word, "error": str(exc)},
            )
            phonemes = None

        word_pattern = stress_pattern(phonemes) if phonemes else ""
        if not word_pattern:
            unknown.append(token.word)
            word_pattern = estimate_stress_pattern(token.word)
        pattern.append(word_pattern)

    return LineProsody(text=line, stress_pattern="".join(pattern), unknown_words=unknown)


__all__ = ["LineProsody", "line_prosody"]
