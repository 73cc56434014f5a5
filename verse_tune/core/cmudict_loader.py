"""Phoneme dictionaries backed by the CMU pronouncing dictionary.

Rhyme classification only needs ``lookup(word)``; anything providing that
method satisfies :class:`PhonemeDictionary` and can be swapped in for a
different lexicon or locale.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Tuple, runtime_checkable

import pronouncing

from verse_tune.utils.observability import get_logger

from .phonemes import PhonemeSequence, count_vowels, stress_pattern

_WORD_VARIANT_PATTERN = re.compile(r"\(\d+\)$")

logger = get_logger(__name__)


def _normalize_word(word: str) -> str:
    return word.strip().lower() if word else ""


def _strip_variant(word: str) -> str:
    return _normalize_word(_WORD_VARIANT_PATTERN.sub("", word))


@runtime_checkable
class PhonemeDictionary(Protocol):
    """Read-only word to phoneme lookup."""

    def lookup(self, word: str) -> Optional[PhonemeSequence]:
        """Return the primary pronunciation of ``word`` or ``None``."""


class BasePronunciationDictionary:
    """Word-level helpers derived from ``get_pronunciations``."""

    def get_pronunciations(self, word: str) -> List[List[str]]:  # pragma: no cover - abstract
        raise NotImplementedError

    def lookup(self, word: str) -> Optional[PhonemeSequence]:
        pronunciations = self.get_pronunciations(word)
        if not pronunciations:
            logger.debug("Word not found", context={"word": word})
            return None
        return tuple(pronunciations[0])

    def has_word(self, word: str) -> bool:
        return bool(self.get_pronunciations(word))

    def stress_pattern(self, word: str) -> Optional[str]:
        """Stress digits of ``word``'s primary pronunciation, e.g. ``"01"``."""

        phonemes = self.lookup(word)
        if phonemes is None:
            return None
        return stress_pattern(phonemes)

    def syllable_count(self, word: str) -> Optional[int]:
        phonemes = self.lookup(word)
        if phonemes is None:
            return None
        return count_vowels(phonemes)


class CMUDictLoader(BasePronunciationDictionary):
    """Lazy loader for a cmudict-format file (``WORD  PH1 PH2 ...`` per line)."""

    def __init__(self, dict_path: Path | str) -> None:
        self.dict_path: Path = Path(dict_path)
        self._pronunciations: Dict[str, Tuple[Tuple[str, ...], ...]] = {}
        self._loaded: bool = False

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return

        if not self.dict_path.exists():
            return

        pronunciations: Dict[str, List[Tuple[str, ...]]] = {}

        try:
            with self.dict_path.open("r", encoding="utf-8") as handle:
                for line in handle:
                    entry = line.strip()
                    if not entry or entry.startswith(";;;"):
                        continue

                    parts = entry.split()
                    if len(parts) < 2:
                        continue

                    raw_word, *phones = parts
                    word = _strip_variant(raw_word)
                    if not word:
                        continue

                    pronunciations.setdefault(word, []).append(tuple(phones))
        except (OSError, UnicodeDecodeError) as exc:
            # Unreadable dictionaries behave like empty ones; retry on next lookup.
            logger.warning(
                "Dictionary could not be read",
                context={"path": str(self.dict_path), "error": str(exc)},
            )
            return

        self._pronunciations = {
            word: tuple(entries) for word, entries in pronunciations.items()
        }
        self._loaded = True
        logger.info(
            "Dictionary loaded",
            context={"path": str(self.dict_path), "words": len(self._pronunciations)},
        )

    def get_pronunciations(self, word: str) -> List[List[str]]:
        self._ensure_loaded()
        stored = self._pronunciations.get(_normalize_word(word), ())
        return [list(entry) for entry in stored]


class PronouncingDictionary(BasePronunciationDictionary):
    """Dictionary backed by the CMU data bundled with ``pronouncing``."""

    def get_pronunciations(self, word: str) -> List[List[str]]:
        normalized = _normalize_word(word)
        if not normalized:
            return []
        return [phones.split() for phones in pronouncing.phones_for_word(normalized)]


DEFAULT_DICTIONARY = PronouncingDictionary()


def load_dictionary(dict_path: Optional[Path | str] = None) -> BasePronunciationDictionary:
    """Return a file-backed dictionary for ``dict_path`` or the bundled default."""

    if dict_path:
        return CMUDictLoader(dict_path)
    return DEFAULT_DICTIONARY


__all__ = [
    "PhonemeDictionary",
    "CMUDictLoader",
    "PronouncingDictionary",
    "DEFAULT_DICTIONARY",
    "load_dictionary",
    "BasePronunciationDictionary",
]
