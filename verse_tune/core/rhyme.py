"""Rhyme classification between pairs of words.

The classifier compares the *rhyming part* of each word (the phonemes from
its last meaningfully stressed vowel to the end) and buckets the pair as
perfect, assonance, consonance, slant or none.
"""

from __future__ import annotations

import threading
from collections import OrderedDict
from typing import Iterable, List, Optional, Sequence, Tuple

from verse_tune.utils.observability import StructuredLoggerAdapter, get_logger

from .cmudict_loader import DEFAULT_DICTIONARY, PhonemeDictionary
from .phonemes import (
    PhonemeSequence,
    Stress,
    consonant_sequence,
    is_consonant,
    is_vowel,
    normalize_phonemes,
    stress_of,
    vowel_bases,
)
from .results import RHYME_TYPE_ORDER, RhymeType

SLANT_SIMILARITY_THRESHOLD = 0.6
PARTIAL_VOWEL_SIMILARITY_THRESHOLD = 0.4

_MATCH_SCORE = 1.0
_SAME_CLASS_SCORE = 0.3
_LENGTH_PENALTY = 0.5


def _find_last(phonemes: Sequence[str], predicate) -> int:
    for index in range(len(phonemes) - 1, -1, -1):
        if predicate(phonemes[index]):
            return index
    return -1


def rhyming_part(phonemes: Sequence[str]) -> PhonemeSequence:
    """Return the phonemes from the rhyme-bearing vowel to the end of the word.

    The last primary-stressed vowel wins; failing that the last secondary
    stressed vowel; failing that the last vowel of any stress. Words without
    vowels have an empty rhyming part.

    >>> rhyming_part(("K", "AE1", "T"))
    ('AE1', 'T')
    >>> rhyming_part(("B", "Y", "UW1", "T", "IY0"))
    ('UW1', 'T', 'IY0')
    """

    if not phonemes:
        return ()

    index = _find_last(phonemes, lambda symbol: stress_of(symbol) is Stress.PRIMARY)
    if index < 0:
        index = _find_last(
            phonemes, lambda symbol: stress_of(symbol) is Stress.SECONDARY
        )
    if index < 0:
        index = _find_last(phonemes, is_vowel)
    if index < 0:
        return ()
    return tuple(phonemes[index:])


def _same_class(first: str, second: str) -> bool:
    return (is_vowel(first) and is_vowel(second)) or (
        is_consonant(first) and is_consonant(second)
    )


def phonetic_similarity(first: Sequence[str], second: Sequence[str]) -> float:
    """Score how alike two phoneme sequences sound, in ``[0, 1]``.

    Symbols are compared position by position after stress is removed: an
    identical symbol earns 1.0, a vowel/vowel or consonant/consonant mismatch
    earns 0.3. Every phoneme by which the lengths differ costs 0.5, and the
    total is divided by the longer length.
    """

    if not first or not second:
        return 0.0

    norm_first = normalize_phonemes(first)
    norm_second = normalize_phonemes(second)
    max_len = max(len(norm_first), len(norm_second))
    min_len = min(len(norm_first), len(norm_second))

    score = 0.0
    for left, right in zip(norm_first, norm_second):
        if left == right:
            score += _MATCH_SCORE
        elif _same_class(left, right):
            score += _SAME_CLASS_SCORE

    score = max(0.0, score - (max_len - min_len) * _LENGTH_PENALTY)
    return score / max_len


def compare_rhyming_parts(first: Sequence[str], second: Sequence[str]) -> RhymeType:
    """Classify two already extracted rhyming parts."""

    if not first or not second:
        return RhymeType.NONE

    if normalize_phonemes(first) == normalize_phonemes(second):
        return RhymeType.PERFECT

    vowels_first = vowel_bases(first)
    vowels_second = vowel_bases(second)
    consonants_first = consonant_sequence(first)
    consonants_second = consonant_sequence(second)

    vowels_match = vowels_first == vowels_second
    consonants_match = consonants_first == consonants_second

    if vowels_match and not consonants_match and vowels_first:
        return RhymeType.ASSONANCE
    if consonants_match and not vowels_match and consonants_first:
        return RhymeType.CONSONANCE

    similarity = phonetic_similarity(first, second)
    if similarity >= SLANT_SIMILARITY_THRESHOLD:
        return RhymeType.SLANT

    shared_vowel = any(vowel in vowels_second for vowel in vowels_first)
    if shared_vowel and similarity >= PARTIAL_VOWEL_SIMILARITY_THRESHOLD:
        return RhymeType.SLANT

    return RhymeType.NONE


class RhymeClassifier:
    """Classifies word pairs using a swappable phoneme dictionary."""

    def __init__(
        self,
        dictionary: Optional[PhonemeDictionary] = None,
        *,
        logger: Optional[StructuredLoggerAdapter] = None,
        max_cache_entries: int = 2048,
    ) -> None:
        self.dictionary = dictionary if dictionary is not None else DEFAULT_DICTIONARY
        self._logger = logger or get_logger(__name__).bind(component="rhyme_classifier")
        self._cache_lock = threading.RLock()
        self._max_cache_entries = max_cache_entries
        self._lookup_cache: OrderedDict[str, PhonemeSequence] = OrderedDict()

    # Dictionary access -----------------------------------------------------
    def lookup(self, word: str) -> Optional[PhonemeSequence]:
        """Return phonemes for ``word`` (lowercased), ``None`` when unknown.

        A dictionary that raises is treated as not knowing the word. Misses
        are not cached, so a backend that loads later is asked again.
        """

        normalized = (word or "").strip().lower()
        if not normalized:
            return None

        with self._cache_lock:
            if normalized in self._lookup_cache:
                self._lookup_cache.move_to_end(normalized)
                return self._lookup_cache[normalized]

        try:
            found = self.dictionary.lookup(normalized)
        except Exception as exc:
            self._logger.warning(
                "Dictionary lookup failed",
                context={"word": normalized, "error": str(exc)},
            )
            found = None
        if not found:
            return None
        phonemes = tuple(found)

        with self._cache_lock:
            self._lookup_cache[normalized] = phonemes
            while len(self._lookup_cache) > max(self._max_cache_entries, 0):
                self._lookup_cache.popitem(last=False)
        return phonemes

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._lookup_cache.clear()

    # Classification ----------------------------------------------------------
    def classify(self, word1: str, word2: str) -> RhymeType:
        """Classify the rhyme between ``word1`` and ``word2``."""

        phonemes1 = self.lookup(word1)
        phonemes2 = self.lookup(word2)
        if phonemes1 is None or phonemes2 is None:
            self._logger.debug(
                "Word not in dictionary",
                context={"word1": word1, "word2": word2},
            )
            return RhymeType.NONE

        result = compare_rhyming_parts(rhyming_part(phonemes1), rhyming_part(phonemes2))
        self._logger.debug(
            "Classified rhyme",
            context={"word1": word1, "word2": word2, "rhyme_type": result.value},
        )
        return result

    def is_perfect_rhyme(self, word1: str, word2: str) -> bool:
        return self.classify(word1, word2) is RhymeType.PERFECT

    def do_words_rhyme(self, word1: str, word2: str) -> bool:
        return self.classify(word1, word2) is not RhymeType.NONE

    def find_rhyming_words(
        self,
        target: str,
        candidates: Iterable[str],
        min_type: RhymeType = RhymeType.SLANT,
    ) -> List[Tuple[str, RhymeType]]:
        """Return candidates rhyming with ``target`` at ``min_type`` or better.

        Ordering follows perfect, slant, assonance, consonance; ties keep the
        order of ``candidates``. The target itself is skipped.
        """

        min_rank = RHYME_TYPE_ORDER.index(min_type)
        target_normalized = (target or "").lower()
        matches: List[Tuple[str, RhymeType]] = []
        for candidate in candidates:
            if candidate.lower() == target_normalized:
                continue
            rhyme_type = self.classify(target, candidate)
            if rhyme_type is RhymeType.NONE:
                continue
            if RHYME_TYPE_ORDER.index(rhyme_type) <= min_rank:
                matches.append((candidate, rhyme_type))

        matches.sort(key=lambda item: RHYME_TYPE_ORDER.index(item[1]))
        return matches


DEFAULT_CLASSIFIER = RhymeClassifier()


def _classifier(dictionary: Optional[PhonemeDictionary]) -> RhymeClassifier:
    if dictionary is None:
        return DEFAULT_CLASSIFIER
    return RhymeClassifier(dictionary)


def classify_rhyme(
    word1: str,
    word2: str,
    dictionary: Optional[PhonemeDictionary] = None,
) -> RhymeType:
    """Classify the rhyme between two words (case-insensitive)."""

    return _classifier(dictionary).classify(word1, word2)


def is_perfect_rhyme(
    word1: str, word2: str, dictionary: Optional[PhonemeDictionary] = None
) -> bool:
    return _classifier(dictionary).is_perfect_rhyme(word1, word2)


def do_words_rhyme(
    word1: str, word2: str, dictionary: Optional[PhonemeDictionary] = None
) -> bool:
    return _classifier(dictionary).do_words_rhyme(word1, word2)


def find_rhyming_words(
    target: str,
    candidates: Iterable[str],
    min_type: RhymeType = RhymeType.SLANT,
    dictionary: Optional[PhonemeDictionary] = None,
) -> List[Tuple[str, RhymeType]]:
    return _classifier(dictionary).find_rhyming_words(target, candidates, min_type)


__all__ = [
    "SLANT_SIMILARITY_THRESHOLD",
    "PARTIAL_VOWEL_SIMILARITY_THRESHOLD",
    "rhyming_part",
    "phonetic_similarity",
    "compare_rhyming_parts",
    "RhymeClassifier",
    "DEFAULT_CLASSIFIER",
    "classify_rhyme",
    "is_perfect_rhyme",
    "do_words_rhyme",
    "find_rhyming_words",
]
