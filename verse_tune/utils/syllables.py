"""Spelling-based syllable and stress estimates for words missing from the dictionary."""

from __future__ import annotations

import re

_LETTERS = re.compile(r"[^a-z]")
_VOWEL_GROUPS = re.compile(r"[aeiouy]+")
_VOWELS = "aeiouy"


def estimate_syllable_count(word: str) -> int:
    """Count vowel groups in ``word``, discounting common silent endings.

    A final ``e`` is silent except in a consonant + ``le`` ending ("table"),
    and ``ed`` is silent unless it follows ``t`` or ``d`` ("walked" but
    "wanted"). Every word has at least one syllable.

    >>> estimate_syllable_count("walked"), estimate_syllable_count("wanted")
    (1, 2)
    """

    letters = _LETTERS.sub("", (word or "").lower())
    count = len(_VOWEL_GROUPS.findall(letters))
    if count <= 1:
        return 1

    if letters.endswith("ed") and len(letters) > 2 and letters[-3] not in "td":
        count -= 1
    elif letters.endswith("e"):
        consonant_le = (
            letters.endswith("le") and len(letters) > 2 and letters[-3] not in _VOWELS
        )
        if not consonant_le:
            count -= 1

    return max(1, count)


# (suffix, syllables in the suffix, syllables between it and the stress)
_STRESS_SHIFTING_SUFFIXES = (
    ("tion", 1, 1),
    ("sion", 1, 1),
    ("cian", 1, 1),
    ("tian", 1, 1),
    ("ical", 2, 2),
    ("ic", 1, 1),
    ("ity", 2, 1),
    ("ety", 2, 1),
    ("ious", 2, 1),
    ("eous", 2, 1),
    ("ian", 1, 1),
    ("ual", 2, 1),
    ("ology", 3, 2),
    ("ography", 3, 2),
    ("ation", 2, 1),
)

# A zero-syllable match ("s", "ed") still ends the search.
_UNSTRESSED_SUFFIXES = (
    ("ing", 1),
    ("ed", 0),
    ("es", 0),
    ("s", 0),
    ("ly", 1),
    ("ful", 1),
    ("less", 1),
    ("ness", 1),
    ("ment", 1),
    ("able", 2),
    ("ible", 2),
    ("ous", 1),
    ("ive", 1),
    ("er", 1),
    ("or", 1),
    ("en", 1),
    ("al", 1),
    ("ary", 2),
    ("ery", 2),
    ("ory", 2),
)

_UNSTRESSED_PREFIXES = (
    "un", "re", "de", "dis", "mis", "pre", "pro", "in", "im", "il", "ir",
    "en", "em", "non", "sub", "super", "anti", "auto", "bi", "co", "ex",
    "inter", "multi", "out", "over", "post", "semi", "trans", "under",
)

_FINAL_STRESS = re.compile(r"(oo|ee|ine|ade|ete|ute|ique)$")


def _stressed_at(count: int, position: int) -> str:
    return "".join("1" if index == position else "0" for index in range(count))


def _prefix_syllables(letters: str) -> int:
    for prefix in _UNSTRESSED_PREFIXES:
        if letters.startswith(prefix) and len(letters) > len(prefix):
            return estimate_syllable_count(prefix)
    return 0


def estimate_stress_pattern(word: str) -> str:
    """Guess a ``0``/``1`` stress string for a word the dictionary lacks.

    Exactly one syllable is stressed. Suffixes such as ``-tion`` pull the
    stress onto the syllable before them; two-syllable words default to
    initial stress unless they end like "bamboo" or "machine"; longer words
    skip unstressed prefixes and suffixes and otherwise stress the
    antepenult.

    >>> estimate_stress_pattern("nation"), estimate_stress_pattern("machine")
    ('10', '01')
    """

    letters = _LETTERS.sub("", (word or "").lower())
    if not letters:
        return ""

    count = estimate_syllable_count(letters)
    if count == 1:
        return "1"

    for suffix, syllables, before in _STRESS_SHIFTING_SUFFIXES:
        if letters.endswith(suffix):
            position = count - syllables - before
            if position >= 0:
                return _stressed_at(count, position)
            break

    if count == 2:
        return "01" if _FINAL_STRESS.search(letters) else "10"

    prefix_length = _prefix_syllables(letters)
    for suffix, syllables in _UNSTRESSED_SUFFIXES:
        if letters.endswith(suffix):
            position = count - syllables - 1
            if syllables > 0 and position >= 0 and position >= prefix_length:
                return _stressed_at(count, position)
            break

    if count - 3 >= prefix_length:
        return _stressed_at(count, count - 3)
    if prefix_length < count - 1:
        return _stressed_at(count, prefix_length)
    return _stressed_at(count, count - 2)


__all__ = ["estimate_syllable_count", "estimate_stress_pattern"]
