"""ARPAbet phoneme primitives shared by the rhyme and melody pipelines."""

from __future__ import annotations

import re
from enum import Enum
from typing import FrozenSet, List, Sequence, Tuple

PhonemeSequence = Tuple[str, ...]

VOWEL_PHONEMES: FrozenSet[str] = frozenset(
    {
        "AA",
        "AE",
        "AH",
        "AO",
        "AW",
        "AY",
        "EH",
        "ER",
        "EY",
        "IH",
        "IY",
        "OW",
        "OY",
        "UH",
        "UW",
    }
)

CONSONANT_PHONEMES: FrozenSet[str] = frozenset(
    {
        "B",
        "CH",
        "D",
        "DH",
        "F",
        "G",
        "HH",
        "JH",
        "K",
        "L",
        "M",
        "N",
        "NG",
        "P",
        "R",
        "S",
        "SH",
        "T",
        "TH",
        "V",
        "W",
        "Y",
        "Z",
        "ZH",
    }
)

_STRESS_SUFFIX = re.compile(r"[012]$")


class Stress(Enum):
    """Lexical stress carried by a vowel phoneme."""

    NONE = "0"
    PRIMARY = "1"
    SECONDARY = "2"


def strip_stress(symbol: str) -> str:
    """Return ``symbol`` without its trailing stress digit."""

    return _STRESS_SUFFIX.sub("", symbol)


def is_vowel(symbol: str) -> bool:
    return strip_stress(symbol) in VOWEL_PHONEMES


def is_consonant(symbol: str) -> bool:
    # Consonants never carry a stress digit, so no stripping here.
    return symbol in CONSONANT_PHONEMES


def stress_of(symbol: str) -> Stress:
    """Return the stress level of a vowel; consonants are always unstressed."""

    if not is_vowel(symbol):
        return Stress.NONE
    match = _STRESS_SUFFIX.search(symbol)
    if match is None:
        return Stress.NONE
    return Stress(match.group(0))


def normalize_phonemes(phonemes: Sequence[str]) -> List[str]:
    """Strip stress from every symbol in ``phonemes``."""

    return [strip_stress(symbol) for symbol in phonemes]


def vowel_bases(phonemes: Sequence[str]) -> List[str]:
    """Vowels of ``phonemes`` in order, stress removed."""

    return [strip_stress(symbol) for symbol in phonemes if is_vowel(symbol)]


def consonant_sequence(phonemes: Sequence[str]) -> List[str]:
    return [symbol for symbol in phonemes if is_consonant(symbol)]


def stress_pattern(phonemes: Sequence[str]) -> str:
    """Concatenate the stress digits of the vowels in ``phonemes``.

    ``("HH", "AH0", "L", "OW1")`` gives ``"01"``. Vowels written without a
    digit are skipped, matching the dictionary convention that only stressed
    forms count as syllable nuclei with a known stress.
    """

    digits = []
    for symbol in phonemes:
        if not is_vowel(symbol):
            continue
        match = _STRESS_SUFFIX.search(symbol)
        if match is not None:
            digits.append(match.group(0))
    return "".join(digits)


def count_vowels(phonemes: Sequence[str]) -> int:
    return sum(1 for symbol in phonemes if is_vowel(symbol))


__all__ = [
    "PhonemeSequence",
    "VOWEL_PHONEMES",
    "CONSONANT_PHONEMES",
    "Stress",
    "strip_stress",
    "is_vowel",
    "is_consonant",
    "stress_of",
    "normalize_phonemes",
    "vowel_bases",
    "consonant_sequence",
    "stress_pattern",
    "count_vowels",
]
