"""Phonetic rhyme analysis for VerseTune."""

from .cmudict_loader import (
    DEFAULT_DICTIONARY,
    BasePronunciationDictionary,
    CMUDictLoader,
    PhonemeDictionary,
    PronouncingDictionary,
    load_dictionary,
)
from .internal import find_internal_rhymes
from .phonemes import (
    Stress,
    is_consonant,
    is_vowel,
    stress_of,
    strip_stress,
)
from .results import InternalRhyme, RhymeAnalysis, RhymeGroup, RhymeType
from .rhyme import (
    DEFAULT_CLASSIFIER,
    RhymeClassifier,
    classify_rhyme,
    do_words_rhyme,
    find_rhyming_words,
    is_perfect_rhyme,
    phonetic_similarity,
    rhyming_part,
)
from .scheme import RhymeSchemeDetector, analyze_rhymes, detect_rhyme_scheme
from .text import last_word, tokenize_line

__all__ = [
    "DEFAULT_DICTIONARY",
    "BasePronunciationDictionary",
    "CMUDictLoader",
    "PhonemeDictionary",
    "PronouncingDictionary",
    "load_dictionary",
    "find_internal_rhymes",
    "Stress",
    "is_consonant",
    "is_vowel",
    "stress_of",
    "strip_stress",
    "InternalRhyme",
    "RhymeAnalysis",
    "RhymeGroup",
    "RhymeType",
    "DEFAULT_CLASSIFIER",
    "RhymeClassifier",
    "classify_rhyme",
    "do_words_rhyme",
    "find_rhyming_words",
    "is_perfect_rhyme",
    "phonetic_similarity",
    "rhyming_part",
    "RhymeSchemeDetector",
    "analyze_rhymes",
    "detect_rhyme_scheme",
    "last_word",
    "tokenize_line",
]
