from verse_tune.core import Stress, is_consonant, is_vowel, stress_of, strip_stress
from verse_tune.core.phonemes import count_vowels, stress_pattern, vowel_bases


def test_vowels_are_recognised_with_or_without_stress_digits():
    assert is_vowel("AE1")
    assert is_vowel("AE")
    assert is_vowel("ER0")
    assert not is_vowel("T")
    assert not is_vowel("HH")


def test_consonants_match_exact_symbols():
    assert is_consonant("NG")
    assert is_consonant("ZH")
    assert not is_consonant("AE1")
    assert not is_consonant("Q")


def test_stress_of_reads_vowel_digits():
    assert stress_of("AE1") is Stress.PRIMARY
    assert stress_of("AH2") is Stress.SECONDARY
    assert stress_of("IY0") is Stress.NONE
    assert stress_of("AE") is Stress.NONE
    assert stress_of("T") is Stress.NONE


def test_strip_stress_removes_only_trailing_digit():
    assert strip_stress("OW1") == "OW"
    assert strip_stress("K") == "K"


def test_stress_pattern_and_vowel_helpers():
    hello = ("HH", "AH0", "L", "OW1")

    assert stress_pattern(hello) == "01"
    assert vowel_bases(hello) == ["AH", "OW"]
    assert count_vowels(hello) == 2
