import pytest

from verse_tune.melody import line_prosody
from verse_tune.utils.syllables import estimate_stress_pattern, estimate_syllable_count


class MapDictionary(dict):
    """Mapping-backed dictionary; empty unless seeded."""

    def lookup(self, word):
        return self.get(word)


def test_line_prosody_concatenates_word_stress(static_dictionary):
    prosody = line_prosody("The cat sat", static_dictionary)

    assert prosody.stress_pattern == "011"
    assert prosody.syllable_count == 3
    assert prosody.unknown_words == []


def test_unknown_words_get_estimated_stress(static_dictionary):
    prosody = line_prosody("Hello zzyzx", static_dictionary)

    assert prosody.stress_pattern == "011"
    assert prosody.unknown_words == ["zzyzx"]


def test_unknown_monosyllable_is_stressed(static_dictionary):
    prosody = line_prosody("zzyzx", static_dictionary)

    assert prosody.stress_pattern == "1"


def test_unknown_suffix_words_follow_stress_rules(static_dictionary):
    prosody = line_prosody("nation computation", static_dictionary)

    assert prosody.stress_pattern == "10" + "0010"
    assert prosody.unknown_words == ["nation", "computation"]


def test_empty_injected_dictionary_is_used():
    prosody = line_prosody("hello", MapDictionary())

    assert prosody.unknown_words == ["hello"]


def test_dictionary_errors_fall_back_to_estimates(caplog):
    class BrokenDictionary:
        def lookup(self, word):
            raise KeyError(word)

    prosody = line_prosody("little", BrokenDictionary())

    assert prosody.stress_pattern == "10"
    assert any("Dictionary lookup failed" in record.message for record in caplog.records)


def test_estimate_syllable_count():
    assert estimate_syllable_count("cat") == 1
    assert estimate_syllable_count("little") == 2
    assert estimate_syllable_count("make") == 1
    assert estimate_syllable_count("rhythm") == 1
    assert estimate_syllable_count("table") == 2
    assert estimate_syllable_count("walked") == 1
    assert estimate_syllable_count("wanted") == 2
    assert estimate_syllable_count("don't") == 1
    assert estimate_syllable_count("") == 1


@pytest.mark.parametrize(
    "word, expected",
    [
        ("", ""),
        ("cat", "1"),
        ("nation", "10"),
        ("computation", "0010"),
        ("machine", "01"),
        ("bamboo", "01"),
        ("little", "10"),
        ("happiness", "100"),
        ("reconsider", "0010"),
    ],
)
def test_estimate_stress_pattern(word, expected):
    assert estimate_stress_pattern(word) == expected
