import pytest

from verse_tune.core import (
    RhymeClassifier,
    RhymeSchemeDetector,
    RhymeType,
    analyze_rhymes,
    detect_rhyme_scheme,
    last_word,
)
from verse_tune.core.scheme import scheme_label

POEM = [
    "The cat sat on the mat",
    "The dog wore a funny hat",
    "The bird sang in the tree",
    "As happy as can be",
]


def test_detect_rhyme_scheme_couplets(classifier):
    assert detect_rhyme_scheme(POEM, classifier) == "AABB"


def test_detect_rhyme_scheme_with_bundled_dictionary():
    assert detect_rhyme_scheme(POEM) == "AABB"
    assert detect_rhyme_scheme(["Hello world"]) == "A"


def test_analyze_rhymes_builds_groups(classifier):
    analysis = analyze_rhymes(POEM, classifier)

    assert analysis.scheme == "AABB"
    assert analysis.labels == ["A", "A", "B", "B"]
    assert set(analysis.rhyme_groups) == {"A", "B"}
    group_a = analysis.rhyme_groups["A"]
    assert group_a.lines == [0, 1]
    assert group_a.end_words == ["mat", "hat"]
    assert group_a.rhyme_type is RhymeType.PERFECT
    assert analysis.rhyme_groups["B"].lines == [2, 3]


def test_lines_may_be_a_generator(classifier):
    analysis = analyze_rhymes((line for line in POEM), classifier)

    assert analysis.scheme == "AABB"
    assert analysis.rhyme_groups["B"].end_words == ["tree", "be"]
    assert detect_rhyme_scheme(iter(POEM), classifier) == "AABB"


def test_analyze_rhymes_empty_input(classifier):
    analysis = analyze_rhymes([], classifier)

    assert analysis.scheme == ""
    assert analysis.rhyme_groups == {}
    assert analysis.internal_rhymes == []


def test_every_line_is_labelled(classifier):
    lines = ["A cat", "", "A hat", "One zzyzx"]
    analysis = analyze_rhymes(lines, classifier)

    assert len(analysis.scheme) == len(lines)
    assert analysis.scheme == "ABAC"
    assert analysis.rhyme_groups["B"].end_words == [""]


def test_groups_are_not_required_to_be_transitive(classifier):
    # "bed" only reaches the group through "bad".
    analysis = analyze_rhymes(["my cat", "so bad", "in bed"], classifier)

    assert analysis.scheme == "AAA"
    assert classifier.classify("cat", "bed") is RhymeType.NONE
    assert analysis.rhyme_groups["A"].rhyme_type is RhymeType.ASSONANCE


def test_group_type_falls_back_to_slant_when_first_pair_does_not_rhyme():
    class OneWayClassifier(RhymeClassifier):
        def classify(self, word1, word2):
            if (word1, word2) == ("hat", "cat"):
                return RhymeType.PERFECT
            return RhymeType.NONE

    detector = RhymeSchemeDetector(OneWayClassifier(dictionary=object()))
    analysis = detector.analyze(["cat", "hat"])

    assert analysis.scheme == "AA"
    assert analysis.rhyme_groups["A"].rhyme_type is RhymeType.SLANT


def test_labels_continue_past_z(classifier):
    lines = [f"word {chr(ord('a') + i // 26)}{chr(ord('a') + i % 26)}zq" for i in range(28)]
    analysis = analyze_rhymes(lines, classifier)

    assert analysis.labels[:2] == ["A", "B"]
    assert analysis.labels[25:] == ["Z", "AA", "AB"]
    assert len(analysis.labels) == len(lines)


@pytest.mark.parametrize(
    "index, label",
    [(0, "A"), (25, "Z"), (26, "AA"), (27, "AB"), (51, "AZ"), (52, "BA"), (701, "ZZ"), (702, "AAA")],
)
def test_scheme_label(index, label):
    assert scheme_label(index) == label


def test_last_word_strips_punctuation():
    assert last_word("Whose woods these are, I think I know.") == "know"
    assert last_word("Rock 'n' roll!!") == "roll"
    assert last_word("   ") == ""
    assert last_word("It's") == "it's"


def test_analysis_as_dict_is_serialisable(classifier):
    payload = analyze_rhymes(POEM, classifier).as_dict()

    assert payload["scheme"] == "AABB"
    assert payload["rhyme_groups"]["A"]["rhyme_type"] == "perfect"
    assert payload["internal_rhymes"][0]["words"] == ["cat", "sat"]
