import pronouncing

from verse_tune.core import (
    DEFAULT_DICTIONARY,
    CMUDictLoader,
    PhonemeDictionary,
    PronouncingDictionary,
    load_dictionary,
)


def test_cmudict_loader_reads_entries_and_variants(tmp_path):
    dict_path = tmp_path / "cmudict.dict"
    dict_path.write_text(
        ";;; comment line\n"
        "READ  R IY1 D\n"
        "READ(2)  R EH1 D\n"
        "HELLO  HH AH0 L OW1\n",
        encoding="utf-8",
    )
    loader = CMUDictLoader(dict_path)

    assert loader.get_pronunciations("read") == [["R", "IY1", "D"], ["R", "EH1", "D"]]
    assert loader.lookup("READ") == ("R", "IY1", "D")
    assert loader.lookup("missing") is None
    assert loader.stress_pattern("hello") == "01"
    assert loader.syllable_count("hello") == 2
    assert loader.has_word("hello")


def test_cmudict_loader_retries_after_file_creation(tmp_path):
    dict_path = tmp_path / "cmudict.dict"
    loader = CMUDictLoader(dict_path=dict_path)

    # A missing file leaves the loader unloaded so later lookups retry.
    assert loader.get_pronunciations("test") == []
    assert loader._loaded is False
    assert loader._pronunciations == {}

    dict_path.write_text("TEST  T EH1 S T\n", encoding="utf-8")

    assert loader.get_pronunciations("test") == [["T", "EH1", "S", "T"]]
    assert loader._loaded is True


def test_load_dictionary_selects_backend(tmp_path):
    assert load_dictionary() is DEFAULT_DICTIONARY
    assert isinstance(load_dictionary(tmp_path / "words.dict"), CMUDictLoader)


def test_pronouncing_dictionary_matches_library():
    dictionary = PronouncingDictionary()

    expected = pronouncing.phones_for_word("cat")[0].split()
    assert list(dictionary.lookup("Cat")) == expected
    assert dictionary.lookup("") is None
    assert isinstance(dictionary, PhonemeDictionary)
