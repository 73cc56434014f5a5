import sys
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from verse_tune.core import RhymeClassifier

# Primary CMU pronunciations for the words the rhyme tests rely on.
SAMPLE_PRONUNCIATIONS = {
    "a": ["AH0"],
    "as": ["AE1", "Z"],
    "bad": ["B", "AE1", "D"],
    "batter": ["B", "AE1", "T", "ER0"],
    "be": ["B", "IY1"],
    "bed": ["B", "EH1", "D"],
    "bird": ["B", "ER1", "D"],
    "can": ["K", "AE1", "N"],
    "candor": ["K", "AE1", "N", "D", "ER0"],
    "cat": ["K", "AE1", "T"],
    "center": ["S", "EH1", "N", "T", "ER0"],
    "dog": ["D", "AO1", "G"],
    "funny": ["F", "AH1", "N", "IY0"],
    "happy": ["HH", "AE1", "P", "IY0"],
    "hat": ["HH", "AE1", "T"],
    "header": ["HH", "EH1", "D", "ER0"],
    "hello": ["HH", "AH0", "L", "OW1"],
    "in": ["IH0", "N"],
    "kit": ["K", "IH1", "T"],
    "love": ["L", "AH1", "V"],
    "mat": ["M", "AE1", "T"],
    "move": ["M", "UW1", "V"],
    "on": ["AA1", "N"],
    "sang": ["S", "AE1", "NG"],
    "sat": ["S", "AE1", "T"],
    "the": ["DH", "AH0"],
    "tree": ["T", "R", "IY1"],
    "understand": ["AH2", "N", "D", "ER0", "S", "T", "AE1", "N", "D"],
    "world": ["W", "ER1", "L", "D"],
    "wore": ["W", "AO1", "R"],
}


class StaticDictionary:
    """In-memory phoneme dictionary with deterministic contents."""

    def __init__(self, entries=None):
        self.entries = dict(SAMPLE_PRONUNCIATIONS if entries is None else entries)
        self.requests = []

    def lookup(self, word):
        self.requests.append(word)
        phones = self.entries.get(word.lower())
        return tuple(phones) if phones else None


@pytest.fixture
def static_dictionary():
    return StaticDictionary()


@pytest.fixture
def classifier(static_dictionary):
    return RhymeClassifier(static_dictionary)


@pytest.fixture
def cmudict_file(tmp_path):
    path = tmp_path / "cmudict.dict"
    lines = [";;; test dictionary"]
    for word, phones in SAMPLE_PRONUNCIATIONS.items():
        lines.append(f"{word.upper()}  {' '.join(phones)}")
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path
