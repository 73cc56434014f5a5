"""Detection of rhymes between words of the same line."""

from __future__ import annotations

from typing import List, Optional

from .rhyme import DEFAULT_CLASSIFIER, RhymeClassifier
from .results import InternalRhyme, RhymeType
from .text import tokenize_line


def find_internal_rhymes(
    line: str,
    line_number: int = 0,
    classifier: Optional[RhymeClassifier] = None,
) -> List[InternalRhyme]:
    """Return rhyming word pairs inside ``line``.

    Every pair of tokens with different words is considered, except that a
    pair ending on the line's last word only counts when it starts at the
    first word. Rhymes with the end word are otherwise left to the scheme.
    """

    if classifier is None:
        classifier = DEFAULT_CLASSIFIER
    tokens = tokenize_line(line)
    if len(tokens) < 2:
        return []

    last_position = tokens[-1].position
    found: List[InternalRhyme] = []

    for i, first in enumerate(tokens):
        for second in tokens[i + 1 :]:
            if first.position == last_position and second.position == last_position:
                continue
            if first.word == second.word:
                continue
            if second.position == last_position and i > 0:
                continue

            rhyme_type = classifier.classify(first.word, second.word)
            if rhyme_type is RhymeType.NONE:
                continue
            found.append(
                InternalRhyme(
                    line=line_number,
                    positions=(first.position, second.position),
                    words=(first.word, second.word),
                    rhyme_type=rhyme_type,
                )
            )

    return found


__all__ = ["find_internal_rhymes"]
