"""Rhyme scheme detection over the end words of a poem's lines.

Grouping is greedy: each end word joins the first existing group holding
*any* word it rhymes with. Because rhyme is not transitive a group's members
need not all rhyme pairwise, so groups are kept as explicit objects with
their accumulated end words rather than derived from a pairwise relation.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from verse_tune.utils.observability import get_logger

from .internal import find_internal_rhymes
from .results import InternalRhyme, RhymeAnalysis, RhymeGroup, RhymeType
from .rhyme import DEFAULT_CLASSIFIER, RhymeClassifier
from .text import last_word

_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"

logger = get_logger(__name__)


def scheme_label(index: int) -> str:
    """Label for the ``index``-th group: A..Z, then AA, AB, ... like sheet columns."""

    if index < 0:
        raise ValueError("group index must be non-negative")
    label = ""
    index += 1
    while index:
        index, remainder = divmod(index - 1, 26)
        label = _ALPHABET[remainder] + label
    return label


def iter_labels() -> Iterator[str]:
    index = 0
    while True:
        yield scheme_label(index)
        index += 1


class RhymeSchemeDetector:
    """Assigns scheme letters to lines using a :class:`RhymeClassifier`."""

    def __init__(self, classifier: Optional[RhymeClassifier] = None) -> None:
        self.classifier = classifier if classifier is not None else DEFAULT_CLASSIFIER

    def _matching_group(self, word: str, groups: Iterable[RhymeGroup]) -> Optional[RhymeGroup]:
        for group in groups:
            for member in group.end_words:
                if not member:
                    continue
                if self.classifier.classify(word, member) is not RhymeType.NONE:
                    return group
        return None

    def group_lines(self, lines: Iterable[str]) -> Tuple[List[str], List[RhymeGroup]]:
        """Return per-line labels and the groups in creation order."""

        labels = iter_labels()
        groups: List[RhymeGroup] = []
        line_labels: List[str] = []

        for index, line in enumerate(lines or ()):
            word = last_word(line)
            group = self._matching_group(word, groups) if word else None
            if group is None:
                group = RhymeGroup(label=next(labels))
                groups.append(group)
            group.lines.append(index)
            group.end_words.append(word)
            line_labels.append(group.label)

        for group in groups:
            group.rhyme_type = self._group_rhyme_type(group)

        return line_labels, groups

    def _group_rhyme_type(self, group: RhymeGroup) -> RhymeType:
        if len(group.end_words) < 2:
            return RhymeType.PERFECT
        first, second = group.end_words[0], group.end_words[1]
        rhyme_type = self.classifier.classify(first, second)
        if rhyme_type is RhymeType.NONE:
            # Joined through another member; the first two need not rhyme.
            return RhymeType.SLANT
        return rhyme_type

    def detect(self, lines: Iterable[str]) -> str:
        line_labels, _ = self.group_lines(lines)
        return "".join(line_labels)

    def analyze(self, lines: Iterable[str]) -> RhymeAnalysis:
        """Scheme, labelled groups and internal rhymes for ``lines``."""

        lines = list(lines or ())
        if not lines:
            return RhymeAnalysis(scheme="")

        line_labels, groups = self.group_lines(lines)
        internal: List[InternalRhyme] = []
        for index, line in enumerate(lines):
            internal.extend(find_internal_rhymes(line, index, self.classifier))

        rhyme_groups: Dict[str, RhymeGroup] = {group.label: group for group in groups}
        analysis = RhymeAnalysis(
            scheme="".join(line_labels),
            labels=line_labels,
            rhyme_groups=rhyme_groups,
            internal_rhymes=internal,
        )
        logger.debug(
            "Rhyme analysis complete",
            context={
                "lines": len(lines),
                "scheme": analysis.scheme,
                "internal_rhymes": len(internal),
            },
        )
        return analysis


def detect_rhyme_scheme(
    lines: Iterable[str],
    classifier: Optional[RhymeClassifier] = None,
) -> str:
    """Return the rhyme scheme of ``lines``, e.g. ``"ABAB"``."""

    return RhymeSchemeDetector(classifier).detect(lines)


def analyze_rhymes(
    lines: Iterable[str],
    classifier: Optional[RhymeClassifier] = None,
) -> RhymeAnalysis:
    return RhymeSchemeDetector(classifier).analyze(lines)


__all__ = [
    "scheme_label",
    "iter_labels",
    "RhymeSchemeDetector",
    "detect_rhyme_scheme",
    "analyze_rhymes",
]
