"""Dataclasses describing the output of a rhyme analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple


class RhymeType(str, Enum):
    """Relationship between two words, best first.

    Perfect outranks slant, which outranks assonance and consonance (equal
    quality), which outrank none.
    """

    PERFECT = "perfect"
    SLANT = "slant"
    ASSONANCE = "assonance"
    CONSONANCE = "consonance"
    NONE = "none"

    @property
    def quality(self) -> int:
        return _QUALITY[self]

    @property
    def rhymes(self) -> bool:
        return self is not RhymeType.NONE


_QUALITY: Dict[RhymeType, int] = {
    RhymeType.PERFECT: 3,
    RhymeType.SLANT: 2,
    RhymeType.ASSONANCE: 1,
    RhymeType.CONSONANCE: 1,
    RhymeType.NONE: 0,
}

# Preference order used when ranking candidates; assonance is listed before
# consonance so sorting is stable and deterministic.
RHYME_TYPE_ORDER: Tuple[RhymeType, ...] = (
    RhymeType.PERFECT,
    RhymeType.SLANT,
    RhymeType.ASSONANCE,
    RhymeType.CONSONANCE,
    RhymeType.NONE,
)


@dataclass
class RhymeGroup:
    """Lines sharing a scheme letter."""

    label: str
    lines: List[int] = field(default_factory=list)
    rhyme_type: RhymeType = RhymeType.PERFECT
    end_words: List[str] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "label": self.label,
            "lines": list(self.lines),
            "rhyme_type": self.rhyme_type.value,
            "end_words": list(self.end_words),
        }


@dataclass(frozen=True)
class InternalRhyme:
    """Two rhyming words inside one line, located by character offset."""

    line: int
    positions: Tuple[int, int]
    words: Tuple[str, str]
    rhyme_type: RhymeType = RhymeType.PERFECT

    def as_dict(self) -> Dict[str, Any]:
        return {
            "line": self.line,
            "positions": list(self.positions),
            "words": list(self.words),
            "rhyme_type": self.rhyme_type.value,
        }


@dataclass
class RhymeAnalysis:
    """Scheme letters, groups keyed by label, and internal rhymes.

    ``labels`` holds one label per line. It agrees with ``scheme`` character
    for character until more than 26 groups force two-letter labels.
    """

    scheme: str
    labels: List[str] = field(default_factory=list)
    rhyme_groups: Dict[str, RhymeGroup] = field(default_factory=dict)
    internal_rhymes: List[InternalRhyme] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "scheme": self.scheme,
            "labels": list(self.labels),
            "rhyme_groups": {
                label: group.as_dict() for label, group in self.rhyme_groups.items()
            },
            "internal_rhymes": [rhyme.as_dict() for rhyme in self.internal_rhymes],
        }


__all__ = [
    "RhymeType",
    "RHYME_TYPE_ORDER",
    "RhymeGroup",
    "InternalRhyme",
    "RhymeAnalysis",
]
