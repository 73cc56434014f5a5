"""Pitch model and its ABC-style token encoding.

Internally a pitch is a natural letter plus a signed octave, octave 0 being
the reference octave that starts at middle C. Tokens are only produced and
consumed at the API boundary:

==========  ======
octave      token
==========  ======
0           ``C``
1           ``c``
2           ``c'``
-1          ``C,``
-2          ``C,,``
==========  ======
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Tuple, Union

from verse_tune.exceptions import InvalidPitchError

NATURAL_LETTERS: Tuple[str, ...] = ("C", "D", "E", "F", "G", "A", "B")
STEPS_PER_OCTAVE = len(NATURAL_LETTERS)

_OCTAVE_UP = "'"
_OCTAVE_DOWN = ","


def js_round(value: float) -> int:
    """Round halves towards positive infinity (``2.5 -> 3``, ``-2.5 -> -2``)."""

    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Pitch:
    """A natural note: letter ``C``..``B`` and an octave relative to middle C."""

    letter: str
    octave: int = 0

    def __post_init__(self) -> None:
        letter = str(self.letter).upper()
        if letter not in NATURAL_LETTERS:
            raise InvalidPitchError(f"unknown pitch letter {self.letter!r}")
        object.__setattr__(self, "letter", letter)
        object.__setattr__(self, "octave", int(self.octave))

    @property
    def step(self) -> int:
        """Position on the diatonic line: ``octave * 7 + letter index``."""

        return self.octave * STEPS_PER_OCTAVE + NATURAL_LETTERS.index(self.letter)

    @classmethod
    def from_step(cls, step: int) -> "Pitch":
        octave, index = divmod(int(step), STEPS_PER_OCTAVE)
        return cls(NATURAL_LETTERS[index], octave)

    def transpose(self, steps: int) -> "Pitch":
        """Move by ``steps`` diatonic letters, carrying into the octave."""

        return Pitch.from_step(self.step + steps)

    def shift_octave(self, octaves: int) -> "Pitch":
        return Pitch(self.letter, self.octave + octaves)

    def to_token(self) -> str:
        return format_pitch(self)

    def __str__(self) -> str:
        return self.to_token()


PitchLike = Union[Pitch, str]


def format_pitch(pitch: Pitch) -> str:
    """Render ``pitch`` as a notation token, e.g. ``Pitch("C", 2) -> "c'"``."""

    if pitch.octave >= 1:
        return pitch.letter.lower() + _OCTAVE_UP * (pitch.octave - 1)
    return pitch.letter + _OCTAVE_DOWN * (-pitch.octave)


def parse_pitch(token: PitchLike) -> Pitch:
    """Parse a notation token; :class:`Pitch` instances pass straight through.

    A lowercase letter starts one octave above the reference, each ``'``
    raises and each ``,`` lowers by one octave.
    """

    if isinstance(token, Pitch):
        return token
    text = str(token).strip() if token is not None else ""
    if not text:
        raise InvalidPitchError("empty pitch token")

    head, marks = text[0], text[1:]
    if head.upper() not in NATURAL_LETTERS:
        raise InvalidPitchError(f"unknown pitch letter in {token!r}")
    if any(mark not in (_OCTAVE_UP, _OCTAVE_DOWN) for mark in marks):
        raise InvalidPitchError(f"unexpected octave marker in {token!r}")

    octave = 1 if head.islower() else 0
    octave += marks.count(_OCTAVE_UP) - marks.count(_OCTAVE_DOWN)
    return Pitch(head.upper(), octave)


def parse_pitches(tokens: Iterable[PitchLike]) -> List[Pitch]:
    return [parse_pitch(token) for token in tokens or ()]


def format_pitches(pitches: Iterable[Pitch]) -> List[str]:
    return [format_pitch(pitch) for pitch in pitches]


@dataclass(frozen=True)
class VocalRange:
    """Inclusive singing range between two pitches (order-insensitive)."""

    low: Pitch
    high: Pitch

    @classmethod
    def from_letters(
        cls,
        low: str,
        high: str,
        octave_low: int = 0,
        octave_high: int = 0,
    ) -> "VocalRange":
        return cls(Pitch(low, octave_low), Pitch(high, octave_high))

    def bounds(self) -> Tuple[int, int]:
        """Lowest and highest allowed diatonic steps."""

        first, second = self.low.step, self.high.step
        return min(first, second), max(first, second)

    def contains(self, pitch: Pitch) -> bool:
        low, high = self.bounds()
        return low <= pitch.step <= high


__all__ = [
    "NATURAL_LETTERS",
    "STEPS_PER_OCTAVE",
    "js_round",
    "Pitch",
    "PitchLike",
    "format_pitch",
    "parse_pitch",
    "parse_pitches",
    "format_pitches",
    "VocalRange",
]
