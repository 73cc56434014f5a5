"""Scale tables and conversion of scale degrees to pitches."""

from __future__ import annotations

from typing import Dict, Iterable, List, Sequence, Tuple

from verse_tune.exceptions import InvalidPitchError, UnknownScaleError

from .pitch import Pitch, format_pitches

# Semitone offsets of degrees 1..8 (octave included) from the root.
SCALE_INTERVALS: Dict[str, Tuple[int, ...]] = {
    "major": (0, 2, 4, 5, 7, 9, 11, 12),
    "minor": (0, 2, 3, 5, 7, 8, 10, 12),
    "dorian": (0, 2, 3, 5, 7, 9, 10, 12),
    "mixolydian": (0, 2, 4, 5, 7, 9, 10, 12),
}

CHROMATIC_NAMES: Tuple[str, ...] = (
    "C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B",
)
_FLAT_NAMES: Dict[str, int] = {"DB": 1, "EB": 3, "GB": 6, "AB": 8, "BB": 10}

DEGREES_PER_OCTAVE = 7
SEMITONES_PER_OCTAVE = 12


def scale_intervals(scale: str) -> Tuple[int, ...]:
    try:
        return SCALE_INTERVALS[str(scale).lower()]
    except KeyError:
        raise UnknownScaleError(
            f"unknown scale {scale!r}; expected one of {sorted(SCALE_INTERVALS)}"
        ) from None


def root_semitone(root: str) -> int:
    """Chromatic offset of ``root`` from C; accepts ``F#`` and ``Bb`` spellings."""

    name = str(root or "").strip()
    if not name:
        raise InvalidPitchError("empty root pitch")
    normalized = name[0].upper() + name[1:].replace("b", "B").upper()
    if normalized in CHROMATIC_NAMES:
        return CHROMATIC_NAMES.index(normalized)
    if normalized in _FLAT_NAMES:
        return _FLAT_NAMES[normalized]
    raise InvalidPitchError(f"unknown root pitch {root!r}")


def semitone_to_pitch(semitone: int) -> Pitch:
    """Map an absolute semitone (0 = middle C) to a natural pitch.

    Sharps fall back to the natural letter they are spelled from, so
    ``F#`` becomes ``F`` in the same octave.
    """

    octave, chroma = divmod(int(semitone), SEMITONES_PER_OCTAVE)
    return Pitch(CHROMATIC_NAMES[chroma][0], octave)


def degree_to_pitch(degree: int, intervals: Sequence[int], root_offset: int) -> Pitch:
    octave_adjust, reduced = divmod(int(degree), DEGREES_PER_OCTAVE)
    semitone = root_offset + intervals[reduced] + octave_adjust * SEMITONES_PER_OCTAVE
    return semitone_to_pitch(semitone)


def scale_pitches(contour: Iterable[int], scale: str = "major", root: str = "C") -> List[Pitch]:
    """Structured counterpart of :func:`apply_scale`."""

    degrees = list(contour or ())
    if not degrees:
        return []
    intervals = scale_intervals(scale)
    root_offset = root_semitone(root)
    return [degree_to_pitch(degree, intervals, root_offset) for degree in degrees]


def apply_scale(contour: Iterable[int], scale: str = "major", root: str = "C") -> List[str]:
    """Turn scale-degree offsets into pitch tokens.

    Degrees wrap by octave in both directions: ``7`` is the root one octave
    up, ``-1`` the seventh degree one octave down.

    >>> apply_scale([0, 1, 2, 3, 4, 5, 6], "major", "C")
    ['C', 'D', 'E', 'F', 'G', 'A', 'B']
    """

    return format_pitches(scale_pitches(contour, scale, root))


__all__ = [
    "SCALE_INTERVALS",
    "CHROMATIC_NAMES",
    "scale_intervals",
    "root_semitone",
    "semitone_to_pitch",
    "degree_to_pitch",
    "scale_pitches",
    "apply_scale",
]
