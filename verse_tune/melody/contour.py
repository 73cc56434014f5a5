"""Melodic contour generation for a sung phrase.

The pipeline shapes an arch over the phrase, maps it onto a scale, lifts
stressed syllables, applies register and intensity, and finally folds the
result into a singer's range. Each stage is also exposed on its own and
accepts and returns notation tokens; the composite keeps structured
:class:`~verse_tune.melody.pitch.Pitch` values between stages.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from verse_tune.exceptions import InvalidRegisterError, VerseTuneError
from verse_tune.utils.observability import get_logger

from .pitch import (
    Pitch,
    PitchLike,
    VocalRange,
    format_pitches,
    js_round,
    parse_pitches,
)
from .scales import scale_pitches

logger = get_logger(__name__)

PEAK_RATIO = 0.6
MAX_CONTOUR_HEIGHT = 5
STRESSED_MARKERS = frozenset({"1", "2"})

REGISTER_SHIFTS: Dict[str, int] = {"low": -1, "middle": 0, "high": 1}

DEFAULT_RANGES: Dict[str, VocalRange] = {
    "low": VocalRange.from_letters("G", "D", octave_low=-1, octave_high=0),
    "middle": VocalRange.from_letters("C", "G", octave_low=0, octave_high=0),
    "high": VocalRange.from_letters("E", "C", octave_low=0, octave_high=1),
}

MODES = ("major", "minor")


@dataclass
class EmotionParams:
    """Emotional colouring of a phrase.

    ``mode`` is carried for callers but does not alter pitches; the scale
    choice is where major/minor is expressed. ``intensity`` is clamped to
    ``[0, 1]``.
    """

    mode: str = "major"
    intensity: float = 0.5
    register: str = "middle"

    def __post_init__(self) -> None:
        self.mode = str(self.mode).lower()
        if self.mode not in MODES:
            raise VerseTuneError(f"unknown mode {self.mode!r}; expected major or minor")
        self.register = str(self.register).lower()
        if self.register not in REGISTER_SHIFTS:
            raise InvalidRegisterError(
                f"unknown register {self.register!r}; expected low, middle or high"
            )
        self.intensity = min(1.0, max(0.0, float(self.intensity)))


@dataclass
class MelodyOptions:
    scale: str = "major"
    root: str = "C"
    stress_pattern: str = ""
    emotion: EmotionParams = field(default_factory=EmotionParams)
    vocal_range: Optional[VocalRange] = None

    def resolved_range(self) -> VocalRange:
        return self.vocal_range or DEFAULT_RANGES[self.emotion.register]


# ---------------------------------------------------------------------------
# Phrase shape
# ---------------------------------------------------------------------------

def generate_phrase_contour(phrase_length: int) -> List[int]:
    """Arch-shaped scale-degree offsets, one per syllable.

    The line rises along a square-root curve to a peak about 60% of the way
    through, then falls linearly back towards the tonic. The peak height
    grows with the phrase but never exceeds five degrees.

    >>> generate_phrase_contour(8)
    [0, 3, 4, 4, 5, 3, 2, 0]
    """

    length = int(phrase_length)
    if length <= 0:
        return []
    if length == 1:
        return [0]
    if length == 2:
        return [0, 2]

    peak = int(math.floor(length * PEAK_RATIO))
    max_height = min(length // 2 + 1, MAX_CONTOUR_HEIGHT)
    remaining = length - peak - 1

    contour: List[int] = []
    for index in range(length):
        if index < peak:
            contour.append(js_round(math.sqrt(index / peak) * max_height))
        elif index == peak:
            contour.append(max_height)
        else:
            progress = (index - peak) / remaining
            contour.append(max(0, js_round(max_height * (1 - progress))))
    return contour


# ---------------------------------------------------------------------------
# Structured stages
# ---------------------------------------------------------------------------

def stress_adjusted(pitches: Sequence[Pitch], stress_pattern: str) -> List[Pitch]:
    """Raise pitches under ``1``/``2`` markers by one diatonic step."""

    if not stress_pattern:
        return list(pitches)
    adjusted: List[Pitch] = []
    for index, pitch in enumerate(pitches):
        marker = stress_pattern[index] if index < len(stress_pattern) else "0"
        adjusted.append(pitch.transpose(1) if marker in STRESSED_MARKERS else pitch)
    return adjusted


def emotion_adjusted(pitches: Sequence[Pitch], emotion: EmotionParams) -> List[Pitch]:
    """Shift octaves by register and, above 0.5 intensity, spread them apart."""

    if not pitches:
        return []

    register_shift = REGISTER_SHIFTS[emotion.register]
    intensity = emotion.intensity
    intensity_factor = 0.5 + intensity * 0.5
    mean_octave = sum(pitch.octave for pitch in pitches) / len(pitches)

    adjusted: List[Pitch] = []
    for pitch in pitches:
        octave = pitch.octave + register_shift
        if intensity > 0.5:
            expansion = (pitch.octave - mean_octave) * (intensity_factor - 0.5) * 2
            octave = js_round(pitch.octave + register_shift + expansion)
        adjusted.append(Pitch(pitch.letter, octave))
    return adjusted


def range_constrained(pitches: Sequence[Pitch], vocal_range: VocalRange) -> List[Pitch]:
    """Fold pitches into ``vocal_range`` by octaves, clamping what cannot fit."""

    low, high = vocal_range.bounds()
    constrained: List[Pitch] = []
    for pitch in pitches:
        step = pitch.step
        while step < low:
            step += 7
        while step > high:
            step -= 7
        step = min(max(step, low), high)
        constrained.append(Pitch.from_step(step))
    return constrained


def generate_melodic_pitches(
    phrase_length: int,
    options: Optional[MelodyOptions] = None,
) -> List[Pitch]:
    """Run the full contour pipeline and return structured pitches."""

    options = options or MelodyOptions()
    contour = generate_phrase_contour(phrase_length)
    pitches = scale_pitches(contour, options.scale, options.root)
    pitches = stress_adjusted(pitches, options.stress_pattern)
    pitches = emotion_adjusted(pitches, options.emotion)
    pitches = range_constrained(pitches, options.resolved_range())
    logger.debug(
        "Generated melodic contour",
        context={
            "phrase_length": phrase_length,
            "scale": options.scale,
            "root": options.root,
            "register": options.emotion.register,
            "contour": contour,
        },
    )
    return pitches


# ---------------------------------------------------------------------------
# Token API
# ---------------------------------------------------------------------------

def adjust_for_stress(pitches: Sequence[PitchLike], stress_pattern: str) -> List[str]:
    """Lift stressed syllables one step; extra or missing markers are ignored.

    >>> adjust_for_stress(["C", "D", "E", "F"], "0101")
    ['C', 'E', 'E', 'G']
    """

    return format_pitches(stress_adjusted(parse_pitches(pitches), stress_pattern or ""))


def apply_emotional_modifiers(
    pitches: Sequence[PitchLike],
    emotion: Optional[EmotionParams] = None,
) -> List[str]:
    return format_pitches(emotion_adjusted(parse_pitches(pitches), emotion or EmotionParams()))


def constrain_to_range(pitches: Sequence[PitchLike], vocal_range: VocalRange) -> List[str]:
    """Keep every pitch inside ``vocal_range``.

    >>> constrain_to_range(["C,,", "G", "c'"], VocalRange.from_letters("C", "G"))
    ['C', 'G', 'C']
    """

    return format_pitches(range_constrained(parse_pitches(pitches), vocal_range))


def generate_melodic_contour(
    phrase_length: int,
    options: Optional[MelodyOptions] = None,
) -> List[str]:
    """Pitch tokens for a phrase of ``phrase_length`` syllables."""

    return format_pitches(generate_melodic_pitches(phrase_length, options))


__all__ = [
    "PEAK_RATIO",
    "MAX_CONTOUR_HEIGHT",
    "REGISTER_SHIFTS",
    "DEFAULT_RANGES",
    "MODES",
    "EmotionParams",
    "MelodyOptions",
    "generate_phrase_contour",
    "stress_adjusted",
    "emotion_adjusted",
    "range_constrained",
    "generate_melodic_pitches",
    "adjust_for_stress",
    "apply_emotional_modifiers",
    "constrain_to_range",
    "generate_melodic_contour",
]
