"""Melodic contour generation for VerseTune."""

from .contour import (
    DEFAULT_RANGES,
    EmotionParams,
    MelodyOptions,
    adjust_for_stress,
    apply_emotional_modifiers,
    constrain_to_range,
    generate_melodic_contour,
    generate_melodic_pitches,
    generate_phrase_contour,
)
from .pitch import Pitch, VocalRange, format_pitch, parse_pitch
from .prosody import LineProsody, line_prosody
from .scales import SCALE_INTERVALS, apply_scale

__all__ = [
    "DEFAULT_RANGES",
    "EmotionParams",
    "MelodyOptions",
    "adjust_for_stress",
    "apply_emotional_modifiers",
    "constrain_to_range",
    "generate_melodic_contour",
    "generate_melodic_pitches",
    "generate_phrase_contour",
    "Pitch",
    "VocalRange",
    "format_pitch",
    "parse_pitch",
    "LineProsody",
    "line_prosody",
    "SCALE_INTERVALS",
    "apply_scale",
]
