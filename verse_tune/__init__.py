"""VerseTune: rhyme analysis and melodic contours for written verse.

Usage::

    from verse_tune import analyze_rhymes, generate_melodic_contour
    analyze_rhymes(["The cat sat on the mat", "The dog wore a funny hat"]).scheme
    generate_melodic_contour(8)
"""

__version__ = "0.1.0"

from verse_tune.core import (
    InternalRhyme,
    RhymeAnalysis,
    RhymeClassifier,
    RhymeGroup,
    RhymeType,
    analyze_rhymes,
    classify_rhyme,
    detect_rhyme_scheme,
    find_internal_rhymes,
)
from verse_tune.melody import (
    EmotionParams,
    MelodyOptions,
    Pitch,
    VocalRange,
    adjust_for_stress,
    apply_emotional_modifiers,
    apply_scale,
    constrain_to_range,
    generate_melodic_contour,
    generate_phrase_contour,
)

__all__ = [
    "InternalRhyme",
    "RhymeAnalysis",
    "RhymeClassifier",
    "RhymeGroup",
    "RhymeType",
    "analyze_rhymes",
    "classify_rhyme",
    "detect_rhyme_scheme",
    "find_internal_rhymes",
    "EmotionParams",
    "MelodyOptions",
    "Pitch",
    "VocalRange",
    "adjust_for_stress",
    "apply_emotional_modifiers",
    "apply_scale",
    "constrain_to_range",
    "generate_melodic_contour",
    "generate_phrase_contour",
]
