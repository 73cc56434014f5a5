"""Service facade running the rhyme and melody pipelines with instrumentation."""

from __future__ import annotations

from typing import Any, Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from verse_tune.core import RhymeAnalysis, RhymeClassifier, RhymeSchemeDetector, RhymeType
from verse_tune.melody import (
    EmotionParams,
    LineProsody,
    MelodyOptions,
    VocalRange,
    generate_melodic_contour,
    line_prosody,
)

from ...utils.observability import (
    ServiceMetrics,
    add_span_attributes,
    get_logger,
    record_exception,
    start_span,
)
from ...utils.telemetry import StructuredTelemetry

T = TypeVar("T")


class VerseAnalysisService:
    """Entry point used by the CLI and by embedding applications.

    Poems are processed strictly in order; group letters depend on
    left-to-right processing, so batch calls never reorder input.
    """

    def __init__(
        self,
        *,
        classifier: Optional[RhymeClassifier] = None,
        default_options: Optional[MelodyOptions] = None,
        telemetry: Optional[StructuredTelemetry] = None,
        metrics: Optional[ServiceMetrics] = None,
    ) -> None:
        self.classifier = classifier if classifier is not None else RhymeClassifier()
        self.detector = RhymeSchemeDetector(self.classifier)
        self.default_options = default_options or MelodyOptions()
        self.telemetry = telemetry or StructuredTelemetry()
        self._latest_trace: Dict[str, Any] = {}
        self._logger = get_logger(__name__).bind(
            component="verse_analysis_service",
            dictionary=type(self.classifier.dictionary).__name__,
        )
        self.metrics = metrics or ServiceMetrics()

    # Instrumentation ---------------------------------------------------------
    def _run(self, operation: str, context: Dict[str, Any], work: Callable[[], T]) -> T:
        telemetry = self.telemetry
        telemetry.start_trace(operation)
        for key, value in context.items():
            telemetry.annotate(f"input.{key}", value)

        self.metrics.request_started(operation)
        self._logger.info("Request received", context={"operation": operation, **context})

        with start_span(f"verse_tune.{operation}", context) as span:
            try:
                with self.metrics.timed(operation), telemetry.timer(operation):
                    result = work()
            except Exception as exc:
                self.metrics.request_failed(operation)
                self._logger.error(
                    "Request failed",
                    context={"operation": operation, "error": str(exc)},
                )
                record_exception(span, exc)
                telemetry.increment(f"{operation}.failed")
                self._latest_trace = telemetry.finish_trace()
                raise

            telemetry.increment(f"{operation}.completed")
            self._latest_trace = telemetry.finish_trace()
            add_span_attributes(span, {"verse_tune.success": True})
            return result

    def get_latest_telemetry(self) -> Dict[str, Any]:
        return dict(self._latest_trace)

    def get_recent_telemetry(self) -> List[Dict[str, Any]]:
        """Closed request traces, oldest first."""

        return self.telemetry.history()

    # Rhyme -------------------------------------------------------------------
    def classify(self, word1: str, word2: str) -> RhymeType:
        return self._run(
            "classify_rhyme",
            {"word1": word1, "word2": word2},
            lambda: self.classifier.classify(word1, word2),
        )

    def analyze_rhymes(self, lines: Sequence[str]) -> RhymeAnalysis:
        lines = list(lines or [])

        def work() -> RhymeAnalysis:
            analysis = self.detector.analyze(lines)
            self.metrics.lines_analyzed(len(lines))
            self.telemetry.annotate("result.scheme", analysis.scheme)
            self.telemetry.annotate("result.internal_rhymes", len(analysis.internal_rhymes))
            return analysis

        return self._run("analyze_rhymes", {"line_count": len(lines)}, work)

    def analyze_poems(self, poems: Iterable[Sequence[str]]) -> List[RhymeAnalysis]:
        """Analyze each poem independently, preserving input order."""

        return [self.analyze_rhymes(poem) for poem in poems]

    # Melody ------------------------------------------------------------------
    def build_options(
        self,
        *,
        scale: Optional[str] = None,
        root: Optional[str] = None,
        stress_pattern: Optional[str] = None,
        emotion: Optional[EmotionParams] = None,
        vocal_range: Optional[VocalRange] = None,
    ) -> MelodyOptions:
        """Overlay explicit arguments on the service's default options."""

        defaults = self.default_options
        return MelodyOptions(
            scale=scale or defaults.scale,
            root=root or defaults.root,
            stress_pattern=(
                defaults.stress_pattern if stress_pattern is None else stress_pattern
            ),
            emotion=emotion or defaults.emotion,
            vocal_range=vocal_range or defaults.vocal_range,
        )

    def melody(self, phrase_length: int, options: Optional[MelodyOptions] = None) -> List[str]:
        options = options or self.default_options
        return self._run(
            "melodic_contour",
            {
                "phrase_length": phrase_length,
                "scale": options.scale,
                "root": options.root,
                "register": options.emotion.register,
            },
            lambda: generate_melodic_contour(phrase_length, options),
        )

    def prosody(self, line: str) -> LineProsody:
        return line_prosody(line, self.classifier.dictionary)

    def melody_for_line(self, line: str, **overrides: Any) -> Dict[str, Any]:
        """Melody for a lyric line, one pitch per syllable, lifted on stresses."""

        prosody = self.prosody(line)
        options = self.build_options(stress_pattern=prosody.stress_pattern, **overrides)
        pitches = self.melody(prosody.syllable_count, options)
        if prosody.unknown_words:
            self._logger.info(
                "Estimated syllables for unknown words",
                context={"words": prosody.unknown_words},
            )
        return {
            "line": line,
            "syllables": prosody.syllable_count,
            "stress_pattern": prosody.stress_pattern,
            "unknown_words": list(prosody.unknown_words),
            "pitches": pitches,
        }


__all__ = ["VerseAnalysisService"]
