"""Application wiring and command line entry point for VerseTune."""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, List, Optional, Sequence

from verse_tune.config import VerseTuneConfig
from verse_tune.core import RhymeClassifier, load_dictionary
from verse_tune.exceptions import VerseTuneError
from verse_tune.melody import EmotionParams, MelodyOptions, VocalRange, parse_pitch
from verse_tune.utils.logging_config import configure_logging
from verse_tune.utils.observability import get_logger

from .services.analysis_service import VerseAnalysisService


class VerseTuneApp:
    """High-level facade bundling the dictionary, classifier and service."""

    def __init__(
        self,
        config: Optional[VerseTuneConfig] = None,
        *,
        service: Optional[VerseAnalysisService] = None,
    ) -> None:
        self.config = config or VerseTuneConfig.from_env()
        self._logger = get_logger(__name__).bind(component="app_facade")

        if service is None:
            dictionary = load_dictionary(self.config.dictionary_path)
            options = MelodyOptions(
                scale=self.config.scale,
                root=self.config.root,
                emotion=EmotionParams(
                    intensity=self.config.intensity,
                    register=self.config.register,
                ),
            )
            service = VerseAnalysisService(
                classifier=RhymeClassifier(dictionary),
                default_options=options,
            )
        self.service = service

        self._logger.info(
            "Application dependencies wired",
            context={
                "dictionary_path": self.config.dictionary_path,
                "scale": self.config.scale,
                "root": self.config.root,
                "register": self.config.register,
            },
        )

    def rhyme_report(self, lines: Sequence[str]) -> Dict[str, Any]:
        return self.service.analyze_rhymes(lines).as_dict()

    def melody_report(
        self,
        length: int,
        *,
        stress_pattern: str = "",
        vocal_range: Optional[VocalRange] = None,
        scale: Optional[str] = None,
        root: Optional[str] = None,
    ) -> Dict[str, Any]:
        options = self.service.build_options(
            scale=scale,
            root=root,
            stress_pattern=stress_pattern,
            vocal_range=vocal_range,
        )
        return {"length": length, "pitches": self.service.melody(length, options)}

    def line_report(self, line: str) -> Dict[str, Any]:
        return self.service.melody_for_line(line)


def _parse_range(value: Optional[str]) -> Optional[VocalRange]:
    """``"C..g"`` style range argument, bounds written as pitch tokens."""

    if not value:
        return None
    low, sep, high = value.partition("..")
    if not sep:
        raise argparse.ArgumentTypeError("range must look like LOW..HIGH, e.g. C..G")
    try:
        return VocalRange(parse_pitch(low), parse_pitch(high))
    except VerseTuneError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="verse-tune",
        description="Rhyme analysis and sung-melody contours for verse.",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default INFO).")
    parser.add_argument(
        "--dictionary",
        default=None,
        help="Path to a cmudict-format file (defaults to the bundled CMU data).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    rhyme = subparsers.add_parser("rhyme", help="Rhyme scheme and internal rhymes.")
    rhyme.add_argument("lines", nargs="*", help="Poem lines; read from stdin when omitted.")

    melody = subparsers.add_parser("melody", help="Pitch contour for a phrase length.")
    melody.add_argument("length", type=int, help="Number of syllables.")
    melody.add_argument("--stress", default="", help="Stress string such as 0101.")
    melody.add_argument("--scale", default=None)
    melody.add_argument("--root", default=None)
    melody.add_argument("--range", dest="vocal_range", type=_parse_range, default=None)

    line = subparsers.add_parser("line", help="Melody for a lyric line.")
    line.add_argument("text", help="The lyric line.")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    config = VerseTuneConfig.from_env()
    if args.log_level:
        config.log_level = args.log_level
    if args.dictionary:
        config.dictionary_path = args.dictionary
    configure_logging(config)

    try:
        app = VerseTuneApp(config)
        if args.command == "rhyme":
            lines = args.lines or sys.stdin.read().splitlines()
            report = app.rhyme_report(lines)
        elif args.command == "melody":
            report = app.melody_report(
                args.length,
                stress_pattern=args.stress,
                vocal_range=args.vocal_range,
                scale=args.scale,
                root=args.root,
            )
        else:
            report = app.line_report(args.text)
    except VerseTuneError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2

    json.dump(report, sys.stdout, indent=2)
    sys.stdout.write("\n")
    return 0


__all__ = ["VerseTuneApp", "main"]
