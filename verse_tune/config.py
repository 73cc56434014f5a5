"""Runtime configuration resolved from keyword arguments or the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional

_ENV_PREFIX = "VERSE_TUNE_"


def _env(environ: Mapping[str, str], name: str) -> Optional[str]:
    value = environ.get(f"{_ENV_PREFIX}{name}")
    if value is None:
        return None
    value = value.strip()
    return value or None


@dataclass
class VerseTuneConfig:
    log_level: Optional[str] = None
    dictionary_path: Optional[str] = None
    scale: str = "major"
    root: str = "C"
    register: str = "middle"
    intensity: float = 0.5

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "VerseTuneConfig":
        """Build a config from ``VERSE_TUNE_*`` variables.

        Unset variables keep their defaults; an intensity that is not a
        number is ignored rather than rejected.
        """

        environ = os.environ if environ is None else environ
        defaults = cls()

        intensity = defaults.intensity
        raw_intensity = _env(environ, "INTENSITY")
        if raw_intensity is not None:
            try:
                intensity = float(raw_intensity)
            except ValueError:
                intensity = defaults.intensity

        return cls(
            log_level=_env(environ, "LOG_LEVEL"),
            dictionary_path=_env(environ, "DICT_PATH"),
            scale=(_env(environ, "SCALE") or defaults.scale).lower(),
            root=_env(environ, "ROOT") or defaults.root,
            register=(_env(environ, "REGISTER") or defaults.register).lower(),
            intensity=intensity,
        )


__all__ = ["VerseTuneConfig"]
