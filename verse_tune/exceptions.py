"""Errors raised for malformed arguments at the public API boundary."""

from __future__ import annotations


class VerseTuneError(ValueError):
    """Base class for caller errors raised by :mod:`verse_tune`."""


class InvalidPitchError(VerseTuneError):
    """A pitch token or letter could not be interpreted."""


class UnknownScaleError(VerseTuneError):
    """The requested scale is not in the interval table."""


class InvalidRegisterError(VerseTuneError):
    """A register other than ``low``, ``middle`` or ``high`` was requested."""


__all__ = [
    "VerseTuneError",
    "InvalidPitchError",
    "UnknownScaleError",
    "InvalidRegisterError",
]
