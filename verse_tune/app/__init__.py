"""Application layer for VerseTune."""

from .app import VerseTuneApp, main

__all__ = ["VerseTuneApp", "main"]
