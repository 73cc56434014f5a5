"""Service layer for VerseTune."""

from .analysis_service import VerseAnalysisService

__all__ = ["VerseAnalysisService"]
