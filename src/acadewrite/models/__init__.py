"""Data models for the writing assistant."""

from acadewrite.models.analysis import (
    AnalysisResult,
    DocumentInsights,
    Suggestion,
    empty_analysis,
    unavailable_analysis,
)
from acadewrite.models.chat import ChatMessage

__all__ = [
    "AnalysisResult",
    "ChatMessage",
    "DocumentInsights",
    "Suggestion",
    "empty_analysis",
    "unavailable_analysis",
]
