"""Pydantic models for document analysis results."""

from __future__ import annotations

import uuid
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

GrammarRating = Literal["Good", "Needs Work", "Poor"]
SuggestionType = Literal["improvement", "correction", "tone"]

_CAMEL = ConfigDict(populate_by_name=True)


def _clamp_score(value) -> int:
    try:
        score = int(round(float(value)))
    except (TypeError, ValueError):
        return 0
    return max(0, min(100, score))


class Suggestion(BaseModel):
    model_config = _CAMEL

    id: str = Field(default_factory=lambda: uuid.uuid4().hex[:8])
    type: SuggestionType = "improvement"
    text: str = ""
    original_text: str | None = Field(default=None, alias="originalText")
    replacement: str | None = None

    @field_validator("type", mode="before")
    @classmethod
    def _normalize_type(cls, v):
        v = str(v or "").strip().lower()
        return v if v in ("improvement", "correction", "tone") else "improvement"

    @property
    def is_applicable(self) -> bool:
        """True when the suggestion carries a one-click original/replacement pair."""
        return bool(self.original_text) and bool(self.replacement)


class DocumentInsights(BaseModel):
    model_config = _CAMEL

    estimated_reading_time: str = Field(default="0 min", alias="estimatedReadingTime")
    vocabulary_diversity_score: int = Field(default=0, alias="vocabularyDiversityScore")
    complex_sentence_count: int = Field(default=0, alias="complexSentenceCount")
    transition_words_count: int = Field(default=0, alias="transitionWordsCount")

    @field_validator("vocabulary_diversity_score", mode="before")
    @classmethod
    def _clamp(cls, v):
        return _clamp_score(v)

    @field_validator("complex_sentence_count", "transition_words_count", mode="before")
    @classmethod
    def _non_negative(cls, v):
        try:
            return max(0, int(v))
        except (TypeError, ValueError):
            return 0


class AnalysisResult(BaseModel):
    model_config = _CAMEL

    clarity_score: int = Field(alias="clarityScore")  # 0-100
    academic_tone_score: int = Field(alias="academicToneScore")  # 0-100
    grammar_rating: GrammarRating = Field(alias="grammarRating")
    readability_level: str = Field(alias="readabilityLevel")
    suggestions: list[Suggestion] = []
    document_insights: DocumentInsights = Field(
        default_factory=DocumentInsights, alias="documentInsights"
    )

    @field_validator("clarity_score", "academic_tone_score", mode="before")
    @classmethod
    def _clamp(cls, v):
        return _clamp_score(v)

    def without_suggestion(self, suggestion: Suggestion) -> AnalysisResult:
        """Return a copy with that one suggestion removed.

        Matches by identity, then by value. Provider ids may repeat.
        """
        index = next((i for i, s in enumerate(self.suggestions) if s is suggestion), None)
        if index is None:
            index = next((i for i, s in enumerate(self.suggestions) if s == suggestion), None)
        remaining = list(self.suggestions)
        if index is not None:
            del remaining[index]
        return self.model_copy(update={"suggestions": remaining})


def empty_analysis() -> AnalysisResult:
    """Result for documents too short to analyze."""
    return AnalysisResult(
        clarity_score=0,
        academic_tone_score=0,
        grammar_rating="Needs Work",
        readability_level="N/A",
        suggestions=[],
        document_insights=DocumentInsights(estimated_reading_time="0 min"),
    )


def unavailable_analysis() -> AnalysisResult:
    """Degraded result returned when the provider call fails."""
    return AnalysisResult(
        clarity_score=0,
        academic_tone_score=0,
        grammar_rating="Needs Work",
        readability_level="Error",
        suggestions=[
            Suggestion(
                id="err",
                type="improvement",
                text="Analysis unavailable. Please try again.",
                original_text="",
                replacement="",
            )
        ],
        document_insights=DocumentInsights(estimated_reading_time="-"),
    )
