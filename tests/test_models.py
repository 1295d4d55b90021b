"""Tests for pydantic data models."""

from __future__ import annotations

import pytest

from acadewrite.models import (
    AnalysisResult,
    ChatMessage,
    DocumentInsights,
    Suggestion,
    empty_analysis,
    unavailable_analysis,
)


class TestAnalysisResult:
    def test_parses_camel_case_provider_json(self, sample_analysis_dict):
        result = AnalysisResult.model_validate(sample_analysis_dict)
        assert result.clarity_score == 82
        assert result.academic_tone_score == 74
        assert result.grammar_rating == "Good"
        assert result.document_insights.vocabulary_diversity_score == 68
        assert len(result.suggestions) == 2

    def test_accepts_field_names(self):
        result = AnalysisResult(
            clarity_score=50,
            academic_tone_score=60,
            grammar_rating="Poor",
            readability_level="High School",
        )
        assert result.suggestions == []
        assert result.document_insights.estimated_reading_time == "0 min"

    def test_scores_are_clamped(self, sample_analysis_dict):
        sample_analysis_dict["clarityScore"] = 140
        sample_analysis_dict["academicToneScore"] = -5
        sample_analysis_dict["documentInsights"]["vocabularyDiversityScore"] = 101.6
        result = AnalysisResult.model_validate(sample_analysis_dict)
        assert result.clarity_score == 100
        assert result.academic_tone_score == 0
        assert result.document_insights.vocabulary_diversity_score == 100

    def test_invalid_grammar_rating_rejected(self, sample_analysis_dict):
        sample_analysis_dict["grammarRating"] = "Excellent"
        with pytest.raises(Exception):
            AnalysisResult.model_validate(sample_analysis_dict)

    def test_without_suggestion(self, sample_analysis_dict):
        result = AnalysisResult.model_validate(sample_analysis_dict)
        trimmed = result.without_suggestion(result.suggestions[0])
        assert [s.id for s in trimmed.suggestions] == ["s2"]
        # original is untouched
        assert len(result.suggestions) == 2

    def test_without_suggestion_removes_only_that_one(self, sample_analysis_dict):
        sample_analysis_dict["suggestions"][1]["id"] = "s1"
        result = AnalysisResult.model_validate(sample_analysis_dict)
        trimmed = result.without_suggestion(result.suggestions[1])
        assert trimmed.suggestions == [result.suggestions[0]]

    def test_serializes_with_aliases(self, sample_analysis_dict):
        result = AnalysisResult.model_validate(sample_analysis_dict)
        dumped = result.model_dump(by_alias=True)
        assert dumped["clarityScore"] == 82
        assert dumped["documentInsights"]["transitionWordsCount"] == 2


class TestSuggestion:
    def test_unknown_type_normalized(self):
        s = Suggestion(type="Style", text="x")
        assert s.type == "improvement"

    def test_type_case_insensitive(self):
        assert Suggestion(type="Correction", text="x").type == "correction"

    def test_missing_text_defaults_to_empty(self, sample_analysis_dict):
        del sample_analysis_dict["suggestions"][0]["text"]
        result = AnalysisResult.model_validate(sample_analysis_dict)
        assert result.suggestions[0].text == ""
        assert result.suggestions[0].is_applicable

    def test_default_id_generated(self):
        a, b = Suggestion(text="a"), Suggestion(text="b")
        assert a.id and b.id and a.id != b.id

    def test_is_applicable(self):
        assert Suggestion(text="x", originalText="a", replacement="b").is_applicable
        assert not Suggestion(text="x", originalText="a").is_applicable
        assert not Suggestion(text="x", originalText="", replacement="b").is_applicable


class TestDocumentInsights:
    def test_negative_counts_floor_at_zero(self):
        insights = DocumentInsights(complexSentenceCount=-3, transitionWordsCount="4")
        assert insights.complex_sentence_count == 0
        assert insights.transition_words_count == 4


class TestFallbackResults:
    def test_empty_analysis(self):
        result = empty_analysis()
        assert result.clarity_score == 0
        assert result.readability_level == "N/A"
        assert result.suggestions == []

    def test_unavailable_analysis(self):
        result = unavailable_analysis()
        assert result.readability_level == "Error"
        assert result.document_insights.estimated_reading_time == "-"
        assert result.suggestions[0].text == "Analysis unavailable. Please try again."
        assert not result.suggestions[0].is_applicable


class TestChatMessage:
    def test_frozen(self):
        msg = ChatMessage(role="user", content="hello")
        with pytest.raises(Exception):
            msg.content = "changed"  # type: ignore[misc]

    def test_rejects_unknown_role(self):
        with pytest.raises(Exception):
            ChatMessage(role="assistant", content="hi")

    def test_ids_unique(self):
        assert ChatMessage(role="user", content="a").id != ChatMessage(role="user", content="a").id
