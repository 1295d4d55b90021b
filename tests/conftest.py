"""Shared test fixtures."""

from __future__ import annotations

from unittest.mock import AsyncMock

import pytest

from acadewrite.assistant.gateway import AIGateway
from acadewrite.clients.llm_client import LLMClient, LLMResponse
from acadewrite.storage.draft_store import DraftStore


@pytest.fixture
def sample_text() -> str:
    return (
        "The industrial revolution changed how people worked and lived. "
        "Factories replaced small workshops, and cities grew quickly as workers "
        "moved from the countryside in search of wages."
    )


@pytest.fixture
def sample_markup(sample_text) -> str:
    return f"<b>Introduction</b><br>{sample_text}"


@pytest.fixture
def sample_analysis_dict() -> dict:
    return {
        "clarityScore": 82,
        "academicToneScore": 74,
        "grammarRating": "Good",
        "readabilityLevel": "College Level",
        "suggestions": [
            {
                "id": "s1",
                "type": "tone",
                "text": "Prefer a more formal verb.",
                "originalText": "changed how people worked",
                "replacement": "transformed patterns of labour",
            },
            {
                "id": "s2",
                "type": "improvement",
                "text": "Consider citing a source for the migration claim.",
            },
        ],
        "documentInsights": {
            "estimatedReadingTime": "1 min",
            "vocabularyDiversityScore": 68,
            "complexSentenceCount": 1,
            "transitionWordsCount": 2,
        },
    }


@pytest.fixture
def mock_llm_client() -> AsyncMock:
    """LLMClient mock with canned async responses."""
    client = AsyncMock(spec=LLMClient)
    client.generate.return_value = LLMResponse(text="mock response", input_tokens=10, output_tokens=5)
    client.converse.return_value = LLMResponse(text="mock reply", input_tokens=10, output_tokens=5)
    client.generate_json.return_value = {}
    return client


@pytest.fixture
def gateway(mock_llm_client) -> AIGateway:
    return AIGateway(
        mock_llm_client,
        analysis_model="analysis-model",
        chat_model="chat-model",
        autocomplete_model="autocomplete-model",
    )


@pytest.fixture
def draft_store(tmp_path) -> DraftStore:
    return DraftStore(db_path=tmp_path / "drafts.db")
