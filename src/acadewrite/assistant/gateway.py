"""AI gateway: the four provider-backed operations the editor relies on.

Every operation degrades to a neutral value when the provider fails, so
callers never see an exception from this module.
"""

from __future__ import annotations

import logging

from pydantic import ValidationError

from acadewrite.assistant.prompts import (
    AUTOCOMPLETE_WINDOW_CHARS,
    QuickAction,
    analysis_prompt,
    analysis_system_prompt,
    autocomplete_prompt,
    chat_system_prompt,
    quick_action_prompt,
)
from acadewrite.clients.llm_client import LLMClient
from acadewrite.models.analysis import AnalysisResult, empty_analysis, unavailable_analysis
from acadewrite.models.chat import ChatMessage

logger = logging.getLogger(__name__)

ANALYZE_MIN_CHARS = 10
AUTOCOMPLETE_MIN_CHARS = 50

CHAT_EMPTY_REPLY = "I apologize, I couldn't generate a response."
CHAT_FAILURE_REPLY = "Sorry, I'm having trouble connecting to the AI service right now."
QUICK_ACTION_EMPTY_REPLY = "Could not process selection."
QUICK_ACTION_FAILURE_REPLY = "Error processing request."

_PROVIDER_ROLES = {"user": "user", "model": "assistant"}


def to_provider_turns(history: list[ChatMessage], new_message: str) -> list[dict]:
    """Convert chat history plus the new message to alternating provider turns."""
    turns: list[dict] = []
    for msg in history:
        role = _PROVIDER_ROLES[msg.role]
        if not turns and role != "user":
            continue
        if turns and turns[-1]["role"] == role:
            turns[-1]["content"] += "\n\n" + msg.content
        else:
            turns.append({"role": role, "content": msg.content})
    if turns and turns[-1]["role"] == "user":
        turns[-1]["content"] += "\n\n" + new_message
    else:
        turns.append({"role": "user", "content": new_message})
    return turns


class AIGateway:
    """Request/response façade over the generative-language provider."""

    def __init__(
        self,
        llm: LLMClient,
        *,
        analysis_model: str = "claude-haiku-4-5-20251001",
        chat_model: str = "claude-sonnet-4-5-20250929",
        autocomplete_model: str = "claude-haiku-4-5-20251001",
    ):
        self.llm = llm
        self.analysis_model = analysis_model
        self.chat_model = chat_model
        self.autocomplete_model = autocomplete_model

    async def analyze(self, text: str) -> AnalysisResult:
        """Score the text. Short inputs get the zero result without a provider call."""
        if not text or len(text.strip()) < ANALYZE_MIN_CHARS:
            return empty_analysis()

        logger.info("Analyzing document (%d chars)", len(text))
        try:
            data = await self.llm.generate_json(
                prompt=analysis_prompt(text),
                system=analysis_system_prompt(),
                model=self.analysis_model,
            )
            return AnalysisResult.model_validate(data)
        except ValidationError:
            logger.warning("Analysis response did not match the expected shape", exc_info=True)
        except Exception:
            logger.exception("Analysis failed")
        return unavailable_analysis()

    async def chat(
        self,
        history: list[ChatMessage],
        new_message: str,
        document_context: str,
    ) -> str:
        """Answer a chat message with the current document as context."""
        try:
            response = await self.llm.converse(
                messages=to_provider_turns(history, new_message),
                system=chat_system_prompt(document_context),
                model=self.chat_model,
            )
        except Exception:
            logger.exception("Chat request failed")
            return CHAT_FAILURE_REPLY
        return response.text or CHAT_EMPTY_REPLY

    async def autocomplete(self, preceding_text: str) -> str:
        """Suggest a short continuation of the text before the cursor."""
        if not preceding_text or len(preceding_text) < AUTOCOMPLETE_MIN_CHARS:
            return ""

        context = preceding_text[-AUTOCOMPLETE_WINDOW_CHARS:]
        try:
            response = await self.llm.generate(
                prompt=autocomplete_prompt(context),
                model=self.autocomplete_model,
                temperature=0.3,
                max_tokens=20,
            )
        except Exception:
            logger.debug("Autocomplete request failed", exc_info=True)
            return ""
        return response.text.strip()

    async def quick_action(
        self,
        action: QuickAction | str,
        selection: str,
        custom_prompt: str | None = None,
    ) -> str:
        """Run a quick action over the selected text."""
        logger.debug("Quick action %s on %d chars", action, len(selection))
        try:
            response = await self.llm.generate(
                prompt=quick_action_prompt(action, selection, custom_prompt),
                model=self.chat_model,
                temperature=0.7,
            )
        except Exception:
            logger.exception("Quick action failed")
            return QUICK_ACTION_FAILURE_REPLY
        return response.text or QUICK_ACTION_EMPTY_REPLY
