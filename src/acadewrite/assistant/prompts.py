"""Prompt templates and quick-action definitions for the AI gateway."""

from __future__ import annotations

import json
from enum import Enum

from acadewrite.models.analysis import AnalysisResult

CHAT_CONTEXT_CHARS = 2000
AUTOCOMPLETE_WINDOW_CHARS = 200


class QuickAction(str, Enum):
    """Predefined transformations applied to a text selection."""

    CUSTOM = "Custom"
    PARAPHRASE = "Paraphrase Selection"
    EXPAND = "Expand Ideas"
    SUMMARIZE = "Summarize"
    CITE = "Citation Helper"
    PLAGIARISM = "Check Plagiarism Risk"

    @property
    def label(self) -> str:
        return _LABELS[self]


_LABELS = {
    QuickAction.CUSTOM: "Ask AI",
    QuickAction.PARAPHRASE: "Paraphrase",
    QuickAction.EXPAND: "Expand",
    QuickAction.SUMMARIZE: "Summarize",
    QuickAction.CITE: "Citations",
    QuickAction.PLAGIARISM: "Plagiarism Risk",
}

DEFAULT_INSTRUCTION = "Improve the following text:"

QUICK_ACTION_INSTRUCTIONS: dict[QuickAction, str] = {
    QuickAction.PARAPHRASE: (
        "Rewrite the following text to be more academic and professional, "
        "maintaining the original meaning:"
    ),
    QuickAction.EXPAND: (
        "Expand on the following text with 2-3 explanatory sentences to deepen the analysis:"
    ),
    QuickAction.SUMMARIZE: (
        "Summarize the following text concisely, retaining key academic points:"
    ),
    QuickAction.CITE: (
        "Identify where citations are likely needed in the following text and suggest "
        "the type of source (e.g., 'Requires empirical study citation'):"
    ),
    QuickAction.PLAGIARISM: (
        "Analyze the following text for potential plagiarism risks (e.g., too generic, "
        "common phrasing without attribution) and suggest how to make it more original:"
    ),
}

# Chat sidebar shortcuts.
CHAT_QUICK_PROMPTS = (
    "Improve this paragraph",
    "Make it more academic",
    "Check grammar",
    "Expand this idea",
)


def instruction_for(action: QuickAction | str, custom_prompt: str | None = None) -> str:
    """Map an action kind to its instruction text."""
    try:
        action = QuickAction(action)
    except ValueError:
        return DEFAULT_INSTRUCTION
    if action is QuickAction.CUSTOM:
        return (custom_prompt or "").strip() or DEFAULT_INSTRUCTION
    return QUICK_ACTION_INSTRUCTIONS.get(action, DEFAULT_INSTRUCTION)


def quick_action_prompt(
    action: QuickAction | str, selection: str, custom_prompt: str | None = None
) -> str:
    return f'{instruction_for(action, custom_prompt)}\n\n"{selection}"'


ANALYSIS_SYSTEM = """\
You are an academic writing evaluator. Score the text and give specific,
actionable suggestions.

Rules:
1. clarityScore, academicToneScore and vocabularyDiversityScore are integers 0-100
2. grammarRating is one of "Good", "Needs Work", "Poor"
3. readabilityLevel is a short label such as "College Level" or "High School"
4. suggestion type is one of "improvement", "correction", "tone"
5. When a suggestion targets a specific passage, copy it exactly into originalText
   and give the rewritten passage in replacement

Respond with a single JSON object matching this JSON schema, and nothing else:
{schema}"""


def analysis_system_prompt() -> str:
    schema = AnalysisResult.model_json_schema(by_alias=True)
    return ANALYSIS_SYSTEM.replace("{schema}", json.dumps(schema, indent=2))


def analysis_prompt(text: str) -> str:
    return f'''Analyze the following academic text. Provide a JSON response with scores and specific suggestions for improvement.

Text to analyze:
"""
{text}
"""'''


def chat_system_prompt(document_context: str) -> str:
    snippet = document_context[:CHAT_CONTEXT_CHARS]
    return (
        "You are an expert Academic Writing Assistant called 'AcadeWrite Pro'.\n"
        "You help students and researchers improve their writing.\n"
        f'Current Document Context: "{snippet}..." (truncated if long).\n'
        "Always be professional, encouraging, and academically rigorous.\n"
        "Keep answers concise unless asked to elaborate."
    )


def autocomplete_prompt(context: str) -> str:
    return (
        "Complete the following academic sentence naturally. Provide ONLY the completion "
        "text, starting with the next likely word. Do not repeat the input. "
        "Keep it short (max 10 words).\n\n"
        f'Input text: "{context}"'
    )
