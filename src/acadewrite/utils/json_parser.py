"""Pull a JSON object out of an LLM reply."""

from __future__ import annotations

import json
import re

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*\n?(.*?)\n?```\s*$", re.DOTALL)


def extract_json(text: str) -> dict:
    """Extract a JSON object from an LLM response.

    Accepts a bare object, an object wrapped in a ```json fence, or an
    object embedded in surrounding prose (first '{' to last '}').
    Raises ValueError when no object can be decoded.
    """
    text = (text or "").strip()

    for candidate in _candidates(text):
        try:
            data = json.loads(candidate)
        except json.JSONDecodeError:
            continue
        if isinstance(data, dict):
            return data

    raise ValueError(f"Could not extract JSON object from text: {text[:200]}...")


def _candidates(text: str):
    yield text
    fenced = _FENCE_RE.match(text)
    if fenced:
        yield fenced.group(1).strip()
    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        yield text[start : end + 1]
