"""Turn raw model output into markup that can be inserted into the document."""

from __future__ import annotations

import html
import re

import markdown

# "Sure, here's a revised version:\n\n..." style openers.
_PREAMBLE_RE = re.compile(
    r"^(Certainly|Sure|Okay|Here's|Here is|I've updated|Based on your request),?.*?\n\n",
    re.IGNORECASE | re.DOTALL,
)
_LEAD_IN_RE = re.compile(
    r"^(Here is|Here's) the (rewritten|improved|edited|revised) (text|version):?\s*",
    re.IGNORECASE,
)
_LIST_ITEM_RE = re.compile(r"^\s*(?:[-*+]|\d+\.)\s+\S")
_QUOTE_PAIRS = (('"', '"'), ("'", "'"), ("“", "”"))


def clean_ai_output(text: str) -> str:
    """Strip conversational boilerplate and wrapping quotes from a model reply."""
    content = (text or "").strip()
    content = _PREAMBLE_RE.sub("", content, count=1)
    content = _strip_wrapping_quotes(content.strip())
    content = _LEAD_IN_RE.sub("", content, count=1)
    return content.strip()


def _strip_wrapping_quotes(content: str) -> str:
    for opening, closing in _QUOTE_PAIRS:
        if len(content) >= 2 and content.startswith(opening) and content.endswith(closing):
            return content[1:-1]
    return content


def _separate_lists(text: str) -> str:
    # Python-Markdown only starts a list after a blank line.
    out: list[str] = []
    prev_is_item = False
    for line in text.split("\n"):
        is_item = bool(_LIST_ITEM_RE.match(line))
        if is_item and not prev_is_item and out and out[-1].strip():
            out.append("")
        out.append(line)
        prev_is_item = is_item
    return "\n".join(out)


def markdown_to_markup(text: str) -> str:
    """Convert the light markdown models emit (bold, italic, lists, headings,
    line breaks) to editor markup. Raw HTML in the reply is escaped.

    A reply that renders to a single paragraph is returned without the
    surrounding <p> so it flows into the sentence it replaces.
    """
    if not text:
        return ""
    escaped = html.escape(text, quote=False)
    rendered = markdown.markdown(_separate_lists(escaped), extensions=["nl2br", "sane_lists"])
    rendered = rendered.replace("<br />\n", "<br>").replace("<br />", "<br>")
    rendered = re.sub(r">\s*\n\s*<", "><", rendered).strip()

    single = re.fullmatch(r"<p>(.*)</p>", rendered, re.DOTALL)
    if single and "<p>" not in single.group(1):
        return single.group(1)
    return rendered


def prepare_insertion(text: str) -> str:
    """Clean a model reply and convert it to insertable markup."""
    return markdown_to_markup(clean_ai_output(text))
