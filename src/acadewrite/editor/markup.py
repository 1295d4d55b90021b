"""Helpers for the document markup string: stripping, escaping, counting."""

from __future__ import annotations

import html
from html.parser import HTMLParser

BLOCK_TAGS = frozenset(
    {"p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "ul", "ol", "blockquote", "pre"}
)
EMPTY_VIEWS = ("", "<br>", "<br/>", "<br />")


class _TextExtractor(HTMLParser):
    """Collects text content, turning <br> and block boundaries into newlines."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.parts: list[str] = []

    def _newline(self) -> None:
        if self.parts and not self.parts[-1].endswith("\n"):
            self.parts.append("\n")

    def handle_starttag(self, tag: str, attrs) -> None:
        tag = tag.lower()
        if tag == "br":
            self.parts.append("\n")
        elif tag in BLOCK_TAGS:
            self._newline()

    def handle_startendtag(self, tag: str, attrs) -> None:
        self.handle_starttag(tag, attrs)

    def handle_endtag(self, tag: str) -> None:
        if tag.lower() in BLOCK_TAGS:
            self._newline()

    def handle_data(self, data: str) -> None:
        if data:
            self.parts.append(data)


def strip_html(markup: str) -> str:
    """Return the plain text of a markup string."""
    if not markup:
        return ""
    parser = _TextExtractor()
    parser.feed(markup)
    parser.close()
    return "".join(parser.parts).strip("\n")


def plain_text_to_markup(text: str) -> str:
    """Escape reserved characters and convert newlines to <br>."""
    return html.escape(text, quote=False).replace("\n", "<br>")


def word_count(markup: str) -> int:
    return len(strip_html(markup).split())


def char_count(markup: str) -> int:
    return len(strip_html(markup))


def is_empty_view(markup: str) -> bool:
    return markup.strip() in EMPTY_VIEWS
