"""Plain-text export."""

from __future__ import annotations

from acadewrite.editor.markup import strip_html


def export_text(markup: str) -> bytes:
    """Strip all markup and return UTF-8 text."""
    return strip_html(markup).encode("utf-8")
