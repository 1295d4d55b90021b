"""Editable document surface: live view, selection, formatting and insertion."""

from __future__ import annotations

import html
import logging
from enum import Enum
from typing import Callable

from acadewrite.editor.markup import char_count, is_empty_view, word_count
from acadewrite.editor.selection import SelectionRange, caret_at_end, find_passage
from acadewrite.exceptions import SelectionRequiredError, StaleSelectionError

logger = logging.getLogger(__name__)

ACCEPT_SUGGESTION_KEY = "Tab"
SELECT_TEXT_MESSAGE = "Please select some text first."


class FormatCommand(str, Enum):
    BOLD = "bold"
    ITALIC = "italic"
    UNDERLINE = "underline"
    HEADING_1 = "h1"
    HEADING_2 = "h2"
    QUOTE = "blockquote"
    BULLET_LIST = "insertUnorderedList"
    NUMBERED_LIST = "insertOrderedList"
    ALIGN_LEFT = "justifyLeft"
    ALIGN_CENTER = "justifyCenter"
    ALIGN_RIGHT = "justifyRight"
    ALIGN_JUSTIFY = "justifyFull"
    INDENT = "indent"


_INLINE_TAGS = {
    FormatCommand.BOLD: "b",
    FormatCommand.ITALIC: "i",
    FormatCommand.UNDERLINE: "u",
}
_BLOCK_TAGS = {
    FormatCommand.HEADING_1: "h1",
    FormatCommand.HEADING_2: "h2",
    FormatCommand.QUOTE: "blockquote",
}
_ALIGNMENTS = {
    FormatCommand.ALIGN_LEFT: "left",
    FormatCommand.ALIGN_CENTER: "center",
    FormatCommand.ALIGN_RIGHT: "right",
    FormatCommand.ALIGN_JUSTIFY: "justify",
}


def _wrap(command: FormatCommand, selected: str) -> str:
    if command in _INLINE_TAGS:
        tag = _INLINE_TAGS[command]
        return f"<{tag}>{selected}</{tag}>"
    if command in _BLOCK_TAGS:
        tag = _BLOCK_TAGS[command]
        return f"<{tag}>{selected}</{tag}>"
    if command in _ALIGNMENTS:
        return f'<div style="text-align: {_ALIGNMENTS[command]}">{selected}</div>'
    if command == FormatCommand.INDENT:
        return f'<div style="margin-left: 40px">{selected}</div>'
    list_tag = "ul" if command == FormatCommand.BULLET_LIST else "ol"
    lines = [line for line in selected.replace("<br/>", "<br>").split("<br>") if line.strip()]
    items = "".join(f"<li>{line}</li>" for line in lines)
    return f"<{list_tag}>{items}</{list_tag}>"


class EditorSurface:
    """Live view of the document markup plus the user's current selection.

    Mutations made through the surface (formatting, insertion, accepting an
    autocomplete suggestion) are reported through ``on_change``.
    """

    def __init__(
        self,
        markup: str = "",
        generation: int = 0,
        on_change: Callable[[str], None] | None = None,
    ):
        self.view = markup
        self.generation = generation
        self.on_change = on_change
        self.selection: SelectionRange = caret_at_end(markup, generation)
        self.suggestion = ""
        self.word_count = 0
        self.char_count = 0
        self._update_counts()

    # -- document sync -----------------------------------------------------

    def sync(self, document: str) -> None:
        """Pull an external document change into the view.

        The view is only overwritten while it is empty so that in-progress
        edits are never clobbered. An empty document clears the view.
        """
        if not document:
            self.view = ""
            self.selection = caret_at_end("", self.generation)
        elif self.view != document and is_empty_view(self.view):
            self.view = document
            self.selection = caret_at_end(document, self.generation)
        self._update_counts()

    def reload(self, document: str, generation: int) -> None:
        """Replace the view wholesale for a new document generation."""
        self.view = document
        self.generation = generation
        self.selection = caret_at_end(document, generation)
        self.suggestion = ""
        self._update_counts()

    def on_input(self, markup: str) -> None:
        """Record a user edit of the view."""
        self.view = markup
        self.suggestion = ""
        self.selection = caret_at_end(markup, self.generation)
        self._update_counts()

    def _update_counts(self) -> None:
        self.word_count = word_count(self.view)
        self.char_count = char_count(self.view)

    def _commit(self, markup: str) -> None:
        self.view = markup
        self._update_counts()
        if self.on_change is not None:
            self.on_change(markup)

    # -- selection -----------------------------------------------------------

    def select(self, start: int, end: int) -> SelectionRange:
        if end > len(self.view):
            raise ValueError(f"selection end {end} is past the end of the document")
        self.selection = SelectionRange(start, end, self.generation)
        return self.selection

    def select_passage(self, passage: str) -> SelectionRange | None:
        """Select the first occurrence of a visible text passage."""
        found = find_passage(self.view, passage, self.generation)
        if found is not None:
            self.selection = found
        return found

    @property
    def selected_markup(self) -> str:
        return self.selection.markup(self.view)

    @property
    def selected_text(self) -> str:
        return self.selection.text(self.view)

    def require_selected_text(self) -> str:
        """Return the selected text, raising when nothing is selected."""
        text = self.selected_text
        if not text.strip():
            raise SelectionRequiredError(SELECT_TEXT_MESSAGE)
        return text

    # -- editing -------------------------------------------------------------

    def apply_format(self, command: FormatCommand) -> None:
        """Apply a formatting command to the live selection."""
        command = FormatCommand(command)
        if self.selection.collapsed:
            logger.debug("Format %s ignored: empty selection", command.value)
            return
        wrapped = _wrap(command, self.selected_markup)
        start = self.selection.start
        self._commit(self.view[:start] + wrapped + self.view[self.selection.end :])
        self.selection = SelectionRange(start, start + len(wrapped), self.generation)

    def insert_at(self, selection: SelectionRange, markup: str) -> SelectionRange:
        """Replace the markup covered by ``selection``; the caret lands after it."""
        if selection.generation != self.generation or not selection.fits(self.view):
            raise StaleSelectionError(
                "The saved selection no longer matches the document. Please select again."
            )
        updated = self.view[: selection.start] + markup + self.view[selection.end :]
        caret = selection.start + len(markup)
        self._commit(updated)
        self.selection = SelectionRange(caret, caret, self.generation)
        return self.selection

    def insert_at_selection(self, markup: str) -> SelectionRange:
        return self.insert_at(self.selection, markup)

    # -- autocomplete ----------------------------------------------------------

    def set_suggestion(self, suggestion: str) -> None:
        self.suggestion = suggestion.strip()

    def accept_suggestion(self) -> bool:
        """Insert the pending autocomplete suggestion at the caret."""
        if not self.suggestion:
            return False
        caret = SelectionRange(self.selection.end, self.selection.end, self.generation)
        self.insert_at(caret, " " + html.escape(self.suggestion, quote=False))
        self.suggestion = ""
        return True

    def handle_key(self, key: str) -> bool:
        """Handle a key press; returns True when the key was consumed."""
        if key == ACCEPT_SUGGESTION_KEY and self.suggestion:
            return self.accept_suggestion()
        return False
