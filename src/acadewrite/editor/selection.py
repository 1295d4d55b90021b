"""Selection ranges over the document markup and the tracker that remembers them."""

from __future__ import annotations

import html
from dataclasses import dataclass

from acadewrite.editor.markup import strip_html
from acadewrite.exceptions import SelectionRequiredError, StaleSelectionError

NO_LOCATION_MESSAGE = (
    "Please click or select a location in the editor first so I know where to apply the change."
)


@dataclass(frozen=True)
class SelectionRange:
    """Half-open [start, end) character span into the markup string.

    ``generation`` identifies the document the range was captured against.
    """

    start: int
    end: int
    generation: int = 0

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid selection range {self.start}..{self.end}")

    @property
    def collapsed(self) -> bool:
        return self.start == self.end

    def markup(self, document: str) -> str:
        return document[self.start : self.end]

    def text(self, document: str) -> str:
        return strip_html(self.markup(document))

    def fits(self, document: str) -> bool:
        return self.end <= len(document)


def caret_at_end(document: str, generation: int = 0) -> SelectionRange:
    return SelectionRange(len(document), len(document), generation)


def find_passage(document: str, passage: str, generation: int = 0) -> SelectionRange | None:
    """Locate a visible text passage in the markup and return its range.

    Tries the passage verbatim, then its HTML-escaped form. Passages that
    span formatting tags are not found.
    """
    passage = passage.strip()
    if not passage:
        return None
    for needle in (passage, html.escape(passage, quote=False)):
        idx = document.find(needle)
        if idx != -1:
            return SelectionRange(idx, idx + len(needle), generation)
    return None


def changed_span(before: str, after: str) -> tuple[int, int, int]:
    """Return (start, old_end, new_end) of the region an edit rewrote."""
    limit = min(len(before), len(after))
    start = 0
    while start < limit and before[start] == after[start]:
        start += 1
    tail = 0
    while tail < limit - start and before[-1 - tail] == after[-1 - tail]:
        tail += 1
    return start, len(before) - tail, len(after) - tail


def follow_edit(selection: SelectionRange, before: str, after: str) -> SelectionRange | None:
    """Move a range across an edit of the markup.

    Edits wholly before the range shift it; edits wholly after leave it
    alone. Returns None when the edit touched the selected markup.
    """
    start, old_end, new_end = changed_span(before, after)
    if start == old_end == new_end:
        return selection
    if old_end <= selection.start:
        delta = new_end - old_end
        return SelectionRange(selection.start + delta, selection.end + delta, selection.generation)
    if start >= selection.end:
        return selection
    return None


class SelectionTracker:
    """Remembers the last selection the user made in the editor."""

    def __init__(self) -> None:
        self.last_range: SelectionRange | None = None

    def capture(self, selection: SelectionRange) -> None:
        self.last_range = selection

    def clear(self) -> None:
        self.last_range = None

    def follow_edit(self, before: str, after: str) -> None:
        """Keep the saved range on the same text after a user edit.

        An edit inside the saved range forgets it.
        """
        if self.last_range is not None:
            self.last_range = follow_edit(self.last_range, before, after)

    def require(self, document: str, generation: int) -> SelectionRange:
        """Return the saved range if it is still valid for this document."""
        if self.last_range is None:
            raise SelectionRequiredError(NO_LOCATION_MESSAGE)
        if self.last_range.generation != generation or not self.last_range.fits(document):
            raise StaleSelectionError(
                "The saved selection belongs to an earlier version of the document. "
                "Please select the location again."
            )
        return self.last_range
