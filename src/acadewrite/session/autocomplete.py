"""Idle-time autocomplete for the editor surface."""

from __future__ import annotations

import logging
from typing import Callable

from acadewrite.assistant.gateway import AIGateway
from acadewrite.editor.markup import strip_html
from acadewrite.editor.surface import EditorSurface
from acadewrite.utils.debounce import Debouncer

logger = logging.getLogger(__name__)


class AutocompleteScheduler:
    """Asks for a completion once the user has been idle for ``idle_seconds``."""

    def __init__(
        self,
        gateway: AIGateway,
        surface: EditorSurface,
        *,
        idle_seconds: float = 1.0,
        min_chars: int = 20,
        popup_open: Callable[[], bool] = lambda: False,
    ):
        self.gateway = gateway
        self.surface = surface
        self.min_chars = min_chars
        self.popup_open = popup_open
        self._debouncer = Debouncer(idle_seconds, self.suggest)

    def keystroke(self) -> None:
        """Record activity; clears the visible suggestion and re-arms the idle timer."""
        self.surface.suggestion = ""
        self._debouncer.trigger()

    def cancel(self) -> None:
        self._debouncer.cancel()

    async def flush(self) -> None:
        await self._debouncer.flush()

    async def suggest(self) -> str:
        """Fetch a suggestion for the text before the caret, if conditions allow."""
        if self.popup_open():
            return ""
        plain = strip_html(self.surface.view[: self.surface.selection.end])
        if len(plain) <= self.min_chars:
            return ""
        suggestion = await self.gateway.autocomplete(plain)
        if suggestion and not self.popup_open():
            self.surface.set_suggestion(suggestion)
        return suggestion
