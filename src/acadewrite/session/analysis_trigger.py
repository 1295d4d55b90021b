"""Debounced analysis of the document after the user stops typing."""

from __future__ import annotations

import logging
from typing import Callable

from acadewrite.assistant.gateway import AIGateway
from acadewrite.editor.markup import strip_html
from acadewrite.models.analysis import AnalysisResult
from acadewrite.utils.debounce import Debouncer

logger = logging.getLogger(__name__)


class AnalysisTrigger:
    """Re-analyzes the document after ``delay`` seconds of quiescence.

    In-flight requests are never cancelled. Each run takes a sequence
    number and only the most recently started run may publish its result,
    so a slow, superseded response cannot overwrite a newer one.
    """

    def __init__(
        self,
        gateway: AIGateway,
        on_result: Callable[[AnalysisResult], None],
        *,
        delay: float = 2.0,
        min_chars: int = 50,
    ):
        self.gateway = gateway
        self.on_result = on_result
        self.min_chars = min_chars
        self.analyzing = False
        self._debouncer = Debouncer(delay, self.run)
        self._issued = 0

    def document_changed(self, markup: str) -> None:
        """Re-arm the quiescence timer for the latest document."""
        self._debouncer.trigger(markup)

    def cancel(self) -> None:
        self._debouncer.cancel()

    async def flush(self) -> None:
        await self._debouncer.flush()

    async def run(self, markup: str) -> AnalysisResult | None:
        """Analyze now. Returns None when the text is too short or the run was superseded."""
        plain = strip_html(markup)
        if len(plain) <= self.min_chars:
            return None

        self._issued += 1
        seq = self._issued
        self.analyzing = True
        try:
            result = await self.gateway.analyze(plain)
        finally:
            if seq == self._issued:
                self.analyzing = False

        if seq != self._issued:
            logger.debug("Discarding superseded analysis #%d (latest #%d)", seq, self._issued)
            return None
        self.on_result(result)
        return result

    def invalidate(self) -> None:
        """Drop any in-flight result, e.g. when the document is replaced."""
        self.cancel()
        self._issued += 1
        self.analyzing = False
