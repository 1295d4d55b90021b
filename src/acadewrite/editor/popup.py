"""State machine for the inline AI action popup.

    Closed --open(Custom)--> Prompting --submit_prompt--> Processing
    Closed --open(other)---> Processing --complete/fail--> ShowingResult
    ShowingResult --apply/close--> Closed;   any state --close--> Closed
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Union

from acadewrite.assistant.gateway import QUICK_ACTION_FAILURE_REPLY, AIGateway
from acadewrite.assistant.prompts import QuickAction
from acadewrite.editor.insertion import prepare_insertion
from acadewrite.editor.selection import SelectionRange, follow_edit
from acadewrite.editor.surface import EditorSurface
from acadewrite.exceptions import InvalidTransitionError, SelectionRequiredError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Closed:
    pass


@dataclass(frozen=True)
class Prompting:
    action: QuickAction
    selection_text: str
    range: SelectionRange | None
    prompt: str = ""


@dataclass(frozen=True)
class Processing:
    action: QuickAction
    selection_text: str
    range: SelectionRange | None
    prompt: str = ""


@dataclass(frozen=True)
class ShowingResult:
    action: QuickAction
    range: SelectionRange | None
    result: str


PopupState = Union[Closed, Prompting, Processing, ShowingResult]

CLOSED = Closed()


# -- transitions ------------------------------------------------------------


def open_popup(
    state: PopupState, action: QuickAction | str, selection_text: str, selection: SelectionRange
) -> Prompting | Processing:
    if not isinstance(state, Closed):
        raise InvalidTransitionError(f"cannot open popup from {type(state).__name__}")
    if not selection_text.strip():
        raise SelectionRequiredError("Please select some text first.")
    action = QuickAction(action)
    if action is QuickAction.CUSTOM:
        return Prompting(action, selection_text, selection)
    return Processing(action, selection_text, selection)


def edit_prompt(state: PopupState, prompt: str) -> Prompting:
    if not isinstance(state, Prompting):
        raise InvalidTransitionError(f"cannot edit prompt in {type(state).__name__}")
    return Prompting(state.action, state.selection_text, state.range, prompt)


def submit_prompt(state: PopupState, prompt: str | None = None) -> Processing:
    if not isinstance(state, Prompting):
        raise InvalidTransitionError(f"cannot submit prompt in {type(state).__name__}")
    prompt = state.prompt if prompt is None else prompt
    if not prompt.strip():
        raise InvalidTransitionError("prompt is empty")
    return Processing(state.action, state.selection_text, state.range, prompt)


def complete(state: PopupState, result: str) -> ShowingResult:
    if not isinstance(state, Processing):
        raise InvalidTransitionError(f"cannot complete from {type(state).__name__}")
    return ShowingResult(state.action, state.range, result)


def close(state: PopupState) -> Closed:
    return CLOSED


# -- driver -----------------------------------------------------------------


class AIActionPopup:
    """Drives the popup state machine against the AI gateway and editor."""

    def __init__(self, gateway: AIGateway):
        self.gateway = gateway
        self.state: PopupState = CLOSED
        self._runs = 0

    @property
    def is_open(self) -> bool:
        return not isinstance(self.state, Closed)

    @property
    def mode(self) -> str:
        return {
            Closed: "closed",
            Prompting: "prompt",
            Processing: "processing",
            ShowingResult: "result",
        }[type(self.state)]

    @property
    def can_apply(self) -> bool:
        return (
            isinstance(self.state, ShowingResult)
            and self.state.range is not None
            and bool(self.state.result)
        )

    async def start(self, action: QuickAction | str, surface: EditorSurface) -> PopupState:
        """Open the popup for the surface's current selection.

        Non-custom actions run immediately; "Ask AI" waits for a prompt.
        """
        selection_text = surface.require_selected_text()
        self.state = open_popup(self.state, action, selection_text, surface.selection)
        if isinstance(self.state, Processing):
            await self._run()
        return self.state

    def set_prompt(self, prompt: str) -> None:
        self.state = edit_prompt(self.state, prompt)

    async def submit(self, prompt: str | None = None) -> PopupState:
        self.state = submit_prompt(self.state, prompt)
        await self._run()
        return self.state

    async def _run(self) -> None:
        state = self.state
        assert isinstance(state, Processing)
        self._runs += 1
        run = self._runs
        try:
            result = await self.gateway.quick_action(
                state.action, state.selection_text, state.prompt or None
            )
        except Exception:
            logger.exception("Quick action %s failed", state.action.value)
            result = QUICK_ACTION_FAILURE_REPLY
        # The state may have been closed, reopened or moved by an edit meanwhile.
        if run == self._runs and isinstance(self.state, Processing):
            self.state = complete(self.state, result)

    def follow_edit(self, before: str, after: str) -> None:
        """Move the saved range across a user edit of the document.

        An edit inside the range drops it, so the result can still be
        copied but no longer applied.
        """
        state = self.state
        if isinstance(state, Closed) or state.range is None:
            return
        moved = follow_edit(state.range, before, after)
        if moved != state.range:
            self.state = replace(state, range=moved)

    def copy_text(self) -> str:
        if not isinstance(self.state, ShowingResult):
            raise InvalidTransitionError("no result to copy")
        return self.state.result

    def apply(self, surface: EditorSurface) -> SelectionRange:
        """Insert the cleaned result at the saved selection and close."""
        if not self.can_apply:
            raise InvalidTransitionError("no result with a saved selection to apply")
        state = self.state
        assert isinstance(state, ShowingResult) and state.range is not None
        caret = surface.insert_at(state.range, prepare_insertion(state.result))
        self.close()
        return caret

    def close(self) -> None:
        self._runs += 1
        self.state = close(self.state)
