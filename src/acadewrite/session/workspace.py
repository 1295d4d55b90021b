"""Top-level application state: the document, its analysis and the chat."""

from __future__ import annotations

import html
import logging

from acadewrite.assistant.gateway import AIGateway
from acadewrite.assistant.prompts import QuickAction
from acadewrite.clients.llm_client import LLMClient
from acadewrite.config import AppConfig, EditorConfig
from acadewrite.editor.insertion import prepare_insertion
from acadewrite.editor.markup import strip_html
from acadewrite.editor.popup import AIActionPopup, PopupState
from acadewrite.editor.selection import SelectionRange, SelectionTracker
from acadewrite.editor.surface import EditorSurface
from acadewrite.exceptions import SuggestionNotFoundError, UserInputError
from acadewrite.export import export_document
from acadewrite.models.analysis import AnalysisResult, Suggestion
from acadewrite.models.chat import ChatMessage
from acadewrite.parsers.upload_parser import parse_upload
from acadewrite.session.analysis_trigger import AnalysisTrigger
from acadewrite.session.autocomplete import AutocompleteScheduler
from acadewrite.storage.draft_store import DraftStore

logger = logging.getLogger(__name__)

SUGGESTION_MISMATCH_MESSAGE = "Could not find exact text match. It may have been edited."


class Workspace:
    """Owns and mutates the document, analysis result and chat history.

    Every document mutation is persisted to the draft store. With
    ``auto_analyze`` set (requires a running event loop), mutations also
    re-arm the debounced analysis and keystrokes re-arm autocomplete;
    otherwise callers invoke ``analyze_now`` themselves.
    """

    def __init__(
        self,
        gateway: AIGateway,
        store: DraftStore | None = None,
        *,
        editor_config: EditorConfig | None = None,
        auto_analyze: bool = True,
    ):
        cfg = editor_config or EditorConfig()
        self.gateway = gateway
        self.store = store
        self.auto_analyze = auto_analyze
        self.text = ""
        self.generation = 0
        self.analysis: AnalysisResult | None = None
        self.chat_history: list[ChatMessage] = []
        self.chat_loading = False
        self.selection = SelectionTracker()
        self.surface = EditorSurface("", 0, on_change=self.set_text)
        self.popup = AIActionPopup(gateway)
        self.analysis_trigger = AnalysisTrigger(
            gateway,
            self._store_analysis,
            delay=cfg.analysis_debounce_seconds,
            min_chars=cfg.analysis_min_chars,
        )
        self.autocomplete = AutocompleteScheduler(
            gateway,
            self.surface,
            idle_seconds=cfg.autocomplete_idle_seconds,
            min_chars=cfg.autocomplete_min_chars,
            popup_open=lambda: self.popup.is_open,
        )

    # -- document ------------------------------------------------------------

    @property
    def plain_text(self) -> str:
        return strip_html(self.text)

    @property
    def analyzing(self) -> bool:
        return self.analysis_trigger.analyzing

    def load(self) -> str:
        """Load the stored draft (empty when none) into the editor."""
        self.text = self.store.load() if self.store else ""
        self.surface.sync(self.text)
        return self.text

    def set_text(self, markup: str) -> None:
        """Replace the document markup, persist it and schedule analysis.

        Saved ranges (the tracked selection and the popup's) are moved
        across the change so they keep covering the same text.
        """
        before, self.text = self.text, markup
        self.selection.follow_edit(before, markup)
        self.popup.follow_edit(before, markup)
        if self.store is not None:
            self.store.save(markup)
        if self.auto_analyze:
            self.analysis_trigger.document_changed(markup)

    def edit(self, markup: str) -> None:
        """Record a user edit made in the editor surface."""
        self.surface.on_input(markup)
        self.set_text(markup)
        if self.auto_analyze:
            self.autocomplete.keystroke()

    def _replace_document(self, markup: str) -> None:
        self.analysis_trigger.invalidate()
        self.generation += 1
        self.surface.reload(markup, self.generation)
        self.popup.close()
        self.set_text(markup)

    def new_document(self) -> None:
        """Clear the document, analysis, chat and saved selection."""
        self.autocomplete.cancel()
        self.analysis = None
        self.chat_history = []
        self.selection.clear()
        self._replace_document("")
        logger.info("Started a new document (generation %d)", self.generation)

    def upload(self, filename: str, data: bytes) -> str:
        """Replace the document with an uploaded .txt/.md file."""
        markup = parse_upload(filename, data)
        self._replace_document(markup)
        logger.info("Loaded %s (%d bytes)", filename, len(data))
        return markup

    def export(self, fmt: str) -> bytes:
        return export_document(self.text, fmt)

    # -- selection -----------------------------------------------------------

    def capture_selection(self, start: int, end: int) -> SelectionRange:
        """Record the user's selection in the editor for later apply."""
        selection = self.surface.select(start, end)
        self.selection.capture(selection)
        return selection

    def capture_passage(self, passage: str) -> SelectionRange | None:
        """Select a visible passage of the document, if it can be located."""
        selection = self.surface.select_passage(passage)
        if selection is not None:
            self.selection.capture(selection)
        return selection

    # -- analysis ------------------------------------------------------------

    def _store_analysis(self, result: AnalysisResult) -> None:
        self.analysis = result

    async def analyze_now(self) -> AnalysisResult | None:
        """Run the analysis immediately instead of waiting for the debounce."""
        self.analysis_trigger.cancel()
        return await self.analysis_trigger.run(self.text)

    def apply_suggestion(self, suggestion: Suggestion) -> bool:
        """Replace the suggestion's original text with its replacement.

        Returns False for suggestions without a replacement pair. Raises
        SuggestionNotFoundError, leaving the document untouched, when the
        original text no longer appears verbatim.
        """
        if not suggestion.is_applicable:
            return False
        original = suggestion.original_text or ""
        for needle, replacement in (
            (original, suggestion.replacement or ""),
            (
                html.escape(original, quote=False),
                html.escape(suggestion.replacement or "", quote=False),
            ),
        ):
            if needle in self.text:
                break
        else:
            raise SuggestionNotFoundError(SUGGESTION_MISMATCH_MESSAGE)

        self._replace_document(self.text.replace(needle, replacement, 1))
        if self.analysis is not None:
            self.analysis = self.analysis.without_suggestion(suggestion)
        return True

    # -- quick actions ---------------------------------------------------------

    async def run_quick_action(self, action: QuickAction | str) -> PopupState:
        """Open the AI action popup for the current editor selection."""
        self.surface.require_selected_text()
        self.selection.capture(self.surface.selection)
        return await self.popup.start(action, self.surface)

    async def submit_custom_prompt(self, prompt: str) -> PopupState:
        return await self.popup.submit(prompt)

    def apply_popup_result(self) -> SelectionRange:
        caret = self.popup.apply(self.surface)
        self.selection.capture(caret)
        return caret

    # -- chat ----------------------------------------------------------------

    async def send_chat(self, message: str) -> ChatMessage:
        """Append the user's message, ask the assistant and append its reply."""
        message = message.strip()
        if not message:
            raise UserInputError("Message is empty.")
        history = list(self.chat_history)
        self.chat_history.append(ChatMessage(role="user", content=message))
        self.chat_loading = True
        try:
            reply = await self.gateway.chat(history, message, self.plain_text)
        finally:
            self.chat_loading = False
        model_msg = ChatMessage(role="model", content=reply)
        self.chat_history.append(model_msg)
        return model_msg

    def apply_chat_message(self, message: ChatMessage) -> SelectionRange:
        """Insert an assistant reply at the saved selection."""
        if message.role != "model":
            raise UserInputError("Only assistant replies can be applied to the document.")
        target = self.selection.require(self.text, self.generation)
        caret = self.surface.insert_at(target, prepare_insertion(message.content))
        self.selection.capture(caret)
        return caret


def create_workspace(
    config: AppConfig,
    *,
    llm: LLMClient | None = None,
    auto_analyze: bool = True,
) -> Workspace:
    """Wire a workspace from configuration and load the stored draft."""
    llm = llm or LLMClient(timeout=config.llm.timeout, max_attempts=config.llm.max_retries)
    gateway = AIGateway(
        llm,
        analysis_model=config.llm.analysis_model,
        chat_model=config.llm.chat_model,
        autocomplete_model=config.llm.autocomplete_model,
    )
    store = DraftStore(
        db_path=config.storage.resolved_db_path,
        key=config.storage.draft_key,
    )
    workspace = Workspace(
        gateway,
        store,
        editor_config=config.editor,
        auto_analyze=auto_analyze,
    )
    workspace.load()
    return workspace
