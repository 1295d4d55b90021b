"""Streamlit Web UI for acadewrite.

Layout:
  Sidebar  — new document, .txt/.md upload, export downloads
  Editor   — markup editor, formatting toolbar, quick actions, action popup
  Assistant tabs — chat, analysis dashboard, suggestions
"""

from __future__ import annotations

import asyncio
import logging
import os

logger = logging.getLogger(__name__)

import nest_asyncio
import streamlit as st
from dotenv import load_dotenv

load_dotenv()
nest_asyncio.apply()

# Streamlit Cloud: sync st.secrets → os.environ so the LLM client can read the key
for key in ("ANTHROPIC_API_KEY",):
    if key not in os.environ:
        try:
            os.environ[key] = st.secrets[key]
        except Exception:
            pass

from acadewrite.assistant.prompts import CHAT_QUICK_PROMPTS, QuickAction
from acadewrite.config import load_config
from acadewrite.editor.markup import strip_html
from acadewrite.editor.surface import FormatCommand
from acadewrite.exceptions import AcadeWriteError
from acadewrite.export import EXPORT_FORMATS
from acadewrite.parsers.upload_parser import ACCEPTED_SUFFIXES
from acadewrite.session.workspace import Workspace, create_workspace

# ---------------------------------------------------------------------------
# Page config
# ---------------------------------------------------------------------------

st.set_page_config(
    page_title="AcadeWrite",
    page_icon=":memo:",
    layout="wide",
)

# ---------------------------------------------------------------------------
# Session state
# ---------------------------------------------------------------------------

config = load_config()

if "loop" not in st.session_state:
    st.session_state.loop = asyncio.new_event_loop()

if "workspace" not in st.session_state:
    try:
        st.session_state.workspace = create_workspace(config, auto_analyze=False)
    except Exception:
        logger.exception("Workspace initialization failed")
        st.error("Could not start the assistant. Check ANTHROPIC_API_KEY and try again.")
        st.stop()
    st.session_state.analysis_stale = bool(st.session_state.workspace.text)

ws: Workspace = st.session_state.workspace


def _run(coro):
    """Run a coroutine on this session's event loop (reused so the HTTP client stays bound)."""
    return st.session_state.loop.run_until_complete(coro)


def _guarded(fn, *args):
    """Call fn, surfacing user-input errors as warnings."""
    try:
        return fn(*args)
    except AcadeWriteError as e:
        st.warning(str(e))
        return None


def _on_editor_change() -> None:
    ws.edit(st.session_state.editor_markup)
    st.session_state.analysis_stale = True


def _document_replaced() -> None:
    st.session_state.analysis_stale = True
    st.session_state.reset_passage = True


# ---------------------------------------------------------------------------
# Sidebar
# ---------------------------------------------------------------------------

with st.sidebar:
    st.title("AcadeWrite")
    st.caption("AI academic writing assistant")

    if st.button("New document", use_container_width=True):
        ws.new_document()
        _document_replaced()
        st.rerun()

    st.divider()

    upload = st.file_uploader(
        "Upload a draft",
        type=[s.lstrip(".") for s in ACCEPTED_SUFFIXES],
        help="Plain text or markdown. Replaces the current document.",
    )
    if upload and st.button("Load file", use_container_width=True):
        if _guarded(ws.upload, upload.name, upload.getvalue()) is not None:
            _document_replaced()
            st.rerun()

    st.divider()
    st.subheader("Export")
    for fmt in EXPORT_FORMATS.values():
        try:
            data = ws.export(fmt.key)
        except Exception:
            logger.exception("Export to %s failed", fmt.key)
            st.error(f"{fmt.label} export failed.")
            continue
        st.download_button(
            fmt.label,
            data=data,
            file_name=fmt.filename(config.export.basename),
            mime=fmt.mime,
            use_container_width=True,
        )

# ---------------------------------------------------------------------------
# Welcome note
# ---------------------------------------------------------------------------

if not strip_html(ws.text).strip():
    st.info(
        "**Welcome to AcadeWrite.** Start typing or upload a draft. Select a passage to "
        "paraphrase, expand, summarize or check it, ask the assistant for help in the chat, "
        "and watch the analysis dashboard update as you write."
    )

editor_col, assistant_col = st.columns([3, 2], gap="large")

# ---------------------------------------------------------------------------
# Editor
# ---------------------------------------------------------------------------


def _render_popup() -> None:
    popup = ws.popup
    if not popup.is_open:
        return
    with st.container(border=True):
        action = popup.state.action
        st.markdown(f"**{action.label}**")
        if popup.mode == "prompt":
            instruction = st.text_input(
                "What should the AI do?",
                placeholder="e.g. make this more concise",
                key="popup_prompt",
            )
            c1, c2 = st.columns(2)
            if c1.button("Run", type="primary", disabled=not instruction.strip()):
                with st.spinner("Thinking..."):
                    _guarded(_run, ws.submit_custom_prompt(instruction))
                st.rerun()
            if c2.button("Cancel"):
                ws.popup.close()
                st.rerun()
        elif popup.mode == "processing":
            st.caption("Thinking...")
        elif popup.mode == "result":
            st.markdown(popup.copy_text())
            with st.expander("Copy text"):
                st.code(popup.copy_text(), language=None)
            c1, c2 = st.columns(2)
            if c1.button("Apply", type="primary", disabled=not popup.can_apply):
                if _guarded(ws.apply_popup_result) is not None:
                    st.session_state.analysis_stale = True
                    st.rerun()
            if c2.button("Close"):
                ws.popup.close()
                st.rerun()


_FORMAT_BUTTONS = [
    ("B", FormatCommand.BOLD),
    ("I", FormatCommand.ITALIC),
    ("U", FormatCommand.UNDERLINE),
    ("H1", FormatCommand.HEADING_1),
    ("H2", FormatCommand.HEADING_2),
    ("Quote", FormatCommand.QUOTE),
    ("• List", FormatCommand.BULLET_LIST),
    ("1. List", FormatCommand.NUMBERED_LIST),
    ("Left", FormatCommand.ALIGN_LEFT),
    ("Center", FormatCommand.ALIGN_CENTER),
    ("Right", FormatCommand.ALIGN_RIGHT),
    ("Justify", FormatCommand.ALIGN_JUSTIFY),
    ("Indent", FormatCommand.INDENT),
]

with editor_col:
    st.header("Manuscript")

    if st.session_state.get("editor_markup") != ws.text:
        st.session_state.editor_markup = ws.text
    st.text_area(
        "Document",
        key="editor_markup",
        height=360,
        placeholder="Start writing your manuscript...",
        on_change=_on_editor_change,
        label_visibility="collapsed",
    )
    st.caption(f"{ws.surface.word_count} words · {ws.surface.char_count} characters")

    # Selection: the passage AI actions and formatting operate on
    if st.session_state.pop("reset_passage", False):
        st.session_state.passage = ""
    passage = st.text_input(
        "Passage to work on",
        key="passage",
        placeholder="Paste a sentence from the document to select it",
    )
    if passage:
        if ws.capture_passage(passage) is None:
            ws.selection.clear()
            st.warning("That passage was not found in the document.")
        else:
            st.caption(f"Selected: “{ws.surface.selected_text[:120]}”")

    fmt_cols = st.columns(len(_FORMAT_BUTTONS))
    for col, (label, command) in zip(fmt_cols, _FORMAT_BUTTONS):
        if col.button(label, key=f"fmt_{command.value}"):
            ws.surface.apply_format(command)
            st.session_state.analysis_stale = True
            st.rerun()

    action_cols = st.columns(len(QuickAction))
    for col, quick_action in zip(action_cols, QuickAction):
        if col.button(quick_action.label, key=f"qa_{quick_action.name}", disabled=ws.popup.is_open):
            with st.spinner(f"{quick_action.label}..."):
                _guarded(_run, ws.run_quick_action(quick_action))
            st.rerun()

    _render_popup()

    # Autocomplete
    c1, c2 = st.columns([1, 3])
    if c1.button("Suggest continuation", disabled=ws.popup.is_open):
        with st.spinner("Thinking..."):
            _run(ws.autocomplete.suggest())
    if ws.surface.suggestion:
        c2.markdown(f"*…{ws.surface.suggestion}*")
        if c2.button("Accept suggestion (Tab)"):
            ws.surface.handle_key("Tab")
            st.session_state.analysis_stale = True
            st.rerun()

    with st.expander("Preview", expanded=False):
        st.markdown(ws.text or "_Empty manuscript_", unsafe_allow_html=True)

# ---------------------------------------------------------------------------
# Assistant: chat, analysis, suggestions
# ---------------------------------------------------------------------------


def _render_chat() -> None:
    for msg in ws.chat_history:
        with st.chat_message("user" if msg.role == "user" else "assistant"):
            st.markdown(msg.content)
            if msg.role == "model" and st.button("Apply to document", key=f"apply_{msg.id}"):
                if _guarded(ws.apply_chat_message, msg) is not None:
                    st.session_state.analysis_stale = True
                    st.rerun()

    prompt_cols = st.columns(len(CHAT_QUICK_PROMPTS))
    quick = None
    for i, (col, text) in enumerate(zip(prompt_cols, CHAT_QUICK_PROMPTS)):
        if col.button(text, key=f"chat_quick_{i}", disabled=ws.chat_loading):
            quick = text

    message = st.chat_input("Ask the assistant...") or quick
    if message:
        with st.spinner("Thinking..."):
            _guarded(_run, ws.send_chat(message))
        st.rerun()


def _render_analysis() -> None:
    if st.session_state.get("analysis_stale"):
        with st.spinner("Analyzing..."):
            _run(ws.analyze_now())
        st.session_state.analysis_stale = False

    result = ws.analysis
    if result is None:
        st.caption("Write at least a few sentences to see the analysis.")
        return
    c1, c2, c3 = st.columns(3)
    c1.metric("Clarity", result.clarity_score)
    c1.progress(result.clarity_score / 100)
    c2.metric("Academic tone", result.academic_tone_score)
    c2.progress(result.academic_tone_score / 100)
    c3.metric("Grammar", result.grammar_rating)

    insights = result.document_insights
    st.markdown(f"**Readability:** {result.readability_level}")
    i1, i2, i3, i4 = st.columns(4)
    i1.metric("Reading time", insights.estimated_reading_time)
    i2.metric("Vocabulary", insights.vocabulary_diversity_score)
    i3.metric("Complex sentences", insights.complex_sentence_count)
    i4.metric("Transitions", insights.transition_words_count)

    if st.button("Re-analyze"):
        st.session_state.analysis_stale = True
        st.rerun()


_SUGGESTION_ICONS = {"improvement": ":bulb:", "correction": ":pencil2:", "tone": ":mortar_board:"}


def _render_suggestions() -> None:
    result = ws.analysis
    if result is None or not result.suggestions:
        st.caption("No suggestions yet.")
        return
    for i, s in enumerate(result.suggestions):
        with st.container(border=True):
            st.markdown(f"{_SUGGESTION_ICONS.get(s.type, '')} **{s.type.title()}**: {s.text}")
            if s.is_applicable:
                st.markdown(f"~~{s.original_text}~~ → {s.replacement}")
                if st.button("Apply", key=f"suggestion_{i}"):
                    if _guarded(ws.apply_suggestion, s) is not None:
                        _document_replaced()
                        st.rerun()


with assistant_col:
    chat_tab, analysis_tab, suggestions_tab = st.tabs(["Chat", "Analysis", "Suggestions"])
    with chat_tab:
        _render_chat()
    with analysis_tab:
        _render_analysis()
    with suggestions_tab:
        _render_suggestions()
