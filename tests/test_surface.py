"""Tests for the editor surface."""

import pytest

from acadewrite.editor.selection import SelectionRange
from acadewrite.editor.surface import EditorSurface, FormatCommand
from acadewrite.exceptions import SelectionRequiredError, StaleSelectionError


@pytest.fixture
def changes():
    return []


@pytest.fixture
def surface(changes):
    return EditorSurface("The cat sat.", on_change=changes.append)


class TestSync:
    def test_fills_empty_view(self):
        surface = EditorSurface("")
        surface.sync("Loaded draft")
        assert surface.view == "Loaded draft"
        assert surface.word_count == 2

    def test_does_not_clobber_edits(self):
        surface = EditorSurface("typing in progress")
        surface.sync("stale document")
        assert surface.view == "typing in progress"

    def test_empty_document_clears_view(self):
        surface = EditorSurface("old text")
        surface.sync("")
        assert surface.view == ""
        assert surface.char_count == 0

    def test_reload_replaces_view_and_generation(self):
        surface = EditorSurface("old")
        surface.suggestion = "pending"
        surface.reload("new doc", generation=3)
        assert surface.view == "new doc"
        assert surface.generation == 3
        assert surface.selection.generation == 3
        assert surface.suggestion == ""


class TestCounts:
    def test_counts_follow_input(self, surface):
        assert surface.word_count == 3
        surface.on_input("The <b>cat</b> sat on the mat.")
        assert surface.word_count == 6
        assert surface.char_count == len("The cat sat on the mat.")

    def test_input_clears_suggestion(self, surface):
        surface.set_suggestion("on the mat")
        surface.on_input("The cat sat. ")
        assert surface.suggestion == ""


class TestSelection:
    def test_select_and_text(self, surface):
        surface.select(4, 7)
        assert surface.selected_text == "cat"

    def test_select_past_end(self, surface):
        with pytest.raises(ValueError):
            surface.select(0, 100)

    def test_select_passage(self, surface):
        rng = surface.select_passage("sat")
        assert rng == SelectionRange(8, 11, 0)
        assert surface.select_passage("dog") is None

    def test_require_selected_text(self, surface):
        with pytest.raises(SelectionRequiredError, match="select some text"):
            surface.require_selected_text()
        surface.select(0, 3)
        assert surface.require_selected_text() == "The"


class TestFormatting:
    def test_bold(self, surface, changes):
        surface.select(4, 7)
        surface.apply_format(FormatCommand.BOLD)
        assert surface.view == "The <b>cat</b> sat."
        assert changes == ["The <b>cat</b> sat."]
        assert surface.selected_markup == "<b>cat</b>"

    def test_heading(self, surface):
        surface.select(0, len(surface.view))
        surface.apply_format("h1")
        assert surface.view == "<h1>The cat sat.</h1>"

    def test_alignment(self, surface):
        surface.select(0, 3)
        surface.apply_format(FormatCommand.ALIGN_CENTER)
        assert surface.view.startswith('<div style="text-align: center">The</div>')

    def test_bullet_list_splits_lines(self, changes):
        surface = EditorSurface("alpha<br>beta", on_change=changes.append)
        surface.select(0, len(surface.view))
        surface.apply_format(FormatCommand.BULLET_LIST)
        assert surface.view == "<ul><li>alpha</li><li>beta</li></ul>"

    def test_collapsed_selection_is_noop(self, surface, changes):
        surface.select(2, 2)
        surface.apply_format(FormatCommand.ITALIC)
        assert surface.view == "The cat sat."
        assert changes == []

    def test_unknown_command_rejected(self, surface):
        surface.select(0, 3)
        with pytest.raises(ValueError):
            surface.apply_format("strikeThrough")


class TestInsertion:
    def test_insert_replaces_range_and_moves_caret(self, surface, changes):
        caret = surface.insert_at(SelectionRange(4, 7, 0), "dog")
        assert surface.view == "The dog sat."
        assert caret == SelectionRange(7, 7, 0)
        assert changes == ["The dog sat."]

    def test_stale_generation_rejected(self, surface):
        with pytest.raises(StaleSelectionError):
            surface.insert_at(SelectionRange(0, 3, generation=1), "x")
        assert surface.view == "The cat sat."

    def test_range_past_end_rejected(self, surface):
        with pytest.raises(StaleSelectionError):
            surface.insert_at(SelectionRange(0, 50, 0), "x")


class TestAutocompleteAcceptance:
    def test_tab_accepts_suggestion(self, surface, changes):
        surface.set_suggestion("  It was content.  ")
        assert surface.handle_key("Tab") is True
        assert surface.view == "The cat sat. It was content."
        assert surface.suggestion == ""
        assert changes[-1] == surface.view

    def test_suggestion_escaped(self, surface):
        surface.set_suggestion("a < b")
        surface.accept_suggestion()
        assert surface.view.endswith(" a &lt; b")

    def test_tab_without_suggestion_not_consumed(self, surface):
        assert surface.handle_key("Tab") is False
        assert surface.view == "The cat sat."

    def test_other_keys_ignored(self, surface):
        surface.set_suggestion("more")
        assert surface.handle_key("Enter") is False
        assert surface.suggestion == "more"
