"""Tests for the SQLite draft store."""

from acadewrite.storage.draft_store import DEFAULT_DRAFT_KEY, DraftStore


class TestDraftStore:
    def test_load_missing_returns_empty(self, draft_store):
        assert draft_store.load() == ""
        assert draft_store.saved_at() is None

    def test_save_and_load(self, draft_store):
        draft_store.save("<b>Draft</b> text")
        assert draft_store.load() == "<b>Draft</b> text"
        assert draft_store.saved_at() is not None

    def test_save_overwrites(self, draft_store):
        draft_store.save("first")
        draft_store.save("second")
        assert draft_store.load() == "second"

    def test_persists_across_instances(self, tmp_path):
        DraftStore(db_path=tmp_path / "d.db").save("kept")
        assert DraftStore(db_path=tmp_path / "d.db").load() == "kept"

    def test_keys_are_independent(self, tmp_path):
        a = DraftStore(db_path=tmp_path / "d.db", key="a")
        b = DraftStore(db_path=tmp_path / "d.db", key="b")
        a.save("alpha")
        assert b.load() == ""

    def test_clear(self, draft_store):
        draft_store.save("gone soon")
        draft_store.clear()
        assert draft_store.load() == ""

    def test_creates_parent_directory(self, tmp_path):
        store = DraftStore(db_path=tmp_path / "nested" / "dir" / "d.db")
        store.save("x")
        assert (tmp_path / "nested" / "dir" / "d.db").exists()

    def test_default_key(self, draft_store):
        assert draft_store.key == DEFAULT_DRAFT_KEY == "acade_draft_html"
