"""Tests for the typer CLI."""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest
from typer.testing import CliRunner

from acadewrite.cli import app
from acadewrite.storage.draft_store import DraftStore

runner = CliRunner()


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Run the CLI in a directory whose config.yaml points at a temp draft db."""
    (tmp_path / "config.yaml").write_text(
        f"storage:\n  db_path: {tmp_path / 'drafts.db'}\n"
    )
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestImportExport:
    def test_import_replaces_draft(self, workdir):
        (workdir / "paper.txt").write_text("Line one\nLine & two", encoding="utf-8")

        result = runner.invoke(app, ["import", "paper.txt"])

        assert result.exit_code == 0
        assert DraftStore(db_path=workdir / "drafts.db").load() == "Line one<br>Line &amp; two"

    def test_import_rejects_unsupported(self, workdir):
        (workdir / "paper.pdf").write_bytes(b"%PDF")
        result = runner.invoke(app, ["import", "paper.pdf"])
        assert result.exit_code == 1
        assert "Unsupported file format" in result.output

    def test_export_draft_to_docx(self, workdir):
        DraftStore(db_path=workdir / "drafts.db").save("<h1>Title</h1>Body")
        result = runner.invoke(app, ["export", "--format", "docx"])
        assert result.exit_code == 0
        assert (workdir / "manuscript.docx").read_bytes()[:2] == b"PK"

    def test_export_file_to_txt(self, workdir):
        (workdir / "in.md").write_text("# Notes\nbody", encoding="utf-8")
        result = runner.invoke(app, ["export", "--file", "in.md", "-f", "txt", "-o", "out/notes.txt"])
        assert result.exit_code == 0
        assert (workdir / "out" / "notes.txt").read_text(encoding="utf-8") == "# Notes\nbody"

    def test_export_unknown_format(self, workdir):
        result = runner.invoke(app, ["export", "--format", "rtf"])
        assert result.exit_code == 1

    def test_missing_file(self, workdir):
        result = runner.invoke(app, ["import", "nope.txt"])
        assert result.exit_code == 1
        assert "File not found" in result.output


class TestAction:
    def test_unknown_action(self, workdir):
        (workdir / "p.txt").write_text("text", encoding="utf-8")
        result = runner.invoke(app, ["action", "translate", "p.txt"])
        assert result.exit_code == 1
        assert "Unknown action" in result.output

    def test_custom_needs_prompt(self, workdir):
        (workdir / "p.txt").write_text("text", encoding="utf-8")
        result = runner.invoke(app, ["action", "custom", "p.txt"])
        assert result.exit_code == 1

    def test_summarize_runs_gateway(self, workdir):
        (workdir / "p.txt").write_text("A long passage about methods.", encoding="utf-8")
        with patch("acadewrite.cli.AIGateway") as gateway_cls, patch("acadewrite.cli.LLMClient"):
            gateway_cls.return_value.quick_action = AsyncMock(return_value='"Short summary."')
            result = runner.invoke(app, ["action", "summarize", "p.txt"])

        assert result.exit_code == 0
        assert "Short summary." in result.output
        args = gateway_cls.return_value.quick_action.call_args.args
        assert args[1] == "A long passage about methods."
