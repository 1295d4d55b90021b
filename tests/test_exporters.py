"""Tests for txt / pdf / docx export."""

from __future__ import annotations

from io import BytesIO

import pytest
from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH

from acadewrite.export import EXPORT_FORMATS, export_document
from acadewrite.export.docx_export import EMPTY_PLACEHOLDER, build_docx
from acadewrite.export.pdf_export import render_pdf
from acadewrite.export.text_export import export_text
from acadewrite.parsers.upload_parser import parse_upload


class TestTextExport:
    def test_strips_markup(self):
        assert export_text("<b>Title</b><br>Body &amp; more") == "Title\nBody & more".encode()

    def test_round_trip_through_upload(self):
        original = "Results\nThe p-value was < 0.05 & significant."
        markup = parse_upload("draft.txt", original.encode())
        assert parse_upload("export.txt", export_text(markup)) == markup

    def test_empty(self):
        assert export_text("") == b""


class TestPdfExport:
    def test_pdf_magic(self):
        data = export_document("<h1>Title</h1>Body text", "pdf")
        assert data.startswith(b"%PDF")

    def test_empty_document_has_one_page(self):
        assert render_pdf("").page_no() == 1

    def test_long_document_paginates(self):
        paragraph = "Academic writing requires careful argument and evidence. " * 10
        markup = "<br>".join([paragraph] * 20)
        assert render_pdf(markup).page_no() > 1

    def test_non_latin1_text_does_not_fail(self):
        data = export_document("Smart “quotes” — and 漢字", "pdf")
        assert data.startswith(b"%PDF")

    def test_long_word_and_hard_breaks_render(self):
        data = export_document("x" * 400 + "<br>one<br>two", "pdf")
        assert data.startswith(b"%PDF")


def _read_docx(data: bytes):
    return Document(BytesIO(data))


class TestDocxExport:
    def test_paragraphs_and_styles(self):
        markup = (
            "<h1>Title</h1>"
            "Intro with <b>bold</b> text"
            "<ol><li>first</li></ol>"
            "<ul><li>bullet</li></ul>"
            "<blockquote>quoted</blockquote>"
        )
        doc = _read_docx(export_document(markup, "docx"))
        paras = [(p.style.name, p.text) for p in doc.paragraphs]
        assert paras == [
            ("Heading 1", "Title"),
            ("Normal", "Intro with bold text"),
            ("List Number", "first"),
            ("List Bullet", "bullet"),
            ("Quote", "quoted"),
        ]

    def test_run_formatting(self):
        doc = _read_docx(export_document("plain <b>bold</b> <i>it</i> <u>under</u>", "docx"))
        runs = {r.text: r for r in doc.paragraphs[0].runs}
        assert runs["bold"].bold
        assert runs["it"].italic
        assert runs["under"].underline
        assert not runs["plain "].bold

    def test_alignment(self):
        doc = build_docx('<div style="text-align: right">Right</div>')
        assert doc.paragraphs[0].alignment == WD_ALIGN_PARAGRAPH.RIGHT

    def test_empty_document_placeholder(self):
        doc = _read_docx(export_document("", "docx"))
        assert [p.text for p in doc.paragraphs] == [EMPTY_PLACEHOLDER]

    def test_paragraph_spacing(self):
        doc = build_docx("One<br>Two")
        assert len(doc.paragraphs) == 2
        assert doc.paragraphs[0].paragraph_format.line_spacing == 1.5


class TestExportRegistry:
    def test_formats(self):
        assert set(EXPORT_FORMATS) == {"txt", "pdf", "docx"}
        assert EXPORT_FORMATS["docx"].filename("manuscript") == "manuscript.docx"

    def test_unknown_format(self):
        with pytest.raises(ValueError, match="Unknown export format"):
            export_document("x", "rtf")

    def test_format_key_normalized(self):
        assert export_document("x", ".TXT") == b"x"
