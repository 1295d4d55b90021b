"""DOCX export: one Word paragraph per document block."""

from __future__ import annotations

from io import BytesIO

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.shared import Pt

from acadewrite.export.blocks import Block, parse_blocks

EMPTY_PLACEHOLDER = "Empty Manuscript"
SPACE_AFTER = Pt(10)
LINE_SPACING = 1.5

_ALIGNMENT = {
    "left": WD_ALIGN_PARAGRAPH.LEFT,
    "center": WD_ALIGN_PARAGRAPH.CENTER,
    "right": WD_ALIGN_PARAGRAPH.RIGHT,
    "justify": WD_ALIGN_PARAGRAPH.JUSTIFY,
}


def _style_for(block: Block) -> str | None:
    if block.heading_level is not None:
        return f"Heading {block.heading_level}"
    if block.list_type == "ol":
        return "List Number"
    if block.list_type == "ul":
        return "List Bullet"
    if block.kind == "blockquote":
        return "Quote"
    return None


def _add_block(doc: Document, block: Block) -> None:
    para = doc.add_paragraph(style=_style_for(block))
    for run in block.runs:
        r = para.add_run(run.text)
        if run.bold:
            r.bold = True
        if run.italic:
            r.italic = True
        if run.underline:
            r.underline = True
    if block.alignment in _ALIGNMENT and block.alignment != "left":
        para.alignment = _ALIGNMENT[block.alignment]
    fmt = para.paragraph_format
    fmt.space_after = SPACE_AFTER
    fmt.line_spacing = LINE_SPACING


def build_docx(markup: str) -> Document:
    """Build a python-docx Document from document markup."""
    doc = Document()
    normal = doc.styles["Normal"]
    normal.font.name = "Times New Roman"
    normal.font.size = Pt(12)

    blocks = parse_blocks(markup)
    if not blocks:
        para = doc.add_paragraph(EMPTY_PLACEHOLDER)
        para.paragraph_format.space_after = SPACE_AFTER
        para.paragraph_format.line_spacing = LINE_SPACING
    for block in blocks:
        _add_block(doc, block)
    return doc


def export_docx(markup: str) -> bytes:
    """Convert document markup to .docx bytes."""
    buf = BytesIO()
    build_docx(markup).save(buf)
    return buf.getvalue()
