"""PDF export using fpdf2 core fonts (pure Python, no system deps)."""

from __future__ import annotations

import logging
from io import BytesIO

from fpdf import FPDF

from acadewrite.export.blocks import Block, parse_blocks

logger = logging.getLogger(__name__)

MARGIN_MM = 20
PAGE_BOTTOM_MM = 280
BLOCK_GAP_MM = 6
BODY_SIZE = 12
HEADING_SIZES = {"h1": 22, "h2": 18, "h3": 14}
FONT_FAMILY = "Times"

# Typographic characters outside Latin-1 that have a close ASCII stand-in.
_LATIN1_FALLBACKS = str.maketrans({
    "\u2018": "'",
    "\u2019": "'",
    "\u201c": "\"",
    "\u201d": "\"",
    "\u2013": "-",
    "\u2014": "--",
    "\u2026": "...",
    "\u2022": "-",
})


def _safe_text(text: str, pdf: FPDF) -> str:
    """Ensure text is encodable by the current font. Replace if needed."""
    if pdf.is_ttf_font:
        return text
    text = text.translate(_LATIN1_FALLBACKS)
    try:
        text.encode("latin-1")
        return text
    except UnicodeEncodeError:
        return text.encode("latin-1", errors="replace").decode("latin-1")


def _wrap_lines(pdf: FPDF, text: str, width: float, line_height: float) -> list[str]:
    """Let fpdf2 break the text into lines that fit ``width``."""
    return pdf.multi_cell(width, line_height, text, dry_run=True, output="LINES")


def _block_text(block: Block) -> str:
    if block.list_type == "ol":
        return f"{block.index}. {block.text}"
    if block.list_type == "ul":
        return f"- {block.text}"
    return block.text


def render_pdf(markup: str) -> FPDF:
    """Lay the document out on A4 pages and return the FPDF object."""
    pdf = FPDF(unit="mm", format="A4")
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(MARGIN_MM, MARGIN_MM, MARGIN_MM)
    pdf.add_page()
    width = pdf.w - 2 * MARGIN_MM
    y = MARGIN_MM

    for block in parse_blocks(markup):
        size = HEADING_SIZES.get(block.kind, BODY_SIZE)
        pdf.set_font(FONT_FAMILY, style="B" if block.kind in HEADING_SIZES else "", size=size)
        line_height = size * 0.4
        lines = _wrap_lines(pdf, _safe_text(_block_text(block), pdf), width, line_height)

        if y + len(lines) * line_height > PAGE_BOTTOM_MM and y > MARGIN_MM:
            pdf.add_page()
            y = MARGIN_MM
        for line in lines:
            if y > PAGE_BOTTOM_MM:
                pdf.add_page()
                y = MARGIN_MM
            if line:
                pdf.text(MARGIN_MM, y, line)
            y += line_height
        y += BLOCK_GAP_MM

    logger.debug("Rendered PDF: %d page(s)", pdf.page_no())
    return pdf


def export_pdf(markup: str) -> bytes:
    """Convert document markup to PDF bytes."""
    buf = BytesIO()
    render_pdf(markup).output(buf)
    return buf.getvalue()
