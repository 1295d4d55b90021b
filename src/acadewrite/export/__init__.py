"""Document export converters (txt / pdf / docx)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable

from acadewrite.export.docx_export import export_docx
from acadewrite.export.pdf_export import export_pdf
from acadewrite.export.text_export import export_text


@dataclass(frozen=True)
class ExportFormat:
    key: str
    label: str
    suffix: str
    mime: str
    convert: Callable[[str], bytes]

    def filename(self, basename: str = "manuscript") -> str:
        return f"{basename}{self.suffix}"


EXPORT_FORMATS: dict[str, ExportFormat] = {
    "txt": ExportFormat("txt", "Plain Text", ".txt", "text/plain", export_text),
    "pdf": ExportFormat("pdf", "PDF Document", ".pdf", "application/pdf", export_pdf),
    "docx": ExportFormat(
        "docx",
        "Word Document",
        ".docx",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
        export_docx,
    ),
}


def export_document(markup: str, fmt: str) -> bytes:
    """Convert markup to the named format."""
    try:
        exporter = EXPORT_FORMATS[fmt.lower().lstrip(".")]
    except KeyError:
        raise ValueError(f"Unknown export format: {fmt}") from None
    return exporter.convert(markup)


__all__ = [
    "EXPORT_FORMATS",
    "ExportFormat",
    "export_document",
    "export_docx",
    "export_pdf",
    "export_text",
]
