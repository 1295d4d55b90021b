"""Turn uploaded text files into document markup."""

from __future__ import annotations

import re
from pathlib import Path

from acadewrite.editor.markup import plain_text_to_markup
from acadewrite.exceptions import UnsupportedFileError

ACCEPTED_SUFFIXES = (".txt", ".md")


def decode_upload(data: bytes) -> str:
    """Decode upload bytes as UTF-8, dropping a BOM and normalizing line endings."""
    text = data.decode("utf-8-sig", errors="replace")
    return re.sub(r"\r\n?", "\n", text)


def parse_upload(filename: str, data: bytes) -> str:
    """Return the markup for an uploaded .txt/.md file.

    Reserved HTML characters are escaped and newlines become <br>.
    """
    suffix = Path(filename).suffix.lower()
    if suffix not in ACCEPTED_SUFFIXES:
        raise UnsupportedFileError(
            f"Unsupported file format: {suffix or filename}. Upload a .txt or .md file."
        )
    return plain_text_to_markup(decode_upload(data))


def load_upload_file(file_path: str | Path) -> str:
    path = Path(file_path)
    return parse_upload(path.name, path.read_bytes())
