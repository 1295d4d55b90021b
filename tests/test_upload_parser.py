"""Tests for the .txt/.md upload parser."""

import pytest

from acadewrite.exceptions import UnsupportedFileError, UserInputError
from acadewrite.parsers.upload_parser import decode_upload, load_upload_file, parse_upload


class TestDecodeUpload:
    def test_strips_bom(self):
        assert decode_upload("\ufeffHello".encode("utf-8")) == "Hello"

    def test_normalizes_line_endings(self):
        assert decode_upload(b"a\r\nb\rc\n") == "a\nb\nc\n"


class TestParseUpload:
    def test_escapes_and_converts_newlines(self):
        assert parse_upload("notes.txt", b"x < y & z > w\nnext") == "x &lt; y &amp; z &gt; w<br>next"

    def test_markdown_accepted_case_insensitive(self):
        assert parse_upload("README.MD", b"# Heading") == "# Heading"

    @pytest.mark.parametrize("name", ["paper.pdf", "essay.docx", "noext"])
    def test_rejects_other_formats(self, name):
        with pytest.raises(UnsupportedFileError):
            parse_upload(name, b"data")

    def test_unsupported_is_user_input_error(self):
        with pytest.raises(UserInputError, match="Upload a .txt or .md file"):
            parse_upload("image.png", b"")


class TestLoadUploadFile:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "draft.txt"
        path.write_text("Line 1\nLine 2", encoding="utf-8")
        assert load_upload_file(path) == "Line 1<br>Line 2"
