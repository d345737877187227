"""
JournalFit Backend — DOCX Encoder Tests
=========================================

What:  Paragraph splitting and the generated .docx, read back with python-docx.
"""

from io import BytesIO

import docx
import pytest

from journalfit.services.docx_service import (
    PARAGRAPH_SPACING_AFTER,
    split_paragraphs,
    text_to_docx_bytes,
)


def read_paragraphs(data: bytes):
    return docx.Document(BytesIO(data)).paragraphs


class TestSplitParagraphs:

    def test_blank_lines_separate_paragraphs(self):
        assert split_paragraphs("Title\n\nFirst line\nSecond line") == [
            ["Title"],
            ["First line", "Second line"],
        ]

    def test_whitespace_only_separator_and_padding(self):
        assert split_paragraphs("  A  \n   \n\n  B\n") == [["A"], ["B"]]

    @pytest.mark.parametrize("text", ["", "   ", "\n\n\n", None])
    def test_blank_text_has_no_paragraphs(self, text):
        assert split_paragraphs(text) == []


class TestTextToDocx:

    def test_output_is_a_zip_package(self):
        assert text_to_docx_bytes("Hello").startswith(b"PK")

    def test_paragraphs_and_line_breaks(self):
        data = text_to_docx_bytes("Title\n\nAbstract\nThis paper studies X.\n\nMethods")

        texts = [p.text for p in read_paragraphs(data) if p.text]

        assert texts == ["Title", "Abstract\nThis paper studies X.", "Methods"]

    def test_paragraph_spacing(self):
        paragraphs = [p for p in read_paragraphs(text_to_docx_bytes("One\n\nTwo")) if p.text]
        assert all(p.paragraph_format.space_after == PARAGRAPH_SPACING_AFTER for p in paragraphs)

    def test_empty_text_still_produces_a_document(self):
        paragraphs = read_paragraphs(text_to_docx_bytes(""))
        assert len(paragraphs) >= 1
        assert all(p.text == "" for p in paragraphs)

    def test_json_content_survives(self):
        content = '{\n  "title": "T",\n  "sections": []\n}'
        texts = [p.text for p in read_paragraphs(text_to_docx_bytes(content)) if p.text]
        assert texts == ['{\n"title": "T",\n"sections": []\n}']
