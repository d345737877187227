"""
JournalFit Backend — DOCX Encoder
===================================

What:  Converts plain text into a Word (.docx) document.
Who:   POST /documents/generate-by-template-docx.

Layout rules (deliberately simple):
    - Blank-line-delimited blocks become paragraphs (10pt spacing after)
    - Newlines inside a block become line breaks within the paragraph
    - Leading/trailing whitespace of blocks and lines is dropped
    - Text with no non-blank content still produces one paragraph, so the
      document always opens with a body
"""

import re
from io import BytesIO
from typing import List

from docx import Document
from docx.shared import Pt

DOCX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

PARAGRAPH_SPACING_AFTER = Pt(10)

_BLANK_LINE = re.compile(r"\n\s*\n")


def split_paragraphs(text: str) -> List[List[str]]:
    """Paragraphs of `text`, each a list of its non-empty, stripped lines."""
    paragraphs = []
    for block in _BLANK_LINE.split(text or ""):
        lines = [line.strip() for line in block.strip().split("\n")]
        lines = [line for line in lines if line]
        if lines:
            paragraphs.append(lines)
    return paragraphs


def text_to_docx_bytes(text: str) -> bytes:
    """Encode `text` as a .docx file and return its bytes."""
    document = Document()
    paragraphs = split_paragraphs(text)

    if not paragraphs:
        document.add_paragraph(text or "")

    for lines in paragraphs:
        paragraph = document.add_paragraph()
        paragraph.paragraph_format.space_after = PARAGRAPH_SPACING_AFTER
        for index, line in enumerate(lines):
            run = paragraph.add_run()
            if index > 0:
                run.add_break()
            run.add_text(line)

    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()
