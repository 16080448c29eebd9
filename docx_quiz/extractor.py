"""Turn uploaded Word documents into plain text.

Only the raw text matters: one line per paragraph and one line per table
cell, in the order they appear in the document body. Formatting, images
and headers are ignored.
"""
from __future__ import annotations

import io
import logging
from pathlib import PurePath

from docx import Document
from docx.table import Table

from docx_quiz.errors import ExtractionError, UnsupportedFileType

log = logging.getLogger("docx_quiz.extractor")

DEFAULT_EXTENSIONS = [".docx"]


def check_supported(filename: str | None, allowed_extensions: list[str] | None = None) -> None:
    """Raise UnsupportedFileType unless filename has an allowed suffix."""
    allowed = [e.lower() for e in (allowed_extensions or DEFAULT_EXTENSIONS)]
    suffix = PurePath(filename or "").suffix.lower()
    if suffix not in allowed:
        raise UnsupportedFileType(filename or "", allowed)


def extract_text(data: bytes) -> str:
    try:
        doc = Document(io.BytesIO(data))
    except Exception as e:
        log.warning("Error reading DOCX file: %s", e)
        raise ExtractionError(f"Could not read document: {e}") from e

    lines: list[str] = []
    # Body order: a table between two paragraphs stays between them
    for block in doc.iter_inner_content():
        if isinstance(block, Table):
            lines.extend(_table_lines(block))
        else:
            lines.append(block.text)
    text = "\n".join(lines)
    log.info("Extracted %d lines (%d chars)", len(lines), len(text))
    return text


def _table_lines(table: Table) -> list[str]:
    """One line per distinct cell.

    row.cells repeats a merged cell once per grid column it spans (and per
    row for vertical merges), so cells are deduplicated on their w:tc element.
    """
    seen: list = []
    lines: list[str] = []
    for row in table.rows:
        for cell in row.cells:
            if cell._tc in seen:
                continue
            seen.append(cell._tc)
            lines.append(cell.text)
    return lines
