"""Parse extracted document text into QuestionAnswer pairs.

One pair per line, split at the first question mark:

  Capital of France ?Paris
  Capital of Italy?Rome

Blank lines are skipped silently. Lines without a question mark are logged
and skipped; they never abort the rest of the document.
"""
from __future__ import annotations

import logging
import re
from pathlib import Path

from docx_quiz.models import QuestionAnswer

log = logging.getLogger("docx_quiz.parser")

# Lazy question, optional single space, "?", then the rest of the line.
QA_PATTERN = re.compile(r"^(.+?)\s?\?(\s*.+)$")


def parse_qa_text(text: str) -> list[QuestionAnswer]:
    pairs: list[QuestionAnswer] = []
    for line in text.splitlines():
        if not line.strip():
            continue
        m = QA_PATTERN.match(line)
        if m is None:
            log.warning("Invalid entry: %r", line)
            continue
        pairs.append(QuestionAnswer(
            question=m.group(1).strip(),
            answer=m.group(2).strip(),
        ))
    return pairs


def parse_qa_file(path: Path) -> list[QuestionAnswer]:
    """Parse a .docx (through the extractor) or a plain-text file."""
    if path.suffix.lower() == ".docx":
        from docx_quiz.extractor import extract_text
        text = extract_text(path.read_bytes())
    else:
        text = path.read_text()
    return parse_qa_text(text)
