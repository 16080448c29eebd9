"""Shared test fixtures."""
from __future__ import annotations

import io
from unittest.mock import patch

import pytest
from docx import Document
from fastapi.testclient import TestClient

from docx_quiz import app as app_module
from docx_quiz.app import app
from docx_quiz.config import Settings
from docx_quiz.models import QuestionAnswer, Session


def make_docx(lines: list[str], table_cells: list[str] | None = None) -> bytes:
    """Build a .docx in memory with one paragraph per line."""
    doc = Document()
    for line in lines:
        doc.add_paragraph(line)
    if table_cells:
        table = doc.add_table(rows=len(table_cells), cols=1)
        for row, text in zip(table.rows, table_cells):
            row.cells[0].text = text
    buf = io.BytesIO()
    doc.save(buf)
    return buf.getvalue()


@pytest.fixture
def sample_pairs():
    """Three parsed pairs in document order."""
    return [
        QuestionAnswer("Capital of France", "Paris"),
        QuestionAnswer("Capital of Italy", "Rome"),
        QuestionAnswer("Capital of Spain", "Madrid"),
    ]


@pytest.fixture
def qa_text():
    """Raw extracted text with a blank line and an invalid entry."""
    return "Capital of France ?Paris\nCapital of Italy?Rome\n   \nbadlinewithoutmark"


@pytest.fixture
def quiz_docx():
    return make_docx([
        "Capital of France ?Paris",
        "Capital of Italy?Rome",
        "",
        "badlinewithoutmark",
        "Capital of Spain? Madrid",
    ])


@pytest.fixture
def test_app():
    """Set up test app with default settings and no session."""
    settings = Settings()

    # Set globals BEFORE creating TestClient so startup() is a no-op
    app_module._settings = settings
    app_module._session = Session()
    app_module._extracting = False

    # Patch save_settings so tests never write the real config file
    with patch("docx_quiz.app.save_settings"):
        client = TestClient(app, raise_server_exceptions=False)
        yield client, settings
        client.close()

    app_module._settings = None
    app_module._session = Session()
    app_module._extracting = False


def upload(client, data: bytes, filename: str = "quiz.docx"):
    return client.post(
        "/api/upload",
        files={"file": (filename, data, "application/octet-stream")},
    )


@pytest.fixture
def docx_factory():
    return make_docx


@pytest.fixture
def uploader():
    return upload
