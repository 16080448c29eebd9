"""FastAPI application with all routes."""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path

logging.basicConfig(level=logging.INFO, format="%(name)s | %(message)s")

from fastapi import FastAPI, File, HTTPException, Request, UploadFile
from fastapi.responses import FileResponse

from docx_quiz.config import Settings, load_settings, save_settings
from docx_quiz.errors import (
    EmptyDocumentError,
    ExtractionError,
    InvalidTransition,
    UnsupportedFileType,
)
from docx_quiz.extractor import check_supported, extract_text
from docx_quiz.models import Action, Session, SessionState
from docx_quiz.parsers.qa_parser import parse_qa_text
from docx_quiz.session import reduce, score, should_celebrate, start_session

app = FastAPI(title="Docx Quiz")

log = logging.getLogger("docx_quiz.app")

# Global state (initialized in startup)
_settings: Settings | None = None
_session: Session = Session()
_extracting = False


def get_settings() -> Settings:
    assert _settings is not None
    return _settings


@app.on_event("startup")
async def startup():
    global _settings
    if _settings is not None:
        return  # Already initialized (e.g. by tests)
    _settings = load_settings()
    logging.getLogger("docx_quiz").setLevel(_settings.log_level.upper())


# ── Static files ──────────────────────────────────────────────────────────

static_dir = Path(__file__).parent / "static"


@app.get("/")
async def index():
    return FileResponse(static_dir / "index.html")


@app.get("/style.css")
async def style():
    return FileResponse(static_dir / "style.css", media_type="text/css")


@app.get("/app.js")
async def script():
    return FileResponse(static_dir / "app.js", media_type="application/javascript")


# ── Session view ──────────────────────────────────────────────────────────

def _session_view(session: Session) -> dict:
    state = session.state
    view = {"state": state.value, "pass_number": session.pass_number}

    if state is SessionState.REVIEWING:
        qa = session.current
        view["question"] = {
            "ordinal": session.cursor + 1,
            "total": len(session.pool),
            "question": qa.question,
            # Hidden until revealed so the client can't peek
            "answer": qa.answer if session.revealed else None,
            "revealed": session.revealed,
        }
        view["progress"] = {
            "answered": len(session.correct) + len(session.incorrect),
            "correct": len(session.correct),
            "remaining": session.remaining,
        }
    elif state is SessionState.ROUND_OVER:
        view["summary"] = score(session).to_dict()
        view["can_retry"] = bool(session.incorrect)

    return view


def _apply(action: Action) -> Session:
    global _session
    try:
        _session = reduce(_session, action)
    except InvalidTransition as e:
        raise HTTPException(409, str(e))
    return _session


# ── API: Upload ───────────────────────────────────────────────────────────

@app.post("/api/upload")
async def api_upload(file: UploadFile = File(...)):
    global _session, _extracting
    s = get_settings()

    try:
        check_supported(file.filename, s.allowed_extensions)
    except UnsupportedFileType as e:
        raise HTTPException(415, str(e))

    if _extracting:
        raise HTTPException(409, "Another document is still being read")

    # Claimed before the first await so a second upload can't slip in
    _extracting = True
    try:
        data = await file.read()
        if len(data) > s.max_upload_bytes:
            raise HTTPException(413, f"File too large (limit {s.max_upload_mb} MB)")
        text = await asyncio.to_thread(extract_text, data)
        new_session = start_session(parse_qa_text(text))
    except ExtractionError as e:
        log.warning("Extraction failed for %s: %s", file.filename, e)
        raise HTTPException(422, str(e))
    except EmptyDocumentError as e:
        log.warning("%s: %s", file.filename, e)
        raise HTTPException(422, str(e))
    finally:
        _extracting = False

    # Replace wholesale; any previous session is discarded, never merged
    _session = new_session
    log.info("Loaded %d questions from %s", len(new_session.pool), file.filename)
    return _session_view(_session)


# ── API: Session ──────────────────────────────────────────────────────────

@app.get("/api/session")
async def api_session():
    return _session_view(_session)


@app.post("/api/session/reveal")
async def api_session_reveal():
    return _session_view(_apply(Action.REVEAL))


async def _grade(action: Action) -> dict:
    global _session
    session = _apply(action)
    result = _session_view(session)
    if should_celebrate(session):
        # Report the final round, then reset to the pre-upload state
        _session = reduce(session, Action.CELEBRATE)
        log.info("Round finished without mistakes, session reset")
        result["celebrate"] = True
        result["message"] = "You learnt everything!"
        result["celebrate_delay_ms"] = get_settings().celebrate_delay_ms
    return result


@app.post("/api/session/correct")
async def api_session_correct():
    return await _grade(Action.GRADE_CORRECT)


@app.post("/api/session/wrong")
async def api_session_wrong():
    return await _grade(Action.GRADE_WRONG)


@app.post("/api/session/retry")
async def api_session_retry():
    session = _apply(Action.RETRY_INCORRECT)
    log.info("Retrying %d incorrect questions (pass %d)", len(session.pool), session.pass_number)
    return _session_view(session)


@app.post("/api/session/decline")
async def api_session_decline():
    result = _session_view(_apply(Action.DECLINE_RETRY))
    result["message"] = "Goodbye!"
    return result


# ── API: Settings ─────────────────────────────────────────────────────────

@app.get("/api/settings")
async def api_get_settings():
    return get_settings().to_dict()


@app.put("/api/settings")
async def api_update_settings(request: Request):
    s = get_settings()
    try:
        s.update(await request.json())
    except ValueError as e:
        raise HTTPException(422, str(e))
    save_settings(s)
    return s.to_dict()
