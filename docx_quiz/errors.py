from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from docx_quiz.models import Action, SessionState


class QuizError(Exception):
    """Base class for errors raised by docx_quiz."""


class UnsupportedFileType(QuizError):
    def __init__(self, filename: str, allowed: list[str]):
        self.filename = filename
        self.allowed = list(allowed)
        super().__init__(
            f"Please upload a {' or '.join(self.allowed)} file (got {filename or 'no file'})"
        )


class ExtractionError(QuizError):
    """The uploaded bytes could not be read as a document."""


class EmptyDocumentError(QuizError):
    """Parsing produced no question/answer pairs."""


class InvalidTransition(QuizError):
    def __init__(self, action: Action, state: SessionState, reason: str = ""):
        self.action = action
        self.state = state
        msg = f"Cannot {action.value} while {state.value}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
