"""Question session state machine.

A session walks the pool one item at a time. Each item is graded exactly
once per pass; grading advances the cursor, and grading the last item ends
the round. From there the user can retry only the missed items (a new pass
over a smaller pool) or decline. A round with no misses is celebrated and
the session resets to its pre-upload state.

All transitions go through reduce(), which returns a new Session and never
mutates the one it was given.
"""
from __future__ import annotations

from dataclasses import replace
from typing import Sequence

from docx_quiz.errors import EmptyDocumentError, InvalidTransition
from docx_quiz.models import Action, QuestionAnswer, Score, Session, SessionState


def start_session(pairs: Sequence[QuestionAnswer]) -> Session:
    if not pairs:
        raise EmptyDocumentError("No question/answer pairs found in document")
    return Session(pool=tuple(pairs), pass_number=1)


def reduce(session: Session, action: Action) -> Session:
    state = session.state

    if action is Action.REVEAL:
        _require(session, action, SessionState.REVIEWING)
        return replace(session, revealed=True)

    if action is Action.GRADE_CORRECT:
        _require(session, action, SessionState.REVIEWING)
        return _advance(replace(session, correct=session.correct + (session.current,)))

    if action is Action.GRADE_WRONG:
        _require(session, action, SessionState.REVIEWING)
        return _advance(replace(session, incorrect=session.incorrect + (session.current,)))

    if action is Action.RETRY_INCORRECT:
        _require(session, action, SessionState.ROUND_OVER)
        if not session.incorrect:
            raise InvalidTransition(action, state, "no incorrect answers to retry")
        return Session(pool=session.incorrect, pass_number=session.pass_number + 1)

    if action is Action.DECLINE_RETRY:
        _require(session, action, SessionState.ROUND_OVER)
        return session

    if action is Action.CELEBRATE:
        if not should_celebrate(session):
            raise InvalidTransition(action, state, "round not finished without mistakes")
        return Session()

    raise ValueError(f"Unknown action: {action!r}")


def _require(session: Session, action: Action, expected: SessionState) -> None:
    if session.state is not expected:
        raise InvalidTransition(action, session.state)


def _advance(session: Session) -> Session:
    if session.cursor + 1 < len(session.pool):
        return replace(session, cursor=session.cursor + 1, revealed=False)
    return replace(session, finished=True)


def should_celebrate(session: Session) -> bool:
    return session.state is SessionState.ROUND_OVER and not session.incorrect


def score(session: Session) -> Score:
    """Counts for the current pass; percentage rounds half up."""
    correct = len(session.correct)
    wrong = len(session.incorrect)
    total = correct + wrong
    percentage = (200 * correct + total) // (2 * total) if total > 0 else 0
    return Score(correct=correct, wrong=wrong, total=total, percentage=percentage)
