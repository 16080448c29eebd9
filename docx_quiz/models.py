from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass(frozen=True)
class QuestionAnswer:
    question: str
    answer: str

    def to_dict(self) -> dict:
        return {"question": self.question, "answer": self.answer}


class SessionState(str, Enum):
    UNINITIALIZED = "uninitialized"
    REVIEWING = "reviewing"
    ROUND_OVER = "round_over"


class Action(str, Enum):
    REVEAL = "reveal"
    GRADE_CORRECT = "correct"
    GRADE_WRONG = "wrong"
    RETRY_INCORRECT = "retry"
    DECLINE_RETRY = "decline"
    CELEBRATE = "celebrate"


@dataclass(frozen=True)
class Session:
    """One snapshot of the review state. Transitions build a new snapshot."""

    pool: tuple[QuestionAnswer, ...] = ()
    cursor: int = 0
    revealed: bool = False
    correct: tuple[QuestionAnswer, ...] = ()
    incorrect: tuple[QuestionAnswer, ...] = ()
    finished: bool = False
    pass_number: int = 0

    @property
    def state(self) -> SessionState:
        if not self.pool:
            return SessionState.UNINITIALIZED
        if self.finished:
            return SessionState.ROUND_OVER
        return SessionState.REVIEWING

    @property
    def current(self) -> QuestionAnswer | None:
        if self.state is not SessionState.REVIEWING:
            return None
        return self.pool[self.cursor]

    @property
    def remaining(self) -> int:
        """Items after the cursor that have not been presented yet."""
        if self.state is not SessionState.REVIEWING:
            return 0
        return len(self.pool) - self.cursor - 1


@dataclass(frozen=True)
class Score:
    correct: int
    wrong: int
    total: int
    percentage: int

    def to_dict(self) -> dict:
        return {
            "correct": self.correct,
            "wrong": self.wrong,
            "total": self.total,
            "percentage": self.percentage,
        }
