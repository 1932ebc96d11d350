"""
models.py
======================

Data types shared by the question bank, the quiz controller and the UI.

- Question / Category: immutable bank data, built from the JSON resource
- AnswerState: per-slot state of an answer button
- Phase: where the controller is in the answer -> reveal -> advance cycle
- SessionState: read-only snapshot of one quiz run
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Tuple

ANSWER_COUNT = 4


class BankFormatError(ValueError):
    """A category or question dict does not match the expected schema."""


class AnswerState(str, Enum):
    IDLE = "idle"
    SELECTED = "selected"
    CORRECT = "correct"
    WRONG = "wrong"
    DISABLED = "disabled"


class Phase(str, Enum):
    ANSWERING = "answering"
    REVEALING = "revealing"
    ADVANCING = "advancing"
    COMPLETED = "completed"


# ----------------------------------------------------------------------
#  Question
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Question:
    text: str
    answers: Tuple[str, ...]
    correct_answer_index: int

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Question":
        """
        Build a Question from one entry of the JSON resource.

        Keys: text, answers (4 strings), correctAnswerIndex (0..3).
        """
        if not isinstance(data, dict):
            raise BankFormatError(f"question must be an object, got {type(data).__name__}")

        text = data.get("text")
        if not isinstance(text, str) or not text.strip():
            raise BankFormatError("question.text must be a non-empty string")

        answers = data.get("answers")
        if (
            not isinstance(answers, list)
            or len(answers) != ANSWER_COUNT
            or not all(isinstance(a, str) for a in answers)
        ):
            raise BankFormatError(
                f"question.answers must be a list of {ANSWER_COUNT} strings: {text!r}"
            )

        correct = data.get("correctAnswerIndex")
        # bool is an int subclass, reject it explicitly
        if isinstance(correct, bool) or not isinstance(correct, int):
            raise BankFormatError(f"question.correctAnswerIndex must be an integer: {text!r}")
        if not 0 <= correct < len(answers):
            raise BankFormatError(
                f"question.correctAnswerIndex out of range ({correct}): {text!r}"
            )

        return cls(text=text, answers=tuple(answers), correct_answer_index=correct)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "answers": list(self.answers),
            "correctAnswerIndex": self.correct_answer_index,
        }


# ----------------------------------------------------------------------
#  Category
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class Category:
    title: str
    description: str
    icon_name: str
    questions: Tuple[Question, ...]

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Category":
        if not isinstance(data, dict):
            raise BankFormatError(f"category must be an object, got {type(data).__name__}")

        for key in ("title", "description", "iconName"):
            if not isinstance(data.get(key), str):
                raise BankFormatError(f"category.{key} must be a string")

        raw_questions = data.get("questions")
        if not isinstance(raw_questions, list) or not raw_questions:
            raise BankFormatError(
                f"category.questions must be a non-empty list: {data['title']!r}"
            )

        return cls(
            title=data["title"],
            description=data["description"],
            icon_name=data["iconName"],
            questions=tuple(Question.from_dict(q) for q in raw_questions),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "description": self.description,
            "iconName": self.icon_name,
            "questions": [q.to_dict() for q in self.questions],
        }

    @property
    def total(self) -> int:
        return len(self.questions)


# ----------------------------------------------------------------------
#  Session snapshot / records
# ----------------------------------------------------------------------
@dataclass(frozen=True)
class SessionState:
    current_question_index: int
    answer_states: Tuple[AnswerState, ...]
    selected_index: Optional[int]
    score: int
    finished: bool
    phase: Phase = Phase.ANSWERING


@dataclass(frozen=True)
class AnswerRecord:
    question_index: int
    selected_index: int
    correct_index: int

    @property
    def is_correct(self) -> bool:
        return self.selected_index == self.correct_index


@dataclass(frozen=True)
class QuizResult:
    category_title: str
    score: int
    total: int
    records: Tuple[AnswerRecord, ...] = field(default_factory=tuple)

    @property
    def label(self) -> str:
        return f"{self.score}/{self.total}"
