"""
session.py
======================

QuizSessionController: one run through one category.

    answering (no selection)
        -- submit_answer(i) -->  answering (selection locked, reveal pending)
        -- settle_delay -->      revealing (correct / wrong shown, score updated)
        -- advance_delay -->     advancing -> answering (next question)
                                           -> completed (last question)

Both timed steps are one-shot entries on a Timeline, tied to the session's
CancelToken. close() cancels the token so nothing fires after the session
is gone.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from .config import DEFAULT_ADVANCE_DELAY, DEFAULT_SETTLE_DELAY
from .models import (
    AnswerRecord,
    AnswerState,
    Category,
    Phase,
    Question,
    QuizResult,
    SessionState,
)
from .scheduler import CancelToken, Timeline

logger = logging.getLogger(__name__)


class QuizSessionController:
    def __init__(
        self,
        category: Category,
        timeline: Timeline,
        *,
        settle_delay: float = DEFAULT_SETTLE_DELAY,
        advance_delay: float = DEFAULT_ADVANCE_DELAY,
    ):
        if not category.questions:
            raise ValueError(f"category {category.title!r} has no questions")

        self.category = category
        self.timeline = timeline
        self.settle_delay = settle_delay
        self.advance_delay = advance_delay

        self._token = CancelToken()
        self._index = 0
        self._selected: Optional[int] = None
        self._score = 0
        self._phase = Phase.ANSWERING
        self._states: List[AnswerState] = self._idle_states()
        self._records: List[AnswerRecord] = []

        logger.info("Session started: %s (%d questions)", category.title, self.total)

    # ------------------------------------------------------------
    # read-only view
    # ------------------------------------------------------------
    @property
    def total(self) -> int:
        return len(self.category.questions)

    @property
    def current_question(self) -> Question:
        return self.category.questions[self._index]

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def score(self) -> int:
        return self._score

    @property
    def is_live(self) -> bool:
        return not self._token.cancelled

    @property
    def finished(self) -> bool:
        return self._phase is Phase.COMPLETED

    @property
    def records(self) -> Tuple[AnswerRecord, ...]:
        return tuple(self._records)

    def snapshot(self) -> SessionState:
        return SessionState(
            current_question_index=self._index,
            answer_states=tuple(self._states),
            selected_index=self._selected,
            score=self._score,
            finished=self.finished,
            phase=self._phase,
        )

    def progress(self) -> Tuple[int, int]:
        """(1-based position, total) for the "n/total" counter."""
        return self._index + 1, self.total

    def result(self) -> Optional[QuizResult]:
        if not self.finished:
            return None
        return QuizResult(
            category_title=self.category.title,
            score=self._score,
            total=self.total,
            records=self.records,
        )

    # ------------------------------------------------------------
    # transitions
    # ------------------------------------------------------------
    def submit_answer(self, index: int) -> bool:
        """
        Lock in the tapped answer and schedule the reveal.

        Returns False (and changes nothing) when a selection is already
        locked, the question is past answering, the session is closed or
        the index is not an answer slot.
        """
        if not self.is_live or self._phase is not Phase.ANSWERING or self._selected is not None:
            logger.debug("Ignoring tap on %d (phase=%s)", index, self._phase.value)
            return False
        if not 0 <= index < len(self._states):
            logger.debug("Ignoring tap on missing slot %d", index)
            return False

        self._selected = index
        self._states = [
            AnswerState.SELECTED if i == index else AnswerState.DISABLED
            for i in range(len(self._states))
        ]
        logger.debug("Question %d: selected %d", self._index + 1, index)

        self.timeline.call_later(self.settle_delay, self._reveal, self._token)
        return True

    def _reveal(self) -> None:
        if not self.is_live or self._selected is None:
            return

        question = self.current_question
        correct = question.correct_answer_index
        selected = self._selected

        if selected == correct:
            self._score += 1
            self._states[selected] = AnswerState.CORRECT
        else:
            self._states[selected] = AnswerState.WRONG
            self._states[correct] = AnswerState.CORRECT

        self._records.append(AnswerRecord(self._index, selected, correct))
        self._phase = Phase.REVEALING
        logger.debug(
            "Question %d: %s (score %d)",
            self._index + 1,
            "correct" if selected == correct else "wrong",
            self._score,
        )

        self.timeline.call_later(self.advance_delay, self._advance, self._token)

    def _advance(self) -> None:
        if not self.is_live or self._phase is not Phase.REVEALING:
            return

        self._phase = Phase.ADVANCING
        if self._index < self.total - 1:
            self._index += 1
            self._selected = None
            self._states = self._idle_states()
            self._phase = Phase.ANSWERING
        else:
            self._phase = Phase.COMPLETED
            logger.info(
                "Session completed: %s %d/%d", self.category.title, self._score, self.total
            )

    def close(self) -> None:
        """Drop the session; pending reveal/advance callbacks become no-ops."""
        if self.is_live:
            self._token.cancel()
            logger.debug("Session closed: %s", self.category.title)

    # ------------------------------------------------------------
    # helpers
    # ------------------------------------------------------------
    def _idle_states(self) -> List[AnswerState]:
        return [AnswerState.IDLE] * len(self.current_question.answers)
