import pytest

from merito_quiz.models import AnswerState, Phase
from merito_quiz.scheduler import Timeline
from merito_quiz.session import QuizSessionController

from conftest import make_category

SETTLE = 0.5
ADVANCE = 1.5

IDLE = AnswerState.IDLE
SELECTED = AnswerState.SELECTED
CORRECT = AnswerState.CORRECT
WRONG = AnswerState.WRONG
DISABLED = AnswerState.DISABLED


def make_controller(timeline: Timeline, correct_indices) -> QuizSessionController:
    return QuizSessionController(
        make_category(correct_indices),
        timeline,
        settle_delay=SETTLE,
        advance_delay=ADVANCE,
    )


def play(controller: QuizSessionController, timeline: Timeline, taps) -> None:
    for tap in taps:
        assert controller.submit_answer(tap)
        timeline.advance(SETTLE)
        timeline.advance(ADVANCE)


def test_fresh_session(timeline: Timeline) -> None:
    c = make_controller(timeline, [1, 0])
    s = c.snapshot()

    assert s.current_question_index == 0
    assert s.answer_states == (IDLE,) * 4
    assert s.selected_index is None
    assert s.score == 0
    assert not s.finished
    assert s.phase is Phase.ANSWERING
    assert c.progress() == (1, 2)
    assert c.result() is None


def test_two_question_scenario(timeline: Timeline) -> None:
    c = make_controller(timeline, [1, 0])

    assert c.submit_answer(1)
    assert c.snapshot().answer_states == (DISABLED, SELECTED, DISABLED, DISABLED)

    timeline.advance(SETTLE)
    s = c.snapshot()
    assert s.answer_states == (DISABLED, CORRECT, DISABLED, DISABLED)
    assert s.score == 1
    assert s.phase is Phase.REVEALING

    timeline.advance(ADVANCE)
    s = c.snapshot()
    assert s.current_question_index == 1
    assert s.answer_states == (IDLE,) * 4
    assert s.selected_index is None
    assert s.phase is Phase.ANSWERING

    assert c.submit_answer(2)
    timeline.advance(SETTLE)
    s = c.snapshot()
    assert s.answer_states == (CORRECT, DISABLED, WRONG, DISABLED)
    assert s.score == 1

    timeline.advance(ADVANCE)
    s = c.snapshot()
    assert s.finished
    assert s.phase is Phase.COMPLETED
    assert s.current_question_index == 1

    result = c.result()
    assert result.category_title == "Test"
    assert (result.score, result.total) == (1, 2)
    assert result.label == "1/2"
    assert [r.is_correct for r in result.records] == [True, False]


def test_reveal_waits_for_settle_delay(timeline: Timeline) -> None:
    c = make_controller(timeline, [0])
    c.submit_answer(0)

    timeline.advance(SETTLE - 0.25)
    assert c.snapshot().answer_states[0] is SELECTED
    assert c.score == 0

    timeline.advance(0.25)
    assert c.snapshot().answer_states[0] is CORRECT


def test_advance_waits_for_advance_delay(timeline: Timeline) -> None:
    c = make_controller(timeline, [0, 0])
    c.submit_answer(0)
    timeline.advance(SETTLE)

    timeline.advance(ADVANCE - 0.25)
    assert c.snapshot().current_question_index == 0

    timeline.advance(0.25)
    assert c.snapshot().current_question_index == 1


def test_second_tap_before_reveal_is_ignored(timeline: Timeline) -> None:
    c = make_controller(timeline, [3])
    assert c.submit_answer(3)
    before = c.snapshot()

    assert not c.submit_answer(0)
    assert not c.submit_answer(3)
    assert c.snapshot() == before

    timeline.advance(SETTLE)
    assert c.score == 1
    assert timeline.pending() == 1  # only the advance step


def test_tap_after_reveal_is_ignored(timeline: Timeline) -> None:
    c = make_controller(timeline, [2, 0])
    c.submit_answer(1)
    timeline.advance(SETTLE)
    revealed = c.snapshot()

    assert not c.submit_answer(2)
    assert c.snapshot() == revealed


def test_tap_on_missing_slot_is_ignored(timeline: Timeline) -> None:
    c = make_controller(timeline, [0])
    assert not c.submit_answer(4)
    assert not c.submit_answer(-1)
    assert c.snapshot().answer_states == (IDLE,) * 4
    assert timeline.pending() == 0


def test_tap_after_completion_is_ignored(timeline: Timeline) -> None:
    c = make_controller(timeline, [0])
    play(c, timeline, [0])
    assert c.finished

    assert not c.submit_answer(0)
    assert c.score == 1
    assert timeline.pending() == 0


@pytest.mark.parametrize(
    "correct,taps",
    [
        ([0, 1, 2, 3], [0, 1, 2, 3]),
        ([0, 1, 2, 3], [3, 2, 1, 0]),
        ([2, 2, 2], [2, 0, 2]),
        ([1], [0]),
    ],
)
def test_score_counts_correct_taps(timeline: Timeline, correct, taps) -> None:
    c = make_controller(timeline, correct)
    seen_indices = []

    for tap in taps:
        seen_indices.append(c.snapshot().current_question_index)
        assert c.submit_answer(tap)
        timeline.advance(SETTLE)

        states = c.snapshot().answer_states
        assert states.count(CORRECT) == 1
        assert states.count(WRONG) <= 1
        assert states.count(DISABLED) == 4 - states.count(CORRECT) - states.count(WRONG)

        timeline.advance(ADVANCE)

    expected = sum(1 for t, k in zip(taps, correct) if t == k)
    assert c.finished
    assert c.score == expected
    assert 0 <= c.score <= len(correct)
    assert seen_indices == list(range(len(correct)))


def test_close_cancels_pending_steps(timeline: Timeline) -> None:
    c = make_controller(timeline, [0, 1])
    c.submit_answer(0)
    c.close()

    assert not c.is_live
    timeline.advance(SETTLE + ADVANCE)

    s = c.snapshot()
    assert s.answer_states[0] is SELECTED
    assert s.score == 0
    assert s.current_question_index == 0
    assert not c.submit_answer(1)


def test_close_between_reveal_and_advance(timeline: Timeline) -> None:
    c = make_controller(timeline, [0, 1])
    c.submit_answer(0)
    timeline.advance(SETTLE)
    c.close()

    timeline.advance(ADVANCE)
    assert c.snapshot().current_question_index == 0
    assert not c.finished


def test_new_session_starts_clean(timeline: Timeline) -> None:
    category = make_category([1, 0])
    first = QuizSessionController(category, timeline, settle_delay=SETTLE, advance_delay=ADVANCE)
    play(first, timeline, [1])
    first.close()

    second = QuizSessionController(category, timeline, settle_delay=SETTLE, advance_delay=ADVANCE)
    s = second.snapshot()
    assert s.score == 0
    assert s.current_question_index == 0
    assert s.answer_states == (IDLE,) * 4
    assert second.records == ()


def test_zero_delays_run_in_one_pass(timeline: Timeline) -> None:
    c = QuizSessionController(make_category([0, 0]), timeline, settle_delay=0, advance_delay=0)
    c.submit_answer(0)
    timeline.run_due()
    assert c.snapshot().current_question_index == 1
