import json
from pathlib import Path
from typing import Any, Dict, List

import pytest

from merito_quiz import question_bank
from merito_quiz.models import Category, Question
from merito_quiz.scheduler import ManualClock, Timeline


def question_dict(text: str, correct: int) -> Dict[str, Any]:
    return {"text": text, "answers": ["A", "B", "C", "D"], "correctAnswerIndex": correct}


def category_dict(title: str, correct_indices: List[int]) -> Dict[str, Any]:
    return {
        "title": title,
        "description": f"{title} description",
        "iconName": f"icon_{title.lower()}",
        "questions": [question_dict(f"{title} Q{i + 1}", c) for i, c in enumerate(correct_indices)],
    }


def make_category(correct_indices: List[int], title: str = "Test") -> Category:
    return Category(
        title=title,
        description="",
        icon_name="icon",
        questions=tuple(
            Question(text=f"Q{i + 1}", answers=("A", "B", "C", "D"), correct_answer_index=c)
            for i, c in enumerate(correct_indices)
        ),
    )


@pytest.fixture(autouse=True)
def _fresh_bank_cache():
    question_bank.clear_cache()
    yield
    question_bank.clear_cache()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def timeline(clock: ManualClock) -> Timeline:
    return Timeline(clock=clock)


@pytest.fixture
def write_bank(tmp_path: Path):
    def _write(payload: Any, name: str = "questions.json") -> Path:
        path = tmp_path / name
        if isinstance(payload, str):
            path.write_text(payload, encoding="utf-8")
        else:
            path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")
        return path

    return _write
