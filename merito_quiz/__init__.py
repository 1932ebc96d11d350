"""
merito_quiz package
======================

Internal logic of the MeritoQUIZ app.

Main parts:
- settings (config)
- question bank loading (question_bank)
- data types (models)
- one-shot deferred callbacks (scheduler)
- the answer -> reveal -> advance state machine (session)
- Streamlit components (ui)

app.py only handles pages and routing; everything else is called from here.
"""

from .config import AppConfig
from .models import AnswerState, Category, Phase, Question, QuizResult, SessionState
from .question_bank import QuestionBankError, load_categories
from .scheduler import CancelToken, ManualClock, Timeline
from .session import QuizSessionController

__all__ = [
    "AppConfig",
    "AnswerState",
    "Category",
    "Phase",
    "Question",
    "QuizResult",
    "SessionState",
    "QuestionBankError",
    "load_categories",
    "CancelToken",
    "ManualClock",
    "Timeline",
    "QuizSessionController",
]
