"""
app.py
======================

MeritoQUIZ (Streamlit) entry point.

Flow:
- welcome page -> category list -> question flow -> results -> category list
- questions come from bank/questions.json, loaded once per process
- every Streamlit session owns one Timeline; the active quiz schedules its
  reveal / advance steps on it and this script drives it on each rerun

Run with:  streamlit run app.py
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional

import streamlit as st

from merito_quiz.config import AppConfig
from merito_quiz.logging_setup import setup_console_logging
from merito_quiz.models import Category
from merito_quiz.question_bank import QuestionBankError, load_categories
from merito_quiz.scheduler import Timeline
from merito_quiz.session import QuizSessionController
from merito_quiz.ui import (
    inject_css,
    render_about,
    render_question_page,
    render_results,
    render_selection_page,
    render_welcome_page,
)

logger = logging.getLogger("merito_quiz.app")


# ----------------------------------------------------------------------
#  Config / bank
# ----------------------------------------------------------------------
def load_app_config() -> AppConfig:
    """AppConfig kept in the session so config.toml is read once."""
    if "app_config" not in st.session_state:
        st.session_state["app_config"] = AppConfig.load()
    return st.session_state["app_config"]


def load_bank_or_stop(config: AppConfig) -> List[Category]:
    """A broken question bank is fatal: show the reason and stop the script."""
    try:
        return load_categories(config.question_bank_path)
    except QuestionBankError as e:
        logger.exception("Question bank could not be loaded")
        st.error(str(e))
        st.stop()
        raise


# ----------------------------------------------------------------------
#  Session helpers
# ----------------------------------------------------------------------
def get_timeline() -> Timeline:
    if "timeline" not in st.session_state:
        st.session_state["timeline"] = Timeline()
    return st.session_state["timeline"]


def get_controller() -> Optional[QuizSessionController]:
    return st.session_state.get("controller")


def start_quiz(category: Category, config: AppConfig) -> None:
    """Entering a category always starts from a fresh controller."""
    end_quiz()
    st.session_state["controller"] = QuizSessionController(
        category,
        get_timeline(),
        settle_delay=config.settle_delay,
        advance_delay=config.advance_delay,
    )


def end_quiz() -> None:
    controller = st.session_state.pop("controller", None)
    if controller is not None:
        controller.close()


def set_page(page: str) -> None:
    st.session_state["page"] = page


def get_page() -> str:
    return st.session_state.get("page", "welcome")


# ----------------------------------------------------------------------
#  Page: welcome
# ----------------------------------------------------------------------
def render_welcome() -> None:
    if render_welcome_page():
        set_page("selection")
        st.rerun()


# ----------------------------------------------------------------------
#  Page: category selection
# ----------------------------------------------------------------------
def render_selection(categories: List[Category], config: AppConfig) -> None:
    ui_result = render_selection_page(categories)

    if ui_result["clicked_info"]:
        st.session_state["show_about"] = not st.session_state.get("show_about", False)
    if st.session_state.get("show_about"):
        render_about(config)

    if ui_result["category"] is not None:
        start_quiz(ui_result["category"], config)
        set_page("quiz")
        st.rerun()
    elif ui_result["clicked_back"]:
        set_page("welcome")
        st.rerun()


# ----------------------------------------------------------------------
#  Page: quiz
# ----------------------------------------------------------------------
def render_quiz() -> None:
    timeline = get_timeline()
    controller = get_controller()
    if controller is None:
        set_page("selection")
        st.rerun()
        return

    # fire whatever reveal / advance became due since the last rerun
    timeline.run_due()

    ui_result = render_question_page(controller)

    if ui_result["clicked_back"]:
        end_quiz()
        set_page("selection")
        st.rerun()
        return

    # a rejected tap falls through so pending steps still get driven
    choice = ui_result["selected_choice"]
    if choice is not None and controller.submit_answer(choice):
        st.rerun()
        return

    result = controller.result()
    if result is not None:
        if render_results(result):
            end_quiz()
            set_page("selection")
            st.rerun()
        return

    # wait for the next scheduled step, then redraw
    wait = timeline.seconds_until_next()
    if wait is not None:
        time.sleep(wait)
        st.rerun()


# ----------------------------------------------------------------------
#  Main
# ----------------------------------------------------------------------
def main() -> None:
    config = load_app_config()
    st.set_page_config(
        page_title=config.app_name,
        page_icon="🎓",
        layout="centered",
    )
    setup_console_logging(config.log_level)
    inject_css()

    categories = load_bank_or_stop(config)

    page = get_page()

    if page == "quiz":
        render_quiz()
    elif page == "selection":
        render_selection(categories, config)
    else:
        set_page("welcome")
        render_welcome()


if __name__ == "__main__":
    main()
