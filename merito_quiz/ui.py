"""
ui.py
======================

Streamlit components of the quiz.

Responsibilities:
- theme colours and the global CSS
- welcome page, category cards, question page, results box, about box
- answer buttons coloured by AnswerState

Only "how it looks" and "what was clicked" live here. Every render_*
function returns what the user pressed; app.py decides what to do with it.
"""

from __future__ import annotations

import html
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

import streamlit as st

from .config import BANK_DIR, AppConfig
from .models import AnswerState, Category, QuizResult, SessionState
from .session import QuizSessionController

# ----------------------------------------------------------------------
#  Theme
# ----------------------------------------------------------------------
THEME: Dict[str, str] = {
    "accent": "#0057FF",
    "bg": "#F2F2F7",
    "card": "#FFFFFF",
    "text": "#000000",
    "muted": "#8E8E93",
    "white": "#FFFFFF",
    "answer_idle": "#DDF4FF",
    "answer_selected": "#0057FF",
    "answer_correct": "#34C759",
    "answer_wrong": "#FF3B30",
}

ICON_DIR = BANK_DIR / "icons"
FALLBACK_ICON = "📚"


def answer_colors(state: AnswerState) -> Dict[str, str]:
    """Background / text colour and opacity of an answer slot."""
    if state in (AnswerState.IDLE, AnswerState.DISABLED):
        bg, fg = THEME["answer_idle"], THEME["text"]
    elif state is AnswerState.SELECTED:
        bg, fg = THEME["answer_selected"], THEME["white"]
    elif state is AnswerState.CORRECT:
        bg, fg = THEME["answer_correct"], THEME["white"]
    else:
        bg, fg = THEME["answer_wrong"], THEME["white"]

    return {
        "background": bg,
        "color": fg,
        "opacity": "0.6" if state is AnswerState.DISABLED else "1.0",
    }


def icon_path(category: Category) -> Optional[Path]:
    for suffix in (".png", ".jpg", ".svg"):
        p = ICON_DIR / f"{category.icon_name}{suffix}"
        if p.exists():
            return p
    return None


# ----------------------------------------------------------------------
#  CSS
# ----------------------------------------------------------------------
def _generate_css(theme: Dict[str, str]) -> str:
    """Global CSS for the whole app."""

    return f"""
    <style>
    .stApp {{
        background: {theme['bg']};
    }}

    .mq-header {{
        background: {theme['accent']};
        color: {theme['white']};
        border-radius: 0 0 20px 20px;
        padding: 0.8rem 1rem;
        font-weight: 700;
        font-size: 1.2rem;
        margin-bottom: 1rem;
    }}

    .mq-title {{
        font-weight: 700;
        font-size: 1.5rem;
        text-align: center;
        margin: 0.5rem 0 1rem 0;
    }}

    .mq-subtitle {{
        color: {theme['muted']};
        text-align: center;
    }}

    .mq-card {{
        background: {theme['card']};
        border-radius: 20px;
        padding: 1rem;
        box-shadow: 0 5px 10px rgba(0,0,0,0.05);
        margin-bottom: 0.4rem;
    }}

    .mq-card-title {{
        font-weight: 600;
        color: {theme['text']};
    }}

    .mq-card-desc {{
        font-size: 0.8rem;
        color: {theme['muted']};
        display: -webkit-box;
        -webkit-line-clamp: 2;
        -webkit-box-orient: vertical;
        overflow: hidden;
    }}

    .mq-counter {{
        color: {theme['accent']};
        font-weight: 600;
    }}

    .mq-question-label {{
        color: {theme['muted']};
        font-weight: 700;
        text-align: center;
    }}

    .mq-question {{
        font-size: 1.4rem;
        text-align: center;
        padding: 1rem;
    }}

    .mq-answer {{
        border-radius: 16px;
        min-height: 60px;
        padding: 1rem;
        margin-bottom: 0.75rem;
        font-weight: 600;
        font-size: 0.95rem;
        text-align: center;
        transition: background 0.2s ease-out;
    }}

    div.stButton > button {{
        border-radius: 16px;
        min-height: 60px;
        font-weight: 600;
    }}
    </style>
    """


def inject_css() -> None:
    st.markdown(_generate_css(THEME), unsafe_allow_html=True)


def answer_html(text: str, state: AnswerState) -> str:
    c = answer_colors(state)
    return (
        f"<div class='mq-answer' style='background:{c['background']};"
        f"color:{c['color']};opacity:{c['opacity']};'>{html.escape(text)}</div>"
    )


# ----------------------------------------------------------------------
#  Welcome page
# ----------------------------------------------------------------------
def render_welcome_page() -> bool:
    """Returns True when the start button was pressed."""
    welcome_image = BANK_DIR / "illustration_welcome.png"
    if welcome_image.exists():
        st.image(str(welcome_image))

    st.markdown(
        "<div class='mq-title'>No witaj, mądralo z WSB Merito! 😎</div>"
        "<div class='mq-subtitle'>Wchodzisz do świata quizu. "
        "Wybierz kategorię i sprawdź się!</div>",
        unsafe_allow_html=True,
    )
    st.write("")
    return st.button("Do dzieła!", key="mq_start", type="primary", use_container_width=True)


# ----------------------------------------------------------------------
#  Category selection
# ----------------------------------------------------------------------
def render_selection_page(categories: Sequence[Category]) -> Dict[str, Any]:
    """
    Header + one card per category.

    Returns:
        {
          "category": Optional[Category],   # card that was opened
          "clicked_back": bool,
          "clicked_info": bool,
        }
    """
    clicked_back = False
    clicked_info = False
    chosen: Optional[Category] = None

    col_logo, col_info, col_back = st.columns([4, 1, 1])
    with col_logo:
        st.markdown("<div class='mq-header'>MeritoQUIZ</div>", unsafe_allow_html=True)
    with col_info:
        if st.button("ℹ️", key="mq_info", help="O aplikacji"):
            clicked_info = True
    with col_back:
        if st.button("◀", key="mq_sel_back", help="Wróć"):
            clicked_back = True

    st.markdown("<div class='mq-title'>Wybierz QUIZ</div>", unsafe_allow_html=True)

    for idx, category in enumerate(categories):
        if render_category_card(category, key=f"mq_cat_{idx}"):
            chosen = category

    return {
        "category": chosen,
        "clicked_back": clicked_back,
        "clicked_info": clicked_info,
    }


def render_category_card(category: Category, key: str) -> bool:
    col_icon, col_body, col_go = st.columns([1, 5, 1])
    with col_icon:
        p = icon_path(category)
        if p is not None:
            st.image(str(p), width=50)
        else:
            st.markdown(f"<div style='font-size:2rem'>{FALLBACK_ICON}</div>", unsafe_allow_html=True)
    with col_body:
        st.markdown(
            "<div class='mq-card'>"
            f"<div class='mq-card-title'>{html.escape(category.title)}</div>"
            f"<div class='mq-card-desc'>{html.escape(category.description)}</div>"
            "</div>",
            unsafe_allow_html=True,
        )
    with col_go:
        return st.button("›", key=key, help=category.title)


def render_about(config: AppConfig) -> None:
    st.info(
        f"**O Aplikacji**\n\n"
        f"Twórca: {config.author}  \n"
        f"Wersja: {config.version}  \n"
        f"{config.about}"
    )


# ----------------------------------------------------------------------
#  Question page
# ----------------------------------------------------------------------
def render_question_page(controller: QuizSessionController) -> Dict[str, Any]:
    """
    Counter, progress bar, question and the four answers.

    Idle answers are real buttons; every other state is drawn as a
    coloured box that cannot be pressed.

    Returns:
        {
          "selected_choice": Optional[int],
          "clicked_back": bool,
        }
    """
    state: SessionState = controller.snapshot()
    question = controller.current_question
    position, total = controller.progress()

    selected_choice: Optional[int] = None
    clicked_back = False

    col_back, col_counter = st.columns([1, 6])
    with col_back:
        if st.button("◀", key="mq_quiz_back", help="Wróć"):
            clicked_back = True
    with col_counter:
        st.markdown(f"<div class='mq-counter'>{position}/{total}</div>", unsafe_allow_html=True)

    st.progress(position / total)

    st.markdown(
        "<div class='mq-question-label'>Pytanie</div>"
        f"<div class='mq-question'>{html.escape(question.text)}</div>",
        unsafe_allow_html=True,
    )

    for idx, answer in enumerate(question.answers):
        slot = state.answer_states[idx]
        if slot is AnswerState.IDLE and not state.finished:
            if st.button(
                answer,
                key=f"mq_answer_{state.current_question_index}_{idx}",
                use_container_width=True,
            ):
                selected_choice = idx
        else:
            st.markdown(answer_html(answer, slot), unsafe_allow_html=True)

    return {
        "selected_choice": selected_choice,
        "clicked_back": clicked_back,
    }


def render_results(result: QuizResult) -> bool:
    """End-of-quiz box. Returns True when "back to menu" was pressed."""
    st.success(
        f"**Koniec Quizu!**\n\n"
        f"Kategoria: {result.category_title}  \n"
        f"Wynik: {result.label}"
    )
    return st.button("Wróć do menu", key="mq_results_back", type="primary", use_container_width=True)
