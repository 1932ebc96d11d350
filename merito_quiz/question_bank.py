"""
question_bank.py
===========================

Loads the bundled questions.json and exposes the categories read-only.

- the file is read once per process (warm cache)
- any problem with the file is fatal: there is no sensible quiz without
  questions, so the loader raises QuestionBankError instead of skipping
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, Optional, Union

from .config import AppConfig
from .models import BankFormatError, Category

logger = logging.getLogger(__name__)


class QuestionBankError(RuntimeError):
    """The question resource is missing or malformed."""


# ----------------------------------------------------------------------
#  Process-wide cache
# ----------------------------------------------------------------------
_CATEGORY_CACHE: List[Category] = []
_LOADED_FROM: Optional[Path] = None


# ----------------------------------------------------------------------
#  Loading
# ----------------------------------------------------------------------
def load_categories(
    path: Union[str, Path, None] = None,
    force_reload: bool = False,
) -> List[Category]:
    """
    Read the question resource and return its categories.

    - path=None uses AppConfig().question_bank_path
    - the result is cached; a different path or force_reload=True re-reads
    - missing file / bad JSON / schema mismatch -> QuestionBankError
    """
    global _CATEGORY_CACHE, _LOADED_FROM

    bank_path = Path(path) if path is not None else AppConfig().question_bank_path

    if _LOADED_FROM == bank_path and not force_reload:
        return list(_CATEGORY_CACHE)

    if not bank_path.exists():
        raise QuestionBankError(f"Nie znaleziono pliku {bank_path}")

    try:
        with bank_path.open("r", encoding="utf-8") as f:
            raw = json.load(f)
    except (OSError, UnicodeDecodeError) as e:
        raise QuestionBankError(f"Nie udało się załadować pliku {bank_path}: {e}") from e
    except json.JSONDecodeError as e:
        raise QuestionBankError(f"Nie udało się sparsować pliku {bank_path}: {e}") from e

    if not isinstance(raw, list) or not raw:
        raise QuestionBankError(
            f"Nie udało się sparsować pliku {bank_path}: expected a non-empty list of categories"
        )

    categories: List[Category] = []
    for pos, entry in enumerate(raw):
        try:
            categories.append(Category.from_dict(entry))
        except BankFormatError as e:
            raise QuestionBankError(
                f"Nie udało się sparsować pliku {bank_path} (category #{pos}): {e}"
            ) from e

    _CATEGORY_CACHE = categories
    _LOADED_FROM = bank_path
    logger.info(
        "Loaded %d categories (%d questions) from %s",
        len(categories),
        sum(c.total for c in categories),
        bank_path,
    )
    return list(categories)


def clear_cache() -> None:
    global _CATEGORY_CACHE, _LOADED_FROM
    _CATEGORY_CACHE = []
    _LOADED_FROM = None


# ----------------------------------------------------------------------
#  Simple helpers
# ----------------------------------------------------------------------
def get_all_categories() -> List[Category]:
    """Categories of the last loaded bank (loads the default one if needed)."""
    if _LOADED_FROM is None:
        return load_categories()
    return list(_CATEGORY_CACHE)


def get_category(title: str) -> Optional[Category]:
    """Exact title match, None when missing."""
    for category in get_all_categories():
        if category.title == title:
            return category
    return None


def count_questions() -> int:
    return sum(c.total for c in get_all_categories())
