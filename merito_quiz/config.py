"""
config.py
=========

Central place for every setting the app uses.
The Streamlit entry point and the tests both go through this class.

Sources, lowest priority first:
- defaults declared on AppConfig
- config.toml at the project root ([app] / [quiz] / [logging])
- environment variables (MERITO_QUIZ_BANK, MERITO_QUIZ_LOG_LEVEL)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import toml

logger = logging.getLogger(__name__)


# ------------------------------------------------------------
# Base paths
# ------------------------------------------------------------

ROOT_DIR = Path(__file__).resolve().parent.parent
BANK_DIR = ROOT_DIR / "bank"
CONFIG_PATH = ROOT_DIR / "config.toml"

DEFAULT_SETTLE_DELAY = 0.6
DEFAULT_ADVANCE_DELAY = 1.5


# ------------------------------------------------------------
# AppConfig
# ------------------------------------------------------------

@dataclass
class AppConfig:
    """
    Application settings.

    - question bank location
    - settle / advance delays of the quiz flow
    - log level
    - texts of the "about" box
    """

    # ---------- file paths ----------
    question_bank_path: Path = BANK_DIR / "questions.json"

    # ---------- quiz timing (seconds) ----------
    settle_delay: float = DEFAULT_SETTLE_DELAY
    advance_delay: float = DEFAULT_ADVANCE_DELAY

    # ---------- logging ----------
    log_level: str = "INFO"

    # ---------- about box ----------
    app_name: str = "MeritoQUIZ"
    version: str = "1.0"
    author: str = "Michał Witkowski nr 78421"
    about: str = "Student na kierunku Informatyki"

    # ============================================================
    # Validation
    # ============================================================

    def __post_init__(self):
        self.question_bank_path = Path(self.question_bank_path)
        self.settle_delay = float(self.settle_delay)
        self.advance_delay = float(self.advance_delay)

        if self.settle_delay < 0 or self.advance_delay < 0:
            raise ValueError(
                f"delays must be >= 0 (settle={self.settle_delay}, "
                f"advance={self.advance_delay})"
            )

        self.log_level = str(self.log_level).upper()

    # ============================================================
    # Construction
    # ============================================================

    @classmethod
    def load(
        cls,
        path: Optional[Path] = None,
        environ: Optional[Dict[str, str]] = None,
    ) -> "AppConfig":
        """
        Build the config from config.toml plus environment overrides.

        A missing config.toml is fine. A broken one is logged and ignored,
        the defaults are used instead.
        """
        env = os.environ if environ is None else environ
        raw = cls.read_toml(CONFIG_PATH if path is None else Path(path))

        kwargs: Dict[str, Any] = {}

        app_cfg = raw.get("app")
        if isinstance(app_cfg, dict):
            for key, field_name in (
                ("name", "app_name"),
                ("version", "version"),
                ("author", "author"),
                ("about", "about"),
            ):
                if isinstance(app_cfg.get(key), str):
                    kwargs[field_name] = app_cfg[key]

        quiz_cfg = raw.get("quiz")
        if isinstance(quiz_cfg, dict):
            for key in ("settle_delay", "advance_delay"):
                value = quiz_cfg.get(key)
                # bool is an int subclass, reject it explicitly
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    kwargs[key] = value
            bank = quiz_cfg.get("question_bank_path")
            if isinstance(bank, str) and bank:
                kwargs["question_bank_path"] = _resolve(bank)

        log_cfg = raw.get("logging")
        if isinstance(log_cfg, dict) and isinstance(log_cfg.get("level"), str):
            kwargs["log_level"] = log_cfg["level"]

        # environment wins over config.toml
        if env.get("MERITO_QUIZ_BANK"):
            kwargs["question_bank_path"] = _resolve(env["MERITO_QUIZ_BANK"])
        if env.get("MERITO_QUIZ_LOG_LEVEL"):
            kwargs["log_level"] = env["MERITO_QUIZ_LOG_LEVEL"]

        return cls(**kwargs)

    # ============================================================
    # TOML helper
    # ============================================================

    @staticmethod
    def read_toml(path: Path) -> Dict[str, Any]:
        if not path.exists():
            return {}
        try:
            return toml.load(path)
        except (toml.TomlDecodeError, OSError) as e:
            logger.warning("Ignoring unreadable config %s: %s", path, e)
            return {}


def _resolve(value: str) -> Path:
    """Relative paths are taken from the project root."""
    p = Path(value)
    return p if p.is_absolute() else ROOT_DIR / p
