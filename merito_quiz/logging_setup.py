"""
logging_setup.py
======================

Console logging for the app.

- one handler on the root logger, installed on the first call
- level may be given as a name ("debug", "INFO") or a logging constant
"""

from __future__ import annotations

import logging
from typing import Union


def setup_console_logging(level: Union[str, int] = logging.INFO) -> None:
    """
    Call once at app start. Streamlit reruns the script on every
    interaction, so a second call only updates the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root = logging.getLogger()
    if root.handlers:
        # already configured (avoid duplicates)
        root.setLevel(level)
        return

    root.setLevel(level)
    h = logging.StreamHandler()
    fmt = logging.Formatter(
        "[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    h.setFormatter(fmt)
    root.addHandler(h)
