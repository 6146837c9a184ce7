from __future__ import annotations

import logging
import sys

from .config import settings

_CONFIGURED = False

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(*, level: str | int | None = None) -> None:
    """
    Один stream-хендлер на корневом логгере. Повторный вызов ничего не делает.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(FORMAT))

    root = logging.getLogger()
    root.handlers = [handler]
    if level is None:
        level = settings.LOG_LEVEL
    if isinstance(level, str):
        level = level.upper()
    root.setLevel(level)

    _CONFIGURED = True
