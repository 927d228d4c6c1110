"""Logging setup for applications embedding the engine."""

from __future__ import annotations

import logging
from typing import Optional

from fitrecovery.core.config import settings


def configure_logging(level: Optional[str] = None) -> None:
    """Apply ``basicConfig`` with the engine's log format.

    Engine modules only create named loggers; calling this is up to the
    host application.  ``level`` overrides ``settings.LOG_LEVEL``.
    """
    logging.basicConfig(
        level=(level or settings.LOG_LEVEL).upper(),
        format=settings.LOG_FORMAT,
    )
