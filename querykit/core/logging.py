from __future__ import annotations

import logging

from querykit.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s {app} %(name)s %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    resolved = level if level is not None else settings.LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.strip().upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    root = logging.getLogger("querykit")
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT.format(app=settings.APP_NAME)))
        root.addHandler(handler)
    root.setLevel(resolved)
    return root
