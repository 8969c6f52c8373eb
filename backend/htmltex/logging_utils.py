from __future__ import annotations

import logging
import sys

from .config import LOG_LEVEL

_ROOT = "htmltex"
_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_LEVEL = "WARNING"
_configured = False


def _configure() -> None:
    global _configured
    if _configured:
        return
    root = logging.getLogger(_ROOT)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(_FORMAT))
        root.addHandler(handler)
    _configured = True
    try:
        root.setLevel(LOG_LEVEL)
    except ValueError:
        root.setLevel(_DEFAULT_LEVEL)
        root.warning("Unknown HTMLTEX_LOG_LEVEL %r, using %s", LOG_LEVEL, _DEFAULT_LEVEL)


def set_level(level: str | int) -> None:
    _configure()
    logging.getLogger(_ROOT).setLevel(level.upper() if isinstance(level, str) else level)


def get_logger(name: str) -> logging.Logger:
    _configure()
    return logging.getLogger(name)
