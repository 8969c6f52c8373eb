from __future__ import annotations

import os

APP_NAME = "htmltex"
APP_VERSION = "0.1.0"

LOG_LEVEL = os.getenv("HTMLTEX_LOG_LEVEL", "WARNING").upper()

FETCH_TIMEOUT_S = float(os.getenv("HTMLTEX_FETCH_TIMEOUT_S", "15"))
FETCH_MAX_BYTES = int(os.getenv("HTMLTEX_FETCH_MAX_BYTES", "5000000"))
USER_AGENT = os.getenv("HTMLTEX_USER_AGENT", f"{APP_NAME}/{APP_VERSION} (+local)")
