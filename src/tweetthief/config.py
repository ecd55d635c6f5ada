"""Centralised configuration loaded from environment variables and dotenv."""

from __future__ import annotations

import os

from dotenv import load_dotenv

load_dotenv()

# ── Logging ────────────────────────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# ── X API ──────────────────────────────────────────────────────────────────
X_BEARER_TOKEN: str = os.getenv("X_BEARER_TOKEN", "")
SEARCH_MAX_RESULTS: int = int(os.getenv("TWEETTHIEF_SEARCH_MAX_RESULTS", "10"))
HTTP_TIMEOUT: float = float(os.getenv("TWEETTHIEF_HTTP_TIMEOUT", "30"))

# ── Scan ───────────────────────────────────────────────────────────────────
DEFAULT_COUNT: int = 10
SEARCH_WORKERS: int = int(os.getenv("TWEETTHIEF_SEARCH_WORKERS", "4"))
