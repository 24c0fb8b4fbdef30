from __future__ import annotations

import os
from typing import Any

TMDB_SEARCH_URL = "https://api.themoviedb.org/3/search/movie"
JUSTWATCH_TITLE_URL = "https://api.justwatch.com/content/titles/movie/{title_id}/locale/{locale}"
TMDB_POSTER_BASE_URL = "https://image.tmdb.org/t/p/w500"
STREAMING_LOCALE = "en_US"
MAX_RESULTS = 5
DEBOUNCE_SECONDS = 0.5
APP_VERSION = "0.1.0"

TRUTHY_VALUES = {"1", "true", "yes", "on"}


def _parse_bool(value: str | None) -> bool:
    if not value:
        return False
    return value.strip().lower() in TRUTHY_VALUES


def _parse_timeout(value: str | None) -> float | None:
    if not value:
        return None
    try:
        timeout = float(value)
    except ValueError:
        return None
    return timeout if timeout > 0 else None


def load_config(environ: dict[str, str] | None = None) -> dict[str, Any]:
    """Read the app settings from the process environment.

    Missing API keys are not validated here; requests made without them simply
    fail upstream.
    """
    env = os.environ if environ is None else environ
    return {
        "TMDB_API_KEY": env.get("TMDB_API_KEY"),
        "JUSTWATCH_API_KEY": env.get("JUSTWATCH_API_KEY"),
        "ISOLATE_STREAMING_FAILURES": _parse_bool(env.get("ISOLATE_STREAMING_FAILURES")),
        "REQUEST_TIMEOUT": _parse_timeout(env.get("REQUEST_TIMEOUT")),
    }
