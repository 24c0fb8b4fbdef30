"""Debounced search client for the aggregation endpoint.

Each call to :meth:`SearchClient.set_query` replaces any pending search and
schedules a new one after the debounce interval. Issued searches are numbered;
a response is applied only when it belongs to the latest search, so a slow
earlier response never overwrites newer results. Failures are logged and the
previous results stay in place.
"""
from __future__ import annotations

import logging
import threading
from typing import Any, Callable

import requests

from .config import DEBOUNCE_SECONDS

logger = logging.getLogger(__name__)

SEARCH_PATH = "/api/movies/search"


class SearchClient:
    def __init__(
        self,
        base_url: str,
        debounce_seconds: float = DEBOUNCE_SECONDS,
        session: requests.Session | None = None,
        on_change: Callable[["SearchClient"], None] | None = None,
        timer_factory: Callable[..., Any] = threading.Timer,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.debounce_seconds = debounce_seconds
        self.session = session or requests.Session()
        self.on_change = on_change
        self._timer_factory = timer_factory
        self._lock = threading.Lock()
        self._pending: Any = None
        self._generation = 0
        self.query = ""
        self.results: list[dict[str, Any]] = []
        self.loading = False

    def set_query(self, text: str) -> None:
        with self._lock:
            self.query = text
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None
            if not text:
                return
            timer = self._timer_factory(self.debounce_seconds, self.search, args=(text,))
            timer.daemon = True
            self._pending = timer
        timer.start()

    def fetch(self, query: str) -> list[dict[str, Any]]:
        response = self.session.get(f"{self.base_url}{SEARCH_PATH}", params={"query": query})
        response.raise_for_status()
        payload = response.json()
        if not isinstance(payload, list):
            raise ValueError("search response is not a list")
        return payload

    def search(self, query: str) -> None:
        if not query:
            return
        with self._lock:
            self._pending = None
            self._generation += 1
            generation = self._generation
            self.loading = True
        self._notify()
        try:
            results = self.fetch(query)
        except (requests.RequestException, ValueError) as exc:
            logger.warning("Search for %r failed: %s", query, exc)
            results = None
        with self._lock:
            if generation != self._generation:
                logger.debug("Dropping stale response for %r", query)
                return
            if results is not None:
                self.results = results
            self.loading = False
        self._notify()

    def cancel(self) -> None:
        with self._lock:
            if self._pending is not None:
                self._pending.cancel()
                self._pending = None

    def _notify(self) -> None:
        if self.on_change is not None:
            self.on_change(self)
