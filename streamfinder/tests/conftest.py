"""Pytest configuration and fixtures."""
from __future__ import annotations

import threading
from typing import Any

import pytest
import requests

from streamfinder.config import TMDB_SEARCH_URL


class FakeResponse:
    def __init__(self, payload: Any = None, status_code: int = 200, invalid_json: bool = False):
        self.payload = payload
        self.status_code = status_code
        self.invalid_json = invalid_json

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error", response=self)

    def json(self) -> Any:
        if self.invalid_json:
            raise ValueError("Expecting value: line 1 column 1 (char 0)")
        return self.payload


class FakeUpstream:
    """Stands in for ``requests.get`` and records every outbound call."""

    def __init__(self):
        self.titles: Any = FakeResponse({"results": []})
        self.offers: dict[str, Any] = {}
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self._lock = threading.Lock()

    def set_titles(self, titles: list[dict[str, Any]]) -> None:
        self.titles = FakeResponse({"results": titles})

    def set_offers(self, title_id: Any, offers: Any) -> None:
        self.offers[str(title_id)] = FakeResponse({"offers": offers})

    def get(self, url: str, params: dict[str, Any] | None = None, timeout: Any = None, **kwargs: Any) -> FakeResponse:
        with self._lock:
            self.calls.append((url, dict(params or {})))
        if url == TMDB_SEARCH_URL:
            response = self.titles
        else:
            title_id = url.split("/titles/movie/")[1].split("/")[0]
            response = self.offers.get(title_id, FakeResponse({"offers": []}))
        if isinstance(response, Exception):
            raise response
        return response

    @property
    def metadata_calls(self) -> list[tuple[str, dict[str, Any]]]:
        return [call for call in self.calls if call[0] == TMDB_SEARCH_URL]

    @property
    def streaming_calls(self) -> list[tuple[str, dict[str, Any]]]:
        return [call for call in self.calls if call[0] != TMDB_SEARCH_URL]

    def streaming_ids(self) -> list[str]:
        return sorted(url.split("/titles/movie/")[1].split("/")[0] for url, _ in self.streaming_calls)


def make_titles(count: int) -> list[dict[str, Any]]:
    return [
        {
            "id": 100 + index,
            "title": f"Movie {index}",
            "poster_path": f"/poster{index}.jpg",
            "overview": f"Overview {index}",
            "release_date": f"20{index:02d}-01-01",
        }
        for index in range(count)
    ]


@pytest.fixture
def upstream(monkeypatch):
    """Replace outbound HTTP with a recording fake."""
    fake = FakeUpstream()
    monkeypatch.setattr("streamfinder.external_api.requests.get", fake.get)
    return fake


@pytest.fixture
def app():
    """Create application for testing."""
    from streamfinder import create_app

    app = create_app(
        {
            "TESTING": True,
            "TMDB_API_KEY": "tmdb-test-key",
            "JUSTWATCH_API_KEY": "justwatch-test-key",
            "ISOLATE_STREAMING_FAILURES": False,
            "REQUEST_TIMEOUT": None,
        }
    )
    yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(name="make_titles")
def make_titles_fixture():
    return make_titles
