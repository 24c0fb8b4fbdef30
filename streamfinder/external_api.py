from __future__ import annotations

from typing import Any

import requests

from .config import JUSTWATCH_TITLE_URL, STREAMING_LOCALE, TMDB_SEARCH_URL
from .models import StreamingOffer, TitleRecord


def search_titles(query: str, api_key: str | None, timeout: float | None = None) -> list[dict[str, Any]]:
    response = requests.get(
        TMDB_SEARCH_URL,
        params={"api_key": api_key, "query": query},
        timeout=timeout,
    )
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError("metadata payload is not an object")
    results = payload.get("results")
    if not isinstance(results, list):
        raise ValueError("metadata payload has no results list")
    return results


def fetch_offers(
    title_id: int | str | None,
    api_key: str | None,
    timeout: float | None = None,
) -> list[dict[str, Any]]:
    url = JUSTWATCH_TITLE_URL.format(title_id=title_id, locale=STREAMING_LOCALE)
    response = requests.get(url, params={"api_key": api_key}, timeout=timeout)
    response.raise_for_status()
    payload = response.json()
    if not isinstance(payload, dict):
        raise ValueError("streaming payload is not an object")
    offers = payload.get("offers")
    if offers is None:
        return []
    if not isinstance(offers, list):
        raise ValueError("streaming offers is not a list")
    return offers


def parse_title(item: dict[str, Any]) -> TitleRecord:
    if not isinstance(item, dict):
        raise ValueError("metadata entry is not an object")
    return TitleRecord(
        title_id=item.get("id"),
        title=item.get("title"),
        poster_path=item.get("poster_path"),
        overview=item.get("overview"),
        release_date=item.get("release_date"),
    )


def parse_offer(item: dict[str, Any]) -> StreamingOffer:
    if not isinstance(item, dict):
        raise ValueError("streaming offer is not an object")
    return StreamingOffer(
        provider_name=item.get("provider_name"),
        provider_logo=item.get("provider_logo"),
        url=item.get("url"),
    )
