from __future__ import annotations

import re
from typing import Any

from .config import TMDB_POSTER_BASE_URL
from .models import AggregatedResult, StreamingOffer

YEAR_PATTERN = re.compile(r"^(\d{4})")


def poster_url(poster_path: str | None) -> str | None:
    if not poster_path:
        return None
    if poster_path.startswith(("http://", "https://")):
        return poster_path
    if not poster_path.startswith("/"):
        poster_path = f"/{poster_path}"
    return f"{TMDB_POSTER_BASE_URL}{poster_path}"


def release_year(release_date: str | None) -> int | None:
    if not release_date:
        return None
    match = YEAR_PATTERN.match(release_date.strip())
    if not match:
        return None
    return int(match.group(1))


def serialize_offer(offer: StreamingOffer) -> dict[str, Any]:
    return {
        "provider_name": offer.provider_name,
        "provider_logo": offer.provider_logo,
        "url": offer.url,
    }


def serialize_result(result: AggregatedResult) -> dict[str, Any]:
    title = result.title
    payload = {
        "id": title.title_id,
        "title": title.title,
        "poster_path": title.poster_path,
        "poster_url": poster_url(title.poster_path),
        "overview": title.overview,
        "release_date": title.release_date,
        "release_year": release_year(title.release_date),
        "streaming": [serialize_offer(offer) for offer in result.offers],
    }
    if result.streaming_error:
        payload["streaming_error"] = result.streaming_error
    return payload
