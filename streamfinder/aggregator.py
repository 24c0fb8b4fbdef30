"""Search aggregation: one metadata lookup, then a streaming lookup per title.

The streaming lookups for the kept titles run in parallel. By default the
first failing lookup fails the whole search (``UpstreamFailure``) and the
remaining lookups are left to finish unobserved. With ``isolate_failures`` every
lookup is awaited and a failed one only marks its own title.
"""
from __future__ import annotations

import logging
from concurrent.futures import Future, ThreadPoolExecutor, as_completed

import requests

from .config import MAX_RESULTS
from .external_api import fetch_offers, parse_offer, parse_title, search_titles
from .models import AggregatedResult, StreamingOffer, TitleRecord

logger = logging.getLogger(__name__)

STREAMING_LOOKUP_FAILED = "streaming_lookup_failed"
UPSTREAM_ERRORS = (requests.RequestException, ValueError)


class SearchError(Exception):
    status_code = 500
    error = "search_failed"
    message = "Search failed"

    def to_dict(self) -> dict[str, str]:
        return {"error": self.error, "message": self.message}


class MissingQuery(SearchError):
    status_code = 400
    error = "missing_query"
    message = "Query parameter is required"


class UpstreamFailure(SearchError):
    status_code = 500
    error = "upstream_failure"
    message = "Failed to fetch data"


def lookup_offers(
    title: TitleRecord,
    api_key: str | None,
    timeout: float | None = None,
) -> list[StreamingOffer]:
    return [parse_offer(item) for item in fetch_offers(title.title_id, api_key, timeout)]


def search_with_streaming(
    query: str | None,
    tmdb_api_key: str | None = None,
    justwatch_api_key: str | None = None,
    isolate_failures: bool = False,
    timeout: float | None = None,
) -> list[AggregatedResult]:
    if not query:
        raise MissingQuery()
    try:
        items = search_titles(query, tmdb_api_key, timeout)
        titles = [parse_title(item) for item in items[:MAX_RESULTS]]
    except UPSTREAM_ERRORS as exc:
        logger.error("Metadata lookup failed for %r: %s", query, exc)
        raise UpstreamFailure() from exc
    if not titles:
        return []
    if isolate_failures:
        return _settle_all(titles, justwatch_api_key, timeout)
    return _join_all(titles, justwatch_api_key, timeout)


def _submit_lookups(
    executor: ThreadPoolExecutor,
    titles: list[TitleRecord],
    api_key: str | None,
    timeout: float | None,
) -> list[Future]:
    return [executor.submit(lookup_offers, title, api_key, timeout) for title in titles]


def _join_all(
    titles: list[TitleRecord],
    api_key: str | None,
    timeout: float | None,
) -> list[AggregatedResult]:
    executor = ThreadPoolExecutor(max_workers=len(titles), thread_name_prefix="streaming")
    try:
        futures = _submit_lookups(executor, titles, api_key, timeout)
        for future in as_completed(futures):
            future.result()
    except UPSTREAM_ERRORS as exc:
        logger.error("Streaming lookup failed, aborting search: %s", exc)
        raise UpstreamFailure() from exc
    finally:
        # Siblings of a failed lookup keep running; nobody reads their result.
        executor.shutdown(wait=False)
    return [
        AggregatedResult(title=title, offers=future.result())
        for title, future in zip(titles, futures)
    ]


def _settle_all(
    titles: list[TitleRecord],
    api_key: str | None,
    timeout: float | None,
) -> list[AggregatedResult]:
    results: list[AggregatedResult] = []
    with ThreadPoolExecutor(max_workers=len(titles), thread_name_prefix="streaming") as executor:
        futures = _submit_lookups(executor, titles, api_key, timeout)
        for title, future in zip(titles, futures):
            try:
                offers = future.result()
            except UPSTREAM_ERRORS as exc:
                logger.warning("Streaming lookup failed for title %s: %s", title.title_id, exc)
                results.append(AggregatedResult(title=title, streaming_error=STREAMING_LOOKUP_FAILED))
            else:
                results.append(AggregatedResult(title=title, offers=offers))
    return results
