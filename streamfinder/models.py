from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class TitleRecord:
    title_id: int | str | None
    title: str | None
    poster_path: str | None
    overview: str | None
    release_date: str | None


@dataclass
class StreamingOffer:
    provider_name: str | None
    provider_logo: str | None
    url: str | None


@dataclass
class AggregatedResult:
    title: TitleRecord
    offers: list[StreamingOffer] = field(default_factory=list)
    streaming_error: str | None = None
