"""Request options, response envelope and result shapes."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from typing import Any, TypedDict

from pydantic import BaseModel, ConfigDict, Field

QueryValue = str | int | Sequence[str]


@dataclass(frozen=True)
class RequestOptions:
    """Per-call overrides. Unset fields fall back to client defaults."""

    query: Mapping[str, QueryValue] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)
    lang: str | None = None
    language: str | None = None

    def resolve_language(self, default: str) -> str:
        if self.lang is not None:
            return self.lang
        if self.language is not None:
            return self.language
        return default

    def with_query(self, query: Mapping[str, QueryValue]) -> "RequestOptions":
        """Copy with the query replaced entirely."""
        return replace(self, query=dict(query))

    def with_page(self, page: int) -> "RequestOptions":
        """Copy with the ``page`` query parameter set."""
        return replace(self, query={**self.query, "page": str(page)})


class Links(BaseModel):
    """Pagination metadata attached to list responses."""

    first: int | None = None
    last: int | None = None
    next: int | None = None
    prev: int | None = None


class Envelope(BaseModel):
    """One decoded response page."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    data: Any
    links: Links | None = None
    error: str | None = Field(default=None, alias="Error")


# Result shapes. These document what the API returns; they are not
# validated at runtime.


class Language(TypedDict, total=False):
    id: int
    abbreviation: str
    name: str
    englishName: str


class Series(TypedDict, total=False):
    id: int
    seriesName: str
    aliases: list[str]
    banner: str
    seriesId: str
    status: str
    firstAired: str
    network: str
    networkId: str
    runtime: str
    genre: list[str]
    overview: str
    lastUpdated: int
    airsDayOfWeek: str
    airsTime: str
    rating: str
    imdbId: str
    zap2itId: str
    added: str
    siteRating: float
    siteRatingCount: int
    slug: str


class Episode(TypedDict, total=False):
    id: int
    airedSeason: int
    airedSeasonID: int
    airedEpisodeNumber: int
    episodeName: str
    firstAired: str
    guestStars: list[str]
    directors: list[str]
    writers: list[str]
    overview: str
    absoluteNumber: int
    filename: str
    seriesId: int
    lastUpdated: int
    imdbId: str
    siteRating: float
    siteRatingCount: int


class SeriesEpisodesSummary(TypedDict, total=False):
    airedSeasons: list[str]
    airedEpisodes: str
    dvdSeasons: list[str]
    dvdEpisodes: str


class Actor(TypedDict, total=False):
    id: int
    seriesId: int
    name: str
    role: str
    sortOrder: int
    image: str
    imageAuthor: int
    imageAdded: str
    lastUpdated: str


class Image(TypedDict, total=False):
    id: int
    keyType: str
    subKey: str
    fileName: str
    resolution: str
    ratingsInfo: dict[str, Any]
    thumbnail: str


class Update(TypedDict, total=False):
    id: int
    lastUpdated: int


class SeriesWithEpisodes(Series, total=False):
    episodes: list[Episode]
