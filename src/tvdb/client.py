"""Async client for TheTVDB JSON API."""

import asyncio
import logging
from typing import Any
from urllib.parse import urlencode

from multidict import CIMultiDict

from tvdb.api.auth import TokenProvider
from tvdb.api.models import (
    Actor,
    Envelope,
    Episode,
    Image,
    Language,
    RequestOptions,
    Series,
    SeriesEpisodesSummary,
    SeriesWithEpisodes,
    Update,
)
from tvdb.api.pagination import collect_pages
from tvdb.api.transport import Transport
from tvdb.api.validator import check_http_status, parse_envelope
from tvdb.config.settings import TVDB_BASE_URL, Settings

logger = logging.getLogger(__name__)

ACCEPT_HEADER = "application/vnd.thetvdb.v3.0.0"

SeriesId = int | str


class TheTVDB:
    """Client for TheTVDB API.

    Logs in lazily on the first request and reuses the token for the
    lifetime of the instance. List endpoints are fetched page by page
    and returned as one list.
    """

    def __init__(
        self,
        api_key: str,
        language: str = "en",
        *,
        base_url: str = TVDB_BASE_URL,
        transport: Transport | None = None,
    ) -> None:
        if not api_key:
            raise ValueError("API key is required")
        self.api_key = api_key
        self.language = language
        self.base_url = base_url.rstrip("/")
        self._transport = transport or Transport()
        self._tokens = TokenProvider(
            self._transport,
            f"{self.base_url}/login",
            api_key,
            headers={"Accept": ACCEPT_HEADER},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "TheTVDB":
        return cls(
            settings.api_key,
            settings.language,
            base_url=settings.base_url,
        )

    async def close(self) -> None:
        await self._transport.close()

    async def __aenter__(self) -> "TheTVDB":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def get_languages(
        self, options: RequestOptions | None = None
    ) -> list[Language]:
        """Get the languages available on TheTVDB."""
        return await self.send_request("languages", options)

    async def get_episode_by_id(
        self, episode_id: SeriesId, options: RequestOptions | None = None
    ) -> Episode:
        return await self.send_request(f"episodes/{episode_id}", options)

    async def get_episodes_by_series_id(
        self, series_id: SeriesId, options: RequestOptions | None = None
    ) -> list[Episode]:
        """Get all episodes of a series.

        A non-empty query switches to the ``episodes/query`` endpoint.
        """
        if options and options.query:
            return await self.send_request(
                f"series/{series_id}/episodes/query", options
            )
        return await self.send_request(f"series/{series_id}/episodes", options)

    async def get_episodes_summary_by_series_id(
        self, series_id: SeriesId, options: RequestOptions | None = None
    ) -> SeriesEpisodesSummary:
        return await self.send_request(
            f"series/{series_id}/episodes/summary", options
        )

    async def get_series_by_id(
        self, series_id: SeriesId, options: RequestOptions | None = None
    ) -> Series:
        return await self.send_request(f"series/{series_id}", options)

    async def get_episodes_by_air_date(
        self,
        series_id: SeriesId,
        air_date: str,
        options: RequestOptions | None = None,
    ) -> list[Episode]:
        """Get the episodes of a series that aired on ``air_date`` (YYYY-MM-DD)."""
        opts = (options or RequestOptions()).with_query({"firstAired": air_date})
        return await self.get_episodes_by_series_id(series_id, opts)

    async def get_series_by_name(
        self, name: str, options: RequestOptions | None = None
    ) -> list[Series]:
        opts = (options or RequestOptions()).with_query({"name": name})
        return await self.send_request("search/series", opts)

    async def get_series_by_imdb_id(
        self, imdb_id: str, options: RequestOptions | None = None
    ) -> list[Series]:
        opts = (options or RequestOptions()).with_query({"imdbId": imdb_id})
        return await self.send_request("search/series", opts)

    async def get_series_by_zap2it_id(
        self, zap2it_id: str, options: RequestOptions | None = None
    ) -> list[Series]:
        opts = (options or RequestOptions()).with_query({"zap2itId": zap2it_id})
        return await self.send_request("search/series", opts)

    async def get_actors(
        self, series_id: SeriesId, options: RequestOptions | None = None
    ) -> list[Actor]:
        return await self.send_request(f"series/{series_id}/actors", options)

    async def get_series_banner(
        self, series_id: SeriesId, options: RequestOptions | None = None
    ) -> str | None:
        """Get only the banner path of a series."""
        opts = (options or RequestOptions()).with_query({"keys": "banner"})
        series = await self.send_request(f"series/{series_id}/filter", opts)
        return (series or {}).get("banner")

    async def get_series_images(
        self,
        series_id: SeriesId,
        key_type: str | None,
        options: RequestOptions | None = None,
    ) -> list[Image]:
        """Get series images of a key type (poster, fanart, season, ...).

        With ``key_type=None`` the caller's query is sent unchanged.
        """
        opts = options or RequestOptions()
        if key_type is not None:
            opts = opts.with_query({"keyType": key_type})
        return await self.send_request(f"series/{series_id}/images/query", opts)

    async def get_series_posters(
        self, series_id: SeriesId, options: RequestOptions | None = None
    ) -> list[Image]:
        return await self.get_series_images(series_id, "poster", options)

    async def get_season_posters(
        self,
        series_id: SeriesId,
        season: int | str,
        options: RequestOptions | None = None,
    ) -> list[Image]:
        opts = (options or RequestOptions()).with_query(
            {"keyType": "season", "subKey": str(season)}
        )
        return await self.get_series_images(series_id, None, opts)

    async def get_updates(
        self,
        from_time: int,
        to_time: int | None = None,
        options: RequestOptions | None = None,
    ) -> list[Update]:
        """Get series updated since ``from_time`` (and before ``to_time``).

        Both times are unix timestamps.
        """
        query = {"fromTime": str(from_time)}
        if to_time:
            query["toTime"] = str(to_time)
        opts = (options or RequestOptions()).with_query(query)
        return await self.send_request("updated/query", opts)

    async def get_series_all_by_id(
        self, series_id: SeriesId, options: RequestOptions | None = None
    ) -> SeriesWithEpisodes:
        """Get a series together with all of its episodes."""
        series, episodes = await asyncio.gather(
            self.get_series_by_id(series_id, options),
            self.get_episodes_by_series_id(series_id, options),
        )
        return {**series, "episodes": episodes}

    async def send_request(
        self, path: str, options: RequestOptions | None = None
    ) -> Any:
        """Run a GET against ``path`` and return the merged ``data``.

        Usable directly for endpoints without a dedicated method.

        Raises:
            AuthError: If logging in fails.
            TransportError: If the server cannot be reached.
            HttpError: For non-2xx responses.
            ParseError: For bodies that are not a JSON envelope.
            ApiError: For 2xx responses carrying an ``Error`` message.
        """
        opts = options or RequestOptions()
        first = await self._fetch_page(path, opts)
        return await collect_pages(first, path, opts, self._fetch_page)

    async def _fetch_page(self, path: str, options: RequestOptions) -> Envelope:
        url = self._build_url(path, options)
        token = await self._tokens.acquire()
        headers = self._build_headers(token, options)
        response = await self._transport.get(url, headers)
        check_http_status(response)
        return parse_envelope(response.body)

    def _build_url(self, path: str, options: RequestOptions) -> str:
        url = f"{self.base_url}/{path.lstrip('/')}"
        if options.query:
            url += "?" + urlencode(options.query, doseq=True)
        return url

    def _build_headers(
        self, token: str, options: RequestOptions
    ) -> CIMultiDict[str]:
        """Accept and Accept-Language may be overridden by the caller,
        Authorization may not."""
        headers: CIMultiDict[str] = CIMultiDict(
            {
                "Accept": ACCEPT_HEADER,
                "Accept-Language": options.resolve_language(self.language),
            }
        )
        for name, value in options.headers.items():
            headers[name] = value
        headers["Authorization"] = f"Bearer {token}"
        return headers
