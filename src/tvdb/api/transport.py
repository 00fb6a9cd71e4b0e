"""Thin aiohttp wrapper issuing single requests."""

import asyncio
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

import aiohttp

from tvdb.api.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class RawResponse:
    """Status line and undecoded body of one response."""

    status: int
    reason: str
    body: str

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


class Transport:
    """Owns the aiohttp session. No retries, no extra timeouts."""

    def __init__(self, session: aiohttp.ClientSession | None = None) -> None:
        self._session = session

    async def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession()
        return self._session

    async def close(self) -> None:
        if self._session and not self._session.closed:
            await self._session.close()

    async def get(self, url: str, headers: Mapping[str, str]) -> RawResponse:
        return await self._request("GET", url, headers=headers)

    async def post_json(
        self, url: str, payload: Any, headers: Mapping[str, str]
    ) -> RawResponse:
        return await self._request("POST", url, headers=headers, json=payload)

    async def _request(self, method: str, url: str, **kwargs) -> RawResponse:
        session = await self._get_session()
        logger.debug("%s %s", method, url)
        try:
            async with session.request(method, url, **kwargs) as resp:
                body = await resp.text(errors="replace")
                return RawResponse(
                    status=resp.status, reason=resp.reason or "", body=body
                )
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error("Request to %s failed: %s", url, e)
            raise TransportError(f"Request to {url} failed", str(e)) from e
