"""API key to bearer token exchange, memoized per client."""

import asyncio
import json
import logging
from collections.abc import Mapping

from tvdb.api.errors import AuthError
from tvdb.api.transport import Transport

logger = logging.getLogger(__name__)


class TokenProvider:
    """Performs the login exchange at most once.

    The first ``acquire()`` schedules the login as a task; every other
    caller, concurrent or later, awaits that same task. A failed login is
    memoized too. Tokens are never refreshed, so once the server expires
    one every request fails with ``HttpError(401)``.
    """

    def __init__(
        self,
        transport: Transport,
        login_url: str,
        api_key: str,
        headers: Mapping[str, str] | None = None,
    ) -> None:
        self._transport = transport
        self._login_url = login_url
        self._api_key = api_key
        self._headers = dict(headers or {})
        self._pending: asyncio.Future[str] | None = None

    @property
    def started(self) -> bool:
        return self._pending is not None

    async def acquire(self) -> str:
        # No await between the check and the assignment, so only one
        # coroutine on the loop can create the task.
        if self._pending is None:
            self._pending = asyncio.ensure_future(self._login())
        return await asyncio.shield(self._pending)

    async def _login(self) -> str:
        logger.debug("Logging in at %s", self._login_url)
        resp = await self._transport.post_json(
            self._login_url, {"apikey": self._api_key}, self._headers
        )
        if not resp.ok:
            logger.error("Login rejected: %d %s", resp.status, resp.reason)
            raise AuthError(
                f"Login failed with HTTP {resp.status}",
                resp.reason or None,
            )

        try:
            payload = json.loads(resp.body)
        except ValueError as e:
            raise AuthError("Login response is not valid JSON", str(e)) from e

        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise AuthError("Login response did not contain a token")

        logger.debug("Login succeeded")
        return token
