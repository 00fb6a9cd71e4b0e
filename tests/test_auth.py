"""Tests for the memoized login exchange."""

import asyncio

import pytest

from tvdb.api.auth import TokenProvider
from tvdb.api.errors import AuthError, TransportError
from tvdb.api.transport import RawResponse

LOGIN_URL = "https://api.test/login"


def _provider(transport) -> TokenProvider:
    return TokenProvider(transport, LOGIN_URL, "my-key", headers={"Accept": "x"})


class TestTokenProvider:
    @pytest.mark.asyncio
    async def test_sends_api_key(self, transport):
        token = await _provider(transport).acquire()

        assert token == "secret-token"
        assert transport.login_payloads == [{"apikey": "my-key"}]

    @pytest.mark.asyncio
    async def test_concurrent_callers_share_one_login(self, transport):
        provider = _provider(transport)

        tokens = await asyncio.gather(*(provider.acquire() for _ in range(20)))

        assert tokens == ["secret-token"] * 20
        assert transport.login_calls == 1

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_login(self, transport):
        provider = _provider(transport)
        first = asyncio.ensure_future(provider.acquire())
        second = asyncio.ensure_future(provider.acquire())
        await asyncio.sleep(0)

        first.cancel()

        assert await second == "secret-token"
        with pytest.raises(asyncio.CancelledError):
            await first
        assert transport.login_calls == 1
        assert await provider.acquire() == "secret-token"

    @pytest.mark.asyncio
    async def test_token_reused_after_login(self, transport):
        provider = _provider(transport)
        assert not provider.started

        await provider.acquire()
        await provider.acquire()

        assert provider.started
        assert transport.login_calls == 1

    @pytest.mark.asyncio
    async def test_rejected_login(self, transport):
        transport.login_response = RawResponse(401, "Unauthorized", '{"Error": "Not Authorized"}')

        with pytest.raises(AuthError) as exc_info:
            await _provider(transport).acquire()
        assert "401" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_failure_is_memoized(self, transport):
        transport.login_response = RawResponse(401, "Unauthorized", "")
        provider = _provider(transport)

        for _ in range(3):
            with pytest.raises(AuthError):
                await provider.acquire()
        assert transport.login_calls == 1

    @pytest.mark.asyncio
    async def test_non_json_response(self, transport):
        transport.login_response = RawResponse(200, "OK", "<html></html>")

        with pytest.raises(AuthError):
            await _provider(transport).acquire()

    @pytest.mark.asyncio
    async def test_missing_token(self, transport):
        transport.login_response = RawResponse(200, "OK", '{"data": {}}')

        with pytest.raises(AuthError):
            await _provider(transport).acquire()

    @pytest.mark.asyncio
    async def test_connection_failure_is_transport_error(self, transport):
        transport.login_response = TransportError("Request to login failed")

        with pytest.raises(TransportError):
            await _provider(transport).acquire()
