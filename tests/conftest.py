"""Shared test fixtures."""

import asyncio
import json

import pytest

from tvdb.api.transport import RawResponse
from tvdb.client import TheTVDB
from tvdb.config.settings import Settings

BASE_URL = "https://api.test"


class FakeTransport:
    """In-memory stand-in for the aiohttp transport.

    Responses are registered per full URL. When several are registered
    for one URL they are served in order, the last one repeating.
    """

    def __init__(self) -> None:
        self.routes: dict[str, list[RawResponse | Exception]] = {}
        self.requests: list[tuple[str, dict]] = []
        self.login_payloads: list[dict] = []
        self.login_response: RawResponse | Exception = RawResponse(
            200, "OK", json.dumps({"token": "secret-token"})
        )
        self.closed = False

    @property
    def login_calls(self) -> int:
        return len(self.login_payloads)

    @property
    def urls(self) -> list[str]:
        return [url for url, _ in self.requests]

    def add(self, url, body=None, status=200, reason="OK"):
        if isinstance(body, Exception):
            response = body
        else:
            text = body if isinstance(body, str) else json.dumps(body)
            response = RawResponse(status, reason, text)
        self.routes.setdefault(url, []).append(response)

    async def get(self, url, headers):
        self.requests.append((url, headers))
        await asyncio.sleep(0)
        queue = self.routes.get(url)
        if not queue:
            raise AssertionError(f"Unexpected GET {url}")
        response = queue.pop(0) if len(queue) > 1 else queue[0]
        if isinstance(response, Exception):
            raise response
        return response

    async def post_json(self, url, payload, headers):
        self.login_payloads.append(payload)
        await asyncio.sleep(0)
        if isinstance(self.login_response, Exception):
            raise self.login_response
        return self.login_response

    async def close(self):
        self.closed = True


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def client(transport) -> TheTVDB:
    return TheTVDB("test-key", base_url=BASE_URL, transport=transport)


@pytest.fixture
def settings(tmp_path, monkeypatch) -> Settings:
    """Settings isolated from the user's config file and environment."""
    monkeypatch.setattr(Settings, "CONFIG_PATH", tmp_path / "config.toml")
    for var in ("TVDB_API_KEY", "TVDB_LANGUAGE", "TVDB_BASE_URL", "TVDB_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    return Settings(api_key="test-key", base_url=BASE_URL)
