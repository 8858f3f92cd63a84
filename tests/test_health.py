"""Tests for the Cosmos DB startup checks."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import httpx

from revision_diff.health import check_emulators, cosmos_problems


def _settings(endpoint: str, key: str = "emulator-key") -> SimpleNamespace:
    return SimpleNamespace(cosmos=SimpleNamespace(endpoint=endpoint, key=key, database="diffs"))


async def test_missing_endpoint_fails(caplog):
    assert await check_emulators(_settings("")) is False
    assert "COSMOS_ENDPOINT is not set" in caplog.text


async def test_missing_key_is_reported():
    problems = await cosmos_problems(_settings("https://account.documents.azure.com:443/", key=""))
    assert problems == ["COSMOS_KEY is not set — the account key is required"]


async def test_https_endpoint_is_not_probed():
    with patch("revision_diff.health.httpx.AsyncClient") as client_cls:
        assert await check_emulators(_settings("https://account.documents.azure.com:443/"))
    client_cls.assert_not_called()


async def test_reachable_emulator_passes():
    with patch("revision_diff.health.httpx.AsyncClient") as client_cls:
        client = client_cls.return_value.__aenter__.return_value
        client.get = AsyncMock(return_value=httpx.Response(200))
        assert await check_emulators(_settings("http://localhost:8081"))
    client.get.assert_awaited_once_with("http://localhost:8081/")


async def test_starting_emulator_fails():
    with patch("revision_diff.health.httpx.AsyncClient") as client_cls:
        client = client_cls.return_value.__aenter__.return_value
        client.get = AsyncMock(return_value=httpx.Response(503))
        problems = await cosmos_problems(_settings("http://localhost:8081"))
    assert problems == ["Cosmos DB emulator at localhost:8081 is still starting (HTTP 503)"]


async def test_unreachable_emulator_fails(caplog):
    with patch("revision_diff.health.httpx.AsyncClient") as client_cls:
        client = client_cls.return_value.__aenter__.return_value
        client.get = AsyncMock(side_effect=httpx.ConnectError("refused"))
        assert await check_emulators(_settings("http://localhost:8081/")) is False
    assert "not running at localhost:8081" in caplog.text
