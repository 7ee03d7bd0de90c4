"""Tests for the GitHub client module."""

from __future__ import annotations

import time
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from statcards.errors import UpstreamError
from statcards.github.client import PAGE_SIZE, GitHubClient
from statcards.github.rate_limit import RateLimitMonitor


def _make_mock_response(
    status_code: int = 200,
    json_data=None,
    headers: dict | None = None,
):
    resp = MagicMock(spec=httpx.Response)
    resp.status_code = status_code
    resp.json.return_value = json_data if json_data is not None else []
    resp.headers = headers or {}
    resp.text = ""
    resp.raise_for_status = MagicMock()
    if status_code >= 400:
        resp.raise_for_status.side_effect = httpx.HTTPStatusError(
            "error", request=MagicMock(), response=resp
        )
    return resp


def _repos(n: int, start: int = 0) -> list[dict]:
    return [{"name": f"repo{start + i}"} for i in range(n)]


def test_client_with_token():
    client = GitHubClient(token="test-token")
    assert client._client.headers["Authorization"] == "Bearer test-token"
    assert client._client.headers["User-Agent"] == "statcards"


def test_client_without_token(monkeypatch):
    monkeypatch.delenv("GITHUB_TOKEN", raising=False)
    client = GitHubClient()
    assert "Authorization" not in client._client.headers


def test_client_token_from_env(monkeypatch):
    monkeypatch.setenv("GITHUB_TOKEN", "env-token")
    client = GitHubClient()
    assert client._client.headers["Authorization"] == "Bearer env-token"


def test_client_concurrency():
    client = GitHubClient(token="t", concurrency=3)
    assert client._semaphore._value == 3


@pytest.mark.asyncio
async def test_client_context_manager():
    async with GitHubClient(token="t") as client:
        assert client is not None


@pytest.mark.asyncio
async def test_search_count():
    client = GitHubClient(token="t")
    resp = _make_mock_response(200, json_data={"total_count": 42, "items": []})
    client._client.get = AsyncMock(return_value=resp)

    count = await client.search_count("author:octocat type:pr")

    assert count == 42
    client._client.get.assert_awaited_once_with(
        "/search/issues", params={"q": "author:octocat type:pr", "per_page": 1}
    )


@pytest.mark.asyncio
async def test_search_count_missing_total():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(return_value=_make_mock_response(200, {}))
    assert await client.search_count("q") == 0


@pytest.mark.asyncio
async def test_get_user():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(
        return_value=_make_mock_response(200, {"login": "octocat"})
    )
    assert (await client.get_user("octocat"))["login"] == "octocat"
    client._client.get.assert_awaited_once_with("/users/octocat", params=None)


@pytest.mark.asyncio
async def test_list_repos_stops_on_short_page():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(
        side_effect=[
            _make_mock_response(200, _repos(PAGE_SIZE)),
            _make_mock_response(200, _repos(7, start=100)),
        ]
    )

    repos = await client.list_repos("octocat")

    assert len(repos) == 107
    assert client._client.get.await_count == 2
    pages = [c.kwargs["params"]["page"] for c in client._client.get.await_args_list]
    assert pages == [1, 2]
    assert client._client.get.await_args_list[0].kwargs["params"]["sort"] == "updated"


@pytest.mark.asyncio
async def test_list_repos_empty():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(return_value=_make_mock_response(200, []))
    assert await client.list_repos("nobody") == []
    assert client._client.get.await_count == 1


@pytest.mark.asyncio
async def test_list_repos_hard_cap_at_ten_pages():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(
        side_effect=lambda url, params=None: _make_mock_response(200, _repos(PAGE_SIZE))
    )

    repos = await client.list_repos("prolific")

    assert len(repos) == 1000
    assert client._client.get.await_count == 10


@pytest.mark.asyncio
async def test_list_repos_single_page():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(
        side_effect=lambda url, params=None: _make_mock_response(200, _repos(PAGE_SIZE))
    )
    repos = await client.list_repos("prolific", max_pages=1)
    assert len(repos) == 100
    assert client._client.get.await_count == 1


@pytest.mark.asyncio
async def test_http_error_becomes_upstream_error():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(
        return_value=_make_mock_response(403, {"message": "API rate limit exceeded"})
    )

    with pytest.raises(UpstreamError) as excinfo:
        await client.get_user("octocat")

    assert excinfo.value.status == 403
    assert excinfo.value.is_rate_limited
    assert "API rate limit exceeded" in excinfo.value.message


@pytest.mark.asyncio
async def test_not_found_is_not_rate_limited():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(
        return_value=_make_mock_response(404, {"message": "Not Found"})
    )
    with pytest.raises(UpstreamError) as excinfo:
        await client.get_user("ghost")
    assert excinfo.value.status == 404
    assert not excinfo.value.is_rate_limited


@pytest.mark.asyncio
async def test_timeout_becomes_upstream_error():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
    with pytest.raises(UpstreamError) as excinfo:
        await client.search_count("q")
    assert excinfo.value.status == 504


@pytest.mark.asyncio
async def test_transport_error_becomes_upstream_error():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(side_effect=httpx.ConnectError("refused"))
    with pytest.raises(UpstreamError) as excinfo:
        await client.search_count("q")
    assert excinfo.value.status == 502


@pytest.mark.asyncio
async def test_exhausted_rate_limit_fails_fast():
    client = GitHubClient(token="t")
    reset = str(int(time.time()) + 600)
    client._client.get = AsyncMock(
        return_value=_make_mock_response(
            200,
            {"total_count": 1},
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": reset},
        )
    )

    assert await client.search_count("q") == 1
    with pytest.raises(UpstreamError) as excinfo:
        await client.search_count("q")

    assert excinfo.value.status == 403
    assert client._client.get.await_count == 1


def test_rate_limit_monitor_update():
    monitor = RateLimitMonitor(clock=lambda: 100.0)
    resp = _make_mock_response(
        200, headers={"X-RateLimit-Remaining": "5", "X-RateLimit-Reset": "200"}
    )
    monitor.update(resp)
    assert monitor.remaining == 5
    assert not monitor.exhausted
    monitor.check()


def test_rate_limit_monitor_recovers_after_reset():
    now = [100.0]
    monitor = RateLimitMonitor(clock=lambda: now[0])
    monitor.update(
        _make_mock_response(
            200, headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "200"}
        )
    )
    assert monitor.exhausted
    with pytest.raises(UpstreamError):
        monitor.check()
    now[0] = 201.0
    assert not monitor.exhausted


@pytest.mark.asyncio
async def test_search_count_rejects_non_object_body():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(return_value=_make_mock_response(200, ["oops"]))
    with pytest.raises(UpstreamError) as excinfo:
        await client.search_count("q")
    assert excinfo.value.status == 502


@pytest.mark.asyncio
async def test_list_repos_rejects_non_list_page():
    client = GitHubClient(token="t")
    client._client.get = AsyncMock(
        side_effect=[
            _make_mock_response(200, _repos(PAGE_SIZE)),
            _make_mock_response(200, {"message": "Server Error"}),
        ]
    )
    with pytest.raises(UpstreamError) as excinfo:
        await client.list_repos("octocat")
    assert excinfo.value.status == 502
    assert "page 2" in excinfo.value.message
