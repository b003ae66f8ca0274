import httpx
import pytest

from fynncloud.client import CloudClient
from fynncloud.errors import ApiError
from tests.fixtures.backend import TEST_BASE_URL, FakeBackend, error


def make_client(backend, **kwargs):
    return CloudClient(base_url=TEST_BASE_URL, transport=backend.transport, **kwargs)


@pytest.mark.asyncio
async def test_request_sends_bearer_token_and_decodes_json():
    backend = FakeBackend()
    backend.on("GET", "/api/ping", {"pong": 1})
    client = make_client(backend, tokens={"token": "t0k"})

    assert await client.request("GET", "/api/ping") == {"pong": 1}
    assert backend.requests[0].headers["Authorization"] == "Bearer t0k"
    await client.close()


@pytest.mark.asyncio
async def test_error_carries_status_and_server_message():
    backend = FakeBackend()
    backend.on("GET", "/api/x", lambda request: error(418, "short and stout"))
    client = make_client(backend)

    with pytest.raises(ApiError) as info:
        await client.request("GET", "/api/x")

    assert info.value.status_code == 418
    assert info.value.message == "short and stout"
    assert info.value.payload == {"message": "short and stout"}
    assert str(info.value) == "418 /api/x: short and stout"
    await client.close()


@pytest.mark.asyncio
async def test_empty_and_null_bodies_are_none():
    backend = FakeBackend()
    backend.on("DELETE", "/api/files/a", lambda request: httpx.Response(204))
    backend.on("DELETE", "/api/files/b", None)
    client = make_client(backend)

    assert await client.request("DELETE", "/api/files/a") is None
    assert await client.request("DELETE", "/api/files/b") is None
    await client.close()


@pytest.mark.asyncio
async def test_non_json_success_is_an_error():
    backend = FakeBackend()
    backend.on("GET", "/api/html", lambda request: httpx.Response(200, text="<html></html>"))
    client = make_client(backend)

    with pytest.raises(ApiError) as info:
        await client.request("GET", "/api/html")

    assert "Non-JSON" in info.value.message
    await client.close()


@pytest.mark.asyncio
async def test_refresh_cookies_are_kept(tmp_path):
    backend = FakeBackend()
    backend.on(
        "POST",
        "/api/auth/refresh",
        lambda request: httpx.Response(200, json={}, headers={"Set-Cookie": "access=new; Path=/"}),
    )
    log_path = tmp_path / "http.log"
    client = make_client(backend, http_log_path=str(log_path))

    await client.request("POST", "/api/auth/refresh")

    assert client.cookies.get("access") == "new"
    assert "POST http://fynncloud.test/api/auth/refresh status=200" in log_path.read_text()
    await client.close()
