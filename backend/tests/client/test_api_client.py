"""API Client — request shaping and error mapping against httpx.MockTransport.

Tests:
    - Bearer header present only when the token provider yields a token
    - camelCase bodies and activeOnly/searchTerm query params
    - update_profile leaves out fields passed as None
    - 204 and empty bodies return None
    - 404 → None for get_my_team / get_team / get_my_profile; other statuses raise ApiError
    - Transport failures raise ApiNetworkError with the operation context
"""

import json

import httpx
import pytest

from f1companion.client.api_client import ApiClient, ApiError, ApiNetworkError


def make_client(handler, token: str | None = "tok-123") -> ApiClient:
    async def provider():
        return token

    return ApiClient(
        "http://api.test", token_provider=provider,
        transport=httpx.MockTransport(handler),
    )


async def test_sends_bearer_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    async with make_client(handler) as api:
        assert await api.get_teams() == []
    assert seen["auth"] == "Bearer tok-123"


async def test_omits_header_without_token():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers.get("Authorization")
        return httpx.Response(200, json=[])

    async with make_client(handler, token=None) as api:
        await api.get_leagues()
    assert seen["auth"] is None


async def test_add_driver_sends_camel_case_body():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content)
        return httpx.Response(204)

    async with make_client(handler) as api:
        result = await api.add_driver_to_team(7, 3)

    assert result is None
    assert seen == {
        "method": "POST",
        "path": "/api/me/team/drivers",
        "body": {"driverId": 7, "slotPosition": 3},
    }


async def test_remove_constructor_path():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["line"] = (request.method, request.url.path)
        return httpx.Response(204)

    async with make_client(handler) as api:
        await api.remove_constructor_from_team(1)
    assert seen["line"] == ("DELETE", "/api/me/team/constructors/1")


async def test_query_params():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(dict(request.url.params))
        return httpx.Response(200, json=[])

    async with make_client(handler) as api:
        await api.get_drivers(active_only=True)
        await api.get_constructors()
        await api.get_available_leagues("cup")
    assert seen == [{"activeOnly": "true"}, {}, {"searchTerm": "cup"}]


async def test_get_my_team_null_and_404():
    responses = iter([
        httpx.Response(200, content=b"null", headers={"content-type": "application/json"}),
        httpx.Response(404, json={"error": {"code": "RESOURCE_NOT_FOUND"}}),
    ])

    def handler(request: httpx.Request) -> httpx.Response:
        return next(responses)

    async with make_client(handler) as api:
        assert await api.get_my_team() is None
        assert await api.get_my_team() is None


async def test_error_status_raises_api_error():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"error": {"code": "DUPLICATE_TEAM"}})

    async with make_client(handler) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.create_team("Again")

    assert exc_info.value.status == 409
    assert exc_info.value.response_body["error"]["code"] == "DUPLICATE_TEAM"


async def test_server_error_with_text_body():
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(502, text="bad gateway")

    async with make_client(handler) as api:
        with pytest.raises(ApiError) as exc_info:
            await api.get_team(1)

    assert exc_info.value.status == 502
    assert exc_info.value.response_body == "bad gateway"


async def test_network_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as api:
        with pytest.raises(ApiNetworkError, match="Failed to join league"):
            await api.join_league(5)


async def test_update_profile_drops_none_values():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["body"] = json.loads(request.content)
        return httpx.Response(200, json={"id": 1})

    async with make_client(handler) as api:
        await api.update_profile(displayName="supermax", email=None)
    assert seen["body"] == {"displayName": "supermax"}
