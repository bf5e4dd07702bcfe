"""API Client — async httpx wrapper around the F1 Companion REST API.

Invariants:
    - Every request carries "Authorization: Bearer <token>" when the token provider yields one
    - Non-2xx responses raise ApiError(status, response_body); 5xx logged as errors, 4xx as warnings
    - Transport failures raise ApiNetworkError("Failed to <context>") chained to the cause
    - 204, empty and non-JSON success bodies return None
    - get_my_team / get_team / get_my_profile map 404 to None

Design Decisions:
    - transport injectable so tests drive the client with httpx.MockTransport
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

import httpx

logger = logging.getLogger(__name__)

TokenProvider = Callable[[], Awaitable[str | None]]


class ApiError(Exception):
    """Server answered with a non-2xx status."""

    def __init__(self, status: int, response_body: Any, message: str | None = None):
        super().__init__(message or f"Request failed with status {status}")
        self.status = status
        self.response_body = response_body


class ApiNetworkError(Exception):
    """Request never produced a response (connection, timeout, protocol)."""


def _parse_body(response: httpx.Response) -> Any:
    if response.status_code == 204 or not response.content:
        return None
    if "application/json" not in response.headers.get("content-type", ""):
        return None
    try:
        return response.json()
    except ValueError:
        return None


class ApiClient:
    """Thin async client; one method per endpoint."""

    def __init__(
        self,
        base_url: str,
        token_provider: TokenProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        timeout: float = 10.0,
    ):
        self._token_provider = token_provider
        self._http = httpx.AsyncClient(
            base_url=base_url, transport=transport, timeout=timeout,
        )

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> "ApiClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        token = await self._token_provider() if self._token_provider else None
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def request(
        self,
        method: str,
        endpoint: str,
        data: Any = None,
        params: dict[str, Any] | None = None,
        error_context: str | None = None,
    ) -> Any:
        headers = await self._headers()
        try:
            response = await self._http.request(
                method, endpoint,
                json=data if data is not None and method != "GET" else None,
                params=params,
                headers=headers,
            )
        except httpx.TransportError as e:
            context = error_context or f"{method.lower()} {endpoint}"
            logger.error(f"API network error: {method} {endpoint}: {e}")
            raise ApiNetworkError(f"Failed to {context}") from e

        if response.is_success:
            return _parse_body(response)

        body = _parse_body(response)
        if body is None:
            body = response.text or None
        message = f"{method} {endpoint} failed: {response.reason_phrase}"
        extra = {"path": endpoint, "method": method, "status_code": response.status_code}
        if response.status_code >= 500:
            logger.error(f"API server error: {message}", extra=extra)
        else:
            logger.warning(f"API client error: {message}", extra=extra)
        raise ApiError(response.status_code, body, message)

    async def _get_or_none(self, endpoint: str, error_context: str) -> Any:
        try:
            return await self.request("GET", endpoint, error_context=error_context)
        except ApiError as e:
            if e.status == 404:
                return None
            raise

    # ─── Profile ─────────────────────────────────────────────────

    async def get_my_profile(self) -> dict | None:
        return await self._get_or_none("/api/me/profile", "get profile")

    async def register(self, display_name: str | None = None) -> dict:
        return await self.request(
            "POST", "/api/me/register", {"displayName": display_name},
            error_context="register",
        )

    async def update_profile(self, **changes: Any) -> dict:
        """Send only the fields given a value; None means "leave unchanged"."""
        body = {key: value for key, value in changes.items() if value is not None}
        return await self.request(
            "PATCH", "/api/me/profile", body, error_context="update profile",
        )

    # ─── Teams ───────────────────────────────────────────────────

    async def get_my_team(self) -> dict | None:
        return await self._get_or_none("/api/me/team", "get team")

    async def create_team(self, name: str) -> dict:
        return await self.request(
            "POST", "/api/teams", {"name": name}, error_context="create team",
        )

    async def get_team(self, team_id: int) -> dict | None:
        return await self._get_or_none(f"/api/teams/{team_id}", "get team")

    async def get_teams(self) -> list[dict]:
        return await self.request("GET", "/api/teams", error_context="get teams")

    async def add_driver_to_team(self, driver_id: int, slot_position: int) -> None:
        await self.request(
            "POST", "/api/me/team/drivers",
            {"driverId": driver_id, "slotPosition": slot_position},
            error_context="add driver",
        )

    async def remove_driver_from_team(self, slot_position: int) -> None:
        await self.request(
            "DELETE", f"/api/me/team/drivers/{slot_position}",
            error_context="remove driver",
        )

    async def add_constructor_to_team(
        self, constructor_id: int, slot_position: int,
    ) -> None:
        await self.request(
            "POST", "/api/me/team/constructors",
            {"constructorId": constructor_id, "slotPosition": slot_position},
            error_context="add constructor",
        )

    async def remove_constructor_from_team(self, slot_position: int) -> None:
        await self.request(
            "DELETE", f"/api/me/team/constructors/{slot_position}",
            error_context="remove constructor",
        )

    # ─── Catalog ─────────────────────────────────────────────────

    async def get_drivers(self, active_only: bool | None = None) -> list[dict]:
        params = {"activeOnly": str(active_only).lower()} if active_only is not None else None
        return await self.request(
            "GET", "/api/drivers", params=params, error_context="get drivers",
        )

    async def get_constructors(self, active_only: bool | None = None) -> list[dict]:
        params = {"activeOnly": str(active_only).lower()} if active_only is not None else None
        return await self.request(
            "GET", "/api/constructors", params=params, error_context="get constructors",
        )

    # ─── Leagues ─────────────────────────────────────────────────

    async def get_leagues(self) -> list[dict]:
        return await self.request("GET", "/api/leagues", error_context="get leagues")

    async def get_league(self, league_id: int) -> dict:
        return await self.request(
            "GET", f"/api/leagues/{league_id}", error_context="get league",
        )

    async def get_my_leagues(self) -> list[dict]:
        return await self.request("GET", "/api/me/leagues", error_context="get my leagues")

    async def get_available_leagues(self, search_term: str | None = None) -> list[dict]:
        params = {"searchTerm": search_term} if search_term else None
        return await self.request(
            "GET", "/api/leagues/available", params=params,
            error_context="get available leagues",
        )

    async def create_league(
        self, name: str, description: str | None = None, is_private: bool = False,
    ) -> dict:
        return await self.request(
            "POST", "/api/leagues",
            {"name": name, "description": description, "isPrivate": is_private},
            error_context="create league",
        )

    async def join_league(self, league_id: int) -> dict:
        return await self.request(
            "POST", f"/api/leagues/{league_id}/join", error_context="join league",
        )

    # ─── Invites ─────────────────────────────────────────────────

    async def get_or_create_league_invite(self, league_id: int) -> dict:
        return await self.request(
            "POST", f"/api/leagues/{league_id}/invite", error_context="create invite",
        )

    async def preview_league_invite(self, token: str) -> dict:
        return await self.request(
            "GET", f"/api/leagues/join/{token}/preview", error_context="preview invite",
        )

    async def join_league_via_invite(self, token: str) -> dict:
        return await self.request(
            "POST", f"/api/leagues/join/{token}", error_context="join league",
        )
