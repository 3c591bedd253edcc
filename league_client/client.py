from __future__ import annotations

import logging
from typing import Any, List, Optional

import httpx

from .errors import AuthenticationRequired, InvalidFormat, NetworkError, ServerError
from .models import MatchEvent, MatchFixture, MatchResult, TeamStanding, UserProfile
from .normalise import (
    decode_events_payload,
    decode_fixtures_payload,
    decode_profile,
    decode_results_payload,
    decode_standings_payload,
)

log = logging.getLogger(__name__)


def _server_message(resp: httpx.Response) -> Optional[str]:
    try:
        data = resp.json()
    except ValueError:
        return None
    msg = data.get("message") if isinstance(data, dict) else None
    return str(msg) if msg else None


class LeagueClient:
    """Async client for the league service.

    ``fetch`` returns raw JSON; the typed helpers below run it through the
    decoders so callers only ever see canonical records. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 15,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "LeagueClient":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        token: Optional[str] = None,
        payload: Optional[dict[str, Any]] = None,
        auth: bool = True,
    ) -> Any:
        headers = {"Authorization": f"Bearer {token}"} if token else None
        try:
            resp = await self._client.request(method, path, json=payload, headers=headers)
        except httpx.DecodingError as e:
            log.warning("%s %s undecodable body: %r", method, path, e)
            raise ServerError("Invalid response from server") from e
        except httpx.RequestError as e:
            log.warning("%s %s failed: %r", method, path, e)
            raise NetworkError(str(e) or "Network Error") from e

        if resp.status_code == 401:
            if not auth:
                # Rejected credentials on login/register, not an expired session.
                raise ServerError(_server_message(resp) or "Invalid Credentials", status_code=401)
            raise AuthenticationRequired(_server_message(resp) or "Authentication required")
        if resp.is_error:
            msg = _server_message(resp) or f"Request failed with status code {resp.status_code}"
            log.warning("%s %s -> %s", method, path, resp.status_code)
            raise ServerError(msg, status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise ServerError("Invalid response from server", status_code=resp.status_code) from e

    async def fetch(self, resource_path: str, token: str) -> Any:
        log.debug("GET %s", resource_path)
        return await self._request("GET", resource_path, token=token)

    async def _obtain_token(self, path: str, payload: dict[str, Any]) -> str:
        data = await self._request("POST", path, payload=payload, auth=False)
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            raise InvalidFormat("No token in response")
        return token

    async def login(self, username: str, password: str) -> str:
        return await self._obtain_token("/login", {"username": username, "password": password})

    async def register(self, username: str, email: str, password: str, team: str) -> str:
        return await self._obtain_token(
            "/register",
            {"username": username, "email": email, "password": password, "team": team},
        )

    async def user(self, token: str) -> UserProfile:
        return decode_profile(await self.fetch("/user", token))

    async def upcoming_fixtures(self, token: str) -> List[MatchFixture]:
        return decode_fixtures_payload(await self.fetch("/fixtures/upcoming", token))

    async def all_fixtures(self, token: str) -> List[MatchFixture]:
        return decode_fixtures_payload(await self.fetch("/all-fixtures", token))

    async def all_results(self, token: str) -> List[MatchResult]:
        return decode_results_payload(await self.fetch("/all-results", token))

    async def results_with_stats(self, token: str) -> List[MatchResult]:
        return decode_results_payload(await self.fetch("/results-with-stats", token))

    async def standings(self, token: str) -> List[TeamStanding]:
        return decode_standings_payload(await self.fetch("/standings", token))

    async def match_events(self, match_id: str, token: str) -> List[MatchEvent]:
        # The service concatenates the id without a separator.
        return decode_events_payload(await self.fetch(f"/matches/events{match_id}", token))
