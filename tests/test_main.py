import argparse
import asyncio

import httpx
import pytest

from league_client.client import LeagueClient
from league_client.errors import AuthenticationRequired
from league_client.main import _export
from league_client.session import MemorySessionStore
from league_client.utils import read_json

PAYLOADS = {
    "/all-fixtures": {"upcoming": [{"id": 1, "match_date": "2025-05-01T15:00:00Z"}]},
    "/results-with-stats": {"results": [{"id": 2, "home_goals": 1}]},
    "/standings": [
        {"team_id": 1, "team_name": "A", "points": 3},
        {"team_id": 2, "team_name": "B", "points": 9},
    ],
}


def _client(status: int = 200) -> LeagueClient:
    def handler(request: httpx.Request) -> httpx.Response:
        if status != 200:
            return httpx.Response(status, json={})
        return httpx.Response(200, json=PAYLOADS[request.url.path])

    return LeagueClient("http://league.test", transport=httpx.MockTransport(handler))


async def _run_export(out, session, status=200):
    async with _client(status) as client:
        await _export(argparse.Namespace(out=str(out)), client, session)


def test_export_writes_ranked_snapshot(tmp_path) -> None:
    asyncio.run(_run_export(tmp_path, MemorySessionStore("tok")))
    standings = read_json(tmp_path / "standings.json")
    assert [(s["team_name"], s["position"]) for s in standings] == [("B", 1), ("A", 2)]
    fixtures = read_json(tmp_path / "fixtures.json")
    assert fixtures[0]["venue"] == "Not specified"
    assert read_json(tmp_path / "meta.json")["results"] == 1


def test_export_clears_rejected_session(tmp_path) -> None:
    session = MemorySessionStore("tok")
    with pytest.raises(AuthenticationRequired):
        asyncio.run(_run_export(tmp_path, session, status=401))
    assert session.get() is None
