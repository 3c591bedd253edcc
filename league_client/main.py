from __future__ import annotations

import argparse
import asyncio
import getpass
import logging
import pathlib
import sys
from typing import List

from .client import LeagueClient
from .config import Settings, load_config
from .errors import AuthenticationRequired, LeagueError
from .screens import (
    ENTRY_ROUTE,
    EntryScreen,
    FixturesScreen,
    HomeScreen,
    MatchDetailsScreen,
    Navigator,
    ResultsScreen,
    Screen,
    StandingsScreen,
    fan_out,
)
from .session import FileSessionStore
from .standings import rank_standings
from .utils import iso_z, now_utc, write_json

log = logging.getLogger("league_client")


def _print(lines: List[str]) -> None:
    for line in lines:
        print(line)


def _check_session(screen: Screen, navigator: Navigator) -> None:
    if navigator.route == ENTRY_ROUTE:
        raise AuthenticationRequired("Session expired. Please log in again.")
    if screen.error:
        raise LeagueError(screen.error)


async def _show(screen: Screen, navigator: Navigator, pages: int = 1) -> None:
    await screen.activate()
    _check_session(screen, navigator)
    for _ in range(max(pages, 1) - 1):
        screen.show_more()  # type: ignore[attr-defined]
    _print(screen.render())
    screen.deactivate()


async def _match(args, settings: Settings, client: LeagueClient, session, navigator: Navigator) -> None:
    results = ResultsScreen(client, session, navigator, settings)
    await results.activate()
    _check_session(results, navigator)
    match = results.find(args.match_id)
    results.deactivate()
    if match is None:
        raise LeagueError(f"No result with id {args.match_id}")
    results.open_match(match)
    details = MatchDetailsScreen(match, client, session, navigator, settings)
    await details.activate()
    if navigator.route == ENTRY_ROUTE:
        raise AuthenticationRequired("Session expired. Please log in again.")
    _print(details.render())
    details.deactivate()


async def _export(args, client: LeagueClient, session) -> None:
    token = session.get()
    if not token:
        raise AuthenticationRequired()
    try:
        fixtures, results, standings = await fan_out(
            client.all_fixtures(token),
            client.results_with_stats(token),
            client.standings(token),
        )
    except AuthenticationRequired:
        session.clear()
        raise
    out = pathlib.Path(args.out)
    write_json(out / "fixtures.json", [f.model_dump(mode="json") for f in fixtures])
    write_json(out / "results.json", [r.model_dump(mode="json") for r in results])
    write_json(out / "standings.json", [s.model_dump(mode="json") for s in rank_standings(standings)])
    write_json(
        out / "meta.json",
        {
            "exported_at": iso_z(now_utc()),
            "fixtures": len(fixtures),
            "results": len(results),
            "standings": len(standings),
        },
    )
    print(f"wrote {len(fixtures)} fixtures, {len(results)} results, {len(standings)} teams to {out}")


async def run(args, settings: Settings) -> None:
    session = FileSessionStore(settings.token_path)
    navigator = Navigator()
    async with LeagueClient(settings.base_url, timeout=settings.timeout) as client:
        entry = EntryScreen(client, session, navigator)
        if args.cmd == "login":
            password = args.password or getpass.getpass("Password: ")
            await entry.login(args.username, password)
            print("Login successful!")
        elif args.cmd == "register":
            password = args.password or getpass.getpass("Password: ")
            await entry.register(args.username, args.email, password, args.team)
            print("Signup successful!")
        elif args.cmd == "logout":
            entry.logout()
            print("Logged out")
        elif args.cmd == "home":
            await _show(HomeScreen(client, session, navigator, settings), navigator)
        elif args.cmd == "fixtures":
            await _show(FixturesScreen(client, session, navigator, settings), navigator, args.pages)
        elif args.cmd == "results":
            await _show(ResultsScreen(client, session, navigator, settings), navigator, args.pages)
        elif args.cmd == "standings":
            await _show(StandingsScreen(client, session, navigator, settings), navigator)
        elif args.cmd == "match":
            await _match(args, settings, client, session, navigator)
        elif args.cmd == "export":
            await _export(args, client, session)


def main() -> None:
    parser = argparse.ArgumentParser(prog="league", description="Soccer league client")
    parser.add_argument("--config", help="path to a config.yaml")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    p = sub.add_parser("login")
    p.add_argument("username")
    p.add_argument("--password")

    p = sub.add_parser("register")
    p.add_argument("username")
    p.add_argument("email")
    p.add_argument("team")
    p.add_argument("--password")

    sub.add_parser("logout")
    sub.add_parser("home")
    for name in ("fixtures", "results"):
        p = sub.add_parser(name)
        p.add_argument("--pages", type=int, default=1, help="how many pages to reveal")
    sub.add_parser("standings")

    p = sub.add_parser("match")
    p.add_argument("match_id")

    p = sub.add_parser("export")
    p.add_argument("--out", default="data")

    args = parser.parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    settings = load_config(args.config)

    try:
        asyncio.run(run(args, settings))
    except LeagueError as e:
        print(e.message, file=sys.stderr)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
