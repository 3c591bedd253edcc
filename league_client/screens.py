"""Headless screen controllers.

A screen owns the state for one view: it fetches everything it needs on
activation as a single all-or-fail fan-out, runs the results through the
pure shaping helpers, and renders plain text lines. Activations are numbered
so that a fetch finishing after the screen was left (or re-activated) is
dropped instead of overwriting newer state.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Dict, List, Optional

from .client import LeagueClient
from .config import Settings
from .errors import AuthenticationRequired, InvalidFormat, MissingFields, NetworkOrServerError
from .events import detail_lines, format_event, group_by_type, group_heading, key_events
from .models import MatchEvent, MatchFixture, MatchResult, TeamStanding, UserProfile
from .pagination import PaginationWindow
from .session import SessionStore
from .standings import (
    CHAMPIONS_LEAGUE,
    CONFEDERATION_CUP,
    RELEGATION,
    ZONE_LABELS,
    rank_standings,
    standings_rows,
)
from .utils import format_match_date

log = logging.getLogger(__name__)

ENTRY_ROUTE = "/"
HOME_ROUTE = "/home"
MATCH_DETAILS_ROUTE = "/match-details"

ZONE_MARKS = {CHAMPIONS_LEAGUE: "*", CONFEDERATION_CUP: "+", RELEGATION: "v"}


class Navigator:
    def __init__(self) -> None:
        self.route: Optional[str] = None
        self.params: Dict[str, Any] = {}
        self.history: List[str] = []

    def replace(self, route: str, **params: Any) -> None:
        self.route = route
        self.params = params
        self.history.append(route)

    push = replace


async def fan_out(*aws: Awaitable[Any]) -> List[Any]:
    """Await all calls together; the first failure fails the whole set."""
    tasks = [asyncio.ensure_future(a) for a in aws]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        for t in tasks:
            t.cancel()
        raise


class Screen:
    route = ""

    def __init__(
        self,
        client: LeagueClient,
        session: SessionStore,
        navigator: Navigator,
        settings: Optional[Settings] = None,
    ) -> None:
        self.client = client
        self.session = session
        self.navigator = navigator
        self.settings = settings or Settings()
        self.active = False
        self.loading = False
        self.error: Optional[str] = None
        self._generation = 0
        self._reset()

    async def _load(self, token: str) -> Any:
        raise NotImplementedError

    def _apply(self, data: Any) -> None:
        raise NotImplementedError

    def _reset(self) -> None:
        pass

    def _is_current(self, generation: int) -> bool:
        return self.active and generation == self._generation

    def _require_login(self) -> None:
        self.session.clear()
        self.loading = False
        self.navigator.replace(ENTRY_ROUTE)

    def _error_message(self, exc: Exception) -> str:
        return getattr(exc, "message", None) or str(exc) or "Failed to load data"

    async def activate(self) -> bool:
        """Fetch and shape this screen's data. Returns True when it rendered."""
        self._generation += 1
        generation = self._generation
        self.active = True
        self.loading = True
        self.error = None
        self._reset()

        token = self.session.get()
        if not token:
            self._require_login()
            return False
        try:
            data = await self._load(token)
        except AuthenticationRequired:
            if self._is_current(generation):
                log.info("%s: session rejected, returning to entry screen", type(self).__name__)
                self._require_login()
            return False
        except (NetworkOrServerError, InvalidFormat) as e:
            if self._is_current(generation):
                log.warning("%s: %s", type(self).__name__, e)
                self._reset()
                self.error = self._error_message(e)
                self.loading = False
            return False

        if not self._is_current(generation):
            log.debug("%s: discarding stale fetch #%d", type(self).__name__, generation)
            return False
        self._apply(data)
        self.loading = False
        return True

    def deactivate(self) -> None:
        self.active = False
        self._generation += 1

    async def retry(self) -> bool:
        return await self.activate()

    def render(self) -> List[str]:
        raise NotImplementedError

    def _status_lines(self, loading_text: str) -> Optional[List[str]]:
        if self.loading:
            return [loading_text]
        if self.error:
            return [self.error, "Try Again"]
        return None


class HomeScreen(Screen):
    route = HOME_ROUTE

    def _reset(self) -> None:
        self.user: Optional[UserProfile] = None
        self.fixtures: List[MatchFixture] = []

    async def _load(self, token: str) -> Any:
        return await fan_out(self.client.user(token), self.client.upcoming_fixtures(token))

    def _apply(self, data: Any) -> None:
        self.user, self.fixtures = data

    @property
    def display_date(self) -> str:
        if not self.fixtures:
            return ""
        date, _ = format_match_date(self.fixtures[0].match_date, self.settings.timezone, long=True)
        return date

    def render(self) -> List[str]:
        status = self._status_lines("Loading matches...")
        if status:
            return status
        lines = [f"Welcome {self.user.username if self.user else 'Fan'}!"]
        if self.display_date:
            lines.append(f"Matchday: {self.display_date}")
        if not self.fixtures:
            lines.append("No upcoming matches")
        for f in self.fixtures:
            _, time = format_match_date(f.match_date, self.settings.timezone)
            lines.append(f"{time or '--:--'}  {f.home_team_name} vs {f.away_team_name}")
        lines.append("View All Fixtures")
        return lines


class FixturesScreen(Screen):
    route = "/fixtures"

    def _reset(self) -> None:
        self.user: Optional[UserProfile] = None
        self.fixtures: List[MatchFixture] = []
        self.window = PaginationWindow(self.settings.fixtures_page_size)

    async def _load(self, token: str) -> Any:
        return await fan_out(self.client.user(token), self.client.all_fixtures(token))

    def _apply(self, data: Any) -> None:
        self.user, self.fixtures = data
        self.window.reset(len(self.fixtures))

    def show_more(self) -> int:
        return self.window.reveal()

    def render(self) -> List[str]:
        status = self._status_lines("Loading fixtures...")
        if status:
            return status
        if not self.fixtures:
            return ["No upcoming fixtures"]
        lines = []
        for f in self.window.visible(self.fixtures):
            date, time = format_match_date(f.match_date, self.settings.timezone)
            lines.append(f"{time or '--:--'}  {f.home_team_name} vs {f.away_team_name}")
            lines.append(f"    {f.venue} | {date}")
        if self.window.has_more:
            lines.append("Show More")
        return lines


class ResultsScreen(Screen):
    route = "/results"

    def _reset(self) -> None:
        self.user: Optional[UserProfile] = None
        self.results: List[MatchResult] = []
        self.window = PaginationWindow(self.settings.results_page_size)

    async def _load(self, token: str) -> Any:
        return await fan_out(self.client.user(token), self.client.results_with_stats(token))

    def _apply(self, data: Any) -> None:
        self.user, self.results = data
        self.window.reset(len(self.results))

    def show_more(self) -> int:
        return self.window.reveal()

    def find(self, match_id: str) -> Optional[MatchResult]:
        return next((r for r in self.results if r.id == match_id), None)

    def open_match(self, result: MatchResult) -> None:
        self.navigator.push(MATCH_DETAILS_ROUTE, match_id=result.id, match=result)

    def render(self) -> List[str]:
        status = self._status_lines("Loading results...")
        if status:
            return status
        if not self.results:
            return ["No results available", "Check back later for updated results"]
        lines = []
        for r in self.window.visible(self.results):
            date, time = format_match_date(r.match_date, self.settings.timezone)
            lines.append(f"{date} {time}".rstrip())
            lines.append(f"  {r.home_team_name} {r.home_goals} vs {r.away_goals} {r.away_team_name}")
            if r.statistics:
                shown, hidden = key_events(r.statistics)
                lines.append("  Key Match Events:")
                lines.extend(f"    {line}" for line in shown)
                if hidden:
                    lines.append(f"    + {hidden} more events")
        if self.window.has_more:
            lines.append("Load More Results")
        return lines


class StandingsScreen(Screen):
    route = "/table"

    def _reset(self) -> None:
        self.standings: List[TeamStanding] = []

    async def _load(self, token: str) -> Any:
        return await self.client.standings(token)

    def _apply(self, data: Any) -> None:
        self.standings = rank_standings(data)

    def _error_message(self, exc: Exception) -> str:
        return getattr(exc, "message", None) or "Failed to load standings"

    def render(self) -> List[str]:
        status = self._status_lines("Loading league table...")
        if status:
            return status
        lines = [
            self.settings.league_title.upper(),
            f"{self.settings.season_title} Standings".strip(),
            f"{'#':>2} {'TEAM':<24} {'MP':>3} {'W':>3} {'D':>3} {'L':>3} {'GF':>3} {'GA':>3} {'GD':>4} {'PTS':>4}  FORM",
        ]
        for row in standings_rows(self.standings):
            marks = "".join(ZONE_MARKS[z] for z in row["zones"])
            lines.append(
                f"{row['position']:>2} {row['team'][:24]:<24} {row['mp']:>3} {row['w']:>3} {row['d']:>3} "
                f"{row['l']:>3} {row['gf']:>3} {row['ga']:>3} {row['gd']:>4} {row['pts']:>4}  {row['form']:<5} {marks}".rstrip()
            )
        lines.append(
            f"* {ZONE_LABELS[CHAMPIONS_LEAGUE]}  + {ZONE_LABELS[CONFEDERATION_CUP]}  v {ZONE_LABELS[RELEGATION]}"
        )
        return lines


class MatchDetailsScreen(Screen):
    route = MATCH_DETAILS_ROUTE

    def __init__(self, match: MatchResult, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.match = match

    def _reset(self) -> None:
        self.stats: List[MatchEvent] = []

    async def _load(self, token: str) -> Any:
        return await self.client.match_events(self.match.id, token)

    def _apply(self, data: Any) -> None:
        self.stats = data

    def _error_message(self, exc: Exception) -> str:
        return "Failed to load match statistics"

    @property
    def grouped(self) -> Dict[str, List[MatchEvent]]:
        return group_by_type(self.stats)

    def render(self) -> List[str]:
        m = self.match
        date, time = format_match_date(m.match_date, self.settings.timezone, long=True)
        lines = [
            f"{m.home_team_name} {m.home_goals} - {m.away_goals} {m.away_team_name}",
            f"{date} {time}".rstrip(),
            f"Venue: {m.venue}",
            f"Attendance: {m.attendance}",
            f"Referee: {m.referee}",
        ]
        if m.events:
            lines.append("Match Events")
            lines.extend(f"  {e}" for e in m.events)
        elif m.statistics:
            lines.append("Match Events")
            lines.extend(f"  {format_event(e)}" for e in m.statistics)

        lines.append("Match Statistics")
        if self.loading:
            lines.append("  Loading statistics...")
        elif self.error:
            lines.append(f"  {self.error}")
        elif not self.stats:
            lines.append("  No statistics available")
        else:
            for event_type, events in self.grouped.items():
                lines.append(f"  {group_heading(event_type)}")
                for e in events:
                    first, *rest = detail_lines(e)
                    lines.append(f"    {first}")
                    lines.extend(f"      {line}" for line in rest)
        return lines


class EntryScreen:
    """Login and sign-up. Stores the token and moves on to the home screen."""

    route = ENTRY_ROUTE

    def __init__(self, client: LeagueClient, session: SessionStore, navigator: Navigator) -> None:
        self.client = client
        self.session = session
        self.navigator = navigator

    async def login(self, username: str, password: str) -> str:
        if not username or not password:
            raise MissingFields()
        token = await self.client.login(username, password)
        return self._signed_in(token)

    async def register(self, username: str, email: str, password: str, team: str) -> str:
        if not (username and email and password and team):
            raise MissingFields()
        token = await self.client.register(username, email, password, team)
        return self._signed_in(token)

    def logout(self) -> None:
        self.session.clear()
        self.navigator.replace(ENTRY_ROUTE)

    def _signed_in(self, token: str) -> str:
        self.session.set(token)
        self.navigator.replace(HOME_ROUTE)
        return token
