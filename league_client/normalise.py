"""Decoders that turn raw service payloads into canonical records.

Every ``decode_*`` function accepts anything (``None``, wrong types, partial
dicts) and returns a fully defaulted model. The only failure is
``decode_standings_payload`` raising ``InvalidFormat`` when the payload shape
is not one the service is known to send.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from .errors import InvalidFormat
from .models import (
    NOT_SPECIFIED,
    UNKNOWN_PLAYER,
    UNKNOWN_TEAM,
    MatchEvent,
    MatchFixture,
    MatchResult,
    TeamStanding,
    UserProfile,
)
from .utils import parse_datetime

log = logging.getLogger(__name__)

LEGACY_EVENT_SEP = "|"
STANDINGS_KEYS = ("Standings", "standings")


def _first_key(x: dict[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in x and x[k] not in (None, ""):
            return x[k]
    return None


def _as_dict(raw: Any) -> dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def _as_list(raw: Any) -> list:
    return list(raw) if isinstance(raw, (list, tuple)) else []


def _int(value: Any) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value == value and abs(value) != float("inf") else 0
    if isinstance(value, str):
        try:
            return int(float(value.strip()))
        except (ValueError, OverflowError):
            return 0
    return 0


def _str(value: Any, default: str) -> str:
    if value is None:
        return default
    if isinstance(value, (dict, list, tuple)):
        return default
    s = str(value).strip()
    return s or default


def _opt_str(value: Any) -> Optional[str]:
    if value is None or isinstance(value, (dict, list, tuple)):
        return None
    s = str(value).strip()
    return s or None


def _legacy_events(value: Any) -> List[str]:
    if isinstance(value, str):
        parts = value.split(LEGACY_EVENT_SEP)
    elif isinstance(value, (list, tuple)):
        parts = [p for p in value if isinstance(p, str)]
    else:
        return []
    return [p.strip() for p in parts if p.strip()]


def _form(value: Any) -> List[str]:
    if not isinstance(value, str):
        return []
    return [ch for ch in value.strip() if not ch.isspace()]


def decode_event(raw: Any) -> MatchEvent:
    x = _as_dict(raw)
    return MatchEvent(
        event_type=_str(x.get("event_type"), "other"),
        player_name=_str(x.get("player_name"), UNKNOWN_PLAYER),
        minute=max(_int(x.get("minute")), 0),
        assisted_by_name=_opt_str(_first_key(x, "assisted_by_name", "assisted_by")),
        substituted_for_name=_opt_str(_first_key(x, "substituted_for_name", "substituted_for")),
    )


def _fixture_fields(x: dict[str, Any]) -> dict[str, Any]:
    return {
        "id": _str(x.get("id"), ""),
        "home_team_name": _str(x.get("home_team_name"), UNKNOWN_TEAM),
        "away_team_name": _str(x.get("away_team_name"), UNKNOWN_TEAM),
        "venue": _str(x.get("venue"), NOT_SPECIFIED),
        "match_date": parse_datetime(x.get("match_date")),
        "events": _legacy_events(x.get("events")),
    }


def decode_fixture(raw: Any) -> MatchFixture:
    return MatchFixture(**_fixture_fields(_as_dict(raw)))


def decode_result(raw: Any) -> MatchResult:
    x = _as_dict(raw)
    return MatchResult(
        **_fixture_fields(x),
        home_goals=_int(x.get("home_goals")),
        away_goals=_int(x.get("away_goals")),
        statistics=[decode_event(e) for e in _as_list(x.get("statistics"))],
        attendance=_str(x.get("attendance"), NOT_SPECIFIED),
        referee=_str(x.get("referee"), NOT_SPECIFIED),
    )


def decode_standing(raw: Any) -> TeamStanding:
    x = _as_dict(raw)
    return TeamStanding(
        team_id=_str(x.get("team_id"), ""),
        team_name=_str(x.get("team_name"), UNKNOWN_TEAM),
        matches_played=_int(x.get("matches_played")),
        wins=_int(x.get("wins")),
        draws=_int(x.get("draws")),
        losses=_int(x.get("losses")),
        goals_for=_int(x.get("goals_for")),
        goals_against=_int(x.get("goals_against")),
        goal_difference=_int(x.get("goal_difference")),
        points=_int(x.get("points")),
        form=_form(x.get("form")),
    )


def decode_profile(raw: Any) -> UserProfile:
    x = _as_dict(raw)
    return UserProfile(
        username=_str(x.get("username"), "Fan"),
        email=_opt_str(x.get("email")),
        team=_opt_str(x.get("team")),
    )


def decode_fixtures_payload(raw: Any) -> List[MatchFixture]:
    """``{upcoming: [...]}`` -> fixtures; anything else -> []."""
    return [decode_fixture(x) for x in _as_list(_as_dict(raw).get("upcoming"))]


def decode_results_payload(raw: Any) -> List[MatchResult]:
    return [decode_result(x) for x in _as_list(_as_dict(raw).get("results"))]


def decode_events_payload(raw: Any) -> List[MatchEvent]:
    if not isinstance(raw, list):
        log.debug("events payload is %s, not a list", type(raw).__name__)
    return [decode_event(x) for x in _as_list(raw)]


def decode_standings_payload(raw: Any) -> List[TeamStanding]:
    """Accept a bare list or an object holding the list under a known key."""
    rows: Any = None
    if isinstance(raw, list):
        rows = raw
    elif isinstance(raw, dict):
        for key in STANDINGS_KEYS:
            if isinstance(raw.get(key), list):
                rows = raw[key]
                break
    if rows is None:
        raise InvalidFormat("Invalid standings data format")
    return [decode_standing(x) for x in rows]
