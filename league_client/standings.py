from __future__ import annotations

from typing import Iterable, List

from .models import TeamStanding

CHAMPIONS_LEAGUE = "champions_league"
CONFEDERATION_CUP = "confederation_cup"
RELEGATION = "relegation"

ZONE_LABELS = {
    CHAMPIONS_LEAGUE: "CAF Champions League",
    CONFEDERATION_CUP: "CAF Confederation Cup",
    RELEGATION: "Relegation Zone",
}

FORM_OUTCOMES = "WDL"


def _rank_key(s: TeamStanding) -> tuple[int, int, int]:
    return (-s.points, -s.goal_difference, -s.goals_for)


def rank_standings(standings: Iterable[TeamStanding]) -> List[TeamStanding]:
    """Order by points, then goal difference, then goals scored (all desc).

    ``sorted`` is stable, so teams level on all three keep their input order.
    Returns copies with ``position`` set; the inputs are left untouched.
    """
    ordered = sorted(standings, key=_rank_key)
    return [s.model_copy(update={"position": i + 1}) for i, s in enumerate(ordered)]


def zones_for(position: int, total: int) -> set[str]:
    # Bands are independent and may overlap in a short table.
    zones: set[str] = set()
    if 1 <= position <= 4:
        zones.add(CHAMPIONS_LEAGUE)
    if 4 < position <= 8:
        zones.add(CONFEDERATION_CUP)
    if total - 2 <= position <= total:
        zones.add(RELEGATION)
    return zones


def format_goal_difference(gd: int) -> str:
    return f"+{gd}" if gd > 0 else str(gd)


def form_markers(standing: TeamStanding) -> str:
    return "".join(ch.upper() if ch.upper() in FORM_OUTCOMES else "?" for ch in standing.recent_form)


def standings_rows(ranked: List[TeamStanding]) -> List[dict]:
    """Display rows for a ranked table, zone labels included."""
    total = len(ranked)
    rows = []
    for s in ranked:
        position = s.position or 0
        rows.append(
            {
                "position": position,
                "team": s.team_name,
                "mp": s.matches_played,
                "w": s.wins,
                "d": s.draws,
                "l": s.losses,
                "gf": s.goals_for,
                "ga": s.goals_against,
                "gd": format_goal_difference(s.goal_difference),
                "pts": s.points,
                "form": form_markers(s),
                "zones": sorted(zones_for(position, total)),
            }
        )
    return rows
