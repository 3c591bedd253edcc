import random

from league_client.models import TeamStanding
from league_client.normalise import decode_standings_payload
from league_client.standings import (
    CHAMPIONS_LEAGUE,
    CONFEDERATION_CUP,
    RELEGATION,
    form_markers,
    format_goal_difference,
    rank_standings,
    standings_rows,
    zones_for,
)


def _team(name: str, points: int, gd: int, gf: int) -> TeamStanding:
    return TeamStanding(team_id=name, team_name=name, points=points, goal_difference=gd, goals_for=gf)


def test_tie_break_example() -> None:
    ranked = rank_standings([_team("A", 10, 2, 5), _team("B", 10, 3, 1), _team("C", 12, -1, 0)])
    assert [t.team_name for t in ranked] == ["C", "B", "A"]
    assert [t.position for t in ranked] == [1, 2, 3]


def test_goals_for_breaks_equal_points_and_difference() -> None:
    ranked = rank_standings([_team("A", 5, 1, 2), _team("B", 5, 1, 4)])
    assert [t.team_name for t in ranked] == ["B", "A"]


def test_full_ties_keep_input_order() -> None:
    ranked = rank_standings([_team("X", 4, 0, 3), _team("Y", 4, 0, 3), _team("Z", 4, 0, 3)])
    assert [t.team_name for t in ranked] == ["X", "Y", "Z"]


def test_positions_are_contiguous_and_points_dominate() -> None:
    rng = random.Random(7)
    teams = [
        _team(f"T{i}", rng.randint(0, 30), rng.randint(-10, 10), rng.randint(0, 40))
        for i in range(16)
    ]
    ranked = rank_standings(teams)
    assert [t.position for t in ranked] == list(range(1, 17))
    for better, worse in zip(ranked, ranked[1:]):
        assert better.points >= worse.points


def test_ranking_does_not_mutate_inputs() -> None:
    teams = [_team("A", 1, 0, 0), _team("B", 3, 0, 0)]
    rank_standings(teams)
    assert [t.team_name for t in teams] == ["A", "B"]
    assert all(t.position is None for t in teams)


def test_empty_table() -> None:
    assert rank_standings([]) == []


def test_wrapped_and_bare_payloads_rank_identically() -> None:
    rows = [
        {"team_id": 1, "team_name": "A", "points": 10, "goal_difference": 2, "goals_for": 5},
        {"team_id": 2, "team_name": "B", "points": 10, "goal_difference": 3, "goals_for": 1},
    ]
    bare = rank_standings(decode_standings_payload(rows))
    wrapped = rank_standings(decode_standings_payload({"Standings": rows}))
    assert bare == wrapped


def test_zones() -> None:
    assert zones_for(1, 16) == {CHAMPIONS_LEAGUE}
    assert zones_for(4, 16) == {CHAMPIONS_LEAGUE}
    assert zones_for(5, 16) == {CONFEDERATION_CUP}
    assert zones_for(8, 16) == {CONFEDERATION_CUP}
    assert zones_for(9, 16) == set()
    assert zones_for(14, 16) == {RELEGATION}
    assert zones_for(16, 16) == {RELEGATION}


def test_zones_overlap_in_short_tables() -> None:
    assert zones_for(1, 3) == {CHAMPIONS_LEAGUE, RELEGATION}
    assert zones_for(6, 6) == {CONFEDERATION_CUP, RELEGATION}


def test_display_helpers() -> None:
    assert format_goal_difference(3) == "+3"
    assert format_goal_difference(0) == "0"
    assert format_goal_difference(-2) == "-2"
    standing = TeamStanding(form=list("WDLxWWL"))
    assert standing.recent_form == ["W", "D", "L", "x", "W"]
    assert form_markers(standing) == "WDL?W"


def test_rows_carry_zone_labels() -> None:
    ranked = rank_standings([_team(f"T{i}", 20 - i, 0, 0) for i in range(10)])
    rows = standings_rows(ranked)
    assert rows[0]["zones"] == [CHAMPIONS_LEAGUE]
    assert rows[-1]["zones"] == [RELEGATION]
    assert rows[0]["gd"] == "0"
