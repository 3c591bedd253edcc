from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, Field

EventKind = Literal["goal", "assist", "yellow_card", "red_card", "substitution", "other"]

EVENT_KINDS = ("goal", "assist", "yellow_card", "red_card", "substitution")

UNKNOWN_TEAM = "Unknown Team"
UNKNOWN_PLAYER = "Unknown Player"
NOT_SPECIFIED = "Not specified"
DATE_NOT_AVAILABLE = "Date not available"


class MatchEvent(BaseModel):
    # Raw tag as sent by the service; unknown tags are kept for display.
    event_type: str = "other"
    player_name: str = UNKNOWN_PLAYER
    minute: int = 0
    assisted_by_name: Optional[str] = None
    substituted_for_name: Optional[str] = None

    @property
    def kind(self) -> EventKind:
        return self.event_type if self.event_type in EVENT_KINDS else "other"  # type: ignore[return-value]


class MatchFixture(BaseModel):
    id: str = ""
    home_team_name: str = UNKNOWN_TEAM
    away_team_name: str = UNKNOWN_TEAM
    venue: str = NOT_SPECIFIED
    match_date: Optional[datetime] = None  # None when missing or unparseable
    # Legacy free-text events ("Goal 12'|Yellow 40'"), already split.
    events: List[str] = Field(default_factory=list)


class MatchResult(MatchFixture):
    home_goals: int = 0
    away_goals: int = 0
    statistics: List[MatchEvent] = Field(default_factory=list)
    attendance: str = NOT_SPECIFIED
    referee: str = NOT_SPECIFIED

    @property
    def score(self) -> str:
        return f"{self.home_goals} - {self.away_goals}"


class TeamStanding(BaseModel):
    team_id: str = ""
    team_name: str = UNKNOWN_TEAM
    matches_played: int = 0
    wins: int = 0
    draws: int = 0
    losses: int = 0
    goals_for: int = 0
    goals_against: int = 0
    goal_difference: int = 0
    points: int = 0
    form: List[str] = Field(default_factory=list)  # most recent first
    position: Optional[int] = None  # set by standings.rank_standings only

    @property
    def recent_form(self) -> List[str]:
        return self.form[:5]


class UserProfile(BaseModel):
    username: str = "Fan"
    email: Optional[str] = None
    team: Optional[str] = None
