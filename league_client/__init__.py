from .client import LeagueClient
from .events import format_event, group_by_type
from .normalise import (
    decode_event,
    decode_fixture,
    decode_result,
    decode_standing,
    decode_standings_payload,
)
from .pagination import PaginationWindow
from .standings import rank_standings, zones_for

__all__ = [
    "LeagueClient",
    "PaginationWindow",
    "decode_event",
    "decode_fixture",
    "decode_result",
    "decode_standing",
    "decode_standings_payload",
    "format_event",
    "group_by_type",
    "rank_standings",
    "zones_for",
]
