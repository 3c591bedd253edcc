from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Tuple

from .models import MatchEvent

KEY_EVENTS_LIMIT = 3


def group_by_type(events: Iterable[MatchEvent]) -> Dict[str, List[MatchEvent]]:
    """Group events under their raw tag.

    Groups appear in first-seen order and keep the events' relative order.
    """
    grouped: Dict[str, List[MatchEvent]] = defaultdict(list)
    for e in events:
        grouped[e.event_type].append(e)
    return dict(grouped)


def minute_suffix(minute: int) -> str:
    return f"{minute}'" if minute else ""


def _join(*parts: str) -> str:
    return " ".join(p for p in parts if p)


def format_event(event: MatchEvent) -> str:
    player = event.player_name
    minute = minute_suffix(event.minute)
    kind = event.kind
    if kind == "goal":
        line = _join(player, minute)
        if event.assisted_by_name:
            line += f" (assist: {event.assisted_by_name})"
        return line
    if kind == "assist":
        return f"Assist by {player}"
    if kind in ("yellow_card", "red_card"):
        colour = "Yellow" if kind == "yellow_card" else "Red"
        return _join(f"{colour} card: {player}", minute)
    if kind == "substitution":
        return f"Sub: {player} ↔ {event.substituted_for_name or 'Unknown'}"
    return f"{event.event_type}: {player}"


def format_events(events: Iterable[MatchEvent]) -> List[str]:
    return [format_event(e) for e in events]


def key_events(events: List[MatchEvent], limit: int = KEY_EVENTS_LIMIT) -> Tuple[List[str], int]:
    """First ``limit`` formatted lines plus how many events were left out."""
    return format_events(events[:limit]), max(len(events) - limit, 0)


def group_heading(event_type: str) -> str:
    return event_type.replace("_", " ").upper()


def detail_lines(event: MatchEvent) -> List[str]:
    # Match-details layout: "Player (12')" then optional sub-lines.
    lines = [f"{event.player_name} ({event.minute or '?'}')"]
    if event.assisted_by_name:
        lines.append(f"Assisted by: {event.assisted_by_name}")
    if event.substituted_for_name:
        lines.append(f"Replaced: {event.substituted_for_name}")
    return lines
