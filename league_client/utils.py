from __future__ import annotations

import os
import pathlib
from datetime import datetime, timezone
from typing import Optional
from zoneinfo import ZoneInfo

import orjson
from dateutil import parser as dtparser

from .models import DATE_NOT_AVAILABLE

LOCAL_TZ = "Africa/Johannesburg"


def ensure_dir(p: str | pathlib.Path) -> None:
    pathlib.Path(p).mkdir(parents=True, exist_ok=True)


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def iso_z(dt: datetime) -> str:
    return dt.astimezone(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")


def write_json(path: str | pathlib.Path, data) -> None:
    ensure_dir(pathlib.Path(path).parent)
    with open(path, "wb") as f:
        f.write(orjson.dumps(data, option=orjson.OPT_INDENT_2 | orjson.OPT_SORT_KEYS))


def read_json(path: str | pathlib.Path):
    with open(path, "rb") as f:
        return orjson.loads(f.read())


def read_env(name: str, default: str | None = None) -> str | None:
    return os.environ.get(name, default)


def parse_datetime(value) -> Optional[datetime]:
    """Lenient ISO parse; returns None instead of raising."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        return None
    try:
        return dtparser.isoparse(value.strip())
    except (ValueError, OverflowError):
        pass
    try:
        return dtparser.parse(value.strip())
    except (ValueError, OverflowError):
        return None


def to_local(dt: datetime, tz_name: str = LOCAL_TZ) -> datetime:
    tz = ZoneInfo(tz_name)
    return dt.astimezone(tz) if dt.tzinfo else dt.replace(tzinfo=tz)


def format_match_date(dt: Optional[datetime], tz_name: str = LOCAL_TZ, long: bool = False) -> tuple[str, str]:
    """Return (date, time) display strings, e.g. ("Sat 12 Apr 2025", "15:30").

    A missing date gives the placeholder and an empty time.
    """
    if dt is None:
        return DATE_NOT_AVAILABLE, ""
    local = to_local(dt, tz_name)
    fmt = "%A %d %B %Y" if long else "%a %d %b %Y"
    return local.strftime(fmt), local.strftime("%H:%M")
