from __future__ import annotations

import logging
import pathlib
from typing import Optional, Protocol

import orjson

from .utils import read_json, write_json

log = logging.getLogger(__name__)

TOKEN_KEY = "jwtToken"


class SessionStore(Protocol):
    def get(self) -> Optional[str]: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemorySessionStore:
    def __init__(self, token: Optional[str] = None) -> None:
        self._token = token

    def get(self) -> Optional[str]:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileSessionStore:
    """Token kept in a small JSON file under ``TOKEN_KEY``."""

    def __init__(self, path: str | pathlib.Path) -> None:
        self.path = pathlib.Path(path).expanduser()

    def get(self) -> Optional[str]:
        if not self.path.exists():
            return None
        try:
            data = read_json(self.path)
        except (OSError, orjson.JSONDecodeError) as e:
            log.warning("unreadable session file %s: %s", self.path, e)
            return None
        token = data.get(TOKEN_KEY) if isinstance(data, dict) else None
        return token if isinstance(token, str) and token else None

    def set(self, token: str) -> None:
        write_json(self.path, {TOKEN_KEY: token})

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
