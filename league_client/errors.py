from __future__ import annotations

from typing import Optional


class LeagueError(Exception):
    """Base class for every error surfaced at a screen boundary."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class AuthenticationRequired(LeagueError):
    """No token, or the service rejected it (HTTP 401).

    Callers clear the stored token and go back to the entry screen; they never
    retry on their own.
    """

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class NetworkOrServerError(LeagueError):
    pass


class NetworkError(NetworkOrServerError):
    pass


class ServerError(NetworkOrServerError):
    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidFormat(LeagueError):
    pass


class MissingFields(LeagueError):
    def __init__(self, message: str = "All fields are required.") -> None:
        super().__init__(message)
