"""Errors raised by the Roblox API client."""

from __future__ import annotations

from http import HTTPStatus


class RobloxError(Exception):
    """Base of every error the Roblox client raises."""


class RequestError(RobloxError):
    """The request could not be built or sent."""

    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"Request Error - {cause}")


class ParsingError(RobloxError):
    """The response body was not what was expected."""

    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"Parsing Error - {cause}")


class CacheError(RobloxError):
    """The Redis cache failed or held an unreadable value."""

    def __init__(self, cause: object) -> None:
        self.cause = cause
        super().__init__(f"Redis Error - {cause}")


def _status_text(status: int) -> str:
    try:
        return f"{status} {HTTPStatus(status).phrase}"
    except ValueError:
        return str(status)


class ApiError(RobloxError):
    """The API answered with a status code outside 2xx."""

    def __init__(self, status: int, body: bytes) -> None:
        self.status = status
        self.body = bytes(body)
        super().__init__(f"API Error - {_status_text(status)}, Body - {list(self.body)}")