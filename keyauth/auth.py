"""API key extraction from the Authorization header.

Expected form: ``Authorization: ApiKey <token>``. The header name lookup is
case-sensitive and only the first value of a multi-value entry is consulted.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence

AUTHORIZATION = "Authorization"
SCHEME = "ApiKey"


class AuthHeaderError(ValueError):
    """Base class for Authorization header failures."""

    message = "invalid authorization header"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.message)


class MissingHeaderError(AuthHeaderError):
    message = "no authorization header included"


class MalformedHeaderError(AuthHeaderError):
    message = "malformed authorization header"


def _first_value(headers: Mapping[str, Sequence[str] | str], name: str) -> str:
    values = headers.get(name)
    if not values:
        return ""
    if isinstance(values, str):
        return values
    return values[0]


def get_api_key(headers: Mapping[str, Sequence[str] | str]) -> str:
    """Return the token from an ``ApiKey <token>`` Authorization header.

    Raises MissingHeaderError when the header is absent or empty and
    MalformedHeaderError when it does not use the ApiKey scheme. The value is
    split on single spaces without trimming, so ``"ApiKey "`` yields an empty
    token and anything after the second field is dropped.
    """
    value = _first_value(headers, AUTHORIZATION)
    if not value:
        raise MissingHeaderError()

    parts = value.split(" ")
    if len(parts) < 2 or parts[0] != SCHEME:
        raise MalformedHeaderError()

    return parts[1]
