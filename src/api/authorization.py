"""
HTTP Authorization header parsing.

Missing or malformed credentials yield None; the route turns that into
a 400 response. FastAPI's HTTPBasic would answer 401 instead.
"""

import binascii
from base64 import b64decode
from dataclasses import dataclass

from fastapi import Request


@dataclass(frozen=True)
class BasicCredentials:
    """Username/password pair from an HTTP Basic Authorization header."""

    username: str
    password: str


def parse_basic_credentials(authorization: str | None) -> BasicCredentials | None:
    """
    Parse an ``Authorization: Basic <base64(username:password)>`` header.

    Returns None when the header is missing, uses another scheme, is not
    valid base64 or UTF-8, has no ``:`` separator, or carries an empty
    username or password.
    """
    if not authorization:
        return None

    scheme, _, param = authorization.strip().partition(" ")
    if scheme.lower() != "basic" or not param:
        return None

    try:
        data = b64decode(param.strip(), validate=True).decode("utf-8")
    except (ValueError, UnicodeDecodeError, binascii.Error):
        return None

    username, separator, password = data.partition(":")
    if not separator or not username or not password:
        return None

    return BasicCredentials(username=username, password=password)


def get_basic_credentials(request: Request) -> BasicCredentials | None:
    """Dependency returning parsed Basic credentials, or None."""
    return parse_basic_credentials(request.headers.get("authorization"))
