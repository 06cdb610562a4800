"""Shareable text token: ``gomoku://`` + base64url(bytes) + ``/``."""

import base64
import binascii
import re

URI_PREFIX = "gomoku://"
URI_TERMINATOR = "/"

_BASE64URL = re.compile(r"^[A-Za-z0-9_-]*={0,2}$")


class TokenError(ValueError):
    """Raised with a user-facing reason when a token cannot be read."""


def to_token(data: bytes) -> str:
    return URI_PREFIX + base64.urlsafe_b64encode(bytes(data)).decode("ascii") + URI_TERMINATOR


def from_token(text: str) -> bytes:
    """Strip the framing and return the raw bytes; raise TokenError on a malformed token."""
    text = text.strip()
    if not text.startswith(URI_PREFIX):
        raise TokenError(f'a game token must start with "{URI_PREFIX}"')
    body = text[len(URI_PREFIX):]

    # A missing terminator usually means the token was only partly copied.
    if not body.endswith(URI_TERMINATOR):
        raise TokenError(f'a game token must end with "{URI_TERMINATOR}" after the "{URI_PREFIX}" prefix')
    body = body[: -len(URI_TERMINATOR)]

    if not _BASE64URL.match(body):
        raise TokenError("base64 decoding failed")
    body += "=" * (-len(body) % 4)
    try:
        return base64.urlsafe_b64decode(body)
    except binascii.Error as exc:
        raise TokenError("base64 decoding failed") from exc
