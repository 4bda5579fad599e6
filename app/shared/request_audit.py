"""Derive activity attribution inputs from a raw ASGI HTTP scope."""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any

# Body keys read as identity hints on unauthenticated requests (login, sign-up).
CLAIMED_EMAIL_KEYS = ("email", "username")
CLAIMED_NAME_KEYS = ("name", "fullName", "full_name")


def get_header(scope: Mapping[str, Any], name: str) -> str | None:
    """Return first header value for name (case-insensitive). Headers are (bytes, bytes)."""
    want = name.lower().encode()
    for k, v in scope.get("headers", []):
        if k.lower() == want:
            return v.decode("latin-1")
    return None


def get_client_ip(scope: Mapping[str, Any]) -> str | None:
    """First hop of X-Forwarded-For, else the direct peer address."""
    forwarded = get_header(scope, "X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    client = scope.get("client")
    return client[0] if client else None


def get_bearer_token(scope: Mapping[str, Any]) -> str | None:
    auth = get_header(scope, "Authorization")
    if auth and auth[:7].lower() == "bearer ":
        token = auth[7:].strip()
        return token or None
    return None


def _first_string(payload: Mapping[str, Any], keys: tuple[str, ...]) -> str | None:
    for key in keys:
        value = payload.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def parse_claimed_identity(body: bytes) -> tuple[str | None, str | None]:
    """Return (email, name) supplied in a JSON object body; (None, None) otherwise."""
    if not body:
        return (None, None)
    try:
        payload = json.loads(body)
    except (UnicodeDecodeError, ValueError):
        return (None, None)
    if not isinstance(payload, dict):
        return (None, None)
    return (
        _first_string(payload, CLAIMED_EMAIL_KEYS),
        _first_string(payload, CLAIMED_NAME_KEYS),
    )
