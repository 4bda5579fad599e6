"""Attribution inputs derived from raw ASGI scopes and request bodies."""

from app.shared.request_audit import (
    get_bearer_token,
    get_client_ip,
    get_header,
    parse_claimed_identity,
)


def _scope(headers: dict[str, str], client: tuple[str, int] | None = ("127.0.0.1", 5000)) -> dict:
    return {
        "type": "http",
        "headers": [(k.lower().encode(), v.encode()) for k, v in headers.items()],
        "client": client,
    }


def test_client_ip_prefers_first_forwarded_hop() -> None:
    scope = _scope({"X-Forwarded-For": "203.0.113.7, 10.0.0.2"})
    assert get_client_ip(scope) == "203.0.113.7"


def test_client_ip_falls_back_to_peer() -> None:
    assert get_client_ip(_scope({})) == "127.0.0.1"
    assert get_client_ip(_scope({}, client=None)) is None


def test_header_lookup_is_case_insensitive() -> None:
    scope = _scope({"User-Agent": "AdminUI/2.1"})
    assert get_header(scope, "user-agent") == "AdminUI/2.1"
    assert get_header(scope, "X-Missing") is None


def test_bearer_token_extraction() -> None:
    assert get_bearer_token(_scope({"Authorization": "Bearer abc.def"})) == "abc.def"
    assert get_bearer_token(_scope({"Authorization": "bearer xyz"})) == "xyz"
    assert get_bearer_token(_scope({"Authorization": "Basic Zm9v"})) is None
    assert get_bearer_token(_scope({})) is None


def test_claimed_identity_from_json_body() -> None:
    body = b'{"email": " new@club.test ", "name": "New Member", "password": "x"}'
    assert parse_claimed_identity(body) == ("new@club.test", "New Member")


def test_claimed_identity_accepts_username_as_email() -> None:
    assert parse_claimed_identity(b'{"username": "ref@club.test"}') == (
        "ref@club.test",
        None,
    )


def test_claimed_identity_ignores_non_objects_and_garbage() -> None:
    assert parse_claimed_identity(b"") == (None, None)
    assert parse_claimed_identity(b"[1, 2]") == (None, None)
    assert parse_claimed_identity(b"{not json") == (None, None)
    assert parse_claimed_identity(b'{"email": 42}') == (None, None)
