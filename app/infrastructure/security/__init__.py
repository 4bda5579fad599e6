"""Security: JWT identity tokens and password hashing."""

from app.infrastructure.security.jwt import create_access_token, verify_token
from app.infrastructure.security.password import hash_password, password_matches

__all__ = [
    "create_access_token",
    "hash_password",
    "password_matches",
    "verify_token",
]
