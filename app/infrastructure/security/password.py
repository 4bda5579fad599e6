"""Password hashing for association users (bcrypt).

bcrypt only reads the first 72 bytes of its input, so the password is
SHA-256 digested (base64) first and long passphrases still count in full.
"""

import base64
import hashlib

import bcrypt


def _digest(password: str) -> bytes:
    return base64.b64encode(hashlib.sha256(password.encode("utf-8")).digest())


def hash_password(password: str) -> str:
    """Return a salted bcrypt hash suitable for User.hashed_password."""
    return bcrypt.hashpw(_digest(password), bcrypt.gensalt()).decode("utf-8")


def password_matches(password: str, hashed: str) -> bool:
    """True when password produced hashed. Malformed hashes never match."""
    try:
        return bcrypt.checkpw(_digest(password), hashed.encode("utf-8"))
    except ValueError:
        return False
