"""Primary key generation (CUID2)."""

from cuid2 import cuid_wrapper

_next_cuid = cuid_wrapper()


def generate_cuid() -> str:
    """Return a new collision-resistant id, used as the default primary key."""
    return str(_next_cuid())
