"""Process-wide logging setup.

The activity log pipeline reports its own failures here (warnings with
tracebacks), so these loggers must stay enabled at INFO even when SQL
echo is off.
"""

import logging
import sys

from app.core.config import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Chatty libraries kept at WARNING unless debug is on.
_QUIET_LOGGERS = ("aiosqlite", "asyncio", "httpcore", "httpx")


def setup_logging() -> None:
    """Log to stdout; DEBUG when settings.debug, INFO otherwise."""
    settings = get_settings()
    level = logging.DEBUG if settings.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    if not settings.debug:
        for name in _QUIET_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Module logger; pass __name__."""
    return logging.getLogger(name)
