"""Rate limiter instance for SlowAPI.

Shared so both main (app.state.limiter) and route modules can use the same
instance without circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

limiter = Limiter(key_func=get_remote_address)

# Listing the activity log scans a large, ever-growing table.
ACTIVITY_LOG_QUERY_LIMIT = "120/minute"

limit_activity_log_query = limiter.limit(ACTIVITY_LOG_QUERY_LIMIT)
