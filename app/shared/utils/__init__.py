"""Shared utilities: datetime, generators, masking."""

from app.shared.utils.datetime import ensure_utc, parse_datetime_or_none, utc_now
from app.shared.utils.generators import generate_cuid
from app.shared.utils.masking import REDACTED, mask_national_id, mask_value

__all__ = [
    "REDACTED",
    "ensure_utc",
    "generate_cuid",
    "mask_national_id",
    "mask_value",
    "parse_datetime_or_none",
    "utc_now",
]
