"""Display-safe masking of sensitive field values before they reach the activity log."""

import re
from typing import Any

REDACTED = "[REDACTED]"

# Case-insensitive substring match on the field name.
SECRET_FIELD_MARKERS: tuple[str, ...] = (
    "password",
    "pass",
    "secret",
    "token",
    "otp",
    "pin",
    "clientsecret",
    "client_secret",
)
NATIONAL_ID_FIELD_MARKERS: tuple[str, ...] = ("aadhar", "aadhaar")

_NON_DIGITS = re.compile(r"\D")


def mask_national_id(value: Any) -> Any:
    """Reduce an Aadhaar-style number to XXXX-XXXX-<last 4 digits>.

    Values without any digit (including None) are returned unmodified.
    """
    digits = _NON_DIGITS.sub("", "" if value is None else str(value))
    if not digits:
        return value
    return f"XXXX-XXXX-{digits[-4:]}"


def mask_value(field_name: str | None, value: Any) -> Any:
    """Return the value as it may be shown in an activity log entry.

    Secret-like fields are replaced by REDACTED, national ID fields keep
    only their last four digits, everything else passes through. Pure and
    total: never raises.
    """
    name = (field_name or "").lower()
    if any(marker in name for marker in SECRET_FIELD_MARKERS):
        return REDACTED
    if any(marker in name for marker in NATIONAL_ID_FIELD_MARKERS):
        return mask_national_id(value)
    return value
