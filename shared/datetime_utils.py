"""
Date/time helpers — framework-agnostic.

``is_expired`` is the single expiration check shared by every token flow
(verify-email, magic-link, reset-password, official contact email).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Optional


def utc_now() -> datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def as_utc(value: datetime) -> datetime:
    """Return *value* as an aware UTC datetime; naive values are assumed UTC.

    MongoDB hands back naive datetimes unless the client is configured with
    ``tz_aware=True``, so both shapes reach this module.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def is_expired(
    emitted_at: Any,
    expiration_duration_in_minutes: float,
    now: Optional[datetime] = None,
) -> bool:
    """Return True when a token window has elapsed.

    Args:
        emitted_at: When the token was issued. Anything other than a
            ``datetime`` (``None`` included) counts as expired.
        expiration_duration_in_minutes: Length of the token window.
        now: Reference time, defaults to the current UTC time.

    Returns:
        ``True`` if *emitted_at* is missing or older than the window,
        ``False`` while the token is still usable.
    """
    if not isinstance(emitted_at, datetime):
        return True

    now = as_utc(now) if now is not None else utc_now()

    return now - as_utc(emitted_at) > timedelta(minutes=expiration_duration_in_minutes)
