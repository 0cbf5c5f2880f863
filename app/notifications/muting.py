"""
Mute expiration.

A NotificationOverride may carry a muted_until timestamp. Once that moment
has passed the override no longer applies. No muted_until means the override
stays until it is removed, so it never "expires".

"Now" is read at call time (or injected by the caller); results must not be
cached because the same override expires later without any data change.
"""

from __future__ import annotations

import logging
from datetime import datetime
from datetime import timezone as dt_timezone

from django.utils import timezone
from django.utils.dateparse import parse_datetime

from core.exceptions import ValidationError
from notifications.constants import MUTE_DURATION_DELTAS, MuteDuration

logger = logging.getLogger(__name__)


def _as_aware(value: datetime) -> datetime:
    """Interpret naive datetimes as UTC."""
    if timezone.is_naive(value):
        return timezone.make_aware(value, dt_timezone.utc)
    return value


def parse_timestamp(value: str | datetime | None) -> datetime | None:
    """
    Parse an ISO-8601 timestamp into an aware datetime.

    Returns None for empty or malformed input instead of raising.
    """
    if not value:
        return None
    if isinstance(value, datetime):
        return _as_aware(value)

    try:
        parsed = parse_datetime(str(value))
    except ValueError:
        parsed = None
    if parsed is None:
        logger.warning(f"Ignoring malformed mute timestamp: {value!r}")
        return None
    return _as_aware(parsed)


def is_mute_expired(
    muted_until: str | datetime | None = None,
    now: datetime | None = None,
) -> bool:
    """
    Check whether a mute has lapsed.

    Args:
        muted_until: Stored expiry, or None for no expiry
        now: Current time (defaults to timezone.now())

    Returns:
        True only when muted_until is strictly before now. None and
        malformed values are never expired.
    """
    expires_at = parse_timestamp(muted_until)
    if expires_at is None:
        return False
    current = _as_aware(now) if now is not None else timezone.now()
    return expires_at < current


def format_timestamp(value: datetime) -> str:
    """Render as UTC ISO-8601 with milliseconds and a Z suffix."""
    utc_value = _as_aware(value).astimezone(dt_timezone.utc)
    return utc_value.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def calculate_mute_expiration(
    duration: str,
    now: datetime | None = None,
) -> str | None:
    """
    Compute muted_until for a mute duration.

    Args:
        duration: MuteDuration value
        now: Current time (defaults to timezone.now())

    Returns:
        ISO timestamp, or None for MuteDuration.FOREVER

    Raises:
        ValidationError: If duration is not a MuteDuration value
    """
    if duration == MuteDuration.FOREVER:
        return None

    delta = MUTE_DURATION_DELTAS.get(str(duration))
    if delta is None:
        raise ValidationError(
            f"Unknown mute duration: {duration}",
            error_code="INVALID_MUTE_DURATION",
            details={"duration": [f'"{duration}" is not a valid choice.']},
        )

    current = _as_aware(now) if now is not None else timezone.now()
    return format_timestamp(current + delta)
