"""
Quiet hours evaluation.

Quiet hours are a daily window given as two "HH:mm" wall-clock times. A
window whose start is after its end wraps past midnight (22:00-08:00). A
window whose start equals its end is empty and never active.

Times are compared in minutes since midnight. Aware datetimes are converted
to the project's TIME_ZONE first; naive datetimes are taken as-is.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import TYPE_CHECKING

from django.utils import timezone

from core.validators import CLOCK_TIME_PATTERN

if TYPE_CHECKING:
    from notifications.types import NotificationSettings

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


def parse_clock(value: str | None) -> int | None:
    """
    Convert "HH:mm" to minutes since midnight.

    Returns None for empty or malformed values.
    """
    if not value:
        return None
    match = CLOCK_TIME_PATTERN.match(str(value).strip())
    if match is None:
        logger.warning(f"Ignoring malformed quiet hours time: {value!r}")
        return None
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_since_midnight(moment: datetime) -> int:
    if timezone.is_aware(moment):
        moment = timezone.localtime(moment)
    return moment.hour * 60 + moment.minute


def is_within_quiet_window(start: int, end: int, minutes: int) -> bool:
    """
    Check a minute-of-day against a quiet window.

    Args:
        start: Window start, minutes since midnight (inclusive)
        end: Window end, minutes since midnight (exclusive)
        minutes: Minute of day to test
    """
    if start == end:
        return False
    if start < end:
        return start <= minutes < end
    # Window wraps past midnight
    return minutes >= start or minutes < end


def is_in_quiet_hours(
    settings: NotificationSettings,
    now: datetime | None = None,
) -> bool:
    """
    Check whether now falls inside the user's quiet hours.

    Args:
        settings: Notification settings holding quiet_hours_start/end
        now: Current time (defaults to timezone.now())

    Returns:
        False when either bound is missing or malformed
    """
    start = parse_clock(settings.quiet_hours_start)
    end = parse_clock(settings.quiet_hours_end)
    if start is None or end is None:
        return False

    current = now if now is not None else timezone.now()
    return is_within_quiet_window(start, end, minutes_since_midnight(current))
