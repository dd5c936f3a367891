"""Calendar-day helpers for devpulse.

Pure functions. "now" is always passed in by the caller.

Note: day keys are UTC dates while is_today/is_this_week compare in the
local calendar. The two can disagree near midnight for users outside UTC.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Iterable, TypeVar

T = TypeVar("T")

FILTER_PERIODS = ("all", "today", "week")


def day_key(moment: datetime) -> str:
    """Return the UTC calendar date of moment as YYYY-MM-DD.

    Naive datetimes are taken as local wall-clock time.
    """
    return moment.astimezone(timezone.utc).date().isoformat()


def _local(moment: datetime) -> datetime:
    """Convert to a naive local datetime. Naive input is already local."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone().replace(tzinfo=None)


def is_today(moment: datetime, now: datetime) -> bool:
    """True if moment falls on the same local calendar day as now."""
    return _local(moment).date() == _local(now).date()


def week_bounds(now: datetime) -> tuple[datetime, datetime]:
    """Return (start, end) of the local week containing now.

    Weeks start on Sunday 00:00. end is the following Sunday 00:00 (exclusive).
    """
    local_now = _local(now)
    days_since_sunday = (local_now.weekday() + 1) % 7
    start = (local_now - timedelta(days=days_since_sunday)).replace(
        hour=0, minute=0, second=0, microsecond=0
    )
    return start, start + timedelta(days=7)


def is_this_week(moment: datetime, now: datetime) -> bool:
    """True if moment falls between Sunday 00:00 and Saturday 23:59:59 of now's week."""
    start, end = week_bounds(now)
    return start <= _local(moment) < end


def filter_sessions(sessions: Iterable[T], period: str, now: datetime) -> list[T]:
    """Keep the sessions whose start_time falls in period.

    period: "all" | "today" | "week"
    """
    if period not in FILTER_PERIODS:
        raise ValueError(
            f"Invalid period {period!r}. Must be one of: {', '.join(FILTER_PERIODS)}"
        )
    if period == "today":
        return [s for s in sessions if is_today(s.start_time, now)]
    if period == "week":
        return [s for s in sessions if is_this_week(s.start_time, now)]
    return list(sessions)


def newest_first(sessions: Iterable[T]) -> list[T]:
    """Sort sessions by start_time, most recent first."""
    return sorted(sessions, key=lambda s: s.start_time.timestamp(), reverse=True)
