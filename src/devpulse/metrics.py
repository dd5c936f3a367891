"""Daily metrics engine for devpulse.

Pure functions that fold raw coding/break sessions into per-day totals
and productivity scores. No I/O, inputs are never mutated.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterable

from devpulse.dates import day_key

# Score weights
SCORE_PER_CODING_MINUTE = 0.7
SCORE_PER_STREAK_DAY = 5
PENALTY_PER_BREAK = 2


class SessionType(str, Enum):
    CODING = "coding"
    BREAK = "break"


@dataclass
class SessionRecord:
    """One logged session as supplied by the session source."""

    start_time: datetime
    duration_minutes: float = 0.0
    type: str | None = SessionType.CODING.value
    id: str | None = None


@dataclass
class DailyAggregate:
    """Totals for a single calendar day (UTC)."""

    date: str  # YYYY-MM-DD
    coding_minutes: float
    break_minutes: float
    total_minutes: float
    coding_session_count: int
    break_count: int
    average_session_length: float
    daily_score: float


class InvalidSessionError(ValueError):
    """A session record has no usable start_time."""

    def __init__(self, index: int, session: Any) -> None:
        self.index = index
        self.session = session
        super().__init__(
            f"Session #{index} has an invalid start_time: {getattr(session, 'start_time', None)!r}"
        )


def session_type(session: SessionRecord) -> SessionType:
    """Classify a session. Missing or unknown types count as coding."""
    if session.type == SessionType.BREAK.value:
        return SessionType.BREAK
    return SessionType.CODING


def _require_start_time(index: int, session: Any) -> datetime:
    start = getattr(session, "start_time", None)
    if not isinstance(start, datetime):
        raise InvalidSessionError(index, session)
    return start


def validate_sessions(sessions: Iterable[SessionRecord]) -> None:
    """Raise InvalidSessionError for the first session without a datetime start_time."""
    for index, session in enumerate(sessions):
        _require_start_time(index, session)


def calculate_daily_score(coding_minutes: float, break_count: int, streak_days: int = 0) -> float:
    """Productivity score: coding * 0.7 + streak * 5 - breaks * 2."""
    return (
        coding_minutes * SCORE_PER_CODING_MINUTE
        + streak_days * SCORE_PER_STREAK_DAY
        - break_count * PENALTY_PER_BREAK
    )


def calculate_daily_metrics(sessions: Iterable[SessionRecord]) -> dict[str, DailyAggregate]:
    """Group sessions by UTC day and total them.

    Only days with at least one session appear in the result. Durations are
    summed as given (no clamping, no dedup by id). daily_score is computed
    with a streak of 0; use todays_score for the streak-aware value.

    Raises InvalidSessionError on the first session without a datetime
    start_time.
    """
    totals: dict[str, dict[str, float]] = {}

    for index, session in enumerate(sessions):
        key = day_key(_require_start_time(index, session))
        duration = session.duration_minutes or 0
        day = totals.setdefault(
            key,
            {"coding": 0, "break": 0, "sessions": 0, "breaks": 0, "coding_duration": 0},
        )

        if session_type(session) is SessionType.BREAK:
            day["break"] += duration
            day["breaks"] += 1
        else:
            day["coding"] += duration
            day["sessions"] += 1
            day["coding_duration"] += duration

    return {key: _finalize_day(key, day) for key, day in totals.items()}


def _finalize_day(key: str, day: dict[str, float]) -> DailyAggregate:
    coding = day["coding"]
    breaks = day["break"]
    session_count = int(day["sessions"])
    break_count = int(day["breaks"])
    average = day["coding_duration"] / session_count if session_count > 0 else 0
    return DailyAggregate(
        date=key,
        coding_minutes=coding,
        break_minutes=breaks,
        total_minutes=coding + breaks,
        coding_session_count=session_count,
        break_count=break_count,
        average_session_length=average,
        daily_score=calculate_daily_score(coding, break_count, streak_days=0),
    )


def todays_score(
    daily: dict[str, DailyAggregate], current_streak: int, now: datetime
) -> float | None:
    """Recompute today's score with the real current streak.

    Returns None when nothing was logged today.
    """
    today = daily.get(day_key(now))
    if today is None:
        return None
    return calculate_daily_score(today.coding_minutes, today.break_count, current_streak)
