"""Streak tracking for devpulse."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from devpulse.dates import day_key
from devpulse.metrics import DailyAggregate


@dataclass
class StreakInfo:
    current_streak: int
    longest_streak: int


def calculate_streaks(daily: dict[str, DailyAggregate], now: datetime) -> StreakInfo:
    """Calculate current and longest coding streaks from daily aggregates.

    Rules:
    - Days are walked in key order; a day with coding > 0 extends the run,
      a logged day with no coding resets it
    - Days with no entry at all are skipped, they do not break a run
    - Longest streak = longest run anywhere in the history
    - Current streak is 0 unless today (UTC day of now) has coding
    """
    if not daily:
        return StreakInfo(current_streak=0, longest_streak=0)

    current_streak = 0
    longest_streak = 0
    for key in sorted(daily):
        if daily[key].coding_minutes > 0:
            current_streak += 1
        else:
            current_streak = 0
        longest_streak = max(longest_streak, current_streak)

    today = daily.get(day_key(now))
    if today is None or today.coding_minutes == 0:
        current_streak = 0

    return StreakInfo(current_streak=current_streak, longest_streak=longest_streak)
