"""Chart-ready columns built from daily aggregates.

Pure functions. Rendering is left to whatever consumes the columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from devpulse.metrics import DailyAggregate


@dataclass
class DailySeries:
    labels: list[str] = field(default_factory=list)  # YYYY-MM-DD, ascending
    coding: list[float] = field(default_factory=list)
    breaks: list[float] = field(default_factory=list)
    session_counts: list[int] = field(default_factory=list)
    average_lengths: list[float] = field(default_factory=list)


def build_series(daily: dict[str, DailyAggregate], days: int = 0) -> DailySeries:
    """Lay out daily aggregates as parallel columns in date order.

    days: keep only the most recent N logged days (0 = all).
    """
    labels = sorted(daily)
    if days > 0:
        labels = labels[-days:]
    return DailySeries(
        labels=labels,
        coding=[daily[d].coding_minutes for d in labels],
        breaks=[daily[d].break_minutes for d in labels],
        session_counts=[daily[d].coding_session_count for d in labels],
        average_lengths=[daily[d].average_session_length for d in labels],
    )
