"""MCP server for devpulse.

Exposes session metrics as MCP tools so an assistant can query them mid-conversation.
Run via: python3 -m devpulse.mcp_server
"""
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime, timezone
from typing import Any

from mcp.server.fastmcp import FastMCP

from devpulse.metrics import InvalidSessionError

mcp = FastMCP(name="devpulse")

_NO_DATA = {"error": "No sessions found. Run: devpulse config --sessions-file <path>"}


def _load_sessions():
    from devpulse.cli import load_sessions
    return load_sessions()


def _now() -> datetime:
    return datetime.now(tz=timezone.utc)


@mcp.tool()
def get_streaks() -> dict[str, Any]:
    """Get the current and longest coding streaks in days."""
    from devpulse.metrics import calculate_daily_metrics
    from devpulse.streaks import calculate_streaks

    sessions = _load_sessions()
    if not sessions:
        return dict(_NO_DATA)
    try:
        daily = calculate_daily_metrics(sessions)
    except InvalidSessionError as e:
        return {"error": str(e)}
    return asdict(calculate_streaks(daily, _now()))


@mcp.tool()
def get_today_score() -> dict[str, Any]:
    """Get today's productivity score (coding*0.7 + streak*5 - breaks*2)."""
    from devpulse.dates import day_key
    from devpulse.metrics import calculate_daily_metrics, todays_score
    from devpulse.streaks import calculate_streaks

    sessions = _load_sessions()
    if not sessions:
        return dict(_NO_DATA)
    now = _now()
    try:
        daily = calculate_daily_metrics(sessions)
    except InvalidSessionError as e:
        return {"error": str(e)}
    streak_info = calculate_streaks(daily, now)
    today = daily.get(day_key(now))
    return {
        "date": day_key(now),
        "score": todays_score(daily, streak_info.current_streak, now),
        "current_streak": streak_info.current_streak,
        "coding_minutes": today.coding_minutes if today else 0,
        "break_count": today.break_count if today else 0,
    }


@mcp.tool()
def get_daily_metrics(days: int = 0) -> dict[str, Any]:
    """Get per-day coding/break totals.

    days: only the most recent N logged days (0 = all).
    """
    from devpulse.metrics import calculate_daily_metrics
    from devpulse.series import build_series

    sessions = _load_sessions()
    if not sessions:
        return dict(_NO_DATA)
    try:
        daily = calculate_daily_metrics(sessions)
    except InvalidSessionError as e:
        return {"error": str(e)}
    series = build_series(daily, days=days)
    return {
        "days": [asdict(daily[key]) for key in series.labels],
        "series": asdict(series),
        "count": len(series.labels),
    }


@mcp.tool()
def get_sessions(period: str = "all") -> dict[str, Any]:
    """List sessions for a period: all, today, or week."""
    from devpulse.dates import FILTER_PERIODS, filter_sessions, newest_first
    from devpulse.metrics import session_type, validate_sessions

    if period not in FILTER_PERIODS:
        return {"error": f"Invalid period. Must be one of: {', '.join(FILTER_PERIODS)}"}
    sessions = _load_sessions()
    if not sessions:
        return dict(_NO_DATA)
    try:
        validate_sessions(sessions)
    except InvalidSessionError as e:
        return {"error": str(e)}
    selected = newest_first(filter_sessions(sessions, period, _now()))
    return {
        "period": period,
        "sessions": [
            {
                "id": s.id,
                "start_time": s.start_time.isoformat(),
                "type": session_type(s).value,
                "duration_minutes": s.duration_minutes or 0,
            }
            for s in selected
        ],
        "count": len(selected),
    }


def main() -> None:
    mcp.run()


if __name__ == "__main__":
    main()
